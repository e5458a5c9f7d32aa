from typing import List, Protocol

from apps.common import get_logger
from .dtos import Notification

logger = get_logger(__name__).bind(component="storefront", layer="ui")


class Notifier(Protocol):
    def notify(self, message: str, variant: str) -> None:
        ...


class Navigator(Protocol):
    def navigate(self, path: str) -> None:
        ...


class MemoryNotifier:
    """Keeps every notification in order; the headless stand-in for a snackbar."""

    def __init__(self):
        self.notifications: List[Notification] = []

    def notify(self, message: str, variant: str) -> None:
        logger.debug("Notification", variant=variant, message=message)
        self.notifications.append(Notification(message=message, variant=variant))

    @property
    def messages(self) -> List[str]:
        return [n.message for n in self.notifications]


class MemoryNavigator:
    def __init__(self, initial: str = "/"):
        self.history: List[str] = [initial]

    @property
    def current(self) -> str:
        return self.history[-1]

    def navigate(self, path: str) -> None:
        logger.debug("Navigate", path=path)
        self.history.append(path)
