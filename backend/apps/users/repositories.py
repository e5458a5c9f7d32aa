from apps.common.repository import GenericRepository
from .models import User


class UserRepository(GenericRepository[User]):
    def __init__(self):
        super().__init__(User)

    def username_exists(self, username: str) -> bool:
        return self.exists(username=username)

    def create_user(self, **data) -> User:
        # ``password`` must already be hashed; see RegistrationService
        return self.model.objects.create(**data)
