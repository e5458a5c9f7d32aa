from django.conf import settings
from django.contrib.auth.models import AbstractUser
from django.db import models


def default_wallet_money() -> int:
    return settings.QKART_DEFAULT_WALLET_MONEY


def default_address() -> str:
    return settings.QKART_DEFAULT_ADDRESS


class User(AbstractUser):
    # username, password, is_staff, is_superuser, ... are inherited
    wallet_money = models.IntegerField(default=default_wallet_money)
    address = models.TextField(default=default_address)

    def __str__(self):
        return self.username

    def has_set_non_default_address(self) -> bool:
        return self.address != settings.QKART_DEFAULT_ADDRESS
