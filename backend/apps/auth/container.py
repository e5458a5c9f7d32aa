from __future__ import annotations

from apps.users.repositories import UserRepository

from .services import LoginService, RegistrationService


def build_registration_service() -> RegistrationService:
    return RegistrationService(users=UserRepository())


def build_login_service() -> LoginService:
    return LoginService(users=UserRepository())
