import re

from rest_framework import serializers

USERNAME_MIN_LENGTH = 6
PASSWORD_MIN_LENGTH = 8

_HAS_DIGIT = re.compile(r"\d")
_HAS_LETTER = re.compile(r"[a-zA-Z]")


def validate_username(value: str) -> str:
    """Usernames are trimmed and must be at least six characters long."""
    if value is None:
        raise serializers.ValidationError("Username is a required field")
    trimmed = value.strip()
    if not trimmed:
        raise serializers.ValidationError("Username is a required field")
    if len(trimmed) < USERNAME_MIN_LENGTH:
        raise serializers.ValidationError(
            f"Username must be at least {USERNAME_MIN_LENGTH} characters"
        )
    return trimmed


def validate_password(value: str) -> str:
    """
    Passwords need at least eight characters including one letter and one
    number. The checks ignore surrounding whitespace, but the value is
    returned as entered so the stored hash matches what login receives.
    """
    if value is None:
        raise serializers.ValidationError("Password is a required field")
    trimmed = value.strip()
    if len(trimmed) < PASSWORD_MIN_LENGTH:
        raise serializers.ValidationError(
            f"Password must be at least {PASSWORD_MIN_LENGTH} characters"
        )
    if not _HAS_DIGIT.search(trimmed) or not _HAS_LETTER.search(trimmed):
        raise serializers.ValidationError(
            "Password must contain at least one letter and one number"
        )
    return value
