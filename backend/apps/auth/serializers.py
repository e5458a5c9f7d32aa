from rest_framework import serializers

from apps.api.schemas import SuccessResponseSerializer

from apps.users.validators import (
    validate_password as validate_password_rules,
    validate_username as validate_username_rules,
)


class RegisterRequestSerializer(serializers.Serializer):
    username = serializers.CharField(
        trim_whitespace=False,
        allow_blank=True,
        error_messages={"required": "Username is a required field"},
    )
    password = serializers.CharField(
        write_only=True,
        trim_whitespace=False,
        allow_blank=True,
        error_messages={"required": "Password is a required field"},
    )

    def validate_username(self, value: str) -> str:
        return validate_username_rules(value)

    def validate_password(self, value: str) -> str:
        return validate_password_rules(value)


class LoginRequestSerializer(serializers.Serializer):
    username = serializers.CharField(
        error_messages={
            "required": "Username is a required field",
            "blank": "Username is a required field",
        }
    )
    password = serializers.CharField(
        write_only=True,
        trim_whitespace=False,
        error_messages={
            "required": "Password is a required field",
            "blank": "Password is a required field",
        },
    )


class LoginResponseSerializer(SuccessResponseSerializer):
    token = serializers.CharField()
    username = serializers.CharField()
    balance = serializers.IntegerField()
