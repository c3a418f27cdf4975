"""Authentication request models."""

from pydantic import field_validator

from shared.models import CamelModel
from shared.validators import sanitize_string, validate_email, validate_password


class LoginRequest(CamelModel):
    email: str
    password: str

    @field_validator('email', mode='before')
    @classmethod
    def _email(cls, value):
        return validate_email(value)


class RegisterRequest(LoginRequest):
    name: str

    @field_validator('password', mode='before')
    @classmethod
    def _password(cls, value):
        return validate_password(value)

    @field_validator('name', mode='before')
    @classmethod
    def _name(cls, value):
        name = sanitize_string(value, max_length=100)
        if len(name) < 2:
            raise ValueError("Name must be at least 2 characters")
        return name


class RefreshRequest(CamelModel):
    refresh_token: str
