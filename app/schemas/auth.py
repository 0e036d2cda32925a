from typing import Optional
from pydantic import BaseModel, ConfigDict, constr, model_validator
from app.auth.permissions import Country, Role

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class RegisterRequest(BaseModel):
    name: constr(strip_whitespace=True, min_length=2, max_length=50)
    email: constr(strip_whitespace=True, to_lower=True, pattern=EMAIL_PATTERN)
    password: constr(min_length=6)
    role: Role
    country: Country


class LoginRequest(BaseModel):
    email: constr(strip_whitespace=True, to_lower=True, pattern=EMAIL_PATTERN)
    password: constr(min_length=1)


class RefreshRequest(BaseModel):
    refresh_token: constr(min_length=1)


class UpdateProfileRequest(BaseModel):
    # role and country are fixed at registration
    model_config = ConfigDict(extra="forbid")

    name: Optional[constr(strip_whitespace=True, min_length=2, max_length=50)] = None
    email: Optional[constr(strip_whitespace=True, to_lower=True, pattern=EMAIL_PATTERN)] = None

    @model_validator(mode="after")
    def _at_least_one(self):
        if self.name is None and self.email is None:
            raise ValueError("at least one of name or email is required")
        return self


class ChangePasswordRequest(BaseModel):
    current_password: constr(min_length=1)
    new_password: constr(min_length=6)
