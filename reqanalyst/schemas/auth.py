"""Schemas for authentication endpoints."""

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

# bcrypt only looks at the first 72 bytes of a password and rejects longer input
PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_BYTES = 72


def check_password_bytes(password: str) -> str:
    if len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes")
    return password


class UserRegister(BaseModel):
    """Schema for user registration."""

    email: EmailStr
    password: str = Field(min_length=PASSWORD_MIN_LENGTH)
    name: str = Field(min_length=1, max_length=100)
    redirect_to: str | None = None

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        return check_password_bytes(value)


class UserLogin(BaseModel):
    """Schema for user login.

    The email is normalized the same way as at registration, so the address
    a user signed up with always finds their account.
    """

    email: EmailStr
    password: str
    redirect_to: str | None = None


class UserInfo(BaseModel):
    """Schema for user info in auth responses."""

    id: str
    email: str
    name: str

    model_config = {"from_attributes": True}


class SessionResponse(BaseModel):
    """Schema for a successful login or registration."""

    user: UserInfo
    redirect_to: str


class MessageResponse(BaseModel):
    """Schema for simple message response."""

    message: str


class ForgotPasswordRequest(BaseModel):
    """Schema for requesting password reset."""

    email: EmailStr


class ForgotPasswordResponse(MessageResponse):
    """Reset request response. preview_url is only present outside production."""

    preview_url: str | None = None


class ResetPasswordRequest(BaseModel):
    """Schema for resetting password with the token from the email link."""

    password: str = Field(min_length=PASSWORD_MIN_LENGTH)
    confirm_password: str

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        return check_password_bytes(value)

    @model_validator(mode="after")
    def passwords_match(self) -> "ResetPasswordRequest":
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self
