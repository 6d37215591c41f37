"""User Pydantic schemas."""
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Request bodies use camelCase keys; blank or missing fields are rejected by
# the services so that they surface as IllegalArgument errors.
camel_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserCreate(BaseModel):
    """Schema for user registration."""

    model_config = camel_config

    email: str | None = Field(None, description="Email address")
    password: str | None = Field(None, description="Password")
    password_confirmation: str | None = Field(None, description="Password confirmation")


class UserLogin(BaseModel):
    """Schema for user login."""

    model_config = camel_config

    email: str | None = Field(None, description="Email address")
    password: str | None = Field(None, description="Password")


class PasswordUpdate(BaseModel):
    """Schema for password update."""

    model_config = camel_config

    current_password: str | None = Field(None, description="Current password")
    new_password: str | None = Field(None, description="New password")
    new_password_confirmation: str | None = Field(None, description="New password confirmation")


class UserDelete(BaseModel):
    """Schema for account deletion."""

    model_config = camel_config

    email: str | None = Field(None, description="Email address of the account")
    current_password: str | None = Field(None, description="Current password")


class UserDetails(BaseModel):
    """Outward view of a user; carries a token after register or login."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    user_id: int
    email: str
    jwt_token: str | None = None
