from typing import Annotated, Literal

from pydantic import BaseModel, EmailStr, Field, SecretStr, field_validator

from app.core.constants import FieldSizes
from app.schemas.base import BaseSchema, BaseTimestampSchema

USER_NAME_DESCRIPTION = (
    f"Name must be {FieldSizes.NAME_MIN} to {FieldSizes.NAME} characters long."
)
USER_PASSWORD_DESCRIPTION = f"Password must be at least {FieldSizes.PASSWORD_MIN} characters long."

UserName = Annotated[
    str,
    Field(
        min_length=FieldSizes.NAME_MIN,
        max_length=FieldSizes.NAME,
        description=USER_NAME_DESCRIPTION,
        examples=["John Doe"],
    ),
]

SortField = Literal["id", "name", "email", "created_at"]
SortOrder = Literal["asc", "desc"]


def _strip_name(value: str | None) -> str | None:
    if value is None:
        return value

    value = value.strip()
    if len(value) < FieldSizes.NAME_MIN:
        raise ValueError(USER_NAME_DESCRIPTION)

    return value


class UserCreate(BaseSchema):
    """User creation / registration request"""

    name: UserName
    email: Annotated[EmailStr, Field(examples=["john@example.com"])]
    password: Annotated[
        SecretStr,
        Field(
            min_length=FieldSizes.PASSWORD_MIN,
            max_length=FieldSizes.PASSWORD,
            description=USER_PASSWORD_DESCRIPTION,
            examples=["password123"],
        ),
    ]

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        return _strip_name(value)  # type: ignore[return-value]


class UserCreateDB(BaseSchema):
    """Row values written by the repository"""

    name: str
    email: EmailStr
    hashed_password: str


class UserUpdate(BaseSchema):
    """Partial update, only the provided fields change"""

    name: UserName | None = None
    email: EmailStr | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str | None) -> str | None:
        return _strip_name(value)


class UserResponse(BaseTimestampSchema):
    """User schema for API response"""

    id: int
    name: str
    email: str


class UserFilter(BaseSchema):
    """Filter and ordering options for user listing"""

    name: str | None = Field(default=None, description="Case-insensitive substring of the name")
    email: str | None = Field(default=None, description="Case-insensitive substring of the email")
    sort_by: SortField = "created_at"
    sort_order: SortOrder = "desc"


class UserListRequest(BaseSchema):
    """Listing request; out-of-range page and limit values are clamped, not rejected"""

    page: int = 1
    limit: int = 10
    filter: UserFilter = Field(default_factory=UserFilter)


class Pagination(BaseModel):
    page: int = Field(examples=[1])
    limit: int = Field(examples=[10])
    total: int = Field(examples=[100])
    total_pages: int = Field(examples=[10])


class UsersListResponse(BaseModel):
    data: list[UserResponse]
    pagination: Pagination
