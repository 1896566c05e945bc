from typing import Annotated

from pydantic import EmailStr, Field, SecretStr

from app.core.constants import FieldSizes
from app.schemas.base import BaseSchema
from app.schemas.user import UserResponse


class LoginRequest(BaseSchema):
    """User login schema"""

    email: Annotated[EmailStr, Field(examples=["user@example.com"])]
    password: Annotated[
        SecretStr,
        Field(
            min_length=1,
            max_length=FieldSizes.PASSWORD,
            examples=["password123"],
        ),
    ]


class LoginData(BaseSchema):
    """Successful login payload"""

    token: str
    token_type: str = "Bearer"
    user: UserResponse
