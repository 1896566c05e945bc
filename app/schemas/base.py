from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict

DataT = TypeVar("DataT")


class BaseSchema(BaseModel):
    """Base schema with common configuration"""

    model_config = ConfigDict(
        from_attributes=True,
        arbitrary_types_allowed=True,
        extra="forbid",
    )


class BaseTimestampSchema(BaseSchema):
    """Base schema with timestamp fields"""

    created_at: datetime
    updated_at: datetime | None = None


class MessageResponse(BaseModel):
    """Plain acknowledgement"""

    message: str


class DataResponse(BaseModel, Generic[DataT]):
    """Envelope for read responses"""

    data: DataT


class MessageDataResponse(DataResponse[DataT], Generic[DataT]):
    """Envelope for write responses, data plus a human readable confirmation"""

    message: str
