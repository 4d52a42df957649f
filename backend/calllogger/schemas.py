from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator


class CallLogFields(BaseModel):
    phone: Optional[str] = None
    name: Optional[str] = None
    city: Optional[str] = None
    first_time: Optional[str] = Field(default=None, alias="firstTime")
    time: Optional[str] = None
    call_type: Optional[str] = Field(default=None, alias="callType")
    purpose: Optional[str] = None
    result: Optional[str] = None
    notes: Optional[str] = None
    priority: Optional[str] = None
    duration: Optional[Union[str, int, float]] = None
    recording_url: Optional[str] = Field(default=None, alias="recordingUrl")

    class Config:
        populate_by_name = True

    @field_validator(
        "phone",
        "name",
        "city",
        "first_time",
        "time",
        "call_type",
        "purpose",
        "result",
        "notes",
        "priority",
        "recording_url",
        mode="before",
    )
    def stringify_scalars(cls, value: object) -> object:
        # Clients send phone numbers and the like as JSON numbers.
        if isinstance(value, (bool, int, float)):
            return str(value)
        return value


class CallLogEntry(CallLogFields):
    id: Optional[Union[str, int]] = None


class CallLogUpdate(CallLogFields):
    """Partial update; only non-empty fields replace stored values."""


class SuccessResponse(BaseModel):
    success: bool = True


class CallLogPage(BaseModel):
    success: bool = True
    page: int
    limit: int
    total: int
    data: List[CallLogEntry]


class CallLogUpdated(BaseModel):
    success: bool = True
    data: CallLogEntry


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
