import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class Subscription(BaseModel):
    """Alert subscription. At most one per company name."""

    model_config = ConfigDict(populate_by_name=True)

    company_name: str = Field(..., alias="companyName", min_length=1)
    email: str

    @field_validator("email")
    @classmethod
    def _valid_email(cls, v: str) -> str:
        v = v.strip()
        if not _EMAIL_RE.match(v):
            raise ValueError("Please enter a valid email address.")
        return v


class Notification(BaseModel):
    id: str
    message: str
    timestamp: int = Field(..., description="Milliseconds since the epoch")


class NotificationListResponse(BaseModel):
    notifications: list[Notification]
    unread_count: int
