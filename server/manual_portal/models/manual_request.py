from datetime import datetime
from enum import Enum
from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class RequestUrgency(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


URGENCY_LABELS: dict[RequestUrgency, str] = {
    RequestUrgency.LOW: "低",
    RequestUrgency.MEDIUM: "中",
    RequestUrgency.HIGH: "高",
}


class RequestStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    REJECTED = "rejected"


STATUS_LABELS: dict[RequestStatus, str] = {
    RequestStatus.PENDING: "未対応",
    RequestStatus.IN_PROGRESS: "対応中",
    RequestStatus.COMPLETED: "完了",
    RequestStatus.REJECTED: "却下",
}


class ManualRequestCreate(BaseModel):
    """Manual request intake form submission."""
    requester_name: str = Field(min_length=1)
    requester_email: EmailStr
    department: Optional[str] = None
    manual_title: str = Field(min_length=1)
    manual_description: str = Field(min_length=1)
    urgency: RequestUrgency = RequestUrgency.MEDIUM
    use_case: Optional[str] = None
    expected_users: Optional[str] = None
    additional_notes: Optional[str] = None

    @field_validator("department", "use_case", "expected_users", "additional_notes")
    @classmethod
    def blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None


class ManualRequestUpdate(BaseModel):
    status: Optional[RequestStatus] = None
    admin_notes: Optional[str] = None
    manual_id: Optional[UUID] = None


class ManualRequest(BaseModel):
    id: UUID
    requester_name: str
    requester_email: str
    department: Optional[str] = None
    manual_title: str
    manual_description: str
    urgency: RequestUrgency
    use_case: Optional[str] = None
    expected_users: Optional[str] = None
    additional_notes: Optional[str] = None
    status: RequestStatus
    admin_notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    completed_at: Optional[datetime] = None
    manual_id: Optional[UUID] = None

    model_config = ConfigDict(from_attributes=True)


class ManualRequestSubmitResponse(BaseModel):
    success: bool
    id: UUID
    message: str


class ManualRequestListResponse(BaseModel):
    items: List[ManualRequest]
    total: int
