from datetime import datetime
from enum import Enum
from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field, field_validator

# URL stored for manuals that are listed but not yet written.
PENDING_MANUAL_URL = "#"


def is_pending_url(url: Optional[str]) -> bool:
    return not url or url == PENDING_MANUAL_URL


def _required_title(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("title must not be blank")
    return value


class ReferenceLink(BaseModel):
    title: str
    url: str


class ReferenceLinkInput(BaseModel):
    url: str
    title: Optional[str] = None


class Manual(BaseModel):
    """A manual record as stored in the manuals table."""
    id: UUID
    title: str
    url: str = PENDING_MANUAL_URL
    main_category: str
    sub_category: Optional[str] = None
    tags: List[str] = []
    reference_links: List[ReferenceLink] = []
    is_published: bool = True
    order_index: int = 0
    step_number: Optional[int] = None
    step_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ManualCreate(BaseModel):
    title: str = Field(min_length=1)
    main_category: str
    sub_category: Optional[str] = None
    url: str = PENDING_MANUAL_URL
    tags: List[str] = []
    reference_links: List[ReferenceLinkInput] = []
    is_published: bool = True
    order_index: int = 0

    @field_validator("title")
    @classmethod
    def strip_title(cls, value: str) -> str:
        return _required_title(value)

    @field_validator("sub_category")
    @classmethod
    def blank_sub_category_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value

    @field_validator("url")
    @classmethod
    def blank_url_is_pending(cls, value: str) -> str:
        value = value.strip()
        return value or PENDING_MANUAL_URL


class ManualUpdate(BaseModel):
    title: Optional[str] = None
    main_category: Optional[str] = None
    sub_category: Optional[str] = None
    url: Optional[str] = None
    tags: Optional[List[str]] = None
    reference_links: Optional[List[ReferenceLinkInput]] = None
    is_published: Optional[bool] = None
    order_index: Optional[int] = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return _required_title(value)


class ManualStatusFilter(str, Enum):
    PUBLISHED = "published"
    DRAFT = "draft"


class ManualSort(str, Enum):
    ORDER_INDEX = "order_index"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    TITLE = "title"


class ManualDetailResponse(Manual):
    category_slug: Optional[str] = None
    category_label: Optional[str] = None
    is_pending: bool = False


class ManualListResponse(BaseModel):
    items: List[Manual]
    total: int


class SearchResponse(BaseModel):
    query: str
    total: int
    items: List[Manual]
