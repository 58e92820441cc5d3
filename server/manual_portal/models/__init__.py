from .manual import (
    Manual,
    ManualCreate,
    ManualUpdate,
    ManualDetailResponse,
    ManualListResponse,
    ManualSort,
    ManualStatusFilter,
    ReferenceLink,
    ReferenceLinkInput,
    SearchResponse,
    PENDING_MANUAL_URL,
)
from .manual_request import (
    ManualRequest,
    ManualRequestCreate,
    ManualRequestUpdate,
    ManualRequestListResponse,
    ManualRequestSubmitResponse,
    RequestStatus,
    RequestUrgency,
)
from .catalog import (
    CategoryPage,
    CategorySummary,
    FacetOption,
    ManualCard,
    ManualGroupView,
    TaxonomyResponse,
    AdminStatsResponse,
)

__all__ = [
    "Manual",
    "ManualCreate",
    "ManualUpdate",
    "ManualDetailResponse",
    "ManualListResponse",
    "ManualSort",
    "ManualStatusFilter",
    "ReferenceLink",
    "ReferenceLinkInput",
    "SearchResponse",
    "PENDING_MANUAL_URL",
    "ManualRequest",
    "ManualRequestCreate",
    "ManualRequestUpdate",
    "ManualRequestListResponse",
    "ManualRequestSubmitResponse",
    "RequestStatus",
    "RequestUrgency",
    "CategoryPage",
    "CategorySummary",
    "FacetOption",
    "ManualCard",
    "ManualGroupView",
    "TaxonomyResponse",
    "AdminStatsResponse",
]
