"""Manual request intake form."""

from fastapi import APIRouter, BackgroundTasks

from ..models.manual_request import ManualRequestCreate, ManualRequestSubmitResponse
from ..services import request_service
from ..services.email import notify_manual_request

router = APIRouter()


@router.post("", response_model=ManualRequestSubmitResponse, status_code=201)
async def submit_manual_request(request: ManualRequestCreate, background_tasks: BackgroundTasks):
    """Store a manual request and notify the administrator in the background."""
    created = await request_service.create_request(request)
    background_tasks.add_task(notify_manual_request, created)
    return ManualRequestSubmitResponse(
        success=True,
        id=created.id,
        message="リクエストが送信されました。ありがとうございました。",
    )
