from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool

from api.deps import get_model_service
from api.schemas import SelectIconRequest, SelectIconResponse
from application.icon_service import select_icon
from application.model_service import ModelService
from domain.ports import ChatMessage

router = APIRouter(prefix="/platforms", tags=["copilot"])


@router.post("/{platform_id}/copilot/icon", response_model=SelectIconResponse)
async def create_icon_selection(
    platform_id: str,
    payload: SelectIconRequest,
    service: ModelService = Depends(get_model_service),
):
    # Platform lookup and SDK client construction block; ProviderConfigError is handled in api.server
    handle = await run_in_threadpool(service.resolve, platform_id)
    history = [ChatMessage(m.role, m.content) for m in payload.conversation_history]
    icon = await run_in_threadpool(select_icon, handle, payload.requirement, history)
    return SelectIconResponse(icon=icon)
