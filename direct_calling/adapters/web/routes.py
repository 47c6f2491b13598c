"""Method-channel HTTP routes."""

import uuid
from typing import Any, Dict, List, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from direct_calling.domain.models import FrontEndContext
from direct_calling.plugin import DirectCallingPlugin
from direct_calling.ports.inbound import MethodCall


class MethodCallRequest(BaseModel):
    arguments: Dict[str, Any] = Field(default_factory=dict)


class MethodCallResponse(BaseModel):
    status: str
    result: Any = None
    error_code: Optional[str] = None
    error_message: Optional[str] = None


class PermissionResultRequest(BaseModel):
    request_code: int
    grant_results: List[int]


class PermissionResultResponse(BaseModel):
    handled: bool


class AttachRequest(BaseModel):
    context_id: Optional[str] = None


class ContextResponse(BaseModel):
    context_id: str
    attached_at: str


class DetachResponse(BaseModel):
    detached: bool


class StatusResponse(BaseModel):
    state: str
    platform: str
    context_id: Optional[str] = None
    request_code: int


def create_router(
    plugin: DirectCallingPlugin,
    channel_name: str = "direct_calling",
    platform: str = "prompted",
) -> APIRouter:
    router = APIRouter(prefix=f"/{channel_name}", tags=["Direct calling"])

    @router.post("/methods/{method}", response_model=MethodCallResponse)
    async def invoke_method(method: str, req: Optional[MethodCallRequest] = None):
        """Invoke a channel method. Pending calls hold the request open."""
        arguments = req.arguments if req is not None else {}
        result = await plugin.handle(MethodCall(method=method, arguments=arguments))
        return MethodCallResponse(**result.__dict__)

    @router.post("/permission/result", response_model=PermissionResultResponse)
    async def permission_result(req: PermissionResultRequest):
        handled = plugin.on_request_permissions_result(req.request_code, req.grant_results)
        return PermissionResultResponse(handled=handled)

    @router.post("/context/attach", response_model=ContextResponse)
    async def attach(req: Optional[AttachRequest] = None):
        context_id = (req.context_id if req is not None else None) or str(uuid.uuid4())[:8]
        context = FrontEndContext(context_id=context_id)
        plugin.on_attached_to_activity(context)
        return ContextResponse(context_id=context.context_id, attached_at=context.attached_at)

    @router.post("/context/detach", response_model=DetachResponse)
    async def detach():
        was_attached = plugin.context is not None
        plugin.on_detached_from_activity()
        return DetachResponse(detached=was_attached)

    @router.get("/status", response_model=StatusResponse)
    async def status():
        context = plugin.context
        return StatusResponse(
            state=plugin.dispatcher.state.value,
            platform=platform,
            context_id=context.context_id if context else None,
            request_code=plugin.request_code,
        )

    return router
