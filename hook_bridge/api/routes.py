from __future__ import annotations

import logging
from typing import Dict

from fastapi import APIRouter, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from hook_bridge.core.errors import UnknownHookProviderError
from hook_bridge.core.models import HookRequest
from hook_bridge.services.bitrise import BuildTriggerClient
from hook_bridge.services.hooks.slack import FORM_CONTENT_TYPE
from hook_bridge.services.triggers.service import TriggerService

logger = logging.getLogger(__name__)

router = APIRouter()
hook_router = APIRouter()

trigger_service = TriggerService(client=BuildTriggerClient())


@router.get("/ping", summary="简单连通性测试")
async def ping() -> Dict[str, str]:
    return {"message": "pong"}


@hook_router.post("/h/{service_id}/{app_slug}/{api_token}", summary="接收 webhook 并触发构建")
async def receive_hook(
    service_id: str, app_slug: str, api_token: str, request: Request
) -> JSONResponse:
    # 只解析 urlencoded 表单；其它 Content-Type 交给 provider 的校验报错，保证聊天端收到 200 文本回复
    form: Dict[str, str] = {}
    if request.headers.get("content-type") == FORM_CONTENT_TYPE:
        parsed = await request.form()
        form = {key: value for key, value in parsed.items() if isinstance(value, str)}
    hook_request = HookRequest(headers=dict(request.headers), form=form)

    try:
        resp = await trigger_service.handle(
            service_id=service_id,
            app_slug=app_slug,
            api_token=api_token,
            request=hook_request,
        )
    except UnknownHookProviderError as exc:
        logger.warning("Unknown hook provider requested: %s", service_id)
        raise HTTPException(status_code=404, detail=str(exc)) from exc

    return JSONResponse(
        content=jsonable_encoder(resp.data),
        status_code=resp.http_status_code,
    )
