"""
构建触发 API 客户端

API: POST /app/{app_slug}/build/start.json
"""
from __future__ import annotations

import logging
from json import JSONDecodeError
from typing import Any, Dict, Optional, Tuple

import httpx

from hook_bridge.config import get_settings
from hook_bridge.core.models import BuildTriggerParams, TriggerAPIResponse
from hook_bridge.services.bitrise.errors import BuildTriggerAPIError

logger = logging.getLogger(__name__)


def _mask(secret: str) -> str:
    return f"{secret[:4]}...{secret[-4:]}" if len(secret) > 8 else "***"


class BuildTriggerClient:
    """
    构建触发 API 封装

    - 每个 BuildTriggerParams 对应一次触发请求
    - 2xx 视为触发成功，其它状态码视为触发失败（仍返回解析出的响应）
    - 网络错误、非 JSON 响应抛出 BuildTriggerAPIError
    """

    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        timeout_s: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        settings = get_settings()
        self._base_url = (base_url or settings.BITRISE_API_BASE_URL).rstrip("/")
        self._timeout = timeout_s if timeout_s is not None else settings.TRIGGER_API_TIMEOUT_S
        self._transport = transport

    async def trigger_build(
        self,
        *,
        app_slug: str,
        api_token: str,
        params: BuildTriggerParams,
        triggered_by: str,
    ) -> Tuple[TriggerAPIResponse, bool]:
        """
        触发一次构建，返回 (响应, 是否成功)。
        """
        path = f"/app/{app_slug}/build/start.json"
        payload: Dict[str, Any] = {
            "hook_info": {"type": "bitrise", "api_token": api_token},
            "build_params": params.to_payload(),
            "triggered_by": triggered_by,
        }

        logger.info(
            "Build trigger API Request: POST %s (api_token=%s, build_params=%s)",
            path,
            _mask(api_token),
            payload["build_params"],
        )

        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                resp = await client.post(path, json=payload)
        except httpx.HTTPError as exc:
            logger.error("Build trigger API network error: app_slug=%s, error=%s", app_slug, exc)
            raise BuildTriggerAPIError(
                f"Failed to call the build trigger API: {type(exc).__name__} {exc}"
            ) from exc

        logger.info(
            "Build trigger API Response: POST %s -> status=%s", path, resp.status_code
        )
        try:
            data = resp.json()
        except (JSONDecodeError, UnicodeDecodeError) as exc:
            logger.error(
                "Build trigger API non-JSON response: status=%s, body=%s",
                resp.status_code,
                resp.text[:200],
            )
            raise BuildTriggerAPIError(
                f"Build trigger API returned non-JSON response. Status: {resp.status_code}, Body: {resp.text[:200]}",
                status_code=resp.status_code,
            ) from exc

        if not isinstance(data, dict):
            raise BuildTriggerAPIError(
                f"Unexpected build trigger API response: {data!r}",
                status_code=resp.status_code,
            )

        response = TriggerAPIResponse.from_api_data(data)
        is_success = 200 <= resp.status_code < 300
        if not is_success:
            logger.warning(
                "Build trigger failed: app_slug=%s, status=%s, message=%s",
                app_slug,
                resp.status_code,
                response.message,
            )
        return response, is_success
