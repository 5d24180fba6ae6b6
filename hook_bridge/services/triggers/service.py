from __future__ import annotations

import logging

from hook_bridge.core.models import (
    HookRequest,
    TransformResponse,
    TransformResponseInput,
)
from hook_bridge.services.bitrise import BuildTriggerAPIError, BuildTriggerClient
from hook_bridge.services.hooks import get_hook_provider

logger = logging.getLogger(__name__)

SKIP_MESSAGE = "Acknowledged, but skipping"
NO_TRIGGER_PARAMS_MESSAGE = (
    "After processing the webhook we failed to detect any event in it"
    " which could be turned into a build."
)


class TriggerService:
    """
    触发层统一服务：选择 HookProvider、转换请求、逐个触发构建，并把结果交回 provider 渲染。
    """

    def __init__(self, *, client: BuildTriggerClient) -> None:
        self._client = client

    async def handle(
        self,
        *,
        service_id: str,
        app_slug: str,
        api_token: str,
        request: HookRequest,
    ) -> TransformResponse:
        """
        处理一次 webhook 请求。

        - service_id 未注册时抛出 UnknownHookProviderError
        - 转换失败 / 跳过 / 无触发参数：返回 provider 的消息响应，不调用构建 API
        """
        provider = get_hook_provider(service_id)

        result = provider.transform_request(request)
        if result.error is not None:
            logger.warning(
                "Failed to transform the webhook: service=%s app_slug=%s error=%s",
                service_id,
                app_slug,
                result.error,
            )
            return provider.transform_error_message_response(
                f"Failed to transform the webhook: {result.error}"
            )
        if result.should_skip:
            logger.info(
                "Webhook skipped: service=%s app_slug=%s reason=%s",
                service_id,
                app_slug,
                result.skip_reason,
            )
            message = SKIP_MESSAGE
            if result.skip_reason:
                message = f"{SKIP_MESSAGE}. Reason: {result.skip_reason}"
            return provider.transform_success_message_response(message)
        if not result.trigger_api_params:
            return provider.transform_error_message_response(NO_TRIGGER_PARAMS_MESSAGE)

        response_input = TransformResponseInput()
        for params in result.trigger_api_params:
            try:
                api_response, is_success = await self._client.trigger_build(
                    app_slug=app_slug,
                    api_token=api_token,
                    params=params,
                    triggered_by=f"webhook-{service_id}",
                )
            except BuildTriggerAPIError as exc:
                logger.exception(
                    "Build trigger failed: service=%s app_slug=%s branch=%s",
                    service_id,
                    app_slug,
                    params.branch,
                )
                response_input.errors.append(str(exc))
                continue

            if is_success:
                response_input.success_trigger_responses.append(api_response)
            else:
                response_input.failed_trigger_responses.append(api_response)

        logger.info(
            "Webhook processed: service=%s app_slug=%s success=%d failed=%d errors=%d",
            service_id,
            app_slug,
            len(response_input.success_trigger_responses),
            len(response_input.failed_trigger_responses),
            len(response_input.errors),
        )
        return provider.transform_response(response_input)
