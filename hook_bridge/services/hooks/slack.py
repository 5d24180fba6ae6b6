"""
Slack 出站 Webhook（Outgoing Webhook / 斜杠命令）Hook

请求：application/x-www-form-urlencoded，字段 trigger_word + text，
例如 `bitrise: branch: master | tag: v1.0`。
响应：{"text": "..."}，HTTP 状态固定 200（错误通过消息文本展示给用户）。
"""
from __future__ import annotations

import logging
from typing import List, Mapping, Optional

from pydantic import BaseModel

from hook_bridge.core.errors import (
    HookError,
    MessageParseError,
    MissingBranchError,
    MissingHeaderError,
    MissingParameterError,
    UnsupportedContentTypeError,
)
from hook_bridge.core.models import (
    BuildTriggerParams,
    HookRequest,
    IncomingMessage,
    TransformResponse,
    TransformResponseInput,
    TransformResult,
)
from hook_bridge.services.hooks.base import HookProvider
from hook_bridge.services.utils.pipe_params import collect_params_from_pipe_separated_text

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
RESPONSE_STATUS_CODE = 200
EMPTY_RESULTS_TEXT = "No build was triggered."


class OutgoingWebhookResponse(BaseModel):
    text: str


def _find_header(headers: Mapping[str, str], key: str) -> Optional[str]:
    # HTTP header 名大小写不敏感
    wanted = key.lower()
    for name, value in headers.items():
        if name.lower() == wanted:
            return value
    return None


def detect_content_type(headers: Mapping[str, str]) -> str:
    content_type = _find_header(headers, "Content-Type")
    if not content_type:
        raise MissingHeaderError("Content-Type")
    return content_type


def create_message_model_from_form(form: Mapping[str, str]) -> IncomingMessage:
    trigger_text = form.get("trigger_word") or ""
    if not trigger_text:
        raise MissingParameterError("trigger_word")
    text = form.get("text") or ""
    if not text:
        raise MissingParameterError("text")
    return IncomingMessage(trigger_text=trigger_text, text=text)


def transform_outgoing_webhook_message(message: IncomingMessage) -> TransformResult:
    """
    去掉消息开头的 trigger word，把剩余部分解析为构建参数。
    找不到 trigger word 时整条消息都当作参数串。
    """
    _, found, rest = message.text.partition(message.trigger_text)
    params_text = rest if found else message.text

    branch = tag = commit_hash = commit_message = ""
    for key, value in collect_params_from_pipe_separated_text(params_text).items():
        if key == "branch":
            branch = value
        elif key == "tag":
            tag = value
        elif key == "commit":
            commit_hash = value
        elif key == "message":
            commit_message = value

    if not branch:
        return TransformResult.failure(MissingBranchError())

    return TransformResult.success(
        [
            BuildTriggerParams(
                branch=branch,
                tag=tag,
                commit_hash=commit_hash,
                commit_message=commit_message,
            )
        ]
    )


def format_trigger_results(response_input: TransformResponseInput) -> str:
    lines: List[str] = []
    if response_input.success_trigger_responses:
        lines.append("*Success!* Details:")
        lines.extend(
            f"* {resp.details_text()}" for resp in response_input.success_trigger_responses
        )
    if response_input.failed_trigger_responses:
        lines.append("*[!] Failed Triggers*:")
        lines.extend(
            f"* {resp.details_text()}" for resp in response_input.failed_trigger_responses
        )
    if response_input.errors:
        lines.append("*[!] Errors*:")
        lines.extend(f"* {err}" for err in response_input.errors)

    if not lines:
        lines.append(EMPTY_RESULTS_TEXT)
    return "Results:\n" + "\n".join(lines)


class SlackHookProvider(HookProvider):
    """
    Slack Hook：表单 -> IncomingMessage -> BuildTriggerParams，
    并把触发结果渲染成 Slack 消息文本。
    """

    def transform_request(self, request: HookRequest) -> TransformResult:
        try:
            content_type = detect_content_type(request.headers)
        except MissingHeaderError as exc:
            return TransformResult.failure(exc)
        if content_type != FORM_CONTENT_TYPE:
            return TransformResult.failure(UnsupportedContentTypeError(content_type))

        try:
            message = create_message_model_from_form(request.form)
        except HookError as exc:
            wrapped = MessageParseError(exc)
            wrapped.__cause__ = exc
            return TransformResult.failure(wrapped)

        logger.debug(
            "Slack message received: trigger_word=%r, text=%r",
            message.trigger_text,
            message.text,
        )
        return transform_outgoing_webhook_message(message)

    def transform_response(self, response_input: TransformResponseInput) -> TransformResponse:
        return self._respond(format_trigger_results(response_input))

    def transform_error_message_response(self, message: str) -> TransformResponse:
        return self._respond(f"*[!] Error*: {message}")

    def transform_success_message_response(self, message: str) -> TransformResponse:
        return self._respond(message)

    def _respond(self, text: str) -> TransformResponse:
        return TransformResponse(
            data=OutgoingWebhookResponse(text=text),
            http_status_code=RESPONSE_STATUS_CODE,
        )
