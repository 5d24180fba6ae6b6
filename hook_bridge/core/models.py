from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from hook_bridge.core.errors import MissingBranchError


@dataclass(frozen=True)
class HookRequest:
    """
    交给 HookProvider 的请求视图：已解析好的 header 与表单字段。
    """

    headers: Mapping[str, str]
    form: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class IncomingMessage:
    trigger_text: str
    text: str


@dataclass(frozen=True)
class BuildTriggerParams:
    """
    发送给构建触发 API 的标准化参数，branch 必填。
    """

    branch: str
    tag: str = ""
    commit_hash: str = ""
    commit_message: str = ""

    def __post_init__(self) -> None:
        if not self.branch:
            raise MissingBranchError()

    def to_payload(self) -> Dict[str, str]:
        payload = {
            "branch": self.branch,
            "tag": self.tag,
            "commit_hash": self.commit_hash,
            "commit_message": self.commit_message,
        }
        return {k: v for k, v in payload.items() if v}


@dataclass
class TransformResult:
    """
    transform_request 的结果，三种状态互斥：
    - 成功：trigger_api_params 有值，error 为 None
    - 失败：error 有值，trigger_api_params 为 None
    - 跳过：should_skip=True（请求被有意忽略，不算错误）
    """

    trigger_api_params: Optional[List[BuildTriggerParams]] = None
    error: Optional[Exception] = None
    should_skip: bool = False
    skip_reason: str = ""

    def __post_init__(self) -> None:
        states = [
            self.trigger_api_params is not None,
            self.error is not None,
            self.should_skip,
        ]
        if sum(states) > 1:
            raise ValueError(
                "TransformResult can hold only one of: trigger params, error, skip"
            )

    @classmethod
    def success(cls, params: List[BuildTriggerParams]) -> "TransformResult":
        return cls(trigger_api_params=list(params))

    @classmethod
    def failure(cls, error: Exception) -> "TransformResult":
        return cls(error=error)

    @classmethod
    def skip(cls, reason: str = "") -> "TransformResult":
        return cls(should_skip=True, skip_reason=reason)


@dataclass
class TriggerAPIResponse:
    status: str = ""
    message: str = ""
    service: str = ""
    app_slug: str = ""
    build_slug: str = ""

    @classmethod
    def from_api_data(cls, data: Mapping[str, Any]) -> "TriggerAPIResponse":
        return cls(
            status=str(data.get("status") or ""),
            message=str(data.get("message") or ""),
            service=str(data.get("service") or ""),
            app_slug=str(data.get("slug") or ""),
            build_slug=str(data.get("build_slug") or ""),
        )

    def details_text(self) -> str:
        # 聊天消息里展示的单行详情
        return (
            f"{{Status:{self.status} Message:{self.message} Service:{self.service}"
            f" AppSlug:{self.app_slug} BuildSlug:{self.build_slug}}}"
        )


@dataclass
class TransformResponseInput:
    success_trigger_responses: List[TriggerAPIResponse] = field(default_factory=list)
    failed_trigger_responses: List[TriggerAPIResponse] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


@dataclass
class TransformResponse:
    data: Any
    http_status_code: int = 200
