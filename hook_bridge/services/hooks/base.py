from __future__ import annotations

from abc import ABC, abstractmethod

from hook_bridge.core.models import (
    HookRequest,
    TransformResponse,
    TransformResponseInput,
    TransformResult,
)


class HookProvider(ABC):
    """
    Hook 提供方抽象。

    - 输入：HookRequest（header + 表单）
    - 输出：TransformResult（构建触发参数 / 错误 / 跳过）
    - 触发完成后，负责把结果渲染成提供方能理解的响应
    """

    @abstractmethod
    def transform_request(self, request: HookRequest) -> TransformResult:
        raise NotImplementedError

    @abstractmethod
    def transform_response(self, response_input: TransformResponseInput) -> TransformResponse:
        raise NotImplementedError

    @abstractmethod
    def transform_error_message_response(self, message: str) -> TransformResponse:
        raise NotImplementedError

    @abstractmethod
    def transform_success_message_response(self, message: str) -> TransformResponse:
        raise NotImplementedError
