"""
Hook 适配层异常定义

均为单请求级别、不可重试的错误，只影响当前请求。
"""
from __future__ import annotations


class HookError(Exception):
    """
    Hook 请求处理的统一异常基类。
    """


class MissingHeaderError(HookError):
    def __init__(self, key: str = "Content-Type") -> None:
        super().__init__(
            f"Issue with Content-Type Header: No value found in HEADER for the key: {key}"
        )
        self.key = key


class UnsupportedContentTypeError(HookError):
    def __init__(self, content_type: str) -> None:
        super().__init__(f"Content-Type is not supported: {content_type}")
        self.content_type = content_type


class MissingParameterError(HookError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Missing required parameter: '{name}'")
        self.name = name


class MessageParseError(HookError):
    """
    包装表单解析阶段的错误，保留内部错误信息原文。
    """

    PREFIX = "Failed to parse the request/message: "

    def __init__(self, inner: Exception) -> None:
        super().__init__(f"{self.PREFIX}{inner}")
        self.inner = inner


class MissingBranchError(HookError):
    def __init__(self) -> None:
        super().__init__("Missing branch parameter!")


class UnknownHookProviderError(ValueError):
    def __init__(self, service_id: str) -> None:
        super().__init__(f"No hook provider found for service: {service_id}")
        self.service_id = service_id
