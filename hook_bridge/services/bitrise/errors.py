"""
构建触发 API 异常定义
"""
from typing import Optional


class BuildTriggerAPIError(Exception):
    """
    构建触发 API 调用失败（网络错误 / 非 JSON 响应）。
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
