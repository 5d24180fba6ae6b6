"""
构建触发 API 客户端模块
"""
from __future__ import annotations

from hook_bridge.services.bitrise.client import BuildTriggerClient
from hook_bridge.services.bitrise.errors import BuildTriggerAPIError

__all__ = [
    "BuildTriggerAPIError",
    "BuildTriggerClient",
]
