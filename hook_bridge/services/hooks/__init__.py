"""
Hook 层（Hooks）

每个提供方（目前只有 Slack）负责把外部 webhook 请求归一化为 BuildTriggerParams，
并把触发结果渲染回提供方能展示的响应。
"""
from __future__ import annotations

from hook_bridge.services.hooks.base import HookProvider
from hook_bridge.services.hooks.registry import HOOK_PROVIDER_REGISTRY, get_hook_provider
from hook_bridge.services.hooks.slack import SlackHookProvider

__all__ = [
    "HOOK_PROVIDER_REGISTRY",
    "HookProvider",
    "SlackHookProvider",
    "get_hook_provider",
]
