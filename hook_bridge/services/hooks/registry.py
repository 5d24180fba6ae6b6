from __future__ import annotations

from typing import Dict, Type

from hook_bridge.core.errors import UnknownHookProviderError
from hook_bridge.services.hooks.base import HookProvider
from hook_bridge.services.hooks.slack import SlackHookProvider


HOOK_PROVIDER_REGISTRY: Dict[str, Type[HookProvider]] = {
    "slack": SlackHookProvider,
}


def get_hook_provider(service_id: str) -> HookProvider:
    try:
        provider_cls = HOOK_PROVIDER_REGISTRY[service_id]
    except KeyError as exc:
        raise UnknownHookProviderError(service_id) from exc
    return provider_cls()
