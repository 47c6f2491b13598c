"""Platform capability variants, chosen once at composition time."""

from direct_calling.adapters.notify.prompt_notifier import LogPromptNotifier, WebhookPromptNotifier
from direct_calling.adapters.platform.prompted import CALL_PHONE, PromptedCallCapability
from direct_calling.adapters.platform.url_scheme import UrlSchemeCallCapability
from direct_calling.adapters.storage.grant_store import JsonGrantStore
from direct_calling.adapters.system.url_opener import SystemUrlOpener


def create_capability(config, opener=None, grant_store=None, notifier=None):
    """Build the CallCapability named by ``config.call_platform``."""
    if opener is None:
        command = config.url_opener.split() if config.url_opener else None
        opener = SystemUrlOpener(command=command, timeout=config.opener_timeout_seconds)

    if config.call_platform == "url_scheme":
        return UrlSchemeCallCapability(opener)

    if config.call_platform == "prompted":
        if grant_store is None:
            grant_store = JsonGrantStore(storage_dir=config.memory_dir)
        if notifier is None:
            if config.prompt_webhook_url:
                notifier = WebhookPromptNotifier(config.prompt_webhook_url)
            else:
                notifier = LogPromptNotifier()
        return PromptedCallCapability(
            grant_store,
            notifier,
            opener,
            request_code=config.permission_request_code,
        )

    raise ValueError(f"unsupported call platform: {config.call_platform}")


__all__ = [
    "CALL_PHONE",
    "PromptedCallCapability",
    "UrlSchemeCallCapability",
    "create_capability",
]
