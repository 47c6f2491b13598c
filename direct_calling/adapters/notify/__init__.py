"""Prompt notifier adapters."""

from direct_calling.adapters.notify.prompt_notifier import LogPromptNotifier, WebhookPromptNotifier

__all__ = ["LogPromptNotifier", "WebhookPromptNotifier"]
