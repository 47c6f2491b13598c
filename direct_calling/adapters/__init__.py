"""Adapters — platform capabilities, system IO and the web channel."""
