"""FastAPI application and composition root."""

import sys

import uvicorn
from fastapi import FastAPI

from direct_calling.adapters.platform import create_capability
from direct_calling.adapters.web.routes import create_router
from direct_calling.config import AppConfig
from direct_calling.domain.dispatcher import PermissionGatedDispatcher
from direct_calling.plugin import DirectCallingPlugin


def _log(msg: str):
    print(msg, file=sys.stderr)


def build_plugin(config: AppConfig, capability=None) -> DirectCallingPlugin:
    """Wire capability -> dispatcher -> plugin for the configured platform."""
    if capability is None:
        capability = create_capability(config)
    dispatcher = PermissionGatedDispatcher(
        capability,
        overwrite_mode=config.pending_overwrite_mode,
    )
    return DirectCallingPlugin(dispatcher, request_code=config.permission_request_code)


def create_app(config: AppConfig = None, capability=None) -> FastAPI:
    config = config or AppConfig.from_env()
    plugin = build_plugin(config, capability=capability)

    app = FastAPI(title="Direct Calling Bridge")
    app.state.plugin = plugin
    app.include_router(create_router(
        plugin,
        channel_name=config.channel_name,
        platform=config.call_platform,
    ))

    @app.on_event("startup")
    async def startup_event():
        _log("Direct calling bridge starting")
        _log(f"Platform: {config.call_platform}")
        _log(f"Permission request code: {config.permission_request_code}")
        _log(f"Pending overwrite mode: {config.pending_overwrite_mode}")
        await plugin.dispatcher.capability.prepare()

    @app.on_event("shutdown")
    async def shutdown_event():
        # Fail any parked request instead of leaving its caller hanging
        plugin.on_detached_from_activity()

    return app


def main():
    config = AppConfig.from_env()
    uvicorn.run(create_app(config), host="0.0.0.0", port=config.port)


if __name__ == "__main__":
    main()
