"""Tests for DirectCallingPlugin channel handling and lifecycle."""

import asyncio

import pytest

from direct_calling.domain.dispatcher import PermissionGatedDispatcher
from direct_calling.domain.errors import ActionFailed
from direct_calling.domain.models import FrontEndContext
from direct_calling.plugin import PERMISSION_DENIED, PERMISSION_GRANTED, DirectCallingPlugin
from direct_calling.ports.inbound import MethodCall


@pytest.fixture
def plugin(capability):
    p = DirectCallingPlugin(PermissionGatedDispatcher(capability), request_code=1001)
    p.on_attached_to_activity(FrontEndContext(context_id="main"))
    return p


class TestMakeCall:
    @pytest.mark.asyncio
    async def test_missing_number(self, plugin):
        result = await plugin.handle(MethodCall("makeCall", {}))
        assert result.status == "error"
        assert result.error_code == "INVALID_NUMBER"
        assert result.error_message == "Phone number cannot be empty"

    @pytest.mark.asyncio
    async def test_authorized_call(self, plugin, capability):
        capability.authorized = True
        result = await plugin.handle(MethodCall("makeCall", {"phoneNumber": "12345"}))
        assert result.status == "success"
        assert result.result is True
        assert capability.calls == ["12345"]

    @pytest.mark.asyncio
    async def test_no_activity(self, capability):
        p = DirectCallingPlugin(PermissionGatedDispatcher(capability))
        result = await p.handle(MethodCall("makeCall", {"phoneNumber": "12345"}))
        assert result.error_code == "NO_ACTIVITY"

    @pytest.mark.asyncio
    async def test_call_failed(self, plugin, capability):
        capability.authorized = True
        capability.fail_with = ActionFailed("Failed to make call: denied by OS")
        result = await plugin.handle(MethodCall("makeCall", {"phoneNumber": "12345"}))
        assert result.error_code == "CALL_FAILED"
        assert "denied by OS" in result.error_message

    @pytest.mark.asyncio
    async def test_not_supported(self, plugin, capability):
        capability.supported = False
        result = await plugin.handle(MethodCall("makeCall", {"phoneNumber": "12345"}))
        assert result.error_code == "NOT_SUPPORTED"

    @pytest.mark.asyncio
    async def test_deferred_until_permission_result(self, plugin, capability):
        task = asyncio.create_task(plugin.handle(MethodCall("makeCall", {"phoneNumber": "555-1212"})))
        await asyncio.sleep(0)
        assert not task.done()
        assert plugin.on_request_permissions_result(1001, [PERMISSION_GRANTED]) is True
        result = await task
        assert result.status == "success"
        assert result.result is True
        assert capability.calls == ["5551212"]
        assert capability.recorded == [True]

    @pytest.mark.asyncio
    async def test_denied_is_success_false(self, plugin, capability):
        task = asyncio.create_task(plugin.handle(MethodCall("makeCall", {"phoneNumber": "12345"})))
        await asyncio.sleep(0)
        plugin.on_request_permissions_result(1001, [PERMISSION_DENIED])
        result = await task
        assert result.status == "success"
        assert result.result is False
        assert capability.calls == []


class TestPermissionMethods:
    @pytest.mark.asyncio
    async def test_check_permission(self, plugin, capability):
        result = await plugin.handle(MethodCall("checkPermission"))
        assert result.result is False
        capability.authorized = True
        result = await plugin.handle(MethodCall("checkPermission"))
        assert result.result is True
        assert capability.prompts == 0

    @pytest.mark.asyncio
    async def test_request_permission_prompts(self, plugin, capability):
        task = asyncio.create_task(plugin.handle(MethodCall("requestPermission")))
        await asyncio.sleep(0)
        assert capability.prompts == 1
        plugin.on_request_permissions_result(1001, [PERMISSION_GRANTED])
        result = await task
        assert result.result is True

    @pytest.mark.asyncio
    async def test_unknown_method(self, plugin):
        result = await plugin.handle(MethodCall("hangUp"))
        assert result.status == "not_implemented"
        assert result.error_code is None


class TestPermissionResult:
    def test_foreign_request_code_ignored(self, plugin, capability):
        assert plugin.on_request_permissions_result(7, [PERMISSION_GRANTED]) is False
        assert capability.recorded == []

    def test_empty_results_mean_denied(self, plugin, capability):
        assert plugin.on_request_permissions_result(1001, []) is True
        assert capability.recorded == [False]

    @pytest.mark.asyncio
    async def test_grant_not_persisted_still_places_call(self, plugin, capability):
        capability.record_error = OSError("disk full")
        task = asyncio.create_task(plugin.handle(MethodCall("makeCall", {"phoneNumber": "12345"})))
        await asyncio.sleep(0)
        assert plugin.on_request_permissions_result(1001, [PERMISSION_GRANTED]) is True
        result = await asyncio.wait_for(task, timeout=1)
        assert result.result is True
        assert capability.calls == ["12345"]
        assert plugin.dispatcher.pending is None


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_detach_fails_pending_call(self, plugin):
        task = asyncio.create_task(plugin.handle(MethodCall("makeCall", {"phoneNumber": "12345"})))
        await asyncio.sleep(0)
        plugin.on_detached_from_activity_for_config_changes()
        result = await task
        assert result.error_code == "NO_ACTIVITY"
        assert plugin.context is None

    def test_reattach(self, plugin):
        plugin.on_detached_from_activity()
        plugin.on_reattached_to_activity_for_config_changes(FrontEndContext(context_id="rotated"))
        assert plugin.context.context_id == "rotated"
