"""Shared fakes for dispatcher, plugin and route tests."""

import pytest

from direct_calling.domain.dispatcher import PermissionGatedDispatcher
from direct_calling.domain.models import FrontEndContext
from direct_calling.domain.phone_number import PROMPTED_RULE


class FakeCapability:
    """In-memory CallCapability recording prompts and placed calls."""

    def __init__(self, authorized=False, supported=True, immediate_answer=None, rule=PROMPTED_RULE):
        self.authorized = authorized
        self.supported = supported
        self.immediate_answer = immediate_answer
        self.number_rule = rule
        self.fail_with = None
        self.record_error = None
        self.prompt_error = None
        self.prompts = 0
        self.prompt_payloads = []
        self.prepared = False
        self.calls = []
        self.recorded = []

    def is_supported(self, context):
        return self.supported

    def check_authorization(self, context):
        return self.authorized

    def request_authorization(self, context, payload=None):
        self.prompts += 1
        self.prompt_payloads.append(payload)
        if self.prompt_error is not None:
            raise self.prompt_error
        return self.immediate_answer

    def record_authorization(self, granted):
        if self.record_error is not None:
            raise self.record_error
        self.recorded.append(granted)
        self.authorized = granted

    async def perform_call(self, number):
        self.calls.append(number)
        if self.fail_with is not None:
            raise self.fail_with
        return True

    async def prepare(self):
        self.prepared = True


@pytest.fixture
def capability():
    return FakeCapability()


@pytest.fixture
def dispatcher(capability):
    d = PermissionGatedDispatcher(capability)
    d.attach(FrontEndContext(context_id="main"))
    return d
