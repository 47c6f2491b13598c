"""Error taxonomy for call dispatch.

Each error carries the channel code reported to the application layer.
A declined permission is not an error: it resolves to ``False``.
"""


class DirectCallingError(Exception):
    """Base class for errors delivered through a call or permission handle."""

    code = "ERROR"

    def __init__(self, message: str = ""):
        super().__init__(message or self.code)
        self.message = message or self.code


class InvalidInput(DirectCallingError):
    """Phone number empty or outside the platform's allowed characters."""

    code = "INVALID_NUMBER"


class NoContext(DirectCallingError):
    """No front-end context attached. Recoverable once one reattaches."""

    code = "NO_ACTIVITY"


class ActionFailed(DirectCallingError):
    """The system refused or failed to place the call."""

    code = "CALL_FAILED"


class NotSupported(DirectCallingError):
    """This host cannot place calls at all."""

    code = "NOT_SUPPORTED"


class RequestOverwritten(DirectCallingError):
    """A newer request replaced this one while it waited for permission."""

    code = "OVERWRITTEN"
