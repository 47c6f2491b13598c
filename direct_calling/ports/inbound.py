"""Inbound port — transport-agnostic method call representation."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class MethodCall:
    """A named method invoked by the application layer over the channel."""

    method: str
    arguments: Dict[str, Any] = field(default_factory=dict)

    def argument(self, key: str) -> Any:
        return self.arguments.get(key)


@dataclass
class MethodResult:
    """Exactly one of success, error or not_implemented per call."""

    status: str  # "success" | "error" | "not_implemented"
    result: Any = None
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    @classmethod
    def success(cls, result: Any) -> "MethodResult":
        return cls(status="success", result=result)

    @classmethod
    def error(cls, code: str, message: str) -> "MethodResult":
        return cls(status="error", error_code=code, error_message=message)

    @classmethod
    def not_implemented(cls) -> "MethodResult":
        return cls(status="not_implemented")
