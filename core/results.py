"""
Operation results and error policies for Arquivo.

Every file operation returns an OperationResult. Whether a failure is
raised to the caller or only recorded is decided by an ErrorPolicy.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Union

from .logger import ActionStatus


class ErrorPolicy(Enum):
    """How an operation reacts to an I/O failure."""
    FATAL = "fatal"  # wrap and raise FileOperationError
    LOG = "log"      # record the failure and return the failed result

    @classmethod
    def from_value(cls, value: Union[str, "ErrorPolicy"]) -> "ErrorPolicy":
        """Parse a policy name such as "fatal" or "LOG"."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(p.value for p in cls)
            raise ValueError(f"Unknown error policy: {value!r} (expected one of: {choices})")


class FileOperationError(IOError):
    """An I/O failure raised by a file operation under the fatal policy."""

    def __init__(self, operation: str, path: str, reason: str, error_kind: str = "OSError"):
        self.operation = operation
        self.path = path
        self.reason = reason
        self.error_kind = error_kind
        super().__init__(f"{operation} failed for {path}: {reason}")

    @classmethod
    def from_exception(cls, operation: str, path: str, exc: BaseException) -> "FileOperationError":
        reason = getattr(exc, "strerror", None) or str(exc)
        return cls(operation, path, reason, type(exc).__name__)


@dataclass
class OperationResult:
    """Result of a single file operation."""
    operation: str
    path: str
    success: bool
    status: str
    message: str
    data: Optional[Any] = None
    error: Optional[FileOperationError] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(
        cls,
        operation: str,
        path: str,
        message: str,
        data: Optional[Any] = None,
        status: ActionStatus = ActionStatus.EXECUTED,
        metadata: Optional[Dict[str, Any]] = None
    ) -> "OperationResult":
        return cls(
            operation=operation,
            path=path,
            success=True,
            status=status.value,
            message=message,
            data=data,
            metadata=metadata or {}
        )

    @classmethod
    def failed(
        cls,
        operation: str,
        path: str,
        exc: BaseException,
        data: Optional[Any] = None,
        metadata: Optional[Dict[str, Any]] = None
    ) -> "OperationResult":
        error = FileOperationError.from_exception(operation, path, exc)
        # raise_for_error() re-raises with this cause
        error.__cause__ = exc
        return cls(
            operation=operation,
            path=path,
            success=False,
            status=ActionStatus.FAILED.value,
            message=str(error),
            data=data,
            error=error,
            metadata=metadata or {}
        )

    def raise_for_error(self) -> "OperationResult":
        """Raise the carried FileOperationError if the operation failed."""
        if self.error is not None:
            raise self.error
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "operation": self.operation,
            "path": self.path,
            "success": self.success,
            "status": self.status,
            "message": self.message,
            "data": self.data,
            "error_kind": self.error.error_kind if self.error else None,
            "metadata": dict(self.metadata),
        }
