"""Inspection exceptions.

This module contains exceptions for argument validation, member reads,
member enumeration and optional strategy registration.

Only ``InvalidArgumentException`` is ever raised out of a public extraction
operation. ``MemberReadFailure`` and ``EnumerationFailure`` are built by the
reflection strategy and folded into error-flagged property entries.
"""

from .base_exceptions import ObjscopeException


def describe_cause(cause: BaseException) -> str:
    """Return a non-empty message for an exception."""
    message = str(cause)
    if not message:
        return type(cause).__name__
    return message


class InspectionException(ObjscopeException):
    """Base exception for inspection errors."""

    pass


class InvalidArgumentException(InspectionException, ValueError):
    """Raised when a required input to a public operation is absent."""

    def __init__(self, argument: str, operation: str | None = None, **kwargs) -> None:
        """Initialize with the missing argument name."""
        message = f"Argument '{argument}' is required"
        if operation:
            message += f" for {operation}"

        super().__init__(
            message,
            error_code="INVALID_ARGUMENT",
            context={"argument": argument, "operation": operation, **kwargs},
        )
        self.argument = argument


class MemberReadFailure(InspectionException):
    """A single member could not be read or formatted."""

    def __init__(self, member: str, cause: BaseException, **kwargs) -> None:
        """Initialize with member name and the underlying error."""
        super().__init__(
            describe_cause(cause),
            error_code="MEMBER_READ_FAILURE",
            context={"member": member, "cause_type": type(cause).__name__, **kwargs},
        )
        self.member = member
        self.cause = cause


class EnumerationFailure(InspectionException):
    """The member set of an object could not be enumerated."""

    def __init__(self, type_name: str, cause: BaseException, **kwargs) -> None:
        """Initialize with the inspected type name and the underlying error."""
        super().__init__(
            f"Failed to collect properties: {describe_cause(cause)}",
            error_code="ENUMERATION_FAILURE",
            context={"type_name": type_name, "cause_type": type(cause).__name__, **kwargs},
        )
        self.type_name = type_name
        self.cause = cause


class AccessorScopeFailure(EnumerationFailure):
    """The accessor scope could not be entered or exited around an extraction."""

    def __init__(self, type_name: str, cause: BaseException, **kwargs) -> None:
        InspectionException.__init__(
            self,
            f"Failed to collect properties: accessor scope failed: {describe_cause(cause)}",
            error_code="ACCESSOR_SCOPE_FAILURE",
            context={"type_name": type_name, "cause_type": type(cause).__name__, **kwargs},
        )
        self.type_name = type_name
        self.cause = cause


class OptionalStrategyUnavailable(InspectionException):
    """Raised by a strategy factory when its strategy cannot run in this deployment."""

    def __init__(self, name: str, reason: str, **kwargs) -> None:
        """Initialize with strategy name and reason."""
        super().__init__(
            f"Strategy '{name}' is unavailable: {reason}",
            error_code="STRATEGY_UNAVAILABLE",
            context={"name": name, "reason": reason, **kwargs},
        )
        self.name = name
        self.reason = reason
