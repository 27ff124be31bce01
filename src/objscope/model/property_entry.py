"""PropertyEntry - one scalar row of inspection output."""

from dataclasses import dataclass
from typing import Any

NULL_PLACEHOLDER = "(null)"


@dataclass(frozen=True)
class PropertyEntry:
    """One name / declared type / formatted value row.

    Entries are created fresh on every extraction call and carry no reference
    back to the inspected object. When ``has_error`` is set, ``formatted_value``
    holds a readable error placeholder and ``error_detail`` the failure message.

    Attributes:
        name: Member name
        declared_type: Display string of the member's declared type
        formatted_value: Display value, always populated
        category: Optional grouping label (the declaring class name)
        declaring_type: Qualified name of the declaring class
        has_error: Whether reading or formatting the member failed
        error_detail: Failure message, present iff has_error
    """

    name: str
    declared_type: str
    formatted_value: str
    category: str | None = None
    declaring_type: str | None = None
    has_error: bool = False
    error_detail: str | None = None

    def __post_init__(self) -> None:
        if self.formatted_value is None:
            raise ValueError(f"PropertyEntry '{self.name}' requires a formatted value")
        if self.has_error != (self.error_detail is not None):
            raise ValueError(
                f"PropertyEntry '{self.name}': has_error and error_detail must agree"
            )

    @classmethod
    def value(
        cls,
        name: str,
        declared_type: str,
        formatted_value: str,
        category: str | None = None,
        declaring_type: str | None = None,
    ) -> "PropertyEntry":
        """Create a successful entry."""
        return cls(
            name=name,
            declared_type=declared_type,
            formatted_value=formatted_value,
            category=category,
            declaring_type=declaring_type,
        )

    @classmethod
    def error(
        cls,
        name: str,
        declared_type: str,
        detail: str,
        category: str | None = None,
        declaring_type: str | None = None,
    ) -> "PropertyEntry":
        """Create an error-flagged entry with a placeholder value."""
        detail = detail or "Unknown error"
        return cls(
            name=name,
            declared_type=declared_type,
            formatted_value=f"[Error: {detail}]",
            category=category,
            declaring_type=declaring_type,
            has_error=True,
            error_detail=detail,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "declared_type": self.declared_type,
            "formatted_value": self.formatted_value,
            "category": self.category,
            "declaring_type": self.declaring_type,
            "has_error": self.has_error,
            "error_detail": self.error_detail,
        }

    def __str__(self) -> str:
        if self.has_error:
            return f"{self.name}: [Error: {self.error_detail}]"
        return f"{self.name} = {self.formatted_value}"
