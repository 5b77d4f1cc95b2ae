"""Exception hierarchy for the HoL race-record core.

Every error raised by the value-object layer inherits from HolError, so
callers at the command/validation boundary can catch one type and map it
to a structured failure response. The four domain kinds mirror the failure
modes of the value objects: invalid arguments, values out of range,
conflicting state, and missing entries.

None of these classes derive from ValueError. Pydantic wraps ValueError
raised inside validators into its own ValidationError; these propagate
unchanged instead.

Example:
    >>> from hol_core.core.exceptions import ConflictError
    >>> raise ConflictError("Level already taken", details={"hierarchy_level": 2})
"""

from __future__ import annotations

from typing import Any


class HolError(Exception):
    """Base exception for all HoL core errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Domain Exceptions
# =============================================================================


class DomainError(HolError):
    """Base exception for violations of value-object invariants.

    Carries the offending argument name and value when known.
    """

    def __init__(
        self,
        message: str,
        *,
        argument: str | None = None,
        value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize domain error with argument context.

        Args:
            message: Human-readable error description.
            argument: Name of the argument or field that failed.
            value: The rejected value.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if argument:
            combined_details["argument"] = argument
        if value is not None:
            combined_details["value"] = value
        self.argument = argument
        super().__init__(message, details=combined_details)


class InvalidArgumentError(DomainError):
    """Raised for blank required strings, missing references and dice counts below 1."""


class OutOfRangeError(DomainError):
    """Raised when a numeric value falls outside its permitted range.

    Covers hierarchy levels and exchange rates below 1, negative ids,
    negative coin amounts, and ability scores outside the bonus table.
    """


class ConflictError(DomainError):
    """Raised when an operation would break a uniqueness invariant.

    The typical case is adding a denomination at a hierarchy level that is
    already taken within its currency group.
    """


class InsufficientFundsError(ConflictError):
    """Raised when removing more coins than a treasure holds at a level."""

    def __init__(
        self,
        message: str,
        *,
        hierarchy_level: int,
        available: int,
        requested: int,
    ) -> None:
        """Initialize with the ledger state that blocked the withdrawal.

        Args:
            message: Human-readable error description.
            hierarchy_level: Level the coins were requested from.
            available: Coins present at that level.
            requested: Coins the caller tried to remove.
        """
        super().__init__(
            message,
            argument="amount",
            value=requested,
            details={"hierarchy_level": hierarchy_level, "available": available},
        )


class NotFoundError(DomainError):
    """Raised when a named entry that must exist is missing."""


# =============================================================================
# Infrastructure Exceptions
# =============================================================================


class DiceRollError(HolError):
    """Raised when the dice engine cannot evaluate an expression."""

    def __init__(
        self,
        message: str,
        *,
        expression: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize dice roll error with expression context.

        Args:
            message: Human-readable error description.
            expression: The dice expression that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if expression:
            combined_details["expression"] = expression
        super().__init__(message, details=combined_details)


class CodecError(HolError):
    """Raised when a persisted payload cannot be decoded back into domain values.

    This includes malformed JSON and mapping keys outside their closed
    enumeration.
    """

    def __init__(
        self,
        message: str,
        *,
        payload_type: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize codec error with payload context.

        Args:
            message: Human-readable error description.
            payload_type: Name of the mapping or record being decoded.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if payload_type:
            combined_details["payload_type"] = payload_type
        super().__init__(message, details=combined_details)


class PersistenceError(HolError):
    """Raised when the repository cannot find or store a record."""

    def __init__(
        self,
        message: str,
        *,
        table: str | None = None,
        record_id: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize persistence error with record context.

        Args:
            message: Human-readable error description.
            table: Table involved in the failed operation.
            record_id: Primary key of the record involved.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if table:
            combined_details["table"] = table
        if record_id is not None:
            combined_details["record_id"] = record_id
        super().__init__(message, details=combined_details)


class ConfigurationError(HolError):
    """Raised when application configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


__all__ = [
    # Base exception
    "HolError",
    # Domain exceptions
    "DomainError",
    "InvalidArgumentError",
    "OutOfRangeError",
    "ConflictError",
    "InsufficientFundsError",
    "NotFoundError",
    # Infrastructure exceptions
    "DiceRollError",
    "CodecError",
    "PersistenceError",
    "ConfigurationError",
]
