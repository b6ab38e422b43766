"""Error taxonomy for the color registry.

Every failure inside the registry raises a RegistryError subclass. Each
subclass carries a stable machine-readable code and a category so callers
and tests can assert on the failure kind, not just failure-vs-success.

Any error aborts the enclosing operation and reverts all of its effects;
there is no partial-success state.

Usage:
    from src.registry.errors import NotOwnerError, ErrorCode

    try:
        registry.rename("FF0000", "Crimson", caller="bob")
    except NotOwnerError as e:
        assert e.code is ErrorCode.NOT_OWNER
        response = e.to_dict()
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorCategory(str, Enum):
    """Categories for error classification.

    - VALIDATION: Caller provided bad input
    - PERMISSION: Caller not authorized or underpaid
    - RESOURCE: Entry not found, already exists
    - EXECUTION: A collaborator refused or failed
    - SYSTEM: Internal invariant violated
    """

    VALIDATION = "validation"
    PERMISSION = "permission"
    RESOURCE = "resource"
    EXECUTION = "execution"
    SYSTEM = "system"


class ErrorCode(str, Enum):
    """Specific error codes for programmatic handling."""

    # Validation errors
    INVALID_FORMAT = "invalid_format"
    NAME_TOO_LONG = "name_too_long"
    INVALID_TARGET = "invalid_target"

    # Permission errors
    NOT_OWNER = "not_owner"
    NOT_AUTHORIZED = "not_authorized"
    INSUFFICIENT_PAYMENT = "insufficient_payment"
    UPGRADE_LOCKED = "upgrade_locked"

    # Resource errors
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"

    # Execution errors
    NOTIFICATION_REJECTED = "notification_rejected"
    TRANSFER_FAILED = "transfer_failed"

    # System errors
    OUT_OF_RANGE = "out_of_range"


@dataclass
class ErrorResponse:
    """Standardized error response.

    All error responses include:
    - success: Always False
    - error: Human-readable message
    - code: Machine-readable error code
    - category: Error category (validation, permission, etc.)
    - retriable: Whether the operation should be retried
    - details: Optional additional context
    """

    success: bool = False
    error: str = ""
    code: str = ""
    category: str = ""
    retriable: bool = False
    details: dict[str, object] | None = None

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for serialization."""
        result: dict[str, object] = {
            "success": self.success,
            "error": self.error,
            "code": self.code,
            "category": self.category,
            "retriable": self.retriable,
        }
        if self.details:
            result["details"] = self.details
        return result


class RegistryError(Exception):
    """Base class for every registry failure."""

    code: ErrorCode = ErrorCode.OUT_OF_RANGE
    category: ErrorCategory = ErrorCategory.SYSTEM
    retriable: bool = False

    def __init__(self, message: str, **details: object) -> None:
        self.message = message
        self.details: dict[str, object] = dict(details)
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Build the standard error response for this failure."""
        return ErrorResponse(
            error=self.message,
            code=self.code.value,
            category=self.category.value,
            retriable=self.retriable,
            details=self.details or None,
        )

    def to_dict(self) -> dict[str, object]:
        """Convert to the standard error response dict."""
        return self.to_response().to_dict()


class InvalidFormatError(RegistryError):
    """Raised when hex text is not exactly six hex characters."""

    code = ErrorCode.INVALID_FORMAT
    category = ErrorCategory.VALIDATION


class OutOfRangeError(RegistryError):
    """Raised when an integer identifier falls outside the 24-bit space.

    Unreachable for identifiers that came out of decode(); seeing one means
    an internal invariant was broken.
    """

    code = ErrorCode.OUT_OF_RANGE
    category = ErrorCategory.SYSTEM


class NameTooLongError(RegistryError):
    """Raised when a name exceeds the configured length bound."""

    code = ErrorCode.NAME_TOO_LONG
    category = ErrorCategory.VALIDATION


class InvalidTargetError(RegistryError):
    """Raised when a transfer destination can never use the entry."""

    code = ErrorCode.INVALID_TARGET
    category = ErrorCategory.VALIDATION


class NotOwnerError(RegistryError):
    """Raised when a non-owner tries to mutate an entry."""

    code = ErrorCode.NOT_OWNER
    category = ErrorCategory.PERMISSION


class NotAuthorizedError(RegistryError):
    """Raised when a caller other than the principal uses an admin operation."""

    code = ErrorCode.NOT_AUTHORIZED
    category = ErrorCategory.PERMISSION


class InsufficientPaymentError(RegistryError):
    """Raised when a create payment is below the identifier's tier."""

    code = ErrorCode.INSUFFICIENT_PAYMENT
    category = ErrorCategory.PERMISSION


class UpgradeLockedError(RegistryError):
    """Raised when an upgrade is attempted after upgrades were locked."""

    code = ErrorCode.UPGRADE_LOCKED
    category = ErrorCategory.PERMISSION


class NotFoundError(RegistryError):
    """Raised when reading or mutating an entry that does not exist."""

    code = ErrorCode.NOT_FOUND
    category = ErrorCategory.RESOURCE


class AlreadyExistsError(RegistryError):
    """Raised when creating an entry that already has an owner."""

    code = ErrorCode.ALREADY_EXISTS
    category = ErrorCategory.RESOURCE


class NotificationRejectedError(RegistryError):
    """Raised when a programmable recipient declines an incoming entry."""

    code = ErrorCode.NOTIFICATION_REJECTED
    category = ErrorCategory.EXECUTION


class TransferFailedError(RegistryError):
    """Raised when paying out the held balance fails."""

    code = ErrorCode.TRANSFER_FAILED
    category = ErrorCategory.EXECUTION
    retriable = True
