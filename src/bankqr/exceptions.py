"""
Exceptions raised while building a payment record.

Hierarchy:
    BankQrError
    ├── ConfigurationError      → invalid recipient type
    ├── FieldTypeError          → value of an unsupported type
    ├── FormatError             → value has the wrong shape
    ├── RequiredFieldError      → mandatory field empty or unset
    ├── RangeError              → amount outside 0..999999
    └── InternalInvariantError  → assembled record too long

Each concrete class also derives from the matching builtin so callers
may catch ``ValueError`` or ``TypeError`` where that reads better.
"""

from typing import Any, Optional


class BankQrError(Exception):
    """Base class for all record builder errors."""


class ConfigurationError(BankQrError, ValueError):
    """Raised when the builder is constructed with an invalid recipient type."""

    def __init__(self, recipient_type: Any):
        self.recipient_type = recipient_type
        super().__init__(f"Invalid recipient type specified: {recipient_type!r}")


class FieldError(BankQrError):
    """Base for errors tied to a single record field."""

    def __init__(self, field: str, message: str, value: Optional[Any] = None):
        self.field = field
        self.value = value
        super().__init__(message)


class FieldTypeError(FieldError, TypeError):
    """Raised when a setter receives a value of an unsupported type."""


class FormatError(FieldError, ValueError):
    """Raised when a value does not match the required shape."""


class RequiredFieldError(FieldError, ValueError):
    """Raised when a mandatory field is empty or was never set."""


class RangeError(FieldError, ValueError):
    """Raised when the amount falls outside the representable range."""


class InternalInvariantError(BankQrError, RuntimeError):
    """Raised when the assembled record exceeds the maximum length.

    This signals a defect in the field width constants, not bad input.
    """

    def __init__(self, length: int, max_length: int):
        self.length = length
        self.max_length = max_length
        super().__init__(
            f"Result string is {length} chars long (max allowed {max_length}). "
            "Field widths are inconsistent, please report this."
        )
