"""
Validation utilities for payment input.

Runs every field rule and collects the problems instead of stopping at the
first exception, so all of them can be reported at once.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from pydantic import ValidationError

from bankqr.builder import (
    NAME_MAX_LENGTH,
    RESERVED1_MAX_LENGTH,
    RESERVED2_MAX_LENGTH,
    RESERVED3_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    RecordBuilder,
)
from bankqr.exceptions import BankQrError, FieldError
from bankqr.models import PaymentData

logger = logging.getLogger(__name__)


@dataclass
class ValidationIssue:
    """A single validation issue."""

    field: str
    message: str
    severity: str  # "error", "warning", "info"
    value: Optional[Any] = None


@dataclass
class ValidationResult:
    """Result of validating a payment."""

    is_valid: bool
    issues: list[ValidationIssue] = field(default_factory=list)
    record: Optional[str] = None

    @property
    def errors(self) -> list[ValidationIssue]:
        """Get only error-level issues."""
        return [i for i in self.issues if i.severity == "error"]

    @property
    def warnings(self) -> list[ValidationIssue]:
        """Get only warning-level issues."""
        return [i for i in self.issues if i.severity == "warning"]

    def add_error(self, field: str, message: str, value: Any = None) -> None:
        """Add an error issue."""
        self.issues.append(
            ValidationIssue(field=field, message=message, severity="error", value=value)
        )
        self.is_valid = False

    def add_warning(self, field: str, message: str, value: Any = None) -> None:
        """Add a warning issue."""
        self.issues.append(
            ValidationIssue(field=field, message=message, severity="warning", value=value)
        )

    def add_info(self, field: str, message: str, value: Any = None) -> None:
        """Add an info issue."""
        self.issues.append(
            ValidationIssue(field=field, message=message, severity="info", value=value)
        )

    def summary(self) -> str:
        """Generate a human-readable summary."""
        lines = ["Validation: PASSED" if self.is_valid else "Validation: FAILED"]

        for issue in self.issues:
            lines.append(f"  [{issue.severity.upper()}] {issue.field}: {issue.message}")

        if self.record is not None:
            lines.append(f"Record: {self.record}")

        return "\n".join(lines)


class RecordValidator:
    """
    Validates payment input against the record field rules.

    Usage:
        validator = RecordValidator()
        result = validator.validate(payment_data)

        if result.is_valid:
            print(result.record)
        else:
            for issue in result.errors:
                print(f"ERROR: {issue.field}: {issue.message}")
    """

    # Free-text fields and their widths, for truncation notes
    TEXT_FIELDS = {
        "recipient_name": NAME_MAX_LENGTH,
        "payment_title": TITLE_MAX_LENGTH,
        "reserved1": RESERVED1_MAX_LENGTH,
        "reserved2": RESERVED2_MAX_LENGTH,
        "reserved3": RESERVED3_MAX_LENGTH,
    }

    # Field, setter and whether None is still passed to the setter
    FIELD_SETTERS = [
        ("vat_id", "set_vat_id", True),
        ("country_code", "set_country_code", True),
        ("bank_account", "set_bank_account", False),
        ("amount", "set_amount", True),
        ("recipient_name", "set_recipient_name", False),
        ("payment_title", "set_payment_title", False),
        ("reserved1", "set_reserved1", False),
        ("reserved2", "set_reserved2", False),
        ("reserved3", "set_reserved3", False),
    ]

    # Mandatory fields reported as missing when None
    REQUIRED_FIELDS = ("bank_account", "recipient_name", "payment_title")

    def __init__(self, check_truncation: bool = True):
        """
        Initialize the validator.

        Args:
            check_truncation: Whether to note text fields that will be cut
        """
        self.check_truncation = check_truncation

    def validate(self, data: Union[PaymentData, dict[str, Any]]) -> ValidationResult:
        """
        Validate a payment.

        Args:
            data: PaymentData model or a dict of PaymentData keys

        Returns:
            ValidationResult with issues found, and the record when valid
        """
        result = ValidationResult(is_valid=True)

        if not isinstance(data, PaymentData):
            try:
                data = PaymentData.model_validate(data)
            except ValidationError as e:
                for error in e.errors():
                    loc = ".".join(str(part) for part in error["loc"]) or "payment"
                    result.add_error(loc, error["msg"], error.get("input"))
                return result

        builder = RecordBuilder(data.recipient_type)

        for name, setter, pass_none in self.FIELD_SETTERS:
            value = getattr(data, name)
            if value is None and not pass_none:
                if name in self.REQUIRED_FIELDS:
                    result.add_error(name, "Field is required.")
                continue

            try:
                getattr(builder, setter)(value)
            except FieldError as e:
                result.add_error(e.field, str(e), e.value)

        if isinstance(data.amount, float) and builder.amount is not None:
            result.add_warning(
                "amount",
                f"Float amount {data.amount} converted to {builder.amount} grosz by truncation",
                data.amount,
            )

        if self.check_truncation:
            self._check_truncation(data, result)

        if result.is_valid:
            try:
                result.record = builder.build()
            except BankQrError as e:
                result.add_error(getattr(e, "field", "record"), str(e))

        logger.debug(f"Validation finished with {len(result.errors)} error(s)")
        return result

    def _check_truncation(self, data: PaymentData, result: ValidationResult) -> None:
        """Note text fields longer than their record width."""
        for name, max_length in self.TEXT_FIELDS.items():
            value = getattr(data, name)
            if not isinstance(value, str):
                continue

            if name == "payment_title":
                value = value.strip()

            if len(value) > max_length:
                result.add_info(
                    name,
                    f"Value is {len(value)} chars long and will be cut to {max_length}",
                    value,
                )


def validate_payment(
    data: Union[PaymentData, dict[str, Any]],
    check_truncation: bool = True,
) -> ValidationResult:
    """
    Convenience function to validate a payment.

    Args:
        data: PaymentData model or dict
        check_truncation: Whether to note text fields that will be cut

    Returns:
        ValidationResult with issues found
    """
    validator = RecordValidator(check_truncation=check_truncation)
    return validator.validate(data)
