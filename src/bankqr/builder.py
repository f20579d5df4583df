"""
Payment record builder.

Assembles the ``|``-separated text record that Polish banking apps read
from a transfer QR code:

    <vat_id>|<country>|<account>|<amount>|<name>|<title>|<r1>|<r2>|<r3>

Each setter validates and normalizes its input immediately, and ``build``
re-checks the mandatory fields so that fields never set are caught too.
"""

from __future__ import annotations

import logging
import math
import re
from typing import TYPE_CHECKING, Any, Optional, Union

from bankqr.enums import RecipientType
from bankqr.exceptions import (
    BankQrError,
    ConfigurationError,
    FieldTypeError,
    FormatError,
    InternalInvariantError,
    RangeError,
    RequiredFieldError,
)

if TYPE_CHECKING:
    from bankqr.models import PaymentData

logger = logging.getLogger(__name__)

VAT_ID_PATTERN = re.compile(r"[0-9]{10}")
BANK_ACCOUNT_PATTERN = re.compile(r"[0-9]{26}")
COUNTRY_CODE_PATTERN = re.compile(r"[A-Z]{2}")

NAME_MAX_LENGTH = 20
TITLE_MAX_LENGTH = 32
RESERVED1_MAX_LENGTH = 20
RESERVED2_MAX_LENGTH = 12
RESERVED3_MAX_LENGTH = 24
AMOUNT_MAX = 999999


def _require_str(field: str, value: Any, label: str) -> str:
    if not isinstance(value, str):
        raise FieldTypeError(field, f"{label} must be a string.", value)
    return value


def normalize_vat_id(
    value: Union[str, int, None],
    recipient_type: RecipientType = RecipientType.PERSON,
) -> str:
    """
    Normalize a VAT ID (NIP).

    Strings have hyphens removed and surrounding whitespace trimmed, ints
    are zero-padded to 10 digits and ``None`` becomes an empty string.
    Empty is only allowed for person recipients.

    Raises:
        FieldTypeError: value is not a string, int or None
        RequiredFieldError: company recipient without a VAT ID
        FormatError: non-empty value that is not exactly 10 digits
    """
    if isinstance(value, str):
        vat_id = value.replace("-", "").strip()
    elif value is None:
        vat_id = ""
    elif isinstance(value, int) and not isinstance(value, bool):
        vat_id = f"{value:010d}"
    else:
        raise FieldTypeError("vat_id", "VAT ID can either be a string, int or None.", value)

    if recipient_type == RecipientType.COMPANY and vat_id == "":
        raise RequiredFieldError("vat_id", "Company recipient must have VAT ID set.", value)

    if vat_id and not VAT_ID_PATTERN.fullmatch(vat_id):
        raise FormatError(
            "vat_id",
            f"Invalid VAT ID set. Must contain 10 chars, digits only. '{vat_id}' provided.",
            value,
        )

    return vat_id


def normalize_bank_account(value: str) -> str:
    """Strip spaces from an account number and require exactly 26 digits."""
    account = _require_str("bank_account", value, "Bank account number").replace(" ", "")

    if account == "":
        raise RequiredFieldError("bank_account", "Bank account number cannot be empty.", value)

    if not BANK_ACCOUNT_PATTERN.fullmatch(account):
        raise FormatError(
            "bank_account",
            f"Bank account number must be 26 chars long, digits only. '{account}' provided.",
            value,
        )

    return account


def normalize_recipient_name(value: str) -> str:
    """Truncate the recipient name to 20 characters; it may not be empty."""
    name = _require_str("recipient_name", value, "Recipient name")[:NAME_MAX_LENGTH]

    if name == "":
        raise RequiredFieldError("recipient_name", "Recipient name cannot be empty.", value)

    return name


def normalize_country_code(value: Optional[str]) -> str:
    """Uppercase a two-letter country code. Empty or None means not given."""
    if value is None:
        value = ""

    country = _require_str("country_code", value, "Country code").upper()

    if country and not COUNTRY_CODE_PATTERN.fullmatch(country):
        raise FormatError(
            "country_code",
            f"Country code must be 2 characters long, letters only. '{country}' provided.",
            value,
        )

    return country


def normalize_payment_title(value: str) -> str:
    """Trim, then truncate the title to 32 characters; it may not be empty."""
    title = _require_str("payment_title", value, "Payment title").strip()[:TITLE_MAX_LENGTH]

    if title == "":
        raise RequiredFieldError("payment_title", "Payment title cannot be empty.", value)

    return title


def normalize_amount(value: Union[int, float, None]) -> int:
    """
    Convert an amount to grosz (1/100 PLN).

    Floats are taken as zloty, multiplied by 100 and truncated toward zero.
    Ints are taken as grosz as-is.

    Raises:
        RequiredFieldError: value is None
        FieldTypeError: value is neither int nor float
        RangeError: result is negative, above 999999 or not finite
    """
    if value is None:
        raise RequiredFieldError("amount", "Amount not specified.")

    if isinstance(value, float):
        if not math.isfinite(value):
            raise RangeError("amount", f"Amount must be a finite number. '{value}' provided.", value)
        # Binary floats may land just below the intended grosz (19.99 -> 1998).
        amount = int(value * 100)
    elif isinstance(value, int) and not isinstance(value, bool):
        amount = value
    else:
        raise FieldTypeError("amount", "Amount must be either float or int.", value)

    if amount < 0:
        raise RangeError("amount", "Amount cannot be negative.", value)

    if amount > AMOUNT_MAX:
        raise RangeError(
            "amount",
            f"Amount representation cannot exceed 6 digits. Current value: {amount}",
            value,
        )

    return amount


def normalize_reserved(field: str, value: str, max_length: int) -> str:
    """Truncate a free-form reserved field."""
    return _require_str(field, value, f"{field} value")[:max_length]


class RecordBuilder:
    """
    Builds the QR payment record for a single transfer.

    Usage:
        builder = RecordBuilder(RecipientType.COMPANY)
        record = (
            builder.set_vat_id("123-456-78-90")
            .set_bank_account("11 1111 1111 1111 1111 1111 1111")
            .set_recipient_name("ACME Sp. z o.o.")
            .set_payment_title("FV 2020/01/123")
            .set_amount(150.50)
            .build()
        )

    The builder is not reset by ``build`` and may be modified and built
    again. Instances are not thread-safe.
    """

    SEPARATOR = "|"
    MAX_LENGTH = 160

    def __init__(self, recipient_type: Union[RecipientType, str] = RecipientType.PERSON):
        """
        Initialize the builder.

        Args:
            recipient_type: RecipientType member or its string value

        Raises:
            ConfigurationError: recipient_type is not a known type
        """
        try:
            self._recipient_type = RecipientType(recipient_type)
        except ValueError:
            raise ConfigurationError(recipient_type) from None

        self._vat_id = ""
        self._bank_account = ""
        self._recipient_name = ""
        self._country_code = ""
        self._payment_title = ""
        self._amount: Optional[int] = None
        self._reserved1 = ""
        self._reserved2 = ""
        self._reserved3 = ""

    @classmethod
    def from_data(cls, data: "PaymentData") -> "RecordBuilder":
        """
        Create a populated builder from a PaymentData model.

        Fields left as None in the model are not set, so the missing
        mandatory ones are reported by ``build``.
        """
        builder = cls(data.recipient_type)
        builder.set_vat_id(data.vat_id)
        builder.set_country_code(data.country_code)

        if data.bank_account is not None:
            builder.set_bank_account(data.bank_account)
        if data.amount is not None:
            builder.set_amount(data.amount)
        if data.recipient_name is not None:
            builder.set_recipient_name(data.recipient_name)
        if data.payment_title is not None:
            builder.set_payment_title(data.payment_title)
        if data.reserved1 is not None:
            builder.set_reserved1(data.reserved1)
        if data.reserved2 is not None:
            builder.set_reserved2(data.reserved2)
        if data.reserved3 is not None:
            builder.set_reserved3(data.reserved3)

        return builder

    # Read-only access to the normalized values

    @property
    def recipient_type(self) -> RecipientType:
        return self._recipient_type

    @property
    def vat_id(self) -> str:
        return self._vat_id

    @property
    def bank_account(self) -> str:
        return self._bank_account

    @property
    def recipient_name(self) -> str:
        return self._recipient_name

    @property
    def country_code(self) -> str:
        return self._country_code

    @property
    def payment_title(self) -> str:
        return self._payment_title

    @property
    def amount(self) -> Optional[int]:
        """Amount in grosz, or None if not set yet."""
        return self._amount

    @property
    def reserved1(self) -> str:
        return self._reserved1

    @property
    def reserved2(self) -> str:
        return self._reserved2

    @property
    def reserved3(self) -> str:
        return self._reserved3

    # Setters

    def set_vat_id(self, vat_id: Union[str, int, None]) -> "RecordBuilder":
        """Set the recipient VAT ID (10 digits, mandatory for companies)."""
        self._vat_id = normalize_vat_id(vat_id, self._recipient_type)
        logger.debug(f"VAT ID set to '{self._vat_id}'")
        return self

    def set_bank_account(self, account: str) -> "RecordBuilder":
        """
        Set the recipient bank account number.

        The account number must contain 26 digits. Digits may be grouped
        and separated by spaces; all spaces are removed.
        """
        self._bank_account = normalize_bank_account(account)
        logger.debug(f"Bank account set to '{self._bank_account}'")
        return self

    def set_recipient_name(self, name: str) -> "RecordBuilder":
        """Set the recipient name. Longer names are cut to 20 characters."""
        self._recipient_name = normalize_recipient_name(name)
        logger.debug(f"Recipient name set to '{self._recipient_name}'")
        return self

    def set_country_code(self, country_code: Optional[str]) -> "RecordBuilder":
        """Set the optional two-letter country code (e.g. 'PL')."""
        self._country_code = normalize_country_code(country_code)
        logger.debug(f"Country code set to '{self._country_code}'")
        return self

    def set_payment_title(self, title: str) -> "RecordBuilder":
        """Set the payment title (trimmed, up to 32 characters)."""
        self._payment_title = normalize_payment_title(title)
        logger.debug(f"Payment title set to '{self._payment_title}'")
        return self

    def set_amount(self, amount: Union[int, float]) -> "RecordBuilder":
        """
        Set the transfer amount.

        Args:
            amount: float in zloty (e.g. 150.50) or int in grosz (e.g. 15050)
        """
        self._amount = normalize_amount(amount)
        logger.debug(f"Amount set to {self._amount} grosz")
        return self

    def set_reserved1(self, value: str) -> "RecordBuilder":
        """Set reserved field 1, used as payment reference ID (20 chars)."""
        self._reserved1 = normalize_reserved("reserved1", value, RESERVED1_MAX_LENGTH)
        return self

    def ref_id(self, value: str) -> "RecordBuilder":
        """Alias for set_reserved1()."""
        return self.set_reserved1(value)

    def set_reserved2(self, value: str) -> "RecordBuilder":
        """Set reserved field 2, used as Invobill reference ID (12 chars)."""
        self._reserved2 = normalize_reserved("reserved2", value, RESERVED2_MAX_LENGTH)
        return self

    def invobill(self, value: str) -> "RecordBuilder":
        """Alias for set_reserved2()."""
        return self.set_reserved2(value)

    def set_reserved3(self, value: str) -> "RecordBuilder":
        """Set reserved field 3 (24 chars)."""
        self._reserved3 = normalize_reserved("reserved3", value, RESERVED3_MAX_LENGTH)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Snapshot of the stored values, without validation."""
        return {
            "recipient_type": self._recipient_type.value,
            "vat_id": self._vat_id,
            "country_code": self._country_code,
            "bank_account": self._bank_account,
            "amount": self._amount,
            "recipient_name": self._recipient_name,
            "payment_title": self._payment_title,
            "reserved1": self._reserved1,
            "reserved2": self._reserved2,
            "reserved3": self._reserved3,
        }

    def build(self) -> str:
        """
        Validate the mandatory fields and assemble the record.

        Returns:
            The ``|``-separated record string

        Raises:
            BankQrError: a mandatory field is missing or invalid
            InternalInvariantError: the record exceeds MAX_LENGTH
        """
        try:
            normalize_bank_account(self._bank_account)
            normalize_recipient_name(self._recipient_name)
            normalize_vat_id(self._vat_id, self._recipient_type)
            normalize_payment_title(self._payment_title)
            amount = normalize_amount(self._amount)
        except BankQrError as e:
            logger.debug(f"Record build failed: {e}")
            raise

        fields = [
            self._vat_id,
            self._country_code,
            self._bank_account,
            f"{amount:06d}",
            self._recipient_name,
            self._payment_title,
            self._reserved1,
            self._reserved2,
            self._reserved3,
        ]

        record = self.SEPARATOR.join(fields)
        if len(record) > self.MAX_LENGTH:
            raise InternalInvariantError(len(record), self.MAX_LENGTH)

        logger.info(f"Built payment record ({len(record)} chars)")
        return record
