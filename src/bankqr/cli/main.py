"""
Main CLI entry point for bankqr using Click.

Usage:
    bankqr build --account NUMBER --name NAME --title TITLE --amount PLN [...]
    bankqr build --from-json FILE [--json]
    bankqr validate FILE [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, Optional

import click
from pydantic import ValidationError

from bankqr import __version__
from bankqr.builder import RecordBuilder
from bankqr.enums import RecipientType
from bankqr.exceptions import BankQrError
from bankqr.models import PaymentData
from bankqr.validation import RecordValidator


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure logging based on verbosity."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


class Config:
    """Shared configuration for CLI commands."""

    def __init__(self) -> None:
        self.verbose = False
        self.debug = False


pass_config = click.make_pass_decorator(Config, ensure=True)


def load_json(path: str) -> Any:
    """Read a UTF-8 JSON file, reporting unreadable content as a CLI error."""
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise click.ClickException(f"Invalid JSON in {path}: {e}")


def load_payment(path: str) -> PaymentData:
    """Load a PaymentData JSON file, reporting problems as CLI errors."""
    raw = load_json(path)
    try:
        return PaymentData.model_validate(raw)
    except ValidationError as e:
        raise click.ClickException(f"Invalid payment data in {path}:\n{e}")


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug output")
@click.version_option(version=__version__, prog_name="bankqr")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, debug: bool) -> None:
    """Build Polish bank transfer QR code payloads."""
    ctx.ensure_object(Config)
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug
    setup_logging(verbose=verbose, debug=debug)


@cli.command()
@click.option(
    "--from-json",
    "from_json",
    type=click.Path(exists=True, dir_okay=False),
    help="Load payment data from a JSON file (options override its values)",
)
@click.option(
    "--company/--person",
    "company",
    default=None,
    help="Recipient type (default: person)",
)
@click.option("--vat-id", help="Recipient VAT ID (NIP), required for companies")
@click.option("--account", "bank_account", help="Recipient bank account (26 digits)")
@click.option("--name", "recipient_name", help="Recipient name (max 20 chars)")
@click.option("--country", "country_code", help="Two-letter country code, e.g. PL")
@click.option("--title", "payment_title", help="Payment title (max 32 chars)")
@click.option("--amount", type=float, help="Amount in zloty, e.g. 150.50")
@click.option("--grosz", type=int, help="Amount in grosz, e.g. 15050")
@click.option("--ref-id", "reserved1", help="Payment reference ID (max 20 chars)")
@click.option("--invobill", "reserved2", help="Invobill reference ID (max 12 chars)")
@click.option("--reserved3", help="Reserved field 3 (max 24 chars)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@pass_config
def build(
    config: Config,
    from_json: Optional[str],
    company: Optional[bool],
    vat_id: Optional[str],
    bank_account: Optional[str],
    recipient_name: Optional[str],
    country_code: Optional[str],
    payment_title: Optional[str],
    amount: Optional[float],
    grosz: Optional[int],
    reserved1: Optional[str],
    reserved2: Optional[str],
    reserved3: Optional[str],
    as_json: bool,
) -> None:
    """Build a payment record.

    Prints the record string ready to be encoded in a QR code.

    Example:
        bankqr build --account "11 1111 1111 1111 1111 1111 1111" \\
            --name "Jan Kowalski" --title "Invoice 123" --amount 150.50 --country PL
    """
    if amount is not None and grosz is not None:
        raise click.UsageError("Use either --amount or --grosz, not both")

    data = load_payment(from_json) if from_json else PaymentData()

    overrides: dict[str, Any] = {
        "vat_id": vat_id,
        "bank_account": bank_account,
        "recipient_name": recipient_name,
        "country_code": country_code,
        "payment_title": payment_title,
        "amount": amount if amount is not None else grosz,
        "reserved1": reserved1,
        "reserved2": reserved2,
        "reserved3": reserved3,
    }
    if company is not None:
        overrides["recipient_type"] = RecipientType.COMPANY if company else RecipientType.PERSON

    data = data.model_copy(update={k: v for k, v in overrides.items() if v is not None})

    try:
        builder = RecordBuilder.from_data(data)
        record = builder.build()
    except BankQrError as e:
        raise click.ClickException(str(e))

    if as_json:
        output = {
            "record": record,
            "length": len(record),
            "fields": builder.to_dict(),
            "payment": data.to_dict(),
        }
        click.echo(json.dumps(output, indent=2, ensure_ascii=False))
    else:
        click.echo(record)


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--no-truncation-check", is_flag=True, help="Skip notes about truncated text")
@pass_config
def validate(config: Config, file: str, as_json: bool, no_truncation_check: bool) -> None:
    """Validate a payment JSON file.

    Reports every problem found instead of stopping at the first one.

    Example:
        bankqr validate payment.json
    """
    raw = load_json(file)

    validator = RecordValidator(check_truncation=not no_truncation_check)
    result = validator.validate(raw)

    if as_json:
        output = {
            "is_valid": result.is_valid,
            "record": result.record,
            "issues": [
                {
                    "field": issue.field,
                    "severity": issue.severity,
                    "message": issue.message,
                }
                for issue in result.issues
            ],
        }
        click.echo(json.dumps(output, indent=2, ensure_ascii=False))
    else:
        click.echo(result.summary())

    if not result.is_valid:
        sys.exit(1)


def app(args: Optional[list[str]] = None) -> int:
    """
    Main application entry point (for testing).

    Args:
        args: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success)
    """
    try:
        cli(args, standalone_mode=False)
        return 0
    except click.ClickException as e:
        e.show()
        return 1
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 1
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        return 1


def main() -> None:
    """CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
