"""
cli.py
------
Command-line interface for the rosterguard SDK.

Entry point: ``rosterguard``

Commands
--------
* ``validate``     — validate one identity number.
* ``check-digit``  — compute the Verhoeff check digit for an 11-digit body.
* ``format``       — group an identity number as ``XXXX XXXX XXXX``.
* ``mask``         — mask a value for display.
* ``hash``         — SHA-256 digest of a value.
* ``encrypt``      — encrypt a value (read from a hidden prompt or stdin).
* ``decrypt``      — decrypt an ``iv:ciphertext:tag`` envelope.
* ``lookup-hash``  — keyed lookup hash of a value, for duplicate checks.
* ``keygen``       — print a fresh random ``ENCRYPTION_KEY``.
* ``screen``       — screen a roster CSV before registration.

The encryption secret comes from ``ENCRYPTION_KEY`` or ``--config``; it is
never accepted as a command-line argument.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Optional

import click

from rosterguard import __version__
from rosterguard.connectors.csv import CSVRosterConnector
from rosterguard.core.config import GuardConfig, ConfigError
from rosterguard.core.hashing import hash_value
from rosterguard.identity.validator import validate_identity_number, format_identity_number
from rosterguard.identity.verhoeff import verhoeff_generate
from rosterguard.ingestion.roster import RosterScreener, RosterSchemaError
from rosterguard.protection.cipher import PIICipher, CipherError, generate_key
from rosterguard.protection.masking import mask as mask_value


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def _load_config(ctx: click.Context) -> GuardConfig:
    """Load the config once per invocation and cache it on the context."""
    obj = ctx.ensure_object(dict)
    if "config" not in obj:
        path = obj.get("config_path")
        try:
            obj["config"] = GuardConfig.from_yaml(path) if path else GuardConfig.from_env()
        except (ConfigError, FileNotFoundError) as exc:
            raise click.ClickException(str(exc)) from exc
    return obj["config"]


def _load_cipher(ctx: click.Context) -> PIICipher:
    config = _load_config(ctx)
    try:
        return PIICipher.from_config(config)
    except CipherError as exc:
        raise click.ClickException(str(exc)) from exc


def _fail(message: str) -> None:
    click.echo(click.style(f"✗  {message}", fg="red"), err=True)
    sys.exit(1)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------

@click.group()
@click.version_option(version=__version__, prog_name="rosterguard")
@click.option(
    "--config", "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="YAML config file (defaults to the ENCRYPTION_KEY environment variable).",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[str], verbose: bool):
    """rosterguard — identity number validation and PII protection toolkit."""
    _configure_logging(verbose)
    ctx.ensure_object(dict)["config_path"] = config_path


# ---------------------------------------------------------------------------
# Identity number commands
# ---------------------------------------------------------------------------

@cli.command()
@click.argument("number")
@click.option(
    "--output", "output_format",
    type=click.Choice(["pretty", "json"], case_sensitive=False),
    default="pretty", show_default=True,
    help="Output format.",
)
def validate(number: str, output_format: str):
    """Validate an identity NUMBER. Exits with status 1 when it is invalid."""
    result = validate_identity_number(number)
    if output_format == "json":
        click.echo(json.dumps(result.to_dict()))
    elif result.valid:
        click.echo(click.style(f"✓  {result.reason}", fg="green"))
    else:
        click.echo(click.style(f"✗  {result.reason}", fg="red"))
    if not result.valid:
        sys.exit(1)


@cli.command("check-digit")
@click.argument("body")
def check_digit(body: str):
    """Print the Verhoeff check digit for an 11-digit BODY."""
    body = "".join(body.split())
    if len(body) != 11 or not body.isascii() or not body.isdigit():
        raise click.BadParameter("BODY must be exactly 11 digits.", param_hint="BODY")
    click.echo(verhoeff_generate(body))


@cli.command("format")
@click.argument("number")
def format_cmd(number: str):
    """Group an identity NUMBER as XXXX XXXX XXXX."""
    click.echo(format_identity_number(number))


# ---------------------------------------------------------------------------
# Protection commands
# ---------------------------------------------------------------------------

@cli.command()
@click.argument("value")
@click.option("--visible", type=int, default=None, help="Trailing characters left visible.")
@click.pass_context
def mask(ctx: click.Context, value: str, visible: Optional[int]):
    """Mask VALUE for display, keeping only the last few characters."""
    config = _load_config(ctx)
    visible_count = config.visible_count if visible is None else visible
    if visible_count < 0:
        raise click.BadParameter("must not be negative.", param_hint="--visible")
    click.echo(mask_value(value, visible_count, config.mask_char))


@cli.command("hash")
@click.argument("value")
def hash_cmd(value: str):
    """
    Print the SHA-256 digest of VALUE.

    VALUE is hashed exactly as given, whitespace included, so
    "2341 2341 2346" and "234123412346" give different digests.
    lookup-hash, by contrast, removes whitespace first.
    """
    click.echo(hash_value(value))


@cli.command()
@click.option(
    "--value", prompt=True, hide_input=True,
    help="Plaintext to encrypt (prompted for when omitted).",
)
@click.pass_context
def encrypt(ctx: click.Context, value: str):
    """Encrypt a value into an iv:ciphertext:tag envelope."""
    cipher = _load_cipher(ctx)
    try:
        click.echo(cipher.encrypt(value))
    except CipherError as exc:
        _fail(str(exc))


@cli.command()
@click.argument("blob")
@click.pass_context
def decrypt(ctx: click.Context, blob: str):
    """Decrypt an iv:ciphertext:tag envelope BLOB."""
    cipher = _load_cipher(ctx)
    try:
        click.echo(cipher.decrypt(blob))
    except CipherError as exc:
        _fail(str(exc))


@cli.command("lookup-hash")
@click.option(
    "--value", prompt=True, hide_input=True,
    help="Plaintext to digest (prompted for when omitted).",
)
@click.pass_context
def lookup_hash(ctx: click.Context, value: str):
    """
    Print the keyed lookup hash used for duplicate detection.

    Whitespace is removed first, matching how roster screening normalises
    identity and mobile numbers.
    """
    cipher = _load_cipher(ctx)
    try:
        click.echo(cipher.lookup_hash("".join(value.split())))
    except CipherError as exc:
        _fail(str(exc))


@cli.command()
def keygen():
    """Print a fresh random secret for ENCRYPTION_KEY."""
    click.echo(generate_key())


# ---------------------------------------------------------------------------
# screen command
# ---------------------------------------------------------------------------

@cli.command()
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--existing", "existing_path",
    type=click.Path(exists=True, dir_okay=False),
    help="File of already-registered lookup hashes, one per line.",
)
@click.option(
    "--protect-out", "protect_out",
    type=click.Path(dir_okay=False, writable=True),
    help="Write the protected roster (no plaintext PII) to this CSV path.",
)
@click.option(
    "--encoding", default="utf-8-sig", show_default=True,
    help="CSV file encoding.",
)
@click.option(
    "--delimiter", default=",", show_default=True,
    help="CSV column delimiter.",
)
@click.option(
    "--output", "output_format",
    type=click.Choice(["pretty", "json"], case_sensitive=False),
    default="pretty", show_default=True,
    help="Output format.",
)
@click.pass_context
def screen(
    ctx: click.Context,
    filepath: str,
    existing_path: Optional[str],
    protect_out: Optional[str],
    encoding: str,
    delimiter: str,
    output_format: str,
):
    """
    Screen a roster CSV before registration.

    \b
    FILEPATH  Roster CSV, one member per row, with an id_number column.

    Reports invalid identity numbers, duplicates inside the roster, and
    numbers already registered. Exits with status 1 if any issue is found.
    The protected roster is only written when screening passes.
    """
    config = _load_config(ctx)
    cipher = _load_cipher(ctx)

    connector = CSVRosterConnector(filepath, encoding=encoding, delimiter=delimiter)
    try:
        roster = connector.connect_and_fetch()
    except Exception as exc:
        _fail(f"Could not load file: {exc}")

    existing = []
    if existing_path:
        with open(existing_path, "r", encoding="utf-8") as f:
            existing = [line.strip() for line in f if line.strip()]

    screener = RosterScreener(cipher, config)
    try:
        result = screener.screen(roster, existing_lookup_hashes=existing)
    except RosterSchemaError as exc:
        _fail(str(exc))

    if output_format == "json":
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        _print_screening_report(filepath, result)

    if not result.passed:
        sys.exit(1)

    if protect_out:
        screener.protect(roster).to_csv(protect_out, index=False)
        if output_format != "json":
            click.echo(f"🔒  Protected roster saved → {click.style(protect_out, fg='cyan')}")


def _print_screening_report(filepath: str, result) -> None:
    """Render a human-readable screening report to stdout."""
    divider = click.style("─" * 60, fg="bright_black")

    click.echo(f"\n{divider}")
    click.echo(click.style("  ROSTER SCREENING REPORT", bold=True, fg="bright_white"))
    click.echo(divider)
    click.echo(f"  Source   : {filepath}")
    click.echo(f"  Members  : {result.members_count}")
    click.echo(divider)

    if result.passed:
        click.echo(click.style("  ✓  All members passed screening.", fg="green"))
    else:
        for issue in result.issues:
            click.echo(click.style(f"  ⚠  {issue.message}", fg="yellow"))

    click.echo(f"{divider}\n")
