"""Signer client CLI.

Runs one signer command per invocation and prints the reply as JSON.

Usage:
    signer-client address                          # Fetch the signer's address
    signer-client sync request.json                # Synchronize (request from file)
    signer-client sign -                           # Sign (request from stdin)
    signer-client transaction-data request.json    # Fetch raw transaction data
    signer-client identity request.json            # Fetch identity proofs
    signer-client sign-with-data request.json      # Sign and return transaction data

    signer-client --url wss://signer.local:29987 --ca-file ca.pem address
"""

from __future__ import annotations

import asyncio
import logging
import sys
from collections.abc import Awaitable, Callable
from typing import IO, Any, TypeVar

import click
from pydantic import BaseModel, ValidationError
from pydantic_core import to_json

from .client import SignerClient
from .config import SignerClientConfig
from .errors import ClientError
from .signer.types import IdentityRequest, SignRequest, SyncRequest, TransactionDataRequest
from .transport.base import TransportError

M = TypeVar("M", bound=BaseModel)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _load_request(source: IO[str], model: type[M]) -> M:
    """Parse a JSON request, reporting problems as a usage error."""
    try:
        return model.model_validate_json(source.read())
    except ValidationError as e:
        raise click.BadParameter(str(e), param_hint="REQUEST") from e


def _run(config: SignerClientConfig, call: Callable[[SignerClient], Awaitable[Any]]) -> None:
    """Connect, run one exchange, print the reply and disconnect."""

    async def exchange() -> Any:
        client = await SignerClient.connect(config)
        async with client:
            return await call(client)

    try:
        reply = asyncio.run(exchange())
    except TransportError as e:
        click.echo(f"Cannot reach signer at {config.url}: {e}", err=True)
        sys.exit(1)
    except ClientError as e:
        click.echo(f"Signer request failed: {e}", err=True)
        sys.exit(1)

    click.echo(to_json(reply, indent=2).decode("utf-8"))


@click.group()
@click.option("--url", default=None, help="Signer WebSocket URL (default: $SIGNER_CLIENT_URL)")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    envvar="SIGNER_CLIENT_LOG_LEVEL",
    help="Logging level (logs go to stderr)",
)
@click.option("--insecure", is_flag=True, help="Skip TLS certificate verification (wss://)")
@click.option(
    "--ca-file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="CA bundle for verifying the signer's certificate",
)
@click.pass_context
def main(
    ctx: click.Context,
    url: str | None,
    log_level: str,
    insecure: bool,
    ca_file: str | None,
) -> None:
    """Signer client - send commands to a signer over WebSocket."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        ctx.obj = SignerClientConfig.from_env(
            url=url,
            verify_tls=False if insecure else None,
            ca_file=ca_file,
        )
    except ValueError as e:
        raise click.UsageError(str(e)) from e


@main.command()
@click.pass_obj
def address(config: SignerClientConfig) -> None:
    """Fetch the signer's receiving address."""
    _run(config, lambda client: client.fetch_address())


@main.command()
@click.argument("request", type=click.File("r"), default="-")
@click.pass_obj
def sync(config: SignerClientConfig, request: IO[str]) -> None:
    """Synchronize the signer with new ledger data."""
    payload = _load_request(request, SyncRequest)
    _run(config, lambda client: client.synchronize(payload))


@main.command()
@click.argument("request", type=click.File("r"), default="-")
@click.pass_obj
def sign(config: SignerClientConfig, request: IO[str]) -> None:
    """Sign a transaction."""
    payload = _load_request(request, SignRequest)
    _run(config, lambda client: client.sign(payload))


@main.command("transaction-data")
@click.argument("request", type=click.File("r"), default="-")
@click.pass_obj
def transaction_data(config: SignerClientConfig, request: IO[str]) -> None:
    """Fetch raw transaction data for transfer posts."""
    payload = _load_request(request, TransactionDataRequest)
    _run(config, lambda client: client.fetch_transaction_data(payload))


@main.command()
@click.argument("request", type=click.File("r"), default="-")
@click.pass_obj
def identity(config: SignerClientConfig, request: IO[str]) -> None:
    """Fetch identity proofs for virtual assets."""
    payload = _load_request(request, IdentityRequest)
    _run(config, lambda client: client.fetch_identity_proof(payload))


@main.command("sign-with-data")
@click.argument("request", type=click.File("r"), default="-")
@click.pass_obj
def sign_with_data(config: SignerClientConfig, request: IO[str]) -> None:
    """Sign a transaction and return each post with its transaction data."""
    payload = _load_request(request, SignRequest)
    _run(config, lambda client: client.sign_with_transaction_data(payload))


if __name__ == "__main__":
    main()
