"""Key, device id and token generation commands."""

from __future__ import annotations

from pathlib import Path
from typing import List

import typer

from credctl.apps.cli.errors import reported_errors
from credctl.config.const import DEFAULT_ACCESS_PATTERNS, DEFAULT_EXPIRY_SECONDS
from credctl.services.crypto.pki import generate_keypair
from credctl.services.ids import decode_device_id, generate_device_id
from credctl.services.tokens import TOKEN_TYPE_NAMES, TokenType, mint_from_file

app = typer.Typer(help="Generate keypairs, device ids and API tokens.")


def _split_claims(values: List[str]) -> List[str]:
    patterns: List[str] = []
    for value in values:
        patterns.extend(item.strip() for item in value.split(",") if item.strip())
    return patterns


def _complete_type(incomplete: str) -> List[str]:
    return [name for name in TOKEN_TYPE_NAMES if name.startswith(incomplete)]


@app.command("gen-keypair")
def gen_keypair(
    realm: str = typer.Argument(..., metavar="REALM_NAME", help="Realm the keypair authenticates."),
) -> None:
    """Generate an RSA keypair to use for realm authentication.

    The keypair is saved in the current directory as <realm_name>_private.pem
    and <realm_name>_public.pem.
    """

    with reported_errors("REALM_NAME"):
        files = generate_keypair(realm, Path.cwd())
    typer.echo("Keypair generated successfully")
    typer.echo(f"Wrote {files.private_key.name}")
    typer.echo(f"Wrote {files.public_key.name}")


@app.command("gen-device-id")
def gen_device_id(
    show_uuid: bool = typer.Option(False, "--uuid", help="Also print the canonical UUID form."),
) -> None:
    """Generate a device id, a base64 url encoded UUID v4."""

    device_id = generate_device_id()
    typer.echo(device_id)
    if show_uuid:
        typer.echo(str(decode_device_id(device_id)))


@app.command("gen-jwt")
def gen_jwt(
    token_type: str = typer.Argument(
        ...,
        metavar="TYPE",
        help="One of: " + ", ".join(TOKEN_TYPE_NAMES),
        autocompletion=_complete_type,
    ),
    private_key: Path = typer.Option(
        ...,
        "--private-key",
        "-p",
        help="Path to PEM encoded private key. Housekeeping key for housekeeping tokens, realm key for everything else.",
    ),
    claims: List[str] = typer.Option(
        list(DEFAULT_ACCESS_PATTERNS),
        "--claims",
        "-c",
        help="Access patterns added to the token. Repeat the flag or separate with commas. Defaults to .*::.* (all-access).",
    ),
    expiry: int = typer.Option(
        DEFAULT_EXPIRY_SECONDS,
        "--expiry",
        "-e",
        help="Expiration time of the token in seconds. 0 means the token never expires.",
    ),
) -> None:
    """Generate a JWT to access one of the backend APIs."""

    with reported_errors("TYPE"):
        resolved = TokenType.parse(token_type)
    with reported_errors("--expiry"):
        token = mint_from_file(resolved, private_key, _split_claims(claims), expiry)
    typer.echo(token)


__all__ = ["app"]
