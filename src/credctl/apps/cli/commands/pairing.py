"""Pairing API commands.

Every pairing command starts by resolving the realm, the pairing URL and the
realm key and minting a short-lived pairing token. If any of that fails the
command does nothing else.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

import typer

from credctl.apps.cli.errors import reported_errors
from credctl.apps.cli.state import CliState
from credctl.services.pairing import PairingSession, open_pairing_session

app = typer.Typer(help="Interact with the pairing API: register devices or work with device credentials.")


@dataclass
class PairingOptions:
    state: CliState
    realm_key: Optional[str] = None
    realm_name: Optional[str] = None
    pairing_url: Optional[str] = None


def _session(ctx: typer.Context) -> PairingSession:
    options = ctx.find_object(PairingOptions)
    if options is None:
        options = PairingOptions(state=ctx.find_object(CliState) or CliState())
    with reported_errors():
        config = options.state.load_config().with_overrides(
            realm_name=options.realm_name,
            realm_key=options.realm_key,
            pairing_url=options.pairing_url,
        )
        return open_pairing_session(config)


@app.callback()
def pairing_main(
    ctx: typer.Context,
    realm_key: Optional[str] = typer.Option(
        None, "--realm-key", "-k", help="Path to realm private key used to generate JWT for authentication."
    ),
    pairing_url: Optional[str] = typer.Option(
        None,
        "--pairing-url",
        help="Pairing API base URL. Defaults to <url>/pairing, with <url> from --url, CREDCTL_URL or the config file.",
    ),
    realm_name: Optional[str] = typer.Option(None, "--realm-name", "-r", help="The name of the realm that will be queried."),
) -> None:
    # the session is opened by each command so that --help never needs credentials
    ctx.obj = PairingOptions(
        state=ctx.find_object(CliState) or CliState(),
        realm_key=realm_key,
        realm_name=realm_name,
        pairing_url=pairing_url,
    )


@app.command("token")
def pairing_token(
    ctx: typer.Context,
    header: bool = typer.Option(False, "--header", help="Print as an HTTP Authorization header."),
) -> None:
    """Print the pairing token used to authenticate pairing calls."""

    session = _session(ctx)
    if header:
        for name, value in session.headers().items():
            typer.echo(f"{name}: {value}")
        return
    typer.echo(session.token)


@app.command("info")
def pairing_info(ctx: typer.Context) -> None:
    """Show the realm, pairing URL and token expiry in use."""

    session = _session(ctx)
    typer.echo(f"Realm: {session.realm}")
    typer.echo(f"Pairing URL: {session.pairing_url}")
    exp = session.expires_at()
    if exp is not None:
        typer.echo(f"Token expires: {datetime.fromtimestamp(exp, tz=timezone.utc).isoformat()}")


__all__ = ["app"]
