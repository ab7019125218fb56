from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from credctl.apps.cli.commands import pairing, utils
from credctl.apps.cli.state import CliState
from credctl.build_info import BUILD_INFO
from credctl.services.logging import setup_logging

app = typer.Typer(help="Issue realm keypairs, device ids and API tokens.", no_args_is_help=True)
app.add_typer(utils.app, name="utils")
app.add_typer(pairing.app, name="pairing")


def _print_version(value: bool) -> None:
    if value:
        typer.echo(f"credctl {BUILD_INFO.version}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None, "--config", envvar="CREDCTL_CONFIG", help="Config file (YAML). Defaults to ~/.config/credctl/config.yaml."
    ),
    url: Optional[str] = typer.Option(None, "--url", help="Backend base URL. Overrides CREDCTL_URL and the config file."),
    log_level: str = typer.Option("WARNING", "--log-level", envvar="CREDCTL_LOG_LEVEL", help="Log level."),
    log_json: bool = typer.Option(False, "--log-json", help="Emit logs as JSON lines."),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Also write logs to a rotating file."),
    version: bool = typer.Option(
        False, "--version", callback=_print_version, is_eager=True, help="Show the version and exit."
    ),
) -> None:
    setup_logging(log_level, json_format=log_json, log_file=log_file)
    ctx.obj = CliState(config_path=config, url=url)


if __name__ == "__main__":
    app()
