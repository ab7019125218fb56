from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

import typer

from credctl.services.errors import EFatal, ERecoverable

logger = logging.getLogger("credctl.cli")


def print_error(message: str) -> None:
    typer.secho(message, fg=typer.colors.RED, err=True)


@contextmanager
def reported_errors(param_hint: Optional[str] = None) -> Iterator[None]:
    """Map service errors onto CLI exits.

    Recoverable errors become usage errors (exit code 2); fatal ones are echoed
    once and end the command with exit code 1.
    """

    try:
        yield
    except ERecoverable as exc:
        raise typer.BadParameter(str(exc), param_hint=param_hint) from exc
    except EFatal as exc:
        logger.debug("Fatal error %s", exc, exc_info=True)
        print_error(f"Fatal error {exc}")
        raise typer.Exit(1) from exc
