"""Build metadata for ``credctl --version``.

The static version lives in :mod:`pyproject.toml`. Packaged builds read it from
the installed distribution; CI pipelines may inject a canonical value through
``CREDCTL_BUILD_VERSION``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from importlib import metadata
import os
from typing import Final


_BASE_VERSION: Final[str] = os.getenv("CREDCTL_BASE_VERSION", "0.1.0")


def _compute_version() -> str:
    explicit = os.getenv("CREDCTL_BUILD_VERSION")
    if explicit:
        return explicit
    try:
        return metadata.version("credctl")
    except metadata.PackageNotFoundError:
        return _BASE_VERSION


def _compute_build_date() -> str:
    explicit = os.getenv("CREDCTL_BUILD_DATE")
    if explicit:
        return explicit
    return datetime.now(tz=timezone.utc).isoformat()


@dataclass(frozen=True, slots=True)
class BuildInfo:
    version: str
    build_date: str


def _load_build_info() -> BuildInfo:
    return BuildInfo(version=_compute_version(), build_date=_compute_build_date())


BUILD_INFO: Final[BuildInfo] = _load_build_info()
