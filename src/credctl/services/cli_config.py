from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Mapping
from urllib.parse import urlsplit, urlunsplit

import yaml

from credctl.config.const import CONFIG_ENV, DEFAULT_CONFIG_PATH
from credctl.services.errors import EConfig, EPairingConfig

logger = logging.getLogger(__name__)

ENV_URL = "CREDCTL_URL"
ENV_REALM_NAME = "CREDCTL_REALM_NAME"
ENV_REALM_KEY = "CREDCTL_REALM_KEY"
ENV_PAIRING_URL = "CREDCTL_PAIRING_URL"


@dataclass
class RealmSettings:
    name: str | None = None
    # path to the realm private key used to sign pairing tokens
    key: str | None = None


@dataclass
class PairingSettings:
    url: str | None = None


@dataclass
class CliConfig:
    url: str | None = None
    realm: RealmSettings = field(default_factory=RealmSettings)
    pairing: PairingSettings = field(default_factory=PairingSettings)
    source: Path | None = None

    def realm_key_path(self) -> Path | None:
        if not self.realm.key:
            return None
        return Path(self.realm.key).expanduser()

    def resolve_pairing_url(self) -> str:
        """Explicit pairing URL, else ``<url>/pairing``."""

        if self.pairing.url:
            return self.pairing.url
        if self.url:
            return _join_url(self.url, "pairing")
        raise EPairingConfig("Either url or pairing-url have to be specified")

    def with_overrides(
        self,
        *,
        url: str | None = None,
        realm_name: str | None = None,
        realm_key: str | None = None,
        pairing_url: str | None = None,
    ) -> "CliConfig":
        return replace(
            self,
            url=url or self.url,
            realm=RealmSettings(name=realm_name or self.realm.name, key=realm_key or self.realm.key),
            pairing=PairingSettings(url=pairing_url or self.pairing.url),
        )


def _join_url(base: str, segment: str) -> str:
    parts = urlsplit(base)
    path = parts.path.rstrip("/") + "/" + segment
    return urlunsplit((parts.scheme, parts.netloc, path, parts.query, parts.fragment))


def _config_path(explicit: str | Path | None) -> Path | None:
    if explicit:
        return Path(explicit).expanduser()
    from_env = os.environ.get(CONFIG_ENV)
    if from_env:
        return Path(from_env).expanduser()
    default = Path(DEFAULT_CONFIG_PATH).expanduser()
    return default if default.exists() else None


def _str_or_none(payload: Any, key: str) -> str | None:
    if not isinstance(payload, dict):
        return None
    value = payload.get(key)
    if value is None or value == "":
        return None
    return str(value)


def _config_from_dict(data: Mapping[str, Any], source: Path | None = None) -> CliConfig:
    realm_raw = data.get("realm")
    pairing_raw = data.get("pairing")
    return CliConfig(
        url=_str_or_none(data, "url"),
        realm=RealmSettings(name=_str_or_none(realm_raw, "name"), key=_str_or_none(realm_raw, "key")),
        pairing=PairingSettings(url=_str_or_none(pairing_raw, "url")),
        source=source,
    )


def _read_file(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except FileNotFoundError as exc:
        raise EConfig(f"config file not found: {path}") from exc
    except (OSError, yaml.YAMLError) as exc:
        raise EConfig(f"Failed to parse {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise EConfig(f"Failed to parse {path}: expected a mapping at top level")
    return data


def _apply_env(config: CliConfig, environ: Mapping[str, str]) -> CliConfig:
    return config.with_overrides(
        url=environ.get(ENV_URL) or None,
        realm_name=environ.get(ENV_REALM_NAME) or None,
        realm_key=environ.get(ENV_REALM_KEY) or None,
        pairing_url=environ.get(ENV_PAIRING_URL) or None,
    )


def load_cli_config(path: str | Path | None = None, *, environ: Mapping[str, str] | None = None) -> CliConfig:
    """Load defaults, then the YAML file, then ``CREDCTL_*`` environment variables.

    Flags are applied by the caller through :meth:`CliConfig.with_overrides`.
    """

    config_path = _config_path(path)
    if config_path is None:
        config = CliConfig()
    else:
        config = _config_from_dict(_read_file(config_path), source=config_path)
        logger.debug("loaded config from %s", config_path)
    return _apply_env(config, os.environ if environ is None else environ)


__all__ = [
    "CliConfig",
    "RealmSettings",
    "PairingSettings",
    "load_cli_config",
]
