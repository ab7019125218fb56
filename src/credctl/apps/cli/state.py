from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from credctl.services.cli_config import CliConfig, load_cli_config


@dataclass
class CliState:
    """Global options shared with command groups through ``ctx.obj``."""

    config_path: Optional[Path] = None
    url: Optional[str] = None
    _config: Optional[CliConfig] = field(default=None, repr=False)

    def load_config(self) -> CliConfig:
        if self._config is None:
            self._config = load_cli_config(self.config_path).with_overrides(url=self.url)
        return self._config
