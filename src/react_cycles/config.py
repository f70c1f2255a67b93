"""Analyzer configuration loaded from ``react-cycles.yaml``.

Example::

    entry: src
    ignore:
      - __generated__
      - storybook
    max_sessions: 10
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

log = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "react-cycles.yaml"


class AnalyzerConfig(BaseModel):
    entry: str | None = None
    ignore: list[str] = Field(default_factory=list)
    max_sessions: int = Field(default=10, ge=1)


def load_config(path: str | Path | None = None, cwd: Path | None = None) -> AnalyzerConfig:
    """Load configuration from *path*, or from the default file in *cwd*.

    A missing default file gives the defaults. An explicit file that cannot be
    read or validated is logged and also gives the defaults.
    """
    if path is None:
        candidate = (cwd or Path.cwd()) / DEFAULT_CONFIG_NAME
        if not candidate.exists():
            return AnalyzerConfig()
        path = candidate

    config_path = Path(path).expanduser()
    try:
        data = yaml.safe_load(config_path.read_text()) or {}
        if not isinstance(data, dict):
            raise ValueError("top level must be a mapping")
        return AnalyzerConfig.model_validate(data)
    except (OSError, yaml.YAMLError, ValueError, ValidationError) as exc:
        log.warning("Could not load config file %s: %s", config_path, exc)
        return AnalyzerConfig()
