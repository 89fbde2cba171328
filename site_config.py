"""Build settings read from the environment (OUT_DIR, ROOT_TITLE, ...)."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_SOURCE_DIR = "articles"
DEFAULT_ASSETS_DIR = "public"
DEFAULT_OUT_DIR = "build"
DEFAULT_ROOT_TITLE = "root"
DEFAULT_LOG_LEVEL = "INFO"

LOG_FORMAT = "%(levelname)s | %(message)s"


@dataclass(frozen=True)
class SiteConfig:
    source_dir: Path = Path(DEFAULT_SOURCE_DIR)
    assets_dir: Path = Path(DEFAULT_ASSETS_DIR)
    out_dir: Path = Path(DEFAULT_OUT_DIR)
    root_title: str = DEFAULT_ROOT_TITLE
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SiteConfig":
        """Read settings from ``environ`` (default: os.environ); empty values mean default."""
        env = os.environ if environ is None else environ

        def _get(key: str, default: str) -> str:
            return env.get(key) or default

        return cls(
            source_dir=Path(_get("SOURCE_DIR", DEFAULT_SOURCE_DIR)),
            assets_dir=Path(_get("ASSETS_DIR", DEFAULT_ASSETS_DIR)),
            out_dir=Path(_get("OUT_DIR", DEFAULT_OUT_DIR)),
            root_title=_get("ROOT_TITLE", DEFAULT_ROOT_TITLE),
            log_level=_get("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        )

    def with_overrides(self, **overrides) -> "SiteConfig":
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    level_int = logging.getLevelName(level.upper())
    if not isinstance(level_int, int):
        level_int = logging.INFO
    logging.basicConfig(level=level_int, format=LOG_FORMAT)
