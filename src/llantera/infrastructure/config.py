"""Runtime settings read from ``LLANTERA_*`` environment variables.

A ``.env`` file found from the working directory upwards is loaded first;
variables already set in the environment take precedence over it.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from llantera.domain.exceptions import ValidationError
from llantera.domain.service.catalog_normalizer import CatalogNormalizer

# Repo root when installed in editable mode.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    data_dir: Path = DEFAULT_DATA_DIR
    log_level: str = DEFAULT_LOG_LEVEL
    normalization_file: Path | None = None

    def normalizer(self) -> CatalogNormalizer:
        """Built-in brand/type tables, extended by the normalization file."""
        if self.normalization_file is None:
            return CatalogNormalizer()
        try:
            raw = json.loads(self.normalization_file.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise ValidationError(
                f"Cannot read normalization file {self.normalization_file}: {exc}"
            ) from exc
        if not isinstance(raw, dict):
            raise ValidationError(
                f"Normalization file {self.normalization_file} must hold a JSON object"
            )
        return CatalogNormalizer.with_overrides(
            brands=raw.get("brands") or {},
            types=raw.get("types") or {},
        )


def _log_level(raw: str | None) -> str:
    level = (raw or "").strip().upper()
    if level and isinstance(logging.getLevelName(level), int):
        return level
    return DEFAULT_LOG_LEVEL


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    if env is None:
        load_dotenv(find_dotenv(usecwd=True))
        env = os.environ
    data_dir = env.get("LLANTERA_DATA_DIR", "").strip()
    normalization_file = env.get("LLANTERA_NORMALIZATION_FILE", "").strip()
    return Settings(
        data_dir=Path(data_dir) if data_dir else DEFAULT_DATA_DIR,
        log_level=_log_level(env.get("LLANTERA_LOG_LEVEL")),
        normalization_file=Path(normalization_file) if normalization_file else None,
    )
