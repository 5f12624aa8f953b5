"""Config loading — reads questionnaire files into typed ``WizardConfig`` models.

Both YAML (``.yaml`` / ``.yml``) and JSON files are supported.  Relative
paths resolve against ``WIZARD_CONFIG_DIR`` when that env var is set.

Usage::

    config = load_config("trip_planner.yaml")
    engine = WizardEngine(config)
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from wizarding import constants
from wizarding.models.config import WizardConfig

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = {".yaml", ".yml"}


def resolve_path(path: Path | str) -> Path:
    """Resolve ``path`` against the configured config directory, if any."""
    path = Path(path)
    if not path.is_absolute() and constants.CONFIG_DIR:
        path = Path(constants.CONFIG_DIR) / path
    return path


def load_file(path: Path | str) -> Any:
    """Load a single YAML or JSON file and return the parsed contents.

    Raises:
        FileNotFoundError: if the file does not exist
        ValueError: if the suffix is neither YAML nor JSON
    """
    path = resolve_path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing config file: {path}")

    suffix = path.suffix.lower()
    with path.open("r", encoding="utf-8") as f:
        if suffix in _YAML_SUFFIXES:
            return yaml.safe_load(f)
        if suffix == ".json":
            return json.load(f)
    raise ValueError(f"Unsupported config format '{suffix}' for {path}")


def load_config(path: Path | str) -> WizardConfig:
    """Parse a questionnaire file into a validated ``WizardConfig``.

    Raises:
        FileNotFoundError: if the file does not exist
        ValueError: on unsupported format
        pydantic.ValidationError: if the contents do not match the schema
            (including duplicate question ids)
    """
    raw = load_file(path)
    config = WizardConfig.model_validate(raw)
    logger.info(
        "Loaded wizard '%s' from %s: %d top-level questions",
        config.wizard_id,
        path,
        len(config.questions),
    )
    return config
