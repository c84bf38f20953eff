"""Loading of ``config/app.yaml``.

String values may reference the environment as ``${VAR}`` (required) or
``${VAR:-default}``. Interpolation runs on the parsed tree, so an
environment value can never change the YAML structure.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")


def _env_value(match: re.Match[str]) -> str:
    name, default = match.group(1), match.group(2)
    value = os.environ.get(name, default)
    if value is None:
        raise ValueError(f"Environment variable '{name}' is not set and no default provided")
    return value


def interpolate_env_vars(value: Any) -> Any:
    """Replace environment references in every string of a parsed YAML tree.

    Raises:
        ValueError: A referenced variable is unset and has no default.
    """
    if isinstance(value, str):
        return ENV_VAR_PATTERN.sub(_env_value, value)
    if isinstance(value, dict):
        return {key: interpolate_env_vars(item) for key, item in value.items()}
    if isinstance(value, list):
        return [interpolate_env_vars(item) for item in value]
    return value


def load_yaml_config(config_path: Path) -> dict[str, Any]:
    """Parse a YAML mapping and interpolate its environment references.

    An empty file yields ``{}``. A missing file, a YAML syntax error, a
    document that is not a mapping and an unset required variable all
    raise; the caller decides whether to fall back to defaults.
    """
    document = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if document is None:
        logger.warning("Configuration file %s is empty", config_path)
        return {}
    if not isinstance(document, dict):
        raise ValueError(f"Expected mapping in {config_path}, got {type(document).__name__}")

    logger.debug("Parsed %s: sections %s", config_path, sorted(document))
    return interpolate_env_vars(document)
