import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field

from patchxref.rendering.base import RenderConfig

logger = logging.getLogger(__name__)

ENV_MAX_PATCHES = "PATCHXREF_MAX_PATCHES"
ENV_CONTEXT_LINES = "PATCHXREF_CONTEXT_LINES"
ENV_ENCODING = "PATCHXREF_ENCODING"
ENV_LOG_LEVEL = "PATCHXREF_LOG_LEVEL"


class PatchXrefConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    max_patch_sets: int = Field(default=5, ge=1)
    context_lines: int = Field(default=3, ge=0)
    encoding: str = "utf-8"
    log_level: str = "WARNING"
    render: RenderConfig = Field(default_factory=RenderConfig)


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r", name, value)
        return default


def read_config_file(path: Path) -> dict[str, Any]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(path)
    with path.open("r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ValueError(f"{path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a mapping, got {type(data).__name__}")
    return data


def load_config(path: Path | None = None) -> PatchXrefConfig:
    """Build the config from an optional YAML file, then environment overrides."""
    raw: dict[str, Any] = read_config_file(path) if path is not None else {}
    config = PatchXrefConfig(**raw)

    overrides: dict[str, Any] = {
        "max_patch_sets": _env_int(ENV_MAX_PATCHES, config.max_patch_sets),
        "context_lines": _env_int(ENV_CONTEXT_LINES, config.context_lines),
        "encoding": os.getenv(ENV_ENCODING) or config.encoding,
        "log_level": os.getenv(ENV_LOG_LEVEL) or config.log_level,
    }
    return PatchXrefConfig(**{**config.model_dump(), **overrides})
