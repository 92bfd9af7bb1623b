"""Generator configuration.

Defaults match the layout of the Alpaca generator directory; a YAML file and
the ``ALPACA_CODEGEN_FORMATTER`` environment variable can override them.
"""

import os
import shlex
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ValidationError

from alpaca_codegen.errors import CodegenError

FORMATTER_ENV = "ALPACA_CODEGEN_FORMATTER"


class GeneratorConfig(BaseModel):
    """Settings for one generation run."""

    api_path: Path = Path("AlpacaDeviceAPI_v1.yaml")
    names_path: Path | None = None  # ASCOM simulators XML docs
    output_path: Path = Path("AlpacaDeviceAPI_v1.normalized.json")
    output_format: Literal["json", "yaml"] = "json"
    formatter: list[str] = ["rustfmt", "+nightly", "--edition=2021"]
    merge_duplicates: bool = False
    verbose: bool = False


def load_config(config_path: Path | None = None) -> GeneratorConfig:
    """Load settings from an optional YAML file, then apply env overrides."""
    data: dict = {}
    if config_path is not None:
        try:
            data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise CodegenError(f"Invalid config file {config_path}: {e}") from e
        if not isinstance(data, dict):
            raise CodegenError(f"Config file {config_path} must contain a mapping")

    formatter = os.getenv(FORMATTER_ENV)
    if formatter:
        data["formatter"] = shlex.split(formatter)

    try:
        return GeneratorConfig(**data)
    except ValidationError as e:
        raise CodegenError(f"Invalid configuration: {e}") from e
