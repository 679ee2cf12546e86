"""OpenAPI document loader.

Reads YAML or JSON files (JSON is a YAML subset) into a plain mapping tree.
"""

from pathlib import Path
from typing import Any

import yaml


class SpecLoadError(Exception):
    """The file could not be read or parsed."""


def load_spec(file_path: Path) -> Any:
    """Parse an OpenAPI/Swagger file and return the raw document tree."""
    try:
        text = Path(file_path).read_text(encoding="utf-8")
    except OSError as e:
        raise SpecLoadError(f"Cannot read {file_path}: {e}") from e
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise SpecLoadError(f"Error parsing {file_path}: {e}") from e
