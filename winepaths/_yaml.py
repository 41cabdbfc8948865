"""Validate YAML files into pydantic models."""

from __future__ import annotations

from pathlib import Path
from typing import TypeVar

import yaml
from pydantic import BaseModel, ValidationError

_T = TypeVar("_T", bound=BaseModel)


def load_yaml_model(path: Path, model_cls: type[_T], error_cls: type[Exception]) -> _T:
    """Load *path* as *model_cls*, raising *error_cls* on any failure.

    An empty document validates as ``{}`` so every field keeps its default.
    """
    try:
        with path.open() as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise error_cls(f"Cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise error_cls(f"Invalid YAML in {path}: {e}") from e

    data = {} if data is None else data
    if not isinstance(data, dict):
        raise error_cls(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        return model_cls.model_validate(data)
    except ValidationError as e:
        raise error_cls(f"Validation failed for {path}:\n{e}") from e
