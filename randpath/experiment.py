"""YAML experiment files for trend runs.

An experiment file has two optional top-level sections mapping onto
``GeneratorConfig`` and ``TrendConfig``::

    generator:
      node_count: 10
      segment_length: 100
      margin_length: 10
      method: constrained
      order: random_order
    trend:
      max_iterations: 1000
      delta: 10
      metric: manhattan
      notes: baseline
    seed: 5

Structure and value types are checked against the packaged
``randpath/schemas/experiment.json`` before any config object is built.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from importlib import resources
from typing import Any, Dict, Optional, Type, TypeVar

import jsonschema
import yaml

from randpath.config import GeneratorConfig, TrendConfig
from randpath.types.base import AllocationOrder, DistanceMetric, Method

C = TypeVar("C", GeneratorConfig, TrendConfig)

_ENUM_FIELDS = {
    "method": Method,
    "order": AllocationOrder,
    "metric": DistanceMetric,
}


@dataclass
class Experiment:
    """Parsed experiment file."""

    generator: GeneratorConfig
    trend: TrendConfig
    seed: Optional[int] = None


def _load_schema() -> Dict[str, Any]:
    try:
        with (
            resources.files("randpath.schemas")
            .joinpath("experiment.json")
            .open("r", encoding="utf-8")
        ) as f:  # type: ignore[attr-defined]
            return json.load(f)
    except Exception as exc:  # pragma: no cover
        raise RuntimeError(
            "Failed to locate packaged experiment schema 'randpath/schemas/experiment.json'."
        ) from exc


def _build(cls: Type[C], section: Optional[Dict[str, Any]]) -> C:
    if section is None:
        return cls()
    kwargs: Dict[str, Any] = {}
    for key, value in section.items():
        enum_cls = _ENUM_FIELDS.get(key)
        if enum_cls is not None:
            value = enum_cls.from_string(value)
        kwargs[key] = value
    return cls(**kwargs)


def load_experiment_yaml(yaml_str: str) -> Experiment:
    """Parse and validate an experiment YAML string.

    Raises:
        ValueError: If the document is not a mapping or fails schema validation.
        InvalidParameterError: If the resulting configuration is unusable.
    """
    data = yaml.safe_load(yaml_str)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("The provided YAML must map to a dictionary at top-level.")

    try:
        jsonschema.validate(data, _load_schema())
    except jsonschema.ValidationError as exc:
        location = ".".join(str(p) for p in exc.absolute_path) or "<root>"
        raise ValueError(f"Invalid experiment at '{location}': {exc.message}") from exc

    generator = _build(GeneratorConfig, data.get("generator"))
    trend = _build(TrendConfig, data.get("trend"))
    generator.validate()
    trend.validate()
    return Experiment(generator=generator, trend=trend, seed=data.get("seed"))
