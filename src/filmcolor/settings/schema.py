"""Schema helpers for the settings file and parameter documents."""

from __future__ import annotations

from copy import deepcopy
from typing import Any

from jsonschema import Draft202012Validator

from ..config import BACKENDS, DEFAULT_BACKEND

_SHIFT = {"type": "number", "minimum": -100, "maximum": 100}
_OFFSET = {
    "type": "array",
    "items": {"type": "number", "minimum": -1, "maximum": 1},
    "minItems": 3,
    "maxItems": 3,
}

WHITE_BALANCE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "temperature": _SHIFT,
        "tint": _SHIFT,
    },
    "additionalProperties": False,
}

GRADING_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "shadow": _OFFSET,
        "midtone": _OFFSET,
        "highlight": _OFFSET,
        "blending": {"type": "number", "minimum": 0, "maximum": 1},
        "balance": {"type": "number", "minimum": -1, "maximum": 1},
    },
    "additionalProperties": False,
}

_REGION_SLIDERS = {
    "type": "object",
    "properties": {"temperature": _SHIFT, "tint": _SHIFT},
    "additionalProperties": False,
}

REGIONS_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "shadow": _REGION_SLIDERS,
        "midtone": _REGION_SLIDERS,
        "highlight": _REGION_SLIDERS,
        "blending": {"type": "number", "minimum": 0, "maximum": 100},
        "balance": {"type": "number", "minimum": -100, "maximum": 100},
    },
    "additionalProperties": False,
}

# Parameter documents grade either with raw offsets or with a ``regions``
# slider block, never both.
PARAMETER_GRADING_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {**GRADING_SCHEMA["properties"], "regions": REGIONS_SCHEMA},
    "additionalProperties": False,
    "dependentSchemas": {
        "regions": {
            "not": {
                "anyOf": [
                    {"required": [key]}
                    for key in ("shadow", "midtone", "highlight", "blending", "balance")
                ]
            }
        }
    },
}

SETTINGS_SCHEMA: dict[str, Any] = {
    "$id": "filmcolor/settings.schema.json",
    "type": "object",
    "required": ["schema", "backend", "log_level", "defaults"],
    "properties": {
        "schema": {"const": "filmcolor/settings@1"},
        "backend": {"type": "string", "enum": list(BACKENDS)},
        "log_level": {
            "type": "string",
            "enum": ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        },
        "defaults": {
            "type": "object",
            "properties": {
                "white_balance": WHITE_BALANCE_SCHEMA,
                "grading": GRADING_SCHEMA,
            },
            "additionalProperties": True,
        },
    },
    "additionalProperties": True,
}

PARAMETERS_SCHEMA: dict[str, Any] = {
    "$id": "filmcolor/parameters.schema.json",
    "type": "object",
    "properties": {
        "white_balance": WHITE_BALANCE_SCHEMA,
        "grading": PARAMETER_GRADING_SCHEMA,
    },
    "additionalProperties": False,
}

DEFAULT_SETTINGS: dict[str, Any] = {
    "schema": "filmcolor/settings@1",
    "backend": DEFAULT_BACKEND,
    "log_level": "WARNING",
    "defaults": {
        "white_balance": {"temperature": 0.0, "tint": 0.0},
        "grading": {
            "shadow": [0.0, 0.0, 0.0],
            "midtone": [0.0, 0.0, 0.0],
            "highlight": [0.0, 0.0, 0.0],
            "blending": 1.0,
            "balance": 0.0,
        },
    },
}

_validator = Draft202012Validator(SETTINGS_SCHEMA)
_parameters_validator = Draft202012Validator(PARAMETERS_SCHEMA)


def _deep_merge(target: dict[str, Any], source: dict[str, Any]) -> None:
    for key, value in source.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            _deep_merge(target[key], value)
        else:
            target[key] = deepcopy(value)


def merge_with_defaults(data: dict[str, Any] | None) -> dict[str, Any]:
    """Merge *data* with :data:`DEFAULT_SETTINGS` and validate the result."""

    merged = deepcopy(DEFAULT_SETTINGS)
    if data:
        _deep_merge(merged, data)
    if isinstance(merged.get("log_level"), str):
        merged["log_level"] = merged["log_level"].upper()
    _validator.validate(merged)
    return merged


def validate_settings(data: dict[str, Any]) -> None:
    """Validate *data* against the settings schema."""

    _validator.validate(data)


def validate_parameters(data: dict[str, Any]) -> None:
    """Validate a white-balance/grading parameter document."""

    _parameters_validator.validate(data)


__all__ = [
    "DEFAULT_SETTINGS",
    "GRADING_SCHEMA",
    "PARAMETERS_SCHEMA",
    "SETTINGS_SCHEMA",
    "WHITE_BALANCE_SCHEMA",
    "merge_with_defaults",
    "validate_parameters",
    "validate_settings",
]
