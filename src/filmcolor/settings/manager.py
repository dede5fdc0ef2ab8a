"""Persisted user settings with schema validation and change callbacks."""

from __future__ import annotations

import logging
import os
import sys
from copy import deepcopy
from pathlib import Path
from typing import Any, Callable

from jsonschema import ValidationError

from ..errors import SettingsLoadError, SettingsValidationError
from ..utils.jsonio import read_json, write_json
from .schema import DEFAULT_SETTINGS, merge_with_defaults

LOGGER = logging.getLogger(__name__)

SettingsListener = Callable[[str, Any], None]

_MISSING = object()


def _config_root() -> Path:
    if os.name == "nt":
        appdata = os.environ.get("APPDATA")
        return Path(appdata) if appdata else Path.home() / "AppData" / "Roaming"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"
    xdg = os.environ.get("XDG_CONFIG_HOME")
    return Path(xdg) if xdg else Path.home() / ".config"


def default_settings_path() -> Path:
    """Return the per-user ``filmcolor/settings.json`` for this platform."""

    return _config_root() / "filmcolor" / "settings.json"


def _lookup(tree: dict[str, Any], parts: list[str]) -> Any:
    node: Any = tree
    for part in parts:
        if not isinstance(node, dict):
            return _MISSING
        node = node.get(part, _MISSING)
        if node is _MISSING:
            break
    return node


def _assign(tree: dict[str, Any], parts: list[str], value: Any) -> None:
    *parents, leaf = parts
    node = tree
    for part in parents:
        child = node.get(part)
        if not isinstance(child, dict):
            child = node[part] = {}
        node = child
    node[leaf] = value


class SettingsManager:
    """Own one settings file: load it, answer lookups, persist updates.

    Keys are dotted paths into the JSON document (``"defaults.grading.balance"``).
    Every update is validated against the settings schema before it is stored
    or written, and subscribers are told about successful updates only.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path
        self._data: dict[str, Any] = deepcopy(DEFAULT_SETTINGS)
        self._listeners: list[SettingsListener] = []

    @property
    def path(self) -> Path:
        if self._path is None:
            self._path = default_settings_path()
        return self._path

    def load(self) -> None:
        """Read the settings file, filling gaps from the defaults.

        A missing file is created with the default document.
        """

        payload: dict[str, Any] | None = None
        if self.path.exists():
            try:
                payload = read_json(self.path)
            except (OSError, ValueError) as exc:
                raise SettingsLoadError(f"cannot read {self.path}: {exc}") from exc
            if not isinstance(payload, dict):
                raise SettingsLoadError(f"{self.path} does not contain a JSON object")
        else:
            LOGGER.info("No settings at %s; writing defaults", self.path)

        try:
            self._data = merge_with_defaults(payload)
        except ValidationError as exc:
            raise SettingsValidationError(exc.message) from exc
        write_json(self.path, self._data)

    def get(self, key: str, default: Any | None = None) -> Any:
        value = _lookup(self._data, key.split("."))
        return default if value is _MISSING else value

    def set(self, key: str, value: Any) -> None:
        """Store *value* under *key*; invalid values leave the settings untouched."""

        if isinstance(value, Path):
            value = str(value)

        candidate = deepcopy(self._data)
        _assign(candidate, key.split("."), value)
        try:
            self._data = merge_with_defaults(candidate)
        except ValidationError as exc:
            raise SettingsValidationError(f"{key}: {exc.message}") from exc
        write_json(self.path, self._data)

        for listener in list(self._listeners):
            listener(key, value)

    def subscribe(self, callback: SettingsListener) -> Callable[[], None]:
        """Call *callback(key, value)* after each update; returns an unsubscriber."""

        self._listeners.append(callback)

        def _unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return _unsubscribe

    def as_dict(self) -> dict[str, Any]:
        return deepcopy(self._data)


__all__ = ["SettingsListener", "SettingsManager", "default_settings_path"]
