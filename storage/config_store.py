"""Save, load, export and import named planner configurations.

A configuration is the saved form of a layout: placed tiles, the city-name
list, and the distance colour scale bounds. ``ConfigurationStore`` stores
each one as a JSON document under its name in a ``KeyValueStore``. Two
backends are provided:

  * ``MemoryStore`` — a dict, for tests and throwaway sessions.
  * ``JsonDirectoryStore`` — one ``<name>.json`` file per configuration in a
    directory, created on first write.

Anything offering ``get``/``set``/``list``/``delete`` over strings can be
swapped in (browser storage bridge, remote store, ...).

Legacy data: early saves encoded ``placedTiles`` as a JSON string inside the
document. ``load`` decodes it and writes the upgraded document back so the
migration happens once per configuration.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

from planner.types import (
    DEFAULT_COLOR_SCALE_MAX,
    DEFAULT_COLOR_SCALE_MIN,
    Configuration,
)

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None:
        """Stored value, or None if ``key`` is absent."""
        ...

    def set(self, key: str, value: str) -> None: ...

    def list(self) -> list[str]:
        """All keys, in insertion order where the backend has one."""
        ...

    def delete(self, key: str) -> None:
        """Remove ``key``; absent keys are ignored."""
        ...


class MemoryStore:
    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def list(self) -> list[str]:
        return list(self._data)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class JsonDirectoryStore:
    """Keys map to ``<root>/<key>.json``; keys are listed sorted."""

    SUFFIX = ".json"

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)

    def _path(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key in (".", ".."):
            raise ValueError(f"Invalid configuration key: {key!r}")
        return self.root / f"{key}{self.SUFFIX}"

    def get(self, key: str) -> str | None:
        path = self._path(key)
        if not path.is_file():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(value, encoding="utf-8")

    def list(self) -> list[str]:
        if not self.root.is_dir():
            return []
        return sorted(p.stem for p in self.root.glob(f"*{self.SUFFIX}"))

    def delete(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


class ConfigurationStore:
    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def save(self, name: str, config: Configuration | dict) -> None:
        """Write ``config`` under ``name``, replacing any previous one.

        Dicts are stored as given apart from defaulting missing colour
        bounds; ``Configuration`` objects are serialised with ``to_dict``.
        """
        if isinstance(config, Configuration):
            data = config.to_dict()
        else:
            data = dict(config)
            if data.get("colorMin") is None:
                data["colorMin"] = DEFAULT_COLOR_SCALE_MIN
            if data.get("colorMax") is None:
                data["colorMax"] = DEFAULT_COLOR_SCALE_MAX
        self.store.set(name, json.dumps(data))
        logger.info("Saved configuration %r", name)

    def load(self, name: str) -> Configuration | None:
        """Load ``name``, or None if it doesn't exist.

        Raises ValueError (including json.JSONDecodeError) if the stored
        document is malformed, or KeyError if a tile lacks a required
        field.
        """
        raw = self.store.get(name)
        if raw is None:
            return None
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError(f"Configuration {name!r} is not a JSON object")

        legacy = isinstance(data.get("placedTiles"), str)
        config = Configuration.from_dict(data)
        if legacy:
            logger.info(
                "Upgrading configuration %r: decoding string placedTiles", name
            )
            self.save(name, config)
        return config

    def list_names(self) -> list[str]:
        return self.store.list()

    def delete(self, name: str) -> None:
        self.store.delete(name)
        logger.info("Deleted configuration %r", name)

    def export(self, name: str) -> str | None:
        """Pretty-printed JSON of the stored document, or None."""
        raw = self.store.get(name)
        if raw is None:
            return None
        return json.dumps(json.loads(raw), indent=2)

    def import_(self, name: str, text: str) -> bool:
        """Validate and save a configuration from JSON text.

        Returns False (and logs why) if ``text`` is not a usable
        configuration; nothing is written in that case.
        """
        try:
            data = json.loads(text)
            if not isinstance(data, dict):
                raise ValueError("top-level JSON value is not an object")
            config = Configuration.from_dict(data)
        except (ValueError, KeyError, TypeError) as e:
            logger.warning("Failed to import configuration %r: %s", name, e)
            return False
        self.save(name, config)
        return True
