# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Layered configuration with YAML/TOML files, env vars, and dataclass binding."""

from __future__ import annotations

import dataclasses
import importlib.resources
import os
import re
import tomllib
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar, get_args, get_type_hints

import yaml  # type: ignore[import-untyped]

T = TypeVar("T")

_PLACEHOLDER_RE = re.compile(r"\$\{([^}]+)\}")

_CONFIG_PROPERTIES_ATTR = "__cacheman_config_prefix__"

_ENV_PREFIX = "CACHEMAN_"

_DEFAULTS_SOURCE = "cacheman-defaults.yaml (packaged defaults)"


def config_properties(prefix: str) -> Callable[[type[T]], type[T]]:
    """Mark a dataclass as bindable to a configuration prefix.

    Usage:
        @config_properties(prefix="cacheman.store")
        @dataclass
        class StoreProperties:
            prefix: str = "cacheman:"
    """

    def decorator(cls: type[T]) -> type[T]:
        setattr(cls, _CONFIG_PROPERTIES_ATTR, prefix)
        return cls

    return decorator


class Config:
    """Hierarchical configuration with dot-notation access and env var overrides.

    Priority (highest wins):
    1. Environment variables (CACHEMAN_SECTION_KEY format)
    2. Configuration dict / YAML / TOML file values
    3. Dataclass defaults
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}
        self._loaded_sources: list[str] = []

    @property
    def loaded_sources(self) -> list[str]:
        """Config sources that were merged, in merge order."""
        return list(self._loaded_sources)

    @classmethod
    def from_sources(
        cls,
        base_dir: str | Path,
        active_profiles: list[str] | None = None,
        load_defaults: bool = True,
    ) -> Config:
        """Load and merge config from the packaged defaults and *base_dir*.

        Merge order (later wins): packaged defaults, ``config/cacheman.*``,
        ``cacheman.*``, then ``cacheman-{profile}.*`` from both directories
        for each active profile. Environment variables apply at read time.
        """
        base_dir = Path(base_dir)
        stems = ["cacheman", *(f"cacheman-{profile}" for profile in active_profiles or [])]

        instance = cls(_load_packaged_defaults() if load_defaults else {})
        if load_defaults:
            instance._loaded_sources.append(_DEFAULTS_SOURCE)

        for stem in stems:
            for search_dir in (base_dir / "config", base_dir):
                for ext in (".yaml", ".toml"):
                    candidate = search_dir / f"{stem}{ext}"
                    if candidate.is_file():
                        instance._merge_file(candidate)
        return instance

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        active_profiles: list[str] | None = None,
        load_defaults: bool = True,
    ) -> Config:
        """Load configuration from a YAML or TOML file.

        A file named ``cacheman.*`` delegates to :meth:`from_sources` so the
        ``config/`` directory and profile overlays beside it are honoured.
        Any other file is merged alone over the packaged defaults.
        """
        path = Path(path)
        if path.stem == "cacheman":
            return cls.from_sources(path.parent, active_profiles, load_defaults)

        instance = cls(_load_packaged_defaults() if load_defaults else {})
        if load_defaults:
            instance._loaded_sources.append(_DEFAULTS_SOURCE)
        if path.is_file():
            instance._merge_file(path)
        return instance

    def _merge_file(self, path: Path) -> None:
        if path.suffix == ".toml":
            with open(path, "rb") as f:
                loaded = tomllib.load(f) or {}
        else:
            with open(path) as f:
                loaded = yaml.safe_load(f) or {}
        self._data = _deep_merge(self._data, loaded)
        self._loaded_sources.append(str(path))

    def _lookup(self, key: str) -> Any:
        """Walk the raw data along a dotted key; ``None`` when absent."""
        current: Any = self._data
        for part in key.split("."):
            if not isinstance(current, dict):
                return None
            current = current.get(part)
        return current

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dot-notation key, checking env vars first.

        String values may hold ``${ENV_VAR}``, ``${config.key}`` or
        ``${key:default}`` placeholders; they are resolved on read.
        """
        # cacheman.store.prefix -> CACHEMAN_STORE_PREFIX
        env_key = _ENV_PREFIX + key.removeprefix("cacheman.").upper().replace(".", "_").replace("-", "_")
        env_val = os.environ.get(env_key)
        if env_val is not None:
            return env_val

        value = self._lookup(key)
        if value is None:
            return default
        if isinstance(value, str) and "${" in value:
            return self._resolve_placeholders(value)
        return value

    def _resolve_placeholders(self, value: str, _depth: int = 0) -> str:
        if _depth > 10:
            raise ValueError(
                f"Max recursion depth exceeded resolving placeholders in '{value}'. Check for circular references."
            )

        def _replace(match: re.Match[str]) -> str:
            ref_key, sep, fallback = match.group(1).partition(":")

            env_val = os.environ.get(ref_key)
            if env_val is not None:
                return env_val

            referenced = self._lookup(ref_key)
            if referenced is not None:
                resolved = str(referenced)
                if "${" in resolved:
                    resolved = self._resolve_placeholders(resolved, _depth + 1)
                return resolved

            if sep:
                return fallback
            raise ValueError(f"Cannot resolve placeholder '{match.group(0)}': not found in environment or config")

        return _PLACEHOLDER_RE.sub(_replace, value)

    def get_section(self, prefix: str) -> dict[str, Any]:
        """Get all values under a prefix as a dict."""
        section = self._lookup(prefix)
        return section if isinstance(section, dict) else {}

    def bind(self, config_cls: type[T]) -> T:
        """Bind configuration to a @config_properties dataclass.

        Each field is read through :meth:`get`, so environment overrides and
        placeholders apply. String values are coerced to the field's
        ``int``/``float``/``bool`` type.
        """
        prefix = getattr(config_cls, _CONFIG_PROPERTIES_ATTR, None)
        if prefix is None:
            raise ValueError(f"{config_cls.__name__} is not decorated with @config_properties")

        hints = get_type_hints(config_cls)
        kwargs: dict[str, Any] = {}
        for field in dataclasses.fields(config_cls):  # type: ignore[arg-type]
            value = self.get(f"{prefix}.{field.name}")
            if value is None:
                continue
            kwargs[field.name] = _coerce(value, hints.get(field.name))

        return config_cls(**kwargs)


def _coerce(value: Any, expected_type: Any) -> Any:
    """Coerce a string value to the scalar type a field expects."""
    if not isinstance(value, str):
        return value
    # int | None -> int
    args = [a for a in get_args(expected_type) if a is not type(None)]
    if len(args) == 1:
        expected_type = args[0]
    if expected_type is int:
        return int(value)
    if expected_type is float:
        return float(value)
    if expected_type is bool:
        return value.lower() in ("true", "1", "yes")
    return value


def _load_packaged_defaults() -> dict[str, Any]:
    defaults_file = importlib.resources.files("cacheman.resources").joinpath("cacheman-defaults.yaml")
    with importlib.resources.as_file(defaults_file) as p, open(p) as f:
        return yaml.safe_load(f) or {}


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override into base, with override values winning."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged
