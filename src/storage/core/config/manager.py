"""
Storage configuration management (YAML defaults, file overlays, env overrides).
"""
from __future__ import annotations

import copy
import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple, Union

import jsonschema
import yaml

from storage.core.exceptions import ConfigError
from storage.core.utils.merge import deep_merge as _deep_merge
from storage.data import read_yaml as read_data_yaml

logger = logging.getLogger(__name__)

ENV_PREFIX = "STORAGE_"

PathLike = Union[str, Path]


class ConfigManager:
    """Load, merge, and validate storage configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: STORAGE_<SECTION>__<KEY>
    2. YAML files passed as ``config_path`` (later files win)
    3. Bundled defaults: storage.data/config/defaults.yaml
    """

    def __init__(self, config_path: Optional[Union[PathLike, Sequence[PathLike]]] = None) -> None:
        if config_path is None:
            self.config_paths: List[Path] = []
        elif isinstance(config_path, (str, Path)):
            self.config_paths = [Path(config_path)]
        else:
            self.config_paths = [Path(p) for p in config_path]

    def deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge dictionaries. Delegates to shared implementation."""
        return _deep_merge(base, override)

    def load_defaults(self) -> Dict[str, Any]:
        return copy.deepcopy(read_data_yaml("config", "defaults.yaml"))

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        # Fail closed: configuration must never silently ignore invalid YAML.
        if not path.exists():
            raise ConfigError(f"config file not found: {path}", context={"path": str(path)})
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            raise ConfigError(f"invalid YAML in {path}: {exc}", context={"path": str(path)}) from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(
                f"expected a mapping at the top of {path}",
                context={"path": str(path), "type": type(data).__name__},
            )
        return data

    # ---------- Environment overrides ----------

    def _as_bool(self, v: str) -> Optional[bool]:
        low = v.strip().lower()
        if low in {"true", "false"}:
            return low == "true"
        return None

    def _as_int(self, v: str) -> Optional[int]:
        if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
            return int(v)
        return None

    def _as_float(self, v: str) -> Optional[float]:
        s = v.strip()
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        return None

    def _as_json(self, v: str) -> Optional[Any]:
        s = v.strip()
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except ValueError:
                return None
        return None

    def _coerce_type(self, value: str) -> Any:
        if value.strip().lower() in {"null", "none"}:
            return None
        for caster in (self._as_bool, self._as_int, self._as_float, self._as_json):
            result = caster(value)
            if result is not None:
                return result
        return value.strip()

    def _iter_env_overrides(self) -> Iterator[Tuple[List[str], Any]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX):
                continue
            raw = key[len(ENV_PREFIX):]
            segs = [s.lower() for s in raw.split("__")]
            if not raw or any(s == "" for s in segs):
                raise ConfigError(f"Malformed {ENV_PREFIX}* key: '{key}'", context={"key": key})
            yield segs, self._coerce_type(os.environ[key])

    def _set_nested(self, root: Dict[str, Any], path: List[str], value: Any) -> None:
        cur = root
        for part in path[:-1]:
            nxt = cur.get(part)
            if not isinstance(nxt, dict):
                nxt = {}
                cur[part] = nxt
            cur = nxt
        cur[path[-1]] = value

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> None:
        for path, typed_value in self._iter_env_overrides():
            logger.debug("config override from env: %s=%r", ".".join(path), typed_value)
            self._set_nested(cfg, path, typed_value)

    # ---------- Validation ----------

    def validate_schema(self, cfg: Dict[str, Any]) -> None:
        schema = read_data_yaml("schemas", "config.schema.yaml")
        validator = jsonschema.Draft202012Validator(schema)
        errors = sorted(validator.iter_errors(cfg), key=lambda e: list(e.path))
        if not errors:
            return
        first = errors[0]
        location = ".".join(str(p) for p in first.path) or "<root>"
        raise ConfigError(
            f"invalid configuration at {location}: {first.message}",
            context={"path": location, "errors": [e.message for e in errors]},
        )

    # ---------- Loading ----------

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Load and merge configuration from all sources (uncached).

        Layers:
            1. Bundled defaults
            2. Each file in ``config_paths``, in order
            3. Environment variable overrides (STORAGE_*)

        Raises:
            ConfigError: If a file is unreadable or validation fails
        """
        cfg = self.load_defaults()
        for path in self.config_paths:
            cfg = self.deep_merge(cfg, self.load_yaml(path))
        self.apply_env_overrides(cfg)
        if validate:
            self.validate_schema(cfg)
        return cfg


__all__ = ["ConfigManager", "ENV_PREFIX"]
