from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Union

import json
import yaml

from .errors import ConfigError, UnsupportedAlgorithmError
from .pipelines.hashing import AlgorithmKind
from .pipelines.sampling import RESAMPLE_FILTERS

BACKENDS = ("bktree", "linear")
CACHE_POLICIES = ("lazy", "eager")


@dataclass
class PhashTreeConfig:
    # Hashing
    default_algorithm: str = "phash"  # "phash" | "dhash" | "blockhash"
    resample: str = "lanczos"  # Pillow filter used by the sampler

    # Search
    max_distance: int = 10

    # Index
    backend: str = "bktree"  # "bktree" | "linear"
    cache_policy: str = "lazy"  # "lazy" (rebuild when cold) | "eager"
    thread_safe: bool = True

    extra: Dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def presets_dir() -> Path:
        return Path(__file__).parent / "presets"

    @classmethod
    def load_preset(cls, name: str) -> "PhashTreeConfig":
        p = cls.presets_dir() / f"{name}.yaml"
        if not p.exists():
            raise ConfigError(f"Preset not found: {name} ({p})")
        return cls.from_yaml(p)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "PhashTreeConfig":
        p = Path(path)
        try:
            data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot read config {p}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError("Config YAML must be a mapping")
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "PhashTreeConfig":
        # Allow unknown keys in extra
        known = {f.name for f in cls.__dataclass_fields__.values()}  # type: ignore[attr-defined]
        base = {k: v for k, v in d.items() if k in known and k != "extra"}
        extra = {k: v for k, v in d.items() if k not in known}
        cfg = cls(**base)  # type: ignore[arg-type]
        cfg.extra.update(d.get("extra") or {})
        cfg.extra.update(extra)
        cfg.validate()
        return cfg

    def validate(self) -> None:
        try:
            AlgorithmKind.coerce(self.default_algorithm)
        except UnsupportedAlgorithmError as e:
            raise ConfigError(f"default_algorithm: {e}") from e
        if self.backend not in BACKENDS:
            raise ConfigError(f"backend must be one of {BACKENDS}, got {self.backend!r}")
        if self.cache_policy not in CACHE_POLICIES:
            raise ConfigError(
                f"cache_policy must be one of {CACHE_POLICIES}, got {self.cache_policy!r}"
            )
        if self.resample not in RESAMPLE_FILTERS:
            raise ConfigError(
                f"resample must be one of {sorted(RESAMPLE_FILTERS)}, got {self.resample!r}"
            )
        if isinstance(self.max_distance, bool) or not isinstance(self.max_distance, int):
            raise ConfigError("max_distance must be an integer")
        if not 0 <= self.max_distance <= 64:
            raise ConfigError(f"max_distance must be within [0, 64], got {self.max_distance}")

    def to_dict(self) -> Dict[str, Any]:
        d = {k: getattr(self, k) for k in self.__dataclass_fields__.keys()}  # type: ignore[attr-defined]
        return d

    def save_json(self, path: Path) -> None:
        path = Path(path)
        path.write_text(json.dumps(self.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
