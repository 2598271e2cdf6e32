from __future__ import annotations

import json
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, Optional

from pyhdrio.utils.optional_deps import require
from pyhdrio.utils.param_check import check_n_jobs, check_parameter

EXR_COMPRESSIONS = ("none", "zip", "zips", "piz")


def load_config(path: str | Path) -> dict[str, Any]:
    """Load a settings file into a Python dict.

    Supported formats:
    - JSON (.json) always
    - YAML (.yml/.yaml) only when PyYAML is installed
    """

    config_path = Path(path)
    suffix = str(config_path.suffix).lower()

    if suffix == ".json":
        with config_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    elif suffix in (".yml", ".yaml"):
        yaml = require("yaml", extra="yaml", purpose="YAML settings files (PyYAML)")

        with config_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    else:
        raise ValueError(
            f"Unsupported config extension: {suffix!r} for {str(config_path)!r}. "
            "Supported: .json, .yml, .yaml."
        )

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ValueError(
            "Config must be an object/dict at the top level, "
            f"got {type(data).__name__} from {str(config_path)!r}."
        )

    return dict(data)


@dataclass(frozen=True)
class Settings:
    """Runtime knobs for the exposure estimator and the EXR codec.

    n_jobs:
        Worker threads for the exposure reduction (joblib semantics; ``1``
        runs in the calling thread, ``-1`` uses every core).
    rows_per_chunk:
        Rows per reduction chunk. ``None`` splits the image evenly across
        workers.
    exr_compression:
        One of ``none``, ``zip``, ``zips``, ``piz``.
    """

    n_jobs: int = 1
    rows_per_chunk: Optional[int] = None
    exr_compression: str = "zip"

    def __post_init__(self) -> None:
        check_n_jobs(self.n_jobs)
        if self.rows_per_chunk is not None:
            check_parameter(self.rows_per_chunk, 1, param_name="rows_per_chunk", integer=True)
        if self.exr_compression not in EXR_COMPRESSIONS:
            raise ValueError(
                f"Unknown exr_compression: {self.exr_compression!r}. "
                f"Choose from: {', '.join(EXR_COMPRESSIONS)}."
            )

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "Settings":
        known = {f.name for f in fields(cls)}
        unknown = sorted(str(k) for k in payload.keys() if k not in known)
        if unknown:
            raise ValueError(f"Unknown settings key(s): {', '.join(unknown)}")
        try:
            return cls(**dict(payload))
        except TypeError as exc:
            raise ValueError(f"Invalid settings value: {exc}") from exc


def load_settings(path: str | Path) -> Settings:
    return Settings.from_mapping(load_config(path))


_settings = Settings()


def get_settings() -> Settings:
    return _settings


def set_settings(settings: Optional[Settings] = None, **overrides: Any) -> Settings:
    """Replace the process-wide defaults, returning the previous settings.

    Either pass a full :class:`Settings` or keyword overrides applied on top
    of the current ones.
    """

    global _settings
    previous = _settings
    base = settings if settings is not None else _settings
    _settings = replace(base, **overrides) if overrides else base
    return previous
