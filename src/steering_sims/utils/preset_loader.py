from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Tuple

import yaml

from steering_sims.core.config import SimConfig


@dataclass(frozen=True)
class LoadedPreset:
    preset_path: Path
    config: SimConfig
    resolved: Dict[str, Any]
    loaded_files: Tuple[Path, ...]  # includes in load order, then the preset itself


def deep_merge(base: Any, override: Any) -> Any:
    """
    Merge `override` on top of `base`.

    Mappings merge key by key, recursively. Anything else (lists included)
    is replaced wholesale by the override.
    """
    if not (isinstance(base, dict) and isinstance(override, dict)):
        return list(override) if isinstance(override, list) else override
    merged = dict(base)
    for key, value in override.items():
        merged[key] = deep_merge(merged[key], value) if key in merged else value
    return merged


def read_yaml_mapping(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"preset root must be a mapping: {path}")
    return data


def _resolve(path: Path, loaded: List[Path], stack: Tuple[Path, ...]) -> Dict[str, Any]:
    if path in stack:
        chain = " -> ".join(str(p) for p in (*stack, path))
        raise ValueError(f"circular preset include: {chain}")
    data = read_yaml_mapping(path)
    includes = data.pop("include", None) or []
    if not isinstance(includes, list) or not all(isinstance(i, str) for i in includes):
        raise ValueError(f"'include' must be a list of paths in {path}")

    merged: Dict[str, Any] = {}
    for rel in includes:
        inc = (path.parent / rel).expanduser().resolve()
        merged = deep_merge(merged, _resolve(inc, loaded, (*stack, path)))
    loaded.append(path)
    return deep_merge(merged, data)


def load_preset(preset_path: str | Path) -> LoadedPreset:
    """
    Load a YAML preset into a SimConfig.

    A preset may list other presets under `include:`; they are merged first,
    in order and recursively, and the including file's own keys win.
    """
    path = Path(preset_path).expanduser().resolve()
    loaded: List[Path] = []
    resolved = _resolve(path, loaded, ())
    return LoadedPreset(
        preset_path=path,
        config=SimConfig.from_dict(resolved),
        resolved=resolved,
        loaded_files=tuple(loaded),
    )
