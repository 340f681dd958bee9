"""
Config loading and views for mxm-rfr.

- load_config(path, overrides): package defaults + user YAML + dot-list overrides
- eiopa_view(cfg):              settings for the EIOPA source
- eiopa_http_view(cfg):         HTTP adapter settings
- eiopa_paths(cfg):             resolved cache/log directories as Paths
- selection_upper_limit(cfg, n): CLI value if given, else the configured limit
- ensure_eiopa_config(cfg):     fail fast on missing keys
"""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path
from typing import Any, Iterable, Optional, Sequence

from omegaconf import DictConfig, OmegaConf

DEFAULT_CONFIG_PATH = Path(__file__).with_name("default.yaml")
SOURCE_EIOPA = "eiopa"


class ConfigError(RuntimeError):
    pass


def load_config(
    path: Optional[Path] = None,
    overrides: Optional[Sequence[str]] = None,
) -> DictConfig:
    """Compose the read-only config tree.

    Layers, later wins: package ``default.yaml``, the optional YAML at `path`,
    then dot-list `overrides` such as ``"sources.eiopa.selection.upper_limit=90"``.
    """
    layers: list[Any] = [OmegaConf.load(DEFAULT_CONFIG_PATH)]
    if path is not None:
        if not path.is_file():
            raise ConfigError(f"Config file not found: {path}")
        user = OmegaConf.load(path)
        if not isinstance(user, DictConfig):
            raise ConfigError(f"Config root must be a mapping: {path}")
        layers.append(user)
    if overrides:
        layers.append(OmegaConf.from_dotlist(list(overrides)))
    cfg = OmegaConf.merge(*layers)
    if not isinstance(cfg, DictConfig):
        raise ConfigError("Config root must be a mapping")
    OmegaConf.set_readonly(cfg, True)
    return cfg


def make_view(cfg: DictConfig, key: str, *, resolve: bool = True) -> DictConfig:
    """Read-only subtree of `cfg` at dotted `key`, interpolations resolved."""
    node = OmegaConf.select(cfg, key)
    if not isinstance(node, DictConfig):
        raise ConfigError(f"Missing config section: {key}")
    view = OmegaConf.create(OmegaConf.to_container(node, resolve=resolve))
    OmegaConf.set_readonly(view, True)
    return view


def eiopa_view(cfg: DictConfig, *, resolve: bool = True) -> DictConfig:
    """Read-only view rooted at `sources.eiopa`."""
    return make_view(cfg, "sources.eiopa", resolve=resolve)


def eiopa_http_view(cfg: DictConfig, *, resolve: bool = True) -> DictConfig:
    """Read-only view rooted at `sources.eiopa.http`."""
    return make_view(cfg, "sources.eiopa.http", resolve=resolve)


@dc.dataclass(frozen=True)
class EiopaPaths:
    root: Path
    download_dir: Path
    excel_dir: Path
    logs_dir: Path


def eiopa_paths(cfg: DictConfig) -> EiopaPaths:
    """Directory layout for the EIOPA source (directories are not created)."""
    v = eiopa_view(cfg)
    return EiopaPaths(
        root=Path(v.root),
        download_dir=Path(v.download_dir),
        excel_dir=Path(v.excel_dir),
        logs_dir=Path(v.logs_dir),
    )


def selection_upper_limit(cfg: DictConfig, override: Optional[int] = None) -> int:
    """`override` when given (0 included, so bounds checks still see it), else
    `sources.eiopa.selection.upper_limit`."""
    if override is not None:
        return override
    return int(eiopa_view(cfg).selection.upper_limit)


def _must_have(d: Any, path: str, keys: Iterable[str]) -> None:
    missing = [k for k in keys if k not in d]
    if missing:
        raise ConfigError(f"Missing keys at {path}: {', '.join(missing)}")


def ensure_eiopa_config(cfg: DictConfig) -> None:
    e = eiopa_view(cfg)
    _must_have(
        e,
        "sources.eiopa",
        (
            "root",
            "download_dir",
            "excel_dir",
            "logs_dir",
            "pages",
            "http",
            "archive",
            "worksheet",
            "selection",
        ),
    )
    _must_have(e.http, "sources.eiopa.http", ("user_agent", "default_timeout"))
    _must_have(e.archive, "sources.eiopa.archive", ("member_pattern",))
    _must_have(e.worksheet, "sources.eiopa.worksheet", ("sheet_name", "cell_range"))
    _must_have(e.selection, "sources.eiopa.selection", ("upper_limit",))
    if len(e.pages) == 0:
        raise ConfigError("sources.eiopa.pages must list at least one page")


__all__ = [
    "DEFAULT_CONFIG_PATH",
    "SOURCE_EIOPA",
    "ConfigError",
    "load_config",
    "make_view",
    "eiopa_view",
    "eiopa_http_view",
    "EiopaPaths",
    "eiopa_paths",
    "selection_upper_limit",
    "ensure_eiopa_config",
]
