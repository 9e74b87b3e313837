"""YAML-based color theme for TUI Tasks.

Loads colors from default_theme.yaml and optionally merges user overrides
from {config_dir}/theme.yaml. The resulting Theme is built once at startup
and handed to the rendering layer; the core never reads it.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

THEME_FILE = "theme.yaml"
_DEFAULT_THEME_PATH = Path(__file__).parent / "default_theme.yaml"


@dataclass(frozen=True)
class Theme:
    """Rich style strings used by the widgets."""

    done: str = "grey50"
    overdue: str = "bold red"
    header: str = "bold"
    today: str = "bold yellow"
    selected: str = "reverse"
    badge: str = "cyan"
    outside_month: str = "grey42"


def _load_yaml(path: Path) -> dict:
    """Load a YAML file and return a dict (empty dict on error)."""
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return data if isinstance(data, dict) else {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("ignoring theme file %s: %s", path, e)
        return {}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (returns a new dict)."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _build(data: dict) -> Theme:
    """Map parsed YAML sections onto a Theme."""
    task = data.get("task", {}) or {}
    cal = data.get("calendar", {}) or {}
    defaults = Theme()
    return Theme(
        done=str(task.get("done", defaults.done)),
        overdue=str(task.get("overdue", defaults.overdue)),
        header=str(task.get("header", defaults.header)),
        today=str(cal.get("today", defaults.today)),
        selected=str(cal.get("selected", defaults.selected)),
        badge=str(cal.get("badge", defaults.badge)),
        outside_month=str(cal.get("outside_month", defaults.outside_month)),
    )


def load_theme(config_dir: Path | None = None) -> Theme:
    """Load the bundled theme and merge ``{config_dir}/theme.yaml`` on top."""
    data = _load_yaml(_DEFAULT_THEME_PATH)

    if config_dir is not None:
        override_path = config_dir / THEME_FILE
        if override_path.is_file():
            override = _load_yaml(override_path)
            if override:
                data = _deep_merge(data, override)

    return _build(data)


def init_theme(config_dir: Path) -> Path:
    """Copy default_theme.yaml → {config_dir}/theme.yaml.

    Raises FileExistsError if the destination already exists.
    """
    dest = config_dir / THEME_FILE
    if dest.exists():
        raise FileExistsError(str(dest))
    dest.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(_DEFAULT_THEME_PATH, dest)
    return dest
