"""Application configuration management using tomlkit."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import tomlkit

from tui_tasks.filters import DEFAULT_FILTER, FILTER_PRESETS
from tui_tasks.models import DATE_FORMAT_PRESETS, DEFAULT_DATE_FORMAT

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".tui-tasks"
CONFIG_FILE = "config.toml"
DATA_FILE = "tasks.json"


@dataclass
class AppConfig:
    """Settings stored in <config_dir>/config.toml."""

    config_dir: Path = field(default_factory=lambda: DEFAULT_CONFIG_DIR)
    data_file: Path | None = None
    default_filter: str = DEFAULT_FILTER
    date_format: str = DEFAULT_DATE_FORMAT
    show_footer: bool = True

    @property
    def data_path(self) -> Path:
        """Resolved task file: explicit data_file or <config_dir>/tasks.json."""
        if self.data_file is not None:
            return self.data_file
        return self.config_dir / DATA_FILE


def _get_config_path(config_dir: Path) -> Path:
    return config_dir / CONFIG_FILE


def load_config(config_dir: Path = DEFAULT_CONFIG_DIR) -> AppConfig:
    """Load configuration; a missing or broken file yields defaults."""
    config = AppConfig(config_dir=config_dir)
    config_path = _get_config_path(config_dir)

    if not config_path.exists():
        return config

    try:
        content = config_path.read_text(encoding="utf-8")
        doc = tomlkit.parse(content)
    except Exception as e:
        logger.warning("ignoring unreadable config %s: %s", config_path, e)
        return config

    app_section = doc.get("app", {})

    raw_data = app_section.get("data_file")
    if raw_data:
        data_path = Path(str(raw_data)).expanduser()
        if not data_path.is_absolute():
            data_path = config_dir / data_path
        config.data_file = data_path

    raw_filter = str(app_section.get("default_filter", DEFAULT_FILTER))
    if raw_filter in FILTER_PRESETS:
        config.default_filter = raw_filter
    else:
        logger.warning("unknown default_filter %r, using %r", raw_filter, DEFAULT_FILTER)

    raw_fmt = str(app_section.get("date_format", DEFAULT_DATE_FORMAT))
    config.date_format = raw_fmt if raw_fmt in DATE_FORMAT_PRESETS else DEFAULT_DATE_FORMAT

    if "show_footer" in app_section:
        config.show_footer = bool(app_section.get("show_footer"))

    return config


def save_config(config: AppConfig) -> Path:
    """Write configuration to <config_dir>/config.toml."""
    config_path = _get_config_path(config.config_dir)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    doc = tomlkit.document()
    app_table = tomlkit.table()
    if config.data_file is not None:
        app_table.add("data_file", str(config.data_file))
    app_table.add("default_filter", config.default_filter)
    app_table.add("date_format", config.date_format)
    app_table.add("show_footer", config.show_footer)
    doc.add("app", app_table)

    config_path.write_text(tomlkit.dumps(doc), encoding="utf-8")
    return config_path
