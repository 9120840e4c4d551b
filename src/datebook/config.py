"""Configuration management for datebook."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DATEBOOK_HOME = Path(os.environ.get("DATEBOOK_HOME", Path.home() / ".config" / "datebook"))
CONFIG_FILE = DATEBOOK_HOME / "datebook.conf"

VIEWS = ("overdue", "today", "rest_of_week", "later")


@dataclass
class Config:
    """datebook configuration."""

    todo_dir: str = ""
    output_dir: str = ""
    default_view: str = "today"

    @property
    def todo_path(self) -> Path | None:
        return Path(self.todo_dir).expanduser() if self.todo_dir else None

    @property
    def output_path(self) -> Path:
        """Output directory, falling back to the todo directory."""
        if self.output_dir:
            return Path(self.output_dir).expanduser()
        if self.todo_dir:
            return Path(self.todo_dir).expanduser()
        return DATEBOOK_HOME


def _unquote(value: str) -> str:
    """Strip quotes from a value, or an inline comment from an unquoted one."""
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        if end_quote != -1:
            return value[1:end_quote]
        return value[1:]
    if "#" in value:
        return value.split("#")[0].strip()
    return value


def load_config(config_file: Path | None = None) -> Config:
    """Load configuration from datebook.conf file."""
    config_file = config_file or CONFIG_FILE
    config = Config()

    if not config_file.exists():
        logger.debug("No config file at '%s', using defaults", config_file)
        return config

    for line in config_file.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "todo_dir":
                config.todo_dir = value
            case "output_dir":
                config.output_dir = value
            case "default_view":
                if value in VIEWS:
                    config.default_view = value
                else:
                    logger.warning("Unknown DEFAULT_VIEW '%s', using '%s'", value, config.default_view)
            case _:
                logger.warning("Unknown config key '%s' in '%s'", key, config_file)

    return config


def save_config(config: Config, config_file: Path | None = None) -> Path:
    """Write configuration back to datebook.conf."""
    config_file = config_file or CONFIG_FILE
    config_file.parent.mkdir(parents=True, exist_ok=True)
    lines = [
        "# datebook configuration",
        f'TODO_DIR="{config.todo_dir}"',
        f'OUTPUT_DIR="{config.output_dir}"',
        f'DEFAULT_VIEW="{config.default_view}"',
    ]
    config_file.write_text("\n".join(lines) + "\n")
    logger.info("Saved config to '%s'", config_file)
    return config_file
