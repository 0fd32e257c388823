"""Configuration management for caltrack."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

CALTRACK_HOME = Path(os.environ.get("CALTRACK_HOME", Path.home() / "caltrack"))
CONFIG_FILE = CALTRACK_HOME / "config" / "caltrack.conf"
DATA_DIR = CALTRACK_HOME / "data"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class Config:
    """caltrack configuration."""

    save_file: Path = field(default_factory=lambda: DATA_DIR / "tasks.txt")
    log_file: Path = field(default_factory=lambda: DATA_DIR / "caltrack.log")
    log_level: str = "INFO"
    cell_width: int = 15
    start_view: str = "week"


def _unquote(value: str) -> str:
    # Handle quoted values with inline comments: "value" # comment
    for quote in ('"', "'"):
        if value.startswith(quote):
            end_quote = value.find(quote, 1)
            return value[1:end_quote] if end_quote != -1 else value[1:]
    # Unquoted: strip inline comments
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(path: Path | None = None) -> Config:
    """Load configuration from caltrack.conf file."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "save_file":
                config.save_file = Path(value).expanduser()
            case "log_file":
                config.log_file = Path(value).expanduser()
            case "log_level":
                config.log_level = value.upper()
            case "cell_width":
                try:
                    config.cell_width = max(5, int(value))
                except ValueError:
                    logger.warning(f"Ignoring non-numeric CELL_WIDTH: {value!r}")
            case "start_view":
                if value.lower() in ("week", "month"):
                    config.start_view = value.lower()
                else:
                    logger.warning(f"Ignoring unknown START_VIEW: {value!r}")

    return config


def setup_logging(config: Config, debug: bool = False) -> None:
    """Send log records to the configured log file, away from the console grid."""
    config.log_file.parent.mkdir(parents=True, exist_ok=True)
    level = logging.DEBUG if debug else getattr(logging, config.log_level, logging.INFO)
    logging.basicConfig(
        filename=config.log_file,
        format=LOG_FORMAT,
        level=level,
    )
