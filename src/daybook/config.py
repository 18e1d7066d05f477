"""Configuration management for daybook."""

import logging
import os
import shlex
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

from .errors import ConfigError

logger = logging.getLogger(__name__)

DAYBOOK_HOME = Path(os.environ.get("DAYBOOK_HOME", Path.home() / "daybook"))
CONFIG_FILE = DAYBOOK_HOME / "config" / "daybook.conf"
DEFAULT_STORAGE_ROOT = DAYBOOK_HOME / "journal"

# Editors that return immediately unless told to wait for the file to close.
DETACHING_EDITORS = {
    "code": ("--wait", "-w"),
    "codium": ("--wait", "-w"),
    "subl": ("--wait", "-w"),
    "atom": ("--wait", "-w"),
    "mate": ("--wait", "-w"),
    "gvim": ("-f", "--nofork"),
    "mvim": ("-f", "--nofork"),
    "gedit": ("--wait", "-w"),
    "zed": ("--wait",),
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _default_editor() -> str:
    return os.environ.get("VISUAL") or os.environ.get("EDITOR") or "vi"


@dataclass
class Config:
    """daybook configuration."""

    storage_root: Path = field(default_factory=lambda: DEFAULT_STORAGE_ROOT)
    scratch_dir_name: str = "tmp"
    lock_extension: str = "7z"
    editor_command: str = field(default_factory=_default_editor)
    lock_by_default: bool = False
    first_entry_time_format: str = "%A, %B %d %Y - %H:%M"
    later_entry_time_format: str = "%H:%M"
    file_name_date_format: str = "%Y_%m_%d"
    archive_command: str = "7z"
    lock_timeout: float = 5.0

    def __post_init__(self):
        self.storage_root = Path(self.storage_root).expanduser()

    @property
    def scratch_dir(self) -> Path:
        return self.storage_root / self.scratch_dir_name

    @property
    def session_lock_file(self) -> Path:
        """Lock file kept beside the storage root so it is never listed."""
        return self.storage_root.parent / f".{self.storage_root.name}.lock"


def _parse_bool(key: str, value: str) -> bool:
    lowered = value.lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ConfigError(f"{key.upper()} must be a boolean, got {value!r}")


def _strip_value(value: str) -> str:
    # Handle quoted values with inline comments: "value" # comment
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        if end_quote != -1:
            return value[1:end_quote]
        return value[1:]
    # Unquoted: strip inline comments
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(path: Path | str | None = None) -> Config:
    """Load configuration from daybook.conf, falling back to defaults."""
    config = Config()
    config_file = Path(path).expanduser() if path else CONFIG_FILE

    if not config_file.exists():
        if path:
            raise ConfigError(f"Config file not found: {config_file}")
        return validate_config(config)

    for line in config_file.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _strip_value(value.strip())

        match key:
            case "storage_root":
                config.storage_root = Path(value).expanduser()
            case "scratch_dir_name":
                config.scratch_dir_name = value
            case "lock_extension":
                config.lock_extension = value
            case "editor_command":
                config.editor_command = value
            case "lock_by_default":
                config.lock_by_default = _parse_bool(key, value)
            case "first_entry_time_format":
                config.first_entry_time_format = value
            case "later_entry_time_format":
                config.later_entry_time_format = value
            case "file_name_date_format":
                config.file_name_date_format = value
            case "archive_command":
                config.archive_command = value
            case "lock_timeout":
                try:
                    config.lock_timeout = float(value)
                except ValueError:
                    raise ConfigError(f"LOCK_TIMEOUT must be a number, got {value!r}")
            case _:
                logger.warning(f"Ignoring unknown config key {key.upper()} in {config_file}")

    return validate_config(config)


def validate_config(config: Config) -> Config:
    """Reject configurations the journal layout or editor contract can't support."""
    if not config.scratch_dir_name or "/" in config.scratch_dir_name:
        raise ConfigError(f"Invalid SCRATCH_DIR_NAME: {config.scratch_dir_name!r}")

    if not config.lock_extension or "." in config.lock_extension:
        raise ConfigError(
            f"LOCK_EXTENSION must be a bare extension without dots, got {config.lock_extension!r}"
        )

    sample = date(2000, 1, 2).strftime(config.file_name_date_format)
    if sample == date(2000, 2, 1).strftime(config.file_name_date_format):
        raise ConfigError(
            f"FILE_NAME_DATE_FORMAT {config.file_name_date_format!r} does not identify a single day"
        )
    if config.scratch_dir_name == sample or config.scratch_dir_name[:1].isdigit():
        raise ConfigError(
            f"SCRATCH_DIR_NAME {config.scratch_dir_name!r} could be mistaken for a journal"
        )

    try:
        argv = shlex.split(config.editor_command)
    except ValueError as e:
        raise ConfigError(f"Cannot parse EDITOR_COMMAND {config.editor_command!r}: {e}")
    if not argv:
        raise ConfigError("EDITOR_COMMAND is empty")

    program = Path(argv[0]).name
    wait_flags = DETACHING_EDITORS.get(program)
    if wait_flags and not any(flag in argv[1:] for flag in wait_flags):
        raise ConfigError(
            f"Editor {program!r} returns before editing is done; "
            f"add {wait_flags[0]} to EDITOR_COMMAND"
        )

    if config.lock_timeout <= 0:
        raise ConfigError("LOCK_TIMEOUT must be positive")

    return config
