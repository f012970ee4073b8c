"""
Configuration management for the explorer.

Settings come from an optional YAML file, overridden by command line options.

Usage:
    from geoexplorer.config import load_settings
    settings = load_settings(Path("explorer.yml"), data_dir="data")

YAML keys:
    data_dir: Directory holding list, geometry and metadata files
    gdp_path: GDP table (default: <data_dir>/dataPKB/pkb.csv)
    poll_interval_ms: Input poll timeout for the UI loop
    seed: Seed for the fun-fact draw
    log_file: Log destination while the UI is running
    verbose: Debug logging
"""

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

from ..utils import load_yaml_file

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path("data")
GDP_RELATIVE_PATH = Path("dataPKB") / "pkb.csv"
DEFAULT_POLL_INTERVAL_MS = 100


class ConfigurationError(Exception):
    """Raised when configuration is invalid or incomplete."""
    pass


@dataclass
class ExplorerSettings:
    """Runtime settings for the explorer."""
    data_dir: Path = DEFAULT_DATA_DIR
    gdp_path: Optional[Path] = None
    poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS
    seed: Optional[int] = None
    log_file: Optional[Path] = None
    verbose: bool = False

    def __post_init__(self):
        """Normalize paths and validate ranges."""
        self.data_dir = Path(self.data_dir)
        if self.gdp_path is None:
            self.gdp_path = self.data_dir / GDP_RELATIVE_PATH
        else:
            self.gdp_path = Path(self.gdp_path)
        if self.log_file is not None:
            self.log_file = Path(self.log_file)

        if not isinstance(self.poll_interval_ms, int) or not 1 <= self.poll_interval_ms <= 5000:
            raise ValueError("Poll interval must be an integer between 1 and 5000 ms")
        if self.seed is not None and not isinstance(self.seed, int):
            raise ValueError("Seed must be an integer")


def load_settings(config_path: Optional[Path] = None, **overrides: Any) -> ExplorerSettings:
    """
    Build settings from an optional YAML file plus explicit overrides.

    Args:
        config_path: YAML file; missing file is an error when given explicitly
        **overrides: Values from the command line; None means "not given"

    Returns:
        Validated ExplorerSettings

    Raises:
        ConfigurationError: If the file cannot be read or a value is invalid
    """
    values: dict[str, Any] = {}

    if config_path is not None:
        try:
            values.update(load_yaml_file(Path(config_path)))
        except (FileNotFoundError, ValueError) as e:
            raise ConfigurationError(str(e)) from e
        logger.debug(f"Loaded settings from {config_path}")

    known = {f.name for f in fields(ExplorerSettings)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}")

    values.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return ExplorerSettings(**values)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
