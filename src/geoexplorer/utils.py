"""
Consolidated Utilities

Sections:
- Logging and timing utilities
- File loading helpers
"""

import functools
import json
import logging
import sys
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any, Optional

import yaml

from .errors import NotFoundError, ParseError

# =============================================================================
# Logging and Timing Utilities
# =============================================================================

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def setup_logging(
    verbose: bool,
    log_file: Optional[Path] = None,
    console: bool = True
) -> None:
    """
    Configure root logging.

    Args:
        verbose: Enable debug-level logging if True
        log_file: Optional file receiving all records
        console: Attach a stdout handler; disabled while curses owns the terminal
    """
    level = logging.DEBUG if verbose else logging.INFO
    handlers: list[logging.Handler] = []

    if console:
        handlers.append(logging.StreamHandler(sys.stdout))

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    if not handlers:
        handlers.append(logging.NullHandler())

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        handlers=handlers,
        force=True
    )


def timer(func: Callable) -> Callable:
    """Decorator to time function execution at debug level."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.time()
        result = func(*args, **kwargs)
        end_time = time.time()
        logging.debug(f"{func.__name__} completed in {end_time - start_time:.3f} seconds")
        return result
    return wrapper


# =============================================================================
# File Loading Helpers
# =============================================================================

def load_json_file(file_path: Path) -> Any:
    """
    Load JSON file with error handling.

    Args:
        file_path: Path to JSON file

    Returns:
        Parsed JSON content

    Raises:
        NotFoundError: If file doesn't exist
        ParseError: If file is not valid JSON
    """
    if not file_path.is_file():
        raise NotFoundError(file_path)

    try:
        with open(file_path, encoding='utf-8') as f:
            return json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ParseError(file_path, str(e)) from e


def load_yaml_file(file_path: Path) -> dict[str, Any]:
    """
    Load YAML configuration file with error handling.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If file is not valid YAML or not a mapping
    """
    if not file_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {file_path}")

    try:
        with open(file_path, encoding='utf-8') as f:
            content = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {file_path}: {e}") from e

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ValueError(f"Configuration in {file_path} must be a mapping")
    return content
