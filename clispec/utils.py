# Clispec CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""utils.py"""
from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import pythonjsonlogger.json
from rich.logging import RichHandler

CONTAINER_MARKERS = ("docker", "kubepods", "containerd", "podman")
JSON_LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
TEXT_LOG_FORMAT = "%(asctime)s [%(name)s] [%(levelname)s] %(message)s"


def get_program_invocation() -> str:
    """Program name shown in usage text when a specification sets none."""
    script = sys.argv[0] if sys.argv and sys.argv[0] else ""
    if not script or script == "-c":
        return "python"
    if script.endswith(".py"):
        return f"python {Path(script).name}"
    return Path(script).name


def running_in_container() -> bool:
    try:
        content = Path("/proc/1/cgroup").read_text(encoding="UTF-8")
    except OSError:
        return False
    return any(marker in content for marker in CONTAINER_MARKERS)


def _json_formatter() -> logging.Formatter:
    return pythonjsonlogger.json.JsonFormatter(JSON_LOG_FORMAT)


def _console_handler(mode: str) -> logging.Handler:
    if mode == "cli":
        return RichHandler(
            rich_tracebacks=True,
            show_time=True,
            show_level=True,
            show_path=False,
            markup=False,
            log_time_format="[%Y-%m-%d %H:%M:%S]",
        )
    if mode == "json":
        handler = logging.StreamHandler()
        handler.setFormatter(_json_formatter())
        return handler
    raise ValueError(f"Invalid log mode: {mode}")


def setup_logging(
    mode: str | None = None,
    log_filename: str | None = None,
    json_log_to_file: bool = False,
    file_log_level: int = logging.DEBUG,
    console_log_level: int = logging.WARNING,
):
    """
    Configure logging for clispec.

    Args:
        mode (str | None): "cli" for Rich console logs or "json" for one JSON
            object per record. Falls back to `CLISPEC_LOG_MODE`, then to "json"
            inside a container and "cli" everywhere else.
        log_filename (str | None): Also log to this file when given.
        json_log_to_file (bool): Write the file log as JSON instead of text.
        file_log_level (int): Level of the file handler.
        console_log_level (int): Level of the console handler.

    Raises:
        ValueError: If `mode` is not "cli" or "json".
    """
    mode = mode or os.getenv("CLISPEC_LOG_MODE")
    if not mode:
        mode = "json" if running_in_container() else "cli"
    console_handler = _console_handler(mode)
    console_handler.setLevel(console_log_level)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    root.handlers.clear()
    root.addHandler(console_handler)

    if log_filename:
        file_handler = logging.FileHandler(log_filename, "a", "UTF-8")
        file_handler.setLevel(file_log_level)
        if json_log_to_file:
            file_handler.setFormatter(_json_formatter())
        else:
            file_handler.setFormatter(
                logging.Formatter(TEXT_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
            )
        root.addHandler(file_handler)

    logging.getLogger("clispec").debug("Logging initialized in '%s' mode.", mode)
