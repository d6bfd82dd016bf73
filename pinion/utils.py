# Pinion CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""utils.py"""
from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Sequence

import pythonjsonlogger.json
from rich.logging import RichHandler

from pinion.exceptions import ExpansionError

_ENVAR_TRANSFORM = re.compile(r"[^a-zA-Z0-9_]+")


def envar_transform(name: str) -> str:
    """Convert a flag name into an environment variable name.

    Every run of characters that is not a letter, digit or underscore becomes a
    single underscore and the result is upper-cased:

        envar_transform("some-app_some.flag") == "SOME_APP_SOME_FLAG"
    """
    return _ENVAR_TRANSFORM.sub("_", name).upper()


def expand_args_from_files(args: Sequence[str]) -> list[str]:
    """
    Expand arguments of the form `@<path>` into the lines of that file.

    Each line becomes one argument, substituted in place; trailing newlines are
    stripped. Arguments that do not start with `@` are passed through.

    Raises:
        ExpansionError: If a referenced file can not be read.
    """
    expanded: list[str] = []
    for arg in args:
        if not arg.startswith("@") or len(arg) == 1:
            expanded.append(arg)
            continue
        path = Path(arg[1:])
        try:
            with path.open("r", encoding="UTF-8") as expansion_file:
                expanded.extend(line.rstrip("\r\n") for line in expansion_file)
        except OSError as error:
            raise ExpansionError(f"failed to expand '{arg}': {error}") from error
    return expanded


def running_in_container() -> bool:
    try:
        with open("/proc/1/cgroup", "r", encoding="UTF-8") as f:
            content = f.read()
            return (
                "docker" in content
                or "kubepods" in content
                or "containerd" in content
                or "podman" in content
            )
    except OSError:
        return False


def setup_logging(
    mode: str | None = None,
    log_filename: str | None = None,
    json_log_to_file: bool = False,
    file_log_level: int = logging.DEBUG,
    console_log_level: int = logging.WARNING,
) -> None:
    """
    Configure logging for programs built on Pinion, with support for both
    CLI-friendly and structured JSON output.

    Args:
        mode (str | None):
            Logging output mode. Can be:
                - "cli": human-readable Rich console logs (default outside containers)
                - "json": machine-readable JSON logs (default inside containers)
            If not provided, it will use the `PINION_LOG_MODE` environment variable
            or fallback based on container detection.
        log_filename (str | None):
            Optional path of a log file. No file handler is installed when omitted.
        json_log_to_file (bool):
            Whether to format file logs as JSON (structured) instead of plain text.
        file_log_level (int):
            Logging level for file output. Defaults to `logging.DEBUG`.
        console_log_level (int):
            Logging level for console output. Defaults to `logging.WARNING`.

    Raises:
        ValueError: If an invalid logging `mode` is passed.
    """
    if not mode:
        mode = os.getenv("PINION_LOG_MODE") or (
            "json" if running_in_container() else "cli"
        )

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    if root.hasHandlers():
        root.handlers.clear()

    if mode == "cli":
        console_handler: RichHandler | logging.StreamHandler = RichHandler(
            rich_tracebacks=True,
            show_time=True,
            show_level=True,
            show_path=False,
            markup=True,
            log_time_format="[%Y-%m-%d %H:%M:%S]",
        )
    elif mode == "json":
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(
            pythonjsonlogger.json.JsonFormatter(
                "%(asctime)s %(name)s %(levelname)s %(message)s"
            )
        )
    else:
        raise ValueError(f"Invalid log mode: {mode}")

    console_handler.setLevel(console_log_level)
    root.addHandler(console_handler)

    if log_filename:
        file_handler = logging.FileHandler(log_filename, "a", "UTF-8")
        file_handler.setLevel(file_log_level)
        if json_log_to_file:
            file_handler.setFormatter(
                pythonjsonlogger.json.JsonFormatter(
                    "%(asctime)s %(name)s %(levelname)s %(message)s"
                )
            )
        else:
            file_handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s [%(name)s] [%(levelname)s] %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
        root.addHandler(file_handler)

    logger = logging.getLogger("pinion")
    logger.propagate = True
    logger.debug("Logging initialized in '%s' mode.", mode)
