"""Prerequisite checks for the browser tooling and Python modules."""

from __future__ import annotations

import importlib.util
import shutil
import subprocess
from typing import Iterable

REQUIRED_TOOLS: Iterable[tuple[str, list[str]]] = (
    ("playwright", ["playwright", "--version"]),
)

REQUIRED_MODULES: Iterable[tuple[str, str]] = (
    ("playwright (python)", "playwright"),
    ("beautifulsoup4", "bs4"),
    ("python-dotenv", "dotenv"),
    ("requests", "requests"),
)


def check_tool(command: list[str]) -> bool:
    """Whether ``command`` is on PATH and exits with status 0."""

    if not shutil.which(command[0]):
        return False
    try:
        completed = subprocess.run(command, capture_output=True, text=True, check=False)
    except (subprocess.CalledProcessError, OSError):
        return False
    return completed.returncode == 0


def check_module(module: str) -> bool:
    return importlib.util.find_spec(module) is not None


def verify_dependencies() -> dict[str, bool]:
    """Checks each required tool and module and returns a mapping with the result."""

    results: dict[str, bool] = {}
    for name, command in REQUIRED_TOOLS:
        results[name] = check_tool(command)
    for name, module in REQUIRED_MODULES:
        results[name] = check_module(module)
    return results
