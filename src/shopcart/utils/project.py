"""
Project metadata (name, version) resolved at runtime.

The JSON log formatter stamps every record with the service name and version.
An installed distribution is authoritative; a source checkout falls back to the
closest pyproject.toml above this package.
"""

from pathlib import Path
from importlib import metadata as importlib_metadata
from itertools import islice
from typing import Any
import tomllib

_PACKAGE_DIR = Path(__file__).resolve().parent


def find_pyproject(start: Path, max_up: int = 5) -> Path | None:
    """Return the first pyproject.toml in `start` or its parents, looking at most `max_up` levels."""
    for directory in islice((start, *start.parents), max_up):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None


def load_pyproject_data(pyproject_path: Path) -> dict:
    # tomllib only reads binary streams.
    with pyproject_path.open("rb") as fh:
        return tomllib.load(fh)


def get_pyproject_value(
    key: str,
    start: str | Path | None = None,
    max_up: int = 5,
    default: Any = None,
) -> Any:
    """
    Look up a dotted `key` ("project.version") in the nearest pyproject.toml.

    `default` is returned when there is no pyproject.toml, it does not parse,
    or some part of the key is missing.
    """
    if not key:
        return default

    origin = Path(start).resolve() if start is not None else _PACKAGE_DIR
    pyproject = find_pyproject(origin, max_up=max_up)
    if pyproject is None:
        return default

    try:
        node: Any = load_pyproject_data(pyproject)
    except (OSError, tomllib.TOMLDecodeError):
        return default

    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return default
        node = node[part]
    return node


def get_project_name(
    start: Path | str | None = None,
    max_up: int = 5,
    default: str | None = "shopcart",
) -> str | None:
    return get_pyproject_value("project.name", start=start, max_up=max_up, default=default)


def get_project_version(
    start: Path | str | None = None,
    max_up: int = 5,
    default: str = "unknown",
    prefer_installed: bool = True,
) -> str:
    """
    Version of the installed distribution when `prefer_installed` is set and it
    is installed, otherwise project.version from pyproject.toml, otherwise `default`.
    """
    if prefer_installed:
        name = get_project_name(start=start, max_up=max_up)
        if name:
            try:
                return importlib_metadata.version(name)
            except importlib_metadata.PackageNotFoundError:
                pass

    version = get_pyproject_value("project.version", start=start, max_up=max_up)
    return version if version is not None else default


__all__ = [
    "find_pyproject",
    "load_pyproject_data",
    "get_pyproject_value",
    "get_project_name",
    "get_project_version",
]
