"""
Project metadata helpers (name / version) read from the nearest pyproject.toml,
or from the installed distribution when available.
"""

import tomllib
from functools import lru_cache
from importlib import metadata as importlib_metadata
from pathlib import Path
from typing import Any

DEFAULT_PROJECT_NAME = "ticket-logger-api"


def find_pyproject(start: Path, max_up: int = 5) -> Path | None:
    p = start
    for _ in range(max_up):
        candidate = p / "pyproject.toml"
        if candidate.exists():
            return candidate
        if p.parent == p:
            break
        p = p.parent
    return None


@lru_cache(maxsize=8)
def _load_pyproject(path: Path) -> dict:
    with path.open("rb") as f:
        return tomllib.load(f)


def get_pyproject_value(key: str, start: str | Path | None = None, max_up: int = 5, default: Any = None) -> Any:
    """
    Value for a dot-separated `key` ("project.version") from the nearest pyproject.toml,
    searching upwards from `start` (default: this package). `default` when anything is missing.
    """
    start_path = Path(start).resolve() if start is not None else Path(__file__).resolve().parent
    pyproject = find_pyproject(start_path, max_up=max_up)
    if not pyproject or not key:
        return default

    try:
        cur: Any = _load_pyproject(pyproject)
    except (OSError, tomllib.TOMLDecodeError):
        return default

    for part in key.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return default
        cur = cur[part]
    return cur


def get_project_name(start: Path | str | None = None, max_up: int = 5) -> str:
    return get_pyproject_value("project.name", start=start, max_up=max_up, default=DEFAULT_PROJECT_NAME)


def get_project_version(start: Path | str | None = None, max_up: int = 5, default: str = "unknown") -> str:
    """Installed distribution version first, then pyproject's project.version."""
    try:
        return importlib_metadata.version(get_project_name(start=start, max_up=max_up))
    except importlib_metadata.PackageNotFoundError:
        pass

    value = get_pyproject_value("project.version", start=start, max_up=max_up)
    return value if value is not None else default


__all__ = [
    "find_pyproject",
    "get_pyproject_value",
    "get_project_name",
    "get_project_version",
]
