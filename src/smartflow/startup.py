"""Centralized initialization for all smartflow entry points.

This module provides a single point of initialization for:
- Project root resolution
- Environment variables (.env loading)

All entry points (API, CLI) should use ensure_initialized() to guarantee
consistent startup behavior.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


@dataclass
class StartupState:
    """State resolved on first initialization."""

    project_root: Path
    env_loaded: bool = False


# Module-level state
_initialized: bool = False
_state: Optional[StartupState] = None


def _find_project_root(start_path: Optional[Path] = None) -> Path:
    """Find project root by looking for .smartflow or pyproject.toml.

    Args:
        start_path: Starting path for search. Defaults to this file's location.

    Returns:
        Project root directory.
    """
    if start_path is None:
        start_path = Path(__file__).resolve().parent.parent.parent

    current = start_path
    for parent in [current] + list(current.parents):
        if (parent / ".smartflow").is_dir():
            return parent
        if (parent / "pyproject.toml").exists():
            return parent
    return start_path


def _load_env(project_root: Path) -> bool:
    """Load .env file from project root.

    Returns:
        True if .env was loaded, False otherwise.
    """
    env_path = project_root / ".env"
    if env_path.exists():
        load_dotenv(env_path)
        print(f"[startup] Loaded .env from {env_path}")
        return True
    return False


def ensure_initialized() -> StartupState:
    """Ensure the application is initialized (idempotent).

    Returns:
        Current StartupState.
    """
    global _initialized, _state

    if _initialized and _state is not None:
        return _state

    project_root = _find_project_root()
    env_loaded = _load_env(project_root)
    _state = StartupState(project_root=project_root, env_loaded=env_loaded)
    _initialized = True

    return _state


def get_project_root() -> Path:
    """Get the project root, initializing if needed."""
    return ensure_initialized().project_root


def reset_startup_state() -> None:
    """Forget resolved state so the next call re-initializes (used by tests)."""
    global _initialized, _state
    _initialized = False
    _state = None
