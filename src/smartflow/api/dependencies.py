"""FastAPI dependencies for the SmartFlow API.

Path helpers resolved from settings and the project root. Routers call
these directly so tests can patch them at the router module level.
"""

from pathlib import Path

from smartflow.config import get_settings
from smartflow.startup import get_project_root


def get_forms_dir() -> Path:
    """Directory holding the form definitions served by the API."""
    return get_settings().resolve_forms_dir(get_project_root())
