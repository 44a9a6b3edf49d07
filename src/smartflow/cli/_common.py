"""Shared CLI utilities: logging setup and argument loading."""

import json
import logging
from pathlib import Path
from typing import Any, Optional

import yaml
from rich.logging import RichHandler

from smartflow.cli._console import console, print_err
from smartflow.forms import FormDefinition, FormLoadError, load_form_definition
from smartflow.forms.loader import FORM_SUFFIXES

logger = logging.getLogger(__name__)


def setup_logging(*, verbose: bool = False, quiet: bool = False) -> None:
    """Configure logging with Rich handler."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    for name in ("httpx", "httpcore", "uvicorn.access"):
        logging.getLogger(name).setLevel(logging.WARNING)


def read_text_or_file(value: str) -> str:
    """Return the contents of `value` if it names a file, else `value` itself."""
    path = Path(value)
    try:
        if path.is_file():
            return path.read_text(encoding="utf-8")
    except OSError:
        # Inline JSON can be too long to be a valid path
        pass
    return value


def load_conditions_arg(value: Optional[str]) -> Any:
    """Conditions as given on the command line: inline JSON, a .json file or a .yaml file.

    JSON text is passed through unparsed so that evaluation applies its
    usual fail-open handling. An unreadable or malformed YAML file exits
    with code 1.
    """
    if value is None:
        return None
    path = Path(value)
    if path.suffix.lower() in (".yaml", ".yml") and path.is_file():
        try:
            with open(path, "r", encoding="utf-8") as f:
                return yaml.safe_load(f)
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            print_err(f"Invalid conditions file {path}: {e}")
            raise SystemExit(1)
    return read_text_or_file(value)


def load_answers_arg(value: Optional[str]) -> dict:
    """Answers as inline JSON or a JSON/YAML file. Exits with code 1 on bad input."""
    if value is None:
        return {}

    path = Path(value)
    text = read_text_or_file(value)
    try:
        if path.suffix.lower() in (".yaml", ".yml") and path.is_file():
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        print_err(f"Invalid answers: {e}")
        raise SystemExit(1)

    if data is None:
        return {}
    if not isinstance(data, dict):
        print_err("Answers must be a JSON object")
        raise SystemExit(1)
    return data


def load_form_arg(value: str, forms_dir: Optional[Path] = None) -> FormDefinition:
    """Load a form definition or exit with code 1.

    A value that is not an existing file is looked up by name in
    `forms_dir`, trying each supported suffix.
    """
    path = Path(value)
    if forms_dir is not None and not path.is_file():
        for suffix in ("", *FORM_SUFFIXES):
            candidate = forms_dir / f"{value}{suffix}"
            if candidate.is_file():
                path = candidate
                logger.debug(f"Resolved form {value} to {path}")
                break
        else:
            print_err(f"Form not found: {value} (looked in {forms_dir})")
            raise SystemExit(1)
    try:
        return load_form_definition(path)
    except FormLoadError as e:
        print_err(str(e))
        raise SystemExit(1)
