"""
Loading form definitions from YAML or JSON files.

Expected structure:
    template_id: employment-agreement
    title: Employment Agreement
    screens:
      - id: basics
        title: Basics
        fields:
          - {id: f1, name: employmentType, label: Employment type, type: select}
      - id: equity
        title: Equity
        conditions: '{"operator":"and","rules":[{"field":"hasEquity","operator":"equals","value":true}]}'
"""

import json
import logging
from pathlib import Path
from typing import List

import yaml
from pydantic import ValidationError

from smartflow.forms.schemas import FormDefinition

logger = logging.getLogger(__name__)

FORM_SUFFIXES = (".yaml", ".yml", ".json")


class FormLoadError(Exception):
    """Raised when a form definition cannot be loaded or is invalid."""
    pass


def load_form_definition(file_path: str | Path) -> FormDefinition:
    """
    Load and validate a form definition file.

    Args:
        file_path: Path to a .yaml, .yml or .json file

    Returns:
        Validated FormDefinition

    Raises:
        FormLoadError: If the file is missing, unreadable or invalid
    """
    path = Path(file_path)
    if path.suffix.lower() not in FORM_SUFFIXES:
        raise FormLoadError(f"Unsupported form definition format: {path.suffix or path.name}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except FileNotFoundError:
        raise FormLoadError(f"Form definition not found: {path}")
    except json.JSONDecodeError as e:
        raise FormLoadError(f"Invalid JSON in form definition {path}: {e}")
    except yaml.YAMLError as e:
        raise FormLoadError(f"Invalid YAML in form definition {path}: {e}")

    if not isinstance(data, dict):
        raise FormLoadError(f"Form definition {path} must be a mapping at the top level")

    try:
        form = FormDefinition.model_validate(data)
    except ValidationError as e:
        raise FormLoadError(f"Invalid form definition {path}: {e}")

    logger.debug(f"Loaded form '{form.template_id}' with {len(form.screens)} screens from {path}")
    return form


def list_form_definitions(forms_dir: str | Path) -> List[Path]:
    """Return form definition files in a directory, sorted by name."""
    directory = Path(forms_dir)
    if not directory.is_dir():
        logger.debug(f"Forms directory does not exist: {directory}")
        return []
    return sorted(p for p in directory.iterdir() if p.is_file() and p.suffix.lower() in FORM_SUFFIXES)
