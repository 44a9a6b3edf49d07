"""
Pytest fixtures and configuration for SmartFlow tests.
Provides form definition files and answer sets shared across test packages.
"""

import json

import pytest

from smartflow.config.settings import reset_settings_cache
from smartflow.startup import reset_startup_state

EMPLOYMENT_FORM_YAML = """\
template_id: employment-agreement
title: Employment Agreement
screens:
  - id: basics
    title: Basics
    fields:
      - {id: f1, name: employmentType, label: Employment type, type: select, options: [full-time, part-time]}
      - {id: f2, name: salary, label: Annual salary, type: number}
      - {id: f3, name: hasEquity, label: Equity grant, type: checkbox}
  - id: equity
    title: Equity
    conditions: '{"operator":"and","rules":[{"field":"hasEquity","operator":"equals","value":true}]}'
    fields:
      - {id: f4, name: vestingSchedule, label: Vesting schedule}
      - id: f5
        name: cliffMonths
        label: Cliff (months)
        type: number
        conditions:
          operator: and
          rules:
            - {field: vestingSchedule, operator: isNotEmpty}
  - id: part_time
    title: Part-time terms
    conditions:
      operator: and
      rules:
        - {field: employmentType, operator: equals, value: part-time}
    fields:
      - {id: f6, name: hoursPerWeek, label: Hours per week, type: number}
"""


@pytest.fixture(autouse=True)
def _reset_process_state():
    """Startup and settings are cached per process; start each test clean."""
    reset_startup_state()
    reset_settings_cache()
    yield
    reset_startup_state()
    reset_settings_cache()


@pytest.fixture
def employment_form_file(tmp_path):
    """Employment agreement form written as YAML."""
    path = tmp_path / "employment_agreement.yaml"
    path.write_text(EMPLOYMENT_FORM_YAML, encoding="utf-8")
    return path


@pytest.fixture
def full_time_answers():
    return {"employmentType": "full-time", "salary": 85000, "hasEquity": True}


@pytest.fixture
def answers_file(tmp_path, full_time_answers):
    """The full-time answers written as a JSON file."""
    path = tmp_path / "answers.json"
    path.write_text(json.dumps(full_time_answers), encoding="utf-8")
    return path
