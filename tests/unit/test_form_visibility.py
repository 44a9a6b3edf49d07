"""Tests for applying stored conditions to form definitions."""

import logging
from unittest.mock import Mock

import pytest

from smartflow.forms.available_fields import available_fields
from smartflow.forms.visibility import (
    is_field_visible,
    is_screen_visible,
    visibility_report,
    visible_fields,
    visible_screens,
)
from condition_test_helpers import make_employment_form


@pytest.fixture
def form():
    return make_employment_form()


class TestScreenVisibility:
    """Screens filtered by their stored conditions."""

    def test_screen_without_conditions_is_visible(self, form):
        assert is_screen_visible(form.get_screen("basics"), {}) is True

    def test_json_text_condition(self, form):
        equity = form.get_screen("equity")

        assert is_screen_visible(equity, {"hasEquity": True}) is True
        assert is_screen_visible(equity, {"hasEquity": "true"}) is True
        assert is_screen_visible(equity, {"hasEquity": False}) is False
        assert is_screen_visible(equity, {}) is False

    def test_inline_dict_condition(self, form):
        part_time = form.get_screen("part_time")

        assert is_screen_visible(part_time, {"employmentType": "part-time"}) is True
        assert is_screen_visible(part_time, {"employmentType": "full-time"}) is False

    def test_malformed_condition_fails_open(self, form):
        diagnostics = Mock(spec=logging.Logger)

        assert is_screen_visible(form.get_screen("notes"), {}, diagnostics) is True
        diagnostics.error.assert_called_once()
        assert "Failed to parse conditions JSON" in diagnostics.error.call_args[0][0]

    def test_visible_screens_in_form_order(self, form):
        answers = {"employmentType": "full-time", "hasEquity": "true"}

        assert [s.id for s in visible_screens(form, answers)] == ["basics", "equity", "notes"]

    def test_part_time_without_equity(self, form):
        answers = {"employmentType": "part-time", "hasEquity": False}

        assert [s.id for s in visible_screens(form, answers)] == ["basics", "part_time", "notes"]


class TestFieldVisibility:
    """Fields filtered by their stored conditions."""

    def test_field_without_conditions_is_visible(self, form):
        assert is_field_visible(form.get_screen("equity").get_field("f4"), {}) is True

    def test_field_depends_on_earlier_field(self, form):
        equity = form.get_screen("equity")

        assert [f.name for f in visible_fields(equity, {})] == ["vestingSchedule"]
        assert [f.name for f in visible_fields(equity, {"vestingSchedule": "4y monthly"})] == [
            "vestingSchedule",
            "cliffMonths",
        ]

    def test_whitespace_answer_is_not_empty(self, form):
        equity = form.get_screen("equity")
        assert len(visible_fields(equity, {"vestingSchedule": "   "})) == 2

    def test_empty_string_answer_hides_dependent_field(self, form):
        equity = form.get_screen("equity")
        assert [f.name for f in visible_fields(equity, {"vestingSchedule": ""})] == ["vestingSchedule"]


class TestVisibilityReport:
    """Per-screen summary."""

    def test_report(self, form):
        report = visibility_report(form, {"employmentType": "full-time", "hasEquity": True, "vestingSchedule": "4y"})

        assert report == [
            {"screen_id": "basics", "title": "Basics", "visible": True,
             "visible_fields": ["employmentType", "salary", "hasEquity"]},
            {"screen_id": "equity", "title": "Equity", "visible": True,
             "visible_fields": ["vestingSchedule", "cliffMonths"]},
            {"screen_id": "part_time", "title": "Part-time terms", "visible": False,
             "visible_fields": []},
            {"screen_id": "notes", "title": "Notes", "visible": True,
             "visible_fields": ["notes"]},
        ]

    def test_non_mapping_answers_hide_conditional_screens(self, form):
        report = visibility_report(form, None)
        assert [entry["visible"] for entry in report] == [True, False, False, True]


class TestAvailableFields:
    """Fields a condition editor may offer."""

    def test_first_screen_has_nothing_before_it(self, form):
        assert available_fields(form, "basics") == []

    def test_screen_sees_earlier_screens(self, form):
        fields = available_fields(form, "equity")

        assert [f.name for f in fields] == ["employmentType", "salary", "hasEquity"]
        assert fields[0].label == "Employment type"
        assert fields[0].screen_title == "Basics"
        assert fields[0].type == "select"

    def test_field_sees_earlier_fields_on_its_screen(self, form):
        names = [f.name for f in available_fields(form, "equity", "f5")]
        assert names == ["employmentType", "salary", "hasEquity", "vestingSchedule"]

    def test_first_field_on_screen(self, form):
        names = [f.name for f in available_fields(form, "equity", "f4")]
        assert names == ["employmentType", "salary", "hasEquity"]

    def test_unknown_field_adds_nothing_from_current_screen(self, form):
        names = [f.name for f in available_fields(form, "equity", "missing")]
        assert names == ["employmentType", "salary", "hasEquity"]

    def test_unknown_screen(self, form):
        assert available_fields(form, "nope") == []

    def test_later_screens_excluded(self, form):
        names = [f.name for f in available_fields(form, "part_time")]

        assert "hoursPerWeek" not in names
        assert "notes" not in names
        assert names[-2:] == ["vestingSchedule", "cliffMonths"]
