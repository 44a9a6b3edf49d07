"""Tests for the SmartFlow HTTP API."""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from smartflow import __version__
from smartflow.api.main import create_app
from smartflow.config import SmartFlowSettings
from condition_test_helpers import make_employment_form

OR_CONDITIONS = {
    "operator": "or",
    "rules": [
        {"field": "salary", "operator": "greaterThan", "value": 50000},
        {"field": "hasEquity", "operator": "equals", "value": True},
    ],
}


@pytest.fixture
def client():
    """Test client with explicit settings so no config file is read."""
    app = create_app(SmartFlowSettings(cors_origins=["http://builder.test"]))
    return TestClient(app)


@pytest.fixture
def form_payload():
    return make_employment_form().model_dump(mode="json")


class TestSystemEndpoints:

    def test_health(self, client):
        resp = client.get("/api/health")

        assert resp.status_code == 200
        assert resp.json() == {"status": "ok", "version": __version__}

    def test_cors_origin_allowed(self, client):
        resp = client.get("/api/health", headers={"Origin": "http://builder.test"})
        assert resp.headers.get("access-control-allow-origin") == "http://builder.test"


class TestOperatorsEndpoint:

    def test_lists_catalog(self, client):
        resp = client.get("/api/conditions/operators")

        assert resp.status_code == 200
        data = resp.json()
        assert len(data) == 14
        assert data[0] == {"operator": "equals", "label": "Equals", "needs_value": True}
        assert {"operator": "isEmpty", "label": "Is empty", "needs_value": False} in data


class TestEvaluateEndpoint:

    def test_or_group(self, client):
        resp = client.post("/api/conditions/evaluate", json={
            "conditions": OR_CONDITIONS,
            "answers": {"salary": 40000, "hasEquity": True},
        })

        assert resp.status_code == 200
        assert resp.json() == {"visible": True}

    def test_or_group_no_match(self, client):
        resp = client.post("/api/conditions/evaluate", json={
            "conditions": OR_CONDITIONS,
            "answers": {"salary": 40000, "hasEquity": False},
        })
        assert resp.json() == {"visible": False}

    def test_stored_json_text(self, client):
        resp = client.post("/api/conditions/evaluate", json={
            "conditions": '{"operator":"and","rules":[{"field":"employer.address.country","operator":"in","value":["CH","LI"]}]}',
            "answers": {"employer": {"address": {"country": "LI"}}},
        })
        assert resp.json() == {"visible": True}

    @pytest.mark.parametrize("conditions", [None, "", "{not valid json", {"operator": "and", "rules": "x"}])
    def test_fails_open(self, client, conditions):
        resp = client.post("/api/conditions/evaluate", json={"conditions": conditions, "answers": {}})

        assert resp.status_code == 200
        assert resp.json() == {"visible": True}

    def test_nan_literal_fails_open(self, client):
        resp = client.post(
            "/api/conditions/evaluate",
            content='{"conditions":{"operator":"and","rules":[{"field":"a","operator":"equals","value":NaN}]},'
                    '"answers":{"a":1}}',
            headers={"content-type": "application/json"},
        )

        assert resp.status_code == 200
        assert resp.json() == {"visible": True}

    def test_answers_must_be_object(self, client):
        resp = client.post("/api/conditions/evaluate", json={"conditions": None, "answers": [1, 2]})
        assert resp.status_code == 422


class TestDescribeEndpoint:

    def test_describe_with_labels(self, client):
        resp = client.post("/api/conditions/describe", json={
            "conditions": OR_CONDITIONS,
            "fields": [{"name": "salary", "label": "Annual salary"}],
        })

        assert resp.status_code == 200
        assert resp.json() == {"description": 'Show when Annual salary greater than "50000" OR hasEquity equals "true"'}

    @pytest.mark.parametrize("conditions", [None, '{"operator":"and","rules":[]}', "{bad", {"rules": 1}])
    def test_nothing_to_describe(self, client, conditions):
        resp = client.post("/api/conditions/describe", json={"conditions": conditions})

        assert resp.status_code == 200
        assert resp.json() == {"description": None}


class TestValidateEndpoint:

    def test_valid(self, client):
        resp = client.post("/api/conditions/validate", json={"conditions": OR_CONDITIONS})

        data = resp.json()
        assert data["valid"] is True
        assert data["error"] is None
        assert data["unknown_operators"] == []
        assert data["serialized"] == (
            '{"operator":"or","rules":[{"field":"salary","operator":"greaterThan","value":50000},'
            '{"field":"hasEquity","operator":"equals","value":true}]}'
        )

    def test_empty_is_valid(self, client):
        assert client.post("/api/conditions/validate", json={"conditions": ""}).json()["valid"] is True

    def test_malformed(self, client):
        data = client.post("/api/conditions/validate", json={"conditions": "{bad"}).json()

        assert data["valid"] is False
        assert "Invalid conditions JSON" in data["error"]
        assert data["conditions"] is None

    def test_nan_text_is_invalid(self, client):
        data = client.post("/api/conditions/validate", json={
            "conditions": '{"operator":"and","rules":[{"field":"a","operator":"equals","value":NaN}]}',
        }).json()

        assert data["valid"] is False
        assert "Invalid conditions JSON" in data["error"]

    def test_unknown_operator(self, client):
        data = client.post("/api/conditions/validate", json={
            "conditions": {"operator": "and", "rules": [{"field": "x", "operator": "betweenInclusive", "value": [1, 5]}]},
        }).json()

        assert data["valid"] is False
        assert data["unknown_operators"] == ["betweenInclusive"]
        assert data["error"] == "Unknown operators: betweenInclusive"
        assert data["conditions"]["rules"][0]["operator"] == "betweenInclusive"


class TestFormEndpoints:

    def test_visibility(self, client, form_payload):
        resp = client.post("/api/forms/visibility", json={
            "form": form_payload,
            "answers": {"employmentType": "part-time", "hasEquity": "false"},
        })

        assert resp.status_code == 200
        data = resp.json()
        assert data["template_id"] == "employment-agreement"
        assert [(s["screen_id"], s["visible"]) for s in data["screens"]] == [
            ("basics", True),
            ("equity", False),
            ("part_time", True),
            ("notes", True),
        ]
        assert data["screens"][1]["visible_fields"] == []
        assert data["screens"][2]["visible_fields"] == ["hoursPerWeek"]

    def test_visibility_rejects_invalid_form(self, client):
        resp = client.post("/api/forms/visibility", json={"form": {"screens": []}, "answers": {}})
        assert resp.status_code == 422

    def test_available_fields(self, client, form_payload):
        resp = client.post("/api/forms/available-fields", json={
            "form": form_payload, "screen_id": "equity", "field_id": "f5",
        })

        assert resp.status_code == 200
        assert [f["name"] for f in resp.json()] == ["employmentType", "salary", "hasEquity", "vestingSchedule"]
        assert resp.json()[0] == {
            "name": "employmentType", "label": "Employment type", "screen_title": "Basics", "type": "select",
        }

    def test_available_fields_unknown_screen(self, client, form_payload):
        resp = client.post("/api/forms/available-fields", json={"form": form_payload, "screen_id": "nope"})

        assert resp.status_code == 404
        assert resp.json()["detail"] == "Screen not found: nope"

    def test_available_fields_unknown_field(self, client, form_payload):
        resp = client.post("/api/forms/available-fields", json={
            "form": form_payload, "screen_id": "equity", "field_id": "f9",
        })
        assert resp.status_code == 404


class TestStoredForms:
    """Form definitions served from the forms directory."""

    @pytest.fixture
    def forms_client(self, client, employment_form_file):
        from smartflow.api.routers import forms as forms_module

        (employment_form_file.parent / "broken.yaml").write_text("screens: [", encoding="utf-8")
        with patch.object(forms_module, "get_forms_dir", return_value=employment_form_file.parent):
            yield client

    def test_list_forms_skips_invalid_files(self, forms_client):
        resp = forms_client.get("/api/forms")

        assert resp.status_code == 200
        assert resp.json() == [{
            "template_id": "employment-agreement",
            "title": "Employment Agreement",
            "screen_count": 3,
            "file_name": "employment_agreement.yaml",
        }]

    def test_get_form(self, forms_client):
        resp = forms_client.get("/api/forms/employment-agreement")

        assert resp.status_code == 200
        assert [s["id"] for s in resp.json()["screens"]] == ["basics", "equity", "part_time"]

    def test_get_unknown_form(self, forms_client):
        resp = forms_client.get("/api/forms/nda")

        assert resp.status_code == 404
        assert resp.json()["detail"] == "Form not found: nda"

    def test_empty_forms_dir(self, client, tmp_path):
        from smartflow.api.routers import forms as forms_module

        with patch.object(forms_module, "get_forms_dir", return_value=tmp_path / "none"):
            assert client.get("/api/forms").json() == []


class TestFormsDirDependency:
    """Resolution of the forms directory from settings."""

    def test_relative_forms_dir_under_project_root(self, monkeypatch, tmp_path):
        from smartflow.api import dependencies

        monkeypatch.setattr(dependencies, "get_project_root", lambda: tmp_path)
        monkeypatch.setattr(dependencies, "get_settings", lambda: SmartFlowSettings(forms_dir="templates/forms"))

        assert dependencies.get_forms_dir() == tmp_path / "templates" / "forms"
