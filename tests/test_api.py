"""
API tests for the sequencing and note endpoints.
"""

import pytest

from fieldsched.domain.constraints import SequencingOptions


class TestSequenceEndpoint:
    def _payload(self, task_record, resource_record, **extra):
        payload = {
            "tasks": [
                task_record("T1", importanceScore=5, lat=0.0, lng=0.0, estimatedDuration=60),
                task_record("T2", importanceScore=10, lat=0.0, lng=0.36, estimatedDuration=30),
                task_record("T3", taskStatus="Completed", notes="leave me alone"),
            ],
            "resources": [resource_record("R1", homeLat=0.0, homeLng=0.1)],
            "options": {"timezone": "UTC"},
            "reference_date": "2026-10-18",
        }
        payload.update(extra)
        return payload

    def test_sequence_stamps_tasks(self, client, task_record, resource_record):
        response = client.post("/sequence", json=self._payload(task_record, resource_record))
        assert response.status_code == 200
        data = response.json()
        by_id = {t["taskId"]: t for t in data["tasks"]}
        assert by_id["T2"]["expectedStartDate"] == "2026-10-18T08:43:00.000Z"
        assert by_id["T1"]["expectedStartDate"] == "2026-10-18T10:13:00.000Z"
        assert "expectedStartDate" not in by_id["T3"]
        assert by_id["T3"]["notes"] == "leave me alone"
        assert data["scheduled_count"] == 2
        assert data["errors"] == []
        assert data["overruns"] == []

    def test_errors_and_overruns_reported(self, client, task_record, resource_record):
        payload = self._payload(
            task_record,
            resource_record,
            resources=[
                resource_record("R1", shiftEnd="09:00"),
                resource_record("R2", shiftStart="half past eight"),
            ],
        )
        payload["tasks"].append(task_record("T9", employeeId="R2"))
        data = client.post("/sequence", json=payload).json()

        assert [e["resource_id"] for e in data["errors"]] == ["R2"]
        assert data["errors"][0]["field"] == "shiftStart"
        assert [o["resource_id"] for o in data["overruns"]] == ["R1"]
        assert data["overruns"][0]["shift_end_minute"] == 540

    def test_missing_resource_id_is_bad_request(self, client, task_record):
        payload = {"tasks": [task_record("T1")], "resources": [{"shiftStart": "08:00"}]}
        response = client.post("/sequence", json=payload)
        assert response.status_code == 400

    def test_unknown_timezone_is_bad_request(self, client, task_record, resource_record):
        payload = self._payload(task_record, resource_record, options={"timezone": "Nowhere/Land"})
        response = client.post("/sequence", json=payload)
        assert response.status_code == 400

    @pytest.mark.parametrize("options", [None, {"max_travel_minutes": 90}])
    def test_partial_options_keep_configured_timezone(
        self, client, monkeypatch, task_record, resource_record, options
    ):
        monkeypatch.setattr(
            "fieldsched.api.router.DEFAULT_SEQUENCING_OPTIONS",
            SequencingOptions(timezone="Asia/Tokyo"),
        )
        payload = {
            "tasks": [task_record("T1")],
            "resources": [resource_record("R1")],
            "options": options,
            "reference_date": "2026-10-18",
        }
        data = client.post("/sequence", json=payload).json()
        # 08:00 in Tokyo (UTC+9)
        assert data["tasks"][0]["expectedStartDate"] == "2026-10-17T23:00:00.000Z"

    def test_sent_options_override_configuration(self, client, monkeypatch, task_record, resource_record):
        monkeypatch.setattr(
            "fieldsched.api.router.DEFAULT_SEQUENCING_OPTIONS",
            SequencingOptions(timezone="Asia/Tokyo"),
        )
        payload = self._payload(task_record, resource_record, options={"timezone": "UTC"})
        data = client.post("/sequence", json=payload).json()
        by_id = {t["taskId"]: t for t in data["tasks"]}
        assert by_id["T2"]["expectedStartDate"] == "2026-10-18T08:43:00.000Z"

    def test_invalid_option_rejected_by_schema(self, client, task_record, resource_record):
        payload = self._payload(task_record, resource_record, options={"average_speed_kmh": 0})
        response = client.post("/sequence", json=payload)
        assert response.status_code == 422


class TestNotesEndpoint:
    def test_enrich_fills_defaults(self, client):
        response = client.post("/notes/enrich", json={"tasks": [{"taskId": "T1", "postCode": "E16"}]})
        assert response.status_code == 200
        [task] = response.json()["tasks"]
        assert "Postcode E16" in task["fieldNotes"]
        assert len(task["progressNotes"]) == 2


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
