from collections.abc import Generator
from datetime import date

import pytest
from fastapi.testclient import TestClient

from fieldsched.domain.constraints import SequencingOptions

REFERENCE_DATE = date(2026, 10, 18)


def make_task_record(task_id: str, employee_id: str = "R1", **fields) -> dict:
    record = {
        "taskId": task_id,
        "employeeId": employee_id,
        "taskStatus": "Assigned (ACT)",
        "importanceScore": 1,
    }
    record.update(fields)
    return record


def make_resource_record(resource_id: str = "R1", **fields) -> dict:
    record = {"resourceId": resource_id, "shiftStart": "08:00", "shiftEnd": "17:00"}
    record.update(fields)
    return record


@pytest.fixture
def reference_date() -> date:
    return REFERENCE_DATE


@pytest.fixture
def utc_options() -> SequencingOptions:
    return SequencingOptions(timezone="UTC")


@pytest.fixture(scope="module")
def client() -> Generator[TestClient, None, None]:
    from fieldsched.api.main import app

    with TestClient(app) as c:
        yield c


@pytest.fixture
def task_record():
    """Factory for raw task records as the UI stores them."""
    return make_task_record


@pytest.fixture
def resource_record():
    """Factory for raw resource records."""
    return make_resource_record
