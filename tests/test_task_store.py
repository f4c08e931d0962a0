"""
Tests for the JSON task store.
"""

import json

import pytest

from fieldsched.domain.errors import InvalidInputError
from fieldsched.infrastructure.task_store import load_records, save_records


class TestTaskStore:
    def test_save_then_load(self, tmp_path, task_record):
        path = tmp_path / "tasks.json"
        records = [task_record("T1", customerAddress="Calle Mayor 1"), task_record("T2")]
        save_records(path, records)
        assert load_records(path) == records

    def test_file_format(self, tmp_path):
        path = tmp_path / "tasks.json"
        save_records(path, [{"taskId": "T1"}])
        text = path.read_text(encoding="utf-8")
        assert text.endswith("\n")
        assert text.startswith("[\n  {")

    def test_replaces_whole_file_without_leftovers(self, tmp_path):
        path = tmp_path / "tasks.json"
        save_records(path, [{"taskId": str(i)} for i in range(5)])
        save_records(path, [{"taskId": "only"}])
        assert load_records(path) == [{"taskId": "only"}]
        assert [p.name for p in tmp_path.iterdir()] == ["tasks.json"]

    def test_creates_parent_directory(self, tmp_path):
        path = tmp_path / "data" / "tasks.json"
        save_records(path, [])
        assert load_records(path) == []

    def test_non_array_rejected(self, tmp_path):
        path = tmp_path / "tasks.json"
        path.write_text(json.dumps({"taskId": "T1"}), encoding="utf-8")
        with pytest.raises(InvalidInputError, match="not an array"):
            load_records(path)

    def test_invalid_json_rejected(self, tmp_path):
        path = tmp_path / "tasks.json"
        path.write_text("[{", encoding="utf-8")
        with pytest.raises(InvalidInputError, match="Failed to parse"):
            load_records(path)
