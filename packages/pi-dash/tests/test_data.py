"""Tests for pi.dash.data -- records and providers."""

from __future__ import annotations

import dataclasses
import json
from pathlib import Path

import pytest

from pi.dash.data import (
    LOGS,
    SERVERS,
    TASKS,
    JsonDataProvider,
    LogEntry,
    ServerRecord,
    StaticDataProvider,
    Task,
    server_from_dict,
    task_from_dict,
)
from pi.dash.errors import DashError, DataProviderError


class TestRecords:
    def test_fixtures(self) -> None:
        assert [t.name for t in TASKS] == ["Task1", "Task2", "Task3"]
        assert [entry.level for entry in LOGS] == ["INFO", "WARN", "ERROR"]
        assert [s.status for s in SERVERS] == ["Up", "Fail", "Up"]

    def test_is_up(self) -> None:
        assert SERVERS[0].is_up
        assert not SERVERS[1].is_up

    def test_records_are_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            TASKS[0].name = "changed"  # type: ignore[misc]

    def test_task_from_string_or_dict(self) -> None:
        assert task_from_dict("Deploy") == Task("Deploy")
        assert task_from_dict({"name": "Deploy"}) == Task("Deploy")

    def test_server_coords_are_floats(self) -> None:
        server = server_from_dict(
            {"host": "h", "location": "l", "coords": [1, 2], "status": "Up"}
        )
        assert server.coords == (1.0, 2.0)


class TestStaticDataProvider:
    def test_defaults_to_fixtures(self) -> None:
        provider = StaticDataProvider()
        assert tuple(provider.tasks()) == TASKS
        assert tuple(provider.logs()) == LOGS
        assert tuple(provider.servers()) == SERVERS

    def test_records_are_copied(self) -> None:
        tasks = [Task("a")]
        provider = StaticDataProvider(tasks=tasks)
        tasks.append(Task("b"))
        assert len(provider.tasks()) == 1


class TestJsonDataProvider:
    def _write(self, tmp_path: Path, data: object) -> Path:
        path = tmp_path / "data.json"
        path.write_text(json.dumps(data))
        return path

    def test_loads_records(self, tmp_path: Path) -> None:
        path = self._write(
            tmp_path,
            {
                "tasks": ["Deploy", {"name": "Rollback"}],
                "logs": [{"event": "Disk full", "level": "CRITICAL"}],
                "servers": [
                    {"host": "10.1.0.1", "location": "Oslo", "coords": [59.91, 10.75], "status": "Up"}
                ],
            },
        )
        provider = JsonDataProvider(path)
        assert list(provider.tasks()) == [Task("Deploy"), Task("Rollback")]
        assert list(provider.logs()) == [LogEntry("Disk full", "CRITICAL")]
        assert list(provider.servers()) == [ServerRecord("10.1.0.1", "Oslo", (59.91, 10.75), "Up")]

    def test_missing_sections_are_empty(self, tmp_path: Path) -> None:
        provider = JsonDataProvider(self._write(tmp_path, {"tasks": ["only"]}))
        assert list(provider.logs()) == []
        assert list(provider.servers()) == []

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(DataProviderError):
            JsonDataProvider(tmp_path / "nope.json")

    def test_malformed_json(self, tmp_path: Path) -> None:
        path = tmp_path / "data.json"
        path.write_text("{")
        with pytest.raises(DataProviderError):
            JsonDataProvider(path)

    def test_top_level_must_be_object(self, tmp_path: Path) -> None:
        with pytest.raises(DataProviderError):
            JsonDataProvider(self._write(tmp_path, ["Task1"]))

    @pytest.mark.parametrize(
        "data",
        [
            {"logs": [{"event": "no level"}]},
            {"servers": [{"host": "h", "location": "l", "coords": [1], "status": "Up"}]},
            {"servers": [{"host": "h", "location": "l", "coords": ["a", "b"], "status": "Up"}]},
            {"tasks": [{"title": "wrong key"}]},
        ],
    )
    def test_malformed_record(self, tmp_path: Path, data: dict) -> None:
        with pytest.raises(DataProviderError):
            JsonDataProvider(self._write(tmp_path, data))

    def test_error_is_a_dash_error(self, tmp_path: Path) -> None:
        with pytest.raises(DashError):
            JsonDataProvider(tmp_path / "nope.json")
