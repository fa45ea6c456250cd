"""Dashboard records and the providers that supply them.

The render pipeline only sees the ``DataProvider`` protocol, so the built-in
fixtures can be swapped for a JSON file (or anything else) without touching
the views.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

from pi.dash.errors import DataProviderError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Task:
    name: str


@dataclass(frozen=True)
class LogEntry:
    event: str
    level: str


@dataclass(frozen=True)
class ServerRecord:
    host: str
    location: str
    coords: tuple[float, float]  # (lat, lon)
    status: str

    @property
    def is_up(self) -> bool:
        return self.status == "Up"


class DataProvider(Protocol):
    def tasks(self) -> Sequence[Task]: ...

    def logs(self) -> Sequence[LogEntry]: ...

    def servers(self) -> Sequence[ServerRecord]: ...


TASKS = (Task("Task1"), Task("Task2"), Task("Task3"))

LOGS = (
    LogEntry("Event1", "INFO"),
    LogEntry("Event2", "WARN"),
    LogEntry("Event3", "ERROR"),
)

SERVERS = (
    ServerRecord("10.0.0.1", "Chengdu", (30.57, 104.07), "Up"),
    ServerRecord("10.0.0.2", "Shanghai", (31.23, 121.47), "Fail"),
    ServerRecord("10.0.0.3", "Xi'an", (34.27, 108.95), "Up"),
)


class StaticDataProvider:
    """Serves fixed records; the built-in fixtures unless others are given."""

    def __init__(
        self,
        tasks: Sequence[Task] = TASKS,
        logs: Sequence[LogEntry] = LOGS,
        servers: Sequence[ServerRecord] = SERVERS,
    ) -> None:
        self._tasks = tuple(tasks)
        self._logs = tuple(logs)
        self._servers = tuple(servers)

    def tasks(self) -> Sequence[Task]:
        return self._tasks

    def logs(self) -> Sequence[LogEntry]:
        return self._logs

    def servers(self) -> Sequence[ServerRecord]:
        return self._servers


# --- JSON ---


def task_from_dict(data: Any) -> Task:
    if isinstance(data, str):
        return Task(data)
    return Task(name=str(data["name"]))


def log_from_dict(data: dict) -> LogEntry:
    return LogEntry(event=str(data["event"]), level=str(data["level"]))


def server_from_dict(data: dict) -> ServerRecord:
    lat, lon = data["coords"]
    return ServerRecord(
        host=str(data["host"]),
        location=str(data["location"]),
        coords=(float(lat), float(lon)),
        status=str(data["status"]),
    )


class JsonDataProvider(StaticDataProvider):
    """Loads records from a JSON file shaped like::

        {"tasks": ["Task1", ...],
         "logs": [{"event": "Event1", "level": "INFO"}, ...],
         "servers": [{"host": "10.0.0.1", "location": "Chengdu",
                      "coords": [30.57, 104.07], "status": "Up"}, ...]}

    Missing sections are empty.  The file is read once, at construction.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise DataProviderError(f"Cannot read data file {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise DataProviderError(f"Data file {self.path} must contain a JSON object")

        try:
            super().__init__(
                tasks=[task_from_dict(t) for t in data.get("tasks", [])],
                logs=[log_from_dict(entry) for entry in data.get("logs", [])],
                servers=[server_from_dict(s) for s in data.get("servers", [])],
            )
        except (KeyError, TypeError, ValueError) as e:
            raise DataProviderError(f"Malformed record in {self.path}: {e}") from e

        logger.info(
            "Loaded %d tasks, %d logs, %d servers from %s",
            len(self._tasks),
            len(self._logs),
            len(self._servers),
            self.path,
        )
