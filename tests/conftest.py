"""Pytest configuration and shared fixtures."""

import json
import os
from pathlib import Path
from typing import Generator

import pytest

# Set test environment
os.environ.setdefault("TASKDEPS_LOG_LEVEL", "WARNING")
os.environ.setdefault("TASKDEPS_DEBUG", "false")


@pytest.fixture
def mock_settings() -> Generator:
    """Reset cached settings around a test."""
    from taskdeps.core.config import clear_settings_cache

    # Clear any cached settings
    clear_settings_cache()

    yield

    # Clear again after test
    clear_settings_cache()


@pytest.fixture
def branching_tasks() -> list:
    """T1 (done) -> T2 -> T3, plus T1 -> T4."""
    from taskdeps.dependencies.models import Task

    return [
        Task(id="T1", title="Gather receipts", completed=True),
        Task(id="T2", title="Fill in tax form", waitingForTaskIds=["T1"]),
        Task(id="T3", title="Submit tax return", waitingForTaskIds=["T2"]),
        Task(id="T4", title="File receipts", waitingForTaskIds=["T1"]),
    ]


@pytest.fixture
def fan_out_tasks() -> list:
    """T1 with two dependents, nothing completed."""
    from taskdeps.dependencies.models import Task

    return [
        Task(id="T1", title="Book venue"),
        Task(id="T2", title="Send invitations", waitingForTaskIds=["T1"]),
        Task(id="T3", title="Order catering", waitingForTaskIds=["T1"]),
    ]


@pytest.fixture
def project_tasks() -> list:
    """Tasks spread over two projects with a cross-project prerequisite."""
    from taskdeps.dependencies.models import Task

    return [
        Task(id="h1", title="Buy paint", projectId="home"),
        Task(id="h2", title="Paint fence", projectId="home", waitingForTaskIds=["h1"]),
        Task(id="w1", title="Draft budget", projectId="work", completed=True),
        Task(id="w2", title="Review budget", projectId="work", waitingForTaskIds=["w1"]),
        Task(id="w3", title="Present budget", projectId="work", waitingForTaskIds=["w2", "h2"]),
        Task(id="x1", title="Call plumber"),
    ]


@pytest.fixture
def backup_document() -> dict:
    """A backup file as exported by the task application."""
    return {
        "version": "1.0",
        "exportDate": "2025-01-09T14:30:15.000Z",
        "tasks": [
            {
                "id": "task-1",
                "title": "Collect quotes",
                "status": "completed",
                "completed": True,
                "energy": "low",
                "time": 15,
                "waitingForTaskIds": [],
                "projectId": "kitchen",
            },
            {
                "id": "task-2",
                "title": "Choose contractor",
                "status": "waiting",
                "completed": False,
                "waitingForTaskIds": ["task-1"],
                "projectId": "kitchen",
            },
            {
                "id": "task-3",
                "title": "Sign contract",
                "status": "waiting",
                "completed": False,
                "waitingForTaskIds": ["task-2"],
                "projectId": "kitchen",
            },
            {
                "id": "task-4",
                "title": "Order cabinets",
                "status": "waiting",
                "completed": False,
                "waitingForTaskIds": ["task-3", "task-99"],
                "projectId": "kitchen",
            },
            {
                "id": "task-5",
                "title": "Water plants",
                "status": "next",
                "completed": False,
                "waitingForTaskIds": None,
                "projectId": None,
            },
        ],
        "projects": [{"id": "kitchen", "title": "Kitchen remodel"}],
        "customContexts": [],
        "usageStats": {},
    }


@pytest.fixture
def tasks_file(tmp_path: Path, backup_document: dict) -> Path:
    """Write the backup document to a temporary JSON file."""
    path = tmp_path / "gtd-backup.json"
    path.write_text(json.dumps(backup_document))
    return path
