"""Task snapshot loading.

Reads the tasks out of either a bare JSON list or the application's
backup document (``{"version": ..., "tasks": [...], "projects": [...]}``).
"""

import json
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import TypeAdapter, ValidationError

from taskdeps.core.exceptions import TaskLoadError
from taskdeps.dependencies.models import Task

_task_list = TypeAdapter(list[Task])


def parse_tasks(data: Any) -> list[Task]:
    """
    Validate decoded JSON into tasks.

    Args:
        data: A list of task records, or a mapping with a ``tasks`` list.

    Returns:
        Tasks in document order.

    Raises:
        TaskLoadError: If the shape is wrong or a task record is invalid.
    """
    if isinstance(data, dict):
        if "tasks" not in data or not isinstance(data["tasks"], list):
            raise TaskLoadError("Invalid task snapshot: missing or invalid tasks array")
        data = data["tasks"]

    if not isinstance(data, list):
        raise TaskLoadError("Invalid task snapshot: expected a list of tasks")

    try:
        return _task_list.validate_python(data)
    except ValidationError as e:
        raise TaskLoadError(f"Invalid task record: {e}") from e


def load_tasks(path: str | Path) -> list[Task]:
    """
    Load tasks from a JSON file.

    Args:
        path: Path to a task list or backup document.

    Returns:
        Tasks in document order.

    Raises:
        TaskLoadError: If the file cannot be read or parsed.
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise TaskLoadError(f"Cannot read {path}: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise TaskLoadError(f"Invalid JSON in {path}: {e}") from e

    tasks = parse_tasks(data)
    logger.info(f"Loaded {len(tasks)} tasks from {path}")
    return tasks
