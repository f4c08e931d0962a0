"""
Record loader. Raw dict (camelCase, como lo guarda la UI) -> domain Task/Resource, y sellos de vuelta al dict.
"""

import logging
import math
from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from typing import Any, Optional

from fieldsched.domain.errors import InvalidInputError
from fieldsched.domain.models import Resource, Task

logger = logging.getLogger(__name__)


def _to_float(value: Any) -> Optional[float]:
    """Número o cadena numérica -> float. None si vacío, no numérico o no finito."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        f = float(value)
    except (TypeError, ValueError):
        return None
    return f if math.isfinite(f) else None


def _require_record_list(raw: Any, label: str) -> None:
    if isinstance(raw, (str, bytes, Mapping)) or not isinstance(raw, Sequence):
        raise InvalidInputError(f"{label} must be a list of records, got {type(raw).__name__}")
    for i, rec in enumerate(raw):
        if not isinstance(rec, Mapping):
            raise InvalidInputError(f"{label}[{i}] is not a record ({type(rec).__name__})")


def load_task(raw: dict) -> Task:
    importance = _to_float(raw.get("importanceScore"))
    if importance is None:
        if raw.get("importanceScore") not in (None, ""):
            logger.warning(
                "Task %s: importanceScore %r is not numeric, using 0",
                raw.get("taskId"), raw.get("importanceScore"),
            )
        importance = 0.0
    duration = _to_float(raw.get("estimatedDuration"))
    if duration is not None and duration <= 0:
        duration = None  # cero o negativa -> se aplica la duración por defecto
    return Task(
        task_id=str(raw.get("taskId") or ""),
        employee_id=str(raw.get("employeeId") or ""),
        task_status=str(raw.get("taskStatus") or ""),
        importance_score=importance,
        lat=_to_float(raw.get("lat")),
        lng=_to_float(raw.get("lng")),
        estimated_duration=duration,
        record=raw,
    )


def load_tasks(raw_tasks: list[dict]) -> list[Task]:
    """Transform raw list of dicts into list[Task]. Cada Task guarda su dict de origen."""
    _require_record_list(raw_tasks, "tasks")
    return [load_task(raw) for raw in raw_tasks]


def load_resources(raw_resources: list[dict]) -> list[Resource]:
    """Transform raw list of dicts into list[Resource]. resourceId es obligatorio."""
    _require_record_list(raw_resources, "resources")
    result: list[Resource] = []
    for i, raw in enumerate(raw_resources):
        rid = raw.get("resourceId")
        if rid is None or str(rid).strip() == "":
            raise InvalidInputError(f"resources[{i}] has no resourceId")
        home_lat = _to_float(raw.get("homeLat"))
        home_lng = _to_float(raw.get("homeLng"))
        result.append(
            Resource(
                resource_id=str(rid),
                shift_start=raw.get("shiftStart"),
                shift_end=raw.get("shiftEnd"),
                home_lat=home_lat,
                home_lng=home_lng,
            )
        )
    return result


def format_timestamp(value: datetime) -> str:
    """ISO-8601 en UTC con milisegundos y 'Z' (formato que consume la UI)."""
    utc = value.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def apply_stamps(tasks: list[Task]) -> None:
    """Copia los sellos calculados al dict de origen. El resto de campos no se toca."""
    for task in tasks:
        if task.record is None:
            continue
        if task.expected_start_date is not None:
            task.record["expectedStartDate"] = format_timestamp(task.expected_start_date)
        if task.expected_finish_date is not None:
            task.record["expectedFinishDate"] = format_timestamp(task.expected_finish_date)
