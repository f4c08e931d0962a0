"""
Secuenciador diario (motor). Orden por prioridad, determinista, una sola pasada. No I/O.

Por recurso:
  tareas elegibles -> orden por importance_score desc (estable) ->
  cursor = inicio de turno -> [tramo de viaje + tarea]* -> sello de expected_start_date.
"""

import logging
from collections import defaultdict
from collections.abc import Mapping, Sequence
from datetime import date, tzinfo
from functools import reduce
from typing import NamedTuple, Optional

from fieldsched.core.sequencing_engine.clock import (
    parse_clock_minutes,
    resolve_timezone,
    stamp,
    today_in,
)
from fieldsched.core.sequencing_engine.travel_adapter import (
    HaversineTravelAdapter,
    TravelAdapter,
    home_leg_minutes,
    task_leg_minutes,
)
from fieldsched.domain.constraints import SequencingOptions
from fieldsched.domain.errors import InvalidInputError, TimeParseError
from fieldsched.domain.models import (
    Resource,
    ResourceSchedule,
    ScheduledTask,
    SequenceResult,
    ShiftOverrun,
    Task,
)

logger = logging.getLogger(__name__)


class _Cursor(NamedTuple):
    minute: float
    previous: Optional[Task]
    entries: tuple[ScheduledTask, ...]


def order_by_priority(tasks: list[Task]) -> list[Task]:
    """importance_score descendente; sorted() es estable, el orden de entrada desempata."""
    return sorted(tasks, key=lambda t: -t.importance_score)


def task_duration_minutes(task: Task, options: SequencingOptions) -> float:
    """Duración en minutos; ausente, cero o negativa -> default_task_duration_minutes."""
    d = task.estimated_duration
    return d if d and d > 0 else options.default_task_duration_minutes


def sequence_resource(
    resource: Resource,
    tasks: list[Task],
    options: SequencingOptions,
    reference_date: date,
    adapter: TravelAdapter,
    tz: Optional[tzinfo] = None,
) -> Optional[ResourceSchedule]:
    """
    Build the day for one resource. Returns None when it has no eligible task.
    Nothing is written to the tasks here; see apply_schedule.
    """
    eligible = [
        t for t in tasks
        if t.employee_id == resource.resource_id and options.is_eligible(t)
    ]
    if not eligible:
        return None

    ordered = order_by_priority(eligible)
    shift_start = parse_clock_minutes(resource.shift_start, resource.resource_id)

    def _step(cursor: _Cursor, task: Task) -> _Cursor:
        if cursor.previous is None:
            travel = home_leg_minutes(resource, task, adapter)
        else:
            travel = task_leg_minutes(cursor.previous, task, adapter, options)
        start_minute = cursor.minute + travel
        duration = task_duration_minutes(task, options)
        entry = ScheduledTask(
            task=task,
            travel_minutes=travel,
            start_minute=start_minute,
            duration_minutes=duration,
            start=stamp(reference_date, start_minute, tz, resource.resource_id),
            finish=stamp(reference_date, start_minute + duration, tz, resource.resource_id),
        )
        return _Cursor(start_minute + duration, task, cursor.entries + (entry,))

    final = reduce(_step, ordered, _Cursor(float(shift_start), None, ()))
    return ResourceSchedule(
        resource_id=resource.resource_id,
        shift_start_minute=shift_start,
        shift_end_minute=None,
        entries=list(final.entries),
    )


def apply_schedule(schedule: ResourceSchedule, options: SequencingOptions) -> None:
    """Escribe los sellos en las tareas (in place). Solo expected_start_date salvo stamp_finish_date."""
    for entry in schedule.entries:
        entry.task.expected_start_date = entry.start
        if options.stamp_finish_date:
            entry.task.expected_finish_date = entry.finish


def _require_records(items: object, kind: type, label: str) -> None:
    if isinstance(items, (str, bytes, Mapping)) or not isinstance(items, Sequence):
        raise InvalidInputError(
            f"{label} must be a sequence of {kind.__name__} records, got {type(items).__name__}"
        )
    for i, item in enumerate(items):
        if not isinstance(item, kind):
            raise InvalidInputError(
                f"{label}[{i}] is not a {kind.__name__} record ({type(item).__name__})"
            )


def _shift_end_minute(resource: Resource, errors: list) -> Optional[int]:
    if resource.shift_end is None or resource.shift_end == "":
        return None
    try:
        return parse_clock_minutes(resource.shift_end, resource.resource_id, field="shiftEnd")
    except TimeParseError as exc:
        # Se informa pero el recurso se secuencia igual: shiftEnd solo alimenta el aviso de overrun.
        logger.warning("Resource %s: %s", resource.resource_id, exc)
        errors.append(exc)
        return None


def sequence(
    tasks: list[Task],
    resources: list[Resource],
    options: Optional[SequencingOptions] = None,
    reference_date: Optional[date] = None,
    adapter: Optional[TravelAdapter] = None,
) -> SequenceResult:
    """
    1. Group tasks by employee_id.
    2. Per resource (independent): filter eligible, order by priority, fold the cursor.
    3. Stamp expected_start_date on the tasks of every resource that sequenced cleanly.
    4. Collect per-resource TimeParseErrors and shift-end overruns.
    Returns SequenceResult whose .tasks is the same list that came in.
    """
    if options is None:
        options = SequencingOptions()
    _require_records(tasks, Task, "tasks")
    _require_records(resources, Resource, "resources")

    tz = resolve_timezone(options.timezone)
    if reference_date is None:
        reference_date = today_in(tz)
    if adapter is None:
        adapter = HaversineTravelAdapter(speed_kmh=options.average_speed_kmh)

    tasks_by_resource: dict[str, list[Task]] = defaultdict(list)
    for t in tasks:
        tasks_by_resource[t.employee_id].append(t)

    result = SequenceResult(tasks=tasks)
    seen: set[str] = set()
    for resource in resources:
        rid = resource.resource_id
        if rid in seen:
            logger.warning("Duplicate resource %s ignored; first occurrence wins", rid)
            continue
        seen.add(rid)
        try:
            schedule = sequence_resource(
                resource, tasks_by_resource.get(rid, []), options, reference_date, adapter, tz
            )
        except TimeParseError as exc:
            logger.warning("Resource %s not sequenced: %s", rid, exc)
            result.errors.append(exc)
            continue
        if schedule is None:
            logger.debug("Resource %s has no eligible tasks", rid)
            continue

        schedule.shift_end_minute = _shift_end_minute(resource, result.errors)
        apply_schedule(schedule, options)
        result.schedules[rid] = schedule
        logger.debug(
            "Resource %s: %d tasks, %.1f travel min, finish at minute %.1f",
            rid, len(schedule.entries), schedule.total_travel_minutes, schedule.finish_minute,
        )

        if schedule.overrun_minutes > 0:
            overrun = ShiftOverrun(
                resource_id=rid,
                shift_end_minute=schedule.effective_shift_end_minute,
                finish_minute=schedule.finish_minute,
            )
            logger.warning(
                "Resource %s overruns shift end by %.0f min", rid, overrun.overrun_minutes
            )
            result.overruns.append(overrun)

    logger.info(
        "Sequenced %d tasks across %d resources (%d errors, %d overruns)",
        result.scheduled_count, len(result.schedules), len(result.errors), len(result.overruns),
    )
    return result
