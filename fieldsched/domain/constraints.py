"""
Fieldsched sequencing constraints. Dataclasses only. No FastAPI, no external deps beyond dataclasses/typing.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Union

from fieldsched.domain.models import Task

ASSIGNED_ACT_STATUS = "Assigned (ACT)"


@dataclass(frozen=True)
class SequencingOptions:
    average_speed_kmh: float = 40.0
    max_travel_minutes: float = 120.0  # solo tramos tarea -> tarea, no casa -> primera tarea
    default_travel_minutes: float = 30.0  # si falta ubicación en cualquiera de los dos extremos
    default_task_duration_minutes: float = 60.0
    eligible_status: Union[str, Iterable[str]] = ASSIGNED_ACT_STATUS
    # Si se informa, sustituye a eligible_status.
    status_predicate: Optional[Callable[[Task], bool]] = None
    # None = hora local del proceso; si no, nombre IANA o "UTC".
    timezone: Optional[str] = None
    stamp_finish_date: bool = False

    def __post_init__(self) -> None:
        if not self.average_speed_kmh > 0:
            raise ValueError("average_speed_kmh must be > 0")
        for name in ("max_travel_minutes", "default_travel_minutes", "default_task_duration_minutes"):
            if not getattr(self, name) >= 0:
                raise ValueError(f"{name} must be >= 0")
        if not isinstance(self.eligible_status, str):
            # frozenset para que las opciones sigan siendo hashables e inmutables
            object.__setattr__(self, "eligible_status", frozenset(self.eligible_status))

    def is_eligible(self, task: Task) -> bool:
        if self.status_predicate is not None:
            return bool(self.status_predicate(task))
        if isinstance(self.eligible_status, str):
            return task.task_status == self.eligible_status
        return task.task_status in self.eligible_status
