"""
Fieldsched domain models. Dataclasses only. No FastAPI, no external deps beyond dataclasses/typing.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from fieldsched.domain.errors import TimeParseError


@dataclass(frozen=True)
class Resource:
    """Técnico: ventana de turno (hora del día, sin fecha) y domicilio opcional."""
    resource_id: str
    shift_start: str
    shift_end: Optional[str] = None
    home_lat: Optional[float] = None
    home_lng: Optional[float] = None

    @property
    def has_home(self) -> bool:
        return self.home_lat is not None and self.home_lng is not None


@dataclass
class Task:
    task_id: str
    employee_id: str
    task_status: str
    importance_score: float = 0.0
    lat: Optional[float] = None
    lng: Optional[float] = None
    estimated_duration: Optional[float] = None  # minutos; None/0 -> default
    # Salida del motor
    expected_start_date: Optional[datetime] = None
    expected_finish_date: Optional[datetime] = None
    # Registro original (dict camelCase) del que se cargó; se escribe de vuelta in place.
    record: Optional[dict[str, Any]] = field(default=None, repr=False, compare=False)

    @property
    def has_location(self) -> bool:
        return self.lat is not None and self.lng is not None


@dataclass(frozen=True)
class ScheduledTask:
    """One stop in a resource's day: travel leg into it, then the work itself."""
    task: Task
    travel_minutes: float
    start_minute: float  # minutos desde medianoche del día de referencia (puede pasar de 1440)
    duration_minutes: float
    start: datetime
    finish: datetime

    @property
    def task_id(self) -> str:
        return self.task.task_id

    @property
    def finish_minute(self) -> float:
        return self.start_minute + self.duration_minutes


@dataclass
class ResourceSchedule:
    resource_id: str
    shift_start_minute: int
    shift_end_minute: Optional[int]
    entries: list[ScheduledTask]

    @property
    def finish_minute(self) -> float:
        if not self.entries:
            return float(self.shift_start_minute)
        return self.entries[-1].finish_minute

    @property
    def total_travel_minutes(self) -> float:
        return sum(e.travel_minutes for e in self.entries)

    @property
    def effective_shift_end_minute(self) -> Optional[int]:
        """Fin de turno en la misma escala que el cursor; turno nocturno (fin < inicio) acaba al día siguiente."""
        if self.shift_end_minute is None:
            return None
        if self.shift_end_minute < self.shift_start_minute:
            return self.shift_end_minute + 24 * 60
        return self.shift_end_minute

    @property
    def overrun_minutes(self) -> float:
        end = self.effective_shift_end_minute
        if end is None:
            return 0.0
        return max(0.0, self.finish_minute - end)


@dataclass(frozen=True)
class ShiftOverrun:
    """Warning signal: the last task of the day finishes after shift end."""
    resource_id: str
    shift_end_minute: int  # turno nocturno: ya sumado 1440
    finish_minute: float

    @property
    def overrun_minutes(self) -> float:
        return self.finish_minute - self.shift_end_minute


@dataclass
class SequenceResult:
    tasks: list[Any]
    schedules: dict[str, ResourceSchedule] = field(default_factory=dict)
    errors: list[TimeParseError] = field(default_factory=list)
    overruns: list[ShiftOverrun] = field(default_factory=list)

    @property
    def scheduled_count(self) -> int:
        return sum(len(s.entries) for s in self.schedules.values())
