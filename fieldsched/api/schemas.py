"""
Fieldsched API request/response schemas. Pydantic only in api layer.
"""

from datetime import date
from typing import Any

from pydantic import BaseModel, Field

from fieldsched.domain.constraints import ASSIGNED_ACT_STATUS


class SequencingOptionsSchema(BaseModel):
    average_speed_kmh: float = Field(40.0, gt=0)
    max_travel_minutes: float = Field(120.0, ge=0)
    default_travel_minutes: float = Field(30.0, ge=0)
    default_task_duration_minutes: float = Field(60.0, ge=0)
    eligible_status: list[str] = Field(default_factory=lambda: [ASSIGNED_ACT_STATUS])
    timezone: str | None = None  # IANA o "UTC"; None = hora local del servidor
    stamp_finish_date: bool = False


class SequenceRequest(BaseModel):
    # Registros tal cual los guarda la UI (camelCase); se devuelven con los mismos campos.
    tasks: list[dict[str, Any]]
    resources: list[dict[str, Any]]
    options: SequencingOptionsSchema | None = None
    reference_date: date | None = None


class SequencingErrorSchema(BaseModel):
    resource_id: str
    field: str
    message: str


class ShiftOverrunSchema(BaseModel):
    resource_id: str
    shift_end_minute: int
    finish_minute: float
    overrun_minutes: float


class SequenceResponse(BaseModel):
    tasks: list[dict[str, Any]]
    scheduled_count: int
    errors: list[SequencingErrorSchema]
    overruns: list[ShiftOverrunSchema]


class EnrichNotesRequest(BaseModel):
    tasks: list[dict[str, Any]]


class EnrichNotesResponse(BaseModel):
    tasks: list[dict[str, Any]]
