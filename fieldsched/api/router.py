"""
Fieldsched API router. Calls application only. No business logic.
"""

import logging
from dataclasses import replace

from fastapi import APIRouter, HTTPException

from fieldsched.api.schemas import (
    EnrichNotesRequest,
    EnrichNotesResponse,
    SequenceRequest,
    SequenceResponse,
    SequencingErrorSchema,
    SequencingOptionsSchema,
    ShiftOverrunSchema,
)
from fieldsched.application.config import DEFAULT_SEQUENCING_OPTIONS
from fieldsched.application.note_enrichment import enrich_records
from fieldsched.application.use_cases.sequence_tasks import sequence_records
from fieldsched.domain.constraints import SequencingOptions
from fieldsched.domain.errors import InvalidInputError

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_options(schema: SequencingOptionsSchema | None) -> SequencingOptions:
    if schema is None:
        return DEFAULT_SEQUENCING_OPTIONS
    # Solo los campos enviados; el resto (p. ej. timezone) sale de la configuración.
    return replace(DEFAULT_SEQUENCING_OPTIONS, **schema.model_dump(exclude_unset=True))


@router.post("/sequence", response_model=SequenceResponse)
def post_sequence(request: SequenceRequest) -> SequenceResponse:
    """
    POST /sequence
    Accepts tasks + resources. Returns the same tasks with expectedStartDate stamped,
    plus per-resource errors and shift-end overruns.
    """
    try:
        result = sequence_records(
            request.tasks,
            request.resources,
            options=_to_options(request.options),
            reference_date=request.reference_date,
        )
    except (InvalidInputError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Sequencing failed")
        raise HTTPException(status_code=500, detail=str(e))

    return SequenceResponse(
        tasks=result.tasks,
        scheduled_count=result.scheduled_count,
        errors=[
            SequencingErrorSchema(resource_id=err.resource_id, field=err.field, message=str(err))
            for err in result.errors
        ],
        overruns=[
            ShiftOverrunSchema(
                resource_id=o.resource_id,
                shift_end_minute=o.shift_end_minute,
                finish_minute=o.finish_minute,
                overrun_minutes=o.overrun_minutes,
            )
            for o in result.overruns
        ],
    )


@router.post("/notes/enrich", response_model=EnrichNotesResponse)
def post_enrich_notes(request: EnrichNotesRequest) -> EnrichNotesResponse:
    """
    POST /notes/enrich
    Fills default fieldNotes / progressNotes where missing.
    """
    return EnrichNotesResponse(tasks=enrich_records(request.tasks))
