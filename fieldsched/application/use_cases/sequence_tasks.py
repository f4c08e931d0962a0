"""
Sequence tasks use case. Orchestrates loader + engine over raw records. No FastAPI.
"""

from datetime import date
from typing import Any, Optional

from fieldsched.application.config import DEFAULT_SEQUENCING_OPTIONS
from fieldsched.core.sequencing_engine.sequencer import sequence
from fieldsched.domain.constraints import SequencingOptions
from fieldsched.domain.models import SequenceResult
from fieldsched.infrastructure.record_loader import apply_stamps, load_resources, load_tasks


def sequence_records(
    task_records: list[dict[str, Any]],
    resource_records: list[dict[str, Any]],
    options: Optional[SequencingOptions] = None,
    reference_date: Optional[date] = None,
) -> SequenceResult:
    """
    Flow: raw records -> domain -> sequence -> sellos escritos en los mismos dicts.
    result.tasks es la lista de registros original (mutada in place).
    """
    if options is None:
        options = DEFAULT_SEQUENCING_OPTIONS
    tasks = load_tasks(task_records)
    resources = load_resources(resource_records)

    result = sequence(tasks, resources, options=options, reference_date=reference_date)
    apply_stamps(tasks)
    result.tasks = task_records
    return result
