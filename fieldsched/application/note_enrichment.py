"""
Note enrichment. Rellena fieldNotes y progressNotes por defecto cuando faltan.
Colaborador externo del secuenciador; nunca toca los campos de planificación.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from fieldsched.infrastructure.record_loader import format_timestamp

DISPATCHER_NOTE_OFFSET = timedelta(minutes=45)


def build_field_notes(record: dict[str, Any]) -> str:
    pc = f"Postcode {record['postCode']}" if record.get("postCode") else "Unknown postcode"
    kind = f"Type {record['taskType']}" if record.get("taskType") else "Unknown type"
    skill = f"Skill {record['primarySkill']}" if record.get("primarySkill") else "Unknown skill"
    return (
        "On-site observation:\n"
        f"- {pc}\n"
        f"- {kind}\n"
        f"- {skill}\n"
        "Actions:\n"
        "- Verified equipment and recorded measurements\n"
        "- Spoke with resident; confirmed access\n"
        "Notes:\n"
        "- Minor obstruction near DP; requires follow-up."
    )


def build_progress_notes(record: dict[str, Any], now: datetime) -> list[dict[str, Any]]:
    """
    - Lista no vacía: se conserva.
    - Texto no vacío: una entrada 'Imported'.
    - Si no: dos entradas por defecto (System ahora, Dispatcher 45 min antes).
    """
    notes = record.get("progressNotes")
    status = record.get("taskStatus") or ""
    if isinstance(notes, list) and notes:
        return notes
    if isinstance(notes, str) and notes.strip():
        return [
            {
                "ts": format_timestamp(now),
                "status": status,
                "text": notes.strip(),
                "source": "Imported",
            }
        ]
    return [
        {
            "ts": format_timestamp(now),
            "status": status or "Logged",
            "text": "Initial site review captured from legacy system.",
            "source": "System",
        },
        {
            "ts": format_timestamp(now - DISPATCHER_NOTE_OFFSET),
            "status": status or "Follow-up",
            "text": "Awaiting confirmation from field engineer regarding access.",
            "source": "Dispatcher",
        },
    ]


def enrich_record(record: dict[str, Any], now: datetime) -> dict[str, Any]:
    out = dict(record)
    if not record.get("fieldNotes"):
        out["fieldNotes"] = build_field_notes(record)
    out["progressNotes"] = build_progress_notes(record, now)
    return out


def enrich_records(
    records: list[dict[str, Any]], now: Optional[datetime] = None
) -> list[dict[str, Any]]:
    """Devuelve dicts nuevos; los de entrada no se modifican."""
    if now is None:
        now = datetime.now(timezone.utc)
    return [enrich_record(r, now) for r in records]
