"""
Run the daily sequencer over the JSON task/resource files.

Uso (desde raíz del repo):
  python -m fieldsched.application.run_sequencing
  python -m fieldsched.application.run_sequencing --date 2026-10-19 --timezone Europe/London
  python -m fieldsched.application.run_sequencing --dry-run --map schedule_map.html

Flujo:
  tasks.json + resources.json →
  (opcional) notas por defecto →
  secuenciador por recurso →
  resumen por recurso (tareas, viaje, fin, overrun) →
  tasks.json reescrito entero (atómico).
"""

import argparse
import logging
from dataclasses import replace
from datetime import date
from pathlib import Path
from typing import Optional

from fieldsched.application.config import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_RESOURCES_FILE,
    DEFAULT_SEQUENCING_OPTIONS,
    DEFAULT_TASKS_FILE,
    configure_logging,
)
from fieldsched.application.note_enrichment import enrich_records
from fieldsched.application.use_cases.sequence_tasks import sequence_records
from fieldsched.domain.errors import InvalidInputError
from fieldsched.domain.models import SequenceResult
from fieldsched.infrastructure.task_store import load_records, save_records

logger = logging.getLogger(__name__)


def _fmt_minute(minute: float) -> str:
    minute = int(minute)
    day, rest = divmod(minute, 24 * 60)
    suffix = f" (+{day}d)" if day else ""
    return f"{rest // 60:02d}:{rest % 60:02d}{suffix}"


def _print_summary(result: SequenceResult) -> None:
    print("\n--- Secuencia diaria por recurso ---")
    for rid, schedule in result.schedules.items():
        print(
            f"  {rid}: {len(schedule.entries)} tareas, "
            f"inicio {_fmt_minute(schedule.shift_start_minute)}, "
            f"fin {_fmt_minute(schedule.finish_minute)}, "
            f"viaje {schedule.total_travel_minutes:.0f} min"
        )
        for entry in schedule.entries:
            print(
                f"      {_fmt_minute(entry.start_minute)}  {entry.task_id}"
                f"  (+{entry.travel_minutes:.0f} viaje, {entry.duration_minutes:.0f} min)"
            )
    for overrun in result.overruns:
        print(
            f"  AVISO: {overrun.resource_id} termina {overrun.overrun_minutes:.0f} min "
            f"después del fin de turno ({_fmt_minute(overrun.shift_end_minute)})"
        )
    for err in result.errors:
        print(f"  ERROR: {err}")


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Fieldsched: secuenciación diaria de tareas por técnico"
    )
    parser.add_argument("--tasks", type=Path, default=DEFAULT_TASKS_FILE, help="JSON de tareas")
    parser.add_argument(
        "--resources", type=Path, default=DEFAULT_RESOURCES_FILE, help="JSON de recursos"
    )
    parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Fecha de referencia YYYY-MM-DD (por defecto hoy)",
    )
    parser.add_argument("--timezone", default=None, help="Zona IANA o UTC (por defecto local)")
    parser.add_argument(
        "--eligible-status",
        nargs="+",
        default=None,
        help="Estados planificables (por defecto 'Assigned (ACT)')",
    )
    parser.add_argument(
        "--stamp-finish", action="store_true", help="Escribir también expectedFinishDate"
    )
    parser.add_argument(
        "--enrich-notes", action="store_true", help="Rellenar fieldNotes/progressNotes vacíos"
    )
    parser.add_argument("--map", type=Path, default=None, help="Guardar mapa Folium en esta ruta")
    parser.add_argument("--dry-run", action="store_true", help="No reescribir el fichero de tareas")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING...")
    args = parser.parse_args(argv)

    configure_logging(args.log_level or DEFAULT_LOG_LEVEL)

    for p in (args.tasks, args.resources):
        if not p.exists():
            print(f"ERROR: no existe el fichero {p}")
            return 1

    options = DEFAULT_SEQUENCING_OPTIONS
    overrides = {}
    if args.timezone is not None:
        overrides["timezone"] = args.timezone
    if args.eligible_status:
        overrides["eligible_status"] = args.eligible_status
    if args.stamp_finish:
        overrides["stamp_finish_date"] = True
    if overrides:
        options = replace(options, **overrides)
    logger.debug("Sequencing options: %s", options)

    try:
        task_records = load_records(args.tasks)
        resource_records = load_records(args.resources)
        if args.enrich_notes:
            task_records = enrich_records(task_records)
        result = sequence_records(
            task_records, resource_records, options=options, reference_date=args.date
        )
    except (InvalidInputError, ValueError) as e:
        print(f"ERROR: {e}")
        return 1

    print(f"Tareas cargadas: {len(task_records)} desde {args.tasks}")
    print(f"Recursos cargados: {len(resource_records)} desde {args.resources}")
    _print_summary(result)

    if args.map is not None:
        from fieldsched.debug.visualize_schedule import visualize_schedule
        from fieldsched.infrastructure.record_loader import load_resources

        visualize_schedule(result, load_resources(resource_records)).save(str(args.map))
        print(f"Mapa guardado en: {args.map}")

    if args.dry_run:
        print("Dry run: no se reescribe el fichero de tareas.")
    else:
        save_records(args.tasks, result.tasks)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
