"""
Configuración por defecto del secuenciador (opciones, rutas de datos, logging).
Un solo lugar para evitar duplicar valores entre API, CLI y motor.

Environment variables override the file locations, timezone and log level.
"""

import logging
import os
from pathlib import Path

from fieldsched.domain.constraints import ASSIGNED_ACT_STATUS, SequencingOptions

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

DEFAULT_TASKS_FILE = Path(
    os.getenv("FIELDSCHED_TASKS_FILE", str(PROJECT_ROOT / "data" / "tasks.json"))
)
DEFAULT_RESOURCES_FILE = Path(
    os.getenv("FIELDSCHED_RESOURCES_FILE", str(PROJECT_ROOT / "data" / "resources.json"))
)
DEFAULT_TIMEZONE = os.getenv("FIELDSCHED_TIMEZONE") or None
DEFAULT_LOG_LEVEL = os.getenv("FIELDSCHED_LOG_LEVEL", "INFO")

# Valores de campo: 40 km/h de media, tope de 2 h entre tareas, 30 min si falta ubicación.
DEFAULT_SEQUENCING_OPTIONS = SequencingOptions(
    average_speed_kmh=40.0,
    max_travel_minutes=120.0,
    default_travel_minutes=30.0,
    default_task_duration_minutes=60.0,
    eligible_status=ASSIGNED_ACT_STATUS,
    timezone=DEFAULT_TIMEZONE,
)

LOG_FORMAT = "[%(asctime)s] %(name)s %(levelname)s  %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str | int = DEFAULT_LOG_LEVEL) -> None:
    """Single stream handler on the 'fieldsched' logger; safe to call more than once."""
    root = logging.getLogger("fieldsched")
    root.setLevel(level if isinstance(level, int) else level.upper())
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
        root.addHandler(handler)
