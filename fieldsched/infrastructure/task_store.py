"""
JSON task store. Lee la colección completa y la reemplaza de forma atómica al guardar.
No hay parches por registro: siempre se escribe el fichero entero.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from fieldsched.domain.errors import InvalidInputError

logger = logging.getLogger(__name__)


def load_records(path: Path) -> list[dict[str, Any]]:
    """Load a JSON array of records. InvalidInputError if the file is not valid JSON or not an array."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise InvalidInputError(f"Failed to parse {path.name}: {exc}") from exc
    if not isinstance(data, list):
        raise InvalidInputError(f"{path.name} is not an array")
    logger.debug("Loaded %d records from %s", len(data), path)
    return data


def save_records(path: Path, records: list[dict[str, Any]]) -> None:
    """Escritura atómica: fichero temporal en el mismo directorio + os.replace."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(records, f, indent=2, ensure_ascii=False)
            f.write("\n")
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
    logger.info("Wrote %d records to %s", len(records), path)
