"""Output file naming and writing."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import structlog

from netexplore.errors import ExportError

logger = structlog.get_logger(__name__)


def format_timestamp(moment: datetime) -> str:
    """Format as YYYY-MM-DDThh:mm:ss in UTC."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S")


def output_path(output_dir: str | Path, kind: str, extension: str, moment: Optional[datetime] = None) -> Path:
    """Return ``<output_dir>/<kind>-<timestamp>.<extension>``."""
    moment = moment or datetime.now(timezone.utc)
    return Path(output_dir) / f"{kind}-{format_timestamp(moment)}.{extension}"


def write_text(path: Path, text: str) -> Path:
    """Write ``text`` to ``path`` in one go, creating the parent directory.

    Raises ExportError if the directory or file cannot be written.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
    except OSError as e:
        logger.error("Failed to open file for writing", path=str(path), error=str(e))
        raise ExportError(path, e) from e
    return path
