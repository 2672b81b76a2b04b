import json
import logging
from pathlib import Path
from typing import Optional, Union
from ..core.config import get_data_path
from ..core.models import LeadRecord

logger = logging.getLogger(__name__)

LEADS_FILE = "leads.jsonl"


class LeadLog:
    """Append-only JSON Lines log, one self-contained lead per line."""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path is not None else get_data_path(LEADS_FILE)

    def ensure_dir(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def append(self, record: LeadRecord) -> None:
        """Write one record. Raises OSError when the file cannot be written."""
        self.ensure_dir()
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(record.model_dump_json() + "\n")

    def load_recent(self, limit: int = 100) -> list[dict]:
        """Load the newest records, skipping lines that do not parse."""
        if not self.path.exists():
            return []

        records = []
        with open(self.path, "r", encoding="utf-8") as f:
            for lineno, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    records.append(json.loads(line))
                except json.JSONDecodeError:
                    logger.warning("Skipping unreadable lead log line %d in %s", lineno, self.path)
                    continue

        return records[-limit:] if limit > 0 else []
