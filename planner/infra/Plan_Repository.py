"""Plan repository: whole-document persistence of the plan book in one JSON file."""
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional

from planner.domain.PlanBook import PlanBook
from planner.infra.paths import STORE_FILE
from planner.utilities.validators import DocumentValidationError, validate_document

logger = logging.getLogger(__name__)


class PlanRepository:
    def __init__(self, store_file: Optional[Path] = None):
        self.store_file = Path(store_file) if store_file else STORE_FILE

    def load(self) -> PlanBook:
        """Read the stored document.

        Rules:
          - Missing store -> a fresh book with one 'Default' plan (written back).
          - Unreadable JSON or a document failing validation -> the same fresh
            book; the bad file is left in place and an error is logged.
        """
        if not self.store_file.exists():
            book = PlanBook()
            self.save(book)
            return book
        try:
            with open(self.store_file, "r", encoding="utf-8") as f:
                raw = json.load(f)
            return PlanBook.from_dict(validate_document(raw))
        except json.JSONDecodeError as e:
            logger.error("Invalid JSON in plan store %s: %s", self.store_file, e)
        except DocumentValidationError as e:
            logger.error("Plan store %s rejected: %s", self.store_file, e.reason)
        return PlanBook()

    def save(self, book: PlanBook) -> None:
        """Atomic write: temp file in the same directory, then move over the store."""
        directory = self.store_file.parent
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".plans_", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(book.to_dict(), tmp, ensure_ascii=False)
            shutil.move(tmp_path, self.store_file)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
