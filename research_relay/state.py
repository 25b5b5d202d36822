"""Plain-text file holding the id of the last delivered article."""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class CursorStore:
    """Durable single-value store for the last seen article id."""

    def __init__(self, path: str):
        self.path = Path(path)

    def load(self) -> str:
        """
        Return the stored cursor.

        Returns:
            The last saved article id, or "" if nothing was ever saved.
        """
        if not self.path.exists():
            return ""
        return self.path.read_text(encoding="utf-8").strip()

    def save(self, article_id: str) -> None:
        """
        Persist article_id as the new cursor, replacing any previous value.

        The value is written to a sibling temp file and moved into place.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(article_id)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, self.path)
        logger.info(f"Saved cursor {article_id} to {self.path}")
