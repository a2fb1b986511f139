"""
CSV Review Writer

Persists one application's result set as a CSV file under a
platform-namespaced path: <output_dir>/<platform>/<app_id>.csv
"""

import csv
import logging
import os
import tempfile
from pathlib import Path
from typing import Sequence

from utils.errors import PersistError
from utils.schemas import REVIEW_FIELDS, ReviewRecord

logger = logging.getLogger(__name__)


def destination_key(platform: str, app_id: str) -> str:
    """Two-level destination namespace: platform, then app identifier."""
    return f"{platform}/{app_id}"


class CsvReviewWriter:
    """Writes review records to CSV files rooted at `output_dir`."""

    extension = "csv"

    def __init__(self, output_dir: str | Path) -> None:
        self.output_dir = Path(output_dir)

    def path_for(self, key: str) -> Path:
        return self.output_dir / f"{key}.{self.extension}"

    def persist(self, records: Sequence[ReviewRecord], key: str) -> Path:
        """
        Write all records for one destination, replacing any previous file.

        The file is written to a temporary sibling first and moved into place,
        so readers never observe a half-written CSV.

        Args:
            records: Full ordered result set for one application
            key: Destination key from destination_key()

        Returns:
            Path of the written file

        Raises:
            PersistError: If the directory or file cannot be written
        """
        output_path = self.path_for(key)

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)

            fd, tmp_name = tempfile.mkstemp(
                dir=output_path.parent, prefix=f".{output_path.stem}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                    writer = csv.writer(f)
                    writer.writerow(REVIEW_FIELDS)
                    for record in records:
                        writer.writerow(record.as_row())
                os.replace(tmp_name, output_path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise

        except OSError as e:
            error_msg = f"Failed to write {output_path}: {e}"
            logger.error(error_msg)
            raise PersistError(error_msg) from e

        logger.info("Reviews written: path=%s, rows=%d", str(output_path), len(records))
        return output_path
