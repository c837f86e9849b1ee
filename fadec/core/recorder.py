"""Flight data recorder and CSV export.

Snapshots are flattened into single-level records and written as JSON
lines to gzip files named ``<prefix>_<NN>.jsonl.gz``.  A new numbered
file is opened after ``max_events_per_file`` records.  The recorder is a
passive observer: I/O errors are logged and never reach the control loop.
"""

import csv
import gzip
import json
import logging
import re
from collections import deque
from datetime import datetime, timezone
from pathlib import Path

from fadec.core.state import Snapshot

logger = logging.getLogger(__name__)

MAX_EVENTS_PER_FILE = 20 * 60 * 15
FILE_SUFFIX = ".jsonl.gz"


class FlightDataRecorder:
    """Buffers snapshot records and flushes them to rolling gzip files."""

    def __init__(
        self,
        directory: str | Path = "recordings",
        prefix: str | None = None,
        buffer_size: int = 100,
        max_events_per_file: int = MAX_EVENTS_PER_FILE,
    ):
        self.directory = Path(directory)
        self.prefix = prefix or datetime.now(timezone.utc).strftime("%Y-%m-%dT%H-%M-%SZ")
        self.buffer_size = buffer_size
        self.max_events_per_file = max_events_per_file

        self._buffer: deque[dict] = deque()
        self._file = 1
        self._events_in_file = 0
        self._total_records = 0
        logger.info("Recording flight data using the %s prefix", self.prefix)

    @property
    def current_path(self) -> Path:
        return self.directory / f"{self.prefix}_{self._file:02d}{FILE_SUFFIX}"

    @property
    def total_records(self) -> int:
        return self._total_records

    def publish(self, snapshot: Snapshot):
        """Record a snapshot; flushes once the buffer is full."""
        self._buffer.append(snapshot.to_record())
        self._total_records += 1
        if len(self._buffer) >= self.buffer_size:
            self.flush()

    def flush(self) -> int:
        """Write buffered records; returns how many were written."""
        written = 0
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            while self._buffer:
                if self._events_in_file >= self.max_events_per_file:
                    self._file += 1
                    self._events_in_file = 0
                    logger.info("Opened %s for logging", self.current_path)

                room = self.max_events_per_file - self._events_in_file
                batch = [self._buffer.popleft() for _ in range(min(room, len(self._buffer)))]
                with gzip.open(self.current_path, "at", encoding="utf-8") as f:
                    for record in batch:
                        f.write(json.dumps(record) + "\n")
                self._events_in_file += len(batch)
                written += len(batch)
        except OSError as e:
            logger.error("Flight data recorder write failed (%s): %s", self.current_path, e)
            self._buffer.clear()
        return written

    def close(self):
        self.flush()


def find_splits(path: str | Path) -> tuple[str, int] | None:
    """Split ``<stem>_<NN>.jsonl.gz`` into ``(stem, NN)``."""
    name = str(path)
    if not name.endswith(FILE_SUFFIX):
        return None
    match = re.match(r"^(.*)_(\d+)$", name[: -len(FILE_SUFFIX)])
    if not match:
        return None
    return match.group(1), int(match.group(2))


def read_records(path: str | Path):
    """Yield records from a recording, following its numbered continuation files."""
    splits = find_splits(path)
    current = Path(path)
    while True:
        logger.info("Processing %s", current)
        with gzip.open(current, "rt", encoding="utf-8") as f:
            for line in f:
                if line.strip():
                    yield json.loads(line)

        if splits is None:
            return
        splits = (splits[0], splits[1] + 1)
        current = Path(f"{splits[0]}_{splits[1]:02d}{FILE_SUFFIX}")
        if not current.exists():
            return


def export_csv(input_path: str | Path, output_path: str | Path | None = None) -> Path:
    """Convert a recording (and its continuation files) to a single CSV.

    Without ``output_path`` the CSV is written next to the input as
    ``<stem>.csv``.
    """
    if output_path is None:
        splits = find_splits(input_path)
        stem = splits[0] if splits else str(input_path).removesuffix(FILE_SUFFIX)
        output_path = Path(f"{stem}.csv")
    output_path = Path(output_path)

    records = 0
    with open(output_path, "w", newline="", encoding="utf-8") as out:
        writer = None
        for record in read_records(input_path):
            if writer is None:
                writer = csv.DictWriter(out, fieldnames=list(record))
                writer.writeheader()
            writer.writerow(record)
            records += 1

    logger.info("Processed %d records into %s", records, output_path)
    return output_path
