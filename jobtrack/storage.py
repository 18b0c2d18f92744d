"""
JobTrack - File-based job storage.

JobStore is the only component that touches the jobs document. Every
operation re-reads the whole document and every mutation rewrites it.

Resilience:
- A missing document (or directory) is created lazily as an empty array;
  an empty file reads as no records.
- A document that exists but cannot be parsed raises PersistenceError
  instead of being treated as empty, so a bad file is never overwritten.
- Writes go to a temp file that replaces the document in one step, so a
  failed write leaves the previous document in place.
- A per-store lock serializes read-modify-write cycles within the process.
"""
import contextlib
import json
import logging
import os
import secrets
import tempfile
import threading
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from .config import settings
from .errors import NotFound, PersistenceError, ValidationError
from .schemas import JobRecord

logger = logging.getLogger("jobtrack.storage")

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_job_id() -> str:
    """Millisecond timestamp plus a random suffix, both base 36."""
    return _to_base36(int(time.time() * 1000)) + _to_base36(secrets.randbits(52))


class JobStore:
    """
    Owns the jobs JSON document.

    Usage:
        store = JobStore("data/jobs.json")
        job = store.create({"job_title": ..., "company_name": ..., ...})
        store.update(job.id, {"status": "Offer"})
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = threading.RLock()

    # --- Document I/O ---

    def _initialize(self) -> None:
        logger.info(f"Creating empty jobs document at {self.path}")
        self._write([])

    def _read(self) -> List[JobRecord]:
        if not self.path.exists():
            self._initialize()
            return []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                text = f.read()
            if not text.strip():
                return []
            raw = json.loads(text)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error(f"Jobs document {self.path} is not valid JSON: {e}")
            raise PersistenceError("Jobs document is corrupt") from e
        except OSError as e:
            logger.error(f"Error reading jobs document {self.path}: {e}")
            raise PersistenceError("Failed to read job data") from e

        if not isinstance(raw, list):
            logger.error(f"Jobs document {self.path} does not contain an array")
            raise PersistenceError("Jobs document is corrupt")

        try:
            return [JobRecord.model_validate(item) for item in raw]
        except PydanticValidationError as e:
            logger.error(f"Jobs document {self.path} holds an invalid record: {e}")
            raise PersistenceError("Jobs document is corrupt") from e

    def _write(self, jobs: List[JobRecord]) -> None:
        payload = [job.model_dump(mode="json", by_alias=True, exclude_none=True) for job in jobs]
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as e:
            logger.error(f"Error writing jobs document {self.path}: {e}")
            raise PersistenceError("Failed to save job data") from e
        finally:
            if tmp_name:
                with contextlib.suppress(OSError):
                    os.remove(tmp_name)

    # --- Operations ---

    def list_all(self) -> List[JobRecord]:
        """All records in stored order."""
        with self._lock:
            return self._read()

    def get_by_id(self, job_id: str) -> Optional[JobRecord]:
        with self._lock:
            return next((job for job in self._read() if job.id == job_id), None)

    def create(self, fields: Dict[str, Any]) -> JobRecord:
        """
        Create and persist a new record.

        Args:
            fields: snake_case job fields, already validated

        Returns:
            The stored record with its generated id and dateAdded

        Raises:
            PersistenceError: if the document cannot be read or written
        """
        with self._lock:
            jobs = self._read()
            existing_ids = {job.id for job in jobs}

            job_id = generate_job_id()
            while job_id in existing_ids:
                job_id = generate_job_id()

            data = {k: v for k, v in fields.items() if k not in ("id", "date_added")}
            try:
                job = JobRecord(
                    id=job_id,
                    date_added=datetime.now(timezone.utc),
                    **data,
                )
            except PydanticValidationError as e:
                raise ValidationError([err["msg"] for err in e.errors()]) from e

            jobs.append(job)
            self._write(jobs)
            logger.info(f"Created job {job.id} ({job.job_title} at {job.company_name})")
            return job

    def update(self, job_id: str, fields: Dict[str, Any]) -> JobRecord:
        """
        Shallow-merge fields onto an existing record and persist.

        Keys absent from fields are left untouched. The id is never
        reassigned; date_added is overwritten only if explicitly supplied.

        Raises:
            NotFound: if no record has this id
            PersistenceError: if the document cannot be read or written
        """
        with self._lock:
            jobs = self._read()
            index = next((i for i, job in enumerate(jobs) if job.id == job_id), None)
            if index is None:
                raise NotFound()

            merged = jobs[index].model_dump()
            merged.update({k: v for k, v in fields.items() if k != "id"})
            try:
                jobs[index] = JobRecord.model_validate(merged)
            except PydanticValidationError as e:
                raise ValidationError([err["msg"] for err in e.errors()]) from e

            self._write(jobs)
            logger.info(f"Updated job {job_id}: {sorted(fields)}")
            return jobs[index]

    def delete(self, job_id: str) -> bool:
        """Remove a record. Returns False if there was nothing to remove."""
        with self._lock:
            jobs = self._read()
            remaining = [job for job in jobs if job.id != job_id]
            if len(remaining) == len(jobs):
                return False

            self._write(remaining)
            logger.info(f"Deleted job {job_id}")
            return True


job_store = JobStore(settings.storage.jobs_path)


def get_job_store() -> JobStore:
    """FastAPI dependency returning the configured store."""
    return job_store
