# tcmchart/store.py
from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from tcmchart.chart.schema import ClinicInfo, PatientRecord
from tcmchart.models import CLINIC_INFO_KEY, PATIENT_RECORDS_KEY, StoredValue

logger = logging.getLogger(__name__)

Mutation = Callable[[Any], Any]


@dataclass
class StoreResult:
    ok: bool
    error: Optional[str] = None


class RecordStore:
    """
    Durable storage for patient records and the shared clinic defaults.

    Records are kept as one ordered JSON array (storage order is insertion
    order) and the clinic defaults as one JSON object. Writes never raise on
    storage failure: they log, roll back and return a failed StoreResult so
    the caller keeps its in-memory state and can retry.
    """

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        if session_factory is None:
            from tcmchart.db import SessionLocal

            session_factory = SessionLocal
        self._session_factory = session_factory

    @contextmanager
    def _session(self):
        db: Session = self._session_factory()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    @staticmethod
    def _read(db: Session, key: str, default: Any) -> Any:
        row = db.get(StoredValue, key)
        if row is None or row.value is None:
            return default
        return row.value

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def _load(self, key: str, default: Any) -> Any:
        try:
            with self._session() as db:
                return self._read(db, key, default)
        except SQLAlchemyError as e:
            logger.error("Failed to load %s from storage: %s", key, e)
            return default

    def list(self) -> List[PatientRecord]:
        raw = self._load(PATIENT_RECORDS_KEY, [])
        records: List[PatientRecord] = []
        for item in raw:
            try:
                records.append(PatientRecord.model_validate(item))
            except ValidationError as e:
                file_no = item.get("fileNo") if isinstance(item, dict) else None
                logger.warning("Skipping unreadable record %s: %s", file_no, e)
        return records

    def get(self, file_no: str) -> Optional[PatientRecord]:
        for record in self.list():
            if record.file_no == file_no:
                return record
        return None

    def get_clinic_defaults(self) -> ClinicInfo:
        raw = self._load(CLINIC_INFO_KEY, {})
        try:
            return ClinicInfo.model_validate(raw)
        except ValidationError as e:
            logger.warning("Stored clinic info is unreadable, using blanks: %s", e)
            return ClinicInfo()

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def _write(self, mutations: Dict[str, Mutation], defaults: Dict[str, Any]) -> StoreResult:
        """
        Apply every mutation in one transaction. Each mutation receives the
        current stored value and returns the new one, or None to leave the
        key untouched.
        """
        try:
            with self._session() as db:
                for key, mutate in mutations.items():
                    current = self._read(db, key, defaults.get(key))
                    updated = mutate(current)
                    if updated is None:
                        continue
                    row = db.get(StoredValue, key)
                    if row is None:
                        db.add(StoredValue(key=key, value=updated))
                    else:
                        row.value = updated
        except (SQLAlchemyError, TypeError, ValueError) as e:
            logger.error("Failed to write %s to storage: %s", ", ".join(mutations), e)
            return StoreResult(ok=False, error=str(e))
        return StoreResult(ok=True)

    @staticmethod
    def _upserted(record: PatientRecord) -> Mutation:
        def mutate(items: List[dict]) -> List[dict]:
            data = record.to_json()
            updated = list(items)
            for i, item in enumerate(updated):
                if item.get("fileNo") == record.file_no:
                    updated[i] = data
                    break
            else:
                updated.append(data)
            return updated

        return mutate

    def upsert(self, record: PatientRecord) -> StoreResult:
        """
        Insert the record, or fully replace the stored one with the same
        file number.
        """
        return self._write({PATIENT_RECORDS_KEY: self._upserted(record)}, {PATIENT_RECORDS_KEY: []})

    def delete(self, file_no: str) -> StoreResult:
        def mutate(items: List[dict]) -> Optional[List[dict]]:
            remaining = [i for i in items if i.get("fileNo") != file_no]
            if len(remaining) == len(items):
                return None
            return remaining

        return self._write({PATIENT_RECORDS_KEY: mutate}, {PATIENT_RECORDS_KEY: []})

    def set_clinic_defaults(self, info: ClinicInfo) -> StoreResult:
        data = info.model_dump(mode="json", by_alias=True)
        return self._write({CLINIC_INFO_KEY: lambda _: data}, {})

    def save_clinic_from_record(self, record: PatientRecord) -> StoreResult:
        return self.set_clinic_defaults(record.clinic_info())

    def save_record(self, record: PatientRecord) -> StoreResult:
        """
        Upsert the record and write its clinic identity through to the
        shared defaults, in one transaction.
        """
        clinic = record.clinic_info().model_dump(mode="json", by_alias=True)
        return self._write(
            {
                PATIENT_RECORDS_KEY: self._upserted(record),
                CLINIC_INFO_KEY: lambda _: clinic,
            },
            {PATIENT_RECORDS_KEY: []},
        )
