# tcmchart/models.py
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import String, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from tcmchart.db import Base


CLINIC_INFO_KEY = "clinicTherapistInfo"
PATIENT_RECORDS_KEY = "patientRecords"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StoredValue(Base):
    """
    One JSON document per key.

    The chart data lives under two keys: the shared clinic defaults
    (CLINIC_INFO_KEY) and the ordered array of patient records
    (PATIENT_RECORDS_KEY).
    """
    __tablename__ = "stored_values"

    key: Mapped[str] = mapped_column(String, primary_key=True)
    value: Mapped[Any] = mapped_column(JSON, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=_utcnow, onupdate=_utcnow
    )
