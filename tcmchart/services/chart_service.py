# tcmchart/services/chart_service.py
from __future__ import annotations

import logging
from typing import List, Optional

from tcmchart.chart.errors import (
    ChartError,
    ChartValidationError,
    ImmutableFieldError,
)
from tcmchart.chart.kinds import ChartType
from tcmchart.chart.schema import (
    ClinicInfo,
    PatientRecord,
    new_record,
    validate_for_save,
)
from tcmchart.chart.updates import set_field
from tcmchart.narrative import NarrativeGateway, NarrativeKind
from tcmchart.printing import render_chart
from tcmchart.store import RecordStore, StoreResult

logger = logging.getLogger(__name__)


class ChartStorageError(ChartError):
    """
    The record could not be written. `record` is the in-memory version
    (with any generated narrative) so the caller can retry without losing
    what was entered.
    """

    def __init__(self, record: PatientRecord, reason: Optional[str]):
        super().__init__(f"Failed to save chart {record.file_no}: {reason}")
        self.record = record
        self.reason = reason


class FileNumberChangeError(ChartError):
    def __init__(self, original: str, new: str):
        super().__init__(
            f"File number of an existing chart cannot change ({original!r} -> {new!r})"
        )
        self.original = original
        self.new = new


class ChartService:
    """
    Service that coordinates:
      - creating blank charts from the shared clinic defaults
      - drafting narratives through the NarrativeGateway
      - persisting charts and clinic defaults to the RecordStore
    """

    def __init__(self, store: RecordStore, gateway: NarrativeGateway):
        self.store = store
        self.gateway = gateway

    def new_chart(self, chart_type: ChartType) -> PatientRecord:
        return new_record(chart_type, self.store.get_clinic_defaults())

    def list(self) -> List[PatientRecord]:
        return self.store.list()

    def get(self, file_no: str) -> Optional[PatientRecord]:
        return self.store.get(file_no)

    def save(
        self,
        record: PatientRecord,
        *,
        original_file_no: Optional[str] = None,
        generate_hpi: bool = True,
    ) -> PatientRecord:
        """
        Validate, draft the present illness paragraph, then store the chart
        and write its clinic identity through to the shared defaults.

        `original_file_no` is given when an existing chart is being edited;
        its file number and chart type must not change.

        Raises:
          - ChartValidationError: required fields missing (nothing written)
          - FileNumberChangeError / ImmutableFieldError: edit would rename
            the chart or change its type (nothing written)
          - ChartStorageError: the store rejected the write
        """
        missing = validate_for_save(record)
        if missing:
            raise ChartValidationError(missing)

        if original_file_no is not None:
            if record.file_no != original_file_no:
                raise FileNumberChangeError(original_file_no, record.file_no)
            existing = self.store.get(original_file_no)
            if existing is not None and existing.chart_type != record.chart_type:
                raise ImmutableFieldError("chartType")

        if generate_hpi:
            text = self.gateway.generate_or_placeholder(NarrativeKind.HPI, record)
            record = set_field(record, "chiefComplaint.presentIllness", text)

        result = self.store.save_record(record)
        if not result.ok:
            raise ChartStorageError(record, result.error)

        logger.info("Saved chart %s (%s)", record.file_no, record.chart_type.value)
        return record

    def delete(self, file_no: str) -> StoreResult:
        return self.store.delete(file_no)

    def clinic_defaults(self) -> ClinicInfo:
        return self.store.get_clinic_defaults()

    def update_clinic_defaults(self, info: ClinicInfo) -> StoreResult:
        return self.store.set_clinic_defaults(info)

    def generate_diagnosis(self, record: PatientRecord) -> PatientRecord:
        text = self.gateway.generate_or_placeholder(NarrativeKind.DIAGNOSIS, record)
        return set_field(record, "diagnosisAndTreatment.diagnosis", text)

    def generate_soap_note(self, record: PatientRecord) -> str:
        return self.gateway.generate_or_placeholder(NarrativeKind.SOAP_NOTE, record)

    def printable(self, file_no: str) -> Optional[str]:
        record = self.store.get(file_no)
        if record is None:
            return None
        return render_chart(record)
