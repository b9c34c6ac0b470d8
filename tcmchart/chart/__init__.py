# tcmchart/chart/__init__.py
from .kinds import ChartType, Sex
from .schema import ClinicInfo, PatientRecord, new_record, validate_for_save

__all__ = [
    "ChartType",
    "Sex",
    "ClinicInfo",
    "PatientRecord",
    "new_record",
    "validate_for_save",
]
