# tcmchart/api/schemas.py
from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from tcmchart.chart.kinds import ChartType
from tcmchart.chart.schema import PatientRecord


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NewChartRequest(ApiModel):
    chart_type: ChartType = ChartType.NEW


class SaveChartRequest(ApiModel):
    record: PatientRecord
    # set when editing an existing chart
    original_file_no: Optional[str] = None
    generate_hpi: bool = True


class UpdateChartRequest(ApiModel):
    record: PatientRecord
    op: Literal["set", "toggle", "comment", "sleep"]
    # field path for "set" and "toggle"
    path: Optional[str] = None
    # tongue body location for "comment"
    location: Optional[str] = None
    value: Any = None
    checked: bool = True


class RecordRequest(ApiModel):
    record: PatientRecord


class CptRequest(ApiModel):
    existing_cpt: str = ""
    selected_treatment: str = ""
    chart_type: ChartType


class CptResponse(ApiModel):
    cpt: str


class LocationRequest(ApiModel):
    selected_complaints: List[str]


class LocationResponse(ApiModel):
    suggestions: List[str]


class VisibilityResponse(ApiModel):
    fields: Dict[str, bool]


class SoapNoteResponse(ApiModel):
    text: str
