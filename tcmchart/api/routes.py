# tcmchart/api/routes.py
from __future__ import annotations

import logging
from functools import lru_cache
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response
from fastapi.responses import PlainTextResponse

from tcmchart.chart import catalog
from tcmchart.chart.derive import active_location_suggestions, reconcile_cpt_codes
from tcmchart.chart.errors import (
    ChartValidationError,
    ImmutableFieldError,
    InvalidFieldValueError,
    UnknownFieldError,
)
from tcmchart.chart.schema import ClinicInfo, PatientRecord
from tcmchart.chart.updates import (
    set_field,
    set_location_comment,
    toggle_option,
    toggle_sleep,
)
from tcmchart.chart.visibility import visibility_map
from tcmchart.llm import LLMClient, OpenAILLMClient, UnconfiguredLLMClient
from tcmchart.narrative import GenerationInProgressError, NarrativeGateway
from tcmchart.services import ChartService, ChartStorageError, FileNumberChangeError
from tcmchart.store import RecordStore
from .schemas import (
    CptRequest,
    CptResponse,
    LocationRequest,
    LocationResponse,
    NewChartRequest,
    RecordRequest,
    SaveChartRequest,
    SoapNoteResponse,
    UpdateChartRequest,
    VisibilityResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _make_llm_client() -> LLMClient:
    try:
        return OpenAILLMClient()
    except RuntimeError as e:
        logger.warning("Narrative generation disabled: %s", e)
        return UnconfiguredLLMClient(str(e))


@lru_cache(maxsize=1)
def get_chart_service() -> ChartService:
    return ChartService(
        store=RecordStore(),
        gateway=NarrativeGateway(_make_llm_client()),
    )


def _busy(e: GenerationInProgressError) -> HTTPException:
    return HTTPException(status_code=409, detail=str(e))


@router.get("/catalog")
def get_catalog() -> dict:
    return catalog.catalog_as_dict()


# ----------------------------------------------------------------------
# Records
# ----------------------------------------------------------------------

@router.get("/records", response_model=List[PatientRecord])
def list_records(service: ChartService = Depends(get_chart_service)) -> List[PatientRecord]:
    return service.list()


@router.post("/records/new", response_model=PatientRecord)
def new_chart(
    payload: NewChartRequest,
    service: ChartService = Depends(get_chart_service),
) -> PatientRecord:
    """
    Blank chart pre-filled with the clinic defaults. Not stored until saved.
    """
    return service.new_chart(payload.chart_type)


@router.post("/records", response_model=PatientRecord)
def save_chart(
    payload: SaveChartRequest,
    service: ChartService = Depends(get_chart_service),
) -> PatientRecord:
    try:
        return service.save(
            payload.record,
            original_file_no=payload.original_file_no,
            generate_hpi=payload.generate_hpi,
        )
    except ChartValidationError as e:
        raise HTTPException(
            status_code=422,
            detail={"message": str(e), "missing": e.missing},
        )
    except (FileNumberChangeError, ImmutableFieldError) as e:
        raise HTTPException(status_code=409, detail=str(e))
    except GenerationInProgressError as e:
        raise _busy(e)
    except ChartStorageError as e:
        raise HTTPException(
            status_code=503,
            detail={"message": str(e), "record": e.record.to_json()},
        )


@router.post("/records/update", response_model=PatientRecord)
def update_chart(payload: UpdateChartRequest) -> PatientRecord:
    """
    Apply one edit to an in-memory chart and return the new version.
    """
    record = payload.record
    try:
        if payload.op == "set":
            return set_field(record, payload.path or "", payload.value)
        if payload.op == "toggle":
            return toggle_option(record, payload.path or "", payload.value, payload.checked)
        if payload.op == "comment":
            return set_location_comment(record, payload.location or "", payload.value or "")
        return toggle_sleep(record, payload.value, payload.checked)
    except UnknownFieldError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ImmutableFieldError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except InvalidFieldValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.get("/records/{file_no}", response_model=PatientRecord)
def get_record(
    file_no: str,
    service: ChartService = Depends(get_chart_service),
) -> PatientRecord:
    record = service.get(file_no)
    if record is None:
        raise HTTPException(status_code=404, detail="Chart not found.")
    return record


@router.get("/records/{file_no}/print", response_class=PlainTextResponse)
def print_record(
    file_no: str,
    service: ChartService = Depends(get_chart_service),
) -> str:
    text = service.printable(file_no)
    if text is None:
        raise HTTPException(status_code=404, detail="Chart not found.")
    return text


@router.delete("/records/{file_no}", status_code=204)
def delete_record(
    file_no: str,
    service: ChartService = Depends(get_chart_service),
) -> Response:
    result = service.delete(file_no)
    if not result.ok:
        raise HTTPException(status_code=503, detail=result.error)
    return Response(status_code=204)


# ----------------------------------------------------------------------
# Clinic defaults
# ----------------------------------------------------------------------

@router.get("/clinic", response_model=ClinicInfo)
def get_clinic(service: ChartService = Depends(get_chart_service)) -> ClinicInfo:
    return service.clinic_defaults()


@router.put("/clinic", response_model=ClinicInfo)
def put_clinic(
    payload: ClinicInfo,
    service: ChartService = Depends(get_chart_service),
) -> ClinicInfo:
    result = service.update_clinic_defaults(payload)
    if not result.ok:
        raise HTTPException(status_code=503, detail=result.error)
    return payload


# ----------------------------------------------------------------------
# Derivations
# ----------------------------------------------------------------------

@router.post("/derive/cpt", response_model=CptResponse)
def derive_cpt(payload: CptRequest) -> CptResponse:
    return CptResponse(
        cpt=reconcile_cpt_codes(
            payload.existing_cpt, payload.selected_treatment, payload.chart_type
        )
    )


@router.post("/derive/locations", response_model=LocationResponse)
def derive_locations(payload: LocationRequest) -> LocationResponse:
    return LocationResponse(
        suggestions=active_location_suggestions(payload.selected_complaints)
    )


@router.post("/derive/visibility", response_model=VisibilityResponse)
def derive_visibility(payload: RecordRequest) -> VisibilityResponse:
    return VisibilityResponse(fields=visibility_map(payload.record))


# ----------------------------------------------------------------------
# Narratives
# ----------------------------------------------------------------------

@router.post("/narrative/diagnosis", response_model=PatientRecord)
def narrative_diagnosis(
    payload: RecordRequest,
    service: ChartService = Depends(get_chart_service),
) -> PatientRecord:
    try:
        return service.generate_diagnosis(payload.record)
    except GenerationInProgressError as e:
        raise _busy(e)


@router.post("/narrative/soap", response_model=SoapNoteResponse)
def narrative_soap(
    payload: RecordRequest,
    service: ChartService = Depends(get_chart_service),
) -> SoapNoteResponse:
    try:
        return SoapNoteResponse(text=service.generate_soap_note(payload.record))
    except GenerationInProgressError as e:
        raise _busy(e)
