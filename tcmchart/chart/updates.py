# tcmchart/chart/updates.py
"""
Edits to a chart as "replace at path" operations.

Records are immutable; every function here returns a new record and
leaves its input untouched. Paths are dotted camelCase, the same names
the serialized record uses, e.g. "reviewOfSystems.sweat.present".
"""
from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, ValidationError

from tcmchart.chart import catalog
from tcmchart.chart.derive import reconcile_cpt_codes
from tcmchart.chart.errors import (
    ImmutableFieldError,
    InvalidFieldValueError,
    UnknownFieldError,
)
from tcmchart.chart.schema import PatientRecord
from tcmchart.chart.visibility import LOCATION_COMMENTS_PATH

IMMUTABLE_PATHS = ("chartType",)

SELECTED_TREATMENT_PATH = "diagnosisAndTreatment.selectedTreatment"

_SLEEP_QUALITY_VALUES = tuple(o.value for o in catalog.SLEEP_QUALITY)


def _field_name(model: BaseModel, segment: str, path: str) -> str:
    for name, info in type(model).model_fields.items():
        if segment == info.alias or segment == name:
            return name
    raise UnknownFieldError(path)


def _normalize(path: str, record: PatientRecord) -> str:
    """
    Canonical camelCase spelling of a path (accepts snake_case segments).
    """
    model: Any = record
    canonical: List[str] = []
    for segment in path.split("."):
        if isinstance(model, dict):
            canonical.append(segment)
            model = None
            continue
        if not isinstance(model, BaseModel):
            raise UnknownFieldError(path)
        name = _field_name(model, segment, path)
        canonical.append(type(model).model_fields[name].alias or name)
        model = getattr(model, name)
    return ".".join(canonical)


def get_value(record: PatientRecord, path: str) -> Any:
    model: Any = record
    for segment in path.split("."):
        if isinstance(model, dict):
            model = model.get(segment, "")
            continue
        if not isinstance(model, BaseModel):
            raise UnknownFieldError(path)
        model = getattr(model, _field_name(model, segment, path))
    return model


def _replace(model: BaseModel, parts: List[str], value: Any, path: str) -> BaseModel:
    name = _field_name(model, parts[0], path)

    if len(parts) == 1:
        data = dict(model)
        data[name] = value
        try:
            return type(model).model_validate(data)
        except ValidationError as e:
            reason = "; ".join(err["msg"] for err in e.errors())
            raise InvalidFieldValueError(path, reason) from e

    child = getattr(model, name)
    if isinstance(child, dict):
        if len(parts) != 2:
            raise UnknownFieldError(path)
        return model.model_copy(update={name: {**child, parts[1]: value}})
    if child is None:
        # the section does not exist on this chart type
        raise UnknownFieldError(path)
    if not isinstance(child, BaseModel):
        raise UnknownFieldError(path)

    return model.model_copy(update={name: _replace(child, parts[1:], value, path)})


def set_field(record: PatientRecord, path: str, value: Any) -> PatientRecord:
    """
    Replace the value at `path`.

    Raises ImmutableFieldError for the chart type, UnknownFieldError for
    paths that do not exist on this record and InvalidFieldValueError when
    the value does not fit the field.
    """
    canonical = _normalize(path, record)
    if canonical in IMMUTABLE_PATHS:
        raise ImmutableFieldError(canonical)

    if canonical == SELECTED_TREATMENT_PATH:
        return select_other_treatment(record, value)

    if canonical.startswith(LOCATION_COMMENTS_PATH + "."):
        location = canonical[len(LOCATION_COMMENTS_PATH) + 1:]
        if location not in record.tongue.body.locations:
            raise InvalidFieldValueError(canonical, "location is not checked")

    return _replace(record, canonical.split("."), value, canonical)


def toggle_option(
    record: PatientRecord,
    path: str,
    value: str,
    checked: bool,
) -> PatientRecord:
    """
    Check or uncheck `value` in the multi-select list at `path`.

    Checking keeps the existing order and appends; checking twice is a
    no-op. Unchecking a tongue body location also drops its comment
    (see TongueBody).
    """
    canonical = _normalize(path, record)
    current = get_value(record, canonical)
    if not isinstance(current, list):
        raise InvalidFieldValueError(canonical, "not a multi-select field")

    if checked:
        updated = current if value in current else [*current, value]
    else:
        updated = [v for v in current if v != value]

    return set_field(record, canonical, updated)


def set_location_comment(record: PatientRecord, location: str, text: str) -> PatientRecord:
    return set_field(record, f"tongue.body.locationComments.{location}", text)


def toggle_sleep(record: PatientRecord, value: str, checked: bool) -> PatientRecord:
    """
    The form shows sleep quality and sleep issues as one list; route the
    value to the list it belongs to.
    """
    target = "quality" if value in _SLEEP_QUALITY_VALUES else "issues"
    return toggle_option(record, f"reviewOfSystems.sleep.{target}", value, checked)


def select_other_treatment(record: PatientRecord, value: str) -> PatientRecord:
    """
    Set the other-treatment choice and rebuild the CPT codes to match.
    Detail text is cleared when the new choice takes none.
    """
    record = _replace(record, SELECTED_TREATMENT_PATH.split("."), value, SELECTED_TREATMENT_PATH)
    dt = record.diagnosis_and_treatment

    cpt = reconcile_cpt_codes(dt.cpt, dt.selected_treatment, record.chart_type)
    record = _replace(record, ["diagnosisAndTreatment", "cpt"], cpt, "diagnosisAndTreatment.cpt")

    if dt.selected_treatment not in catalog.DETAILED_TREATMENTS and dt.other_treatment_text:
        record = _replace(
            record,
            ["diagnosisAndTreatment", "otherTreatmentText"],
            "",
            "diagnosisAndTreatment.otherTreatmentText",
        )
    return record
