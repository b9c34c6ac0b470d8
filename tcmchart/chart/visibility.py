# tcmchart/chart/visibility.py
"""
Which fields of a chart are shown.

Every conditional-display rule lives in `_RULES`, keyed by dotted camelCase
field path. A path is visible only when the rule for the path itself and
the rules for all of its ancestors hold. Paths without a rule are always
visible. The form and the printed chart both go through `is_visible`.
"""
from __future__ import annotations

from typing import Callable, Dict

from tcmchart.chart import catalog
from tcmchart.chart.derive import active_location_suggestions
from tcmchart.chart.kinds import ChartType, Sex
from tcmchart.chart.schema import PatientRecord

Rule = Callable[[PatientRecord], bool]

LOCATION_COMMENTS_PATH = "tongue.body.locationComments"


def _is_new(r: PatientRecord) -> bool:
    return r.chart_type == ChartType.NEW


def _is_follow_up(r: PatientRecord) -> bool:
    return r.chart_type == ChartType.FOLLOW_UP


def _is_female(r: PatientRecord) -> bool:
    return r.sex == Sex.FEMALE


def _improved(r: PatientRecord) -> bool:
    return r.respond_to_care is not None and r.respond_to_care.status == "Improved"


def _has_location_suggestions(r: PatientRecord) -> bool:
    return bool(active_location_suggestions(r.chief_complaint.selected_complaints))


def _menopause(r: PatientRecord) -> bool:
    return r.review_of_systems.menstruation.status == "menopause"


def _cycle(r: PatientRecord) -> bool:
    return r.review_of_systems.menstruation.status not in ("", "menopause")


def _menstrual_pain(r: PatientRecord) -> bool:
    return _cycle(r) and r.review_of_systems.menstruation.pain == "yes"


def _mucus(r: PatientRecord) -> bool:
    return "mucus" in r.review_of_systems.throat_nose.symptoms


def _sweat(r: PatientRecord) -> bool:
    return r.review_of_systems.sweat.present == "yes"


def _edema(r: PatientRecord) -> bool:
    return r.review_of_systems.edema.present == "yes"


def _discharge(r: PatientRecord) -> bool:
    return r.review_of_systems.discharge.present == "yes"


def _treatment_detail(r: PatientRecord) -> bool:
    return r.diagnosis_and_treatment.selected_treatment in catalog.DETAILED_TREATMENTS


_CYCLE_FIELDS = (
    "lmp", "cycleLength", "duration", "amount", "color", "clots", "pain", "pms", "other",
)

_RULES: Dict[str, Rule] = {
    "address": _is_new,
    "phone": _is_new,
    "clinicName": _is_new,
    "clinicLogo": _is_new,
    "medicalHistory": _is_new,
    "chiefComplaint.westernMedicalDiagnosis": _is_new,
    "chiefComplaint.locationDetails": _has_location_suggestions,
    "respondToCare": _is_follow_up,
    "respondToCare.improvedDays": _improved,
    "reviewOfSystems.sweat.time": _sweat,
    "reviewOfSystems.sweat.parts": _sweat,
    "reviewOfSystems.throatNose.mucusColor": _mucus,
    "reviewOfSystems.edema.parts": _edema,
    "reviewOfSystems.edema.other": _edema,
    "reviewOfSystems.menstruation": _is_female,
    "reviewOfSystems.menstruation.menopauseAge": _menopause,
    "reviewOfSystems.menstruation.painDetails": _menstrual_pain,
    "reviewOfSystems.discharge": _is_female,
    "reviewOfSystems.discharge.symptoms": _discharge,
    "reviewOfSystems.discharge.other": _discharge,
    "diagnosisAndTreatment.otherTreatmentText": _treatment_detail,
}
_RULES.update(
    {f"reviewOfSystems.menstruation.{name}": _cycle for name in _CYCLE_FIELDS}
)


def is_visible(field_path: str, record: PatientRecord) -> bool:
    parts = field_path.split(".")
    for i in range(1, len(parts) + 1):
        prefix = ".".join(parts[:i])
        rule = _RULES.get(prefix)
        if rule is not None and not rule(record):
            return False

    # a location comment is shown only next to its checked location
    if field_path.startswith(LOCATION_COMMENTS_PATH + "."):
        location = field_path[len(LOCATION_COMMENTS_PATH) + 1:]
        return location in record.tongue.body.locations

    return True


def visibility_map(record: PatientRecord) -> Dict[str, bool]:
    """
    Every conditionally shown path with its current visibility.
    """
    result = {path: is_visible(path, record) for path in _RULES}
    for location in catalog.TONGUE_LOCATIONS:
        path = f"{LOCATION_COMMENTS_PATH}.{location.value}"
        result[path] = is_visible(path, record)
    return result
