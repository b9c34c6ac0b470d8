# tcmchart/chart/derive.py
"""
Pure functions computed from a chart snapshot: live suggestions, option
variants, billing codes and display strings.

Nothing here mutates its input.
"""
from __future__ import annotations

import re
from typing import Iterable, List, Optional, Sequence, Tuple

from tcmchart.chart import catalog
from tcmchart.chart.catalog import Option
from tcmchart.chart.kinds import ChartType, Sex
from tcmchart.chart.schema import ChiefComplaint, PatientRecord


def active_location_suggestions(selected_complaints: Iterable[str]) -> List[str]:
    """
    Union of the location hints for every selected complaint, in
    first-seen order. Complaints without hints contribute nothing.
    """
    suggestions: List[str] = []
    for complaint in selected_complaints:
        for hint in catalog.COMPLAINT_LOCATIONS.get(complaint, ()):
            if hint not in suggestions:
                suggestions.append(hint)
    return suggestions


def follow_up_variant(base_options: Sequence[Option]) -> List[Option]:
    """
    Prefix the "Same as before" choice used on follow-up charts.
    Calling it on an already prefixed list returns the list unchanged.
    """
    options = list(base_options)
    if options and options[0] == catalog.SAME_AS_BEFORE:
        return options
    return [catalog.SAME_AS_BEFORE, *options]


_FACTOR_LISTS = {
    "provocation": catalog.AGGRAVATING_FACTORS,
    "palliation": catalog.ALLEVIATING_FACTORS,
    "possibleCause": catalog.POSSIBLE_CAUSES,
}


def factor_options(kind: str, chart_type: ChartType) -> List[Option]:
    """
    Options for an aggravating/alleviating/possible-cause list, with the
    follow-up prefix when the chart is a follow-up.
    """
    try:
        base = _FACTOR_LISTS[kind]
    except KeyError:
        raise ValueError(f"Unknown factor list: {kind!r}") from None

    if ChartType(chart_type) == ChartType.FOLLOW_UP:
        return follow_up_variant(base)
    return list(base)


# ----------------------------------------------------------------------
# Billing codes
# ----------------------------------------------------------------------

def base_cpt_codes(chart_type: ChartType) -> Tuple[str, ...]:
    if ChartType(chart_type) == ChartType.FOLLOW_UP:
        return catalog.FOLLOW_UP_CPT_CODES
    return catalog.NEW_PATIENT_CPT_CODES


def reconcile_cpt_codes(
    existing_csv: str,
    selected_treatment: str,
    chart_type: ChartType,
) -> str:
    """
    Rebuild the CPT string for a chart.

    Order is: base codes for the chart type, then the manual therapy code
    when the selected treatment bills it, then any other codes already in
    `existing_csv` in their original order. A manual therapy code already
    present is dropped when the treatment no longer bills it.
    """
    base = base_cpt_codes(chart_type)
    manual = catalog.MANUAL_THERAPY_CPT_CODE

    codes: List[str] = list(base)
    if (selected_treatment or "") not in catalog.NON_MANUAL_TREATMENTS:
        codes.append(manual)

    existing = [c.strip() for c in (existing_csv or "").split(",")]
    for code in existing:
        if not code or code in base or code == manual:
            continue
        if code not in codes:
            codes.append(code)

    return ", ".join(codes)


# ----------------------------------------------------------------------
# Display strings
# ----------------------------------------------------------------------

def join_display(items: Iterable[str], other_text: Optional[str] = None) -> str:
    """
    Comma-join the selected items, followed by the free-text "other"
    value when there is one.
    """
    parts = [i for i in items if i]
    if other_text:
        parts.append(other_text)
    return ", ".join(parts)


def combined_other_treatment_label(selected: str, other_text: str) -> str:
    if not selected or selected == "None":
        return "None"

    if selected in catalog.DETAILED_TREATMENTS:
        label = catalog.label_for(catalog.OTHER_TREATMENTS, selected)
        return f"{label}: {other_text}" if other_text else label

    return selected


_FORMULA_MARKER = re.compile(r"^Formula:\s*", re.IGNORECASE)


def extract_formula_name(treatment_text: str) -> str:
    """
    First line of the herbal treatment text, without a leading
    "Formula:" marker.
    """
    if not treatment_text:
        return ""
    text = _FORMULA_MARKER.sub("", treatment_text, count=1)
    return text.split("\n")[0].strip()


def sex_label(sex: Sex) -> str:
    if sex == Sex.MALE:
        return "Male"
    if sex == Sex.FEMALE:
        return "Female"
    return "Not specified"


def complaints_display(cc: ChiefComplaint) -> str:
    return join_display(cc.selected_complaints, cc.other_complaint)


def location_display(cc: ChiefComplaint, *, include_details: bool = True) -> str:
    return join_display(cc.location_details if include_details else [], cc.location)


def onset_display(cc: ChiefComplaint) -> str:
    if cc.onset_value and cc.onset_unit:
        return f"{cc.onset_value} {cc.onset_unit}"
    return ""


def severity_display(cc: ChiefComplaint, *, printable: bool = False) -> str:
    """
    "P/L= 6 / 10, Moderate" on the printed chart, "6/10 Moderate" in
    prompts.
    """
    if printable:
        score = f"P/L= {cc.severity_score} / 10" if cc.severity_score is not None else ""
        return ", ".join(p for p in (score, cc.severity_description) if p)

    score = f"{cc.severity_score}/10" if cc.severity_score is not None else ""
    return " ".join(p for p in (score, cc.severity_description) if p)


def respond_to_care_display(record: PatientRecord) -> str:
    rtc = record.respond_to_care
    if rtc is None:
        return "N/A"
    parts = [f"Status: {rtc.status or 'N/A'}"]
    if rtc.status == "Improved" and rtc.improved_days is not None:
        parts.append(f"Improved Days: {rtc.improved_days}")
    parts.append(f"Notes: {rtc.notes or 'N/A'}")
    return ", ".join(parts)
