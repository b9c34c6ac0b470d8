# tcmchart/printing.py
"""
Plain-text rendering of a stored chart for printing.

Fields hidden on the form (see tcmchart.chart.visibility) are left out
here as well.
"""
from __future__ import annotations

from typing import Iterable, List, Optional

from tcmchart.chart import derive
from tcmchart.chart.schema import PatientRecord
from tcmchart.chart.visibility import is_visible

NA = "N/A"
RULE = "-" * 60


class _Doc:
    def __init__(self, record: PatientRecord):
        self.record = record
        self.lines: List[str] = []

    def heading(self, title: str) -> None:
        self.lines.extend(["", title.upper(), RULE])

    def field(self, label: str, value, path: Optional[str] = None) -> None:
        if path is not None and not is_visible(path, self.record):
            return
        if value is None or value == "":
            value = NA
        self.lines.append(f"{label}: {value}")

    def shown(self, path: str, value):
        return value if is_visible(path, self.record) else ""

    def text(self, value: str) -> None:
        self.lines.append(value or NA)


def _joined(values: Iterable[str], other: str = "") -> str:
    return derive.join_display(values, other)


def _vitals(r: PatientRecord) -> List[tuple]:
    height = ""
    if r.height_ft or r.height_in:
        height = f"{r.height_ft or 0} ft {r.height_in or 0} in"
    bp = f"{r.bp_systolic}/{r.bp_diastolic} mmHg" if r.bp_systolic and r.bp_diastolic else ""
    heart = _joined([f"{r.heart_rate} BPM" if r.heart_rate else "", r.heart_rhythm])
    lung = _joined([f"{r.lung_rate} BPM" if r.lung_rate else "", r.lung_sound])
    return [
        ("Height", height),
        ("Weight", f"{r.weight} lbs" if r.weight else ""),
        ("Temperature", f"{r.temp} °F" if r.temp else ""),
        ("Blood Pressure", bp),
        ("Heart Rate", heart),
        ("Lung Rate", lung),
    ]


def _review_of_systems(doc: _Doc, r: PatientRecord) -> None:
    ros = r.review_of_systems
    p = "reviewOfSystems"

    doc.field("Cold/Hot", _joined([ros.cold_hot.sensation, *ros.cold_hot.parts], ros.cold_hot.other))
    sleep = _joined([*ros.sleep.quality, *ros.sleep.issues])
    doc.field("Sleep", ", ".join(x for x in (f"{ros.sleep.hours} hrs" if ros.sleep.hours else "", sleep) if x))
    doc.field("Sweat", ros.sweat.present, f"{p}.sweat.present")
    doc.field("Sweat Time", _joined(ros.sweat.time), f"{p}.sweat.time")
    doc.field("Sweat Parts", _joined(ros.sweat.parts), f"{p}.sweat.parts")
    doc.field("Eye", _joined(ros.eye.symptoms))
    doc.field("Mouth", _joined(ros.mouth_tongue.symptoms))
    doc.field("Taste", _joined(ros.mouth_tongue.taste))
    doc.field("Throat/Nose", _joined(ros.throat_nose.symptoms))
    doc.field("Mucus Color", _joined(ros.throat_nose.mucus_color), f"{p}.throatNose.mucusColor")
    doc.field("Edema", ros.edema.present, f"{p}.edema.present")
    doc.field("Edema Parts", _joined(ros.edema.parts, doc.shown(f"{p}.edema.other", ros.edema.other)), f"{p}.edema.parts")
    doc.field(
        "Drink",
        _joined([ros.drink.thirsty, ros.drink.preference, ros.drink.amount]),
    )
    doc.field("Digestion", _joined(ros.digestion.symptoms))
    doc.field("Appetite", ros.appetite_energy.appetite)
    doc.field("Energy", f"{ros.appetite_energy.energy} / 10" if ros.appetite_energy.energy else "")
    doc.field(
        "Urine",
        _joined([
            f"{ros.urine.frequency_day}x day" if ros.urine.frequency_day else "",
            f"{ros.urine.frequency_night}x night" if ros.urine.frequency_night else "",
            ros.urine.amount,
            ros.urine.color,
        ]),
    )
    doc.field(
        "Stool",
        _joined([
            f"{ros.stool.frequency_value} / {ros.stool.frequency_unit}" if ros.stool.frequency_value else "",
            ros.stool.form,
            ros.stool.color,
        ]),
    )

    m = ros.menstruation
    mp = f"{p}.menstruation"
    doc.field("Menstruation", m.status, mp)
    doc.field("Age at Menopause", m.menopause_age, f"{mp}.menopauseAge")
    doc.field("LMP", m.lmp, f"{mp}.lmp")
    doc.field("Cycle", f"{m.cycle_length} days" if m.cycle_length else "", f"{mp}.cycleLength")
    doc.field("Duration", f"{m.duration} days" if m.duration else "", f"{mp}.duration")
    amount = _joined([
        doc.shown(f"{mp}.amount", m.amount),
        doc.shown(f"{mp}.color", m.color),
        doc.shown(f"{mp}.clots", f"clots: {m.clots}" if m.clots else ""),
    ])
    doc.field("Amount/Color/Clots", amount, f"{mp}.amount")
    doc.field("Menstrual Pain", m.pain, f"{mp}.pain")
    doc.field("Pain Details", m.pain_details, f"{mp}.painDetails")
    doc.field("PMS", _joined(m.pms), f"{mp}.pms")
    doc.field("Menstruation Other", m.other, f"{mp}.other")

    d = ros.discharge
    doc.field("Discharge", d.present, f"{p}.discharge")
    doc.field("Discharge Details", _joined(d.symptoms, doc.shown(f"{p}.discharge.other", d.other)), f"{p}.discharge.symptoms")


def render_chart(record: PatientRecord) -> str:
    r = record
    doc = _Doc(r)
    cc = r.chief_complaint
    dt = r.diagnosis_and_treatment

    doc.lines.append(r.clinic_name or "Patient Chart")
    doc.lines.append(
        f"Therapist: {dt.therapist_name or NA} | Lic #: {dt.therapist_lic_no or NA}"
    )
    doc.lines.append(RULE)
    doc.field("Chart Type", "Follow-up" if r.is_follow_up else "New Patient")
    doc.field("File No", r.file_no)
    doc.field("Date", r.date)

    doc.heading("Patient Information")
    doc.field("Name", r.name)
    doc.field("Sex", derive.sex_label(r.sex))
    doc.field("Age", f"{r.age} yrs old" if r.age is not None else "")
    doc.field("Date of Birth", r.dob)
    doc.field("Occupation", r.occupation)
    doc.field("Address", r.address, "address")
    doc.field("Phone", r.phone, "phone")

    doc.heading("Vital Signs")
    for label, value in _vitals(r):
        doc.field(label, value)

    if is_visible("respondToCare", r):
        doc.heading("Respond to Previous Care")
        doc.text(derive.respond_to_care_display(r))

    doc.heading("Chief Complaint")
    doc.field("Complaints", derive.complaints_display(cc))
    doc.field(
        "Location",
        derive.location_display(
            cc, include_details=is_visible("chiefComplaint.locationDetails", r)
        ),
    )
    doc.field("Onset", derive.onset_display(cc))
    doc.field("Severity", derive.severity_display(cc, printable=True))
    doc.field("Frequency", cc.frequency)
    doc.field("Timing", cc.timing)
    doc.field("Aggravating Factors", _joined(cc.provocation, cc.provocation_other))
    doc.field("Alleviating Factors", _joined(cc.palliation, cc.palliation_other))
    doc.field("Quality", _joined(cc.quality, cc.quality_other))
    doc.field("Radiation", cc.region_radiation)
    doc.field("Possible Cause", _joined(cc.possible_cause, cc.possible_cause_other))
    doc.field("Remark", cc.remark)

    doc.heading("Present Illness")
    doc.text(cc.present_illness)
    doc.field(
        "Western Medical Diagnosis",
        cc.western_medical_diagnosis,
        "chiefComplaint.westernMedicalDiagnosis",
    )

    if is_visible("medicalHistory", r) and r.medical_history is not None:
        mh = r.medical_history
        doc.heading("Medical History")
        doc.field("Past Medical History", _joined(mh.past_medical_history, mh.past_medical_history_other))
        doc.field("Medication", _joined(mh.medication, mh.medication_other))
        doc.field("Family History", _joined(mh.family_history, mh.family_history_other))
        doc.field("Allergy", _joined(mh.allergy, mh.allergy_other))

    doc.heading("Review of Systems")
    _review_of_systems(doc, r)

    doc.heading("Inspection of the Tongue")
    body = r.tongue.body
    doc.field("Body Color", _joined(body.color))
    doc.field("Body Shape", _joined(body.shape))
    locations = []
    for location in body.locations:
        comment = body.location_comments.get(location, "")
        if comment and is_visible(f"tongue.body.locationComments.{location}", r):
            locations.append(f"{location} ({comment})")
        else:
            locations.append(location)
    doc.field("Body Location", _joined(locations))
    doc.field("Coating Color", _joined(r.tongue.coating.color))
    doc.field("Coating Quality", _joined(r.tongue.coating.quality))
    doc.field("Coating Notes", r.tongue.coating.notes)

    doc.heading("Diagnosis & Treatment")
    ep = dt.eight_principles
    doc.field(
        "Eight Principles",
        _joined([ep.exterior_interior, ep.heat_cold, ep.excess_deficient, ep.yang_yin]),
    )
    doc.field("Etiology", dt.etiology)
    doc.field("TCM Diagnosis", dt.tcm_diagnosis)
    doc.field("Treatment Principle", dt.treatment_principle)
    doc.field("Acupuncture Points", dt.acupuncture_points)
    doc.field("Herbal Formula", derive.extract_formula_name(dt.herbal_treatment))
    doc.field(
        "Other Treatments",
        derive.combined_other_treatment_label(
            dt.selected_treatment,
            dt.other_treatment_text
            if is_visible("diagnosisAndTreatment.otherTreatmentText", r)
            else "",
        ),
    )
    doc.field("ICD", dt.icd)
    doc.field("CPT", dt.cpt)

    return "\n".join(doc.lines) + "\n"
