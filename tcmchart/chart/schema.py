# tcmchart/chart/schema.py
from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from tcmchart.chart.kinds import ChartType, Sex


def _blank_to_none(value):
    """
    Form inputs arrive as strings; an empty string means "not filled in".
    """
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if value == "":
            return None
        return int(value)
    return value


class ChartModel(BaseModel):
    """
    Base for every part of a chart.

    Instances are immutable; edits go through tcmchart.chart.updates,
    which returns new copies. Serialized with camelCase keys, and unknown
    keys are ignored so older stored records still load.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class ClinicInfo(ChartModel):
    clinic_name: str = ""
    clinic_logo: str = Field("", description="Image encoded as a data URI")
    therapist_name: str = ""
    therapist_lic_no: str = ""


class ChiefComplaint(ChartModel):
    selected_complaints: List[str] = Field(default_factory=list)
    other_complaint: str = ""

    location: str = ""
    location_details: List[str] = Field(default_factory=list)

    onset_value: str = ""
    onset_unit: str = ""

    provocation: List[str] = Field(default_factory=list)
    provocation_other: str = ""
    palliation: List[str] = Field(default_factory=list)
    palliation_other: str = ""
    quality: List[str] = Field(default_factory=list)
    quality_other: str = ""

    region_radiation: str = ""
    severity_score: Optional[int] = Field(None, ge=0, le=10)
    severity_description: str = ""
    frequency: str = ""
    timing: str = ""

    possible_cause: List[str] = Field(default_factory=list)
    possible_cause_other: str = ""
    remark: str = ""

    present_illness: str = ""
    western_medical_diagnosis: str = ""

    @field_validator("severity_score", mode="before")
    @classmethod
    def coerce_score(cls, value):
        return _blank_to_none(value)


class MedicalHistory(ChartModel):
    past_medical_history: List[str] = Field(default_factory=list)
    past_medical_history_other: str = ""
    medication: List[str] = Field(default_factory=list)
    medication_other: str = ""
    family_history: List[str] = Field(default_factory=list)
    family_history_other: str = ""
    allergy: List[str] = Field(default_factory=list)
    allergy_other: str = ""


# ----------------------------------------------------------------------
# Review of systems sub-panels
# ----------------------------------------------------------------------

class ColdHot(ChartModel):
    sensation: str = ""
    parts: List[str] = Field(default_factory=list)
    other: str = ""


class Sleep(ChartModel):
    hours: str = ""
    quality: List[str] = Field(default_factory=list)
    issues: List[str] = Field(default_factory=list)


class Sweat(ChartModel):
    present: str = ""
    time: List[str] = Field(default_factory=list)
    parts: List[str] = Field(default_factory=list)


class Eye(ChartModel):
    symptoms: List[str] = Field(default_factory=list)


class MouthTongue(ChartModel):
    symptoms: List[str] = Field(default_factory=list)
    taste: List[str] = Field(default_factory=list)


class ThroatNose(ChartModel):
    symptoms: List[str] = Field(default_factory=list)
    mucus_color: List[str] = Field(default_factory=list)


class Edema(ChartModel):
    present: str = ""
    parts: List[str] = Field(default_factory=list)
    other: str = ""


class Drink(ChartModel):
    thirsty: str = ""
    preference: str = ""
    amount: str = ""


class Digestion(ChartModel):
    symptoms: List[str] = Field(default_factory=list)


class AppetiteEnergy(ChartModel):
    appetite: str = ""
    energy: str = ""


class Urine(ChartModel):
    frequency_day: str = ""
    frequency_night: str = ""
    amount: str = ""
    color: str = ""


class Stool(ChartModel):
    frequency_value: str = ""
    frequency_unit: str = "day"
    form: str = ""
    color: str = ""


class Menstruation(ChartModel):
    status: str = ""
    menopause_age: str = ""
    lmp: str = ""
    cycle_length: str = ""
    duration: str = ""
    amount: str = ""
    color: str = ""
    clots: str = ""
    pain: str = ""
    pain_details: str = ""
    pms: List[str] = Field(default_factory=list)
    other: str = ""


class Discharge(ChartModel):
    present: str = ""
    symptoms: List[str] = Field(default_factory=list)
    other: str = ""


class ReviewOfSystems(ChartModel):
    cold_hot: ColdHot = Field(default_factory=ColdHot)
    sleep: Sleep = Field(default_factory=Sleep)
    sweat: Sweat = Field(default_factory=Sweat)
    eye: Eye = Field(default_factory=Eye)
    mouth_tongue: MouthTongue = Field(default_factory=MouthTongue)
    throat_nose: ThroatNose = Field(default_factory=ThroatNose)
    edema: Edema = Field(default_factory=Edema)
    drink: Drink = Field(default_factory=Drink)
    digestion: Digestion = Field(default_factory=Digestion)
    appetite_energy: AppetiteEnergy = Field(default_factory=AppetiteEnergy)
    urine: Urine = Field(default_factory=Urine)
    stool: Stool = Field(default_factory=Stool)
    menstruation: Menstruation = Field(default_factory=Menstruation)
    discharge: Discharge = Field(default_factory=Discharge)


# ----------------------------------------------------------------------
# Tongue inspection
# ----------------------------------------------------------------------

class TongueBody(ChartModel):
    color: List[str] = Field(default_factory=list)
    shape: List[str] = Field(default_factory=list)
    locations: List[str] = Field(default_factory=list)
    # keys are always a subset of `locations`
    location_comments: Dict[str, str] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def drop_orphan_comments(cls, data):
        """
        A comment belongs to a checked location; comments for locations
        that are no longer checked are dropped.
        """
        if not isinstance(data, dict):
            return data
        locations = data.get("locations") or []
        for key in ("locationComments", "location_comments"):
            comments = data.get(key)
            if isinstance(comments, dict):
                data = {**data, key: {k: v for k, v in comments.items() if k in locations}}
        return data


class TongueCoating(ChartModel):
    color: List[str] = Field(default_factory=list)
    quality: List[str] = Field(default_factory=list)
    notes: str = ""


class TongueInspection(ChartModel):
    body: TongueBody = Field(default_factory=TongueBody)
    coating: TongueCoating = Field(default_factory=TongueCoating)


# ----------------------------------------------------------------------
# Follow-up and treatment
# ----------------------------------------------------------------------

class RespondToCare(ChartModel):
    status: str = ""
    improved_days: Optional[int] = Field(None, ge=0)
    notes: str = ""

    @field_validator("improved_days", mode="before")
    @classmethod
    def coerce_days(cls, value):
        return _blank_to_none(value)


class EightPrinciples(ChartModel):
    exterior_interior: str = ""
    heat_cold: str = ""
    excess_deficient: str = ""
    yang_yin: str = ""


class DiagnosisAndTreatment(ChartModel):
    eight_principles: EightPrinciples = Field(default_factory=EightPrinciples)
    etiology: str = ""
    tcm_diagnosis: str = ""
    treatment_principle: str = ""
    acupuncture_points: str = ""
    herbal_treatment: str = ""
    selected_treatment: str = ""
    other_treatment_text: str = ""
    icd: str = ""
    cpt: str = ""
    therapist_name: str = ""
    therapist_lic_no: str = ""

    # free text drafted by the narrative gateway, editable afterwards
    diagnosis: str = ""


class PatientRecord(ChartModel):
    """
    One chart. `file_no` is the store key and `chart_type` never changes
    after creation.
    """

    file_no: str = ""
    chart_type: ChartType = ChartType.NEW

    # demographics
    name: str = ""
    dob: str = ""
    address: str = ""
    phone: str = ""
    occupation: str = ""
    sex: Sex = Sex.UNSPECIFIED
    age: Optional[int] = Field(None, ge=0)
    date: str = ""

    # vitals
    height_ft: str = ""
    height_in: str = ""
    weight: str = ""
    temp: str = ""
    bp_systolic: str = ""
    bp_diastolic: str = ""
    heart_rate: str = ""
    heart_rhythm: str = ""
    lung_rate: str = ""
    lung_sound: str = ""

    # clinic context
    clinic_name: str = ""
    clinic_logo: str = ""

    chief_complaint: ChiefComplaint = Field(default_factory=ChiefComplaint)
    medical_history: Optional[MedicalHistory] = None
    review_of_systems: ReviewOfSystems = Field(default_factory=ReviewOfSystems)
    tongue: TongueInspection = Field(default_factory=TongueInspection)
    respond_to_care: Optional[RespondToCare] = None
    diagnosis_and_treatment: DiagnosisAndTreatment = Field(
        default_factory=DiagnosisAndTreatment
    )

    @field_validator("age", mode="before")
    @classmethod
    def coerce_age(cls, value):
        return _blank_to_none(value)

    @model_validator(mode="before")
    @classmethod
    def sections_for_chart_type(cls, data):
        """
        New charts carry a medical history and follow-ups a respond-to-care
        section, never the other one. A missing section loads as blank.
        """
        if not isinstance(data, dict):
            return data
        chart_type = ChartType(data.get("chartType", data.get("chart_type", ChartType.NEW)))
        if chart_type == ChartType.FOLLOW_UP:
            keep, drop = ("respondToCare", "respond_to_care"), ("medicalHistory", "medical_history")
        else:
            keep, drop = ("medicalHistory", "medical_history"), ("respondToCare", "respond_to_care")

        data = dict(data)
        for key in drop:
            data.pop(key, None)
        if all(data.get(key) is None for key in keep):
            for key in keep:
                data.pop(key, None)
            data[keep[0]] = {}
        return data

    @property
    def is_follow_up(self) -> bool:
        return self.chart_type == ChartType.FOLLOW_UP

    def clinic_info(self) -> ClinicInfo:
        """
        The clinic identity carried by this record.
        """
        return ClinicInfo(
            clinic_name=self.clinic_name,
            clinic_logo=self.clinic_logo,
            therapist_name=self.diagnosis_and_treatment.therapist_name,
            therapist_lic_no=self.diagnosis_and_treatment.therapist_lic_no,
        )

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


def new_record(chart_type: ChartType, clinic_defaults: ClinicInfo) -> PatientRecord:
    """
    A blank chart of the given type, seeded with the shared clinic identity.
    """
    chart_type = ChartType(chart_type)
    is_new = chart_type == ChartType.NEW
    return PatientRecord(
        chart_type=chart_type,
        clinic_name=clinic_defaults.clinic_name,
        clinic_logo=clinic_defaults.clinic_logo,
        medical_history=MedicalHistory() if is_new else None,
        respond_to_care=None if is_new else RespondToCare(),
        diagnosis_and_treatment=DiagnosisAndTreatment(
            therapist_name=clinic_defaults.therapist_name,
            therapist_lic_no=clinic_defaults.therapist_lic_no,
        ),
    )


REQUIRED_FIELDS = ("fileNo", "sex", "age", "date")


def validate_for_save(record: PatientRecord) -> List[str]:
    """
    Return the required fields that are still blank. Empty list means
    the record can be saved.
    """
    missing: List[str] = []
    if not record.file_no.strip():
        missing.append("fileNo")
    if record.sex == Sex.UNSPECIFIED:
        missing.append("sex")
    if record.age is None:
        missing.append("age")
    if not record.date.strip():
        missing.append("date")
    return missing
