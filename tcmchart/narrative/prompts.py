# tcmchart/narrative/prompts.py
from __future__ import annotations

import json
from typing import Dict, List

from tcmchart.chart import derive
from tcmchart.chart.schema import PatientRecord
from tcmchart.chart.visibility import is_visible


def _hpi_details(record: PatientRecord) -> List[str]:
    cc = record.chief_complaint
    details = [
        ("Chief Complaint", derive.complaints_display(cc)),
        (
            "Location",
            derive.location_display(
                cc, include_details=is_visible("chiefComplaint.locationDetails", record)
            ),
        ),
        (
            "Onset",
            f"Approximately {derive.onset_display(cc)} ago" if derive.onset_display(cc) else "",
        ),
        ("Pain Quality", derive.join_display(cc.quality, cc.quality_other)),
        ("Severity", derive.severity_display(cc)),
        ("Frequency", cc.frequency),
        ("Timing", cc.timing),
        ("Aggravating Factors", derive.join_display(cc.provocation, cc.provocation_other)),
        ("Alleviating Factors", derive.join_display(cc.palliation, cc.palliation_other)),
        ("Radiation", cc.region_radiation),
        ("Possible Cause", derive.join_display(cc.possible_cause, cc.possible_cause_other)),
        ("Remarks", cc.remark),
    ]
    return [f"- {label}: {value}" for label, value in details if value]


def build_hpi_messages(record: PatientRecord) -> List[Dict[str, str]]:
    """
    History of Present Illness paragraph from the chief complaint details.
    """
    if record.is_follow_up:
        opening = "The patient is a [age]-year-old [sex] who returns for a follow-up regarding..."
    else:
        opening = "The patient is a [age]-year-old [sex] who presents with..."

    details = "\n".join(_hpi_details(record))

    return [
        {
            "role": "system",
            "content": (
                "You are a medical scribe creating a \"History of Present Illness\" (HPI) "
                "narrative for an acupuncture and Traditional Chinese Medicine clinic. "
                "Synthesize the patient data you are given into a clinical paragraph. "
                "Do NOT invent details that are not in the data."
            ),
        },
        {
            "role": "user",
            "content": (
                "**Patient Demographics:**\n"
                f"- Age: {record.age if record.age is not None else 'Not specified'}\n"
                f"- Sex: {derive.sex_label(record.sex)}\n\n"
                "**Complaint Details:**\n"
                f"{details}\n\n"
                "**Instructions:**\n"
                "- Write a coherent paragraph in a professional, clinical tone.\n"
                f"- Start with an opening sentence like: \"{opening}\"\n"
                "- Weave the details into a narrative, not just a list. For example, instead of "
                "\"Onset: 3 weeks ago\", write \"The symptoms began approximately 3 weeks ago.\"\n"
                "- Do not use markdown or bullet points in your final output.\n\n"
                "Generate the HPI paragraph below:"
            ),
        },
    ]


def diagnosis_summary(record: PatientRecord) -> str:
    """
    JSON summary of the findings a practitioner diagnoses from.
    """
    data = record.to_json()
    summary: Dict[str, object] = {
        "demographics": {"age": data["age"], "sex": data["sex"]},
    }
    if record.is_follow_up:
        summary["respondToCare"] = data["respondToCare"]
    summary["chiefComplaint"] = data["chiefComplaint"]
    summary["reviewOfSystems"] = data["reviewOfSystems"]
    summary["tongue"] = data["tongue"]
    if not record.is_follow_up:
        summary["medicalHistory"] = data["medicalHistory"]
    return json.dumps(summary, indent=2)


def build_diagnosis_messages(record: PatientRecord) -> List[Dict[str, str]]:
    return [
        {
            "role": "system",
            "content": "You are a Traditional Chinese Medicine (TCM) practitioner.",
        },
        {
            "role": "user",
            "content": (
                "Based on the following patient information, provide a TCM diagnosis "
                "and treatment plan.\n\n"
                "Patient Information:\n"
                f"{diagnosis_summary(record)}\n\n"
                "Please provide:\n"
                "1. TCM Diagnosis (Syndrome/Differentiation)\n"
                "2. Treatment Principle\n"
                "3. Acupuncture Points (with brief explanation)\n"
                "4. Herbal Formula (if applicable)\n"
                "5. Other Treatment Recommendations\n\n"
                "Format your response in a clear, professional manner."
            ),
        },
    ]


def build_soap_messages(record: PatientRecord) -> List[Dict[str, str]]:
    data = record.to_json()
    # the logo is an image data URI and says nothing clinical
    data.pop("clinicLogo", None)

    return [
        {
            "role": "system",
            "content": (
                "You are a clinical documentation assistant for an acupuncture and "
                "Traditional Chinese Medicine clinic."
            ),
        },
        {
            "role": "user",
            "content": (
                "Create a SOAP note for the following patient:\n\n"
                "Patient Data:\n"
                f"{json.dumps(data, indent=2)}\n\n"
                "Please create a comprehensive SOAP note with:\n"
                "- Subjective: Patient's chief complaint and history\n"
                "- Objective: Findings from examination\n"
                "- Assessment: TCM diagnosis and differential\n"
                "- Plan: Treatment plan and recommendations\n\n"
                "Format as a professional medical note."
            ),
        },
    ]
