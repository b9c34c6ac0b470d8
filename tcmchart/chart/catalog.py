# tcmchart/chart/catalog.py
"""
Selectable values for every enumerated field on a chart.

Lists are ordered; the order here is the order shown on the form and the
order used when derived lists are assembled.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Dict, List, Tuple


@dataclass(frozen=True)
class Option:
    value: str
    label: str


def _same(*values: str) -> Tuple[Option, ...]:
    return tuple(Option(value=v, label=v) for v in values)


SAME_AS_BEFORE = Option(value="Same as before", label="Same as before")

# ----------------------------------------------------------------------
# Chief complaint
# ----------------------------------------------------------------------

COMMON_COMPLAINTS = _same(
    "Neck Pain",
    "Shoulder Pain",
    "Back Pain",
    "Knee Pain",
    "Headache",
    "Migraine",
    "Insomnia",
    "Digestive Issues",
    "Fatigue / Lethargy",
    "Menstrual Issues",
    "Numbness / Tingling",
)

AGGRAVATING_FACTORS = _same(
    "Prolonged Sitting / Standing",
    "Lifting Heavy Objects",
    "Stairs / Weight Bearing",
    "Specific Postures",
    "Weather Changes",
)

ALLEVIATING_FACTORS = _same(
    "Rest / Lying Down",
    "Stretching / Light Exercise",
    "Warm Packs / Shower",
    "Massage / Acupressure",
    "Medication",
)

PAIN_QUALITIES = _same(
    "Sharp", "Dull", "Burning", "Throbbing", "Tingling", "Numb", "Stiff", "Aching",
)

POSSIBLE_CAUSES = _same(
    "Traffic Accident",
    "Fall / Slip",
    "Overwork / Repetitive Labor",
    "Excessive Exercise",
    "Poor Posture",
    "Lifting / Sudden Movements",
    "Poor Sleeping Posture",
    "Exposure to Cold / Damp",
    "Degenerative Changes",
    "Post-Injury / Surgery",
)

COMPLAINT_LOCATIONS: Dict[str, Tuple[str, ...]] = {
    "Neck Pain": ("Left", "Right", "Upper", "Lower"),
    "Shoulder Pain": ("Left", "Right", "Both"),
    "Back Pain": ("Upper", "Middle", "Lower", "Left", "Right"),
    "Knee Pain": ("Left", "Right", "Both"),
    "Headache": ("Frontal", "Temporal", "Occipital", "Parietal"),
    "Numbness / Tingling": ("Hands", "Feet", "Arms", "Legs"),
}

SEVERITY_TIERS = _same("Minimal", "Slight", "Moderate", "Severe")

FREQUENCIES = _same("Occasional", "Intermittent", "Frequent", "Constant")

ONSET_UNITS = (
    Option("days", "Days"),
    Option("weeks", "Weeks"),
    Option("months", "Months"),
    Option("years", "Years"),
)

# ----------------------------------------------------------------------
# Medical history (new charts only)
# ----------------------------------------------------------------------

PAST_MEDICAL_HISTORY = _same(
    "Hypertension",
    "Diabetes Mellitus",
    "Hyperlipidemia",
    "Heart Disease",
    "Cerebrovascular Disease",
    "Asthma / COPD",
    "GI Disease",
    "Liver Disease",
    "Kidney Disease",
    "Cancer",
)

MEDICATIONS = _same(
    "Antihypertensives",
    "Antidiabetics",
    "Statins (Cholesterol)",
    "Heart Medication",
    "Blood Thinners",
    "GI Medication",
    "NSAIDs",
    "Thyroid Medication",
    "Hormones",
    "Psychiatric Meds",
)

FAMILY_HISTORY = _same(
    "Hypertension",
    "Diabetes",
    "Heart Disease",
    "Stroke",
    "Hyperlipidemia",
    "Cancer",
    "Tuberculosis",
    "Liver Disease",
    "Alcoholism",
    "Psychiatric Illness",
)

ALLERGIES = _same(
    "Penicillin",
    "Aspirin",
    "NSAIDs",
    "Anesthetics",
    "Contrast Media",
    "Seafood",
    "Peanuts",
    "Eggs",
    "Milk",
    "Other Medications",
)

# ----------------------------------------------------------------------
# Vitals and demographics
# ----------------------------------------------------------------------

SEX = (Option("M", "Male"), Option("F", "Female"))

HEART_RHYTHMS = _same("Normal", "Occasionally Irregular", "Constantly Irregular")

LUNG_SOUNDS = _same("Clear", "Wheezing", "Crackles", "Rhonchi", "Diminished", "Apnea")

RESPOND_TO_CARE_STATUSES = _same("Resolved", "Improved", "Same", "Worse")

# ----------------------------------------------------------------------
# Review of systems
# ----------------------------------------------------------------------

YES_NO = (Option("yes", "Yes"), Option("no", "No"))

COLD_HOT_SENSATIONS = (Option("cold", "Cold"), Option("hot", "Hot"), Option("normal", "Normal"))
COLD_HOT_PARTS = _same(
    "hand", "fingers", "feet", "toes", "knee", "leg", "waist", "back", "shoulder", "whole body",
)

SLEEP_QUALITY = _same("O.K.", "dream", "nightmare")
SLEEP_ISSUES = _same("insomnia", "easily wake up", "hard to fall asleep", "pain")

SWEAT_TIMES = _same("night", "day", "all time")
SWEAT_PARTS = _same("hand", "foot", "head", "chest", "whole body")

EYE_SYMPTOMS = _same(
    "normal", "dry", "sandy", "redness", "tearing", "fatigued", "pain", "twitching", "dizzy", "vertigo",
)

MOUTH_SYMPTOMS = _same("dry", "normal", "wet (sputum, phlegm)")
MOUTH_TASTES = _same("sour", "bitter", "sweet", "acrid", "salty", "bland")

THROAT_NOSE_SYMPTOMS = _same("normal", "block", "itchy", "pain", "mucus", "sputum", "bloody")
MUCUS_COLORS = _same("clear", "white", "yellow", "green")

EDEMA_PARTS = _same("face", "hand", "finger", "leg", "foot", "chest", "whole body")

DRINK_THIRST = (Option("thirsty", "Thirsty"), Option("normal", "Normal"), Option("no", "Not Thirsty"))
DRINK_PREFERENCE = (Option("cold", "Cold"), Option("normal", "Normal"), Option("hot", "Hot"))
DRINK_AMOUNT = (
    Option("sip", "Sip"),
    Option("washes mouth", "Washes Mouth"),
    Option("drink large amount", "Large Amount"),
)

DIGESTION_SYMPTOMS = _same(
    "good", "ok", "sometimes bad", "bad", "pain", "acid", "bloat", "blech",
    "heart burn", "bad breath", "nausea",
)

APPETITE = (
    Option("good", "Good"),
    Option("ok", "OK"),
    Option("sometimes bad", "Sometimes Bad"),
    Option("bad", "Bad"),
)

URINE_AMOUNT = (Option("much", "Much"), Option("normal", "Normal"), Option("scanty", "Scanty"))

STOOL_FREQUENCY_UNITS = (Option("day", "Day"), Option("week", "Week"))
STOOL_FORMS = (
    Option("normal", "Normal"),
    Option("diarrhea", "Diarrhea"),
    Option("constipation", "Constipation"),
    Option("alternating", "Alternating"),
)

MENSTRUATION_STATUSES = (
    Option("regular", "Regular"),
    Option("irregular", "Irregular"),
    Option("menopause", "Menopause"),
)
MENSTRUATION_AMOUNTS = (Option("normal", "Normal"), Option("scanty", "Scanty"), Option("heavy", "Heavy"))
MENSTRUATION_COLORS = (Option("fresh red", "Fresh Red"), Option("dark", "Dark"), Option("pale", "Pale"))
PMS_SYMPTOMS = _same("breast tenderness", "irritability", "bloating", "headache")

DISCHARGE_SYMPTOMS = _same(
    "watery", "clear", "yellow", "white", "sticky", "no smell", "foul smell",
)

# ----------------------------------------------------------------------
# Tongue
# ----------------------------------------------------------------------

TONGUE_BODY_COLORS = _same(
    "Pale", "Pink", "Red", "Dark Red", "Purple", "Reddish Purple",
    "Bluish Purple", "Red Tip", "Redder side", "Orange side", "Purple side",
)

TONGUE_BODY_SHAPES = _same(
    "Stiff", "Long", "Flaccid", "Cracked", "Swollen", "Short",
    "Rolled up or Down", "Ulcerate", "Tooth-marked", "Half Swollen",
    "Thin", "Thick", "Narrow", "Deviation", "Trembling", "Normal",
)

TONGUE_COATING_COLORS = _same(
    "White", "Yellow", "Gray", "Black", "Greenish", "Half White or Yellow",
)

TONGUE_COATING_QUALITIES = _same(
    "Thin", "Thick", "Scanty", "None", "Dry", "Wet",
    "Slippery", "Greasy", "Rough", "Sticky", "Graphic", "Mirror",
)

TONGUE_LOCATIONS = _same(
    "Heart (Tip)",
    "Lung (Upper-mid)",
    "Stomach/Spleen (Center)",
    "Liver/Gallbladder (Sides)",
    "Kidney/Bladder (Root)",
)

# ----------------------------------------------------------------------
# Diagnosis and treatment
# ----------------------------------------------------------------------

EIGHT_PRINCIPLES: Dict[str, Tuple[Option, ...]] = {
    "exteriorInterior": _same("Exterior", "Interior"),
    "heatCold": _same("Heat", "Cold"),
    "excessDeficient": _same("Excess", "Deficient"),
    "yangYin": _same("Yang", "Yin"),
}

OTHER_TREATMENTS = (
    Option("None", "None"),
    Option("Tui-Na", "Tui-Na"),
    Option("Acupressure", "Acupressure"),
    Option("Moxa", "Moxa"),
    Option("Cupping", "Cupping"),
    Option("Electro Acupuncture", "Electro Acupuncture"),
    Option("Heat Pack", "Heat Pack"),
    Option("Auricular Acupuncture", "Auricular Acupuncture / Ear Seeds"),
    Option("Other", "Other"),
)

# Treatments that take a free-text detail
DETAILED_TREATMENTS = ("Other", "Auricular Acupuncture")

# Treatments that do not bill the manual therapy code
NON_MANUAL_TREATMENTS = ("", "None", "Acupressure")

NEW_PATIENT_CPT_CODES = ("99202", "97810", "97811", "97026")
FOLLOW_UP_CPT_CODES = ("99212", "97813", "97814")
MANUAL_THERAPY_CPT_CODE = "97140"


def label_for(options: Tuple[Option, ...], value: str) -> str:
    """
    Display label for a value, or the value itself if it is not listed.
    """
    for option in options:
        if option.value == value:
            return option.label
    return value


def catalog_as_dict() -> Dict[str, object]:
    """
    The whole catalog as plain JSON-friendly data, keyed by field group.
    """
    def opts(options: Tuple[Option, ...]) -> List[Dict[str, str]]:
        return [asdict(o) for o in options]

    return {
        "complaints": opts(COMMON_COMPLAINTS),
        "aggravatingFactors": opts(AGGRAVATING_FACTORS),
        "alleviatingFactors": opts(ALLEVIATING_FACTORS),
        "painQualities": opts(PAIN_QUALITIES),
        "possibleCauses": opts(POSSIBLE_CAUSES),
        "complaintLocations": {k: list(v) for k, v in COMPLAINT_LOCATIONS.items()},
        "severityTiers": opts(SEVERITY_TIERS),
        "frequencies": opts(FREQUENCIES),
        "onsetUnits": opts(ONSET_UNITS),
        "pastMedicalHistory": opts(PAST_MEDICAL_HISTORY),
        "medications": opts(MEDICATIONS),
        "familyHistory": opts(FAMILY_HISTORY),
        "allergies": opts(ALLERGIES),
        "sex": opts(SEX),
        "heartRhythms": opts(HEART_RHYTHMS),
        "lungSounds": opts(LUNG_SOUNDS),
        "respondToCareStatuses": opts(RESPOND_TO_CARE_STATUSES),
        "reviewOfSystems": {
            "coldHotSensations": opts(COLD_HOT_SENSATIONS),
            "coldHotParts": opts(COLD_HOT_PARTS),
            "sleep": opts(SLEEP_QUALITY + SLEEP_ISSUES),
            "sweatTimes": opts(SWEAT_TIMES),
            "sweatParts": opts(SWEAT_PARTS),
            "eye": opts(EYE_SYMPTOMS),
            "mouth": opts(MOUTH_SYMPTOMS),
            "taste": opts(MOUTH_TASTES),
            "throatNose": opts(THROAT_NOSE_SYMPTOMS),
            "mucusColors": opts(MUCUS_COLORS),
            "edemaParts": opts(EDEMA_PARTS),
            "drinkThirst": opts(DRINK_THIRST),
            "drinkPreference": opts(DRINK_PREFERENCE),
            "drinkAmount": opts(DRINK_AMOUNT),
            "digestion": opts(DIGESTION_SYMPTOMS),
            "appetite": opts(APPETITE),
            "urineAmount": opts(URINE_AMOUNT),
            "stoolFrequencyUnits": opts(STOOL_FREQUENCY_UNITS),
            "stoolForms": opts(STOOL_FORMS),
            "menstruationStatuses": opts(MENSTRUATION_STATUSES),
            "menstruationAmounts": opts(MENSTRUATION_AMOUNTS),
            "menstruationColors": opts(MENSTRUATION_COLORS),
            "pms": opts(PMS_SYMPTOMS),
            "discharge": opts(DISCHARGE_SYMPTOMS),
            "yesNo": opts(YES_NO),
        },
        "tongue": {
            "bodyColors": opts(TONGUE_BODY_COLORS),
            "bodyShapes": opts(TONGUE_BODY_SHAPES),
            "locations": opts(TONGUE_LOCATIONS),
            "coatingColors": opts(TONGUE_COATING_COLORS),
            "coatingQualities": opts(TONGUE_COATING_QUALITIES),
        },
        "eightPrinciples": {k: opts(v) for k, v in EIGHT_PRINCIPLES.items()},
        "otherTreatments": opts(OTHER_TREATMENTS),
        "cpt": {
            "new": list(NEW_PATIENT_CPT_CODES),
            "follow-up": list(FOLLOW_UP_CPT_CODES),
            "manualTherapy": MANUAL_THERAPY_CPT_CODE,
        },
    }
