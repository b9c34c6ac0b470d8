"""
Conditional field display.
"""
from tcmchart.chart.kinds import ChartType
from tcmchart.chart.updates import set_field, set_location_comment, toggle_option
from tcmchart.chart.visibility import is_visible, visibility_map


def test_new_chart_only_fields(filled_record):
    new = filled_record(chart_type=ChartType.NEW)
    follow_up = filled_record(chart_type=ChartType.FOLLOW_UP)

    for path in ("address", "phone", "clinicName", "clinicLogo", "medicalHistory",
                 "medicalHistory.allergy", "chiefComplaint.westernMedicalDiagnosis"):
        assert is_visible(path, new)
        assert not is_visible(path, follow_up)

    assert not is_visible("respondToCare", new)
    assert is_visible("respondToCare.notes", follow_up)


def test_improved_days_needs_improved_status(filled_record):
    r = filled_record(chart_type=ChartType.FOLLOW_UP)
    assert not is_visible("respondToCare.improvedDays", r)

    r = set_field(r, "respondToCare.status", "Improved")
    assert is_visible("respondToCare.improvedDays", r)


def test_menstruation_follows_sex_and_status(filled_record):
    male = filled_record(sex="M")
    assert not is_visible("reviewOfSystems.menstruation", male)
    assert not is_visible("reviewOfSystems.menstruation.lmp", male)

    female = filled_record(sex="F")
    assert is_visible("reviewOfSystems.menstruation", female)
    assert not is_visible("reviewOfSystems.menstruation.lmp", female)

    regular = set_field(female, "reviewOfSystems.menstruation.status", "regular")
    assert is_visible("reviewOfSystems.menstruation.lmp", regular)
    assert not is_visible("reviewOfSystems.menstruation.menopauseAge", regular)
    assert not is_visible("reviewOfSystems.menstruation.painDetails", regular)

    painful = set_field(regular, "reviewOfSystems.menstruation.pain", "yes")
    assert is_visible("reviewOfSystems.menstruation.painDetails", painful)

    menopause = set_field(female, "reviewOfSystems.menstruation.status", "menopause")
    assert is_visible("reviewOfSystems.menstruation.menopauseAge", menopause)
    assert not is_visible("reviewOfSystems.menstruation.lmp", menopause)


def test_child_hidden_when_ancestor_hidden(filled_record):
    # status says "menopause" but the patient is male: the whole panel is hidden
    male = filled_record(sex="M")
    male = set_field(male, "reviewOfSystems.menstruation.status", "menopause")
    assert not is_visible("reviewOfSystems.menstruation.menopauseAge", male)


def test_review_of_systems_gates(filled_record):
    r = filled_record()
    assert not is_visible("reviewOfSystems.sweat.time", r)
    assert not is_visible("reviewOfSystems.throatNose.mucusColor", r)
    assert not is_visible("reviewOfSystems.edema.parts", r)
    assert not is_visible("reviewOfSystems.discharge.symptoms", r)

    r = set_field(r, "reviewOfSystems.sweat.present", "yes")
    r = toggle_option(r, "reviewOfSystems.throatNose.symptoms", "mucus", True)
    r = set_field(r, "reviewOfSystems.edema.present", "yes")
    r = set_field(r, "reviewOfSystems.discharge.present", "yes")

    assert is_visible("reviewOfSystems.sweat.time", r)
    assert is_visible("reviewOfSystems.throatNose.mucusColor", r)
    assert is_visible("reviewOfSystems.edema.parts", r)
    assert is_visible("reviewOfSystems.discharge.symptoms", r)


def test_location_details_follow_suggestions(filled_record):
    r = filled_record()
    assert not is_visible("chiefComplaint.locationDetails", r)

    r = toggle_option(r, "chiefComplaint.selectedComplaints", "Knee Pain", True)
    assert is_visible("chiefComplaint.locationDetails", r)


def test_other_treatment_text(filled_record):
    r = filled_record()
    r = set_field(r, "diagnosisAndTreatment.selectedTreatment", "Cupping")
    assert not is_visible("diagnosisAndTreatment.otherTreatmentText", r)

    r = set_field(r, "diagnosisAndTreatment.selectedTreatment", "Auricular Acupuncture")
    assert is_visible("diagnosisAndTreatment.otherTreatmentText", r)


def test_location_comment_shown_for_checked_location(filled_record):
    r = toggle_option(filled_record(), "tongue.body.locations", "Heart (Tip)", True)
    r = set_location_comment(r, "Heart (Tip)", "red")

    fields = visibility_map(r)

    assert fields["tongue.body.locationComments.Heart (Tip)"] is True
    assert fields["tongue.body.locationComments.Kidney/Bladder (Root)"] is False
    assert fields["address"] is True


def test_paths_without_rules_are_visible(filled_record):
    assert is_visible("name", filled_record())
    assert is_visible("tongue.coating.notes", filled_record())
