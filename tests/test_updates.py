"""
Edits to charts: set, toggle, tongue comments, sleep routing and the
other-treatment selection.
"""
import pytest

from tcmchart.chart.errors import (
    ImmutableFieldError,
    InvalidFieldValueError,
    UnknownFieldError,
)
from tcmchart.chart.kinds import ChartType, Sex
from tcmchart.chart.updates import (
    get_value,
    select_other_treatment,
    set_field,
    set_location_comment,
    toggle_option,
    toggle_sleep,
)
from tcmchart.chart.visibility import LOCATION_COMMENTS_PATH, is_visible

HEART = "Heart (Tip)"
LUNG = "Lung (Upper-mid)"


@pytest.fixture
def record(filled_record):
    return filled_record()


class TestSetField:

    def test_returns_new_record_and_leaves_input_untouched(self, record):
        updated = set_field(record, "chiefComplaint.remark", "worse in the morning")

        assert updated.chief_complaint.remark == "worse in the morning"
        assert record.chief_complaint.remark == ""

    def test_accepts_snake_case_paths(self, record):
        updated = set_field(record, "review_of_systems.sweat.present", "yes")
        assert get_value(updated, "reviewOfSystems.sweat.present") == "yes"

    def test_form_strings_are_coerced(self, record):
        assert set_field(record, "age", "57").age == 57
        assert set_field(record, "age", "").age is None
        assert set_field(record, "sex", "M").sex == Sex.MALE
        assert set_field(record, "chiefComplaint.severityScore", "7").chief_complaint.severity_score == 7

    @pytest.mark.parametrize(
        "path,value",
        [
            ("age", -1),
            ("chiefComplaint.severityScore", 11),
            ("sex", "X"),
        ],
    )
    def test_invalid_values(self, record, path, value):
        with pytest.raises(InvalidFieldValueError):
            set_field(record, path, value)

    def test_chart_type_is_immutable(self, record):
        with pytest.raises(ImmutableFieldError):
            set_field(record, "chartType", "follow-up")

    def test_unknown_path(self, record):
        with pytest.raises(UnknownFieldError):
            set_field(record, "chiefComplaint.doesNotExist", "x")

    def test_section_missing_for_chart_type(self, filled_record):
        follow_up = filled_record(chart_type=ChartType.FOLLOW_UP)
        with pytest.raises(UnknownFieldError):
            set_field(follow_up, "medicalHistory.allergyOther", "pollen")

        new = filled_record(chart_type=ChartType.NEW)
        with pytest.raises(UnknownFieldError):
            set_field(new, "respondToCare.notes", "better")


class TestToggleOption:

    def test_appends_in_order_without_duplicates(self, record):
        path = "chiefComplaint.selectedComplaints"
        r = toggle_option(record, path, "Neck Pain", True)
        r = toggle_option(r, path, "Headache", True)
        r = toggle_option(r, path, "Neck Pain", True)

        assert r.chief_complaint.selected_complaints == ["Neck Pain", "Headache"]

    def test_uncheck_removes_value(self, record):
        path = "reviewOfSystems.eye.symptoms"
        r = toggle_option(record, path, "dry", True)
        r = toggle_option(r, path, "dry", False)
        r = toggle_option(r, path, "redness", False)

        assert r.review_of_systems.eye.symptoms == []

    def test_rejects_non_list_fields(self, record):
        with pytest.raises(InvalidFieldValueError):
            toggle_option(record, "name", "x", True)


class TestTongueComments:

    def test_unchecking_location_drops_its_comment(self, record):
        r = toggle_option(record, "tongue.body.locations", HEART, True)
        r = toggle_option(r, "tongue.body.locations", LUNG, True)
        r = set_location_comment(r, HEART, "red tip")
        r = set_location_comment(r, LUNG, "pale")

        r = toggle_option(r, "tongue.body.locations", HEART, False)

        assert r.tongue.body.locations == [LUNG]
        assert r.tongue.body.location_comments == {LUNG: "pale"}

    def test_replacing_locations_drops_orphan_comments(self, record):
        r = toggle_option(record, "tongue.body.locations", HEART, True)
        r = set_location_comment(r, HEART, "red tip")

        r = set_field(r, "tongue.body.locations", [LUNG])

        assert r.tongue.body.location_comments == {}

    def test_comment_requires_checked_location(self, record):
        with pytest.raises(InvalidFieldValueError):
            set_location_comment(record, HEART, "red tip")

    def test_comment_path_shared_with_visibility(self, record):
        path = f"{LOCATION_COMMENTS_PATH}.{HEART}"
        assert not is_visible(path, record)

        r = toggle_option(record, "tongue.body.locations", HEART, True)
        r = set_field(r, path, "red tip")

        assert is_visible(path, r)
        assert r.tongue.body.location_comments == {HEART: "red tip"}


class TestSleep:

    @pytest.mark.parametrize("value", ["O.K.", "dream", "nightmare"])
    def test_quality_values(self, record, value):
        r = toggle_sleep(record, value, True)
        assert r.review_of_systems.sleep.quality == [value]
        assert r.review_of_systems.sleep.issues == []

    def test_issue_values(self, record):
        r = toggle_sleep(record, "insomnia", True)
        r = toggle_sleep(r, "pain", True)
        assert r.review_of_systems.sleep.issues == ["insomnia", "pain"]
        assert r.review_of_systems.sleep.quality == []


class TestOtherTreatment:

    def test_selection_rebuilds_cpt(self, record):
        r = select_other_treatment(record, "Cupping")
        assert r.diagnosis_and_treatment.selected_treatment == "Cupping"
        assert r.diagnosis_and_treatment.cpt == "99202, 97810, 97811, 97026, 97140"

        r = select_other_treatment(r, "Acupressure")
        assert r.diagnosis_and_treatment.cpt == "99202, 97810, 97811, 97026"

    def test_set_field_routes_through_selection(self, filled_record):
        record = filled_record(chart_type=ChartType.FOLLOW_UP)
        record = set_field(record, "diagnosisAndTreatment.cpt", "12345")

        r = set_field(record, "diagnosisAndTreatment.selectedTreatment", "Moxa")

        assert r.diagnosis_and_treatment.cpt == "99212, 97813, 97814, 97140, 12345"

    def test_selection_is_validated(self, record):
        with pytest.raises(InvalidFieldValueError):
            set_field(record, "diagnosisAndTreatment.selectedTreatment", 5)

    def test_detail_text_cleared_when_choice_takes_none(self, record):
        r = select_other_treatment(record, "Other")
        r = set_field(r, "diagnosisAndTreatment.otherTreatmentText", "Custom Herb Soak")

        kept = select_other_treatment(r, "Auricular Acupuncture")
        assert kept.diagnosis_and_treatment.other_treatment_text == "Custom Herb Soak"

        cleared = select_other_treatment(r, "Cupping")
        assert cleared.diagnosis_and_treatment.other_treatment_text == ""
