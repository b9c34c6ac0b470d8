"""
Suggestions, option variants, billing codes and display strings.
"""
import pytest

from tcmchart.chart import catalog
from tcmchart.chart.catalog import Option
from tcmchart.chart.derive import (
    active_location_suggestions,
    combined_other_treatment_label,
    extract_formula_name,
    factor_options,
    follow_up_variant,
    join_display,
    reconcile_cpt_codes,
    severity_display,
)
from tcmchart.chart.kinds import ChartType
from tcmchart.chart.schema import ChiefComplaint


class TestCptCodes:

    def test_new_chart_without_treatment_gets_base_codes(self):
        assert reconcile_cpt_codes("", "None", ChartType.NEW) == "99202, 97810, 97811, 97026"

    def test_manual_treatment_adds_manual_therapy_code(self):
        assert (
            reconcile_cpt_codes("", "Cupping", ChartType.NEW)
            == "99202, 97810, 97811, 97026, 97140"
        )

    def test_follow_up_keeps_extra_codes_after_manual_code(self):
        assert (
            reconcile_cpt_codes("99212, 12345", "Tui-Na", ChartType.FOLLOW_UP)
            == "99212, 97813, 97814, 97140, 12345"
        )

    def test_manual_code_dropped_when_treatment_no_longer_bills_it(self):
        assert (
            reconcile_cpt_codes("97140, 99999", "None", ChartType.FOLLOW_UP)
            == "99212, 97813, 97814, 99999"
        )

    @pytest.mark.parametrize("treatment", ["", "None", "Acupressure"])
    def test_non_manual_treatments(self, treatment):
        assert "97140" not in reconcile_cpt_codes("97140", treatment, ChartType.NEW)

    def test_no_duplicates_and_blank_entries_ignored(self):
        result = reconcile_cpt_codes(" 99202,,55555, 55555 ,", "Moxa", "new")
        assert result == "99202, 97810, 97811, 97026, 97140, 55555"

    def test_stale_base_codes_of_other_chart_type_are_kept_as_extras(self):
        # a code only counts as "base" for the chart type being billed
        result = reconcile_cpt_codes("99202", "None", ChartType.FOLLOW_UP)
        assert result == "99212, 97813, 97814, 99202"


    @pytest.mark.parametrize("chart_type", [ChartType.NEW, ChartType.FOLLOW_UP])
    @pytest.mark.parametrize("treatment", ["", "None", "Acupressure", "Cupping"])
    @pytest.mark.parametrize("existing", ["", "97140, 99999", "99202, 1"])
    def test_reconciling_twice_changes_nothing(self, chart_type, treatment, existing):
        once = reconcile_cpt_codes(existing, treatment, chart_type)
        assert reconcile_cpt_codes(once, treatment, chart_type) == once


class TestLocationSuggestions:

    def test_union_in_first_seen_order(self):
        assert active_location_suggestions(["Neck Pain", "Knee Pain"]) == [
            "Left", "Right", "Upper", "Lower", "Both",
        ]

    def test_complaints_without_hints_contribute_nothing(self):
        assert active_location_suggestions(["Fatigue / Lethargy", "Insomnia"]) == []
        assert active_location_suggestions([]) == []


class TestFollowUpVariant:

    def test_prefixes_same_as_before(self):
        rest = Option("Rest", "Rest")
        assert follow_up_variant([rest]) == [catalog.SAME_AS_BEFORE, rest]

    def test_idempotent(self):
        once = follow_up_variant(catalog.AGGRAVATING_FACTORS)
        assert follow_up_variant(once) == once

    def test_factor_options_by_chart_type(self):
        new = factor_options("palliation", ChartType.NEW)
        follow_up = factor_options("palliation", ChartType.FOLLOW_UP)

        assert new == list(catalog.ALLEVIATING_FACTORS)
        assert follow_up[0] == catalog.SAME_AS_BEFORE
        assert follow_up[1:] == new

    def test_unknown_factor_list(self):
        with pytest.raises(ValueError):
            factor_options("quality", ChartType.NEW)


class TestDisplayStrings:

    def test_formula_name_is_first_line_without_marker(self):
        text = "Formula: Si Jun Zi Tang\nTake twice daily"
        assert extract_formula_name(text) == "Si Jun Zi Tang"

    def test_formula_name_without_marker(self):
        assert extract_formula_name("Gui Pi Tang \n 3g tid") == "Gui Pi Tang"
        assert extract_formula_name("") == ""

    def test_other_treatment_with_detail(self):
        assert combined_other_treatment_label("Other", "Custom Herb Soak") == "Other: Custom Herb Soak"

    def test_auricular_uses_catalog_label(self):
        assert (
            combined_other_treatment_label("Auricular Acupuncture", "Shen Men")
            == "Auricular Acupuncture / Ear Seeds: Shen Men"
        )
        assert (
            combined_other_treatment_label("Auricular Acupuncture", "")
            == "Auricular Acupuncture / Ear Seeds"
        )

    def test_plain_and_empty_treatments(self):
        assert combined_other_treatment_label("Cupping", "ignored") == "Cupping"
        assert combined_other_treatment_label("", "") == "None"
        assert combined_other_treatment_label("None", "") == "None"

    def test_join_display_appends_other_text(self):
        assert join_display(["Cold", "Stress"], "Long drives") == "Cold, Stress, Long drives"
        assert join_display([], "") == ""

    def test_severity_display(self):
        cc = ChiefComplaint(severity_score=6, severity_description="Moderate")
        assert severity_display(cc, printable=True) == "P/L= 6 / 10, Moderate"
        assert severity_display(cc) == "6/10 Moderate"
        assert severity_display(ChiefComplaint()) == ""
