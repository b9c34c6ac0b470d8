"""
RecordStore against an in-memory SQLite database.
"""
from tcmchart.chart.schema import ClinicInfo
from tcmchart.chart.updates import set_field
from tcmchart.models import PATIENT_RECORDS_KEY, StoredValue


def _file_nos(store):
    return [r.file_no for r in store.list()]


class TestRecords:

    def test_empty_store(self, store):
        assert store.list() == []
        assert store.get("A-001") is None

    def test_upsert_appends_in_insertion_order(self, store, filled_record):
        for file_no in ("C", "A", "B"):
            assert store.upsert(filled_record(file_no=file_no)).ok

        assert _file_nos(store) == ["C", "A", "B"]

    def test_upsert_replaces_in_place(self, store, filled_record):
        store.upsert(filled_record(file_no="A"))
        store.upsert(filled_record(file_no="B"))

        edited = set_field(filled_record(file_no="A"), "name", "Jane Doe")
        assert store.upsert(edited).ok

        assert _file_nos(store) == ["A", "B"]
        assert store.get("A").name == "Jane Doe"

    def test_delete(self, store, filled_record):
        store.upsert(filled_record(file_no="A"))
        store.upsert(filled_record(file_no="B"))

        assert store.delete("A").ok
        assert _file_nos(store) == ["B"]

    def test_delete_missing_is_a_no_op(self, store, filled_record):
        store.upsert(filled_record(file_no="A"))

        result = store.delete("ZZZ")

        assert result.ok
        assert _file_nos(store) == ["A"]

    def test_unreadable_records_are_skipped(self, store, session_factory, filled_record):
        store.upsert(filled_record(file_no="A"))
        with session_factory() as db:
            row = db.get(StoredValue, PATIENT_RECORDS_KEY)
            row.value = [*row.value, {"fileNo": "bad", "age": "not a number"}]
            db.commit()

        assert _file_nos(store) == ["A"]


class TestClinicDefaults:

    def test_blank_until_set(self, store):
        assert store.get_clinic_defaults() == ClinicInfo()

    def test_set_and_get(self, store, clinic):
        assert store.set_clinic_defaults(clinic).ok
        assert store.get_clinic_defaults() == clinic

    def test_save_clinic_from_record(self, store, filled_record):
        record = set_field(filled_record(), "clinicName", "West Clinic")

        assert store.save_clinic_from_record(record).ok

        assert store.get_clinic_defaults() == record.clinic_info()
        assert store.list() == []

    def test_save_record_writes_clinic_through(self, store, filled_record):
        record = set_field(filled_record(), "clinicName", "North Clinic")
        record = set_field(record, "diagnosisAndTreatment.therapistName", "Dr. Wu")

        assert store.save_record(record).ok

        defaults = store.get_clinic_defaults()
        assert defaults.clinic_name == "North Clinic"
        assert defaults.therapist_name == "Dr. Wu"
        assert _file_nos(store) == [record.file_no]


class TestStorageFailure:

    def test_reads_fall_back_to_defaults(self, broken_store):
        assert broken_store.list() == []
        assert broken_store.get_clinic_defaults() == ClinicInfo()

    def test_writes_report_failure(self, broken_store, filled_record, clinic):
        for result in (
            broken_store.upsert(filled_record()),
            broken_store.delete("A-001"),
            broken_store.set_clinic_defaults(clinic),
            broken_store.save_record(filled_record()),
        ):
            assert not result.ok
            assert result.error
