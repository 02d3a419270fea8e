from bank_name_dedupe.models import BankRecord, ComparisonBucket
from bank_name_dedupe.steps.reference import SetReferenceComparator
from bank_name_dedupe.steps.sorting import sort_by_ifsc

MAPPING = [
    ["STATE BANK OF INDIA", "SBIN0000001", "400002001"],
    ["STATE BANK OF INDIA", "SBIN0000002", "400002002"],
    ["BROKEN ROW", "SBIN2", "4000"],
    ["ONLY NAME"],
]


def _record(micr: str, ifsc: str, name: str = "STATE BANK OF INDIA") -> BankRecord:
    return BankRecord(micr=micr, ifsc=ifsc, bank_name=name, micr_length="9", ifsc_length="11")


def test_classifies_into_one_bucket_each() -> None:
    comparator = SetReferenceComparator.from_mapping(MAPPING)
    records = [
        _record("400002001", "SBIN0000001"),
        _record("499999999", "SBIN0000002"),
        _record("400002002", "SBIN9999999"),
        _record("499999998", "SBIN9999998"),
    ]

    result = comparator.compare(records)

    assert result.bucket(ComparisonBucket.BOTH_MATCHED) == [records[0]]
    assert result.bucket(ComparisonBucket.MICR_MISSING_IFSC_PRESENT) == [records[1]]
    assert result.bucket(ComparisonBucket.IFSC_MISSING_MICR_PRESENT) == [records[2]]
    assert result.bucket(ComparisonBucket.BOTH_UNMATCHED) == [records[3]]
    assert result.ifsc_matched == [records[0], records[1]]
    assert result.micr_unmatched == [records[1], records[3]]
    assert result.counts() == {
        "ifsc_matched": 2,
        "ifsc_unmatched": 2,
        "micr_matched": 2,
        "micr_unmatched": 2,
        "ifsc_missing_micr_present": 1,
        "micr_missing_ifsc_present": 1,
        "both_missing": 1,
    }


def test_mapping_ignores_codes_of_wrong_length() -> None:
    comparator = SetReferenceComparator.from_mapping(MAPPING)

    assert comparator.classify(_record("4000", "SBIN2")) == ComparisonBucket.BOTH_UNMATCHED


def test_sort_by_ifsc_is_stable() -> None:
    records = [
        _record("400002003", "UTIB0000001", "AXIS BANK"),
        _record("400002001", "HDFC0000001", "HDFC BANK"),
        _record("400002002", "HDFC0000001", "HDFC BANK LTD"),
    ]

    assert [record.bank_name for record in sort_by_ifsc(records)] == ["HDFC BANK", "HDFC BANK LTD", "AXIS BANK"]
