from bank_name_dedupe.models import BankRecord
from bank_name_dedupe.steps.validation import FixedLengthValidator


def test_splits_valid_and_invalid_records() -> None:
    records = [
        BankRecord.from_fields(["400002001", "SBIN0000001", "STATE BANK OF INDIA", "9", "11"]),
        BankRecord.from_fields([" 400002002 ", " SBIN0000002 ", "STATE BANK OF INDIA"]),
        BankRecord.from_fields(["40000200", "SBIN0000003", "STATE BANK OF INDIA", "8", "11"]),
        BankRecord.from_fields(["400002004", "SBIN00000044", "STATE BANK OF INDIA", "9", "12"]),
        BankRecord.from_fields(["400002005"]),
    ]

    result = FixedLengthValidator().validate(records)

    assert [record.micr for record in result.valid] == ["400002001", "400002002"]
    assert result.total_records == 5
    assert result.correct_records == 2
    assert result.incorrect_records == 3


def test_short_rows_are_padded_not_rejected() -> None:
    record = BankRecord.from_fields(["400002005"])

    assert record.ifsc == ""
    assert record.bank_name == ""
    assert record.ifsc_length == ""
    assert record.as_row() == ["400002005"]


def test_custom_lengths() -> None:
    validator = FixedLengthValidator(micr_length=3, ifsc_length=4)

    assert validator.is_valid(BankRecord(micr="123", ifsc="ABCD", bank_name=""))
    assert not validator.is_valid(BankRecord(micr="400002001", ifsc="SBIN0000001", bank_name=""))
