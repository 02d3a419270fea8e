import pytest

from bank_name_dedupe.steps.similarity import (
    edit_ratio,
    jaro_similarity,
    jaro_winkler,
    levenshtein_distance,
    phonetic_score,
    soundex,
    token_set_ratio,
    token_sort_ratio,
)


def test_levenshtein_classic_pair() -> None:
    assert levenshtein_distance("KITTEN", "SITTING") == 3
    assert levenshtein_distance("", "ABC") == 3
    assert levenshtein_distance("SAME", "SAME") == 0


def test_edit_ratio_kitten_sitting() -> None:
    assert edit_ratio("KITTEN", "SITTING") == pytest.approx((1 - 3 / 7) * 100)
    assert round(edit_ratio("KITTEN", "SITTING"), 2) == 57.14


def test_edit_ratio_both_empty_is_identical() -> None:
    assert edit_ratio("", "") == 100.0
    assert edit_ratio("", "HDFC") == 0.0


def test_jaro_winkler_martha() -> None:
    assert jaro_similarity("MARTHA", "MARHTA") == pytest.approx(17 / 18)
    assert jaro_winkler("MARTHA", "MARHTA") == pytest.approx((17 / 18 + 3 * 0.1 * (1 - 17 / 18)) * 100)


def test_jaro_winkler_no_common_characters() -> None:
    assert jaro_winkler("ABC", "XYZ") == 0.0
    assert jaro_winkler("", "XYZ") == 0.0


def test_jaro_winkler_identical_strings() -> None:
    assert jaro_winkler("CANARA BANK", "CANARA BANK") == pytest.approx(100.0)
    assert jaro_winkler("", "") == pytest.approx(100.0)


def test_jaro_winkler_prefix_capped_at_four() -> None:
    jaro = jaro_similarity("ICICI BANK LTD", "ICICI BANK LIMITED")
    assert jaro == pytest.approx((1 + 14 / 18 + 1) / 3)
    assert jaro_winkler("ICICI BANK LTD", "ICICI BANK LIMITED") == pytest.approx((jaro + 0.4 * (1 - jaro)) * 100)


def test_token_sort_ignores_word_order() -> None:
    assert token_sort_ratio("STATE BANK OF INDIA", "BANK OF INDIA STATE") == 100.0


def test_token_set_tolerates_extra_suffix() -> None:
    assert token_set_ratio("ICICI BANK LTD", "ICICI BANK") == pytest.approx((1 - 4 / 14) * 100)
    assert token_set_ratio("BANK ICICI", "ICICI BANK") == 100.0


def test_token_set_ignores_repeated_tokens() -> None:
    assert token_set_ratio("BANK BANK OF BARODA", "BANK OF BARODA") == 100.0


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("Smith", "S530"),
        ("Smyth", "S530"),
        ("Robert", "R163"),
        ("Rupert", "R163"),
        ("Tymczak", "T522"),
        ("A", "A000"),
        ("", ""),
        ("123 !!", ""),
    ],
)
def test_soundex_codes(value: str, expected: str) -> None:
    assert soundex(value) == expected


def test_phonetic_score() -> None:
    assert phonetic_score("SMITH", "SMYTH") == 100.0
    assert phonetic_score("SMITH", "JONES") == 0.0
    assert phonetic_score("", "") == 100.0
