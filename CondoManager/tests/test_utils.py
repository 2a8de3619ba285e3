from datetime import date, datetime

from CondoManager.utils import format_display_date, hash_password, is_password_hash, verify_password


def test_hash_is_salted_and_verifies():
    first = hash_password("correct horse")
    second = hash_password("correct horse")

    assert first != second
    assert first != "correct horse"
    assert is_password_hash(first)
    assert verify_password("correct horse", first)
    assert verify_password("correct horse", second)
    assert not verify_password("Correct horse", first)


def test_verify_rejects_empty_and_plain_values():
    hashed = hash_password("pw")
    assert not verify_password("", hashed)
    assert not verify_password(None, hashed)
    assert not verify_password("pw", None)
    assert not verify_password("pw", "pw")
    assert not is_password_hash("pw")


def test_verify_rejects_malformed_hash():
    assert is_password_hash("$2b$12$short")
    assert not verify_password("pw", "$2b$12$short")


def test_format_display_date():
    assert format_display_date(date(2025, 12, 1)) == "Monday, December 01, 2025"
    assert format_display_date(datetime(2024, 7, 4, 15, 0)) == "Thursday, July 04, 2024"
    assert format_display_date(None) == ""
