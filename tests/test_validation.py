from datetime import date

import pytest

from app.services.validation import (
    AGE_MESSAGE,
    calculate_age,
    parse_birthdate,
    validate_age,
    validate_email,
    validate_password,
    validate_phone,
    validate_sign_up,
)


TODAY = date(2024, 6, 15)


@pytest.mark.parametrize("password", ["Abcdef1#", "ZZZZZZZ9@", "aB3$aaaaaaaa", "Qwerty12&*"])
def test_password_accepts_all_required_classes(password):
    assert validate_password(password)


@pytest.mark.parametrize(
    "password",
    [
        "abcdef1#",   # no uppercase
        "Abcdefg#",   # no digit
        "Abcdefg1",   # no symbol
        "Abc1#",      # too short
        "Abcdef1#!",  # symbol outside the allow-list
        "Abcdef1# ",  # whitespace
        "Ábcdef1#",   # non-ASCII letter
    ],
)
def test_password_rejects_missing_class_or_foreign_characters(password):
    assert not validate_password(password)


@pytest.mark.parametrize("email", ["a@b.com", "first.last@mail.example.org"])
def test_email_accepts(email):
    assert validate_email(email)


@pytest.mark.parametrize("email", ["a@b", "ab.com", "a b@c.com", "a@@b.com", "a@b.com\n"])
def test_email_rejects(email):
    assert not validate_email(email)


@pytest.mark.parametrize("phone", ["+51987654321", "987 654 321", "(01) 555-1234"])
def test_phone_accepts(phone):
    assert validate_phone(phone)


@pytest.mark.parametrize("phone", ["12345678", "+5198x654321", "++51987654321"])
def test_phone_rejects(phone):
    assert not validate_phone(phone)


def test_age_counts_only_full_years():
    assert calculate_age(date(2000, 6, 16), TODAY) == 23
    assert calculate_age(date(2000, 6, 15), TODAY) == 24
    assert calculate_age(date(2000, 5, 30), TODAY) == 24


def test_age_exactly_thirteen_today_is_accepted():
    assert validate_age(date(2011, 6, 15), TODAY)
    assert not validate_age(date(2011, 6, 16), TODAY)


def test_parse_birthdate_accepts_dates_and_datetimes():
    assert parse_birthdate("2000-01-01") == date(2000, 1, 1)
    assert parse_birthdate("2000-01-01T10:00:00Z") == date(2000, 1, 1)
    assert parse_birthdate("01/01/2000") is None
    assert parse_birthdate("") is None


def test_sign_up_reports_every_failing_field():
    fields = {
        "email": "not-an-email",
        "password": "weak",
        "name": "A",
        "lastName": "B",
        "phoneNumber": "12",
        "birthdate": "2020-01-01",
    }
    errors = validate_sign_up(fields, TODAY)

    assert [e.field for e in errors] == ["email", "password", "phoneNumber", "birthdate"]
    assert errors[-1].message == AGE_MESSAGE


def test_sign_up_reports_missing_fields_once():
    errors = validate_sign_up({"email": "a@b.com", "password": "Abcdef1#", "name": "  "}, TODAY)

    assert sorted(e.field for e in errors) == ["birthdate", "lastName", "name", "phoneNumber"]


def test_sign_up_valid_fields_pass(sign_up_fields):
    assert validate_sign_up(sign_up_fields, TODAY) == []
