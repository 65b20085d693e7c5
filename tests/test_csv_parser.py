import pytest
from fastapi import HTTPException

from app.services.csv_parser import CSVParser


def test_parse_basic_csv():
    participants, skipped = CSVParser.parse_participant_csv(
        b"name,email\nAda Lovelace,ada@example.com\nGrace Hopper,grace@example.com\n"
    )
    assert participants == [
        {"name": "Ada Lovelace", "email": "ada@example.com"},
        {"name": "Grace Hopper", "email": "grace@example.com"},
    ]
    assert skipped == []


def test_header_aliases_and_bom():
    participants, _ = CSVParser.parse_participant_csv(
        "\ufeffFull Name,Email Address\n  Ada Lovelace , ada@example.com \n".encode("utf-8")
    )
    assert participants == [{"name": "Ada Lovelace", "email": "ada@example.com"}]


def test_rows_missing_fields_are_reported():
    participants, skipped = CSVParser.parse_participant_csv(
        b"name,email\nAda,ada@example.com\nNo Email,\n,\n,someone@example.com\n"
    )
    assert participants == [{"name": "Ada", "email": "ada@example.com"}]
    assert skipped == [
        {"row": 3, "error": "email is empty"},
        {"row": 5, "error": "name is empty"},
    ]


def test_missing_required_column():
    with pytest.raises(HTTPException) as exc:
        CSVParser.parse_participant_csv(b"name,phone\nAda,123\n")
    assert exc.value.status_code == 400
    assert exc.value.detail == "Missing required columns: email"


def test_empty_file():
    with pytest.raises(HTTPException) as exc:
        CSVParser.parse_participant_csv(b"")
    assert exc.value.status_code == 400


def test_no_valid_rows():
    with pytest.raises(HTTPException) as exc:
        CSVParser.parse_participant_csv(b"name,email\n,ada@example.com\n")
    assert exc.value.detail == "No valid rows found in CSV"
