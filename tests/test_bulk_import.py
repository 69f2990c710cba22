"""
Tests for CSV bulk import of universities.
"""
import math

import pytest

from app.core.errors import ImportFileError
from app.db.models.university import University
from app.services.import_service import (
    coerce_row,
    import_universities,
    is_csv_upload,
    parse_decimal,
    parse_int,
    read_csv_rows,
)

HEADER = "name,location,tuition_fee,acceptance_rate,scholarship_available,minimum_gpa,education_gap,description,image_url\n"
TORONTO = "U of T,Toronto,12000,43,TRUE,3.5,2,Public research university,https://example.com/uoft.jpg\n"
MCGILL = "McGill,Montreal,18000,46,false,3.2,1,Montreal campus,https://example.com/mcgill.jpg\n"


def test_coerce_row_converts_numeric_and_boolean_columns():
    row = read_csv_rows((HEADER + TORONTO).encode())[0]
    coerced = coerce_row(row)

    assert coerced["name"] == "U of T"
    assert coerced["tuition_fee"] == 12000
    assert isinstance(coerced["tuition_fee"], int)
    assert coerced["acceptance_rate"] == 43
    assert coerced["scholarship_available"] is True
    assert coerced["minimum_gpa"] == 3.5
    assert coerced["education_gap"] == 2


def test_parse_int_takes_leading_integer():
    assert parse_int("12.7") == 12
    assert parse_int(" 45000 USD") == 45000
    assert math.isnan(parse_int("abc"))
    assert math.isnan(parse_int(""))


def test_parse_decimal_and_boolean_rules():
    assert parse_decimal("3.5 GPA") == 3.5
    assert math.isnan(parse_decimal("n/a"))
    assert coerce_row({"scholarship_available": "yes"})["scholarship_available"] is False


def test_is_csv_upload_accepts_content_type_or_extension():
    assert is_csv_upload("data.txt", "text/csv")
    assert is_csv_upload("UNIS.CSV", "application/octet-stream")
    assert not is_csv_upload("unis.xlsx", "application/vnd.ms-excel")


def test_blank_lines_are_skipped():
    rows = read_csv_rows((HEADER + TORONTO + "\n\n" + MCGILL).encode())
    assert [r["name"] for r in rows] == ["U of T", "McGill"]


def test_missing_columns_raise_parse_error():
    with pytest.raises(ImportFileError) as exc_info:
        read_csv_rows(b"name,location\nU of T,Toronto\n")
    assert str(exc_info.value).startswith("Failed to parse CSV")
    assert "tuition_fee" in str(exc_info.value)


def test_import_inserts_all_rows_in_one_batch(db_session):
    result = import_universities(db_session, (HEADER + TORONTO + MCGILL).encode())

    assert result.inserted == 2
    assert result.message == "Successfully uploaded 2 universities"
    assert db_session.query(University).count() == 2


def test_default_import_passes_unparsed_numbers_through(db_session, client):
    junk = "Junk U,Nowhere,free,abc,true,n/a,zz,,\n"
    result = import_universities(db_session, (HEADER + junk).encode())

    assert result.inserted == 1
    assert result.rejected == []
    stored = db_session.query(University).one()
    assert stored.name == "Junk U"
    assert stored.scholarship_available is True
    # SQLite stores NaN as NULL
    assert (stored.tuition_fee, stored.acceptance_rate, stored.minimum_gpa, stored.education_gap) == (None, None, None, None)

    response = client.get("/universities")
    assert response.status_code == 200
    assert response.json()["total"] == 0


def test_strict_import_skips_and_reports_invalid_rows(db_session):
    junk = "Nowhere U,Nowhere,free,abc,true,five,0,,\n"
    result = import_universities(db_session, (HEADER + TORONTO + junk).encode(), strict=True)

    assert result.inserted == 1
    assert len(result.rejected) == 1
    assert result.rejected[0].row == 2
    assert "tuition_fee is not a number" in result.rejected[0].errors
    assert "minimum_gpa is not a number" in result.rejected[0].errors
    assert [u.name for u in db_session.query(University).all()] == ["U of T"]


def test_admin_upload_endpoint(client, admin_user, db_session):
    response = client.post(
        "/admin/universities/import",
        files={"file": ("universities.csv", (HEADER + TORONTO + MCGILL).encode(), "text/csv")},
        headers=admin_user["headers"],
    )

    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Successfully uploaded 2 universities"
    assert data["inserted"] == 2
    assert data["rejected"] == 0
    assert db_session.query(University).count() == 2


def test_non_csv_upload_is_rejected_without_inserting(client, admin_user, db_session):
    response = client.post(
        "/admin/universities/import",
        files={"file": ("universities.xlsx", (HEADER + TORONTO).encode(), "application/vnd.ms-excel")},
        headers=admin_user["headers"],
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Please upload a CSV file"
    assert db_session.query(University).count() == 0


def test_upload_with_missing_columns_returns_400(client, admin_user):
    response = client.post(
        "/admin/universities/import",
        files={"file": ("universities.csv", b"name\nU of T\n", "text/csv")},
        headers=admin_user["headers"],
    )

    assert response.status_code == 400
    assert "Failed to parse CSV" in response.json()["detail"]


def test_strict_upload_reports_rejected_rows(client, admin_user):
    junk = ",Nowhere,1000,50,false,9.0,0,,\n"
    response = client.post(
        "/admin/universities/import?strict=true",
        files={"file": ("universities.csv", (HEADER + TORONTO + junk).encode(), "text/csv")},
        headers=admin_user["headers"],
    )

    assert response.status_code == 200
    data = response.json()
    assert data["inserted"] == 1
    assert data["rejected"] == 1
    assert data["errors"][0]["row"] == 2
    assert "name is required" in data["errors"][0]["errors"]
    assert "minimum_gpa must be between 0.0 and 4.0" in data["errors"][0]["errors"]


def test_import_requires_admin(client, test_user, db_session):
    response = client.post(
        "/admin/universities/import",
        files={"file": ("universities.csv", (HEADER + TORONTO).encode(), "text/csv")},
        headers=test_user["headers"],
    )

    assert response.status_code == 403
    assert db_session.query(University).count() == 0
