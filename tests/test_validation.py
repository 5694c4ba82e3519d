import pytest
from hypothesis import given, strategies as st
from pydantic import ValidationError

from book_catalog.models import BookPatch, BookPayload
from book_catalog.validation import BookConstraints, validate_book, validate_patch, validate_publication_year


def payload(**changes) -> BookPayload:
    fields = {"title": "Solaris", "author": "Lem", "isbn": "9780156027601", "publication_year": 1961}
    fields.update(changes)
    return BookPayload(**fields)


def test_valid_payload_has_no_violations():
    assert validate_book(payload()) == []


@given(st.integers(min_value=1, max_value=3000), st.integers(min_value=1, max_value=3000))
def test_publication_year_rule(year, current_year):
    violation = validate_publication_year(year, current_year)
    assert (violation is None) == (year <= current_year)


def test_publication_year_rule_rejects_null():
    violation = validate_publication_year(None, 2024)
    assert violation.field == "publicationYear"
    assert "None" in violation.message


@given(st.integers(max_value=0))
def test_non_positive_year_is_rejected(year):
    assert [v.field for v in validate_book(payload(publication_year=year))] == ["publicationYear"]


@given(st.text(alphabet="0123456789-", min_size=10, max_size=17))
def test_isbn_length_bounds_accept(isbn):
    assert validate_book(payload(isbn=isbn)) == []


@given(st.one_of(st.text(alphabet="0123456789", min_size=1, max_size=9), st.text(alphabet="0123456789", min_size=18)))
def test_isbn_length_bounds_reject(isbn):
    assert [v.field for v in validate_book(payload(isbn=isbn))] == ["isbn"]


@given(st.text(alphabet=" \t\n", max_size=5))
def test_blank_author_is_rejected(author):
    assert [v.field for v in validate_book(payload(author=author))] == ["author"]


def test_length_limits():
    assert validate_book(payload(title="t" * 255, author="a" * 100)) == []
    fields = [v.field for v in validate_book(payload(title="t" * 256, author="a" * 101))]
    assert fields == ["title", "author"]


def test_missing_fields_are_required():
    fields = [v.field for v in validate_book(BookPayload())]
    assert fields == ["title", "author", "isbn", "publicationYear"]


def test_patch_only_checks_present_fields():
    assert validate_patch(BookPatch()) == []
    assert validate_patch(BookPatch(title="New")) == []
    assert [v.field for v in validate_patch(BookPatch(title="", isbn="1"))] == ["title", "isbn"]


def test_payload_accepts_camel_and_snake_case():
    assert BookPayload.model_validate({"publicationYear": 1999}).publication_year == 1999
    assert BookPayload.model_validate({"publication_year": 1999}).publication_year == 1999


def test_payload_rejects_wrong_types():
    with pytest.raises(ValidationError):
        BookPayload.model_validate({"publicationYear": "soon"})


def test_violation_messages_come_from_constraints():
    violations = validate_book(payload(title=" ", isbn="123"))
    assert [v.field for v in violations] == ["title", "isbn"]
    assert "must not be blank" in violations[0].message
    assert "at least 10 characters" in violations[1].message


def test_constraint_model_rejects_boolean_year():
    with pytest.raises(ValidationError):
        BookConstraints.model_validate(
            {"title": "Solaris", "author": "Lem", "isbn": "9780156027601", "publication_year": True}
        )


@pytest.mark.parametrize("model", [BookPayload, BookPatch])
def test_bodies_reject_boolean_year(model):
    with pytest.raises(ValidationError):
        model.model_validate({"publicationYear": True})
