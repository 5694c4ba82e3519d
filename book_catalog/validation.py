from typing import Annotated, Any, Optional

from pydantic import AfterValidator, BaseModel, Field, StringConstraints, ValidationError
from pydantic.alias_generators import to_camel

from .entities import AUTHOR_MAX_LENGTH, ISBN_MAX_LENGTH, ISBN_MIN_LENGTH, TITLE_MAX_LENGTH
from .errors import Violation
from .models import BookPatch, BookPayload


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


def _text(min_length: int, max_length: int):
    return Annotated[
        str,
        StringConstraints(min_length=min_length, max_length=max_length),
        AfterValidator(_not_blank),
    ]


TitleText = _text(1, TITLE_MAX_LENGTH)
AuthorText = _text(1, AUTHOR_MAX_LENGTH)
IsbnText = _text(ISBN_MIN_LENGTH, ISBN_MAX_LENGTH)
PositiveYear = Annotated[int, Field(strict=True, gt=0)]


class BookConstraints(BaseModel):
    """Entity constraints a stored book must satisfy."""

    title: TitleText
    author: AuthorText
    isbn: IsbnText
    publication_year: PositiveYear


def _violations(data: dict[str, Any], *, partial: bool = False) -> list[Violation]:
    try:
        BookConstraints.model_validate(data)
    except ValidationError as exc:
        violations = []
        for err in exc.errors():
            if partial and err["type"] == "missing":
                continue
            field = to_camel(str(err["loc"][0])) if err["loc"] else "body"
            violations.append(Violation(field, f"{field}: {err['msg']}"))
        return violations
    return []


def validate_book(payload: BookPayload) -> list[Violation]:
    """Apply every entity constraint to a complete book body."""
    return _violations(payload.model_dump(exclude_none=True))


def validate_patch(patch: BookPatch) -> list[Violation]:
    """Apply entity constraints only to the fields the patch carries."""
    return _violations(patch.model_dump(exclude_none=True), partial=True)


def validate_publication_year(year: Optional[int], current_year: int) -> Optional[Violation]:
    if year is None or year > current_year:
        return Violation("publicationYear", f"Publication year ({year}) cannot be null or in the future.")
    return None
