from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")

_NOT_FOUND_MESSAGES = {
    "get": "Book with id {book_id} not found.",
    "update": "Book with id {book_id} cannot be updated: not found.",
    "delete": "Book with id {book_id} cannot be deleted: not found.",
}


@dataclass(frozen=True)
class Violation:
    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


class CatalogError(Exception):
    @property
    def message(self) -> str:
        return str(self)


class ValidationError(CatalogError):
    def __init__(self, violations: list[Violation]):
        self.violations = list(violations)
        super().__init__("; ".join(v.message for v in self.violations) or "Invalid book")


class NotFoundError(CatalogError):
    def __init__(self, book_id: int, operation: str = "get"):
        self.book_id = book_id
        self.operation = operation
        super().__init__(_NOT_FOUND_MESSAGES[operation].format(book_id=book_id))


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: CatalogError


Result = Union[Ok[T], Err]
