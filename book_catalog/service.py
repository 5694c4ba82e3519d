import logging
from collections.abc import Callable
from datetime import date

from .entities import BookRecord
from .errors import Err, NotFoundError, Ok, Result, ValidationError, Violation
from .models import Book, BookPatch, BookPayload
from .store import Store
from .validation import validate_book, validate_patch, validate_publication_year

logger = logging.getLogger(__name__)

PATCHABLE_FIELDS = ("title", "author", "isbn")


class BookService:
    """CRUD operations over the catalog.

    Every operation returns ``Ok`` or ``Err``; translating errors into
    HTTP statuses is left to the caller.
    """

    def __init__(self, store: Store[BookRecord, int], clock: Callable[[], date] = date.today):
        self.store = store
        self.clock = clock

    def list_all(self) -> Result[list[Book]]:
        return Ok([self._to_schema(record) for record in self.store.find_all()])

    def create(self, payload: BookPayload) -> Result[Book]:
        rejected = self._reject(validate_book(payload))
        if rejected is None:
            rejected = self._check_year(payload.publication_year)
        if rejected is not None:
            return rejected

        record = BookRecord(
            id=None,
            title=payload.title,
            author=payload.author,
            isbn=payload.isbn,
            publication_year=payload.publication_year,
            available=payload.available,
        )
        record = self.store.save(record)
        logger.info("book.created", extra={"book_id": record.id})
        return Ok(self._to_schema(record))

    def get_by_id(self, book_id: int) -> Result[Book]:
        record = self.store.find_by_id(book_id)
        if record is None:
            return self._missing(book_id, "get")
        return Ok(self._to_schema(record))

    def update_full(self, book_id: int, payload: BookPayload) -> Result[Book]:
        rejected = self._reject(validate_book(payload))
        if rejected is not None:
            return rejected
        record = self.store.find_by_id(book_id)
        if record is None:
            return self._missing(book_id, "update")
        rejected = self._check_year(payload.publication_year)
        if rejected is not None:
            return rejected

        record.title = payload.title
        record.author = payload.author
        record.isbn = payload.isbn
        record.publication_year = payload.publication_year
        record.available = payload.available
        record = self.store.save(record)
        logger.info("book.updated", extra={"book_id": book_id})
        return Ok(self._to_schema(record))

    def update_partial(self, book_id: int, patch: BookPatch) -> Result[Book]:
        rejected = self._reject(validate_patch(patch))
        if rejected is not None:
            return rejected
        record = self.store.find_by_id(book_id)
        if record is None:
            return self._missing(book_id, "update")

        if patch.publication_year is not None:
            rejected = self._check_year(patch.publication_year)
            if rejected is not None:
                return rejected

        for name in PATCHABLE_FIELDS:
            value = getattr(patch, name)
            if value is not None:
                setattr(record, name, value)
        if patch.publication_year is not None:
            record.publication_year = patch.publication_year
        # `available` is only changed through a full update

        record = self.store.save(record)
        logger.info("book.patched", extra={"book_id": book_id})
        return Ok(self._to_schema(record))

    def delete(self, book_id: int) -> Result[None]:
        if not self.store.exists_by_id(book_id):
            return self._missing(book_id, "delete")
        self.store.delete_by_id(book_id)
        logger.info("book.deleted", extra={"book_id": book_id})
        return Ok(None)

    def _check_year(self, year: int | None) -> Err | None:
        violation = validate_publication_year(year, self.clock().year)
        return self._reject([violation] if violation else [])

    @staticmethod
    def _reject(violations: list[Violation]) -> Err | None:
        if not violations:
            return None
        error = ValidationError(violations)
        logger.warning("book.rejected", extra={"reason": error.message})
        return Err(error)

    @staticmethod
    def _missing(book_id: int, operation: str) -> Err:
        logger.warning("book.missing", extra={"book_id": book_id, "operation": operation})
        return Err(NotFoundError(book_id, operation))

    @staticmethod
    def _to_schema(record: BookRecord) -> Book:
        return Book.model_validate(record, from_attributes=True)
