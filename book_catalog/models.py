from pydantic import BaseModel, ConfigDict, StrictInt
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Book(CamelModel):
    id: int
    title: str
    author: str
    isbn: str
    publication_year: int
    available: bool = True


class BookPayload(CamelModel):
    """Complete book body for create and full update.

    Only JSON types are checked here; field constraints are reported by
    ``validation.validate_book`` as a list of violations.
    """

    id: int | None = None
    title: str | None = None
    author: str | None = None
    isbn: str | None = None
    publication_year: StrictInt | None = None
    available: bool = True


class BookPatch(CamelModel):
    """Partial book body; unset or null fields are left untouched.

    ``available`` is accepted for shape compatibility but never applied.
    """

    title: str | None = None
    author: str | None = None
    isbn: str | None = None
    publication_year: StrictInt | None = None
    available: bool | None = None
