from typing import Optional

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .db import Base

TITLE_MAX_LENGTH = 255
AUTHOR_MAX_LENGTH = 100
ISBN_MIN_LENGTH = 10
ISBN_MAX_LENGTH = 17
# range of the INTEGER primary key on every supported backend
MIN_BOOK_ID = -(2**31)
MAX_BOOK_ID = 2**31 - 1


class BookRecord(Base):
    __tablename__ = "books"

    id: Mapped[Optional[int]] = mapped_column(Integer, primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    author: Mapped[str] = mapped_column(String(AUTHOR_MAX_LENGTH), nullable=False)
    isbn: Mapped[str] = mapped_column(String(ISBN_MAX_LENGTH), nullable=False)
    publication_year: Mapped[int] = mapped_column(Integer, nullable=False)
    available: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return f"BookRecord(id={self.id!r}, title={self.title!r}, isbn={self.isbn!r})"
