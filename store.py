"""Persistence and search for book records."""
import logging

from sqlalchemy import String, cast, or_

from models import Book, ValidationError

logger = logging.getLogger(__name__)

BOOK_FIELDS = ("title", "author", "genre", "year")
REQUIRED_FIELDS = ("title", "author")


class BookNotFound(LookupError):
    def __init__(self, book_id):
        self.book_id = book_id
        super().__init__(f"Book {book_id} not found")


def _escape_like(term):
    return (
        term.replace("\\", "\\\\")
        .replace("%", "\\%")
        .replace("_", "\\_")
    )


class BookStore:
    """CRUD and search over the books table, bound to one SQLAlchemy session."""

    def __init__(self, session):
        self.session = session

    def list(self):
        return self.session.query(Book).order_by(Book.id).all()

    def get(self, book_id):
        book = self.session.get(Book, book_id)
        if book is None:
            raise BookNotFound(book_id)
        return book

    def search(self, term):
        """Return books whose title, author, genre or year contains ``term``.

        Matching is a plain SQL LIKE, so case sensitivity follows the
        database collation. An empty term matches every book.
        """
        pattern = f"%{_escape_like(term or '')}%"
        columns = (Book.title, Book.author, Book.genre, cast(Book.year, String))
        return (
            self.session.query(Book)
            .filter(or_(*(column.like(pattern, escape="\\") for column in columns)))
            .order_by(Book.id)
            .all()
        )

    def create(self, fields):
        book = Book()
        values = {key: fields.get(key) for key in BOOK_FIELDS}
        self._assign(book, values)
        self.session.add(book)
        self.session.commit()
        logger.info("Created book %s (%r)", book.id, book.title)
        return book

    def update(self, book_id, fields):
        book = self.get(book_id)
        values = {key: fields[key] for key in BOOK_FIELDS if key in fields}
        try:
            self._assign(book, values)
        except ValidationError:
            # Discard whatever was assigned before the failing field.
            self.session.rollback()
            raise
        self.session.commit()
        logger.info("Updated book %s", book.id)
        return book

    def delete(self, book_id):
        book = self.get(book_id)
        self.session.delete(book)
        self.session.commit()
        logger.info("Deleted book %s", book_id)

    @staticmethod
    def _assign(book, values):
        errors = []
        for key, value in values.items():
            try:
                setattr(book, key, value)
            except ValidationError as error:
                errors.extend(error.errors)
        if errors:
            raise ValidationError(errors)
