# models.py
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy.orm import validates

db = SQLAlchemy()


class ValidationError(ValueError):
    """Raised when a write would break a required-field constraint."""

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class Book(db.Model):
    __tablename__ = 'books'

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    title = db.Column(db.String(255), nullable=False)
    author = db.Column(db.String(255), nullable=False)
    genre = db.Column(db.String(255), nullable=True)
    year = db.Column(db.Integer, nullable=True)

    @validates("title", "author")
    def validate_required(self, key, value):
        if value is None or not str(value).strip():
            raise ValidationError([f'Please provide a value for "{key}"'])
        return value

    @validates("year")
    def validate_year(self, key, value):
        if value is None or value == "":
            return None
        try:
            year = int(value)
        except (TypeError, ValueError):
            year = None
        # SQLite INTEGER is a signed 64-bit value.
        if year is None or not -2 ** 63 <= year < 2 ** 63:
            raise ValidationError([f'Please provide a number for "{key}"'])
        return year

    @validates("genre")
    def validate_genre(self, key, value):
        return value or None

    def __repr__(self):
        return f"<Book {self.title}>"
