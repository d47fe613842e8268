from functools import wraps

from flask import (
    Blueprint, current_app, render_template, request, redirect, url_for
)
from werkzeug.exceptions import HTTPException

from models import ValidationError, db
from store import BOOK_FIELDS, BookNotFound

bp = Blueprint("books", __name__)


def get_store():
    return current_app.extensions["book_store"]


def submitted_book(book_id=None):
    book = {key: request.form.get(key, "") for key in BOOK_FIELDS}
    book["id"] = book_id
    return book


# ------------------- Decorators -------------------
def handle_errors(form_template=None):
    """Wrap a view with the shared error policy.

    Validation failures rerender ``form_template`` with the submitted values
    and the alert flag set. Not-found and HTTP errors go to the app's error
    handlers; anything else becomes a 500 page.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except (HTTPException, BookNotFound):
                raise
            except ValidationError as error:
                if form_template is None:
                    return server_error()
                current_app.logger.info(
                    "Rejected %s %s: %s", request.method, request.path, error
                )
                return render_template(
                    form_template,
                    book=submitted_book(kwargs.get("book_id")),
                    errors=error.errors,
                    alert=True,
                )
            except Exception:
                return server_error()
        return decorated_function
    return decorator


def server_error():
    # Must be called from inside an except block so the traceback is logged.
    db.session.rollback()
    current_app.logger.exception(
        "Unhandled error on %s %s", request.method, request.path
    )
    return render_template("error.html"), 500


# =================== GET ROUTES ===================
@bp.route("/")
@handle_errors()
def home():
    return redirect(url_for("books.index"))


@bp.route("/books")
@handle_errors()
def index():
    return render_template("index.html", books=get_store().list())


@bp.route("/books/new")
@handle_errors()
def new_book():
    return render_template("new_book.html", book=submitted_book())


@bp.route("/books/<int:book_id>")
@handle_errors()
def edit_book(book_id):
    book = get_store().get(book_id)
    return render_template("update_book.html", book=book)


# =================== POST ROUTES ===================
@bp.route("/", methods=["POST"])
@handle_errors()
def search():
    term = request.form.get("search", "")
    books = get_store().search(term)
    return render_template("index.html", books=books, search=term)


@bp.route("/books/new", methods=["POST"])
@handle_errors("new_book.html")
def create_book():
    get_store().create(request.form)
    return redirect(url_for("books.index"))


@bp.route("/books/<int:book_id>", methods=["POST"])
@handle_errors("update_book.html")
def update_book(book_id):
    get_store().update(book_id, request.form)
    return redirect(url_for("books.home"))


@bp.route("/books/<int:book_id>/delete", methods=["POST"])
@handle_errors()
def delete_book(book_id):
    get_store().delete(book_id)
    return redirect(url_for("books.index"))
