import pytest

from app import create_app
from models import db


@pytest.fixture
def app(tmp_path, request):
    # Unique database file per test
    db_file = tmp_path / f"test_{request.node.name}.db"
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{db_file}",
    })
    yield app
    with app.app_context():
        db.session.remove()
        db.engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store(app):
    with app.app_context():
        yield app.extensions["book_store"]


@pytest.fixture
def sample_books(store):
    return [
        store.create({"title": "Dune", "author": "Frank Herbert",
                      "genre": "Science Fiction", "year": "1965"}),
        store.create({"title": "Emma", "author": "Jane Austen",
                      "genre": "Romance", "year": "1815"}),
        store.create({"title": "Neuromancer", "author": "William Gibson",
                      "genre": "Cyberpunk", "year": "1984"}),
    ]
