import os
import logging

from flask import Flask, render_template, request
from werkzeug.exceptions import HTTPException
from dotenv import load_dotenv

from models import db
from store import BookStore, BookNotFound
from views import bp as books_bp

# ------------------- Load .env -------------------
load_dotenv()

DEFAULT_PORT = 3000
DEFAULT_DATABASE_URL = "sqlite:///library.db"


# ------------------- Config -------------------
def database_uri():
    url = os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)
    return url


def port():
    return int(os.getenv("PORT", DEFAULT_PORT))


# ------------------- Error Handlers -------------------
def register_error_handlers(app):
    @app.errorhandler(404)
    @app.errorhandler(BookNotFound)
    def page_not_found(error):
        app.logger.info("404 %s %s", request.method, request.path)
        return render_template("page_not_found.html"), 404

    @app.errorhandler(HTTPException)
    def http_error(error):
        return render_template("error.html", error=error), error.code

    @app.errorhandler(500)
    def server_error(error):
        app.logger.error("500 %s %s", request.method, request.path)
        return render_template("error.html"), 500


# ------------------- Flask Setup -------------------
def create_app(config=None, store=None):
    app = Flask(__name__, template_folder="templates",
                static_folder="static", static_url_path="/static")
    app.config["SQLALCHEMY_DATABASE_URI"] = database_uri()
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
    if config:
        app.config.update(config)

    db.init_app(app)
    with app.app_context():
        db.create_all()

    app.extensions["book_store"] = store or BookStore(db.session)

    app.register_blueprint(books_bp)
    register_error_handlers(app)
    return app


# =================== RUN ===================
def main():
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = create_app()
    listen_port = port()
    app.logger.info("The application is running on localhost:%s", listen_port)
    app.run(host="0.0.0.0", port=listen_port)


if __name__ == "__main__":
    main()
