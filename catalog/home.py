from flask import Blueprint, render_template

from . import get_storage
from models.author import Author
from models.book import Book
from models.bookinstance import BookInstance
from models.genre import Genre

bp = Blueprint("home", __name__)


@bp.get("/")
def index():
    """
    Catalog home page with record counts
    ---
    tags: [Catalog]
    produces: [text/html]
    responses:
      200: { description: Home page }
    """
    storage = get_storage()
    data = {
        "book_count": storage.count(Book),
        "book_instance_count": storage.count(BookInstance),
        "book_instance_available_count": storage.count(BookInstance, BookInstance.status == "Available"),
        "author_count": storage.count(Author),
        "genre_count": storage.count(Genre),
    }
    return render_template("index.html", title="Local Library Home", data=data)
