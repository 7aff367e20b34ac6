import pytest

from catalog import create_app
from models.author import Author
from models.book import Book
from models.bookinstance import BookInstance
from models.db_storage import DBStorage
from models.genre import Genre


@pytest.fixture
def storage(tmp_path, request):
    # Unique database file per test
    db_file = tmp_path / f"catalog_{request.node.name}.db"
    storage = DBStorage(f"sqlite:///{db_file}")
    yield storage
    storage.dispose()


@pytest.fixture
def app(storage):
    return create_app("testing", storage=storage)


@pytest.fixture
def client(app):
    return app.test_client()


def _save(storage, obj):
    storage.new(obj)
    storage.save()
    return obj


@pytest.fixture
def make_author(app, storage):
    def _make(first_name="Isaac", family_name="Asimov", **kwargs):
        return _save(storage, Author(first_name=first_name, family_name=family_name, **kwargs))
    return _make


@pytest.fixture
def make_genre(app, storage):
    def _make(name="Science Fiction"):
        return _save(storage, Genre(name=name))
    return _make


@pytest.fixture
def make_book(app, storage, make_author):
    def _make(title="Foundation", author=None, genres=(), **kwargs):
        author = author or make_author()
        book = Book(
            title=title,
            author_id=author.id,
            summary=kwargs.pop("summary", "A galactic empire falls."),
            isbn=kwargs.pop("isbn", "9780553293357"),
            **kwargs,
        )
        book.genres = list(genres)
        return _save(storage, book)
    return _make


@pytest.fixture
def make_bookinstance(app, storage, make_book):
    def _make(book=None, imprint="Gnome Press, 1951", status="Available", **kwargs):
        book = book or make_book()
        return _save(storage, BookInstance(book_id=book.id, imprint=imprint, status=status, **kwargs))
    return _make
