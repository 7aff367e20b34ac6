from models.author import Author
from models.book import Book
from models.bookinstance import BookInstance
from models.genre import Genre


def test_get_returns_none_for_missing_identity(app, storage):
    assert storage.get(Author, "does-not-exist") is None
    assert storage.get(Author, "") is None


def test_insert_then_get(app, storage, make_author):
    author = make_author()
    found = storage.get(Author, author.id)
    assert found is not None
    assert found.name == "Asimov, Isaac"


def test_update_replaces_fields_and_keeps_identity(app, storage, make_author):
    author = make_author()
    original_id = author.id
    replacement = Author(id=original_id, first_name="Ursula", family_name="LeGuin")

    updated = storage.update(Author, original_id, replacement)

    assert updated.id == original_id
    assert storage.count(Author) == 1
    assert storage.get(Author, original_id).first_name == "Ursula"


def test_update_never_writes_the_replacement_identity(app, storage, make_author):
    author = make_author()
    replacement = Author(first_name="Ursula", family_name="LeGuin")  # carries a fresh id

    updated = storage.update(Author, author.id, replacement)

    assert updated.id == author.id
    assert storage.get(Author, replacement.id) is None


def test_update_missing_identity_returns_none(app, storage):
    assert storage.update(Genre, "nope", Genre(name="Poetry")) is None
    assert storage.count(Genre) == 0


def test_update_sets_relations(app, storage, make_book, make_genre):
    poetry, drama = make_genre("Poetry"), make_genre("Drama")
    book = make_book(genres=[poetry])
    replacement = Book(id=book.id, title="New", author_id=book.author_id, summary="s", isbn="1")

    storage.update(Book, book.id, replacement, genres=[drama])

    assert storage.get(Book, book.id, populate=("genres",)).genre_ids == [drama.id]


def test_remove_is_idempotent(app, storage, make_genre):
    genre = make_genre()
    storage.remove(Genre, genre.id)
    storage.remove(Genre, genre.id)
    assert storage.get(Genre, genre.id) is None


def test_removing_a_book_leaves_its_copies(app, storage, make_bookinstance):
    copy = make_bookinstance()
    storage.remove(Book, copy.book_id)

    assert storage.get(Book, copy.book_id) is None
    left = storage.get(BookInstance, copy.id, populate=("book",))
    assert left.book_id == copy.book_id
    assert left.book is None


def test_all_with_projection_order_and_populate(app, storage, make_book, make_author):
    author = make_author(first_name="Frank", family_name="Herbert")
    make_book(title="Dune", author=author)
    make_book(title="Children of Dune", author=author)

    books = storage.all(Book, "title", "author_id", populate=("author",), order_by=(Book.title.asc(),))

    assert [b.title for b in books] == ["Children of Dune", "Dune"]
    assert books[0].author.name == "Herbert, Frank"


def test_get_many_skips_unknown_keys(app, storage, make_genre):
    genre = make_genre()
    assert [g.id for g in storage.get_many(Genre, [genre.id, "missing"])] == [genre.id]
    assert storage.get_many(Genre, []) == []


def test_count_with_criteria(app, storage, make_bookinstance, make_book):
    book = make_book()
    make_bookinstance(book=book, status="Available")
    make_bookinstance(book=book, status="Loaned")
    assert storage.count(BookInstance) == 2
    assert storage.count(BookInstance, BookInstance.status == "Available") == 1
    assert storage.count() == 2 + 1 + 1


def test_memory_database_is_shared_between_sessions():
    from models.db_storage import DBStorage

    storage = DBStorage("sqlite://")
    storage.reload()
    storage.new(Genre(name="Poetry"))
    storage.save()
    storage.close()
    assert storage.count(Genre) == 1
    storage.dispose()
