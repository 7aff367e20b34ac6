from __future__ import annotations

import logging

from flask import Blueprint, request, render_template, redirect, url_for, abort

from . import get_storage
from .forms import validate_form
from models.author import Author
from models.book import Book
from models.bookinstance import BookInstance
from models.genre import Genre
from models.schemas.book import BookFormSchema

bp = Blueprint("books", __name__)
logger = logging.getLogger(__name__)

form_schema = BookFormSchema()


def build_book(form, book_id: str | None = None) -> Book:
    """
    Candidate book from sanitized form values.
    Genres are resolved separately: assigning persistent genres here would
    pull the candidate into the session.
    """
    fields = dict(
        title=form["title"],
        author_id=form["author"],
        summary=form["summary"],
        isbn=form["isbn"],
    )
    if book_id is not None:
        fields["id"] = book_id
    return Book(**fields)


def render_form(title: str, book: Book | None = None, selected_genres=(), errors=None):
    # Authors and genres are fetched on every render, including re-renders after failed validation
    storage = get_storage()
    authors = storage.all(Author, order_by=(Author.family_name.asc(), Author.first_name.asc()))
    genres = storage.all(Genre, order_by=(Genre.name.asc(),))
    return render_template(
        "book_form.html",
        title=title,
        authors=authors,
        genres=genres,
        book=book,
        selected_genres=set(selected_genres),
        errors=errors,
    )


def book_instances(book_id: str):
    return get_storage().filter(BookInstance, BookInstance.book_id == book_id)


@bp.get("/books")
def book_list():
    """
    List all books with their author
    ---
    tags: [Books]
    produces: [text/html]
    responses:
      200: { description: "List page, ordered by title" }
    """
    books = get_storage().all(Book, "title", "author_id", populate=("author",), order_by=(Book.title.asc(),))
    return render_template("book_list.html", title="Book List", book_list=books)


@bp.get("/book/create")
def book_create_get():
    """
    Book create form
    ---
    tags: [Books]
    produces: [text/html]
    responses:
      200: { description: Empty form with authors and genres }
    """
    return render_form("Create Book")


@bp.post("/book/create")
def book_create_post():
    """
    Create a book
    ---
    tags: [Books]
    consumes: [application/x-www-form-urlencoded]
    produces: [text/html]
    parameters:
      - { in: formData, name: title, type: string, required: true }
      - { in: formData, name: author, type: string, required: true }
      - { in: formData, name: summary, type: string, required: true }
      - { in: formData, name: isbn, type: string, required: true }
      - { in: formData, name: genre, type: array, items: { type: string }, collectionFormat: multi }
    responses:
      200: { description: Form shown again with validation errors }
      302: { description: "Created, redirect to the new book" }
    """
    form = validate_form(form_schema, request.form)
    book = build_book(form)

    if not form.ok:
        return render_form("Create Book", book, form["genre"], form.failures)

    storage = get_storage()
    book.genres = storage.get_many(Genre, form["genre"])
    storage.new(book)
    storage.save()
    logger.info("Created book %s", book.id)
    return redirect(book.url)


@bp.get("/book/<book_id>/delete")
def book_delete_get(book_id: str):
    """
    Book delete confirmation, listing the book's copies
    ---
    tags: [Books]
    produces: [text/html]
    parameters:
      - { in: path, name: book_id, type: string, required: true }
    responses:
      200: { description: Confirmation page }
      302: { description: "Unknown book, back to the list" }
    """
    book = get_storage().get(Book, book_id, populate=("author",))
    if book is None:
        return redirect(url_for(".book_list"))
    return render_template(
        "book_delete.html", title="Delete Book", book=book, book_instances=book_instances(book_id)
    )


@bp.post("/book/<book_id>/delete")
def book_delete_post(book_id: str):
    """
    Delete a book (its copies are left in place)
    ---
    tags: [Books]
    consumes: [application/x-www-form-urlencoded]
    parameters:
      - { in: path, name: book_id, type: string, required: true }
      - { in: formData, name: bookid, type: string }
    responses:
      302: { description: Back to the list }
    """
    target = request.form.get("bookid") or book_id
    get_storage().remove(Book, target)
    logger.info("Deleted book %s", target)
    return redirect(url_for(".book_list"))


@bp.get("/book/<book_id>/update")
def book_update_get(book_id: str):
    """
    Book update form
    ---
    tags: [Books]
    produces: [text/html]
    parameters:
      - { in: path, name: book_id, type: string, required: true }
    responses:
      200: { description: Pre-filled form }
      404: { description: Not found }
    """
    book = get_storage().get(Book, book_id, populate=("author", "genres"))
    if book is None:
        abort(404, description="Book not found")
    return render_form("Update Book", book, book.genre_ids)


@bp.post("/book/<book_id>/update")
def book_update_post(book_id: str):
    """
    Update a book
    ---
    tags: [Books]
    consumes: [application/x-www-form-urlencoded]
    produces: [text/html]
    parameters:
      - { in: path, name: book_id, type: string, required: true }
      - { in: formData, name: title, type: string, required: true }
      - { in: formData, name: author, type: string, required: true }
      - { in: formData, name: summary, type: string, required: true }
      - { in: formData, name: isbn, type: string, required: true }
      - { in: formData, name: genre, type: array, items: { type: string }, collectionFormat: multi }
    responses:
      200: { description: Form shown again with validation errors }
      302: { description: "Updated, redirect to the book" }
      404: { description: Not found }
    """
    form = validate_form(form_schema, request.form)
    book = build_book(form, book_id)

    if not form.ok:
        return render_form("Update Book", book, form["genre"], form.failures)

    storage = get_storage()
    updated = storage.update(Book, book_id, book, genres=storage.get_many(Genre, form["genre"]))
    if updated is None:
        abort(404, description="Book not found")
    logger.info("Updated book %s", updated.id)
    return redirect(updated.url)


@bp.get("/book/<book_id>")
def book_detail(book_id: str):
    """
    Book detail with author, genres and copies
    ---
    tags: [Books]
    produces: [text/html]
    parameters:
      - { in: path, name: book_id, type: string, required: true }
    responses:
      200: { description: Detail page }
      404: { description: Not found }
    """
    book = get_storage().get(Book, book_id, populate=("author", "genres"))
    if book is None:
        abort(404, description="Book not found")
    return render_template(
        "book_detail.html", title=book.title, book=book, book_instances=book_instances(book_id)
    )
