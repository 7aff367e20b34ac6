from __future__ import annotations

import logging

from flask import Blueprint, request, render_template, redirect, url_for, abort

from . import get_storage
from .forms import validate_form
from models.book import Book
from models.bookinstance import BookInstance, STATUSES
from models.schemas.bookinstance import BookInstanceFormSchema

bp = Blueprint("bookinstances", __name__)
logger = logging.getLogger(__name__)

form_schema = BookInstanceFormSchema()


def build_bookinstance(form, bookinstance_id: str | None = None) -> BookInstance:
    """Candidate copy from sanitized form values; `bookinstance_id` keeps an existing identity."""
    fields = dict(
        book_id=form["book"],
        imprint=form["imprint"],
        status=form["status"],
        due_back=form["due_back"],
    )
    if bookinstance_id is not None:
        fields["id"] = bookinstance_id
    return BookInstance(**fields)


def render_form(title: str, bookinstance: BookInstance | None = None, errors=None):
    # The book list is fetched on every render, including re-renders after failed validation
    books = get_storage().all(Book, "title", order_by=(Book.title.asc(),))
    return render_template(
        "bookinstance_form.html",
        title=title,
        book_list=books,
        selected_book=bookinstance.book_id if bookinstance is not None else None,
        statuses=STATUSES,
        bookinstance=bookinstance,
        errors=errors,
    )


@bp.get("/bookinstances")
def bookinstance_list():
    """
    List all book copies with their book
    ---
    tags: [BookInstances]
    produces: [text/html]
    responses:
      200: { description: List page }
    """
    bookinstances = get_storage().all(BookInstance, populate=("book",))
    return render_template("bookinstance_list.html", title="Book Instance List", bookinstance_list=bookinstances)


@bp.get("/bookinstance/create")
def bookinstance_create_get():
    """
    Book copy create form
    ---
    tags: [BookInstances]
    produces: [text/html]
    responses:
      200: { description: Empty form with the list of books }
    """
    return render_form("Create BookInstance")


@bp.post("/bookinstance/create")
def bookinstance_create_post():
    """
    Create a book copy
    ---
    tags: [BookInstances]
    consumes: [application/x-www-form-urlencoded]
    produces: [text/html]
    parameters:
      - { in: formData, name: book, type: string, required: true }
      - { in: formData, name: imprint, type: string, required: true }
      - { in: formData, name: status, type: string, enum: [Available, Maintenance, Loaned, Reserved] }
      - { in: formData, name: due_back, type: string, format: date }
    responses:
      200: { description: Form shown again with validation errors }
      302: { description: "Created, redirect to the new copy" }
    """
    form = validate_form(form_schema, request.form)
    bookinstance = build_bookinstance(form)

    if not form.ok:
        return render_form("Create BookInstance", bookinstance, form.failures)

    storage = get_storage()
    storage.new(bookinstance)
    storage.save()
    logger.info("Created book instance %s", bookinstance.id)
    return redirect(bookinstance.url)


@bp.get("/bookinstance/<bookinstance_id>/delete")
def bookinstance_delete_get(bookinstance_id: str):
    """
    Book copy delete confirmation
    ---
    tags: [BookInstances]
    produces: [text/html]
    parameters:
      - { in: path, name: bookinstance_id, type: string, required: true }
    responses:
      200: { description: Confirmation page }
      302: { description: "Unknown copy, back to the list" }
    """
    bookinstance = get_storage().get(BookInstance, bookinstance_id, populate=("book",))
    if bookinstance is None:
        return redirect(url_for(".bookinstance_list"))
    return render_template("bookinstance_delete.html", title="Delete Book Instance", bookinstance=bookinstance)


@bp.post("/bookinstance/<bookinstance_id>/delete")
def bookinstance_delete_post(bookinstance_id: str):
    """
    Delete a book copy
    ---
    tags: [BookInstances]
    consumes: [application/x-www-form-urlencoded]
    parameters:
      - { in: path, name: bookinstance_id, type: string, required: true }
      - { in: formData, name: bookinstanceid, type: string }
    responses:
      302: { description: Back to the list }
    """
    target = request.form.get("bookinstanceid") or bookinstance_id
    get_storage().remove(BookInstance, target)
    logger.info("Deleted book instance %s", target)
    return redirect(url_for(".bookinstance_list"))


@bp.get("/bookinstance/<bookinstance_id>/update")
def bookinstance_update_get(bookinstance_id: str):
    """
    Book copy update form
    ---
    tags: [BookInstances]
    produces: [text/html]
    parameters:
      - { in: path, name: bookinstance_id, type: string, required: true }
    responses:
      200: { description: Pre-filled form }
      404: { description: Not found }
    """
    bookinstance = get_storage().get(BookInstance, bookinstance_id, populate=("book",))
    if bookinstance is None:
        abort(404, description="Book copy not found")
    return render_form("Update BookInstance", bookinstance)


@bp.post("/bookinstance/<bookinstance_id>/update")
def bookinstance_update_post(bookinstance_id: str):
    """
    Update a book copy
    ---
    tags: [BookInstances]
    consumes: [application/x-www-form-urlencoded]
    produces: [text/html]
    parameters:
      - { in: path, name: bookinstance_id, type: string, required: true }
      - { in: formData, name: book, type: string, required: true }
      - { in: formData, name: imprint, type: string, required: true }
      - { in: formData, name: status, type: string }
      - { in: formData, name: due_back, type: string, format: date }
    responses:
      200: { description: Form shown again with validation errors }
      302: { description: "Updated, redirect to the copy" }
      404: { description: Not found }
    """
    form = validate_form(form_schema, request.form)
    # Same identity as the stored copy, never a new one
    bookinstance = build_bookinstance(form, bookinstance_id)

    if not form.ok:
        return render_form("Update BookInstance", bookinstance, form.failures)

    updated = get_storage().update(BookInstance, bookinstance_id, bookinstance)
    if updated is None:
        abort(404, description="Book copy not found")
    logger.info("Updated book instance %s", updated.id)
    return redirect(updated.url)


@bp.get("/bookinstance/<bookinstance_id>")
def bookinstance_detail(bookinstance_id: str):
    """
    Book copy detail
    ---
    tags: [BookInstances]
    produces: [text/html]
    parameters:
      - { in: path, name: bookinstance_id, type: string, required: true }
    responses:
      200: { description: Detail page }
      404: { description: Not found }
    """
    bookinstance = get_storage().get(BookInstance, bookinstance_id, populate=("book",))
    if bookinstance is None:
        abort(404, description="Book copy not found")
    # A removed book leaves the copy without a title to show
    book_title = bookinstance.book.title if bookinstance.book is not None else "Unknown book"
    return render_template("bookinstance_detail.html", title=f"Copy: {book_title}", bookinstance=bookinstance)
