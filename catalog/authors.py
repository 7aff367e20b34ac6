from __future__ import annotations

import logging

from flask import Blueprint, request, render_template, redirect, url_for, abort

from . import get_storage
from .forms import validate_form
from models.author import Author
from models.book import Book
from models.schemas.author import AuthorFormSchema

bp = Blueprint("authors", __name__)
logger = logging.getLogger(__name__)

form_schema = AuthorFormSchema()


def build_author(form, author_id: str | None = None) -> Author:
    fields = dict(
        first_name=form["first_name"],
        family_name=form["family_name"],
        date_of_birth=form["date_of_birth"],
        date_of_death=form["date_of_death"],
    )
    if author_id is not None:
        # Required, or a new identity would be assigned
        fields["id"] = author_id
    return Author(**fields)


def render_form(title: str, author: Author | None = None, errors=None):
    return render_template("author_form.html", title=title, author=author, errors=errors)


def author_books(author_id: str):
    storage = get_storage()
    return storage.filter(Book, Book.author_id == author_id, order_by=(Book.title.asc(),))


@bp.get("/authors")
def author_list():
    """
    List all authors
    ---
    tags: [Authors]
    produces: [text/html]
    responses:
      200: { description: "List page, ordered by family name" }
    """
    authors = get_storage().all(Author, order_by=(Author.family_name.asc(), Author.first_name.asc()))
    return render_template("author_list.html", title="Author List", author_list=authors)


@bp.get("/author/create")
def author_create_get():
    """
    Author create form
    ---
    tags: [Authors]
    produces: [text/html]
    responses:
      200: { description: Empty form }
    """
    return render_form("Create Author")


@bp.post("/author/create")
def author_create_post():
    """
    Create an author
    ---
    tags: [Authors]
    consumes: [application/x-www-form-urlencoded]
    produces: [text/html]
    parameters:
      - { in: formData, name: first_name, type: string, required: true, maxLength: 100 }
      - { in: formData, name: family_name, type: string, required: true, maxLength: 100 }
      - { in: formData, name: date_of_birth, type: string, format: date }
      - { in: formData, name: date_of_death, type: string, format: date }
    responses:
      200: { description: Form shown again with validation errors }
      302: { description: "Created, redirect to the new author" }
    """
    form = validate_form(form_schema, request.form)
    author = build_author(form)

    if not form.ok:
        return render_form("Create Author", author, form.failures)

    storage = get_storage()
    storage.new(author)
    storage.save()
    logger.info("Created author %s", author.id)
    return redirect(author.url)


@bp.get("/author/<author_id>/delete")
def author_delete_get(author_id: str):
    """
    Author delete confirmation, listing the author's books
    ---
    tags: [Authors]
    produces: [text/html]
    parameters:
      - { in: path, name: author_id, type: string, required: true }
    responses:
      200: { description: Confirmation page }
      302: { description: "Unknown author, back to the list" }
    """
    author = get_storage().get(Author, author_id)
    if author is None:
        return redirect(url_for(".author_list"))
    return render_template(
        "author_delete.html", title="Delete Author", author=author, author_books=author_books(author_id)
    )


@bp.post("/author/<author_id>/delete")
def author_delete_post(author_id: str):
    """
    Delete an author
    ---
    tags: [Authors]
    consumes: [application/x-www-form-urlencoded]
    parameters:
      - { in: path, name: author_id, type: string, required: true }
      - { in: formData, name: authorid, type: string }
    responses:
      302: { description: Back to the list }
    """
    target = request.form.get("authorid") or author_id
    get_storage().remove(Author, target)
    logger.info("Deleted author %s", target)
    return redirect(url_for(".author_list"))


@bp.get("/author/<author_id>/update")
def author_update_get(author_id: str):
    """
    Author update form
    ---
    tags: [Authors]
    produces: [text/html]
    parameters:
      - { in: path, name: author_id, type: string, required: true }
    responses:
      200: { description: Pre-filled form }
      404: { description: Not found }
    """
    author = get_storage().get(Author, author_id)
    if author is None:
        abort(404, description="Author not found")
    return render_form("Update Author", author)


@bp.post("/author/<author_id>/update")
def author_update_post(author_id: str):
    """
    Update an author
    ---
    tags: [Authors]
    consumes: [application/x-www-form-urlencoded]
    produces: [text/html]
    parameters:
      - { in: path, name: author_id, type: string, required: true }
      - { in: formData, name: first_name, type: string, required: true }
      - { in: formData, name: family_name, type: string, required: true }
      - { in: formData, name: date_of_birth, type: string, format: date }
      - { in: formData, name: date_of_death, type: string, format: date }
    responses:
      200: { description: Form shown again with validation errors }
      302: { description: "Updated, redirect to the author" }
      404: { description: Not found }
    """
    form = validate_form(form_schema, request.form)
    author = build_author(form, author_id)

    if not form.ok:
        return render_form("Update Author", author, form.failures)

    updated = get_storage().update(Author, author_id, author)
    if updated is None:
        abort(404, description="Author not found")
    logger.info("Updated author %s", updated.id)
    return redirect(updated.url)


@bp.get("/author/<author_id>")
def author_detail(author_id: str):
    """
    Author detail with the author's books
    ---
    tags: [Authors]
    produces: [text/html]
    parameters:
      - { in: path, name: author_id, type: string, required: true }
    responses:
      200: { description: Detail page }
      404: { description: Not found }
    """
    author = get_storage().get(Author, author_id)
    if author is None:
        abort(404, description="Author not found")
    return render_template(
        "author_detail.html", title="Author Detail", author=author, author_books=author_books(author_id)
    )
