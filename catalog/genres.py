from __future__ import annotations

import logging

from flask import Blueprint, request, render_template, redirect, url_for, abort
from sqlalchemy import func

from . import get_storage
from .forms import validate_form
from models.genre import Genre
from models.schemas.genre import GenreFormSchema

bp = Blueprint("genres", __name__)
logger = logging.getLogger(__name__)

form_schema = GenreFormSchema()


def find_by_name(name: str):
    """Existing genre with this name, ignoring case."""
    return get_storage().find_one(Genre, func.lower(Genre.name) == name.lower())


def build_genre(form, genre_id: str | None = None) -> Genre:
    if genre_id is not None:
        return Genre(name=form["name"], id=genre_id)
    return Genre(name=form["name"])


def render_form(title: str, genre: Genre | None = None, errors=None):
    return render_template("genre_form.html", title=title, genre=genre, errors=errors)


@bp.get("/genres")
def genre_list():
    """
    List all genres
    ---
    tags: [Genres]
    produces: [text/html]
    responses:
      200: { description: "List page, ordered by name" }
    """
    genres = get_storage().all(Genre, order_by=(Genre.name.asc(),))
    return render_template("genre_list.html", title="Genre List", genre_list=genres)


@bp.get("/genre/create")
def genre_create_get():
    """
    Genre create form
    ---
    tags: [Genres]
    produces: [text/html]
    responses:
      200: { description: Empty form }
    """
    return render_form("Create Genre")


@bp.post("/genre/create")
def genre_create_post():
    """
    Create a genre, or go to the existing one with the same name
    ---
    tags: [Genres]
    consumes: [application/x-www-form-urlencoded]
    produces: [text/html]
    parameters:
      - { in: formData, name: name, type: string, required: true, minLength: 3, maxLength: 100 }
    responses:
      200: { description: Form shown again with validation errors }
      302: { description: Redirect to the new or existing genre }
    """
    form = validate_form(form_schema, request.form)
    genre = build_genre(form)

    if not form.ok:
        return render_form("Create Genre", genre, form.failures)

    existing = find_by_name(genre.name)
    if existing is not None:
        return redirect(existing.url)

    storage = get_storage()
    storage.new(genre)
    storage.save()
    logger.info("Created genre %s", genre.id)
    return redirect(genre.url)


@bp.get("/genre/<genre_id>/delete")
def genre_delete_get(genre_id: str):
    """
    Genre delete confirmation, listing the genre's books
    ---
    tags: [Genres]
    produces: [text/html]
    parameters:
      - { in: path, name: genre_id, type: string, required: true }
    responses:
      200: { description: Confirmation page }
      302: { description: "Unknown genre, back to the list" }
    """
    genre = get_storage().get(Genre, genre_id, populate=("books",))
    if genre is None:
        return redirect(url_for(".genre_list"))
    return render_template("genre_delete.html", title="Delete Genre", genre=genre, genre_books=genre.books)


@bp.post("/genre/<genre_id>/delete")
def genre_delete_post(genre_id: str):
    """
    Delete a genre
    ---
    tags: [Genres]
    consumes: [application/x-www-form-urlencoded]
    parameters:
      - { in: path, name: genre_id, type: string, required: true }
      - { in: formData, name: genreid, type: string }
    responses:
      302: { description: Back to the list }
    """
    target = request.form.get("genreid") or genre_id
    get_storage().remove(Genre, target)
    logger.info("Deleted genre %s", target)
    return redirect(url_for(".genre_list"))


@bp.get("/genre/<genre_id>/update")
def genre_update_get(genre_id: str):
    """
    Genre update form
    ---
    tags: [Genres]
    produces: [text/html]
    parameters:
      - { in: path, name: genre_id, type: string, required: true }
    responses:
      200: { description: Pre-filled form }
      404: { description: Not found }
    """
    genre = get_storage().get(Genre, genre_id)
    if genre is None:
        abort(404, description="Genre not found")
    return render_form("Update Genre", genre)


@bp.post("/genre/<genre_id>/update")
def genre_update_post(genre_id: str):
    """
    Update a genre
    ---
    tags: [Genres]
    consumes: [application/x-www-form-urlencoded]
    produces: [text/html]
    parameters:
      - { in: path, name: genre_id, type: string, required: true }
      - { in: formData, name: name, type: string, required: true }
    responses:
      200: { description: Form shown again with validation errors }
      302: { description: "Updated, redirect to the genre" }
      404: { description: Not found }
    """
    form = validate_form(form_schema, request.form)
    genre = build_genre(form, genre_id)

    if not form.ok:
        return render_form("Update Genre", genre, form.failures)

    updated = get_storage().update(Genre, genre_id, genre)
    if updated is None:
        abort(404, description="Genre not found")
    logger.info("Updated genre %s", updated.id)
    return redirect(updated.url)


@bp.get("/genre/<genre_id>")
def genre_detail(genre_id: str):
    """
    Genre detail with its books
    ---
    tags: [Genres]
    produces: [text/html]
    parameters:
      - { in: path, name: genre_id, type: string, required: true }
    responses:
      200: { description: Detail page }
      404: { description: Not found }
    """
    genre = get_storage().get(Genre, genre_id, populate=("books",))
    if genre is None:
        abort(404, description="Genre not found")
    return render_template("genre_detail.html", title="Genre Detail", genre=genre, genre_books=genre.books)
