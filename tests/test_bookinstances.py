from datetime import date

from models.bookinstance import BookInstance


def location(resp):
    return resp.headers["Location"]


def test_list_shows_copies_with_book_title(client, make_bookinstance, make_book):
    make_bookinstance(book=make_book(title="Dune"), imprint="Chilton, 1965")
    resp = client.get("/catalog/bookinstances")
    assert resp.status_code == 200
    body = resp.get_data(as_text=True)
    assert "Dune : Chilton, 1965" in body


def test_create_form_lists_books(client, make_book):
    make_book(title="Dune")
    resp = client.get("/catalog/bookinstance/create")
    assert resp.status_code == 200
    assert "Dune" in resp.get_data(as_text=True)


def test_create_with_empty_imprint_rerenders_form(client, storage, make_book):
    book = make_book(title="Dune")

    resp = client.post("/catalog/bookinstance/create", data={
        "book": book.id, "imprint": "   ", "status": "Available",
    })

    assert resp.status_code == 200
    body = resp.get_data(as_text=True)
    assert body.count("<li data-field=") == 1
    assert '<li data-field="imprint">Imprint must be specified</li>' in body
    # Book list present, submitted book still selected
    assert f'<option value="{book.id}" selected>Dune</option>' in body
    assert storage.count(BookInstance) == 0


def test_create_valid_copy_redirects_to_it(client, storage, make_book):
    book = make_book(title="Dune")

    resp = client.post("/catalog/bookinstance/create", data={
        "book": book.id, "imprint": "First Edition", "status": "Available",
    })

    assert resp.status_code == 302
    [copy] = storage.all(BookInstance)
    assert location(resp).endswith(f"/catalog/bookinstance/{copy.id}")
    assert copy.book_id == book.id
    assert copy.imprint == "First Edition"
    assert copy.status == "Available"


def test_create_stores_sanitized_values(client, storage, make_book):
    book = make_book()
    client.post("/catalog/bookinstance/create", data={
        "book": f"  {book.id} ", "imprint": " <i>Gollancz</i> ", "due_back": "2030-05-01",
    })
    [copy] = storage.all(BookInstance)
    assert copy.book_id == book.id
    assert copy.imprint == "&lt;i&gt;Gollancz&lt;/i&gt;"
    assert copy.status == "Maintenance"
    assert copy.due_back == date(2030, 5, 1)


def test_detail_title_uses_book_title(client, make_bookinstance, make_book):
    copy = make_bookinstance(book=make_book(title="Dune"))
    resp = client.get(f"/catalog/bookinstance/{copy.id}")
    assert resp.status_code == 200
    assert "<title>Copy: Dune</title>" in resp.get_data(as_text=True)


def test_detail_missing_is_404(client):
    resp = client.get("/catalog/bookinstance/missing")
    assert resp.status_code == 404
    assert "Book copy not found" in resp.get_data(as_text=True)


def test_update_keeps_identity(client, storage, make_bookinstance):
    copy = make_bookinstance(status="Available")
    original_id = copy.id

    resp = client.post(f"/catalog/bookinstance/{original_id}/update", data={
        "book": copy.book_id, "imprint": "Second Edition", "status": "Loaned", "due_back": "2031-01-01",
    })

    assert resp.status_code == 302
    assert location(resp).endswith(f"/catalog/bookinstance/{original_id}")
    assert storage.count(BookInstance) == 1
    updated = storage.get(BookInstance, original_id)
    assert updated.imprint == "Second Edition"
    assert updated.status == "Loaned"


def test_update_with_failures_changes_nothing(client, storage, make_bookinstance, make_book):
    copy = make_bookinstance(book=make_book(title="Dune"), imprint="Chilton")

    resp = client.post(f"/catalog/bookinstance/{copy.id}/update", data={
        "book": copy.book_id, "imprint": "", "status": "Available",
    })

    assert resp.status_code == 200
    body = resp.get_data(as_text=True)
    assert "Imprint must be specified" in body
    assert "Dune" in body
    assert storage.get(BookInstance, copy.id).imprint == "Chilton"
    assert storage.count(BookInstance) == 1


def test_update_get_missing_is_404(client):
    assert client.get("/catalog/bookinstance/missing/update").status_code == 404


def test_update_post_missing_is_404(client, make_book):
    resp = client.post("/catalog/bookinstance/missing/update", data={
        "book": make_book().id, "imprint": "x", "status": "Available",
    })
    assert resp.status_code == 404


def test_delete_get_missing_redirects_to_list(client):
    resp = client.get("/catalog/bookinstance/missing/delete")
    assert resp.status_code == 302
    assert location(resp).endswith("/catalog/bookinstances")


def test_delete_get_shows_confirmation(client, make_bookinstance):
    copy = make_bookinstance()
    resp = client.get(f"/catalog/bookinstance/{copy.id}/delete")
    assert resp.status_code == 200
    assert f'name="bookinstanceid" value="{copy.id}"' in resp.get_data(as_text=True)


def test_delete_post_removes_and_redirects(client, storage, make_bookinstance):
    copy = make_bookinstance()
    resp = client.post(f"/catalog/bookinstance/{copy.id}/delete", data={"bookinstanceid": copy.id})
    assert resp.status_code == 302
    assert location(resp).endswith("/catalog/bookinstances")
    assert storage.get(BookInstance, copy.id) is None


def test_delete_post_missing_still_redirects(client):
    resp = client.post("/catalog/bookinstance/missing/delete", data={"bookinstanceid": "missing"})
    assert resp.status_code == 302
    assert location(resp).endswith("/catalog/bookinstances")
