from sqlalchemy.exc import OperationalError

from catalog import create_app
from catalog.config import DevelopmentConfig, ProductionConfig, TestingConfig, get_config


def test_root_redirects_to_catalog(client):
    resp = client.get("/")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/catalog/")


def test_home_counts(client, make_bookinstance, make_book, make_genre):
    book = make_book()
    make_bookinstance(book=book, status="Available")
    make_bookinstance(book=book, status="Loaned")
    make_genre()
    body = client.get("/catalog/").get_data(as_text=True)
    assert "<strong>Books:</strong> 1" in body
    assert "<strong>Copies:</strong> 2" in body
    assert "<strong>Copies available:</strong> 1" in body
    assert "<strong>Authors:</strong> 1" in body
    assert "<strong>Genres:</strong> 1" in body


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.get_json()["status"] == "ok"


def test_unknown_route_renders_error_page(client):
    resp = client.get("/catalog/nothing/here/at/all")
    assert resp.status_code == 404
    assert "<h2>404</h2>" in resp.get_data(as_text=True)


def _broken_store(*args, **kwargs):
    raise OperationalError("SELECT", {}, Exception("database is locked"))


def test_store_failure_is_a_500_without_details(client, storage, monkeypatch):
    monkeypatch.setattr(storage, "all", _broken_store)
    resp = client.get("/catalog/authors")
    assert resp.status_code == 500
    body = resp.get_data(as_text=True)
    assert "The catalog database is unavailable" in body
    assert "OperationalError" not in body


def test_debug_mode_shows_error_details(storage, monkeypatch):
    app = create_app("testing", storage=storage, DEBUG=True)
    monkeypatch.setattr(storage, "all", _broken_store)
    resp = app.test_client().get("/catalog/genres")
    assert resp.status_code == 500
    assert "OperationalError" in resp.get_data(as_text=True)


def test_get_config_selection(monkeypatch):
    monkeypatch.delenv("APP_ENV", raising=False)
    assert get_config(None) is DevelopmentConfig
    assert get_config("production") is ProductionConfig
    assert get_config("TEST") is TestingConfig
    monkeypatch.setenv("APP_ENV", "prod")
    assert get_config(None) is ProductionConfig


def test_apidocs_spec_lists_catalog_routes(client):
    spec = client.get("/swagger.json").get_json()
    assert "/catalog/bookinstance/create" in spec["paths"]
