"""Tests for jersey pages and admin routes."""

import uuid
import warnings
from typing import Any

from fastapi.testclient import TestClient

from jersey_store.api.routes.jerseys import get_catalog_service
from jersey_store.core.config import Settings
from jersey_store.database import Base
from jersey_store.main import create_app
from jersey_store.schemas.jersey import JerseyRead


def _store(client: TestClient):
    return client.app.state.catalog_service.store


def _create(client: TestClient, fields: dict[str, Any]) -> JerseyRead:
    return _store(client).create(fields)


def test_health_check(client: TestClient) -> None:
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_home_empty(client: TestClient) -> None:
    """Test the homepage renders when there are no jerseys."""
    response = client.get("/")
    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    assert "No jerseys in the store yet." in response.text


def test_home_lists_jerseys(client: TestClient, jersey_fields: dict[str, Any]) -> None:
    _create(client, jersey_fields)

    response = client.get("/")

    assert response.status_code == 200
    assert "Super Eagles" in response.text
    assert "$59.99" in response.text


def test_create_from_form(client: TestClient, jersey_fields: dict[str, Any]) -> None:
    """Test the admin form creates a jersey and redirects home."""
    response = client.post("/admin", data=jersey_fields, follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/"
    [jersey] = _store(client).list_all()
    assert jersey.team == "Super Eagles"
    assert jersey.price == 59.99


def test_create_from_json(client: TestClient, jersey_fields: dict[str, Any]) -> None:
    response = client.post("/admin", json=jersey_fields, follow_redirects=False)

    assert response.status_code == 303
    assert _store(client).count() == 1


def test_create_invalid_redisplays_form(client: TestClient) -> None:
    """Test a rejected form comes back with messages and the submitted values."""
    data = {"team": "Black Stars", "country": "Ghana", "price": "-10", "imageUrl": ""}

    response = client.post("/admin", data=data, follow_redirects=False)

    assert response.status_code == 422
    assert "Price cannot be negative" in response.text
    assert "Image URL is required" in response.text
    assert 'value="Black Stars"' in response.text
    assert _store(client).count() == 0


def test_detail_page(client: TestClient, jersey_fields: dict[str, Any]) -> None:
    jersey = _create(client, jersey_fields)

    response = client.get(f"/jersey/{jersey.id}")

    assert response.status_code == 200
    assert "<title>Super Eagles - Nigeria</title>" in response.text


def test_detail_invalid_id_is_not_found(client: TestClient) -> None:
    """Test a malformed id renders the 404 page instead of crashing."""
    response = client.get("/jersey/not-a-real-id")
    assert response.status_code == 404
    assert "Jersey Not Found" in response.text


def test_unknown_route_renders_404(client: TestClient) -> None:
    response = client.get("/does/not/exist")
    assert response.status_code == 404
    assert "Page Not Found" in response.text


def test_admin_form_blank(client: TestClient) -> None:
    response = client.get("/admin")
    assert response.status_code == 200
    assert "Add Jersey" in response.text
    assert "Edit Jersey" not in response.text


def test_admin_form_edit(client: TestClient, jersey_fields: dict[str, Any]) -> None:
    """Test ?id= pre-fills the form for an existing jersey."""
    jersey = _create(client, jersey_fields)

    response = client.get("/admin", params={"id": jersey.id})

    assert response.status_code == 200
    assert "Edit Jersey" in response.text
    assert 'value="Super Eagles"' in response.text
    assert f"/admin/{jersey.id}?_method=PUT" in response.text


def test_admin_form_unknown_id_redirects(client: TestClient) -> None:
    response = client.get("/admin", params={"id": uuid.uuid4().hex}, follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == "/admin"


def test_update_with_put(client: TestClient, jersey_fields: dict[str, Any]) -> None:
    """Test PUT replaces the jersey and redirects to its detail page."""
    jersey = _create(client, jersey_fields)
    data = {**jersey_fields, "team": "The Eagles", "price": "65"}

    response = client.put(f"/admin/{jersey.id}", data=data, follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == f"/jersey/{jersey.id}"
    updated = _store(client).get_by_id(jersey.id)
    assert updated.team == "The Eagles"
    assert updated.price == 65


def test_update_with_method_override(client: TestClient, jersey_fields: dict[str, Any]) -> None:
    """Test an HTML form POST with ?_method=PUT reaches the update route."""
    jersey = _create(client, jersey_fields)

    response = client.post(
        f"/admin/{jersey.id}?_method=PUT",
        data={**jersey_fields, "country": "Naija"},
        follow_redirects=False,
    )

    assert response.status_code == 303
    assert _store(client).get_by_id(jersey.id).country == "Naija"


def test_update_invalid_redisplays_edit_form(client: TestClient, jersey_fields: dict[str, Any]) -> None:
    jersey = _create(client, jersey_fields)

    response = client.put(f"/admin/{jersey.id}", data={**jersey_fields, "team": "  "})

    assert response.status_code == 422
    assert "Team name is required" in response.text
    assert "Edit Jersey" in response.text
    assert _store(client).get_by_id(jersey.id).team == "Super Eagles"


def test_update_nonexistent_jersey(client: TestClient, jersey_fields: dict[str, Any]) -> None:
    """Test updating non-existent jersey returns 404."""
    response = client.put(f"/admin/{uuid.uuid4().hex}", data=jersey_fields)
    assert response.status_code == 404


def test_delete_with_method_override(client: TestClient, jersey_fields: dict[str, Any]) -> None:
    """Test deleting through the form removes the jersey."""
    jersey = _create(client, jersey_fields)

    response = client.post(f"/admin/{jersey.id}?_method=DELETE", follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/"
    assert client.get(f"/jersey/{jersey.id}").status_code == 404


def test_delete_nonexistent_jersey(client: TestClient) -> None:
    """Test deleting non-existent jersey returns 404."""
    response = client.delete(f"/admin/{uuid.uuid4().hex}")
    assert response.status_code == 404


def test_full_jersey_lifecycle(client: TestClient, jersey_fields: dict[str, Any]) -> None:
    """Test create, read, update and delete through HTTP only."""
    assert client.post("/admin", data=jersey_fields, follow_redirects=False).status_code == 303
    jersey_id = _store(client).list_all()[0].id

    assert client.get(f"/jersey/{jersey_id}").status_code == 200

    update = {**jersey_fields, "team": "Indomitable Lions", "country": "Cameroon"}
    response = client.put(f"/admin/{jersey_id}", data=update)
    assert response.status_code == 200
    assert "Indomitable Lions" in response.text

    response = client.delete(f"/admin/{jersey_id}")
    assert response.status_code == 200
    assert "No jerseys in the store yet." in response.text


def test_database_down_renders_server_error(client: TestClient) -> None:
    """Test a persistence failure renders the generic error page."""
    Base.metadata.drop_all(bind=client.app.state.database.engine)

    response = client.get("/")

    assert response.status_code == 500
    assert "Server Error" in response.text


def test_unhandled_error_renders_server_error(test_settings: Settings) -> None:
    """Test an unexpected exception renders the error page with status 500."""
    app = create_app(test_settings)

    def exploding_service() -> None:
        raise RuntimeError("boom")

    app.dependency_overrides[get_catalog_service] = exploding_service

    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/")

    assert response.status_code == 500
    assert "Something went wrong on the server." in response.text


def test_authorization_policy_blocks_admin(test_settings: Settings, jersey_fields: dict[str, Any]) -> None:
    """Test a denying policy turns admin actions into 403 pages."""
    app = create_app(test_settings, authorize=lambda action: False)

    with TestClient(app) as client:
        assert client.get("/admin").status_code == 403
        assert client.post("/admin", data=jersey_fields).status_code == 403
        assert client.get("/").status_code == 200
        assert _store(client).count() == 0


def test_rejected_form_status_has_no_deprecation_warning(client: TestClient) -> None:
    """Test redisplaying a rejected form does not use a deprecated status alias."""
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        response = client.post("/admin", data={"team": "", "country": "", "price": "", "imageUrl": ""})

    assert response.status_code == 422
    assert not [w for w in caught if issubclass(w.category, DeprecationWarning) and "422" in str(w.message)]
