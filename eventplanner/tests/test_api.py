"""
Tests for the HTTP API
"""

from unittest import mock

import pytest
from fastapi.testclient import TestClient

from eventplanner.api.app import create_application
from eventplanner.config.auth import AuthConfig
from eventplanner.config.storage import StorageConfig
from eventplanner.db import SessionError

from .conftest import TEST_BUCKET, TEST_PASSWORD

MEETING = {"title": "Meeting", "eventDate": "2025-06-01", "startTime": "10:00"}


def create(client, data=None, files=None):
    response = client.post("/api/events", data=data or MEETING, files=files)
    assert response.status_code == 201, response.text
    return response.json()["id"]


def get_event(client, event_id):
    return next(e for e in client.get("/api/events").json() if e["id"] == event_id)


class TestListEvents:

    def test_empty_list(self, client):
        response = client.get("/api/events")
        assert response.status_code == 200
        assert response.json() == []

    def test_create_then_list_round_trip(self, logged_in_client):
        event_id = create(logged_in_client)

        events = logged_in_client.get("/api/events").json()
        assert len(events) == 1
        assert events[0]["id"] == event_id
        assert events[0]["title"] == "Meeting"
        assert events[0]["eventDate"] == "2025-06-01"
        assert events[0]["startTime"] == "10:00"

    def test_ordering(self, logged_in_client):
        create(logged_in_client, {"title": "Later", "eventDate": "2025-01-02"})
        create(logged_in_client, {"title": "Sooner", "eventDate": "1.1.2025"})

        titles = [e["title"] for e in logged_in_client.get("/api/events").json()]
        assert titles == ["Sooner", "Later"]

    def test_store_failure_is_generic_500(self, client, app):
        with mock.patch.object(
            app.state.event_service.events, "list_events",
            side_effect=SessionError("disk I/O error")
        ):
            response = client.get("/api/events")

        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "Error loading events from database."}


class TestAuthorization:

    def test_create_requires_login(self, client):
        response = client.post("/api/events", data=MEETING)

        assert response.status_code == 401
        assert response.json()["success"] is False
        assert response.json()["message"]

    def test_create_after_login(self, client):
        assert client.post("/api/events", data=MEETING).status_code == 401
        assert client.post("/api/login", json={"password": TEST_PASSWORD}).status_code == 200
        assert client.post("/api/events", data=MEETING).status_code == 201

    @pytest.mark.parametrize("method, path", [
        ("put", "/api/events/abc"),
        ("delete", "/api/events/abc"),
        ("delete", "/api/events/abc/image"),
    ])
    def test_other_mutations_require_login(self, client, method, path):
        assert client.request(method, path).status_code == 401

    def test_unauthorized_request_never_reaches_validation(self, client):
        response = client.post("/api/events", data={"title": ""})
        assert response.status_code == 401

    def test_tampered_cookie_is_rejected(self, logged_in_client, auth_config):
        cookie = logged_in_client.cookies.get(auth_config.cookie_name)
        tampered = cookie[:-1] + ("0" if cookie[-1] != "0" else "1")
        logged_in_client.cookies.clear()
        logged_in_client.cookies.set(auth_config.cookie_name, tampered)

        assert logged_in_client.post("/api/events", data=MEETING).status_code == 401

    def test_session_store_failure_is_500(self, logged_in_client, session_store):
        with mock.patch.object(session_store, "get", side_effect=SessionError("store unavailable")):
            response = logged_in_client.post("/api/events", data=MEETING)

        assert response.status_code == 500
        assert response.json()["success"] is False
        assert "unavailable" not in response.json()["message"]

    def test_gate_can_be_disabled(self, database, storage_config, session_store, blob_store):
        app = create_application(
            database=database,
            auth_config=AuthConfig(app_password=TEST_PASSWORD, session_secret="s", auth_required=False),
            storage_config=storage_config,
            session_store=session_store,
            blob_store=blob_store,
        )
        with TestClient(app) as client:
            assert client.post("/api/events", data=MEETING).status_code == 201


class TestLoginLogout:

    def test_wrong_password(self, client):
        response = client.post("/api/login", json={"password": "wrong"})

        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "Invalid password."}
        assert client.get("/api/auth/status").json() == {"loggedIn": False}

    def test_login_without_body(self, client):
        assert client.post("/api/login").status_code == 401

    def test_status_after_login(self, logged_in_client):
        assert logged_in_client.get("/api/auth/status").json() == {
            "loggedIn": True,
            "user": {"role": "admin"},
        }

    def test_logout_twice(self, logged_in_client):
        for _ in range(2):
            response = logged_in_client.post("/api/logout")
            assert response.status_code == 200
            assert response.json()["success"] is True

        assert logged_in_client.get("/api/auth/status").json() == {"loggedIn": False}
        assert logged_in_client.post("/api/events", data=MEETING).status_code == 401

    def test_unconfigured_password(self, monkeypatch, database, storage_config, session_store, blob_store):
        monkeypatch.delenv("APP_PASSWORD", raising=False)
        app = create_application(
            database=database,
            auth_config=AuthConfig(session_secret="s"),
            storage_config=storage_config,
            session_store=session_store,
            blob_store=blob_store,
        )
        with TestClient(app) as client:
            login = client.post("/api/login", json={"password": "anything"})
            check = client.post("/api/auth/check", json={"password": "anything"})
            check_without_body = client.post("/api/auth/check")

        assert login.status_code == 500
        assert login.json()["message"] == "Server configuration error."
        assert check.status_code == 500
        assert check.json()["message"] == "Server configuration error."
        assert check_without_body.status_code == 500


class TestPasswordCheck:

    def test_valid_and_invalid(self, client):
        assert client.post("/api/auth/check", json={"password": TEST_PASSWORD}).json() == {"isValid": True}
        assert client.post("/api/auth/check", json={"password": "nope"}).json() == {"isValid": False}

    def test_check_does_not_log_in(self, client):
        client.post("/api/auth/check", json={"password": TEST_PASSWORD})
        assert client.get("/api/auth/status").json() == {"loggedIn": False}

    @pytest.mark.parametrize("body", [{}, {"password": 123}, {"pass": "x"}])
    def test_malformed_body(self, client, body):
        response = client.post("/api/auth/check", json=body)

        assert response.status_code == 400
        assert response.json()["success"] is False


class TestCreateValidation:

    @pytest.mark.parametrize("data", [
        {"eventDate": "2025-06-01"},
        {"title": "Meeting"},
        {"title": "", "eventDate": "2025-06-01"},
    ])
    def test_missing_fields(self, logged_in_client, data):
        response = logged_in_client.post("/api/events", data=data)

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Title and Date are required fields."}

    def test_unparseable_date(self, logged_in_client):
        response = logged_in_client.post("/api/events", data={"title": "Meeting", "eventDate": "not-a-date"})

        assert response.status_code == 400
        assert "date" in response.json()["message"].lower()
        assert logged_in_client.get("/api/events").json() == []

    @pytest.mark.parametrize("raw", ["18:00", "Monday"])
    def test_date_text_without_a_date(self, logged_in_client, raw):
        response = logged_in_client.post("/api/events", data={"title": "Meeting", "eventDate": raw})

        assert response.status_code == 400
        assert logged_in_client.get("/api/events").json() == []


class TestUpdate:

    def test_update_with_json(self, logged_in_client):
        event_id = create(logged_in_client)

        response = logged_in_client.put(f"/api/events/{event_id}", json={
            "title": "Renamed",
            "eventDate": "12/24/2025",
            "resources": "Beamer,Flipchart",
        })

        assert response.status_code == 200
        event = get_event(logged_in_client, event_id)
        assert event["title"] == "Renamed"
        assert event["eventDate"] == "2025-12-24"
        assert event["resources"] == "Beamer,Flipchart"
        assert event["startTime"] == ""

    def test_update_with_form_fields(self, logged_in_client):
        event_id = create(logged_in_client)

        response = logged_in_client.put(f"/api/events/{event_id}", data={"title": "Form", "eventDate": "2025-06-02"})

        assert response.status_code == 200
        assert get_event(logged_in_client, event_id)["title"] == "Form"

    def test_body_id_is_ignored(self, logged_in_client):
        first = create(logged_in_client, {"title": "First", "eventDate": "2025-06-01"})
        second = create(logged_in_client, {"title": "Second", "eventDate": "2025-06-02"})

        logged_in_client.put(f"/api/events/{first}", json={"id": second, "title": "Changed", "eventDate": "2025-06-01"})

        assert get_event(logged_in_client, first)["title"] == "Changed"
        assert get_event(logged_in_client, second)["title"] == "Second"

    def test_update_keeps_created_at(self, logged_in_client):
        event_id = create(logged_in_client)
        created_at = get_event(logged_in_client, event_id)["createdAt"]

        logged_in_client.put(f"/api/events/{event_id}", json={"title": "x", "eventDate": "2025-06-01", "createdAt": "2000-01-01"})

        assert get_event(logged_in_client, event_id)["createdAt"] == created_at

    def test_update_unknown_event(self, logged_in_client):
        response = logged_in_client.put("/api/events/unknown", json=MEETING)
        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Event not found."}

    def test_update_invalid_input(self, logged_in_client):
        event_id = create(logged_in_client)
        assert logged_in_client.put(f"/api/events/{event_id}", json={"title": "x"}).status_code == 400

    def test_update_with_time_as_date(self, logged_in_client):
        event_id = create(logged_in_client)
        response = logged_in_client.put(f"/api/events/{event_id}", json={"title": "Meeting", "eventDate": "18:00"})

        assert response.status_code == 400
        assert get_event(logged_in_client, event_id)["eventDate"] == "2025-06-01"

    def test_update_malformed_json(self, logged_in_client):
        event_id = create(logged_in_client)
        response = logged_in_client.put(
            f"/api/events/{event_id}",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400


class TestDelete:

    def test_delete_event(self, logged_in_client):
        event_id = create(logged_in_client)

        response = logged_in_client.delete(f"/api/events/{event_id}")

        assert response.status_code == 200
        assert logged_in_client.get("/api/events").json() == []

    def test_delete_unknown_twice(self, logged_in_client):
        for _ in range(2):
            response = logged_in_client.delete("/api/events/unknown")
            assert response.status_code == 404

    def test_malformed_id(self, logged_in_client):
        assert logged_in_client.delete("/api/events/not%20valid").status_code == 400


class TestImages:

    def upload(self, client, name="party photo.png", content=b"\x89PNG fake image"):
        return create(client, MEETING, files={"eventImage": (name, content, "image/png")})

    def test_create_with_image(self, logged_in_client, blob_store):
        event_id = self.upload(logged_in_client)

        image_url = get_event(logged_in_client, event_id)["imageUrl"]
        assert image_url.startswith(f"/uploads/{TEST_BUCKET}/")
        assert image_url.endswith("party_photo.png")
        assert blob_store.exists(blob_store.object_name_from_url(image_url))

        served = logged_in_client.get(image_url)
        assert served.status_code == 200
        assert served.content == b"\x89PNG fake image"

    def test_empty_file_part_means_no_image(self, logged_in_client):
        event_id = create(logged_in_client, MEETING, files={"eventImage": ("", b"", "application/octet-stream")})
        assert "imageUrl" not in get_event(logged_in_client, event_id)

    def test_delete_event_removes_blob(self, logged_in_client, blob_store):
        event_id = self.upload(logged_in_client)
        object_name = blob_store.object_name_from_url(get_event(logged_in_client, event_id)["imageUrl"])

        assert logged_in_client.delete(f"/api/events/{event_id}").status_code == 200

        assert not blob_store.exists(object_name)
        assert logged_in_client.get("/api/events").json() == []

    def test_delete_event_without_image_touches_no_blob(self, logged_in_client, blob_store):
        event_id = create(logged_in_client)

        with mock.patch.object(blob_store, "delete") as delete:
            assert logged_in_client.delete(f"/api/events/{event_id}").status_code == 200

        delete.assert_not_called()

    def test_failed_blob_deletion_does_not_fail_delete(self, logged_in_client, blob_store):
        event_id = self.upload(logged_in_client)

        with mock.patch.object(blob_store, "_delete_object", side_effect=OSError("backend down")):
            response = logged_in_client.delete(f"/api/events/{event_id}")

        assert response.status_code == 200
        assert logged_in_client.get("/api/events").json() == []

    def test_replace_image_on_update(self, logged_in_client, blob_store):
        event_id = self.upload(logged_in_client, "old.png", b"old")
        old_url = get_event(logged_in_client, event_id)["imageUrl"]

        response = logged_in_client.put(
            f"/api/events/{event_id}",
            data=MEETING,
            files={"eventImage": ("new.png", b"new", "image/png")},
        )

        assert response.status_code == 200
        new_url = get_event(logged_in_client, event_id)["imageUrl"]
        assert new_url != old_url and new_url.endswith("new.png")
        assert not blob_store.exists(blob_store.object_name_from_url(old_url))
        assert blob_store.exists(blob_store.object_name_from_url(new_url))

    def test_update_without_image_keeps_image(self, logged_in_client):
        event_id = self.upload(logged_in_client)
        image_url = get_event(logged_in_client, event_id)["imageUrl"]

        logged_in_client.put(f"/api/events/{event_id}", json={"title": "Renamed", "eventDate": "2025-06-01"})

        assert get_event(logged_in_client, event_id)["imageUrl"] == image_url

    def test_delete_image_only(self, logged_in_client, blob_store):
        event_id = self.upload(logged_in_client)
        object_name = blob_store.object_name_from_url(get_event(logged_in_client, event_id)["imageUrl"])

        response = logged_in_client.delete(f"/api/events/{event_id}/image")

        assert response.status_code == 200
        assert response.json()["message"] == "Image deleted successfully."
        assert "imageUrl" not in get_event(logged_in_client, event_id)
        assert not blob_store.exists(object_name)

    def test_delete_image_when_there_is_none(self, logged_in_client):
        event_id = create(logged_in_client)

        response = logged_in_client.delete(f"/api/events/{event_id}/image")

        assert response.status_code == 200
        assert response.json()["message"] == "No image found for this event."

    def test_delete_image_of_unknown_event(self, logged_in_client):
        assert logged_in_client.delete("/api/events/unknown/image").status_code == 404

    def test_image_too_large(self, database, auth_config, session_store, blob_store, tmp_path):
        app = create_application(
            database=database,
            auth_config=auth_config,
            storage_config=StorageConfig(bucket_name=TEST_BUCKET, upload_dir=tmp_path / "uploads", max_upload_bytes=10),
            session_store=session_store,
            blob_store=blob_store,
        )
        with TestClient(app) as client:
            client.post("/api/login", json={"password": TEST_PASSWORD})
            response = client.post("/api/events", data=MEETING, files={"eventImage": ("big.png", b"x" * 11, "image/png")})

        assert response.status_code == 413
        assert response.json()["success"] is False


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["environment"] in ("development", "production")
