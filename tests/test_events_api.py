"""
Tests for the event HTTP endpoints
"""

import json

import httpx
from fastapi.testclient import TestClient

from app.api.routes_events import get_image_uploader
from app.core.db import get_db
from app.services.media_service import ImageUploadService

IMAGE = ("cover.png", b"\x89PNG\r\n\x1a\nfake-image", "image/png")

def event_form(**overrides):
    data = {
        "title": "PyCon Lisbon",
        "description": "The Python conference by the sea",
        "overview": "Three days of talks",
        "venue": "FIL",
        "location": "Lisbon, Portugal",
        "date": "2025-10-10",
        "time": "09:00",
        "mode": "offline",
        "audience": "Developers",
        "organizer": "Python Portugal",
        "tags": json.dumps(["python", "conference", "python"]),
        "agenda": json.dumps(["Keynote", "Talks", "Sprints"]),
    }
    data.update(overrides)
    return data

# -------- Create --------

def test_create_event(client, uploads):
    response = client.post("/api/events", data=event_form(), files={"image": IMAGE})

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Event created successfully"
    event = body["event"]
    assert event["slug"] == "pycon-lisbon"
    assert event["image"] == "https://res.cloudinary.com/demo/image/upload/DevEvent/cover.png"
    assert event["tags"] == ["python", "conference"]
    assert event["agenda"] == ["Keynote", "Talks", "Sprints"]
    assert event["location"] == "Lisbon, Portugal"

    assert len(uploads) == 1
    assert b"fake-image" in uploads[0].content

def test_create_event_with_explicit_slug(client):
    response = client.post(
        "/api/events",
        data=event_form(slug="  PyCon-2025 "),
        files={"image": IMAGE}
    )

    assert response.status_code == 201
    assert response.json()["event"]["slug"] == "pycon-2025"

def test_create_event_without_image(client, uploads):
    response = client.post("/api/events", data=event_form())

    assert response.status_code == 400
    assert response.json() == {"message": "Image file is required"}
    assert uploads == []

def test_create_event_with_malformed_tags(client, uploads):
    response = client.post(
        "/api/events",
        data=event_form(tags="python, web"),
        files={"image": IMAGE}
    )

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Event creation failed"
    assert body["details"][0]["loc"] == ["tags"]
    assert uploads == []

def test_create_event_with_non_list_agenda(client):
    response = client.post(
        "/api/events",
        data=event_form(agenda=json.dumps({"09:00": "Keynote"})),
        files={"image": IMAGE}
    )

    assert response.status_code == 400

def test_create_event_missing_title(client):
    form = event_form()
    del form["title"]

    response = client.post("/api/events", data=form, files={"image": IMAGE})

    assert response.status_code == 400
    assert response.json()["details"][0]["loc"] == ["title"]

def test_create_event_duplicate_slug(client):
    first = client.post("/api/events", data=event_form(), files={"image": IMAGE})
    second = client.post("/api/events", data=event_form(), files={"image": IMAGE})

    assert first.status_code == 201
    assert second.status_code == 409
    assert second.json()["error"] == 'Event with slug "pycon-lisbon" already exists'

def test_create_event_upload_failure(client):
    from main import app

    def handler(request):
        return httpx.Response(502, text="bad gateway")

    app.dependency_overrides[get_image_uploader] = lambda: ImageUploadService(
        cloud_name="demo",
        api_key="key",
        api_secret="secret",
        transport=httpx.MockTransport(handler)
    )

    response = client.post("/api/events", data=event_form(), files={"image": IMAGE})

    assert response.status_code == 500
    assert response.json() == {"message": "Event creation failed", "error": "Image upload failed"}
    assert client.get("/api/events").json() == {"events": []}

# -------- List --------

def test_list_events_newest_first(client):
    client.post("/api/events", data=event_form(title="First Event"), files={"image": IMAGE})
    client.post("/api/events", data=event_form(title="Second Event"), files={"image": IMAGE})

    response = client.get("/api/events")

    assert response.status_code == 200
    slugs = [event["slug"] for event in response.json()["events"]]
    assert slugs == ["second-event", "first-event"]

def test_list_events_empty(client):
    response = client.get("/api/events")

    assert response.status_code == 200
    assert response.json() == {"events": []}

# -------- Fetch by slug --------

def test_get_event_by_slug(client, sample_event):
    response = client.get("/api/events/my-event")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["event"]["id"] == sample_event.id
    assert body["event"]["title"] == "My Event"

def test_get_event_by_padded_mixed_case_slug(client, sample_event):
    response = client.get("/api/events/%20My-Event%20")

    assert response.status_code == 200
    assert response.json()["event"]["slug"] == "my-event"

def test_get_event_not_found(client):
    response = client.get("/api/events/my-event")

    assert response.status_code == 404
    assert response.json() == {
        "success": False,
        "error": 'Event with slug "my-event" not found'
    }

def test_get_event_blank_slug(client):
    response = client.get("/api/events/%20%20")

    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "error": "Slug parameter is required and must be a non-empty string"
    }

# -------- Infrastructure failures --------

def test_connection_failure_returns_generic_500(database):
    from main import app

    async def broken_db():
        raise ConnectionError("server selection timed out")
        yield  # pragma: no cover

    app.dependency_overrides[get_db] = broken_db
    try:
        response = TestClient(app, raise_server_exceptions=False).get("/api/events")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Internal server error"}
    assert "server selection" not in response.text

def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}

def test_create_event_rejects_slug_that_cannot_be_looked_up(client, uploads):
    for slug in ["Conf/2025", "conf 2025", "conf?2025", "conf--2025", "-conf"]:
        response = client.post(
            "/api/events",
            data=event_form(slug=slug),
            files={"image": IMAGE}
        )

        assert response.status_code == 400, slug
        assert response.json()["details"][0]["loc"] == ["slug"]

    assert uploads == []
    assert client.get("/api/events").json() == {"events": []}

def test_created_slug_is_reachable(client):
    created = client.post("/api/events", data=event_form(slug=" Conf-2025 "), files={"image": IMAGE})

    slug = created.json()["event"]["slug"]
    response = client.get(f"/api/events/{slug}")

    assert response.status_code == 200
    assert response.json()["event"]["slug"] == "conf-2025"
