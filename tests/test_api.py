"""Tests for the generate endpoints."""

from fastapi.testclient import TestClient

from suno_gateway.api.app import create_app
from suno_gateway.containers import AppContainer
from tests.conftest import FakeClerkClient, FakeSunoClient, clip_record


def test_health(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_lifespan_bootstraps_session(container: AppContainer) -> None:
    with TestClient(create_app(container)) as client:
        response = client.get("/health")

    assert response.json() == {"status": "ok"}
    assert container.suno.ready


def test_lifespan_tolerates_stale_cookie(
    container: AppContainer, clerk_client: FakeClerkClient
) -> None:
    clerk_client.client_payload = {"response": {}}

    with TestClient(create_app(container)) as client:
        response = client.get("/health")

    assert response.status_code == 200
    assert not container.suno.ready


def test_generate_returns_clips(
    container: AppContainer, suno_client: FakeSunoClient
) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/api/generate",
        json={"prompt": "a song about rain", "make_instrumental": True},
    )

    assert response.status_code == 200
    data = response.json()
    assert [clip["id"] for clip in data] == ["a", "b"]
    assert data[0]["lyric"] == "[Verse]\nla la la"
    assert suno_client.payloads[0]["gpt_description_prompt"] == "a song about rain"
    assert suno_client.payloads[0]["make_instrumental"] is True
    assert suno_client.payloads[0]["mv"] == "chirp-v3-5"


def test_generate_waits_for_audio(
    container: AppContainer, suno_client: FakeSunoClient
) -> None:
    suno_client.feed_responses = [
        [clip_record("a", status="streaming"), clip_record("b", status="complete")]
    ]
    client = TestClient(create_app(container))

    response = client.post(
        "/api/generate", json={"prompt": "hi", "wait_audio": True, "model": "m"}
    )

    assert response.status_code == 200
    assert [clip["status"] for clip in response.json()] == ["streaming", "complete"]
    assert suno_client.payloads[0]["mv"] == "m"


def test_custom_generate_sends_tags_and_title(
    container: AppContainer, suno_client: FakeSunoClient
) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/api/custom_generate",
        json={"prompt": "[Verse]\nhello", "tags": "pop", "title": "Hello"},
    )

    assert response.status_code == 200
    payload = suno_client.payloads[0]
    assert payload["tags"] == "pop"
    assert payload["title"] == "Hello"
    assert payload["prompt"] == "[Verse]\nhello"


def test_custom_generate_requires_title(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/api/custom_generate", json={"prompt": "lyrics", "tags": "pop"}
    )

    assert response.status_code == 422


def test_payment_required_maps_to_402(
    container: AppContainer, suno_client: FakeSunoClient
) -> None:
    suno_client.submit_status = 402
    suno_client.submit_body = {"detail": "Insufficient credits."}
    client = TestClient(create_app(container))

    response = client.post("/api/generate", json={"prompt": "hi"})

    assert response.status_code == 402
    assert response.json() == {"error": "Insufficient credits."}


def test_other_submission_failures_map_to_500(
    container: AppContainer, suno_client: FakeSunoClient
) -> None:
    suno_client.submit_status = 429
    suno_client.submit_body = {"detail": "Too many requests."}
    client = TestClient(create_app(container))

    response = client.post("/api/generate", json={"prompt": "hi"})

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error: Too many requests."}


def test_stale_cookie_surfaces_on_first_call(
    container: AppContainer, clerk_client: FakeClerkClient
) -> None:
    clerk_client.client_payload = {}
    client = TestClient(create_app(container))

    response = client.post("/api/generate", json={"prompt": "hi"})

    assert response.status_code == 500
    assert "credentials may be stale" in response.json()["error"]


def test_get_clips_by_ids(container: AppContainer, suno_client: FakeSunoClient) -> None:
    suno_client.feed_responses = [[clip_record("a", status="queued")]]
    client = TestClient(create_app(container))

    response = client.get("/api/get", params={"ids": "a, b"})

    assert response.status_code == 200
    assert response.json()[0]["status"] == "queued"
    assert suno_client.feed_calls == [["a", "b"]]


def test_cors_preflight(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.options(
        "/api/generate",
        headers={
            "Origin": "https://example.com",
            "Access-Control-Request-Method": "POST",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"


def test_malformed_clip_record_maps_to_json_500(
    container: AppContainer, suno_client: FakeSunoClient
) -> None:
    suno_client.feed_responses = [[{"status": "queued"}]]
    client = TestClient(create_app(container))

    response = client.get("/api/get", params={"ids": "a"})

    assert response.status_code == 500
    assert response.json()["error"].startswith("Internal server error: Clip record")
