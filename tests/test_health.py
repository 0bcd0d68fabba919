from fastapi.testclient import TestClient

from storebuilder.core.settings import settings


def test_ping(client: TestClient):
    r = client.get(f"{settings.API_V1_STR}/health/ping")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "ok"
    assert body["section_types"] == 32


def test_openapi_metadata(client: TestClient):
    info = client.get("/openapi.json").json()["info"]
    assert info["title"] == settings.APP_NAME
    assert info["version"] == settings.APP_VERSION
