# tests/test_api.py
from __future__ import annotations

from fastapi.testclient import TestClient

from storebuilder.core.settings import settings
from storebuilder.models.store import Store

API = settings.API_V1_STR


def _home_id(client: TestClient, store_id: int, headers: dict) -> int:
    pages = client.get(f"{API}/stores/{store_id}/pages", headers=headers).json()
    return next(p["id"] for p in pages if p["slug"] == "home")


def test_auth_required(client: TestClient):
    r = client.post(f"{API}/stores", json={"slug": "x", "name": "X"})
    assert r.status_code == 401

    r = client.get(f"{API}/stores/1", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401


def test_create_store_seeds_pages(client: TestClient, templates, owner_headers):
    r = client.post(f"{API}/stores", json={"slug": "zen", "name": "Zen Shop"}, headers=owner_headers)
    assert r.status_code == 201, r.text
    store = r.json()
    assert store["business_type"] == "ecommerce"
    assert store["status"] == "active"

    pages = client.get(f"{API}/stores/{store['id']}/pages", headers=owner_headers).json()
    assert [p["slug"] for p in pages][:4] == ["home", "products", "about", "contact"]
    assert len(pages) == 8

    mine = client.get(f"{API}/stores", headers=owner_headers).json()
    assert [s["slug"] for s in mine] == ["zen"]

    r = client.post(f"{API}/stores/{store['id']}/initialize-pages", headers=owner_headers)
    assert r.status_code == 200
    assert r.json() == {"store_id": store["id"], "pages_created": 0}


def test_store_access_is_per_member(client: TestClient, store: Store, editor_headers, stranger_headers):
    assert client.get(f"{API}/stores/{store.id}", headers=editor_headers).status_code == 200
    assert client.get(f"{API}/stores/{store.id}", headers=stranger_headers).status_code == 403
    assert client.get(f"{API}/stores/{store.id}/pages", headers=stranger_headers).status_code == 403
    # only the owner may delete the store
    assert client.delete(f"{API}/stores/{store.id}", headers=editor_headers).status_code == 403


def test_page_endpoints(client: TestClient, store: Store, owner_headers):
    r = client.post(f"{API}/stores/{store.id}/pages", json={"title": "Summer Sale"}, headers=owner_headers)
    assert r.status_code == 201
    page = r.json()
    assert page["slug"] == "summer-sale"
    assert page["is_protected"] is False

    r = client.post(f"{API}/stores/{store.id}/pages", json={"title": "Other", "slug": "summer-sale"}, headers=owner_headers)
    assert r.status_code == 400
    assert r.json()["error"] == "DuplicateSlugError"

    r = client.patch(f"{API}/pages/{page['id']}", json={"is_published": True}, headers=owner_headers)
    assert r.status_code == 200
    assert r.json()["published_at"] is not None

    home_id = _home_id(client, store.id, owner_headers)
    r = client.delete(f"{API}/pages/{home_id}", headers=owner_headers)
    assert r.status_code == 400
    assert r.json()["error"] == "ProtectedPageError"

    assert client.delete(f"{API}/pages/{page['id']}", headers=owner_headers).status_code == 204
    r = client.get(f"{API}/pages/{page['id']}", headers=owner_headers)
    assert r.status_code == 404
    assert r.json() == {"error": "NotFoundError", "detail": "Page not found."}


def test_section_editing_flow(client: TestClient, store: Store, owner_headers):
    home_id = _home_id(client, store.id, owner_headers)
    sections = client.get(f"{API}/pages/{home_id}/sections", headers=owner_headers).json()
    assert [s["section_type"] for s in sections] == [
        "hero_banner", "featured_products", "category_grid", "testimonials",
    ]
    ids = [s["id"] for s in sections]

    r = client.post(f"{API}/pages/{home_id}/sections", json={"section_type": "newsletter"}, headers=owner_headers)
    assert r.status_code == 201
    newsletter = r.json()
    assert newsletter["sort_order"] == 4
    assert newsletter["name"] == "Newsletter"
    ids.append(newsletter["id"])

    r = client.post(f"{API}/pages/{home_id}/sections", json={"section_type": "marquee"}, headers=owner_headers)
    assert r.status_code == 400

    new_order = list(reversed(ids))
    r = client.put(f"{API}/pages/{home_id}/sections/order", json={"section_ids": new_order}, headers=owner_headers)
    assert r.status_code == 200
    assert [s["id"] for s in r.json()] == new_order
    assert [s["sort_order"] for s in r.json()] == [0, 1, 2, 3, 4]

    r = client.put(f"{API}/pages/{home_id}/sections/order", json={"section_ids": new_order[:-1]}, headers=owner_headers)
    assert r.status_code == 400

    r = client.post(f"{API}/sections/{new_order[0]}/move", json={"direction": "up"}, headers=owner_headers)
    assert [s["id"] for s in r.json()] == new_order
    r = client.post(f"{API}/sections/{new_order[0]}/move", json={"direction": "down"}, headers=owner_headers)
    assert [s["id"] for s in r.json()][:2] == [new_order[1], new_order[0]]

    r = client.post(f"{API}/sections/{newsletter['id']}/duplicate", headers=owner_headers)
    assert r.status_code == 201
    assert r.json()["name"] == "Newsletter (Copy)"

    r = client.post(f"{API}/sections/{newsletter['id']}/toggle-visibility", headers=owner_headers)
    assert r.json()["is_visible"] is False

    r = client.patch(f"{API}/sections/{newsletter['id']}", json={"name": "Join us"}, headers=owner_headers)
    assert r.json()["name"] == "Join us"


def test_config_endpoints(client: TestClient, store: Store, owner_headers):
    home_id = _home_id(client, store.id, owner_headers)
    hero = client.get(f"{API}/pages/{home_id}/sections", headers=owner_headers).json()[0]

    r = client.patch(f"{API}/sections/{hero['id']}/config", json={"title": "Hello", "height": "full"}, headers=owner_headers)
    assert r.status_code == 200
    assert r.json()["config"] == {"title": "Hello", "height": "full"}

    r = client.patch(f"{API}/sections/{hero['id']}/config", json={"height": None}, headers=owner_headers)
    assert r.json()["config"] == {"title": "Hello"}

    r = client.patch(f"{API}/sections/{hero['id']}/config", json={"height": "gigantic"}, headers=owner_headers)
    assert r.status_code == 400
    assert r.json()["error"] == "ValidationError"

    r = client.patch(f"{API}/sections/{hero['id']}/mobile-config", json={"height": "small"}, headers=owner_headers)
    assert r.json()["mobile_config"] == {"height": "small"}

    r = client.delete(f"{API}/sections/{hero['id']}/mobile-config", headers=owner_headers)
    assert r.json()["mobile_config"] is None


def test_catalog_endpoints(client: TestClient, templates):
    r = client.get(f"{API}/section-types")
    assert r.status_code == 200
    assert r.json()[0]["id"] == "hero"

    r = client.get(f"{API}/section-types/hero_banner")
    assert r.status_code == 200
    body = r.json()
    assert body["default_config"]["buttonText"] == "Shop Now"
    assert body["schema"]["properties"]["height"]["enum"] == ["small", "medium", "large", "full"]

    assert client.get(f"{API}/section-types/marquee").status_code == 400

    r = client.get(f"{API}/page-templates", params={"business_type": "ecommerce", "business_category": "general"})
    assert [t["default_slug"] for t in r.json()][:2] == ["home", "products"]


def test_theme_navigation_header_footer_endpoints(client: TestClient, store: Store, owner_headers):
    r = client.post(f"{API}/stores/{store.id}/themes", json={"name": "Dark"}, headers=owner_headers)
    assert r.status_code == 201
    dark = r.json()
    assert dark["is_active"] is False

    r = client.post(f"{API}/themes/{dark['id']}/activate", headers=owner_headers)
    assert r.json()["is_active"] is True
    themes = client.get(f"{API}/stores/{store.id}/themes", headers=owner_headers).json()
    assert sum(t["is_active"] for t in themes) == 1

    r = client.patch(f"{API}/themes/{dark['id']}", json={"colors": {"primary": "0 0% 0%"}}, headers=owner_headers)
    assert r.json()["colors"]["primary"] == "0 0% 0%"

    r = client.post(f"{API}/stores/{store.id}/navigation", json={"label": "Shop", "url": "/products"}, headers=owner_headers)
    assert r.status_code == 201
    shop = r.json()
    r = client.post(f"{API}/stores/{store.id}/navigation", json={"label": "Help", "url": "/help"}, headers=owner_headers)
    help_item = r.json()

    r = client.put(
        f"{API}/stores/{store.id}/navigation/order",
        json={"location": "header", "item_ids": [help_item["id"], shop["id"]]},
        headers=owner_headers,
    )
    assert [i["label"] for i in r.json()] == ["Help", "Shop"]

    assert client.delete(f"{API}/navigation/{help_item['id']}", headers=owner_headers).status_code == 204
    menu = client.get(f"{API}/stores/{store.id}/navigation", headers=owner_headers).json()
    assert [i["label"] for i in menu] == ["Shop"]

    r = client.patch(
        f"{API}/stores/{store.id}/header-footer",
        json={"footer_config": {"copyrightText": "© Acme"}},
        headers=owner_headers,
    )
    assert r.status_code == 200
    assert r.json()["footer_config"]["copyrightText"] == "© Acme"
    assert client.get(f"{API}/stores/{store.id}/header-footer", headers=owner_headers).json()["store_id"] == store.id


def test_delete_store(client: TestClient, store: Store, owner_headers):
    assert client.delete(f"{API}/stores/{store.id}", headers=owner_headers).status_code == 204
    assert client.get(f"{API}/stores/{store.id}", headers=owner_headers).status_code == 404
