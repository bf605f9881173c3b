"""Integration tests for the catalogue HTTP endpoints."""

from catalogue.item.item import Item
from protean.utils.globals import current_domain

ITEM = {
    "title": "Corona Extra",
    "description": "Cerveja mexicana leve, long neck 355ml.",
    "price": 8.9,
    "image_url": "https://cdn.example.com/corona.png",
}

HIGHLIGHT = {
    "title": "Happy Hour",
    "description": "Chopp em dobro das 18h as 20h.",
    "image_url": "https://cdn.example.com/happy.jpg",
    "link": "https://lsdrinks.example.com/promo",
    "is_active": True,
}


def _create_item(client, **overrides):
    response = client.post("/admin/items", json={**ITEM, **overrides})
    assert response.status_code == 201
    return response.json()["item_id"]


class TestCategoryEndpoints:
    def test_crud(self, api_client):
        created = api_client.post("/admin/categories", json={"name": "Cervejas"})
        assert created.status_code == 201
        category_id = created.json()["category_id"]

        assert api_client.put(f"/admin/categories/{category_id}", json={"name": "Chopp"}).status_code == 200
        assert [c["name"] for c in api_client.get("/categories").json()] == ["Chopp"]

        assert api_client.delete(f"/admin/categories/{category_id}").status_code == 200
        assert api_client.get("/categories").json() == []

    def test_short_name_is_unprocessable(self, api_client):
        assert api_client.post("/admin/categories", json={"name": "C"}).status_code == 422

    def test_unknown_category_is_not_found(self, api_client):
        response = api_client.get("/admin/categories/missing")
        assert response.status_code == 404
        assert response.json()["error"] == "NotFound"


class TestItemEndpoints:
    def test_create_and_fetch(self, api_client):
        item_id = _create_item(api_client)

        response = api_client.get(f"/items/{item_id}")
        assert response.status_code == 200
        body = response.json()
        assert body["title"] == "Corona Extra"
        assert body["category_name"] == "Sem Categoria"

    def test_zero_price_rejected_at_boundary(self, api_client):
        assert api_client.post("/admin/items", json={**ITEM, "price": 0}).status_code == 422

    def test_domain_validation_maps_to_400(self, api_client):
        response = api_client.post("/admin/items", json={**ITEM, "image_url": "ftp://cdn.example.com/x.png"})
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "ValidationError"
        assert "image_url" in body["messages"]

    def test_update_and_delete(self, api_client):
        item_id = _create_item(api_client)
        assert api_client.put(f"/admin/items/{item_id}", json={"price": 9.9}).status_code == 200
        assert current_domain.repository_for(Item).get(item_id).price == 9.9

        assert api_client.delete(f"/admin/items/{item_id}").status_code == 200
        assert api_client.get(f"/items/{item_id}").status_code == 404

    def test_paginated_listing(self, api_client):
        for n in range(3):
            _create_item(api_client, title=f"Cerveja numero {n}")

        seen, cursor = [], None
        while True:
            params = {"limit": 2}
            if cursor:
                params["cursor"] = cursor
            page = api_client.get("/items", params=params).json()
            seen.extend(item["id"] for item in page["items"])
            if not page["has_more"]:
                break
            cursor = page["cursor"]

        assert len(seen) == len(set(seen)) == 3

    def test_limit_is_clamped(self, api_client):
        assert api_client.get("/items", params={"limit": 0}).status_code == 422
        assert api_client.get("/items", params={"limit": 101}).status_code == 422

    def test_search(self, api_client):
        _create_item(api_client, title="Cerveja Pilsen")
        _create_item(api_client, title="Vinho Tinto")

        response = api_client.get("/items/search", params={"q": "vinho"})
        assert [item["title"] for item in response.json()] == ["Vinho Tinto"]


class TestHighlightEndpoints:
    def test_swap(self, api_client):
        first = api_client.post("/admin/highlights", json=HIGHLIGHT).json()["highlight_id"]
        second = api_client.post("/admin/highlights", json={**HIGHLIGHT, "title": "Frete Gratis"}).json()[
            "highlight_id"
        ]

        response = api_client.post(
            "/admin/highlights/swap",
            json={"first_highlight_id": first, "second_highlight_id": second},
        )
        assert response.status_code == 200
        assert [h["id"] for h in api_client.get("/highlights").json()] == [second, first]

    def test_swap_with_missing_highlight(self, api_client):
        first = api_client.post("/admin/highlights", json=HIGHLIGHT).json()["highlight_id"]
        response = api_client.post(
            "/admin/highlights/swap",
            json={"first_highlight_id": first, "second_highlight_id": "missing"},
        )
        assert response.status_code == 404
        assert api_client.get(f"/admin/highlights/{first}").json()["position"] == 0

    def test_storefront_shows_active_only(self, api_client):
        api_client.post("/admin/highlights", json=HIGHLIGHT)
        api_client.post("/admin/highlights", json={**HIGHLIGHT, "title": "Rascunho", "is_active": False})

        assert [h["title"] for h in api_client.get("/highlights").json()] == ["Happy Hour"]
        assert len(api_client.get("/admin/highlights").json()) == 2

    def test_highlight_without_link(self, api_client):
        body = {key: value for key, value in HIGHLIGHT.items() if key != "link"}
        response = api_client.post("/admin/highlights", json=body)

        assert response.status_code == 201
        assert api_client.get("/highlights").json()[0]["link"] is None
