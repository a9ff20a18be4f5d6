"""
Favorites integration tests.

Verifies toggling favorites over HTTP and the favorites page.
"""
from fastapi.testclient import TestClient


def create_recipe(client: TestClient, headers: dict, title: str) -> str:
    response = client.post(
        "/addrecipe",
        data={
            "Recipe.Title": title,
            "Recipe.Category": "Lunch",
            "Recipe.CookTime": "15",
            "Recipe.Difficulty": "Easy",
        },
        headers=headers,
        follow_redirects=False
    )
    assert response.status_code == 303
    return response.headers["location"].rsplit("/", 1)[-1]


class TestFavorites:

    def test_toggle_adds_and_removes(self, authenticated_client: TestClient, csrf_headers: dict):
        recipe_id = create_recipe(authenticated_client, csrf_headers, "Toggle Salad")

        response = authenticated_client.post(f"/favorites/{recipe_id}", headers=csrf_headers)
        assert response.status_code == 200
        assert response.json() == {"recipe_id": recipe_id, "favorited": True}

        response = authenticated_client.post(f"/favorites/{recipe_id}", headers=csrf_headers)
        assert response.json()["favorited"] is False

    def test_favorites_page_lists_favorites(self, authenticated_client: TestClient, csrf_headers: dict):
        kept = create_recipe(authenticated_client, csrf_headers, "Kept Soup")
        create_recipe(authenticated_client, csrf_headers, "Ignored Bread")
        authenticated_client.post(f"/favorites/{kept}", headers=csrf_headers)

        response = authenticated_client.get("/favorites")

        assert response.status_code == 200
        assert "Kept Soup" in response.text
        assert "Ignored Bread" not in response.text

    def test_empty_favorites_page(self, authenticated_client: TestClient):
        response = authenticated_client.get("/favorites")

        assert "You have no favorite recipes yet." in response.text

    def test_detail_page_shows_favorite_state(self, authenticated_client: TestClient, csrf_headers: dict):
        recipe_id = create_recipe(authenticated_client, csrf_headers, "Starred Tart")
        authenticated_client.post(f"/favorites/{recipe_id}", headers=csrf_headers)

        response = authenticated_client.get(f"/recipes/{recipe_id}")

        assert 'aria-pressed="true"' in response.text

    def test_toggle_unknown_recipe_returns_404(self, authenticated_client: TestClient, csrf_headers: dict):
        response = authenticated_client.post("/favorites/missing", headers=csrf_headers)

        assert response.status_code == 404
