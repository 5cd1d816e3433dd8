from datetime import datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient

from app.main import app

transport = ASGITransport(app=app)


async def _seed(repo, title, **extra):
    now = datetime(2026, 3, 14, 12, 0, tzinfo=timezone.utc)
    doc = {
        "title": title,
        "description": extra.pop("description", f"{title} description"),
        "ingredients": extra.pop("ingredients", [{"name": "Water", "quantity": "1", "unit": "cup"}]),
        "instructions": ["Boil", "Serve"],
        "imageUrls": [],
        "authorId": "family-member-placeholder",
        "language": "en",
        "createdAt": now,
        "updatedAt": now,
        **extra,
    }
    return await repo.insert(doc)


@pytest.mark.asyncio
@pytest.mark.parametrize("locale, heading", [("en", "All Recipes"), ("es", "Todas las Recetas")])
async def test_home_page_is_localized(recipe_repository, locale, heading):
    # When
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        resp = await ac.get(f"/{locale}")

    # Then
    assert resp.status_code == 200
    assert f'<html lang="{locale}">' in resp.text
    assert heading in resp.text


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/fr", "/de/about", "/xx/add-recipe", "/EN"])
async def test_unknown_locale_returns_404(recipe_repository, path):
    # When
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        resp = await ac.get(path)

    # Then
    assert resp.status_code == 404
    assert resp.json()["error_code"] == "LOCALE_001"


@pytest.mark.asyncio
async def test_home_page_search_filters_full_set(recipe_repository):
    # Given
    await _seed(recipe_repository, "Spaghetti Carbonara", tags=["pasta", "italian"])
    await _seed(
        recipe_repository,
        "Chicken Tikka Masala",
        ingredients=[{"name": "Chicken Breast", "quantity": "500", "unit": "g"}],
    )

    # When
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        by_tag = await ac.get("/en", params={"q": "PASTA"})
        by_ingredient = await ac.get("/en", params={"q": "chicken breast"})
        nothing = await ac.get("/en", params={"q": "sushi"})

    # Then
    assert "Spaghetti Carbonara" in by_tag.text
    assert "Chicken Tikka Masala" not in by_tag.text
    assert "Chicken Tikka Masala" in by_ingredient.text
    assert "No recipes match your search." in nothing.text


@pytest.mark.asyncio
async def test_home_page_without_recipes(recipe_repository):
    # When
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        resp = await ac.get("/es")

    # Then
    assert "Aún no hay recetas" in resp.text


@pytest.mark.asyncio
async def test_recipe_detail_page(recipe_repository):
    # Given
    saved = await _seed(recipe_repository, "Tea", notes="Use <fresh> leaves", servings=2)

    # When
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        resp = await ac.get(f"/es/recipes/{saved['_id']}")

    # Then
    assert resp.status_code == 200
    assert "Tea" in resp.text
    assert "Ingredientes" in resp.text
    assert "1 cup Water" in resp.text
    assert "2026-03-14" in resp.text
    # 자동 이스케이프
    assert "Use &lt;fresh&gt; leaves" in resp.text
    # 언어 전환 링크는 현재 경로 유지
    assert f'href="/en/recipes/{saved["_id"]}"' in resp.text


@pytest.mark.asyncio
async def test_recipe_detail_page_unknown_recipe(recipe_repository):
    # When
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        resp = await ac.get("/en/recipes/000000000000000000000000")

    # Then
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_add_recipe_and_about_pages():
    # When
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        add = await ac.get("/es/add-recipe")
        about = await ac.get("/en/about")

    # Then
    assert add.status_code == 200
    assert "Agregar una Nueva Receta" in add.text
    assert 'name="language" value="es"' in add.text
    assert about.status_code == 200
    assert "Recetas del Corazón" in about.text


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "accept_language, expected",
    [
        ("es-MX,es;q=0.9,en;q=0.8", "/es"),
        ("fr-FR,en-GB;q=0.7", "/en"),
        ("de", "/en"),
        (None, "/en"),
    ],
)
async def test_root_redirects_to_negotiated_locale(accept_language, expected):
    # Given
    headers = {"Accept-Language": accept_language} if accept_language else {}

    # When
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        resp = await ac.get("/", headers=headers)

    # Then
    assert resp.status_code == 307
    assert resp.headers["location"] == expected


TEA_FORM = {
    "title": "Tea",
    "description": "Hot tea",
    "ingredientName": ["Water", "Leaves", ""],
    "ingredientQuantity": ["1", "2", ""],
    "ingredientUnit": ["cup", "", ""],
    "instruction": ["Boil water", "", "Steep"],
    "tags": "drink, hot",
    "servings": "2",
    "action": "submit",
}


@pytest.mark.asyncio
async def test_add_recipe_form_uploads_then_saves(api_session):
    # When
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        resp = await ac.post(
            "/en/add-recipe",
            data=TEA_FORM,
            files=[("images", ("tea leaves.jpg", b"\xff\xd8tea", "image/jpeg"))],
        )

    # Then
    assert resp.status_code == 200
    assert "Recipe added successfully!" in resp.text
    assert [call[0] for call in api_session.calls] == ["credential", "upload", "persist"]
    assert api_session.calls[0] == ("credential", "tea leaves.jpg", "image/jpeg")
    assert api_session.calls[1] == ("upload", "image/jpeg", b"\xff\xd8tea")

    payload = api_session.payloads[0]
    assert payload["ingredients"] == [
        {"name": "Water", "quantity": "1", "unit": "cup"},
        {"name": "Leaves", "quantity": "2"},
    ]
    assert payload["instructions"] == ["Boil water", "Steep"]
    assert payload["tags"] == ["drink", "hot"]
    assert payload["servings"] == 2
    assert payload["language"] == "en"
    assert payload["imageUrls"] == [
        f"https://family-recipes.s3.us-east-1.amazonaws.com/{api_session.keys[0]}"
    ]
    # 성공하면 빈 폼으로 돌아간다
    assert 'value="Tea"' not in resp.text
    assert resp.text.count('name="ingredientName"') == 1


@pytest.mark.asyncio
async def test_add_recipe_form_upload_failure_keeps_entered_values(api_session):
    # Given
    api_session.fail_uploads = True

    # When
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        resp = await ac.post(
            "/en/add-recipe",
            data=TEA_FORM,
            files=[("images", ("tea.jpg", b"\xff\xd8tea", "image/jpeg"))],
        )

    # Then
    assert resp.status_code == 400
    assert "Failed to upload file: tea.jpg" in resp.text
    assert ("persist", "Tea") not in api_session.calls
    assert 'value="Tea"' in resp.text
    assert 'value="Leaves"' in resp.text
    assert ">Steep</textarea>" in resp.text


@pytest.mark.asyncio
async def test_add_recipe_form_validation_is_localized(api_session):
    # When
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        resp = await ac.post(
            "/es/add-recipe",
            data={**TEA_FORM, "title": "", "description": "Té caliente"},
        )

    # Then
    assert resp.status_code == 400
    assert "Completa el título, la descripción" in resp.text
    assert api_session.calls == []
    assert ">Té caliente</textarea>" in resp.text


@pytest.mark.asyncio
async def test_add_recipe_form_row_buttons_do_not_submit(api_session):
    # When
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        added = await ac.post(
            "/en/add-recipe",
            data={**TEA_FORM, "action": "add-ingredient"},
        )
        removed = await ac.post(
            "/en/add-recipe",
            data={**TEA_FORM, "instruction": ["Boil water", "Steep"], "action": "remove-instruction:0"},
        )

    # Then
    assert api_session.calls == []
    assert added.status_code == 200
    assert added.text.count('name="ingredientName"') == 4
    assert 'value="Tea"' in added.text
    assert removed.text.count('name="instruction"') == 1
    assert ">Steep</textarea>" in removed.text
    assert "Boil water" not in removed.text
