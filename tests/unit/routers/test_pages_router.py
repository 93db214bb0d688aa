"""Unit tests for the pages router."""

from uuid import uuid4

import pytest
import pytest_asyncio
from fastapi import FastAPI, HTTPException
from httpx import ASGITransport, AsyncClient

from pagebuilder.core.database import get_db
from pagebuilder.core.exceptions import HomePageDeletionError, PageNotFoundError
from pagebuilder.routers.pages import router, to_http_exception


@pytest_asyncio.fixture
async def client(db_session):
    """HTTP client against an app whose get_db yields the test session."""
    app = FastAPI()
    app.include_router(router)

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


class TestToHttpException:
    """Tests for domain error translation."""

    def test_not_found_maps_to_404(self):
        error = to_http_exception(PageNotFoundError())
        assert isinstance(error, HTTPException)
        assert error.status_code == 404
        assert error.detail == "Page not found"

    def test_invariant_violation_maps_to_400(self):
        error = to_http_exception(HomePageDeletionError())
        assert error.status_code == 400
        assert error.detail == "Cannot delete home page"

    def test_value_error_maps_to_400(self):
        error = to_http_exception(ValueError("Cannot update page fields: foo"))
        assert error.status_code == 400


class TestPagesEndpoints:
    """End-to-end tests of the page endpoints on SQLite."""

    @pytest.mark.asyncio
    async def test_create_and_list_pages(self, client, seed):
        """A created page shows up in the version listing."""
        version = await seed.version()
        page_id = uuid4()

        response = await client.post(
            f"/api/app-versions/{version.id}/pages",
            json={"id": str(page_id), "name": "Orders", "handle": "orders", "index": 0},
        )
        assert response.status_code == 201
        assert response.json()["id"] == str(page_id)

        listing = await client.get(f"/api/app-versions/{version.id}/pages")
        assert listing.status_code == 200
        body = listing.json()
        assert [p["name"] for p in body] == ["Orders"]
        assert "app_version_id" not in body[0]

    @pytest.mark.asyncio
    async def test_create_page_validates_handle(self, client, seed):
        """Handles must be URL-safe."""
        version = await seed.version()

        response = await client.post(
            f"/api/app-versions/{version.id}/pages",
            json={"name": "Orders", "handle": "orders page!", "index": 0},
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_get_page(self, client, seed):
        """A single page is returned with its components."""
        version = await seed.version()
        page = await seed.page(version, "Home", "home", 0)
        await seed.component(page, "button1")

        response = await client.get(f"/api/app-versions/{version.id}/pages/{page.id}")

        assert response.status_code == 200
        assert [c["name"] for c in response.json()["components"]] == ["button1"]

    @pytest.mark.asyncio
    async def test_get_page_from_other_version_is_404(self, client, seed):
        """Pages are only visible through their own version."""
        version = await seed.version()
        other = await seed.version(name="v2", app_name="Other")
        page = await seed.page(other, "Home", "home", 0)

        response = await client.get(f"/api/app-versions/{version.id}/pages/{page.id}")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_update_page_name(self, client, seed, db_session):
        """PUT with a single-field diff renames the page."""
        version = await seed.version()
        page = await seed.page(version, "Home", "home", 0)

        response = await client.put(
            f"/api/app-versions/{version.id}/pages",
            json={"pageId": str(page.id), "diff": {"name": "Start"}},
        )

        assert response.status_code == 204
        await db_session.refresh(page)
        assert page.name == "Start"

    @pytest.mark.asyncio
    async def test_update_missing_page_is_404(self, client, seed):
        """Unknown update targets map to 404."""
        version = await seed.version()

        response = await client.put(
            f"/api/app-versions/{version.id}/pages",
            json={"page_id": str(uuid4()), "diff": {"name": "Start"}},
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_clone_page(self, client, seed):
        """Cloning returns the refreshed pages and events."""
        version = await seed.version()
        page = await seed.page(version, "Home", "home", 0)
        await seed.event(version, page.id, "page", {"actionId": "show-alert"})

        response = await client.post(f"/api/app-versions/{version.id}/pages/{page.id}/clone")

        assert response.status_code == 201
        body = response.json()
        assert [p["name"] for p in body["pages"]] == ["Home", "Home (copy)"]
        assert len(body["events"]) == 2

    @pytest.mark.asyncio
    async def test_clone_missing_page_is_404(self, client, seed):
        version = await seed.version()

        response = await client.post(f"/api/app-versions/{version.id}/pages/{uuid4()}/clone")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_page(self, client, seed):
        """Deleting a page closes the index gap."""
        version = await seed.version()
        await seed.page(version, "A", "a", 0)
        b = await seed.page(version, "B", "b", 1)
        await seed.page(version, "C", "c", 2)

        response = await client.delete(f"/api/app-versions/{version.id}/pages/{b.id}")
        assert response.status_code == 204

        listing = await client.get(f"/api/app-versions/{version.id}/pages")
        assert [(p["name"], p["index"]) for p in listing.json()] == [("A", 0), ("C", 1)]

    @pytest.mark.asyncio
    async def test_delete_home_page_is_400(self, client, seed, db_session):
        """The home page cannot be deleted."""
        version = await seed.version()
        home = await seed.page(version, "Home", "home", 0)
        version.home_page_id = home.id
        await db_session.commit()

        response = await client.delete(f"/api/app-versions/{version.id}/pages/{home.id}")

        assert response.status_code == 400
        assert response.json()["detail"] == "Cannot delete home page"

    @pytest.mark.asyncio
    async def test_update_null_value_is_400(self, client, seed):
        """Nulling a page column is a client error, not a 500."""
        version = await seed.version()
        page = await seed.page(version, "Home", "home", 0)

        response = await client.put(
            f"/api/app-versions/{version.id}/pages",
            json={"pageId": str(page.id), "diff": {"name": None}},
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_clone_page_through_other_version_is_404(self, client, seed):
        version = await seed.version()
        other = await seed.version(name="v2", app_name="Other")
        page = await seed.page(other, "Home", "home", 0)

        response = await client.post(f"/api/app-versions/{version.id}/pages/{page.id}/clone")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_page_through_other_version_is_404(self, client, seed):
        version = await seed.version()
        other = await seed.version(name="v2", app_name="Other")
        page = await seed.page(other, "Home", "home", 0)

        response = await client.delete(f"/api/app-versions/{version.id}/pages/{page.id}")

        assert response.status_code == 404
