"""Endpoint tests through the ASGI app with the test database."""
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from gallery.database import get_db
from gallery.main import app
from gallery.utils.security import create_access_token


@pytest_asyncio.fixture
async def client(session_maker, seeded):
    async def override_get_db():
        async with session_maker() as session:
            yield session
            await session.commit()
    
    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def auth(user_id: int) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


class TestAlbumsEndpoint:
    
    async def test_anonymous_listing(self, client):
        response = await client.get("/albums/")
        
        assert response.status_code == 200
        data = response.json()
        assert [a["title"] for a in data] == ["Holidays", "Sunsets"]
        assert all("owner_name" not in a for a in data)
        assert all("password" not in a for a in data)
    
    async def test_logged_in_listing(self, client, seeded):
        response = await client.get("/albums/", headers=auth(seeded["friend"]))
        
        data = response.json()
        assert [a["title"] for a in data] == ["Holidays", "Shared with friend", "Sunsets"]
        assert {a["owner_name"] for a in data} == {"Olivia"}
    
    async def test_invalid_token_browses_anonymously(self, client):
        response = await client.get("/albums/", headers={"Authorization": "Bearer not-a-jwt"})
        
        assert response.status_code == 200
        assert [a["title"] for a in response.json()] == ["Holidays", "Sunsets"]
    
    async def test_unknown_user_browses_anonymously(self, client):
        response = await client.get("/albums/", headers=auth(4242))
        
        assert [a["title"] for a in response.json()] == ["Holidays", "Sunsets"]
    
    async def test_album_with_children(self, client, seeded):
        response = await client.get(f"/albums/{seeded['public']}")
        
        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Holidays"
        assert data["downloadable"] is True
        assert [child["title"] for child in data["albums"]] == ["Beach"]
    
    async def test_owner_sees_private_children(self, client, seeded):
        response = await client.get(f"/albums/{seeded['public']}", headers=auth(seeded["owner"]))
        
        assert [child["title"] for child in response.json()["albums"]] == ["Beach", "Private child"]
    
    async def test_invisible_album_is_not_found(self, client, seeded):
        response = await client.get(f"/albums/{seeded['private']}")
        
        assert response.status_code == 404
    
    async def test_locked_album_exposes_unlock_flags(self, client, seeded):
        response = await client.get(f"/albums/{seeded['locked']}", headers=auth(seeded["admin"]))
        
        data = response.json()
        assert data["has_password"] is True
        assert data["requires_link"] is True
        assert "password" not in data
    
    async def test_broken_setting_fails_closed(self, client, seeded, store_config):
        await store_config(single_library="maybe")
        
        response = await client.get("/albums/", headers=auth(seeded["friend"]))
        
        assert response.status_code == 500
        assert response.json()["detail"] == "Gallery configuration error"
    
    async def test_single_library_setting_is_read_from_database(self, client, seeded, store_config):
        await store_config(single_library="1")
        
        response = await client.get("/albums/", headers=auth(seeded["friend"]))
        
        data = response.json()
        assert "Locked" in [a["title"] for a in data]
        assert {a["owner_name"] for a in data} == {"Finn"}


class TestSearchEndpoint:
    
    async def test_anonymous_search(self, client, seeded):
        response = await client.get("/search/", params={"q": "sunset"})
        
        assert response.status_code == 200
        data = response.json()
        assert data["terms"] == ["sunset"]
        assert [p["id"] for p in data["photos"]] == [seeded["p_public"]]
    
    async def test_results_sorted_by_id(self, client, seeded):
        response = await client.get("/search/", params={"q": "sunset"}, headers=auth(seeded["admin"]))
        
        ids = [p["id"] for p in response.json()["photos"]]
        assert ids == sorted(ids)
        assert len(ids) == 5
    
    async def test_without_query_lists_visible_photos(self, client, seeded):
        response = await client.get("/search/")
        
        ids = {p["id"] for p in response.json()["photos"]}
        assert ids == {seeded["p_public"], seeded["p_child"]}
    
    async def test_public_photos_setting(self, client, seeded, store_config):
        await store_config(public_photos_hidden="0")
        
        response = await client.get("/search/", params={"q": "sunrise"})
        
        assert [p["id"] for p in response.json()["photos"]] == [seeded["p_unsorted_public"]]


class TestPlumbing:
    
    async def test_health(self, client):
        response = await client.get("/health")
        
        assert response.status_code == 200
        assert response.json()["status"] == "ok"
    
    async def test_request_id_is_echoed(self, client):
        response = await client.get("/albums/", headers={"X-Request-ID": "abc123"})
        
        assert response.headers["X-Request-ID"] == "abc123"
