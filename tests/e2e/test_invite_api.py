"""End-to-end tests for the invite HTTP API.

Requests run in-process against the app with the mocked container, so no
database is needed. Seeding and requests share one event loop.
"""

from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from tenantlink.config import Settings
from tenantlink.interface.api.app import create_app
from tenantlink.util.jwt import create_token
from tests.conftest import seed_profile, seed_property
from tests.di import build_test_container


@pytest_asyncio.fixture
async def env():
    """App wired to a test container, plus that container for seeding."""
    container = build_test_container()
    app_instance = create_app(container)
    transport = ASGITransport(app=app_instance)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client, container
    await container.close()


def auth(user_id) -> dict[str, str]:
    """Session cookie header for a user."""
    token = create_token(str(user_id), Settings().auth)
    return {"Cookie": f"auth_token={token}"}


async def seed(container):
    async with container() as request_container:
        owner_id, property_id = await seed_property(request_container)
        tenant_a = await seed_profile(request_container)
        tenant_b = await seed_profile(request_container)
    return owner_id, property_id, tenant_a, tenant_b


async def create_invite(client, owner_id, property_id, **body) -> dict:
    response = await client.post(
        f"/properties/{property_id}/invites", json=body, headers=auth(owner_id)
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestHealth:
    @pytest.mark.asyncio
    async def test_health(self, env):
        client, _ = env

        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_app_serves_requests_from_given_container(self):
        """One request scope per request, opened on the container passed in."""
        container = build_test_container()

        app_instance = create_app(container)

        middleware = [m.cls.__name__ for m in app_instance.user_middleware]
        assert middleware.count("ContainerMiddleware") == 1
        assert app_instance.state.dishka_container is container


class TestInviteLifecycle:
    """Create, validate, accept and re-validate over HTTP."""

    @pytest.mark.asyncio
    async def test_single_use_invite_flow(self, env):
        # Arrange
        client, container = env
        owner_id, property_id, tenant_a, tenant_b = await seed(container)

        # Act & Assert - owner creates
        created = await create_invite(
            client,
            owner_id,
            property_id,
            delivery_method="email",
            intended_email="tenant@example.com",
        )
        token = created["token"]
        assert len(token) == 12

        # Anyone can look the token up
        response = await client.post("/invites/validate", json={"token": token})
        assert response.status_code == 200
        body = response.json()
        assert body["valid"] is True
        assert body["property"]["property_id"] == str(property_id)
        assert body["property"]["owner_display_name"] == "Jane Landlord"
        assert body["intended_email"] == "tenant@example.com"
        assert "owner_id" not in body["property"]

        # Tenant A redeems it
        response = await client.post(
            "/invites/accept", json={"token": token}, headers=auth(tenant_a)
        )
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

        # Repeating is harmless
        response = await client.post(
            "/invites/accept", json={"token": token}, headers=auth(tenant_a)
        )
        assert response.json()["status"] == "already_linked"

        # The token is spent for everyone else
        response = await client.post("/invites/validate", json={"token": token})
        assert response.json() == {"valid": False}

        response = await client.post(
            "/invites/accept", json={"token": token}, headers=auth(tenant_b)
        )
        assert response.status_code == 200
        assert response.json() == {"status": "invalid", "property": None}

    @pytest.mark.asyncio
    async def test_garbage_token_shape(self, env):
        client, _ = env

        response = await client.post("/invites/validate", json={"token": "x' OR 1=1"})

        assert response.status_code == 200
        assert response.json() == {"valid": False}

    @pytest.mark.asyncio
    async def test_validation_throttled(self, env):
        client, _ = env
        for _ in range(20):
            await client.post("/invites/validate", json={"token": "zzzzzzzzzzzz"})

        response = await client.post("/invites/validate", json={"token": "zzzzzzzzzzzz"})

        assert response.status_code == 429
        assert int(response.headers["Retry-After"]) >= 1

    @pytest.mark.asyncio
    async def test_accept_requires_auth(self, env):
        client, _ = env

        response = await client.post("/invites/accept", json={"token": "zzzzzzzzzzzz"})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_accept_rejects_bad_cookie(self, env):
        client, _ = env

        response = await client.post(
            "/invites/accept",
            json={"token": "zzzzzzzzzzzz"},
            headers={"Cookie": "auth_token=invalid-token"},
        )

        assert response.status_code == 401


class TestCreateInviteEndpoint:
    @pytest.mark.asyncio
    async def test_create_requires_auth(self, env):
        client, container = env
        _, property_id, _, _ = await seed(container)

        response = await client.post(f"/properties/{property_id}/invites", json={})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_create_by_non_owner_forbidden(self, env):
        client, container = env
        _, property_id, tenant_a, _ = await seed(container)

        response = await client.post(
            f"/properties/{property_id}/invites", json={}, headers=auth(tenant_a)
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {"delivery_method": "email"},
            {"max_uses": 0},
            {"max_uses": 101},
        ],
    )
    async def test_create_rejects_bad_input(self, env, body):
        client, container = env
        owner_id, property_id, _, _ = await seed(container)

        response = await client.post(
            f"/properties/{property_id}/invites", json=body, headers=auth(owner_id)
        )

        assert response.status_code == 400


class TestManageInvites:
    @pytest.mark.asyncio
    async def test_list_never_exposes_tokens(self, env):
        client, container = env
        owner_id, property_id, _, _ = await seed(container)
        created = await create_invite(client, owner_id, property_id, max_uses=3)

        response = await client.get(
            f"/properties/{property_id}/invites", headers=auth(owner_id)
        )

        assert response.status_code == 200
        [item] = response.json()["invites"]
        assert item["invite_id"] == created["invite_id"]
        assert item["state"] == "active"
        assert item["max_uses"] == 3
        assert created["token"] not in response.text
        assert "token_hash" not in item

    @pytest.mark.asyncio
    async def test_revoke_is_idempotent(self, env):
        client, container = env
        owner_id, property_id, _, _ = await seed(container)
        created = await create_invite(client, owner_id, property_id)

        first = await client.delete(
            f"/invites/{created['invite_id']}", headers=auth(owner_id)
        )
        second = await client.delete(
            f"/invites/{created['invite_id']}", headers=auth(owner_id)
        )

        assert first.status_code == 200
        assert second.json() == first.json()

        response = await client.post(
            "/invites/validate", json={"token": created["token"]}
        )
        assert response.json() == {"valid": False}

    @pytest.mark.asyncio
    async def test_revoke_by_stranger_forbidden(self, env):
        client, container = env
        owner_id, property_id, tenant_a, _ = await seed(container)
        created = await create_invite(client, owner_id, property_id)

        response = await client.delete(
            f"/invites/{created['invite_id']}", headers=auth(tenant_a)
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_revoke_unknown_invite(self, env):
        client, container = env
        owner_id, _, _, _ = await seed(container)

        response = await client.delete(f"/invites/{uuid4()}", headers=auth(owner_id))

        assert response.status_code == 404
