"""Tests for the HTTP surface."""

import httpx
import pytest
import pytest_asyncio
from unittest.mock import AsyncMock, MagicMock

from ovim_governance.api.container import GovernanceContainer
from ovim_governance.app import create_app


@pytest.fixture
def container(settings, namespace_lookup):
    return GovernanceContainer.in_memory(settings, namespace_lookup=namespace_lookup)


@pytest_asyncio.fixture
async def client(settings, container, make_zone):
    await container.zone_repository.create(make_zone())
    app = create_app(settings, container=container)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


def admission_review(kind, ns, obj, uid="req-1"):
    return {
        "apiVersion": "admission.k8s.io/v1",
        "kind": "AdmissionReview",
        "request": {
            "uid": uid,
            "kind": {"group": "", "version": "v1", "kind": kind},
            "namespace": ns,
            "operation": "CREATE",
            "object": obj,
        },
    }


class TestAdmissionRoutes:

    @pytest.mark.asyncio
    async def test_workload_denied(self, client):
        body = admission_review("Pod", "org-acme", {"kind": "Pod", "metadata": {"name": "p"}})

        response = await client.post("/validate-workloads", json=body)

        assert response.status_code == 200
        answer = response.json()["response"]
        assert answer["uid"] == "req-1"
        assert answer["allowed"] is False
        assert answer["status"]["code"] == 403

    @pytest.mark.asyncio
    async def test_namespace_allowed(self, client):
        body = admission_review("Namespace", "", {"kind": "Namespace", "metadata": {"name": "team-a"}})

        response = await client.post("/validate-namespaces", json=body)

        assert response.json()["response"]["allowed"] is True

    @pytest.mark.asyncio
    async def test_undecodable_object_answered_with_400_status(self, client):
        body = admission_review("Pod", "org-acme", "not-an-object")

        response = await client.post("/validate-workloads", json=body)

        answer = response.json()["response"]
        assert answer["allowed"] is False
        assert answer["status"]["code"] == 400

    @pytest.mark.asyncio
    async def test_invalid_body_is_400(self, client):
        response = await client.post("/validate-workloads", content=b"{broken")

        assert response.status_code == 400
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_review_without_request_is_400(self, client):
        response = await client.post(
            "/validate-namespaces", json={"apiVersion": "admission.k8s.io/v1", "kind": "AdmissionReview"}
        )
        assert response.status_code == 400


class TestQuotaRoutes:

    @pytest.mark.asyncio
    async def test_quota_lifecycle(self, client):
        put = await client.put(
            "/api/v1/organizations/acme/zones/zone-a/quota",
            json={"cpu_quota": 40, "memory_quota": 160, "storage_quota": 800},
        )
        assert put.status_code == 200
        assert put.json()["zone_name"] == "zone-a"

        get = await client.get("/api/v1/organizations/acme/zones/zone-a/quota")
        assert get.json()["cpu_quota"] == 40

        zones = await client.get("/api/v1/organizations/acme/zones")
        assert zones.json()["zones"][0]["remaining"] == {"cpu": 40, "memory": 160, "storage": 800}

        delete = await client.delete("/api/v1/organizations/acme/zones/zone-a/quota")
        assert delete.status_code == 204

        missing = await client.get("/api/v1/organizations/acme/zones/zone-a/quota")
        assert missing.status_code == 404

    @pytest.mark.asyncio
    async def test_quota_above_zone_quota_rejected(self, client):
        response = await client.put(
            "/api/v1/organizations/acme/zones/zone-a/quota",
            json={"cpu_quota": 81, "memory_quota": 0, "storage_quota": 0},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "cpu quota exceeds zone quota"

    @pytest.mark.asyncio
    async def test_quota_for_unknown_zone(self, client):
        response = await client.put(
            "/api/v1/organizations/acme/zones/zone-x/quota",
            json={"cpu_quota": 1, "memory_quota": 1, "storage_quota": 1},
        )
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_negative_quota_fails_validation(self, client):
        response = await client.put(
            "/api/v1/organizations/acme/zones/zone-a/quota",
            json={"cpu_quota": -1, "memory_quota": 1, "storage_quota": 1},
        )
        assert response.status_code == 422


class TestPlacementAndUtilizationRoutes:

    @pytest.mark.asyncio
    async def test_accommodate(self, client, container, make_vdc):
        await client.put(
            "/api/v1/organizations/acme/zones/zone-a/quota",
            json={"cpu_quota": 40, "memory_quota": 160, "storage_quota": 800},
        )
        await container.vdc_repository.create(make_vdc("v1", cpu=20, memory=80, storage=400))

        allowed = await client.post(
            "/api/v1/organizations/acme/zones/zone-a/accommodate",
            json={"cpu": 15, "memory": 40, "storage": 200},
        )
        denied = await client.post(
            "/api/v1/organizations/acme/zones/zone-a/accommodate",
            json={"cpu": 25, "memory": 40, "storage": 200},
        )

        assert allowed.json()["allowed"] is True
        assert denied.json()["reason"] == "ORGANIZATION_QUOTA_EXCEEDED"
        assert denied.json()["message"] == "organization quota exceeded: cpu 45 > 40"

    @pytest.mark.asyncio
    async def test_zone_utilization(self, client, container, make_vdc):
        await container.vdc_repository.create(make_vdc("v1", cpu=40, memory=200, storage=800))

        listing = await client.get("/api/v1/zones/utilization")
        single = await client.get("/api/v1/zones/zone-a/utilization")

        assert listing.status_code == 200
        assert listing.json()[0]["id"] == "zone-a"
        view = single.json()
        assert view["used"] == {"cpu": 40, "memory": 200, "storage": 800}
        assert view["utilization_percent"] == {"cpu": 50.0, "memory": 50.0, "storage": 50.0}
        assert view["available"] == {"cpu": 40, "memory": 200, "storage": 800}

    @pytest.mark.asyncio
    async def test_unknown_zone_utilization(self, client):
        response = await client.get("/api/v1/zones/zone-x/utilization")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_healthz(self, client):
        response = await client.get("/healthz")
        assert response.json()["status"] == "ok"

    @pytest.mark.asyncio
    async def test_healthz_reports_database_outage(self, client, container):
        container.database = MagicMock()
        container.database.health_check = AsyncMock(return_value=False)

        response = await client.get("/healthz")

        assert response.status_code == 503
        assert response.json()["database"] == "unavailable"

    @pytest.mark.asyncio
    async def test_healthz_with_healthy_database(self, client, container):
        container.database = MagicMock()
        container.database.health_check = AsyncMock(return_value=True)

        response = await client.get("/healthz")

        assert response.status_code == 200
        container.database.health_check.assert_awaited_once()
