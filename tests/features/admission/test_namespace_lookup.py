"""Tests for namespace topology helpers and lookup adapters."""

import httpx
import pytest

from ovim_governance.core.exceptions import NamespaceLookupError
from ovim_governance.features.admission import InMemoryNamespaceLookup, KubeNamespaceLookup
from ovim_governance.features.admission.utils.topology import (
    is_org_namespace_name,
    is_vdc_namespace_name,
    missing_platform_label,
    org_namespace_labels,
    org_namespace_name,
    parent_org_namespace,
    vdc_namespace_labels,
    vdc_namespace_name,
)


class TestTopology:

    def test_names(self):
        assert org_namespace_name("Acme") == "org-acme"
        assert vdc_namespace_name("Acme", "Dev") == "vdc-acme-dev"

    def test_generated_labels_pass_platform_check(self):
        assert missing_platform_label(org_namespace_labels("acme")) is None
        assert missing_platform_label(vdc_namespace_labels("acme", "dev")) is None

    def test_missing_platform_label_reports_first_gap(self):
        assert missing_platform_label({}) == "app.kubernetes.io/name"
        assert missing_platform_label({"app.kubernetes.io/name": "ovim"}) == "app.kubernetes.io/managed-by"

    def test_namespace_classification(self):
        assert is_org_namespace_name("org-acme")
        assert not is_org_namespace_name("organization")
        assert is_vdc_namespace_name("vdc-acme-dev")
        assert not is_vdc_namespace_name("default")

    def test_parent_org_namespace(self):
        assert parent_org_namespace(vdc_namespace_labels("acme", "dev")) == "org-acme"


class TestInMemoryNamespaceLookup:

    @pytest.mark.asyncio
    async def test_put_get_remove(self):
        lookup = InMemoryNamespaceLookup()
        await lookup.put_namespace("org-acme", {"org": "acme"})

        assert await lookup.get_namespace("org-acme") == {"org": "acme"}
        await lookup.remove_namespace("org-acme")
        assert await lookup.get_namespace("org-acme") is None
        assert lookup.lookups == 2


class TestKubeNamespaceLookup:

    @staticmethod
    def lookup_with(handler):
        return KubeNamespaceLookup(
            "https://kube.test/", token="sa-token", transport=httpx.MockTransport(handler)
        )

    @pytest.mark.asyncio
    async def test_returns_labels(self):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["auth"] = request.headers.get("authorization")
            return httpx.Response(200, json={"metadata": {"name": "org-acme", "labels": {"org": "acme"}}})

        lookup = self.lookup_with(handler)
        labels = await lookup.get_namespace("org-acme")
        await lookup.close()

        assert labels == {"org": "acme"}
        assert seen == {"path": "/api/v1/namespaces/org-acme", "auth": "Bearer sa-token"}

    @pytest.mark.asyncio
    async def test_namespace_without_labels(self):
        lookup = self.lookup_with(lambda request: httpx.Response(200, json={"metadata": {"name": "x"}}))
        assert await lookup.get_namespace("x") == {}

    @pytest.mark.asyncio
    async def test_not_found_is_none(self):
        lookup = self.lookup_with(lambda request: httpx.Response(404, json={"kind": "Status"}))
        assert await lookup.get_namespace("org-gone") is None

    @pytest.mark.asyncio
    async def test_server_error_raises(self):
        lookup = self.lookup_with(lambda request: httpx.Response(503))

        with pytest.raises(NamespaceLookupError) as exc_info:
            await lookup.get_namespace("org-acme")
        assert exc_info.value.details["status_code"] == 503

    @pytest.mark.asyncio
    async def test_timeout_raises(self):
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(NamespaceLookupError):
            await self.lookup_with(handler).get_namespace("org-acme")

    @pytest.mark.asyncio
    async def test_invalid_json_raises(self):
        lookup = self.lookup_with(lambda request: httpx.Response(200, content=b"<html>"))

        with pytest.raises(NamespaceLookupError):
            await lookup.get_namespace("org-acme")

    def test_from_settings_without_service_account(self, settings, tmp_path):
        settings.kube_token_path = str(tmp_path / "missing-token")
        settings.kube_ca_path = str(tmp_path / "missing-ca.crt")

        lookup = KubeNamespaceLookup.from_settings(settings)

        assert "authorization" not in lookup._client.headers
