"""Tests for namespace topology and workload placement admission."""

import pytest
from unittest.mock import AsyncMock

from ovim_governance.core.exceptions import DecodeError, NamespaceLookupError
from ovim_governance.core.value_objects import DenialReason
from ovim_governance.features.admission import AdmissionWebhook, AdmissionReview
from ovim_governance.features.admission.services.admission_webhook import (
    UNMANAGED_NAMESPACE_MESSAGE,
    decode_object,
)
from ovim_governance.features.admission.utils.topology import (
    org_namespace_labels,
    vdc_namespace_labels,
)


def namespace(name, labels=None):
    return {"apiVersion": "v1", "kind": "Namespace", "metadata": {"name": name, "labels": labels or {}}}


def workload(kind, name="app", ns=""):
    return {"kind": kind, "metadata": {"name": name, "namespace": ns}}


class TestDecodeObject:

    def test_accepts_json_and_mappings(self):
        assert decode_object("Pod", b'{"metadata": {"name": "p"}}').metadata.name == "p"
        assert decode_object("Pod", {"metadata": {"namespace": "x"}}).metadata.namespace == "x"

    def test_null_metadata_fields_decode_as_empty(self):
        obj = decode_object("Pod", {"metadata": {"name": "p", "namespace": None, "labels": None}})

        assert obj.metadata.labels == {}
        assert obj.metadata.namespace == ""
        assert decode_object("Pod", b'{"metadata": null}').metadata.name == ""

    @pytest.mark.parametrize("payload", [None, b"{not json", "[]", 42, ["pod"]])
    def test_rejects_undecodable(self, payload):
        with pytest.raises(DecodeError):
            decode_object("Pod", payload)


class TestNamespaceAdmission:

    @pytest.mark.asyncio
    async def test_unmanaged_scoped_namespace_denied(self, admission_webhook):
        decision = await admission_webhook.decide("Namespace", "", namespace("org-evil", {"type": "org"}))

        assert not decision.allowed
        assert decision.status_code == 403
        assert decision.reason is DenialReason.UNMANAGED_NAMESPACE
        assert decision.message == UNMANAGED_NAMESPACE_MESSAGE

    @pytest.mark.asyncio
    async def test_managed_org_namespace_allowed(self, admission_webhook, namespace_lookup):
        decision = await admission_webhook.decide(
            "Namespace", "", namespace("org-globex", org_namespace_labels("globex"))
        )

        assert decision.allowed
        assert namespace_lookup.lookups == 0

    @pytest.mark.asyncio
    async def test_org_namespace_prefix_required(self, admission_webhook):
        decision = await admission_webhook.decide(
            "Namespace", "", namespace("globex", org_namespace_labels("globex"))
        )

        assert decision.reason is DenialReason.INVALID_NAMESPACE_TOPOLOGY
        assert decision.message == (
            "OVIM namespace validation failed: organization namespace must have 'org-' prefix"
        )

    @pytest.mark.asyncio
    async def test_org_namespace_requires_org_label(self, admission_webhook):
        labels = org_namespace_labels("globex")
        del labels["org"]

        decision = await admission_webhook.decide("Namespace", "", namespace("org-globex", labels))

        assert decision.message == (
            "OVIM namespace validation failed: organization namespace missing 'org' label"
        )

    @pytest.mark.asyncio
    async def test_vdc_namespace_with_parent_allowed(self, admission_webhook, namespace_lookup):
        decision = await admission_webhook.decide(
            "Namespace", "", namespace("vdc-acme-dev", vdc_namespace_labels("acme", "dev"))
        )

        assert decision.allowed
        assert namespace_lookup.lookups == 1

    @pytest.mark.asyncio
    async def test_vdc_namespace_allowed_only_after_parent_exists(self, namespace_lookup):
        webhook = AdmissionWebhook(namespace_lookup)
        labels = {
            "type": "vdc",
            "managed-by": "ovim",
            "org": "acme",
            "vdc": "test",
            "app.kubernetes.io/name": "ovim",
            "app.kubernetes.io/managed-by": "ovim-controller",
        }
        obj = namespace("vdc-acme-test", labels)

        assert (await webhook.decide("Namespace", "", obj)).allowed

        await namespace_lookup.remove_namespace("org-acme")
        decision = await webhook.decide("Namespace", "", obj)
        assert not decision.allowed
        assert "parent organization namespace org-acme not found" in decision.message

    @pytest.mark.asyncio
    async def test_vdc_namespace_requires_labels(self, admission_webhook):
        labels = vdc_namespace_labels("acme", "dev")
        del labels["vdc"]

        decision = await admission_webhook.decide("Namespace", "", namespace("vdc-acme-dev", labels))

        assert decision.message == (
            "OVIM namespace validation failed: VDC namespace missing 'org' or 'vdc' labels"
        )

    @pytest.mark.asyncio
    async def test_vdc_namespace_prefix_required(self, admission_webhook):
        decision = await admission_webhook.decide(
            "Namespace", "", namespace("acme-dev", vdc_namespace_labels("acme", "dev"))
        )

        assert decision.message == "OVIM namespace validation failed: VDC namespace must have 'vdc-' prefix"

    @pytest.mark.asyncio
    async def test_vdc_namespace_missing_parent(self, admission_webhook):
        decision = await admission_webhook.decide(
            "Namespace", "", namespace("vdc-globex-dev", vdc_namespace_labels("globex", "dev"))
        )

        assert decision.reason is DenialReason.PARENT_NAMESPACE_NOT_FOUND
        assert decision.message == (
            "OVIM namespace validation failed: parent organization namespace org-globex not found"
        )

    @pytest.mark.asyncio
    async def test_parent_lookup_failure_denies(self):
        lookup = AsyncMock()
        lookup.get_namespace.side_effect = NamespaceLookupError("timed out")
        webhook = AdmissionWebhook(lookup)

        decision = await webhook.decide(
            "Namespace", "", namespace("vdc-acme-dev", vdc_namespace_labels("acme", "dev"))
        )

        assert not decision.allowed
        assert decision.message.endswith("parent organization namespace org-acme not found: timed out")

    @pytest.mark.asyncio
    async def test_platform_label_required(self, admission_webhook):
        labels = org_namespace_labels("globex")
        del labels["app.kubernetes.io/name"]

        decision = await admission_webhook.decide("Namespace", "", namespace("org-globex", labels))

        assert decision.reason is DenialReason.MISSING_PLATFORM_LABEL
        assert decision.message == (
            "OVIM namespace validation failed: required label 'app.kubernetes.io/name' missing"
        )

    @pytest.mark.asyncio
    async def test_plain_namespace_allowed(self, admission_webhook, namespace_lookup):
        decision = await admission_webhook.decide("Namespace", "", namespace("team-a"))

        assert decision.allowed
        assert namespace_lookup.lookups == 0

    @pytest.mark.asyncio
    async def test_namespace_with_null_labels_allowed(self, admission_webhook, namespace_lookup):
        decision = await admission_webhook.decide(
            "Namespace", "", b'{"kind": "Namespace", "metadata": {"name": "plain", "labels": null}}'
        )

        assert decision.allowed
        assert namespace_lookup.lookups == 0

    @pytest.mark.asyncio
    async def test_managed_namespace_without_type_allowed(self, admission_webhook):
        decision = await admission_webhook.decide(
            "Namespace", "", namespace("ovim-system", {"managed-by": "ovim"})
        )
        assert decision.allowed

    @pytest.mark.asyncio
    async def test_undecodable_namespace_is_bad_request(self, admission_webhook):
        decision = await admission_webhook.decide("Namespace", "", b"\x00garbage")

        assert not decision.allowed
        assert decision.status_code == 400
        assert decision.is_decode_error
        assert decision.reason is None


class TestWorkloadAdmission:

    @pytest.mark.asyncio
    async def test_pod_in_org_namespace_denied(self, admission_webhook, namespace_lookup):
        decision = await admission_webhook.decide("Pod", "org-acme", workload("Pod"))

        assert decision.reason is DenialReason.WORKLOAD_IN_ORG_NAMESPACE
        assert decision.message == (
            "Workloads are not allowed in organization namespaces. Use VDC namespaces instead."
        )
        assert namespace_lookup.lookups == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("kind", ["Deployment", "StatefulSet", "DaemonSet"])
    async def test_controllers_in_org_namespace_denied(self, admission_webhook, kind):
        decision = await admission_webhook.decide(kind, "org-acme", workload(kind))

        assert decision.message == (
            f"{kind} workloads are not allowed in organization namespaces. Use VDC namespaces instead."
        )

    @pytest.mark.asyncio
    async def test_virtual_machine_in_org_namespace_denied(self, admission_webhook):
        decision = await admission_webhook.decide("VirtualMachine", "org-acme", workload("VirtualMachine"))

        assert decision.message == (
            "Virtual Machines are not allowed in organization namespaces. Use VDC namespaces instead."
        )

    @pytest.mark.asyncio
    async def test_workload_in_vdc_namespace_allowed(self, admission_webhook, namespace_lookup):
        decision = await admission_webhook.decide("Pod", "vdc-acme-test", workload("Pod"))

        assert decision.allowed
        assert namespace_lookup.lookups == 1

    @pytest.mark.asyncio
    async def test_missing_vdc_namespace_denied(self, admission_webhook):
        decision = await admission_webhook.decide("Deployment", "vdc-acme-gone", workload("Deployment"))

        assert decision.reason is DenialReason.INVALID_VDC_NAMESPACE
        assert decision.message == (
            "VDC namespace validation failed: VDC namespace vdc-acme-gone not found or inaccessible"
        )

    @pytest.mark.asyncio
    async def test_unmanaged_vdc_namespace_denied(self, admission_webhook, namespace_lookup):
        await namespace_lookup.put_namespace("vdc-rogue", {"type": "vdc"})

        decision = await admission_webhook.decide("Pod", "vdc-rogue", workload("Pod"))

        assert decision.message == (
            "VDC namespace validation failed: namespace vdc-rogue is not a properly managed VDC namespace"
        )

    @pytest.mark.asyncio
    async def test_vdc_namespace_without_org_denied(self, admission_webhook, namespace_lookup):
        await namespace_lookup.put_namespace("vdc-orphan", {"type": "vdc", "managed-by": "ovim"})

        decision = await admission_webhook.decide("Pod", "vdc-orphan", workload("Pod"))

        assert decision.message == (
            "VDC namespace validation failed: VDC namespace vdc-orphan missing organization reference"
        )

    @pytest.mark.asyncio
    async def test_other_namespaces_allowed_without_lookup(self, admission_webhook, namespace_lookup):
        decision = await admission_webhook.decide("Pod", "default", workload("Pod"))

        assert decision.allowed
        assert namespace_lookup.lookups == 0

    @pytest.mark.asyncio
    async def test_pod_with_null_labels_is_placed_normally(self, admission_webhook):
        pod = {"kind": "Pod", "metadata": {"name": "app", "namespace": None, "labels": None}}

        assert (await admission_webhook.decide("Pod", "vdc-acme-test", pod)).allowed
        denied = await admission_webhook.decide("Pod", "org-acme", pod)
        assert denied.reason is DenialReason.WORKLOAD_IN_ORG_NAMESPACE

    @pytest.mark.asyncio
    async def test_namespace_falls_back_to_object_metadata(self, admission_webhook):
        decision = await admission_webhook.decide("Pod", "", workload("Pod", ns="org-acme"))
        assert decision.reason is DenialReason.WORKLOAD_IN_ORG_NAMESPACE

    @pytest.mark.asyncio
    async def test_unknown_kind_allowed(self, admission_webhook, namespace_lookup):
        decision = await admission_webhook.decide("ConfigMap", "org-acme", b"not even json")

        assert decision.allowed
        assert namespace_lookup.lookups == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("kind", ["Pod", "Deployment", "StatefulSet", "DaemonSet", "VirtualMachine"])
    async def test_undecodable_workload_is_bad_request(self, admission_webhook, kind):
        decision = await admission_webhook.decide(kind, "org-acme", b"{")

        assert decision.status_code == 400
        assert not decision.allowed


class TestAdmissionReview:

    @pytest.mark.asyncio
    async def test_review_echoes_uid(self, admission_webhook):
        review = AdmissionReview.model_validate({
            "apiVersion": "admission.k8s.io/v1",
            "kind": "AdmissionReview",
            "request": {
                "uid": "705ab4f5-6393-11e8-b7cc-42010a800002",
                "kind": {"group": "", "version": "v1", "kind": "Pod"},
                "namespace": "org-acme",
                "operation": "CREATE",
                "object": workload("Pod", ns="org-acme"),
            },
        })

        answer = (await admission_webhook.review(review)).to_wire()

        assert answer["apiVersion"] == "admission.k8s.io/v1"
        assert answer["kind"] == "AdmissionReview"
        assert answer["response"]["uid"] == "705ab4f5-6393-11e8-b7cc-42010a800002"
        assert answer["response"]["allowed"] is False
        assert answer["response"]["status"]["code"] == 403
        assert "request" not in answer

    @pytest.mark.asyncio
    async def test_review_without_request(self, admission_webhook):
        with pytest.raises(DecodeError):
            await admission_webhook.review(AdmissionReview())
