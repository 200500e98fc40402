"""Namespace topology and workload placement admission.

Decides namespace and workload create/update requests at the orchestration
API boundary:

* Namespaces typed ``org`` or ``vdc`` must come from the management plane
  (``managed-by=ovim``) and satisfy the naming, label and parent rules.
* Pods, Deployments, StatefulSets, DaemonSets and VirtualMachines are never
  admitted into organization namespaces, and only into VDC namespaces that
  are themselves well formed.
* Any other kind is allowed.

Quota arithmetic is not checked here; placement enforces it when the VDC is
committed. A payload that cannot be decoded is a 400, never an allow.
"""

import json
import logging
from typing import Any, Optional, Tuple

from pydantic import ValidationError

from ....config.constants import (
    LABEL_TYPE,
    ResourceKind,
    WORKLOAD_KINDS,
    NamespaceType,
)
from ....core.exceptions import DecodeError, NamespaceLookupError
from ....core.value_objects import DenialReason
from ..entities.decision import AdmissionDecision
from ..entities.protocols import NamespaceLookup
from ..entities.review import (
    AdmissionResponse,
    AdmissionReview,
    AdmissionStatus,
    KubeObject,
)
from ..utils.topology import (
    existing_vdc_namespace_violation,
    is_managed,
    is_org_namespace_name,
    is_scoped_type,
    is_vdc_namespace_name,
    missing_platform_label,
    org_namespace_violation,
    parent_org_namespace,
    vdc_namespace_violation,
)

logger = logging.getLogger(__name__)

Violation = Tuple[DenialReason, str]

UNMANAGED_NAMESPACE_MESSAGE = "Organization and VDC namespaces can only be created by OVIM controllers"


def decode_object(kind: str, payload: Any) -> KubeObject:
    """Decode the object under review.

    Accepts raw JSON (bytes or str), an already parsed mapping, or a
    KubeObject.

    Raises:
        DecodeError: payload is missing or not a decodable object
    """
    if isinstance(payload, KubeObject):
        return payload
    if payload is None:
        raise DecodeError(f"{kind} object is missing from the request", kind=kind)

    try:
        if isinstance(payload, (bytes, bytearray, str)):
            return KubeObject.model_validate_json(payload)
        if isinstance(payload, dict):
            return KubeObject.model_validate(payload)
    except (ValidationError, json.JSONDecodeError) as e:
        raise DecodeError(f"failed to decode {kind}: {e}", kind=kind)

    raise DecodeError(
        f"failed to decode {kind}: unsupported payload type {type(payload).__name__}",
        kind=kind,
    )


class AdmissionWebhook:
    """Stateless admission decisions backed by live namespace lookups."""

    def __init__(self, namespace_lookup: NamespaceLookup):
        self._lookup = namespace_lookup

    async def decide(self, kind: str, namespace: str, payload: Any) -> AdmissionDecision:
        """Single entry point: allowed flag, message and status code."""
        try:
            if kind == ResourceKind.NAMESPACE.value:
                decision = await self._handle_namespace(payload)
            elif kind in WORKLOAD_KINDS:
                decision = await self._handle_workload(kind, namespace, payload)
            elif kind == ResourceKind.VIRTUAL_MACHINE.value:
                decision = await self._handle_virtual_machine(namespace, payload)
            else:
                logger.info(f"Unsupported resource kind {kind!r}, allowing")
                return AdmissionDecision.allow()
        except DecodeError as e:
            logger.warning(f"Rejecting undecodable {kind} in namespace {namespace!r}: {e.message}")
            return AdmissionDecision.bad_request(e.message)

        if decision.allowed:
            logger.info(f"Admission allowed: kind={kind} namespace={namespace!r}")
        else:
            logger.info(
                f"Admission denied: kind={kind} namespace={namespace!r} "
                f"reason={decision.reason.name}: {decision.message}"
            )
        return decision

    async def review(self, review: AdmissionReview) -> AdmissionReview:
        """Answer an AdmissionReview, echoing the request UID.

        Raises:
            DecodeError: the review carries no request
        """
        request = review.request
        if request is None:
            raise DecodeError("AdmissionReview has no request")

        decision = await self.decide(request.kind.kind, request.namespace, request.object_)
        return AdmissionReview(
            api_version=review.api_version,
            kind=review.kind,
            response=AdmissionResponse(
                uid=request.uid,
                allowed=decision.allowed,
                status=AdmissionStatus(code=decision.status_code, message=decision.message),
            ),
        )

    async def _handle_namespace(self, payload: Any) -> AdmissionDecision:
        obj = decode_object(ResourceKind.NAMESPACE.value, payload)
        name = obj.metadata.name
        labels = obj.metadata.labels

        if is_scoped_type(labels) and not is_managed(labels):
            return AdmissionDecision.deny(DenialReason.UNMANAGED_NAMESPACE, UNMANAGED_NAMESPACE_MESSAGE)

        if is_managed(labels):
            violation = await self._managed_namespace_violation(name, labels)
            if violation:
                reason, message = violation
                return AdmissionDecision.deny(reason, f"OVIM namespace validation failed: {message}")

        return AdmissionDecision.allow()

    async def _managed_namespace_violation(self, name: str, labels) -> Optional[Violation]:
        namespace_type = labels.get(LABEL_TYPE)

        if namespace_type == NamespaceType.ORG.value:
            message = org_namespace_violation(name, labels)
            if message:
                return DenialReason.INVALID_NAMESPACE_TOPOLOGY, message

        elif namespace_type == NamespaceType.VDC.value:
            message = vdc_namespace_violation(name, labels)
            if message:
                return DenialReason.INVALID_NAMESPACE_TOPOLOGY, message
            violation = await self._parent_violation(labels)
            if violation:
                return violation

        else:
            # Managed but neither org nor VDC scoped: no topology applies
            return None

        missing = missing_platform_label(labels)
        if missing:
            return DenialReason.MISSING_PLATFORM_LABEL, f"required label '{missing}' missing"
        return None

    async def _parent_violation(self, labels) -> Optional[Violation]:
        parent = parent_org_namespace(labels)
        try:
            found = await self._lookup.get_namespace(parent)
        except NamespaceLookupError as e:
            return (
                DenialReason.PARENT_NAMESPACE_NOT_FOUND,
                f"parent organization namespace {parent} not found: {e.message}",
            )
        if found is None:
            return DenialReason.PARENT_NAMESPACE_NOT_FOUND, f"parent organization namespace {parent} not found"
        return None

    async def _handle_workload(self, kind: str, namespace: str, payload: Any) -> AdmissionDecision:
        if kind == ResourceKind.POD.value:
            message = "Workloads are not allowed in organization namespaces. Use VDC namespaces instead."
        else:
            message = f"{kind} workloads are not allowed in organization namespaces. Use VDC namespaces instead."
        return await self._handle_placement(kind, namespace, payload, message)

    async def _handle_virtual_machine(self, namespace: str, payload: Any) -> AdmissionDecision:
        message = "Virtual Machines are not allowed in organization namespaces. Use VDC namespaces instead."
        return await self._handle_placement(
            ResourceKind.VIRTUAL_MACHINE.value, namespace, payload, message
        )

    async def _handle_placement(self, kind: str, namespace: str, payload: Any,
                                org_denial_message: str) -> AdmissionDecision:
        obj = decode_object(kind, payload)
        namespace = namespace or obj.metadata.namespace

        if is_org_namespace_name(namespace):
            return AdmissionDecision.deny(DenialReason.WORKLOAD_IN_ORG_NAMESPACE, org_denial_message)

        if is_vdc_namespace_name(namespace):
            message = await self._vdc_namespace_violation(namespace)
            if message:
                return AdmissionDecision.deny(
                    DenialReason.INVALID_VDC_NAMESPACE,
                    f"VDC namespace validation failed: {message}",
                )

        return AdmissionDecision.allow()

    async def _vdc_namespace_violation(self, namespace: str) -> Optional[str]:
        try:
            labels = await self._lookup.get_namespace(namespace)
        except NamespaceLookupError as e:
            return f"VDC namespace {namespace} not found or inaccessible: {e.message}"
        if labels is None:
            return f"VDC namespace {namespace} not found or inaccessible"
        return existing_vdc_namespace_violation(namespace, labels)
