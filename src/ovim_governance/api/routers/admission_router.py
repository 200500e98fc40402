"""Validating admission webhook endpoints.

Both paths take an ``admission.k8s.io/v1`` AdmissionReview and answer with
one echoing the request UID. A body that is not an AdmissionReview at all
gets HTTP 400 through the DecodeError handler.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ...core.exceptions import DecodeError
from ...features.admission import AdmissionWebhook
from ...features.admission.entities import AdmissionReview
from ..dependencies import get_admission_webhook

router = APIRouter(
    tags=["Admission"],
    responses={400: {"description": "Request body is not a decodable AdmissionReview"}},
)


async def _handle_review(request: Request, webhook: AdmissionWebhook) -> JSONResponse:
    body = await request.body()
    try:
        review = AdmissionReview.model_validate_json(body)
    except ValidationError as e:
        raise DecodeError(f"invalid AdmissionReview: {e.errors()[0]['msg']}")

    result = await webhook.review(review)
    return JSONResponse(content=result.to_wire())


@router.post("/validate-workloads", summary="Validate workload placement")
async def validate_workloads(
    request: Request,
    webhook: AdmissionWebhook = Depends(get_admission_webhook),
) -> JSONResponse:
    """Pods, Deployments, StatefulSets, DaemonSets and VirtualMachines."""
    return await _handle_review(request, webhook)


@router.post("/validate-namespaces", summary="Validate namespace topology")
async def validate_namespaces(
    request: Request,
    webhook: AdmissionWebhook = Depends(get_admission_webhook),
) -> JSONResponse:
    return await _handle_review(request, webhook)
