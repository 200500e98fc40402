"""FastAPI dependencies resolving services from the application container."""

from fastapi import Request

from ..features.admission import AdmissionWebhook
from ..features.placement import PlacementService
from ..features.quotas import QuotaLedgerService
from ..features.utilization import UtilizationService
from .container import GovernanceContainer


def get_container(request: Request) -> GovernanceContainer:
    return request.app.state.container


def get_utilization_service(request: Request) -> UtilizationService:
    return get_container(request).utilization_service


def get_ledger_service(request: Request) -> QuotaLedgerService:
    return get_container(request).ledger_service


def get_placement_service(request: Request) -> PlacementService:
    return get_container(request).placement_service


def get_admission_webhook(request: Request) -> AdmissionWebhook:
    return get_container(request).admission_webhook
