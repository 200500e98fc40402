"""Pytest configuration and fixtures for ovim-governance tests."""

import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock

from ovim_governance.config.settings import GovernanceSettings
from ovim_governance.features.admission import AdmissionWebhook, InMemoryNamespaceLookup
from ovim_governance.features.admission.utils.topology import (
    org_namespace_labels,
    vdc_namespace_labels,
)
from ovim_governance.features.placement import PlacementCoordinator, PlacementService
from ovim_governance.features.quotas import (
    InMemoryQuotaLedgerRepository,
    OrganizationZoneQuota,
    QuotaLedgerService,
)
from ovim_governance.features.utilization import UtilizationAggregator, UtilizationService
from ovim_governance.features.vdcs import InMemoryVDCRepository, VirtualDataCenter
from ovim_governance.features.zones import InMemoryZoneRepository, Zone


@pytest.fixture
def mock_database_repository():
    """Mock database manager for repository tests."""
    mock_db = AsyncMock()
    mock_db.fetchrow = AsyncMock()
    mock_db.fetch = AsyncMock()
    return mock_db


@pytest.fixture
def settings():
    """Settings isolated from the process environment."""
    return GovernanceSettings(
        _env_file=None,
        environment="testing",
        storage_backend="memory",
        namespace_lookup_backend="memory",
        redis_url=None,
    )


@pytest.fixture
def make_zone():
    """Factory for zones with the reference capacity and quota."""
    def _make(zone_id="zone-a", name=None, **overrides):
        values = dict(
            id=zone_id,
            name=name or zone_id,
            cluster_name=f"{zone_id}-cluster",
            api_url=f"https://{zone_id}.example.com:6443",
            region="eu-west",
            cloud_provider="baremetal",
            node_count=3,
            cpu_capacity=100,
            memory_capacity=512,
            storage_capacity=2000,
            cpu_quota=80,
            memory_quota=400,
            storage_quota=1600,
        )
        values.update(overrides)
        return Zone(**values)
    return _make


@pytest.fixture
def make_vdc():
    """Factory for VDCs."""
    def _make(vdc_id, org_id="acme", zone_id="zone-a", cpu=0, memory=0, storage=0,
              phase="Active", **overrides):
        return VirtualDataCenter(
            id=vdc_id,
            name=overrides.pop("name", vdc_id),
            org_id=org_id,
            zone_id=zone_id,
            phase=phase,
            cpu_quota=cpu,
            memory_quota=memory,
            storage_quota=storage,
            **overrides,
        )
    return _make


@pytest.fixture
def zone_repository():
    return InMemoryZoneRepository()


@pytest.fixture
def vdc_repository():
    return InMemoryVDCRepository()


@pytest.fixture
def ledger_repository():
    return InMemoryQuotaLedgerRepository()


@pytest.fixture
def aggregator():
    return UtilizationAggregator()


@pytest.fixture
def ledger_service(ledger_repository, zone_repository, vdc_repository, aggregator):
    return QuotaLedgerService(ledger_repository, zone_repository, vdc_repository, aggregator)


@pytest.fixture
def utilization_service(zone_repository, vdc_repository, ledger_service, aggregator):
    return UtilizationService(zone_repository, vdc_repository, ledger_service, aggregator=aggregator)


@pytest.fixture
def placement_service(zone_repository, ledger_repository, vdc_repository, aggregator):
    return PlacementService(zone_repository, ledger_repository, vdc_repository, aggregator)


@pytest.fixture
def placement_coordinator(placement_service, vdc_repository):
    return PlacementCoordinator(placement_service, vdc_repository)


@pytest.fixture
def grant():
    """Factory for ledger rows."""
    def _make(org_id="acme", zone_id="zone-a", cpu=40, memory=160, storage=800, is_allowed=True):
        return OrganizationZoneQuota(
            organization_id=org_id,
            zone_id=zone_id,
            cpu_quota=cpu,
            memory_quota=memory,
            storage_quota=storage,
            is_allowed=is_allowed,
        )
    return _make


@pytest.fixture
def namespace_lookup():
    """Cluster with one organization namespace and one of its VDC namespaces."""
    return InMemoryNamespaceLookup({
        "org-acme": org_namespace_labels("acme"),
        "vdc-acme-test": vdc_namespace_labels("acme", "test"),
    })


@pytest.fixture
def admission_webhook(namespace_lookup):
    return AdmissionWebhook(namespace_lookup)


@pytest.fixture
def utc_now():
    return datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)
