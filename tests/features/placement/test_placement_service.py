"""Tests for placement accommodation and the commit coordinator."""

import asyncio

import pytest
import pytest_asyncio
from unittest.mock import AsyncMock

from ovim_governance.core.exceptions import InvalidInputError, PolicyDeniedError
from ovim_governance.core.value_objects import DenialReason, ResourceAmounts
from ovim_governance.features.placement import (
    PlacementCoordinator,
    PlacementDecision,
    PlacementService,
)
from ovim_governance.features.vdcs import InMemoryVDCRepository


class VDCRepositoryMovedOnFirstRead(InMemoryVDCRepository):
    """Moves the VDC to ``moved_to`` right after the first read returns."""

    def __init__(self, moved_to):
        super().__init__()
        self.moved_to = moved_to
        self.reads = 0

    async def get(self, vdc_id):
        vdc = await super().get(vdc_id)
        self.reads += 1
        if self.reads == 1:
            moved = await super().get(vdc_id)
            moved.zone_id = self.moved_to
            await self.update(moved)
        return vdc


@pytest_asyncio.fixture
async def seeded(zone_repository, ledger_repository, vdc_repository, make_zone, make_vdc, grant):
    """Zone quota 80/320/1600, acme granted 40/160/800 and using 20/80/400."""
    await zone_repository.create(make_zone(cpu_quota=80, memory_quota=320, storage_quota=1600))
    await ledger_repository.create(grant("acme", cpu=40, memory=160, storage=800))
    await vdc_repository.create(make_vdc("acme-1", cpu=20, memory=80, storage=400))


class TestPlacementDecision:

    def test_deny_message(self):
        decision = PlacementDecision.deny(DenialReason.ZONE_UNAVAILABLE, "zone z is maintenance")

        assert not decision.allowed
        assert decision.message == "zone unavailable: zone z is maintenance"

    def test_raise_for_denial(self):
        PlacementDecision.accept().raise_for_denial()

        with pytest.raises(PolicyDeniedError) as exc_info:
            PlacementDecision.deny(DenialReason.ZONE_CAPACITY_EXCEEDED).raise_for_denial()
        assert exc_info.value.reason is DenialReason.ZONE_CAPACITY_EXCEEDED


class TestPlacementService:

    @pytest.mark.asyncio
    async def test_request_within_both_ceilings(self, placement_service, seeded):
        decision = await placement_service.accommodate("acme", "zone-a", ResourceAmounts(15, 40, 200))

        assert decision.allowed
        assert decision.reason is None

    @pytest.mark.asyncio
    async def test_organization_quota_binds_first(self, placement_service, seeded):
        decision = await placement_service.accommodate("acme", "zone-a", ResourceAmounts(25, 40, 200))

        assert not decision.allowed
        assert decision.reason is DenialReason.ORGANIZATION_QUOTA_EXCEEDED
        assert decision.message == "organization quota exceeded: cpu 45 > 40"
        assert decision.details["resources"] == ["cpu"]

    @pytest.mark.asyncio
    async def test_zone_quota_is_outer_ceiling(self, placement_service, seeded, ledger_repository,
                                               vdc_repository, make_vdc, grant):
        await ledger_repository.create(grant("globex", cpu=80, memory=320, storage=1600))
        await vdc_repository.create(make_vdc("globex-1", org_id="globex", cpu=50, memory=10, storage=10))

        decision = await placement_service.accommodate("acme", "zone-a", ResourceAmounts(15, 40, 200))

        assert decision.reason is DenialReason.ZONE_CAPACITY_EXCEEDED
        assert decision.message == "zone capacity exceeded: cpu 85 > 80"

    @pytest.mark.asyncio
    async def test_pending_vdcs_count_against_quota(self, placement_service, seeded, vdc_repository,
                                                    make_vdc):
        await vdc_repository.create(make_vdc("acme-2", cpu=20, phase="Pending"))

        decision = await placement_service.accommodate("acme", "zone-a", ResourceAmounts(1, 0, 0))

        assert decision.reason is DenialReason.ORGANIZATION_QUOTA_EXCEEDED

    @pytest.mark.asyncio
    async def test_exact_fit_is_allowed(self, placement_service, seeded):
        decision = await placement_service.accommodate("acme", "zone-a", ResourceAmounts(20, 80, 400))
        assert decision.allowed

    @pytest.mark.asyncio
    async def test_resize_excludes_own_commitment(self, placement_service, seeded):
        request = ResourceAmounts(40, 160, 800)

        without = await placement_service.accommodate("acme", "zone-a", request)
        excluded = await placement_service.accommodate(
            "acme", "zone-a", request, exclude_vdc_id="acme-1"
        )

        assert not without.allowed
        assert excluded.allowed

    @pytest.mark.asyncio
    async def test_unknown_zone(self, placement_service, seeded):
        decision = await placement_service.accommodate("acme", "zone-x", ResourceAmounts(1, 1, 1))

        assert decision.reason is DenialReason.ZONE_UNAVAILABLE
        assert "zone-x not found" in decision.message

    @pytest.mark.asyncio
    async def test_unhealthy_zone(self, placement_service, zone_repository, ledger_repository,
                                  make_zone, grant):
        await zone_repository.create(make_zone(status="maintenance"))
        await ledger_repository.create(grant())

        decision = await placement_service.accommodate("acme", "zone-a", ResourceAmounts())

        assert decision.reason is DenialReason.ZONE_UNAVAILABLE
        assert decision.message == "zone unavailable: zone zone-a is maintenance"

    @pytest.mark.asyncio
    async def test_organization_without_grant(self, placement_service, seeded):
        decision = await placement_service.accommodate("globex", "zone-a", ResourceAmounts(1, 1, 1))
        assert decision.reason is DenialReason.ORGANIZATION_NOT_PERMITTED

    @pytest.mark.asyncio
    async def test_grant_not_allowed(self, placement_service, seeded, ledger_repository, grant):
        await ledger_repository.update(grant("acme", is_allowed=False))

        decision = await placement_service.accommodate("acme", "zone-a", ResourceAmounts(1, 1, 1))

        assert decision.reason is DenialReason.ORGANIZATION_NOT_PERMITTED

    @pytest.mark.asyncio
    async def test_invalid_arguments(self, placement_service):
        with pytest.raises(InvalidInputError):
            await placement_service.accommodate("", "zone-a", ResourceAmounts())
        with pytest.raises(InvalidInputError):
            await placement_service.accommodate("acme", "", ResourceAmounts())
        with pytest.raises(InvalidInputError):
            await placement_service.accommodate("acme", "zone-a", ResourceAmounts(-1, 0, 0))

    @pytest.mark.asyncio
    async def test_accommodate_has_no_side_effects(self, placement_service, seeded, vdc_repository):
        await placement_service.accommodate("acme", "zone-a", ResourceAmounts(5, 5, 5))
        assert len(await vdc_repository.list()) == 1


class TestPlacementCoordinator:

    @pytest.mark.asyncio
    async def test_concurrent_reserves_never_overcommit(self, placement_coordinator, seeded,
                                                        vdc_repository, make_vdc):
        # acme has 20 CPU of headroom left
        candidates = [make_vdc(f"new-{i}", cpu=5) for i in range(6)]

        results = await asyncio.gather(
            *(placement_coordinator.reserve(vdc) for vdc in candidates),
            return_exceptions=True,
        )

        denied = [r for r in results if isinstance(r, PolicyDeniedError)]
        assert len(denied) == 2
        assert all(e.reason is DenialReason.ORGANIZATION_QUOTA_EXCEEDED for e in denied)
        placed = await vdc_repository.list_by_org_and_zone("acme", "zone-a")
        assert sum(v.cpu_quota for v in placed) == 40

    @pytest.mark.asyncio
    async def test_reserve_requires_zone(self, placement_coordinator, make_vdc):
        with pytest.raises(InvalidInputError):
            await placement_coordinator.reserve(make_vdc("v", zone_id=None))

    @pytest.mark.asyncio
    async def test_resize_across_zones_notifies_both(self, placement_service, vdc_repository,
                                                     zone_repository, ledger_repository, seeded,
                                                     make_zone, make_vdc, grant):
        hook = AsyncMock()
        coordinator = PlacementCoordinator(placement_service, vdc_repository, on_zone_change=hook)
        await zone_repository.create(make_zone("zone-b"))
        await ledger_repository.create(grant("acme", "zone-b"))

        moved = await coordinator.resize(make_vdc("acme-1", zone_id="zone-b", cpu=30))

        assert moved.zone_id == "zone-b"
        notified = [c.args[0] for c in hook.await_args_list]
        assert notified == ["zone-a", "zone-b"]

    @pytest.mark.asyncio
    async def test_resize_denied_leaves_vdc_untouched(self, placement_coordinator, seeded,
                                                      vdc_repository, make_vdc):
        with pytest.raises(PolicyDeniedError):
            await placement_coordinator.resize(make_vdc("acme-1", cpu=41))

        assert (await vdc_repository.get("acme-1")).cpu_quota == 20

    @pytest.mark.asyncio
    async def test_release(self, placement_service, vdc_repository, seeded):
        hook = AsyncMock()
        coordinator = PlacementCoordinator(placement_service, vdc_repository, on_zone_change=hook)

        await coordinator.release("acme-1")

        assert await vdc_repository.list() == []
        hook.assert_awaited_once_with("zone-a")

    @pytest.mark.asyncio
    async def test_resize_follows_vdc_moved_before_locking(self, zone_repository, ledger_repository,
                                                            aggregator, make_zone, make_vdc, grant):
        vdcs = VDCRepositoryMovedOnFirstRead(moved_to="zone-b")
        for zone_id in ("zone-a", "zone-b", "zone-c"):
            await zone_repository.create(make_zone(zone_id))
            await ledger_repository.create(grant("acme", zone_id))
        await vdcs.create(make_vdc("acme-1", zone_id="zone-a", cpu=10))
        hook = AsyncMock()
        service = PlacementService(zone_repository, ledger_repository, vdcs, aggregator)
        coordinator = PlacementCoordinator(service, vdcs, on_zone_change=hook)

        moved = await coordinator.resize(make_vdc("acme-1", zone_id="zone-c", cpu=10))

        assert moved.zone_id == "zone-c"
        assert vdcs.reads >= 3
        notified = [c.args[0] for c in hook.await_args_list]
        assert notified == ["zone-b", "zone-c"]

    @pytest.mark.asyncio
    async def test_release_follows_vdc_moved_before_locking(self, zone_repository, ledger_repository,
                                                             aggregator, make_zone, make_vdc):
        vdcs = VDCRepositoryMovedOnFirstRead(moved_to="zone-b")
        await vdcs.create(make_vdc("acme-1", zone_id="zone-a", cpu=10))
        hook = AsyncMock()
        service = PlacementService(zone_repository, ledger_repository, vdcs, aggregator)
        coordinator = PlacementCoordinator(service, vdcs, on_zone_change=hook)

        await coordinator.release("acme-1")

        assert await vdcs.list() == []
        hook.assert_awaited_once_with("zone-b")
