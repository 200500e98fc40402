"""Service wiring for the HTTP application.

Picks the storage, namespace lookup and cache backends from settings. The
governance services themselves only see the store protocols.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..config.settings import GovernanceSettings
from ..database import DatabaseManager, apply_schema
from ..features.admission import AdmissionWebhook, InMemoryNamespaceLookup, KubeNamespaceLookup, NamespaceLookup
from ..features.placement import PlacementCoordinator, PlacementService
from ..features.quotas import (
    InMemoryQuotaLedgerRepository,
    QuotaLedgerDatabaseRepository,
    QuotaLedgerRepository,
    QuotaLedgerService,
)
from ..features.utilization import UtilizationAggregator, UtilizationCache, UtilizationService
from ..features.vdcs import InMemoryVDCRepository, VDCDatabaseRepository, VDCRepository
from ..features.zones import InMemoryZoneRepository, ZoneDatabaseRepository, ZoneRepository, ZoneSyncService

logger = logging.getLogger(__name__)


@dataclass
class GovernanceContainer:
    """Stores, lookups and the services built on them."""

    settings: GovernanceSettings
    zone_repository: ZoneRepository
    vdc_repository: VDCRepository
    ledger_repository: QuotaLedgerRepository
    namespace_lookup: NamespaceLookup
    cache: Optional[UtilizationCache] = None
    database: Optional[DatabaseManager] = None

    aggregator: UtilizationAggregator = field(init=False)
    ledger_service: QuotaLedgerService = field(init=False)
    utilization_service: UtilizationService = field(init=False)
    placement_service: PlacementService = field(init=False)
    placement_coordinator: PlacementCoordinator = field(init=False)
    zone_sync_service: ZoneSyncService = field(init=False)
    admission_webhook: AdmissionWebhook = field(init=False)

    def __post_init__(self):
        self.aggregator = UtilizationAggregator(active_phase=self.settings.active_vdc_phase)
        self.ledger_service = QuotaLedgerService(
            self.ledger_repository, self.zone_repository, self.vdc_repository, self.aggregator
        )
        self.utilization_service = UtilizationService(
            self.zone_repository,
            self.vdc_repository,
            self.ledger_service,
            aggregator=self.aggregator,
            cache=self.cache,
        )
        self.placement_service = PlacementService(
            self.zone_repository, self.ledger_repository, self.vdc_repository, self.aggregator
        )
        self.placement_coordinator = PlacementCoordinator(
            self.placement_service,
            self.vdc_repository,
            on_zone_change=self.utilization_service.invalidate,
        )
        self.zone_sync_service = ZoneSyncService(
            self.zone_repository,
            self.vdc_repository,
            auto_create=self.settings.zone_sync_auto_create,
        )
        self.admission_webhook = AdmissionWebhook(self.namespace_lookup)

    @classmethod
    def in_memory(cls, settings: GovernanceSettings,
                  namespace_lookup: Optional[NamespaceLookup] = None,
                  cache: Optional[UtilizationCache] = None) -> "GovernanceContainer":
        return cls(
            settings=settings,
            zone_repository=InMemoryZoneRepository(),
            vdc_repository=InMemoryVDCRepository(),
            ledger_repository=InMemoryQuotaLedgerRepository(),
            namespace_lookup=namespace_lookup or InMemoryNamespaceLookup(),
            cache=cache,
        )

    @classmethod
    async def from_settings(cls, settings: GovernanceSettings) -> "GovernanceContainer":
        """Build every backend the settings ask for."""
        if settings.namespace_lookup_backend == "kube":
            namespace_lookup = KubeNamespaceLookup.from_settings(settings)
        else:
            namespace_lookup = InMemoryNamespaceLookup()

        cache = None
        if settings.redis_url:
            cache = UtilizationCache.from_url(
                settings.redis_url, ttl_seconds=settings.utilization_cache_ttl_seconds
            )

        if settings.storage_backend == "postgres":
            database = DatabaseManager(settings.database_url, **settings.get_database_config())
            await database.create_pool()
            schema = settings.database_schema
            if settings.database_auto_migrate:
                await apply_schema(database, schema)
            logger.info(f"Using PostgreSQL storage (schema={schema})")
            return cls(
                settings=settings,
                zone_repository=ZoneDatabaseRepository(database, schema),
                vdc_repository=VDCDatabaseRepository(database, schema),
                ledger_repository=QuotaLedgerDatabaseRepository(database, schema),
                namespace_lookup=namespace_lookup,
                cache=cache,
                database=database,
            )

        logger.info("Using in-memory storage")
        return cls.in_memory(settings, namespace_lookup=namespace_lookup, cache=cache)

    async def close(self) -> None:
        for resource in (self.namespace_lookup, self.cache):
            if resource is not None and hasattr(resource, "close"):
                await resource.close()
        if self.database:
            await self.database.close_pool()
