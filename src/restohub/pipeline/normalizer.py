"""
Normalization runner: replays staging into the canonical store.

Manifesto:
    Staging is never consumed or marked: every run reads all staging
    records in scope and re-derives canonical data from scratch. Because
    canonical upserts are keyed by natural key, running twice over the
    same staging set leaves the canonical store unchanged in content.

Architecture:
    ::

        StagingRepository.list_by_source(source, org_id)
                │   (for each source the registry knows)
                ▼
        Connector.to_canonical(record.payload, ctx)
                │   Ok → collect      Err → skip + warn
                ▼
        CanonicalRepository.upsert_*(collected)   one write per kind

Guardrails:
    - A staging record that no longer validates is skipped and counted in
      ``skipped``; the rest of the run continues.
    - ``*_upserted`` counts every record written, replacements included.

Tags:
    normalization, pipeline, idempotency, replay, restohub
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from restohub.connectors.protocol import CanonicalBatch, ConnectorContext
from restohub.connectors.registry import ConnectorRegistry
from restohub.core.logging import get_logger
from restohub.core.result import Err, Ok
from restohub.repositories.canonical import CanonicalRepository
from restohub.repositories.staging import StagingRepository

logger = get_logger(__name__)


@dataclass
class NormalizationSummary:
    processed: int = 0
    menu_items_upserted: int = 0
    occupancy_signals_upserted: int = 0
    restaurants_upserted: int = 0
    skipped: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "processed": self.processed,
            "menuItemsUpserted": self.menu_items_upserted,
            "occupancySignalsUpserted": self.occupancy_signals_upserted,
            "restaurantsUpserted": self.restaurants_upserted,
            "skipped": self.skipped,
        }

    def as_log_fields(self) -> dict[str, int]:
        return asdict(self)


class NormalizationRunner:
    def __init__(
        self,
        staging: StagingRepository,
        canonical: CanonicalRepository,
        connectors: ConnectorRegistry,
    ) -> None:
        self.staging = staging
        self.canonical = canonical
        self.connectors = connectors

    def run(self, org_id: str | None = None) -> NormalizationSummary:
        """Normalize every staging record, or only those of ``org_id``."""
        summary = NormalizationSummary()

        for connector in self.connectors:
            records = self.staging.list_by_source(connector.source, org_id)
            if not records:
                continue

            batch = CanonicalBatch()
            for record in records:
                ctx = ConnectorContext(org_id=record.org_id, received_at=record.received_at)
                match connector.to_canonical(record.payload, ctx):
                    case Ok(canonical):
                        batch.menu_items.extend(canonical.menu_items)
                        batch.occupancy_signals.extend(canonical.occupancy_signals)
                        batch.restaurants.extend(canonical.restaurants)
                        summary.processed += 1
                    case Err(error):
                        summary.skipped += 1
                        logger.warning(
                            "staging_record_skipped",
                            source=connector.source,
                            staging_record_id=record.id,
                            reason=str(error),
                        )

            summary.menu_items_upserted += self.canonical.upsert_menu_items(batch.menu_items)
            summary.occupancy_signals_upserted += self.canonical.upsert_occupancy_signals(
                batch.occupancy_signals
            )
            summary.restaurants_upserted += self.canonical.upsert_restaurants(batch.restaurants)

        logger.info("normalization_completed", org_id=org_id, **summary.as_log_fields())
        return summary
