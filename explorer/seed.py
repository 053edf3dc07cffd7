# seed.py
# Fixed sample set for an empty catalog + the ordered create plan that loads it

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence
from models import AttractionRecord
from providers.catalog import CatalogClient, CatalogError

log = logging.getLogger("attraction-explorer.seed")

SEED_ATTRACTIONS: List[AttractionRecord] = [
    AttractionRecord(
        name="Tarkarli Beach",
        description="Pristine white sands, clear waters and scuba/snorkeling.",
        category="Beach",
        location="Tarkarli",
        image_url="https://images.unsplash.com/photo-1501959915551-4e8d30928317?q=80&w=1200&auto=format&fit=crop",
        rating=4.7,
        tags=["water sports", "snorkeling", "scuba"],
    ),
    AttractionRecord(
        name="Sindhudurg Fort",
        description="Historic sea fort built by Chhatrapati Shivaji Maharaj on an island off Malvan.",
        category="Fort",
        location="Malvan",
        image_url="https://images.unsplash.com/photo-1519681393784-d120267933ba?q=80&w=1200&auto=format&fit=crop",
        rating=4.6,
        tags=["history", "sea fort"],
    ),
    AttractionRecord(
        name="Rock Garden",
        description="Sunset point with rugged rocks and crashing waves by the shore.",
        category="Activity",
        location="Malvan",
        image_url="https://images.unsplash.com/photo-1500530855697-b586d89ba3ee?q=80&w=1200&auto=format&fit=crop",
        rating=4.3,
        tags=["sunset", "viewpoint"],
    ),
    AttractionRecord(
        name="Redi Ganesh Temple",
        description="Ancient cave temple of Lord Ganesh near Vengurla-Redi border.",
        category="Temple",
        location="Vengurla",
        image_url="https://images.unsplash.com/photo-1568342821492-45827d6e1fd5?q=80&w=1200&auto=format&fit=crop",
        rating=4.5,
        tags=["pilgrimage", "heritage"],
    ),
]


@dataclass
class SeedReport:
    created: List[AttractionRecord] = field(default_factory=list)
    failed: Optional[AttractionRecord] = None
    error: Optional[CatalogError] = None
    skipped: List[AttractionRecord] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None


async def run_seed_plan(client: CatalogClient, records: Sequence[AttractionRecord]) -> SeedReport:
    """
    Create records one at a time, in order, each awaited before the next.
    The first failure stops the plan; everything after it is reported as
    skipped. Nothing already created is rolled back.
    """
    report = SeedReport()
    for i, rec in enumerate(records):
        try:
            await client.create_attraction(rec)
        except CatalogError as e:
            report.failed = rec
            report.error = e
            report.skipped = list(records[i + 1:])
            log.warning("seed stopped at %r (%d created, %d skipped): %s",
                        rec.name, len(report.created), len(report.skipped), e)
            return report
        report.created.append(rec)
    log.info("seeded %d attractions", len(report.created))
    return report
