# state.py
# Query state controller: filter draft, search dispatch, seed-and-refresh.
# One instance per session; only ever touched from the event loop.

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence
from models import DEFAULT_LIMIT, AttractionRecord, QueryState, SearchCriteria, Status
from providers.catalog import CatalogClient, CatalogError, describe_error
from seed import SEED_ATTRACTIONS, SeedReport, run_seed_plan

log = logging.getLogger("attraction-explorer.state")

FILTER_FIELDS = ("q", "category", "location")


@dataclass
class SearchOutcome:
    items: List[AttractionRecord] = field(default_factory=list)
    error: Optional[CatalogError] = None
    # False when the result was not written: a newer search was dispatched
    # before this one came back, or it failed while a seed was running
    applied: bool = True

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class SeedOutcome:
    report: SeedReport
    refresh: SearchOutcome


def seed_error_message(report: SeedReport) -> str:
    name = report.failed.name if report.failed else "?"
    return f"Seeding stopped at '{name}': {describe_error(report.error)}"


class QueryController:
    """
    Owns the QueryState a UI renders from.

    Searches are not serialized: several may be in flight at once. Each
    dispatch takes a ticket and only the most recently dispatched search may
    write items/status when it completes; older completions are dropped.
    """

    def __init__(self, client: CatalogClient, limit: int = DEFAULT_LIMIT):
        self.client = client
        self.limit = limit
        self.state = QueryState()
        self._ticket = 0
        self._seeding = 0
        self._mounted = False

    @classmethod
    async def create(cls, client: CatalogClient, limit: int = DEFAULT_LIMIT) -> "QueryController":
        ctl = cls(client, limit=limit)
        await ctl.mount()
        return ctl

    async def mount(self) -> Optional[SearchOutcome]:
        """Initial load: one search with the default (empty) filters. Runs once."""
        if self._mounted:
            return None
        self._mounted = True
        return await self.search()

    def update_filter(self, name: str, value: Optional[str]) -> None:
        # draft only; read when the next search is dispatched
        if name not in FILTER_FIELDS:
            raise ValueError(f"Unknown filter field: {name!r}")
        setattr(self.state.filters, name, value)

    async def search(self, criteria: Optional[SearchCriteria] = None) -> SearchOutcome:
        # snapshot now so later draft edits cannot leak into this request
        base = criteria if criteria is not None else self.state.filters
        sent = base.model_copy(update={"limit": self.limit})
        self._ticket += 1
        ticket = self._ticket

        self.state.status = Status.LOADING
        self.state.error_message = ""
        try:
            items = await self.client.search_attractions(sent)
        except CatalogError as e:
            if ticket != self._ticket:
                log.info("dropping stale search failure #%d (latest #%d): %s", ticket, self._ticket, e)
                return SearchOutcome(error=e, applied=False)
            if self._seeding:
                # the seed still owns status; its refresh settles it
                log.warning("search failed during seed, left to refresh: %s", describe_error(e))
                return SearchOutcome(items=list(self.state.items), error=e, applied=False)
            self.state.status = Status.ERROR
            self.state.error_message = describe_error(e)
            log.warning("search failed: %s", self.state.error_message)
            return SearchOutcome(items=list(self.state.items), error=e)

        if ticket != self._ticket:
            log.info("dropping stale search result #%d (latest #%d)", ticket, self._ticket)
            return SearchOutcome(items=items, applied=False)

        self.state.items = items
        self.state.status = Status.LOADING if self._seeding else Status.IDLE
        log.info("search q=%r category=%r location=%r -> %d items",
                 sent.q, sent.category, sent.location, len(items))
        return SearchOutcome(items=items)

    async def seed_and_refresh(self, seed_set: Optional[Sequence[AttractionRecord]] = None) -> SeedOutcome:
        """
        Create each seed record in order, stop at the first failure, then
        always refresh with one search. Allowed at any time; the UI only
        offers it while the catalog looks empty.
        """
        records = list(SEED_ATTRACTIONS if seed_set is None else seed_set)
        self.state.status = Status.LOADING
        self.state.error_message = ""

        self._seeding += 1
        try:
            report = await run_seed_plan(self.client, records)
        finally:
            self._seeding -= 1

        refresh = await self.search()
        self._settle_seed(report, refresh)
        return SeedOutcome(report=report, refresh=refresh)

    def _settle_seed(self, report: SeedReport, refresh: SearchOutcome) -> None:
        # a failed create wins over the refresh's own status, unless a newer
        # search already owns the state
        if report.ok or not refresh.applied:
            return
        self.state.status = Status.ERROR
        self.state.error_message = seed_error_message(report)
