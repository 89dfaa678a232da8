"""
Directory browsing session for doclisting.

A plain object holding the load state of the record collection, the current
Criteria and the derived results. Every criteria mutation recomputes the
results synchronously; recomputation is memoized on the collection version
and the criteria value.
"""

import time
from collections.abc import Awaitable, Callable
from enum import Enum

from ..utils.exceptions import SourceFetchError
from ..utils.logging import get_logger
from . import criteria as criteria_ops
from .facets import extract_specialties, filter_facets
from .models import ConsultationMode, Criteria, Record, SortKey
from .query import run_query

logger = get_logger(__name__)

RecordSource = Callable[[], Awaitable[list[Record]]]


class LoadState(Enum):
    """Lifecycle of the record collection."""

    IDLE = "idle"  # not yet loaded
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


class DirectorySession:
    """Load state, criteria and results for one browsing session."""

    def __init__(self, criteria: Criteria | None = None):
        self.state = LoadState.IDLE
        self.error: str | None = None
        self.failure: SourceFetchError | None = None
        self.criteria = criteria or Criteria()
        self.facet_search = ""

        self._records: tuple[Record, ...] = ()
        self._facets: list[str] = []
        self._results: list[Record] = []
        self._collection_version = 0
        self._cache_key: tuple[int, Criteria] | None = None

    # --- Record collection ---

    async def load(self, source: RecordSource) -> LoadState:
        """
        Load the record collection from a source.

        A SourceFetchError leaves the session in the FAILED state with the
        error message kept verbatim; nothing is retried automatically.
        """
        self.state = LoadState.LOADING
        self.error = None
        self.failure = None

        start_time = time.perf_counter()
        try:
            records = await source()
        except SourceFetchError as e:
            self._set_collection(())
            self.state = LoadState.FAILED
            self.error = e.message
            self.failure = e
            logger.warning("Directory load failed", error=e.message)
            return self.state
        except Exception as e:
            self._set_collection(())
            self.state = LoadState.FAILED
            self.error = str(e) or type(e).__name__
            logger.error("Unexpected error loading directory", error=e)
            raise

        self._set_collection(tuple(records))
        self.state = LoadState.LOADED
        logger.performance(
            "Directory loaded",
            duration_ms=(time.perf_counter() - start_time) * 1000,
            records=len(self._records),
            specialties=len(self._facets),
        )
        self._recompute()
        return self.state

    async def retry(self, source: RecordSource) -> LoadState:
        """Start a fresh load attempt after a failure."""
        logger.info("Retrying directory load", previous_error=self.error)
        return await self.load(source)

    def _set_collection(self, records: tuple[Record, ...]) -> None:
        self._records = records
        self._facets = extract_specialties(records)
        self._results = []
        self._collection_version += 1
        self._cache_key = None

    @property
    def records(self) -> tuple[Record, ...]:
        return self._records

    @property
    def facets(self) -> list[str]:
        """Every specialty present in the loaded collection."""
        return self._facets

    @property
    def visible_facets(self) -> list[str]:
        """Facets narrowed by the facet search string."""
        return filter_facets(self._facets, self.facet_search)

    @property
    def results(self) -> list[Record]:
        """Ordered results; empty unless a collection is loaded."""
        return self._results

    # --- Criteria mutations ---

    def set_query(self, query: str) -> list[Record]:
        return self._update(criteria_ops.set_query(self.criteria, query))

    def set_mode(self, mode: ConsultationMode | str) -> list[Record]:
        return self._update(criteria_ops.set_mode(self.criteria, mode))

    def toggle_specialty(self, specialty: str) -> list[Record]:
        return self._update(criteria_ops.toggle_specialty(self.criteria, specialty))

    def set_sort(self, sort: SortKey | str) -> list[Record]:
        return self._update(criteria_ops.set_sort(self.criteria, sort))

    def reset(self) -> list[Record]:
        """Reset all criteria and the facet search to their defaults."""
        self.facet_search = ""
        return self._update(criteria_ops.reset_criteria())

    def set_facet_search(self, search: str) -> list[str]:
        self.facet_search = search
        return self.visible_facets

    def _update(self, criteria: Criteria) -> list[Record]:
        self.criteria = criteria
        self._recompute()
        return self._results

    def _recompute(self) -> None:
        if self.state != LoadState.LOADED:
            return

        key = (self._collection_version, self.criteria)
        if key == self._cache_key:
            return

        self._results = run_query(self._records, self.criteria)
        self._cache_key = key
        logger.debug(
            "Results recomputed",
            query=self.criteria.query,
            mode=self.criteria.mode.value,
            specialties=sorted(self.criteria.specialties),
            sort=self.criteria.sort.value,
            results=len(self._results),
        )
