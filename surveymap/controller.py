"""
Session coordinator.

:class:`SurveyMap` owns all session state: the observation store, the
fetch cache, the part selection, the rating filter, the time mode and the
list of active surveys.  It drives the pipeline:

    viewport change
      → coverage check per active survey (SpatialFetchCache)
      → fetch on a background thread for each miss
      → merge results + record region (under the session lock)
      → redraw: score → rating filter → decayed colour → render sink

Fetch completion is the only place network I/O mutates state, and it does
so under one session lock so concurrent workers never interleave writes.
In-flight fetches are never cancelled; a late result still merges and
records its (possibly stale) viewport.

Usage
-----
    session = SurveyMap(default_registry(cfg), cfg, sink=MemorySink())
    session.set_viewport(LatLngBounds(51.4, -0.3, 51.6, 0.1))
    session.toggle_survey("quality")
    session.toggle_survey_part("quality")      # all parts
"""
from __future__ import annotations

import logging
import threading
import time
from typing import Callable, List, Optional

from .config import MapConfig
from .decay import DecayEngine, DecayFn, TimeMode
from .errors import UnknownSurveyError
from .geo.bounds import LatLngBounds
from .geo.fetch_cache import SpatialFetchCache
from .ingest.survey_client import fetch_observations
from .render import MemorySink, RenderSink, select_points
from .storage.observation_store import ObservationStore
from .surveys.ratings import RatingFilter
from .surveys.registry import SurveyRegistry
from .surveys.selection import PartSelection

log = logging.getLogger(__name__)

Runner = Callable[[Callable[[], None]], None]


class SurveyMap:
    """All state of one map session."""

    def __init__(
        self,
        registry: SurveyRegistry,
        config: MapConfig,
        sink: Optional[RenderSink] = None,
        rating_filter: Optional[RatingFilter] = None,
        time_mode: Optional[TimeMode] = None,
        decay_fn: Optional[DecayFn] = None,
        runner: Optional[Runner] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.registry = registry
        self.config = config
        self.sink = sink or MemorySink()
        self.store = ObservationStore()
        self.cache = SpatialFetchCache()
        self.selection = PartSelection(registry)
        self.ratings = rating_filter or RatingFilter()
        self.time_mode = time_mode or TimeMode()
        self.decay = DecayEngine(config, decay_fn, self.time_mode)

        self._clock = clock
        self._runner = runner or self._spawn
        self._workers: List[threading.Thread] = []
        self._active: List[str] = []
        self._layers: set = set()
        self._viewport: Optional[LatLngBounds] = None
        self._lock = threading.RLock()

        self.ratings.add_listener(self.redraw_all_active)
        self.time_mode.add_listener(self.redraw_all_active)

    # ── State ─────────────────────────────────────────────────────────

    @property
    def active_surveys(self) -> List[str]:
        with self._lock:
            return list(self._active)

    @property
    def viewport(self) -> Optional[LatLngBounds]:
        return self._viewport

    def set_viewport(self, bounds: LatLngBounds) -> None:
        """Map moved or zoomed: check coverage of every active survey."""
        self._viewport = bounds
        self.reload_data()

    # ── Toggles ───────────────────────────────────────────────────────

    def toggle_survey(self, survey: Optional[str] = None) -> None:
        """Toggle one survey, or all of them when *survey* is None."""
        if survey is None:
            self._toggle_all_surveys()
            return

        self.registry.get(survey)
        with self._lock:
            enabling = survey not in self._active
            if enabling:
                self._active.append(survey)
                if survey in self._layers:
                    self.sink.show(survey)
            else:
                self._active.remove(survey)
                if survey in self._layers:
                    self.sink.hide(survey)
        log.info("Survey %s %s", survey, "enabled" if enabling else "disabled")

        if enabling:
            self.reload_data(survey)

    def _toggle_all_surveys(self) -> None:
        names = self.registry.names()
        active = self.active_surveys
        if not active or len(active) != len(names):
            for name in names:
                if name not in active:
                    self.toggle_survey(name)
        else:
            for name in names:
                self.toggle_survey(name)

    def toggle_survey_part(self, survey: str, part: Optional[str] = None) -> None:
        """Toggle one part of *survey*, or all parts when *part* is None."""
        self.selection.toggle(survey, part)
        if survey in self.active_surveys:
            self.redraw_survey_data(survey)

    # ── Fetching ──────────────────────────────────────────────────────

    def reload_data(self, survey: Optional[str] = None) -> List[str]:
        """Fetch whatever the current viewport is missing.

        Checks *survey*, or every active survey when None.  Returns the
        surveys a fetch was dispatched for.
        """
        if survey is not None and survey not in self.registry:
            raise UnknownSurveyError(survey)

        bounds = self._viewport
        if bounds is None:
            log.debug("No viewport yet, nothing to reload")
            return []

        candidates = [survey] if survey is not None else self.active_surveys
        to_fetch = self.cache.to_fetch(candidates, bounds)

        for name in to_fetch:
            self._runner(lambda name=name: self._fetch(name, bounds))

        if survey is not None and not to_fetch:
            self.redraw_survey_data(survey)
        return to_fetch

    def _fetch(self, survey: str, bounds: LatLngBounds) -> None:
        survey_type = self.registry.get(survey)
        results = fetch_observations(
            survey_type, bounds, timeout=self.config.request_timeout_s,
        )
        if results is None:
            return

        with self._lock:
            self.store.add(survey, results)
            self.cache.mark_fetched(survey, bounds)
        self.redraw_survey_data(survey)

    def _spawn(self, target: Callable[[], None]) -> None:
        t = threading.Thread(target=target, daemon=True, name="survey-fetch")
        with self._lock:
            self._workers = [w for w in self._workers if w.is_alive()]
            self._workers.append(t)
        t.start()

    def wait(self, timeout: Optional[float] = None) -> None:
        """Block until every outstanding fetch thread has finished."""
        with self._lock:
            workers = list(self._workers)
        for t in workers:
            t.join(timeout)

    # ── Drawing ───────────────────────────────────────────────────────

    def redraw_survey_data(self, survey: str) -> int:
        """Rebuild the layer of *survey*; returns the number of markers."""
        survey_type = self.registry.get(survey)
        if not self.store.has_survey(survey):
            return 0

        with self._lock:
            directives = select_points(
                survey_type,
                self.store.observations(survey),
                self.selection.active(survey),
                self.ratings,
                self.decay,
                marker_options=self.config.default_marker_options,
                now_ms=self._clock() * 1000.0,
            )
            self.sink.clear(survey)
            for d in directives:
                self.sink.add(survey, d)
            self._layers.add(survey)
            if survey in self._active and not self.sink.is_shown(survey):
                self.sink.show(survey)

        log.debug("Redrew %s: %d markers", survey, len(directives))
        return len(directives)

    def redraw_all_active(self) -> None:
        for survey in self.active_surveys:
            self.redraw_survey_data(survey)
