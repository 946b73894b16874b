# typeahead/pipeline.py
from __future__ import annotations

import asyncio
import itertools
import logging
from typing import Callable, Dict, Iterable, Optional, Tuple

from .group import group_matches
from .models import MatchEntry, Option, PipelineConfig, PipelineState
from .normalize import NormalizedQuery, normalize_query
from .order import order_matches
from .sources import Source, StaticSource, StreamingSource

log = logging.getLogger(__name__)

BoolListener = Callable[[bool], None]
MatchesListener = Callable[[Tuple[MatchEntry, ...]], None]
EntryListener = Callable[[MatchEntry], None]


def prepare_matches(options: Iterable[Option], config: PipelineConfig) -> Tuple[MatchEntry, ...]:
    """Fixed order: truncate to options_limit -> order -> group (or plain entries)."""
    limited = list(options)[: config.options_limit]
    ordered = order_matches(limited, config.order_by) if config.order_by is not None else limited
    return group_matches(ordered, config.group_field, config.option_field)


class ResultPipeline:
    """
    Turns keystrokes into finished match lists.

    Flow per accepted keystroke:
      * length gate on the trimmed text (min_length), loading=True
      * debounce (wait_ms); a newer keystroke restarts the timer
      * fetch from the source: synchronous for StaticSource, an asyncio task
        for StreamingSource
      * prepare_matches() and publish loading / no_results / matches

    Every dispatched fetch gets an increasing request id. A result is only
    used when its id is still the latest one; anything older is dropped, so
    the most recent keystroke always wins. A superseded streaming fetch is
    cancelled when the next one is dispatched.

    All callbacks run on the event loop thread. Listeners:
      on_loading(bool), on_no_results(bool) -- called when the level changes
      on_matches(entries)                   -- a new list replaces the old one
      on_select(entry)                      -- a selection was committed
      on_hide()                             -- a presented list was hidden
    """

    def __init__(
        self,
        source: Source,
        config: Optional[PipelineConfig] = None,
        *,
        on_loading: Optional[BoolListener] = None,
        on_no_results: Optional[BoolListener] = None,
        on_matches: Optional[MatchesListener] = None,
        on_select: Optional[EntryListener] = None,
        on_hide: Optional[Callable[[], None]] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        if not isinstance(source, (StaticSource, StreamingSource)):
            raise TypeError(f"Unsupported source: {type(source).__name__}")
        self.source = source
        self.config = config or PipelineConfig()

        self._on_loading = on_loading
        self._on_no_results = on_no_results
        self._on_matches = on_matches
        self._on_select = on_select
        self._on_hide = on_hide
        self._loop = loop

        self._state = PipelineState.IDLE
        self._loading = False
        self._no_results = False
        self._visible = False
        self._focused = False
        self._closed = False

        self._control_value = ""
        self._query: NormalizedQuery = normalize_query("", self.config)
        self._matches: Tuple[MatchEntry, ...] = ()

        self._timer: Optional[asyncio.TimerHandle] = None
        self._seq = itertools.count(1)
        self._latest = 0
        self._inflight: Dict[int, asyncio.Task] = {}

    # ------------- observable state -------------

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def no_results(self) -> bool:
        return self._no_results

    @property
    def matches(self) -> Tuple[MatchEntry, ...]:
        """The current match list; replaced wholesale, never edited in place."""
        return self._matches

    @property
    def query(self) -> NormalizedQuery:
        """Normalized control value as of the last resolution (for highlighting)."""
        return self._query

    @property
    def control_value(self) -> str:
        return self._control_value

    @property
    def closed(self) -> bool:
        return self._closed

    # ------------- inbound events -------------

    def on_keystroke(self, raw_text: str) -> None:
        if self._closed:
            return
        self._control_value = raw_text or ""
        self._focused = True
        if len(self._control_value.strip()) >= self.config.min_length:
            self._set_loading(True)
            self._schedule(self._control_value)
            return

        # below the gate: nothing pending may present later
        self._cancel_timer()
        self._void_inflight()
        self._set_loading(False)
        self._set_no_results(False)
        self._hide()

    def on_focus_gained(self, current_value: Optional[str] = None) -> None:
        if self._closed:
            return
        self._focused = True
        if current_value is not None:
            self._control_value = current_value
        if self.config.min_length == 0:
            self._set_loading(True)
            self._schedule(self._control_value)

    def on_focus_lost(self) -> None:
        self._focused = False

    def on_dismiss_requested(self) -> None:
        if self._closed:
            return
        self._hide()

    def commit_selection(self, entry: MatchEntry) -> None:
        if self._closed or entry.is_group_header:
            return
        self._control_value = entry.value
        if self._on_select is not None:
            self._on_select(entry)
        self._hide()

    # ------------- lifecycle -------------

    async def settle(self) -> None:
        """Wait until no debounce is pending and the latest fetch has resolved."""
        loop = self._get_loop()
        while not self._closed:
            if self._timer is not None:
                await asyncio.sleep(max(0.0, self._timer.when() - loop.time()))
                await asyncio.sleep(0)
                continue
            task = self._inflight.get(self._latest)
            if task is None or task.done():
                return
            await asyncio.wait({task})

    def shutdown(self) -> None:
        """Release the timer and forget in-flight fetches; later events are ignored."""
        if self._closed:
            return
        self._closed = True
        self._cancel_timer()
        for task in list(self._inflight.values()):
            task.cancel()
        self._inflight.clear()
        self._latest = next(self._seq)
        log.debug("Pipeline shutdown complete")

    # ------------- internals -------------

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def _schedule(self, raw_text: str) -> None:
        self._cancel_timer()
        delay = self.config.wait_ms / 1000
        self._timer = self._get_loop().call_later(delay, self._dispatch, raw_text)
        self._state = PipelineState.DEBOUNCING

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _void_inflight(self) -> None:
        self._latest = next(self._seq)
        self._cancel_superseded(self._latest)

    def _dispatch(self, raw_text: str) -> None:
        self._timer = None
        if self._closed:
            return
        request_id = next(self._seq)
        self._latest = request_id
        self._state = PipelineState.AWAITING_SOURCE
        log.debug("Dispatch #%d for %r", request_id, raw_text)

        source = self.source
        if isinstance(source, StaticSource):
            self._resolve(request_id, source.fetch(raw_text))
        elif isinstance(source, StreamingSource):
            self._cancel_superseded(request_id)
            task = self._get_loop().create_task(self._fetch_streaming(source, request_id, raw_text))
            self._inflight[request_id] = task
            task.add_done_callback(lambda _t, rid=request_id: self._inflight.pop(rid, None))
        else:  # pragma: no cover - guarded in __init__
            raise TypeError(f"Unsupported source: {type(source).__name__}")

    def _cancel_superseded(self, request_id: int) -> None:
        for rid in [rid for rid in self._inflight if rid < request_id]:
            log.debug("Cancelling superseded fetch #%d", rid)
            self._inflight.pop(rid).cancel()

    async def _fetch_streaming(self, source: StreamingSource, request_id: int, raw_text: str) -> None:
        try:
            options = await source.fetch(raw_text)
        except Exception:
            log.warning("Provider failed for #%d (%r)", request_id, raw_text, exc_info=True)
            if not self._closed and request_id == self._latest:
                self._set_loading(False)
                self._state = PipelineState.PRESENTING if self._visible else PipelineState.HIDDEN
            return
        self._resolve(request_id, options)

    def _resolve(self, request_id: int, options: Iterable[Option]) -> None:
        if self._closed or request_id != self._latest:
            log.debug("Dropping superseded result #%d (latest #%d)", request_id, self._latest)
            return

        self._matches = prepare_matches(options, self.config)
        # the control value may have moved on since dispatch
        self._query = normalize_query(self._control_value, self.config)
        self._set_loading(False)
        self._set_no_results(not self._matches)

        if not self._matches:
            self._hide()
            return

        if self.config.cancel_on_focus_lost and not self._focused:
            log.debug("Focus lost; not presenting #%d", request_id)
            self._hide()
            return

        self._state = PipelineState.PRESENTING
        self._visible = True
        if self._on_matches is not None:
            self._on_matches(self._matches)

    def _hide(self) -> None:
        self._state = PipelineState.HIDDEN
        if self._visible:
            self._visible = False
            if self._on_hide is not None:
                self._on_hide()

    def _set_loading(self, value: bool) -> None:
        if value != self._loading:
            self._loading = value
            if self._on_loading is not None:
                self._on_loading(value)

    def _set_no_results(self, value: bool) -> None:
        if value != self._no_results:
            self._no_results = value
            if self._on_no_results is not None:
                self._on_no_results(value)
