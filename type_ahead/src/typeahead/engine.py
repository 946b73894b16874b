# typeahead/engine.py
from __future__ import annotations

import logging
import os
from typing import Any, Iterable, Optional, Tuple

from . import config as CFG
from .loader import load_options
from .models import MatchEntry, Option, PipelineConfig
from .pipeline import ResultPipeline, prepare_matches
from .sources import Provider, Source, StaticSource, StreamingSource, make_source

log = logging.getLogger(__name__)


def _enable_verbose() -> None:
    logging.basicConfig(level=logging.INFO)
    os.environ[CFG.VERBOSE_ENV] = "1"


class Engine:
    """
    Thin orchestration layer that glues together:
      - an option source (static collection or streaming provider),
      - the pipeline configuration,
      - one-shot completion and live ResultPipeline instances.

    Public API (used by CLI/Flask):
      * build(options=... | provider=..., config): attach a source
      * load(paths, config):  read option files -> static source
      * complete(query, top_k): one synchronous run for static sources
      * pipeline(**listeners): a ResultPipeline bound to this source/config
      * shutdown(): close every pipeline handed out
    """

    # ------------- lifecycle -------------

    def __init__(self) -> None:
        self.source: Optional[Source] = None
        self.config: PipelineConfig = PipelineConfig()
        self._pipelines: list[ResultPipeline] = []

    # /* ~~~ Attach an in-memory collection or an async provider ~~~ */
    def build(
        self,
        *,
        options: Optional[Iterable[Option]] = None,
        provider: Optional[Provider] = None,
        config: Optional[PipelineConfig] = None,
        verbose: bool = False,
    ) -> None:
        if verbose:
            _enable_verbose()
        if (options is None) == (provider is None):
            raise ValueError("build(): pass exactly one of options= or provider=")

        self.config = config or PipelineConfig()
        self.source = make_source(provider if provider is not None else list(options), self.config)
        kind = "streaming" if isinstance(self.source, StreamingSource) else "static"
        log.info("Engine build() complete: source=%s", kind)

    # /* ~~~ Read option files from disk into a static source ~~~ */
    def load(
        self,
        paths: Iterable[str],
        *,
        config: Optional[PipelineConfig] = None,
        verbose: bool = False,
    ) -> None:
        if verbose:
            _enable_verbose()
        paths = list(paths)
        if not paths:
            raise ValueError("load(): at least one options path is required")
        log.info("Loading options from %s", paths)
        self.build(options=load_options(paths), config=config)

    # ------------- query -------------

    def complete(self, query: str, *, top_k: Optional[int] = None) -> Tuple[MatchEntry, ...]:
        """Filter, limit, order and group once; for static sources only."""
        if self.source is None:
            raise RuntimeError("Engine not initialized. Call build() or load() first.")
        if not isinstance(self.source, StaticSource):
            raise RuntimeError("complete() needs a static source; use pipeline() for providers")
        if len(query.strip()) < self.config.min_length:
            return ()
        entries = prepare_matches(self.source.fetch(query), self.config)
        return entries if top_k is None else entries[: max(0, int(top_k))]

    def pipeline(self, **listeners: Any) -> ResultPipeline:
        if self.source is None:
            raise RuntimeError("Engine not initialized. Call build() or load() first.")
        p = ResultPipeline(self.source, self.config, **listeners)
        self._pipelines.append(p)
        return p

    @property
    def option_count(self) -> int:
        return len(self.source) if isinstance(self.source, StaticSource) else 0

    # ------------- teardown -------------

    def shutdown(self) -> None:
        try:
            for p in self._pipelines:
                p.shutdown()
        finally:
            self._pipelines.clear()
            self.source = None
            log.info("Engine shutdown complete")
