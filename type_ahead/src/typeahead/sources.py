# typeahead/sources.py
from __future__ import annotations
import inspect
import logging
from collections.abc import AsyncIterable, Iterable
from typing import Any, Callable, List, Optional, Sequence, Tuple, Union

from .fields import make_accessor
from .match import is_match
from .models import Option, PipelineConfig
from .normalize import normalize_option, normalize_query

log = logging.getLogger(__name__)

# provider(raw_query) -> awaitable collection | async iterator | collection
Provider = Callable[[str], Any]


class StaticSource:
    """In-memory option collection, filtered synchronously on every fetch."""

    def __init__(self, options: Iterable[Option], config: Optional[PipelineConfig] = None) -> None:
        self._options: Tuple[Option, ...] = tuple(options)
        self.config = config or PipelineConfig()
        self._accessor = make_accessor(self.config.option_field)

    def __len__(self) -> int:
        return len(self._options)

    @property
    def options(self) -> Tuple[Option, ...]:
        return self._options

    def fetch(self, query: str) -> List[Option]:
        """All options whose normalized field matches the normalized query, in source order."""
        normalized = normalize_query(query, self.config)
        return [
            option for option in self._options
            if option is not None
            and is_match(normalize_option(option, self._accessor, self.config), normalized)
        ]


class StreamingSource:
    """
    Wraps an external provider that does its own matching.

    The pipeline never re-filters what the provider returns; it only limits,
    orders and groups it.
    """

    def __init__(self, provider: Provider) -> None:
        if not callable(provider):
            raise TypeError("provider must be callable")
        self._provider = provider

    async def fetch(self, query: str) -> List[Option]:
        result = self._provider(query)
        if inspect.isawaitable(result):
            result = await result
        if isinstance(result, AsyncIterable):
            return [option async for option in result]
        if result is None:
            return []
        return list(result)


Source = Union[StaticSource, StreamingSource]


def make_source(options_or_provider: Union[Iterable[Option], Provider],
                config: Optional[PipelineConfig] = None,
                *,
                is_async: Optional[bool] = None) -> Source:
    """
    Factory:
      - a callable                     -> StreamingSource
      - a collection                   -> StaticSource
      - a collection with is_async=True -> StreamingSource returning the whole
                                          collection unfiltered
    ``is_async`` defaults to ``config.is_async``; None means auto-detect.
    """
    config = config or PipelineConfig()
    if is_async is None:
        is_async = config.is_async

    if callable(options_or_provider) and not isinstance(options_or_provider, (list, tuple)):
        if is_async is False:
            raise ValueError("a provider callable needs an async source; drop is_async=False")
        return StreamingSource(options_or_provider)

    if isinstance(options_or_provider, (str, bytes)) or not isinstance(options_or_provider, Iterable):
        raise TypeError(f"Unsupported option source: {type(options_or_provider).__name__}")

    if is_async:
        collection: Sequence[Option] = tuple(options_or_provider)
        log.info("Async mode over a static collection of %d options (no client-side filtering)",
                 len(collection))

        async def _whole_collection(_query: str) -> List[Option]:
            return list(collection)

        return StreamingSource(_whole_collection)

    return StaticSource(options_or_provider, config)
