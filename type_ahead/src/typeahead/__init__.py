"""
Typeahead Suggestion Module

Turns a stream of raw keystrokes into a ranked, optionally grouped list of
suggestions drawn from an in-memory option set or an asynchronous provider.

The module is designed with a clean separation of concerns:
- Query/option normalization (latinize, lowercase, tokenize)
- Match testing, ordering and grouping of candidates
- Option sources (static collection or streaming provider)
- A debounced, latest-keystroke-wins result pipeline

Main Entry Points:
    Engine: load options and run one-shot completions or live pipelines
    ResultPipeline: the keystroke -> matches state machine
    prepare_matches(options, config): limit -> order -> group

Example Usage:
    from typeahead import Engine, PipelineConfig

    eng = Engine()
    eng.build(options=["Alabama", "Alaska", "California"])
    for entry in eng.complete("ala"):
        print(entry.value)
"""

# src/typeahead/__init__.py
from .engine import Engine
from .models import MatchEntry, OrderSpec, PipelineConfig, PipelineState
from .pipeline import ResultPipeline, prepare_matches
from .sources import StaticSource, StreamingSource, make_source

__version__ = "1.0.0"
__all__ = [
    "Engine",
    "MatchEntry",
    "OrderSpec",
    "PipelineConfig",
    "PipelineState",
    "ResultPipeline",
    "StaticSource",
    "StreamingSource",
    "make_source",
    "prepare_matches",
]
