"""Shared command-line options for the typeahead CLI and Flask UI."""
from __future__ import annotations
import argparse

from typeahead import config as CFG
from typeahead.models import OrderSpec, PipelineConfig


def _order_spec(text: str) -> OrderSpec:
    """--order-by FIELD:DIR, or just DIR for plain string options."""
    field, _, direction = text.rpartition(":")
    return OrderSpec(field=field or None, direction=direction)


def add_config_args(ap: argparse.ArgumentParser) -> None:
    ap.add_argument("--options", nargs="+", required=True, help="Option files or folders (.txt/.json/.jsonl)")
    ap.add_argument("--field", default=None, help="Option field for display/matching (dot-path)")
    ap.add_argument("--group", default=None, help="Group matches by this field")
    ap.add_argument("--order-by", type=_order_spec, default=None, help="FIELD:asc|desc (or asc|desc)")
    ap.add_argument("--limit", type=int, default=CFG.OPTIONS_LIMIT, help="Options limit before ordering/grouping")
    ap.add_argument("--min-length", type=int, default=CFG.MIN_LENGTH)
    ap.add_argument("--wait-ms", type=int, default=CFG.WAIT_MS)
    ap.add_argument("--no-latinize", action="store_true")
    ap.add_argument("--no-single-words", action="store_true")
    ap.add_argument("--verbose", action="store_true")


def config_from_args(args: argparse.Namespace) -> PipelineConfig:
    return PipelineConfig(
        min_length=args.min_length,
        wait_ms=args.wait_ms,
        options_limit=args.limit,
        option_field=args.field,
        group_field=args.group,
        order_by=args.order_by,
        latinize=not args.no_latinize,
        single_words=not args.no_single_words,
    )
