from __future__ import annotations
import argparse, asyncio, json
from typing import Iterable
from typeahead import Engine
from typeahead.config import TOP_K
from typeahead.models import MatchEntry
from frontend import add_config_args, config_from_args


def _print_rows(rows: Iterable[MatchEntry], as_json: bool) -> None:
    rows = list(rows)
    if as_json:
        print(json.dumps([{"item": e.item, "value": e.value, "is_group_header": e.is_group_header}
                          for e in rows], ensure_ascii=False, indent=2, default=str))
        return
    if not rows:
        print("(no matches)"); return
    for e in rows:
        print(f"[{e.value}]" if e.is_header() else f"  {e.value}")


async def _repl(eng: Engine, k: int, as_json: bool) -> None:
    """Each input line is one keystroke; events are printed as the pipeline emits them."""
    p = eng.pipeline(
        on_loading=lambda v: print(f"(loading={v})"),
        on_no_results=lambda v: print("(no matches)") if v else None,
        on_matches=lambda rows: _print_rows(rows[:k], as_json),
    )
    loop = asyncio.get_running_loop()
    print("Type a query (empty line to exit).")
    try:
        while True:
            try:
                line = await loop.run_in_executor(None, input, "> ")
            except (EOFError, KeyboardInterrupt):
                break
            if not line.strip():
                break
            p.on_keystroke(line)
            await p.settle()
    finally:
        p.shutdown()


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Typeahead CLI (Engine-backed)")
    add_config_args(p)
    p.add_argument("-k", type=int, default=TOP_K, help="Top-K entries to print")
    p.add_argument("--repl", action="store_true", help="Interactive loop after loading")
    p.add_argument("--q", default=None, help="Single query to run once")
    p.add_argument("--json", action="store_true", help="Emit JSON rows")

    args = p.parse_args(argv)

    eng = Engine()
    try:
        eng.load(args.options, config=config_from_args(args), verbose=args.verbose)

        if args.q is not None:
            _print_rows(eng.complete(args.q, top_k=args.k), args.json)

        if args.repl:
            asyncio.run(_repl(eng, args.k, args.json))

        return 0
    finally:
        eng.shutdown()

if __name__ == "__main__":
    raise SystemExit(main())
