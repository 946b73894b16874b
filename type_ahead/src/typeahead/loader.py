from __future__ import annotations
import json
import logging
import os
from typing import Iterable, Iterator, List

from .config import ENCODING, INCLUDE_EXTS
from .models import Option

log = logging.getLogger(__name__)


def _iter_option_files(paths: Iterable[str]) -> Iterator[str]:
    """Yield option files: named files as-is, directories walked in name order."""
    for p in paths:
        if os.path.isfile(p):
            yield p
            continue
        if not os.path.isdir(p):
            raise FileNotFoundError(p)
        for dirpath, dirnames, filenames in os.walk(p):
            dirnames.sort()
            for fn in sorted(filenames):
                if fn.lower().endswith(INCLUDE_EXTS):
                    yield os.path.join(dirpath, fn)


def _read_txt(path: str) -> List[Option]:
    with open(path, "r", encoding=ENCODING, errors="ignore") as f:
        return [ln.strip() for ln in f if ln.strip()]


def _read_json(path: str) -> List[Option]:
    with open(path, "r", encoding=ENCODING) as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON list of options, got {type(data).__name__}")
    return data


def _read_jsonl(path: str) -> List[Option]:
    out: List[Option] = []
    with open(path, "r", encoding=ENCODING) as f:
        for line_no, ln in enumerate(f, 1):
            if not ln.strip():
                continue
            try:
                out.append(json.loads(ln))
            except json.JSONDecodeError as exc:
                raise ValueError(f"{path}:{line_no}: invalid JSON option") from exc
    return out


def load_options(paths: Iterable[str]) -> List[Option]:
    """
    Read options from .txt (one per line), .json (a list) and .jsonl files.

    Paths are read in the given order; directories are walked recursively.
    """
    paths = list(paths)
    if not paths:
        raise ValueError("load_options(): at least one path is required")

    options: List[Option] = []
    file_count = 0
    for path in _iter_option_files(paths):
        ext = os.path.splitext(path)[1].lower()
        if ext == ".json":
            items = _read_json(path)
        elif ext == ".jsonl":
            items = _read_jsonl(path)
        elif ext == ".txt":
            items = _read_txt(path)
        else:
            raise ValueError(f"Unsupported option file: {path}")
        options.extend(items)
        file_count += 1
        log.info("Loaded %d options from %s", len(items), path)

    log.info("Done: files=%d options=%d", file_count, len(options))
    return options
