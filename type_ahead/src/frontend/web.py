from __future__ import annotations
import argparse
from flask import Flask, request, jsonify, Response
from typeahead.engine import Engine
from typeahead.config import TOP_K
from typeahead.models import MatchEntry
from frontend import add_config_args, config_from_args

app = Flask(__name__)
_engine: Engine | None = None


def _entry_json(e: MatchEntry) -> dict:
    return {"item": e.item, "value": e.value, "is_group_header": e.is_group_header}

# ---------- API ----------
@app.get("/api/suggest")
def api_suggest():
    q = request.args.get("q", "", type=str)
    k = request.args.get("k", TOP_K, type=int)
    if _engine is None:
        return jsonify({"error": "engine not initialized"}), 503
    rows = _engine.complete(q, top_k=k)
    return jsonify([_entry_json(e) for e in rows])


@app.get("/api/health")
def api_health():
    return jsonify({"ok": _engine is not None, "options": _engine.option_count if _engine else 0})

# ---------- UI ----------
@app.get("/")
def home():
    # Tiny page: client-side debounce, group headers rendered as labels.
    html = r"""
<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width,initial-scale=1" />
<title>Typeahead • Flask UI</title>
<style>
:root{ --bg:#0b0f14; --panel:#0f141b; --ink:#cfd8e3; --muted:#8a94a6; --accent:#6ee7ff; --border:#1c2530; }
body{ margin:0; background:var(--bg); color:var(--ink); font:16px/1.45 system-ui,Segoe UI,Roboto,Arial; }
.container{ max-width:720px; margin:24px auto; padding:0 16px; }
.card{ background:var(--panel); border:1px solid var(--border); border-radius:16px; padding:18px; }
input{ width:100%; box-sizing:border-box; padding:12px 14px; border-radius:12px; border:1px solid var(--border);
       background:#0b1117; color:var(--ink); font-size:16px; outline:none; }
input:focus{ border-color:var(--accent) }
.meta{ color:var(--muted); font-size:13px; margin-top:6px }
.row{ padding:8px 14px; border-top:1px solid var(--border) }
.group{ color:var(--muted); font-size:12px; text-transform:uppercase; letter-spacing:.5px }
.empty{ padding:16px; color:var(--muted) }
</style>
</head>
<body>
  <div class="container">
    <div class="card">
      <h1>Typeahead</h1>
      <input id="q" type="text" placeholder="Type to search…" autocomplete="off" autofocus />
      <div id="stats" class="meta">Ready.</div>
      <div id="out" class="empty">Start typing to see suggestions.</div>
    </div>
  </div>
<script>
const q = document.querySelector("#q"), out = document.querySelector("#out"), stats = document.querySelector("#stats");
let t, seq = 0;
function esc(s){ return String(s).replace(/[&<>"]/g, c => ({"&":"&amp;","<":"&lt;",">":"&gt;",'"':"&quot;"}[c])); }
async function search(){
  const mine = ++seq;
  stats.textContent = "Loading…";
  const resp = await fetch(`/api/suggest?q=${encodeURIComponent(q.value)}`);
  const data = await resp.json();
  if(mine !== seq) return;  // a newer keystroke owns the list
  stats.textContent = data.length ? `Results: ${data.length}` : "No results.";
  out.className = data.length ? "" : "empty";
  out.innerHTML = data.map(r => r.is_group_header
    ? `<div class="row group">${esc(r.value)}</div>`
    : `<div class="row">${esc(r.value)}</div>`).join("");
}
q.addEventListener("input", () => { clearTimeout(t); t = setTimeout(search, 150); });
</script>
</body>
</html>
"""
    return Response(html, mimetype="text/html")


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run Flask UI on top of the typeahead Engine")
    add_config_args(ap)
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    args = ap.parse_args(argv)

    global _engine
    _engine = Engine()
    _engine.load(args.options, config=config_from_args(args), verbose=args.verbose)

    try:
        app.run(host=args.host, port=args.port, debug=args.verbose)
    finally:
        _engine.shutdown()
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
