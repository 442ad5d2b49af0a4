from __future__ import annotations
import argparse
import logging
from flask import Flask, request, jsonify, Response
from limbu_suggest.engine import Engine
from limbu_suggest.config import TOP_K, DICTIONARY_URL

app = Flask(__name__)
app.json.ensure_ascii = False  # keep Limbu readable in responses
_engine: Engine | None = None

MAX_K = 50


# ---------- API ----------
@app.get("/api/suggest")
def api_suggest():
    q = request.args.get("q", "", type=str)
    k = request.args.get("k", TOP_K, type=int)
    k = max(0, min(MAX_K, k))
    if not q or _engine is None:
        return jsonify([])
    rows = _engine.get_suggestions(q, k)
    return jsonify([r.to_dict() for r in rows])


@app.get("/api/lookup")
def api_lookup():
    w = request.args.get("w", "", type=str)
    entry = _engine.lookup(w) if (_engine is not None and w) else None
    if entry is None:
        return jsonify({"error": "not found", "word": w}), 404
    return jsonify(entry.to_dict())


@app.get("/health")
def health():
    idx = _engine.index if _engine is not None else None
    return jsonify({
        "ok": True,
        "ready": idx is not None,
        "loading": bool(_engine and _engine.loading),
        "entries": len(idx) if idx is not None else 0,
    })


# ---------- UI ----------
@app.get("/")
def home():
    # Plain text box + suggestion list, no external deps.
    html = r"""
<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width,initial-scale=1" />
<title>Limbu suggestions</title>
<style>
:root{ --bg:#0b0f14; --panel:#0f141b; --ink:#cfd8e3; --muted:#8a94a6; --accent:#6ee7ff; --border:#1c2530; }
*{box-sizing:border-box}
body{ margin:0; background:var(--bg); color:var(--ink); font:18px/1.5 system-ui,"Noto Sans Limbu",sans-serif; }
.container{ max-width:720px; margin:24px auto; padding:0 16px; }
.card{ background:var(--panel); border:1px solid var(--border); border-radius:16px; padding:18px; }
h1{ font-size:20px; margin:0 0 8px 0; }
input{ width:100%; padding:12px 14px; border-radius:12px; border:1px solid var(--border);
  background:#0b1117; color:var(--ink); outline:none; font-size:20px; }
input:focus{ border-color:var(--accent) }
.meta{ color:var(--muted); font-size:13px; margin-top:6px; }
.row{ display:grid; grid-template-columns:2rem 1fr 1fr 2fr; gap:10px; padding:10px 4px; border-top:1px solid var(--border); }
.small{ color:var(--muted) }
</style>
</head>
<body>
  <div class="container">
    <div class="card">
      <h1>Limbu word suggestions</h1>
      <input id="q" type="text" placeholder="ᤀ…" autocomplete="off" autofocus />
      <div class="meta" id="stats">Loading status…</div>
      <div id="out"></div>
    </div>
  </div>
<script>
const q = document.querySelector("#q"), out = document.querySelector("#out"), stats = document.querySelector("#stats");
let t;
function esc(s){ return String(s ?? "").replace(/[&<>"]/g, c => ({"&":"&amp;","<":"&lt;",">":"&gt;",'"':"&quot;"}[c])); }
async function status(){
  const r = await fetch("/health"); const h = await r.json();
  stats.textContent = h.ready ? `Dictionary: ${h.entries} words` : "Dictionary not loaded yet.";
}
async function search(){
  const words = q.value.split(/\s+/); const word = words[words.length - 1];
  if(!word){ out.innerHTML = ""; return; }
  const resp = await fetch(`/api/suggest?q=${encodeURIComponent(word)}&k=5`);
  const data = await resp.json();
  out.innerHTML = data.map((r,i)=>`<div class="row"><div class="small">${i+1}</div><div>${esc(r.limbu)}</div>`
    + `<div class="small">${esc(r.phonetic)}</div><div>${esc(r.meaning.en)} / ${esc(r.meaning.ne)}</div></div>`).join("");
}
q.addEventListener("input", ()=>{ clearTimeout(t); t = setTimeout(search, 80); });
status(); setInterval(status, 3000);
</script>
</body>
</html>
"""
    return Response(html, mimetype="text/html")


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Serve Limbu suggestions over HTTP")
    ap.add_argument("--source", default=DICTIONARY_URL, help="Dictionary URL or local JSON file")
    ap.add_argument("--timeout", type=float, default=None, help="Fetch timeout in seconds")
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO)

    global _engine
    _engine = Engine()
    # serve immediately; queries return [] until the snapshot is published
    _engine.load_async(args.source, timeout=args.timeout)

    try:
        app.run(host=args.host, port=args.port, debug=args.verbose, use_reloader=False)
    finally:
        _engine.shutdown()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
