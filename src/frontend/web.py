from __future__ import annotations
import argparse
from dataclasses import asdict
from flask import Flask, request, jsonify
from keyfinder.engine import Engine

app = Flask(__name__)
_engine: Engine | None = None


def _get_engine() -> Engine:
    if _engine is None:
        raise RuntimeError("Engine not initialized. Start the app through main().")
    return _engine

# ---------- API ----------
@app.get("/api/find")
def api_find():
    q = request.args.get("q", "", type=str)
    if not q:
        return jsonify([])
    rows = _get_engine().find(q)
    return jsonify([asdict(r) for r in rows])


@app.get("/api/suggest")
def api_suggest():
    q = request.args.get("q", "", type=str)
    if not q:
        return jsonify([])
    return jsonify(_get_engine().suggest(q))


@app.get("/api/check")
def api_check():
    q = request.args.get("q", "", type=str)
    valid = bool(q) and _get_engine().is_full_path(q)
    return jsonify({"path": q, "valid": valid})


@app.get("/health")
def health():
    try:
        docs = len(_get_engine().corpus)
    except RuntimeError:
        # no engine, or one that was already shut down
        return jsonify({"ok": False, "documents": 0})
    return jsonify({"ok": True, "documents": docs})


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run the key finder JSON API on top of Engine")
    ap.add_argument("--roots", nargs="+", required=True)
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    global _engine
    _engine = Engine()
    _engine.build(roots=args.roots, verbose=args.verbose)

    try:
        app.run(host=args.host, port=args.port, debug=args.verbose)
    finally:
        _engine.shutdown()
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
