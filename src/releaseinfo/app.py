"""
app.py — Flask application exposing the release-name parser over HTTP.

Endpoints:
  GET  /version         — package version string
  GET  /parse?name=...  — parse one release name
  POST /parse           — parse a batch: {"names": [...]}
  GET  /config          — current runtime configuration
  POST /config          — update runtime configuration
"""

from __future__ import annotations

import logging

from flask import Flask, jsonify, request

import releaseinfo
from releaseinfo.classifier import classify
from releaseinfo.config import cfg
from releaseinfo.errors import TitleNotFoundError
from releaseinfo.misc.logger import apply_level, resolve_level

log = logging.getLogger(__name__)

app = Flask(__name__)


def _result(name: str) -> dict:
    """Owning view as JSON, plus enum classification when enabled."""
    ref = releaseinfo.parse(name)
    result = ref.to_owned().to_dict()
    if cfg.classify:
        result["classified"] = classify(ref).to_dict()
    return result


def _failure(name: str, exc: TitleNotFoundError) -> dict:
    return {
        "name": name,
        "error": str(exc),
        "matches": [{"field": field, "text": text} for field, text in exc.matches],
    }


# ─── /version ───────────────────────────────────────────────────────────────

@app.get("/version")
def version():
    return jsonify({"version": releaseinfo.__version__})


# ─── /parse ─────────────────────────────────────────────────────────────────

@app.get("/parse")
def parse_one():
    name = request.args.get("name")
    if not name:
        return jsonify({"error": "missing 'name' parameter"}), 400

    try:
        result = _result(name)
    except TitleNotFoundError as exc:
        log.info("[parse_flow] event=title_not_found name=%r", name)
        return jsonify(_failure(name, exc)), 422

    log.info("[parse_flow] event=parsed name=%r title=%r", name, result["title"])
    return jsonify(result)


@app.post("/parse")
def parse_batch():
    """
    Parse several names in one request.

    Failures are reported per name; the request only fails as a whole on a
    malformed body (400) or an oversized batch (413).
    """
    body = request.get_json(silent=True)
    names = body.get("names") if isinstance(body, dict) else None
    if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
        return jsonify({"error": "expected {\"names\": [<str>, ...]}"}), 400

    if len(names) > cfg.max_batch:
        log.info("[parse_batch_flow] event=batch_rejected size=%d max=%d", len(names), cfg.max_batch)
        return jsonify({"error": f"batch larger than {cfg.max_batch}"}), 413

    results = []
    failed = 0
    for name in names:
        try:
            results.append(_result(name))
        except TitleNotFoundError as exc:
            failed += 1
            results.append(_failure(name, exc))

    log.info("[parse_batch_flow] event=batch_parsed size=%d failed=%d", len(names), failed)
    return jsonify(results)


# ─── /config ────────────────────────────────────────────────────────────────

@app.get("/config")
def get_config():
    return jsonify(cfg.to_dict())


@app.post("/config")
def update_config():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "expected a JSON object"}), 400

    try:
        if "log_level" in data:
            resolve_level(str(data["log_level"]))
        cfg.update(data)
    except ValueError as exc:
        log.info("[config_flow] event=config_rejected reason=%s", exc)
        return jsonify({"error": str(exc)}), 400

    if "log_level" in data:
        apply_level(cfg.log_level)

    log.info("[config_flow] event=config_updated keys=%s", sorted(data))
    return jsonify(cfg.to_dict())


# ─── Entrypoint ─────────────────────────────────────────────────────────────

def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    app.run(host="0.0.0.0", port=cfg.port, threaded=True)


if __name__ == "__main__":
    main()
