"""Catalog routes: list, search, fetch by id, snapshot, markdown render."""

from __future__ import annotations

from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse
from starlette.routing import Route

from gastips.catalog.markdown import render_markdown


async def list_tips(request: Request) -> JSONResponse:
    """GET /api/tips — all rules in presentation order, optionally filtered by ?q=."""
    catalog = request.app.state.catalog
    query = request.query_params.get("q", "")
    rules = catalog.search(query) if query else catalog.all_records()
    return JSONResponse(
        {
            "tips": [r.model_dump() for r in rules],
            "count": len(rules),
        }
    )


async def get_tip(request: Request) -> JSONResponse:
    """GET /api/tips/{id} — a single rule."""
    rule_id = request.path_params["id"]
    rule = request.app.state.catalog.get(rule_id)
    if rule is None:
        return JSONResponse({"error": f"Tip '{rule_id}' not found"}, status_code=404)
    return JSONResponse(rule.model_dump())


async def snapshot(request: Request) -> JSONResponse:
    """GET /api/snapshot — content hashes for the loaded catalog."""
    snap = request.app.state.catalog.snapshot()
    return JSONResponse(
        {
            "count": len(snap.rules),
            "content_hashes": snap.content_hashes,
            "snapshot_hash": snap.snapshot_hash,
        }
    )


async def render(request: Request) -> PlainTextResponse:
    """GET /api/render — the catalog as a markdown document."""
    text = render_markdown(request.app.state.catalog)
    return PlainTextResponse(text, media_type="text/markdown")


routes = [
    Route("/api/tips", list_tips),
    Route("/api/tips/{id}", get_tip),
    Route("/api/snapshot", snapshot),
    Route("/api/render", render),
]
