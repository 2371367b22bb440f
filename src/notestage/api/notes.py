"""Notes API endpoints.

Serves rendered notes with page metadata, raw markdown, the domain index
and per-domain partials. Every route accepts `?domain=` to override the
domain derived from the Host header.
"""

from hashlib import md5

from aiohttp import web

from notestage.app_keys import loader_key, site_name_key
from notestage.core.domains import matches_domain
from notestage.core.metadata import generate_metadata

NOTE_CACHE_CONTROL = "public, max-age=60"
RAW_CACHE_CONTROL = "public, max-age=0, s-maxage=86400"


def create_notes_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/notes/{slug:.+}", get_note),
        web.get(r"/n/{path:.+\.md}", get_raw_note),
        web.get("/api/index", get_index),
        web.get("/api/partials/{name:.+}", get_partial),
    ]


def request_domain(request: web.Request) -> str:
    """Content domain for a request: explicit override, else from the host."""
    override = request.query.get("domain")
    if override:
        return override
    return request.app[loader_key].resolve_domain(request.host)


async def get_note(request: web.Request) -> web.Response:
    slug = request.match_info["slug"].strip("/")
    if not slug:
        return web.json_response({"error": "Slug is required"}, status=400)

    loader = request.app[loader_key]
    domain = request_domain(request)

    note = await loader.load_note(slug, domain)
    if note is None or not matches_domain(note.front_matter, domain):
        return web.json_response(
            {"error": "Note not found", "slug": slug},
            status=404,
        )

    etag = _compute_etag(note.html)
    if request.headers.get("If-None-Match") == etag:
        return web.Response(status=304)

    meta = generate_metadata(note.front_matter, slug, request.app[site_name_key])
    headers = {
        "ETag": etag,
        "Cache-Control": NOTE_CACHE_CONTROL,
    }
    if note.front_matter.is_private:
        headers["X-Robots-Tag"] = "noindex, nofollow"

    return web.json_response(
        {
            "meta": meta.to_dict(),
            "note": note.to_dict(),
            "content": note.html,
        },
        headers=headers,
    )


async def get_raw_note(request: web.Request) -> web.Response:
    slug = request.match_info["path"].removesuffix(".md").strip("/")
    if not slug:
        return web.Response(text="Slug is required", status=400)

    loader = request.app[loader_key]
    result = await loader.load_raw(slug, request_domain(request))
    if result is None:
        return web.Response(text="Not found", status=404)

    return web.Response(
        text=result.text,
        content_type="text/plain",
        charset="utf-8",
        headers={"Cache-Control": RAW_CACHE_CONTROL},
    )


async def get_index(request: web.Request) -> web.Response:
    domain = request_domain(request)
    html = await request.app[loader_key].load_index(domain)
    if html is None:
        return web.json_response({"error": "Index not found", "domain": domain}, status=404)
    return web.json_response({"domain": domain, "content": html})


async def get_partial(request: web.Request) -> web.Response:
    name = request.match_info["name"].strip("/")
    domain = request_domain(request)
    html = await request.app[loader_key].load_partial(name, domain) if name else None
    if html is None:
        return web.json_response(
            {"error": "Partial not found", "name": name, "domain": domain},
            status=404,
        )
    return web.json_response({"name": name, "domain": domain, "content": html})


def _compute_etag(content: str) -> str:
    # First 16 hex chars are enough to detect changed content
    content_hash = md5(content.encode("utf-8"), usedforsecurity=False).hexdigest()[:16]
    return f'"{content_hash}"'
