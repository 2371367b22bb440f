"""Application keys for type-safe app configuration access."""

import httpx
from aiohttp import web

from notestage.core.notes import NoteLoader

loader_key = web.AppKey("loader", NoteLoader)
http_client_key = web.AppKey("http_client", httpx.AsyncClient)
site_name_key = web.AppKey("site_name", str)
