from typing import Protocol

from starlette.requests import Request
from starlette.responses import Response
from starlette.staticfiles import StaticFiles


class AssetServer(Protocol):
    async def fetch(self, request: Request) -> Response: ...


class StaticAssets:
    """Serves the frontend from a directory; `/` maps to index.html."""

    def __init__(self, directory: str):
        # A missing directory only means every asset lookup 404s
        self._files = StaticFiles(directory=directory, html=True, check_dir=False)

    async def fetch(self, request: Request) -> Response:
        path = self._files.get_path(request.scope)
        return await self._files.get_response(path, request.scope)
