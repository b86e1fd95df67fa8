"""Static front-end - serves the pre-built single-page app."""

import logging
from pathlib import Path

from fastapi import status
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException
from starlette.responses import Response
from starlette.types import Scope

logger = logging.getLogger(__name__)

INDEX_DOCUMENT = "index.html"


class FrontendFiles(StaticFiles):
    """
    Static files with a single-page-app fallback.

    Any path that is not a file in the build directory (unknown client-side
    routes, traversal attempts, unusable file names) is answered with the root
    document. Mounted last so API routes always take precedence.
    """

    def __init__(self, directory: str):
        super().__init__(directory=directory, html=True, check_dir=False)

    async def check_config(self) -> None:
        # A missing build is reported per request instead of failing the app
        if not Path(self.directory).is_dir():
            logger.warning(f"Static directory {self.directory} does not exist")
            return
        await super().check_config()

    async def get_response(self, path: str, scope: Scope) -> Response:
        try:
            return await super().get_response(path, scope)
        except HTTPException as exc:
            if exc.status_code != status.HTTP_404_NOT_FOUND:
                raise
        except ValueError:
            # e.g. embedded null byte in the requested name
            pass
        return await self._index_response(scope)

    async def _index_response(self, scope: Scope) -> Response:
        try:
            return await super().get_response(INDEX_DOCUMENT, scope)
        except HTTPException as exc:
            if exc.status_code != status.HTTP_404_NOT_FOUND:
                raise
        logger.error(f"Root document not found in {self.directory}")
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": "Not found"})
