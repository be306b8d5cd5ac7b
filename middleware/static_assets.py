# backend/middleware/static_assets.py
import stat
import logging
from pathlib import Path
from typing import Union

from fastapi import Request
from fastapi.concurrency import run_in_threadpool
from fastapi.staticfiles import StaticFiles
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("middleware.static_assets")


# ============================================================
# 📁 Public assets served at "/" ahead of the dynamic routes
# ============================================================
class StaticAssetsMiddleware(BaseHTTPMiddleware):
    """
    Serves a file from the public directory when one matches the request
    path; anything else falls through to the routers (unlike a plain
    `app.mount("/", StaticFiles(...))`, which would swallow every path).
    """

    def __init__(self, app, directory: Union[str, Path]):
        super().__init__(app)
        self.files = StaticFiles(directory=str(directory), html=True, check_dir=False)

    async def dispatch(self, request: Request, call_next):
        if request.method not in ("GET", "HEAD"):
            return await call_next(request)

        path = self.files.get_path(request.scope)
        try:
            _, stat_result = await run_in_threadpool(self.files.lookup_path, path)
        except (OSError, ValueError) as e:
            # unreadable, over-long or NUL-carrying names are never assets
            logger.debug(f"Static lookup failed for {request.url.path}: {e}")
            return await call_next(request)
        if stat_result is None:
            return await call_next(request)

        if stat.S_ISDIR(stat_result.st_mode):
            # directories only count when they carry an index.html
            try:
                _, index_stat = await run_in_threadpool(self.files.lookup_path, f"{path}/index.html")
            except (OSError, ValueError):
                return await call_next(request)
            if index_stat is None or not stat.S_ISREG(index_stat.st_mode):
                return await call_next(request)
        elif not stat.S_ISREG(stat_result.st_mode):
            return await call_next(request)

        logger.debug(f"📁 Static asset: {request.url.path}")
        return await self.files.get_response(path, request.scope)
