# backend/routes/page_routes.py
from fastapi import APIRouter, Depends, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import HTMLResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from pages.renderer import render_user_list, render_user_not_found, render_user_profile
from repositories.errors import DirectoryReadError, NotFoundError, ReadError, ParseError
from repositories.user_repository import UserStore
from routes.dependencies import get_user_store
from routes.responses import AsciiJSONResponse, SafeHTMLResponse
import logging

# Registered last: "/{username}" matches any single path segment
router = APIRouter(default_response_class=SafeHTMLResponse)
LOG = logging.getLogger("routes.pages")

API_USER_PREFIX = "/api/users/"


# ============================================================
# 🔹 User list page
# ============================================================
@router.get("/", summary="HTML list of users", response_class=HTMLResponse)
def user_list_page(store: UserStore = Depends(get_user_store)):
    try:
        usernames = store.list_usernames()
    except DirectoryReadError:
        LOG.exception("❌ Error listing users for the index page")
        return PlainTextResponse("Error reading data directory", status_code=500)
    return SafeHTMLResponse(render_user_list(usernames))


# ============================================================
# 🔹 User profile page
# ============================================================
@router.get("/{username}", summary="HTML profile page", response_class=HTMLResponse)
def user_profile_page(username: str, store: UserStore = Depends(get_user_store)):
    LOG.info(f"👤 Rendering profile page: {username}")
    try:
        record = store.read_user(username)
    except NotFoundError:
        LOG.warning(f"⚠️ Profile not found: {username}")
        return SafeHTMLResponse(render_user_not_found(username), status_code=404)
    except ReadError:
        return PlainTextResponse("Error reading user file", status_code=500)
    except ParseError:
        return PlainTextResponse("Error parsing user data", status_code=500)
    return SafeHTMLResponse(render_user_profile(username, record))


# ============================================================
# 🔹 Unmatched paths
# ============================================================
async def not_found_handler(request: Request, exc: StarletteHTTPException):
    """
    An encoded slash ("/a%2Fb") is still one path segment on the wire, but
    it is decoded before routing and no longer matches "/{username}".
    Such requests get the same 404 the user routes would have given.
    """
    if exc.status_code != 404 or request.method != "GET":
        return await http_exception_handler(request, exc)

    raw_path = request.scope.get("raw_path") or request.url.path.encode("utf-8")
    raw_path = raw_path.decode("latin-1")
    path = request.url.path

    if raw_path.startswith(API_USER_PREFIX) and "/" not in raw_path[len(API_USER_PREFIX):]:
        LOG.warning(f"⚠️ User not found: {path[len(API_USER_PREFIX):]}")
        return AsciiJSONResponse(status_code=404, content={"error": "User not found"})

    segment = raw_path[1:]
    if segment and "/" not in segment:
        username = path[1:]
        LOG.warning(f"⚠️ Profile not found: {username}")
        return SafeHTMLResponse(render_user_not_found(username), status_code=404)

    return await http_exception_handler(request, exc)
