# backend/routes/user_routes.py
from fastapi import APIRouter, Depends
from repositories.errors import DirectoryReadError, NotFoundError, ReadError, ParseError
from repositories.user_repository import UserStore
from routes.dependencies import get_user_store
from routes.responses import AsciiJSONResponse
import logging

router = APIRouter(default_response_class=AsciiJSONResponse)
LOG = logging.getLogger("routes.users")


def _error(status_code: int, message: str) -> AsciiJSONResponse:
    return AsciiJSONResponse(status_code=status_code, content={"error": message})


# ------------------------------------------------------------
# 🔹 List usernames
# ------------------------------------------------------------
@router.get("", summary="List all usernames")
def list_users(store: UserStore = Depends(get_user_store)):
    try:
        usernames = store.list_usernames()
    except DirectoryReadError:
        LOG.exception("❌ Error listing users")
        return _error(500, "Error reading data directory")
    LOG.info(f"📜 Listed {len(usernames)} users")
    return AsciiJSONResponse(content=usernames)


# ------------------------------------------------------------
# 🔹 Fetch a user record
# ------------------------------------------------------------
@router.get("/{username}", summary="Fetch the JSON record for a user")
def get_user(username: str, store: UserStore = Depends(get_user_store)):
    LOG.info(f"🔎 Fetching user record: {username}")
    try:
        record = store.read_user(username)
    except NotFoundError:
        LOG.warning(f"⚠️ User not found: {username}")
        return _error(404, "User not found")
    except ReadError:
        return _error(500, "Error reading user file")
    except ParseError:
        return _error(500, "Error parsing user data")
    return AsciiJSONResponse(content=record)
