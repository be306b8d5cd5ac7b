# backend/routes/dependencies.py
from fastapi import Request

from repositories.user_repository import UserStore


def get_user_store(request: Request) -> UserStore:
    """The store is attached to the app at startup (see main.create_app)."""
    return request.app.state.user_store
