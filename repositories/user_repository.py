# backend/repositories/user_repository.py
import json
import re
import logging
from pathlib import Path
from typing import Any, List, Protocol, Union

from repositories.errors import DirectoryReadError, NotFoundError, ReadError, ParseError

logger = logging.getLogger("repositories.users")

USER_FILE_SUFFIX = ".json"
USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


# ============================================================
# 🔹 Store capability (filesystem today, anything tomorrow)
# ============================================================
class UserStore(Protocol):
    def list_usernames(self) -> List[str]:
        ...

    def read_user(self, username: str) -> Any:
        ...


def is_valid_username(username: str) -> bool:
    """Only letters, digits, dash and underscore may reach the filesystem."""
    return bool(username) and USERNAME_PATTERN.match(username) is not None


def _reject_constant(token: str):
    # Python's json accepts NaN/Infinity, strict JSON does not
    raise ValueError(f"Invalid JSON constant: {token}")


# ============================================================
# 🗂️ One JSON file per user inside a data directory
# ============================================================
class FileUserStore:
    def __init__(self, data_dir: Union[str, Path]):
        self.data_dir = Path(data_dir)

    def list_usernames(self) -> List[str]:
        """
        Lists the usernames available in the data directory.
        Order is whatever the filesystem returns; callers must not rely on it.
        """
        try:
            entries = [entry.name for entry in self.data_dir.iterdir()]
        except OSError as e:
            logger.error(f"❌ Could not list data directory {self.data_dir}: {e}")
            raise DirectoryReadError("Error reading data directory") from e

        return [
            name[: -len(USER_FILE_SUFFIX)]
            for name in entries
            if name.endswith(USER_FILE_SUFFIX)
        ]

    def read_user(self, username: str) -> Any:
        """Reads and parses `<data_dir>/<username>.json`."""
        if not is_valid_username(username):
            logger.warning(f"⚠️ Rejected username: {username!r}")
            raise NotFoundError("User not found", username)

        file_path = self.data_dir / f"{username}{USER_FILE_SUFFIX}"
        try:
            raw = file_path.read_bytes()
        except FileNotFoundError as e:
            raise NotFoundError("User not found", username) from e
        except OSError as e:
            logger.error(f"❌ Could not read {file_path}: {e}")
            raise ReadError("Error reading user file", username) from e

        try:
            return json.loads(raw.decode("utf-8"), parse_constant=_reject_constant)
        except (UnicodeDecodeError, ValueError) as e:
            logger.error(f"❌ Invalid JSON in {file_path}: {e}")
            raise ParseError("Error parsing user data", username) from e
