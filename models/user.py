# backend/models/user.py
from pydantic import BaseModel, ConfigDict
from typing import Any, Optional

DEFAULT_BACKGROUND_COLOR = "#f5f5f5"


# ------------------------------------------------------------
# 🔹 JSON values as the profile page shows them
# ------------------------------------------------------------
def is_present(value: Any) -> bool:
    """JavaScript truthiness: empty lists and objects still count."""
    if value is None or value is False or value == "":
        return False
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == value and value != 0
    return True


def display_text(value: Any) -> str:
    """Text of a JSON value the way a browser template would print it."""
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, list):
        return ",".join(display_text(item) for item in value)
    return "[object Object]"


class Customization(BaseModel):
    model_config = ConfigDict(extra="ignore")

    backgroundColor: Optional[Any] = None
    backgroundImage: Optional[Any] = None
    profileImage: Optional[Any] = None


class ProfileView(BaseModel):
    """
    Lenient view of a user record, used only to render the profile page.
    Nothing here rejects a record: the JSON API keeps serving the raw data.
    """
    model_config = ConfigDict(extra="ignore")

    slug: str
    name: Optional[Any] = None
    username: Optional[Any] = None
    email: Optional[Any] = None
    bio: Optional[Any] = None
    location: Optional[Any] = None
    customization: Customization = Customization()

    @classmethod
    def from_record(cls, slug: str, record: Any) -> "ProfileView":
        data = dict(record) if isinstance(record, dict) else {}
        custom = data.get("customization")
        data["customization"] = Customization.model_validate(custom) if isinstance(custom, dict) else Customization()
        data["slug"] = slug
        return cls.model_validate(data)

    @property
    def display_name(self) -> str:
        return display_text(self.name) if is_present(self.name) else self.slug

    @property
    def background_color(self) -> Any:
        color = self.customization.backgroundColor
        return color if is_present(color) else DEFAULT_BACKGROUND_COLOR

    @property
    def background_image(self) -> Any:
        image = self.customization.backgroundImage
        return display_text(image) if is_present(image) else ""

    @property
    def profile_image(self) -> Any:
        image = self.customization.profileImage
        return display_text(image) if is_present(image) else ""
