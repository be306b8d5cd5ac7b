# backend/pages/renderer.py
from pathlib import Path
from urllib.parse import quote
from typing import Any, Iterable, List, Tuple

from jinja2 import Environment, FileSystemLoader, select_autoescape

from models.user import ProfileView, display_text, is_present
from pages.contrast import contrast_color

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
SITE_TITLE = "NST BLR Superstars"

# Labelled lines shown on the profile card, in display order
PROFILE_FIELDS = (
    ("Username", "username"),
    ("Email", "email"),
    ("Bio", "bio"),
    ("Location", "location"),
)

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(),
)


def _href_segment(value: str) -> str:
    # filenames that are not valid UTF-8 come back from the OS as surrogates
    try:
        return quote(value, safe="", errors="surrogateescape")
    except UnicodeEncodeError:
        return quote(value, safe="", errors="surrogatepass")


_env.filters["href_segment"] = _href_segment


def _css_string(value: Any) -> str:
    """Quotes a value for use inside a single-quoted CSS string."""
    text = str(value)
    return (
        text.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\n", "\\a ")
        .replace("\r", "")
    )


def _background_style(profile: ProfileView) -> str:
    style = f"background-color: {display_text(profile.background_color)};"
    if profile.background_image:
        style += (
            f" background-image: url('{_css_string(profile.background_image)}');"
            " background-size: cover; background-position: center;"
            " background-attachment: fixed;"
        )
    return style


def _visible_fields(profile: ProfileView) -> List[Tuple[str, str]]:
    return [
        (label, display_text(getattr(profile, attr)))
        for label, attr in PROFILE_FIELDS
        if is_present(getattr(profile, attr))
    ]


# ============================================================
# 🔹 Pages
# ============================================================
def render_user_list(usernames: Iterable[str]) -> str:
    return _env.get_template("user_list.html").render(
        title=SITE_TITLE,
        usernames=list(usernames),
    )


def render_user_not_found(username: str) -> str:
    return _env.get_template("user_not_found.html").render(username=username)


def render_user_profile(username: str, record: Any) -> str:
    """
    Renders the profile card for a user record.

    The page text colour follows the background contrast; the card itself
    always keeps dark text so its content stays legible.
    """
    profile = ProfileView.from_record(username, record)
    return _env.get_template("user_profile.html").render(
        profile=profile,
        background_style=_background_style(profile),
        text_color=contrast_color(profile.background_color),
        fields=_visible_fields(profile),
    )
