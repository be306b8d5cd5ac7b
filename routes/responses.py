# backend/routes/responses.py
import json
from typing import Any

from fastapi.responses import HTMLResponse, JSONResponse


class AsciiJSONResponse(JSONResponse):
    """
    JSON with non-ASCII characters escaped, so records holding lone
    surrogates (valid JSON escapes, not encodable as UTF-8) still serialize.
    """

    def render(self, content: Any) -> bytes:
        return json.dumps(content, allow_nan=False, separators=(",", ":")).encode("ascii")


class SafeHTMLResponse(HTMLResponse):
    def render(self, content: Any) -> bytes:
        if isinstance(content, str):
            return content.encode(self.charset, errors="backslashreplace")
        return super().render(content)
