"""
Browser page endpoint.

Routes: GET / - Chat page

System role: Serves the static chat client
"""

from functools import lru_cache
from importlib import resources

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

router = APIRouter(tags=["pages"])


@lru_cache
def load_index_html() -> str:
    """Read the bundled chat page once."""
    return (resources.files("chat_backend") / "static" / "index.html").read_text(
        encoding="utf-8"
    )


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def index() -> HTMLResponse:
    """Serve the chat page."""
    return HTMLResponse(load_index_html())
