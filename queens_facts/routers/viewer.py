from fastapi import APIRouter
from fastapi.responses import HTMLResponse
from pathlib import Path

from queens_facts.services.presentation.night_mode import theme_for

router = APIRouter()

PAGE = Path(__file__).resolve().parent.parent / "static" / "index.html"


@router.get("/", response_class=HTMLResponse)
def index():
    # theme decided once per page load, never re-evaluated client side
    html = PAGE.read_text(encoding="utf-8")
    return HTMLResponse(html.replace("{{THEME}}", theme_for()))
