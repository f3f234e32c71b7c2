"""
Web root.

Routes: GET /

Dependencies: backend.api.deps
System role: Default landing page
"""

from html import escape

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from backend.api.deps import get_settings_dependency
from backend.configs import Settings

router = APIRouter(tags=["web"])

WELCOME_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>{name}</title>
</head>
<body>
    <main>
        <h1>{name}</h1>
        <p>Version {version} ({environment})</p>
    </main>
</body>
</html>
"""


@router.get("/", response_class=HTMLResponse)
async def welcome(settings: Settings = Depends(get_settings_dependency)) -> HTMLResponse:
    """Render the welcome page."""
    return HTMLResponse(
        WELCOME_TEMPLATE.format(
            name=escape(settings.app.name),
            version=escape(settings.app.version),
            environment=escape(settings.app.env),
        )
    )
