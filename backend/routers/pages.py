# backend/routers/pages.py

from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse

from config import AppConfig
from routers.deps import get_config

router = APIRouter(tags=["Pages"])

FORM_TAG = '<form method="post"'


def point_form_at_prefix(page: str, url_prefix: str) -> str:
    """
    The static page ships a bare <form method="post">; aim it at the upload route
    under whatever prefix the app is served from.
    """
    return page.replace(FORM_TAG, f'<form action="{url_prefix}/upload" method="post"', 1)


@router.get("/", response_class=HTMLResponse)
def index_page(config: AppConfig = Depends(get_config)):
    index_path = Path(config.static_dir) / "index.html"
    print(f"📄 Serving {index_path}")

    try:
        page = index_path.read_text(encoding="utf-8")
    except OSError as e:
        print(f"❌ Could not read index page: {e}")
        raise HTTPException(status_code=404, detail="Not Found")

    return HTMLResponse(point_form_at_prefix(page, config.url_prefix))
