# backend/routers/upload.py

from pathlib import Path
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, Response
from starlette.concurrency import run_in_threadpool

from config import AppConfig
from routers.deps import get_config
from services.csv_parser import parse_csv
from services.errors import (
    CsvDecodeError,
    EmptyFileError,
    MalformedRowError,
    MissingFieldError,
)
from services.table_renderer import render_csv, render_html_page
from services.upload_store import UPLOAD_FIELD, scratch_upload

router = APIRouter(prefix="/upload", tags=["Upload"])


def download_name(original_name: str) -> str:
    stem = Path(original_name).stem.replace('"', "") or "data"
    return f"{stem}-processed.csv"


def content_disposition(filename: str) -> str:
    """
    attachment header per RFC 6266: an ASCII filename= for old clients plus
    a UTF-8 filename*= carrying the real name.
    """
    fallback = "".join(
        c if c.isascii() and c.isprintable() and c not in '"\\' else "_"
        for c in filename
    )
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"


@router.post("")
async def upload_csv(
    request: Request,
    format: str = Query("html", pattern="^(html|csv|json)$"),
    strict: bool = Query(False),
    config: AppConfig = Depends(get_config),
):
    """
    Accepts a CSV in the csvFile field, parses it, and returns it as an
    HTML page (default), CSV text, or JSON.
    The uploaded copy is deleted before the response goes out.
    """
    form = await request.form()
    csv_file = form.get(UPLOAD_FIELD)

    try:
        async with scratch_upload(csv_file, config.scratch_dir) as uploaded:
            print(f"📥 Upload received: {uploaded.original_name} -> {uploaded.temporary_path}")
            table = await run_in_threadpool(parse_csv, uploaded.temporary_path, strict=strict)
    except MissingFieldError as e:
        print(f"⚠️ {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except EmptyFileError:
        raise HTTPException(status_code=500, detail="The uploaded CSV file is empty.")
    except (CsvDecodeError, MalformedRowError) as e:
        print(f"❌ CSV parse failed: {e}")
        raise HTTPException(status_code=500, detail=f"CSV parsing error: {e}")
    except OSError as e:
        print(f"❌ Upload I/O failed: {e}")
        raise HTTPException(status_code=500, detail="Error uploading file")
    finally:
        await form.close()

    print(f"📊 Parsed {table.row_count} rows x {len(table.columns)} columns")

    if format == "csv":
        return Response(
            content=render_csv(table),
            media_type="text/csv",
            headers={"Content-Disposition": content_disposition(download_name(uploaded.original_name))},
        )

    if format == "json":
        return table.model_dump()

    return HTMLResponse(render_html_page(table, back_url=config.url_prefix or "/"))
