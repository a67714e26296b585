# backend/main.py

import html
import sys
from typing import List

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import HTMLResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import AppConfig, load_config
from routers.pages import index_page, router as pages_router
from routers.upload import router as upload_router

# ---------------------------------------------------------
# APP INIT
# ---------------------------------------------------------


def create_app(config: AppConfig) -> FastAPI:
    app = FastAPI(title="CSV Table Viewer", version="0.1.0")
    app.state.config = config

    print("🚀 Environment:", config.environment)
    print("🚀 Port:", config.port)
    print("🚀 Using prefix:", config.url_prefix or "(none)")

    # -----------------------------------------------------
    # ROUTERS
    # -----------------------------------------------------

    app.include_router(pages_router)
    app.include_router(upload_router)

    if config.url_prefix:
        # Behind a proxy the same routes are reachable under the prefix too
        app.include_router(pages_router, prefix=config.url_prefix)
        app.include_router(upload_router, prefix=config.url_prefix)
        app.add_api_route(
            config.url_prefix,
            index_page,
            methods=["GET"],
            response_class=HTMLResponse,
            include_in_schema=False,
        )

    @app.exception_handler(StarletteHTTPException)
    async def not_found_as_html(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            print("⚠️ Route not found:", request.url.path)
            return HTMLResponse(
                f"Not Found: {html.escape(request.url.path)}", status_code=404
            )
        return await http_exception_handler(request, exc)

    return app


def serve(argv: List[str]) -> None:
    environment = argv[0] if argv else None
    config = load_config(environment)
    print(f"CSV Table Viewer running on port {config.port}")
    uvicorn.run(create_app(config), host="0.0.0.0", port=config.port)


if __name__ == "__main__":
    serve(sys.argv[1:])
else:
    # imported by uvicorn or tests: build from the environment alone
    app = create_app(load_config())
