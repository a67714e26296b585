# backend/config.py

import os
from pathlib import Path
from typing import Literal, Mapping, Optional

from pydantic import BaseModel, field_validator

BACKEND_DIR = Path(__file__).resolve().parent

DEFAULT_PORTS = {"develop": 8887, "production": 8888}


class AppConfig(BaseModel):
    """
    Startup settings, built once and handed to create_app().
    """

    environment: Literal["develop", "production"] = "develop"
    port: int = 8887
    url_prefix: str = ""
    scratch_dir: str = str(BACKEND_DIR / "uploads")
    static_dir: str = str(BACKEND_DIR / "static")

    @field_validator("url_prefix")
    @classmethod
    def normalize_prefix(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if value and not value.startswith("/"):
            value = "/" + value
        return value


def domino_prefix(environment: str, port: int, env: Mapping[str, str]) -> str:
    """
    Proxy path a Domino notebook session serves the app under.
    Empty when the session variables are not all present.
    """
    owner = env.get("DOMINO_PROJECT_OWNER")
    project = env.get("DOMINO_PROJECT_NAME")
    run_id = env.get("DOMINO_RUN_ID")
    if not (owner and project and run_id):
        return ""

    if environment == "develop":
        return f"/{owner}/{project}/notebookSession/{run_id}/proxy/{port}"
    return f"/{owner}/{project}/r/notebookSession/{run_id}"


def load_config(
    environment: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
) -> AppConfig:
    env = os.environ if env is None else env
    environment = environment or env.get("CSV_VIEWER_ENV") or "develop"

    port = int(env.get("PORT") or DEFAULT_PORTS.get(environment, DEFAULT_PORTS["develop"]))

    url_prefix = env.get("URL_PREFIX")
    if url_prefix is None:
        url_prefix = domino_prefix(environment, port, env)

    settings = {
        "environment": environment,
        "port": port,
        "url_prefix": url_prefix,
    }
    if env.get("UPLOAD_DIR"):
        settings["scratch_dir"] = env["UPLOAD_DIR"]

    return AppConfig(**settings)
