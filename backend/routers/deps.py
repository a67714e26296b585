# backend/routers/deps.py

from fastapi import Request

from config import AppConfig


def get_config(request: Request) -> AppConfig:
    return request.app.state.config
