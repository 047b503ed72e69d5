from functools import lru_cache

from fastapi import Request

from api.backend import BackendAPI
from spark_ai.config import Settings


@lru_cache
def get_settings() -> Settings:
    """Settings read from the environment once per process."""
    return Settings.from_env()


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_backend(request: Request) -> BackendAPI:
    return request.app.state.backend
