import os
from fastapi import Request
from .settings import TestingSettings, Settings, BaseAppSettings, LocalSettings
from src.storages import MovieCatalogInterface, MovieCatalog


def get_settings() -> BaseAppSettings:
    env_mode = os.getenv("ENVIRONMENT", "local")
    if env_mode == "testing":
        return TestingSettings()
    if env_mode == "local":
        return LocalSettings()
    return Settings()  # env_mode == "docker" or else


def create_movie_catalog(settings: BaseAppSettings) -> MovieCatalogInterface:
    return MovieCatalog(allow_duplicate_ids=settings.ALLOW_DUPLICATE_IDS)


def get_movie_catalog(request: Request) -> MovieCatalogInterface:
    return request.app.state.movie_catalog
