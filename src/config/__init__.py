from .settings import BaseAppSettings
from .dependencies import (
    get_settings,
    create_movie_catalog,
    get_movie_catalog,
)
