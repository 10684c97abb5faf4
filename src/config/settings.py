import os
from pydantic_settings import BaseSettings
from dotenv import load_dotenv


load_dotenv()
env_mode: str = os.getenv("ENVIRONMENT", "local")


class BaseAppSettings(BaseSettings):
    APP_TITLE: str = "Movie catalog"
    APP_DESCRIPTION: str = "In-memory movie catalog with ratings based on FastAPI"

    APP_HOST: str = os.getenv("APP_HOST", "0.0.0.0")
    APP_PORT: int = int(os.getenv("APP_PORT", 3000))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    RELOAD: bool = False

    # Permit several movies with the same id; lookups then hit the first one
    ALLOW_DUPLICATE_IDS: bool = (
        os.getenv("ALLOW_DUPLICATE_IDS", "False").lower() == "true"
    )


class Settings(BaseAppSettings):
    pass


class TestingSettings(BaseAppSettings):
    APP_TITLE: str = "Movie catalog (testing)"
    LOG_LEVEL: str = "DEBUG"
    ALLOW_DUPLICATE_IDS: bool = False


class LocalSettings(Settings):
    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if env_mode == "local":
            self.APP_HOST = "127.0.0.1"
            self.RELOAD = True
