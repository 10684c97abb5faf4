import logging
import os
import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

if "ENVIRONMENT" not in os.environ:
    os.environ["ENVIRONMENT"] = "local"

from src.config import BaseAppSettings, get_settings, create_movie_catalog
from src.routes import movies_router


async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logging.warning(f"Invalid request to {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid input data.", "errors": jsonable_encoder(exc.errors())},
    )


def create_app(settings: BaseAppSettings | None = None) -> FastAPI:
    if settings is None:
        settings = get_settings()

    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title=settings.APP_TITLE,
        description=settings.APP_DESCRIPTION,
    )
    app.state.settings = settings
    app.state.movie_catalog = create_movie_catalog(settings)

    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.include_router(movies_router, prefix="/movies", tags=["movies"])

    return app


app = create_app()


if __name__ == "__main__":
    app_settings = get_settings()
    logging.info(f"Server running at http://{app_settings.APP_HOST}:{app_settings.APP_PORT}")
    uvicorn.run(
        "src.main:app",
        host=app_settings.APP_HOST,
        port=app_settings.APP_PORT,
        reload=app_settings.RELOAD,
    )
