import os

os.environ["ENVIRONMENT"] = "testing"

import pytest
from fastapi.testclient import TestClient

from src.config.settings import TestingSettings
from src.main import create_app
from src.storages import MovieCatalog


@pytest.fixture
def inception():
    return {
        "id": "m1",
        "title": "Inception",
        "director": "Nolan",
        "releaseYear": 2010,
        "genre": "Sci-Fi",
    }


@pytest.fixture
def catalog():
    return MovieCatalog()


@pytest.fixture
def filled_catalog(catalog, inception):
    catalog.create(inception)
    catalog.create(
        {
            "id": "m2",
            "title": "The Grand Budapest Hotel",
            "director": "Anderson",
            "releaseYear": 2014,
            "genre": "Comedy",
        }
    )
    catalog.create(
        {
            "id": "m3",
            "title": "Interstellar",
            "director": "Nolan",
            "releaseYear": 2014,
            "genre": "sci-fi",
        }
    )
    return catalog


@pytest.fixture
def client():
    app = create_app(TestingSettings())
    with TestClient(app) as test_client:
        yield test_client
