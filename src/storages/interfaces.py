from abc import ABC, abstractmethod
from typing import Any, Mapping, Union

from src.schemas.movies import MovieCreateSchema, MovieUpdateSchema
from src.storages.models import Movie


class MovieCatalogInterface(ABC):

    @abstractmethod
    def create(self, record: Union[MovieCreateSchema, Mapping[str, Any]]) -> Movie:
        pass

    @abstractmethod
    def update(
        self, movie_id: str, fields: Union[MovieUpdateSchema, Mapping[str, Any]]
    ) -> Movie:
        pass

    @abstractmethod
    def delete(self, movie_id: str) -> None:
        pass

    @abstractmethod
    def get(self, movie_id: str) -> Movie:
        pass

    @abstractmethod
    def add_rating(self, movie_id: str, value: Any) -> None:
        pass

    @abstractmethod
    def average_rating(self, movie_id: str) -> float | None:
        pass

    @abstractmethod
    def top_rated(self) -> list[Movie]:
        pass

    @abstractmethod
    def by_genre(self, genre: str) -> list[Movie]:
        pass

    @abstractmethod
    def by_director(self, director: str) -> list[Movie]:
        pass

    @abstractmethod
    def search_by_title(self, keyword: str = "") -> list[Movie]:
        pass
