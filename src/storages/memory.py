import logging
import threading
from typing import Any, Callable, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from src.exceptions import DuplicateMovieError, NotFoundError, ValidationError
from src.schemas.movies import (
    MovieCreateSchema,
    MovieUpdateSchema,
    RatingCreateSchema,
)
from src.storages.interfaces import MovieCatalogInterface
from src.storages.models import Movie

logger = logging.getLogger(__name__)


def _describe_errors(error: PydanticValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in item['loc']) or 'body'}: {item['msg']}"
        for item in error.errors()
    )


def _ranking_key(movie: Movie) -> float:
    average = movie.average_rating
    return 0.0 if average is None else average


class MovieCatalog(MovieCatalogInterface):
    """
    In-memory, insertion-ordered store of movies.

    A single lock guards every operation, so callers never observe a
    half-applied mutation. Records handed out are snapshots; changing them
    does not touch the store.
    """

    def __init__(self, allow_duplicate_ids: bool = False):
        self._movies: list[Movie] = []
        self._lock = threading.Lock()
        self._allow_duplicate_ids = allow_duplicate_ids

    def __len__(self) -> int:
        with self._lock:
            return len(self._movies)

    def _find(self, movie_id: str) -> Optional[Movie]:
        for movie in self._movies:
            if movie.id == movie_id:
                return movie
        return None

    def _get_or_raise(self, movie_id: str) -> Movie:
        movie = self._find(movie_id)
        if movie is None:
            logger.info("Movie '%s' was not found.", movie_id)
            raise NotFoundError("Movie not found")
        return movie

    def _filter(self, predicate: Callable[[Movie], bool], empty_message: str) -> list[Movie]:
        with self._lock:
            movies = [movie.snapshot() for movie in self._movies if predicate(movie)]
        if not movies:
            raise NotFoundError(empty_message)
        return movies

    def create(self, record: Union[MovieCreateSchema, Mapping[str, Any]]) -> Movie:
        if isinstance(record, MovieCreateSchema):
            movie_data = record
        else:
            try:
                movie_data = MovieCreateSchema.model_validate(record)
            except PydanticValidationError as e:
                logger.warning("Rejected movie data: %s", _describe_errors(e))
                raise ValidationError("Invalid movie data") from e

        with self._lock:
            if not self._allow_duplicate_ids and self._find(movie_data.id) is not None:
                logger.warning("Rejected duplicate movie id '%s'.", movie_data.id)
                raise DuplicateMovieError(movie_data.id)

            movie = Movie(**movie_data.model_dump())
            self._movies.append(movie)
            logger.info("Movie '%s' added to the catalog.", movie.id)
            return movie.snapshot()

    def update(
        self, movie_id: str, fields: Union[MovieUpdateSchema, Mapping[str, Any]]
    ) -> Movie:
        with self._lock:
            movie = self._get_or_raise(movie_id)

            if isinstance(fields, MovieUpdateSchema):
                movie_data = fields
            else:
                try:
                    movie_data = MovieUpdateSchema.model_validate(fields)
                except PydanticValidationError as e:
                    logger.warning(
                        "Rejected update of movie '%s': %s", movie_id, _describe_errors(e)
                    )
                    raise ValidationError("Invalid movie data") from e

            for field, value in movie_data.model_dump(exclude_unset=True).items():
                setattr(movie, field, value)

            logger.info("Movie '%s' updated.", movie_id)
            return movie.snapshot()

    def delete(self, movie_id: str) -> None:
        with self._lock:
            for index, movie in enumerate(self._movies):
                if movie.id == movie_id:
                    del self._movies[index]
                    logger.info("Movie '%s' deleted from the catalog.", movie_id)
                    return
        logger.info("Movie '%s' was not found.", movie_id)
        raise NotFoundError("Movie not found")

    def get(self, movie_id: str) -> Movie:
        with self._lock:
            return self._get_or_raise(movie_id).snapshot()

    def add_rating(self, movie_id: str, value: Any) -> None:
        try:
            rating = RatingCreateSchema.model_validate({"rating": value}).rating
        except PydanticValidationError as e:
            logger.warning("Rejected rating %r for movie '%s'.", value, movie_id)
            raise ValidationError("Invalid rating value") from e

        with self._lock:
            movie = self._get_or_raise(movie_id)
            movie.ratings.append(rating)
            logger.info("Movie '%s' rated %s.", movie_id, rating)

    def average_rating(self, movie_id: str) -> float | None:
        """Mean rating of the movie, or None when it has not been rated yet."""
        with self._lock:
            return self._get_or_raise(movie_id).average_rating

    def top_rated(self) -> list[Movie]:
        """
        Return every movie ordered by descending average rating.

        Unrated movies rank as if their average were 0. ``sorted`` is stable,
        so movies with equal averages keep their insertion order.
        """
        with self._lock:
            if not self._movies:
                raise NotFoundError("No movies found")
            ranked = sorted(self._movies, key=_ranking_key, reverse=True)
            return [movie.snapshot() for movie in ranked]

    def by_genre(self, genre: str) -> list[Movie]:
        genre = genre.lower()
        return self._filter(
            lambda movie: movie.genre.lower() == genre,
            "No movies found for this genre",
        )

    def by_director(self, director: str) -> list[Movie]:
        director = director.lower()
        return self._filter(
            lambda movie: movie.director.lower() == director,
            "No movies found by this director",
        )

    def search_by_title(self, keyword: str = "") -> list[Movie]:
        keyword = (keyword or "").lower()
        return self._filter(
            lambda movie: keyword in movie.title.lower(),
            "No movies found with this keyword",
        )
