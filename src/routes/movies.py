from typing import Any, List
from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response, status
from src.config import get_movie_catalog
from src.exceptions import DuplicateMovieError, NotFoundError, ValidationError
from src.schemas.movies import (
    MovieDetailSchema,
    AverageRatingResponseSchema,
    MessageResponseSchema,
)
from src.storages import MovieCatalogInterface

router = APIRouter()


@router.post(
    "",
    response_model=MessageResponseSchema,
    summary="Add a new movie",
    description=(
        "This endpoint adds a new movie to the catalog. "
        "It accepts the id, title, director, release year and genre. "
        "The movie starts without ratings."
    ),
    responses={
        400: {
            "description": "Invalid input.",
            "content": {
                "application/json": {"example": {"detail": "Invalid movie data"}}
            },
        },
        409: {
            "description": "A movie with this id already exists.",
            "content": {
                "application/json": {
                    "example": {"detail": "A movie with the id 'm1' already exists."}
                }
            },
        },
    },
    status_code=201,
)
async def create_movie(
    movie_data: dict[str, Any] = Body(
        ...,
        examples=[
            {
                "id": "m1",
                "title": "Inception",
                "director": "Nolan",
                "releaseYear": 2010,
                "genre": "Sci-Fi",
            }
        ],
    ),
    catalog: MovieCatalogInterface = Depends(get_movie_catalog),
) -> MessageResponseSchema:
    """
    Add a new movie to the catalog.

    The body is checked by the catalog itself, so a malformed movie is
    answered with 400 and a taken id with 409.
    """
    try:
        catalog.create(movie_data)
    except DuplicateMovieError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return MessageResponseSchema(message="Movie added successfully")


@router.get(
    "/top-rated",
    response_model=List[MovieDetailSchema],
    summary="Get all movies ranked by average rating",
    description=(
        "This endpoint returns every movie in the catalog sorted by descending "
        "average rating. Movies without ratings are ranked as if their average "
        "were 0."
    ),
    responses={
        404: {
            "description": "The catalog is empty.",
            "content": {
                "application/json": {"example": {"detail": "No movies found"}}
            },
        }
    },
)
async def get_top_rated_movies(
    catalog: MovieCatalogInterface = Depends(get_movie_catalog),
) -> List[MovieDetailSchema]:
    """
    Rank the whole catalog by average rating.

    Movies with equal averages keep the order in which they were added.
    """
    try:
        movies = catalog.top_rated()
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return [MovieDetailSchema.model_validate(movie) for movie in movies]


@router.get(
    "/search",
    response_model=List[MovieDetailSchema],
    summary="Search movies by a keyword in the title",
    description=(
        "Case-insensitive substring search over movie titles. "
        "An empty keyword matches every movie."
    ),
    responses={
        404: {
            "description": "No title contains the keyword.",
            "content": {
                "application/json": {
                    "example": {"detail": "No movies found with this keyword"}
                }
            },
        }
    },
)
async def search_movies(
    keyword: str = Query("", description="Keyword to look for in titles"),
    catalog: MovieCatalogInterface = Depends(get_movie_catalog),
) -> List[MovieDetailSchema]:
    """Return the movies whose title contains the keyword."""
    try:
        movies = catalog.search_by_title(keyword)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return [MovieDetailSchema.model_validate(movie) for movie in movies]


@router.get(
    "/genre/{genre}",
    response_model=List[MovieDetailSchema],
    summary="Get movies by genre",
    description="Case-insensitive exact match on the genre name.",
)
async def get_movies_by_genre(
    genre: str,
    catalog: MovieCatalogInterface = Depends(get_movie_catalog),
) -> List[MovieDetailSchema]:
    """Return all movies of the given genre in catalog order."""
    try:
        movies = catalog.by_genre(genre)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return [MovieDetailSchema.model_validate(movie) for movie in movies]


@router.get(
    "/director/{director}",
    response_model=List[MovieDetailSchema],
    summary="Get movies by director",
    description="Case-insensitive exact match on the director name.",
)
async def get_movies_by_director(
    director: str,
    catalog: MovieCatalogInterface = Depends(get_movie_catalog),
) -> List[MovieDetailSchema]:
    """Return all movies of the given director in catalog order."""
    try:
        movies = catalog.by_director(director)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return [MovieDetailSchema.model_validate(movie) for movie in movies]


@router.get(
    "/{movie_id}",
    response_model=MovieDetailSchema,
    summary="Get movie details by ID",
    description=(
        "Fetch a movie with its full rating history by its ID. "
        "If the movie with the given ID is not found, a 404 error will be returned. "
        "The ids `top-rated` and `search` are taken by the listing endpoints, "
        "so movies stored under them cannot be fetched here."
    ),
    responses={
        404: {
            "description": "Movie not found.",
            "content": {
                "application/json": {"example": {"detail": "Movie not found"}}
            },
        }
    },
)
async def get_movie_by_id(
    movie_id: str,
    catalog: MovieCatalogInterface = Depends(get_movie_catalog),
) -> MovieDetailSchema:
    """
    Retrieve a specific movie by its ID.

    If the movie does not exist, a 404 error is returned.
    """
    try:
        movie = catalog.get(movie_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return MovieDetailSchema.model_validate(movie)


@router.patch(
    "/{movie_id}",
    response_model=MessageResponseSchema,
    summary="Update a movie by ID",
    description=(
        "This endpoint updates the title, director, release year or genre of a "
        "movie. The id and the ratings cannot be changed here."
    ),
    responses={
        400: {
            "description": "Invalid input.",
            "content": {
                "application/json": {"example": {"detail": "Invalid movie data"}}
            },
        },
        404: {
            "description": "Movie not found.",
            "content": {
                "application/json": {"example": {"detail": "Movie not found"}}
            },
        },
    },
)
async def update_movie(
    movie_id: str,
    movie_data: dict[str, Any] = Body(..., examples=[{"title": "Inception (IMAX)"}]),
    catalog: MovieCatalogInterface = Depends(get_movie_catalog),
) -> MessageResponseSchema:
    """
    Update a specific movie by its ID.

    Only the fields present in the request body are changed.
    If the movie does not exist, a 404 error is raised before the body
    is looked at.
    """
    try:
        catalog.update(movie_id, movie_data)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return MessageResponseSchema(message="Movie updated successfully")


@router.delete(
    "/{movie_id}",
    response_model=MessageResponseSchema,
    summary="Delete a movie by ID",
    description="This endpoint deletes a movie together with its ratings.",
)
async def delete_movie(
    movie_id: str,
    catalog: MovieCatalogInterface = Depends(get_movie_catalog),
) -> MessageResponseSchema:
    """
    Delete a specific movie by its ID.

    If the movie does not exist, a 404 error is raised.
    """
    try:
        catalog.delete(movie_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return MessageResponseSchema(message="Movie deleted successfully")


@router.post(
    "/{movie_id}/rating",
    response_model=MessageResponseSchema,
    summary="Rate a movie by its ID",
    description="Rate movies on a scale from 1 to 5.",
    responses={
        400: {
            "description": "The rating is outside of the 1-5 range.",
            "content": {
                "application/json": {"example": {"detail": "Invalid rating value"}}
            },
        },
        404: {
            "description": "Not Found - The movie does not exist.",
            "content": {
                "application/json": {"example": {"detail": "Movie not found"}}
            },
        },
    },
)
async def rate_movie(
    movie_id: str,
    rating_data: dict[str, Any] = Body(..., examples=[{"rating": 4}]),
    catalog: MovieCatalogInterface = Depends(get_movie_catalog),
) -> MessageResponseSchema:
    """
    Append a rating to the movie.

    The value is checked before the movie is looked up, so an invalid
    rating is reported even for an unknown movie.
    """
    try:
        catalog.add_rating(movie_id, rating_data.get("rating"))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return MessageResponseSchema(message="Rating added successfully")


@router.get(
    "/{movie_id}/rating",
    response_model=AverageRatingResponseSchema,
    summary="Get the average rating of a movie",
    description=(
        "Returns the arithmetic mean of all ratings of the movie. "
        "A movie without ratings yields an empty 204 response."
    ),
    responses={
        204: {"description": "The movie has no ratings yet."},
        404: {
            "description": "Movie not found.",
            "content": {
                "application/json": {"example": {"detail": "Movie not found"}}
            },
        },
    },
)
async def get_average_rating(
    movie_id: str,
    catalog: MovieCatalogInterface = Depends(get_movie_catalog),
):
    """
    Fetch the average rating of a movie.

    An unrated movie is answered with 204 instead of an average of 0.
    """
    try:
        average_rating = catalog.average_rating(movie_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    if average_rating is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return AverageRatingResponseSchema(average_rating=average_rating)
