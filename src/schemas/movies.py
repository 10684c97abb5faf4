from pydantic import BaseModel, Field, field_validator, ConfigDict


class MovieBaseSchema(BaseModel):
    title: str
    director: str
    release_year: int = Field(..., alias="releaseYear")
    genre: str

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


class MovieCreateSchema(MovieBaseSchema):
    id: str

    model_config = ConfigDict(strict=True)


class MovieDetailSchema(BaseModel):
    id: str
    title: str
    director: str
    release_year: int = Field(..., alias="releaseYear")
    genre: str
    ratings: list[float] = []

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


class MovieUpdateSchema(BaseModel):
    """
    Partial update of a movie.

    Only the descriptive fields may change. ``id`` and ``ratings`` are
    rejected like any other unknown key.
    """

    title: str | None = None
    director: str | None = None
    release_year: int | None = Field(None, alias="releaseYear")
    genre: str | None = None

    model_config = ConfigDict(
        strict=True, extra="forbid", populate_by_name=True
    )

    @field_validator("title", "director", "release_year", "genre")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("The field cannot be null.")
        return value


class RatingCreateSchema(BaseModel):
    rating: float = Field(..., ge=1, le=5, allow_inf_nan=False)

    model_config = ConfigDict(strict=True)


class AverageRatingResponseSchema(BaseModel):
    average_rating: float = Field(..., alias="averageRating")

    model_config = ConfigDict(populate_by_name=True)


class MessageResponseSchema(BaseModel):
    message: str
