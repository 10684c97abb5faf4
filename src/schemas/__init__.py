from .movies import (
    MovieBaseSchema,
    MovieCreateSchema,
    MovieDetailSchema,
    MovieUpdateSchema,
    RatingCreateSchema,
    AverageRatingResponseSchema,
    MessageResponseSchema,
)
