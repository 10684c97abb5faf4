from .catalog import (
    BaseCatalogError,
    ValidationError,
    NotFoundError,
    DuplicateMovieError,
)
