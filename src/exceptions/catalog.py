class BaseCatalogError(Exception):
    def __init__(self, message=None):
        if message is None:
            message = "A catalog error occurred."
        super().__init__(message)


class ValidationError(BaseCatalogError):
    pass


class NotFoundError(BaseCatalogError):
    pass


class DuplicateMovieError(BaseCatalogError):
    def __init__(self, movie_id: str):
        self.movie_id = movie_id
        super().__init__(f"A movie with the id '{movie_id}' already exists.")
