from dataclasses import dataclass, field, replace


@dataclass
class Movie:
    id: str
    title: str
    director: str
    release_year: int
    genre: str
    ratings: list[float] = field(default_factory=list)

    @property
    def average_rating(self) -> float | None:
        """Arithmetic mean of the ratings, or None while the movie is unrated."""
        if not self.ratings:
            return None
        return sum(self.ratings) / len(self.ratings)

    def snapshot(self) -> "Movie":
        return replace(self, ratings=list(self.ratings))

    def __repr__(self):
        return f"<Movie(id='{self.id}', title='{self.title}', ratings={len(self.ratings)})>"
