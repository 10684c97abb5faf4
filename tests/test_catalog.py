import math
from concurrent.futures import ThreadPoolExecutor

import pytest

from src.exceptions import DuplicateMovieError, NotFoundError, ValidationError
from src.schemas import MovieCreateSchema, MovieUpdateSchema
from src.storages import MovieCatalog


def test_created_movie_is_retrievable_without_ratings(catalog, inception):
    catalog.create(inception)
    movie = catalog.get("m1")

    assert movie.title == "Inception"
    assert movie.director == "Nolan"
    assert movie.release_year == 2010
    assert movie.genre == "Sci-Fi"
    assert movie.ratings == []


def test_create_accepts_schema_instance(catalog, inception):
    catalog.create(MovieCreateSchema.model_validate(inception))

    assert catalog.get("m1").title == "Inception"


@pytest.mark.parametrize(
    "field, value",
    [
        ("id", 1),
        ("title", None),
        ("director", ["Nolan"]),
        ("genre", 5),
        ("releaseYear", "2010"),
        ("releaseYear", 2010.5),
        ("releaseYear", True),
    ],
)
def test_create_rejects_wrong_types(catalog, inception, field, value):
    inception[field] = value

    with pytest.raises(ValidationError):
        catalog.create(inception)
    assert len(catalog) == 0


def test_create_rejects_missing_fields(catalog, inception):
    del inception["director"]

    with pytest.raises(ValidationError):
        catalog.create(inception)


def test_create_rejects_duplicate_id(catalog, inception):
    catalog.create(inception)

    with pytest.raises(DuplicateMovieError):
        catalog.create(dict(inception, title="Inception 2"))
    assert len(catalog) == 1
    assert catalog.get("m1").title == "Inception"


def test_duplicate_ids_allowed_when_enabled(inception):
    catalog = MovieCatalog(allow_duplicate_ids=True)
    catalog.create(inception)
    catalog.create(dict(inception, title="Inception 2"))

    assert len(catalog) == 2
    assert catalog.get("m1").title == "Inception"

    catalog.delete("m1")
    assert catalog.get("m1").title == "Inception 2"


def test_get_unknown_movie(catalog):
    with pytest.raises(NotFoundError):
        catalog.get("missing")


def test_update_merges_whitelisted_fields(filled_catalog):
    filled_catalog.update("m1", {"title": "Inception (IMAX)", "releaseYear": 2011})
    movie = filled_catalog.get("m1")

    assert movie.title == "Inception (IMAX)"
    assert movie.release_year == 2011
    assert movie.director == "Nolan"


def test_update_accepts_schema_instance(filled_catalog):
    filled_catalog.update("m2", MovieUpdateSchema(genre="Drama"))

    assert filled_catalog.get("m2").genre == "Drama"


def test_update_with_empty_patch_changes_nothing(filled_catalog):
    before = filled_catalog.get("m1")
    after = filled_catalog.update("m1", {})

    assert after == before


@pytest.mark.parametrize(
    "patch",
    [
        {"id": "other"},
        {"ratings": [5, 5, 5]},
        {"budget": 160000000},
        {"title": None},
        {"releaseYear": "2011"},
        {"title": "Renamed", "ratings": []},
    ],
)
def test_update_rejects_invalid_patch(filled_catalog, patch):
    filled_catalog.add_rating("m1", 4)

    with pytest.raises(ValidationError):
        filled_catalog.update("m1", patch)

    movie = filled_catalog.get("m1")
    assert movie.id == "m1"
    assert movie.title == "Inception"
    assert movie.ratings == [4]


def test_update_unknown_movie(catalog):
    with pytest.raises(NotFoundError):
        catalog.update("missing", {"title": "Nothing"})


def test_delete_then_get_fails(filled_catalog):
    filled_catalog.delete("m1")

    with pytest.raises(NotFoundError):
        filled_catalog.get("m1")
    assert len(filled_catalog) == 2


def test_delete_unknown_movie_leaves_catalog_intact(filled_catalog):
    with pytest.raises(NotFoundError):
        filled_catalog.delete("missing")
    assert len(filled_catalog) == 3


def test_average_rating_is_mean_of_ratings(filled_catalog):
    for value in (5, 1, 4.5, 3):
        filled_catalog.add_rating("m2", value)

    assert filled_catalog.average_rating("m2") == pytest.approx((5 + 1 + 4.5 + 3) / 4)
    assert filled_catalog.get("m2").ratings == [5, 1, 4.5, 3]


def test_average_rating_without_ratings_is_none(filled_catalog):
    assert filled_catalog.average_rating("m1") is None


def test_average_rating_unknown_movie(catalog):
    with pytest.raises(NotFoundError):
        catalog.average_rating("missing")


@pytest.mark.parametrize("value", [0, 0.99, 5.01, 6, -1, "4", True, None, math.nan, math.inf])
def test_add_rating_rejects_invalid_values(filled_catalog, value):
    with pytest.raises(ValidationError):
        filled_catalog.add_rating("m1", value)
    assert filled_catalog.get("m1").ratings == []


@pytest.mark.parametrize("value", [1, 5, 2.5])
def test_add_rating_accepts_bounds(filled_catalog, value):
    filled_catalog.add_rating("m1", value)

    assert filled_catalog.get("m1").ratings == [value]


def test_add_rating_unknown_movie(catalog):
    with pytest.raises(NotFoundError):
        catalog.add_rating("missing", 3)


def test_add_rating_checks_value_before_movie(catalog):
    with pytest.raises(ValidationError):
        catalog.add_rating("missing", 10)


def test_top_rated_sorts_by_average(filled_catalog):
    filled_catalog.add_rating("m3", 3)
    filled_catalog.add_rating("m2", 5)
    filled_catalog.add_rating("m2", 4)

    ranked = filled_catalog.top_rated()

    assert [movie.id for movie in ranked] == ["m2", "m3", "m1"]
    averages = [movie.average_rating or 0 for movie in ranked]
    assert averages == sorted(averages, reverse=True)
    assert ranked[-1].ratings == []
    assert filled_catalog.get("m1").ratings == []


def test_top_rated_keeps_insertion_order_for_ties(filled_catalog):
    filled_catalog.add_rating("m3", 4)
    filled_catalog.add_rating("m1", 4)

    assert [movie.id for movie in filled_catalog.top_rated()] == ["m1", "m3", "m2"]


def test_top_rated_on_empty_catalog(catalog):
    with pytest.raises(NotFoundError):
        catalog.top_rated()


def test_by_genre_is_case_insensitive(filled_catalog):
    upper = filled_catalog.by_genre("Comedy")
    lower = filled_catalog.by_genre("comedy")

    assert upper == lower
    assert [movie.id for movie in filled_catalog.by_genre("SCI-FI")] == ["m1", "m3"]


def test_by_genre_is_exact_match(filled_catalog):
    with pytest.raises(NotFoundError):
        filled_catalog.by_genre("Sci")


def test_by_director(filled_catalog):
    assert [movie.id for movie in filled_catalog.by_director("nolan")] == ["m1", "m3"]

    with pytest.raises(NotFoundError):
        filled_catalog.by_director("Kubrick")


def test_search_by_title_keyword(filled_catalog):
    assert [movie.id for movie in filled_catalog.search_by_title("INTER")] == ["m3"]
    assert [movie.id for movie in filled_catalog.search_by_title("in")] == ["m1", "m3"]


def test_search_with_empty_keyword_returns_everything(filled_catalog):
    assert [movie.id for movie in filled_catalog.search_by_title("")] == ["m1", "m2", "m3"]
    assert len(filled_catalog.search_by_title()) == 3


def test_search_without_match(filled_catalog):
    with pytest.raises(NotFoundError):
        filled_catalog.search_by_title("matrix")


def test_returned_movies_are_snapshots(filled_catalog):
    movie = filled_catalog.get("m1")
    movie.ratings.append(5)
    movie.title = "Changed"

    stored = filled_catalog.get("m1")
    assert stored.ratings == []
    assert stored.title == "Inception"


def test_concurrent_ratings_are_all_recorded(filled_catalog):
    with ThreadPoolExecutor(max_workers=8) as executor:
        list(executor.map(lambda _: filled_catalog.add_rating("m1", 4), range(200)))

    assert len(filled_catalog.get("m1").ratings) == 200
    assert filled_catalog.average_rating("m1") == 4.0


def test_rating_scenario(catalog, inception):
    catalog.create(inception)
    assert catalog.get("m1").ratings == []

    catalog.add_rating("m1", 4)
    catalog.add_rating("m1", 2)
    assert catalog.average_rating("m1") == 3.0

    catalog.create(
        {
            "id": "m2",
            "title": "Memento",
            "director": "Nolan",
            "releaseYear": 2000,
            "genre": "Thriller",
        }
    )
    assert [movie.id for movie in catalog.top_rated()] == ["m1", "m2"]

    catalog.delete("m1")
    with pytest.raises(NotFoundError):
        catalog.get("m1")
    assert [movie.id for movie in catalog.top_rated()] == ["m2"]


def test_validation_errors_carry_client_messages(filled_catalog):
    with pytest.raises(ValidationError, match="^Invalid movie data$"):
        filled_catalog.create({"id": 1})
    with pytest.raises(ValidationError, match="^Invalid movie data$"):
        filled_catalog.update("m1", {"id": "x"})
    with pytest.raises(ValidationError, match="^Invalid rating value$"):
        filled_catalog.add_rating("m1", 9)


def test_update_reports_missing_movie_before_invalid_patch(catalog):
    with pytest.raises(NotFoundError):
        catalog.update("missing", {"id": "x"})
