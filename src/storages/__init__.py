from .models import Movie
from .interfaces import MovieCatalogInterface
from .memory import MovieCatalog
