"""
Media metadata entities.

Entities representing movies and their reviews as returned by the
TMDB API. List and detail responses share the Movie schema; detail
responses simply fill more of the optional fields.
"""

from dataclasses import dataclass
from typing import Optional

from movieviewer.utils.constants import POSTER_SIZE_LIST

TMDB_IMAGE_BASE_URL = "https://image.tmdb.org/t/p/"


@dataclass(frozen=True)
class Genre:
    """
    Movie genre.

    Attributes:
        id: TMDB genre ID
        name: Genre name
    """

    id: int
    name: str


@dataclass(frozen=True)
class Movie:
    """
    Movie metadata from TMDB.

    Only id and title are guaranteed; every other field is optional because
    list endpoints return a subset of the detail payload.

    Attributes:
        id: TMDB movie ID (authoritative)
        title: Localized title
        overview: Plot summary
        poster_path: Path to poster image on TMDB CDN
        release_date: Release date as returned by the API (YYYY-MM-DD)
        vote_average: Average rating (0-10)
        adult: Adult content flag
        genres: Tuple of Genre (detail only)
        original_language: ISO 639-1 code
        runtime: Runtime in minutes (detail only)
        vote_count: Number of votes
        revenue: Revenue in USD (detail only)
    """

    id: int
    title: str
    overview: Optional[str] = None
    poster_path: Optional[str] = None
    release_date: Optional[str] = None
    vote_average: Optional[float] = None
    adult: Optional[bool] = None
    genres: tuple[Genre, ...] = ()
    original_language: Optional[str] = None
    runtime: Optional[int] = None
    vote_count: Optional[int] = None
    revenue: Optional[int] = None

    @property
    def year(self) -> Optional[int]:
        """Annee de sortie extraite de release_date."""
        if self.release_date and len(self.release_date) >= 4:
            return int(self.release_date[:4])
        return None

    def poster_url(self, size: str = POSTER_SIZE_LIST) -> Optional[str]:
        """URL complete du poster pour la taille demandee."""
        return poster_url(self.poster_path, size)


@dataclass(frozen=True)
class Review:
    """
    Review of a movie.

    Associated with a movie only by the query that produced it.

    Attributes:
        id: TMDB review ID
        author: Author display name
        content: Review text
        created_at: Creation timestamp (ISO 8601 string)
    """

    id: str
    author: str
    content: str
    created_at: Optional[str] = None


@dataclass(frozen=True)
class MoviePage:
    """
    Page of a paginated movie list.

    from_cache is set when the page was served from the local cache
    instead of the remote API.
    """

    page: int = 1
    results: tuple[Movie, ...] = ()
    total_pages: int = 1
    total_results: int = 0
    from_cache: bool = False

    @classmethod
    def from_cached(cls, movies: list[Movie]) -> "MoviePage":
        """Construit une page unique a partir de films du cache local."""
        return cls(
            page=1,
            results=tuple(movies),
            total_pages=1,
            total_results=len(movies),
            from_cache=True,
        )


def poster_url(poster_path: Optional[str], size: str = POSTER_SIZE_LIST) -> Optional[str]:
    """
    Construit l'URL d'une image TMDB.

    Args:
        poster_path: Chemin relatif renvoye par l'API (ex: "/abc.jpg")
        size: Taille TMDB ("w185" pour les listes, "original" pour le detail)

    Returns:
        URL complete, ou None si le film n'a pas de poster
    """
    if not poster_path:
        return None
    return f"{TMDB_IMAGE_BASE_URL}{size}{poster_path}"
