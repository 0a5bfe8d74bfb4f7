"""
User account and favorite entities.

A FavoriteMovie carries a denormalized snapshot of the movie display
fields captured when the user bookmarked it, so favorites render even
when the movie cache is empty and the API is unreachable.
"""

from dataclasses import dataclass
from typing import Optional

from movieviewer.core.entities.media import Genre, Movie


@dataclass(frozen=True)
class User:
    """
    Registered account.

    Attributes:
        user_id: Unique login identifier (primary key)
        password: Password as stored (plaintext, see DESIGN.md caveat)
        preferred_name: Display name
    """

    user_id: str
    password: str
    preferred_name: str


@dataclass(frozen=True)
class FavoriteMovie:
    """
    Favorite bookmark of a user for a movie.

    Unique per (user_id, movie_id). The remaining attributes mirror Movie
    and are never refreshed after creation.
    """

    movie_id: int
    user_id: str
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

    @classmethod
    def from_movie(cls, user_id: str, movie: Movie) -> "FavoriteMovie":
        """Capture l'instantane d'affichage d'un film pour un utilisateur."""
        return cls(
            movie_id=movie.id,
            user_id=user_id,
            title=movie.title,
            overview=movie.overview,
            poster_path=movie.poster_path,
            release_date=movie.release_date,
            vote_average=movie.vote_average,
            adult=movie.adult,
            genres=movie.genres,
            original_language=movie.original_language,
            runtime=movie.runtime,
            vote_count=movie.vote_count,
            revenue=movie.revenue,
        )

    def to_movie(self) -> Movie:
        """Restitue l'instantane sous forme de Movie (affichage hors-ligne)."""
        return Movie(
            id=self.movie_id,
            title=self.title,
            overview=self.overview,
            poster_path=self.poster_path,
            release_date=self.release_date,
            vote_average=self.vote_average,
            adult=self.adult,
            genres=self.genres,
            original_language=self.original_language,
            runtime=self.runtime,
            vote_count=self.vote_count,
            revenue=self.revenue,
        )
