"""
Business entities representing core domain concepts.

Exports:
- Movie: Movie metadata (list summary or full detail)
- Genre: Genre embedded in a movie detail
- Review: User review fetched from TMDB (never persisted)
- MoviePage: One page of a paginated movie list
- User: Registered account
- FavoriteMovie: Favorite bookmark with a snapshot of the movie display fields
"""

from movieviewer.core.entities.media import Genre, Movie, MoviePage, Review, poster_url
from movieviewer.core.entities.user import FavoriteMovie, User

__all__ = [
    "Genre",
    "Movie",
    "MoviePage",
    "Review",
    "poster_url",
    "User",
    "FavoriteMovie",
]
