"""
Utilitaires et constantes pour MovieViewer.
"""

from movieviewer.utils.constants import POSTER_SIZE_DETAIL, POSTER_SIZE_LIST, TMDB_GENRE_MAPPING

__all__ = [
    "TMDB_GENRE_MAPPING",
    "POSTER_SIZE_LIST",
    "POSTER_SIZE_DETAIL",
]
