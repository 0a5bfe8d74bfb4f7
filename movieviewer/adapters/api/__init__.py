"""
Client API externe pour les metadonnees films.

Ce module fournit l'adaptateur vers The Movie Database (TMDB) :
- TMDBClient: implementation de IMovieAPIClient
- request_json: execution HTTP avec traduction des erreurs httpx

Le client implemente IMovieAPIClient defini dans core/ports/api_clients.py.
"""

from movieviewer.adapters.api.http import request_json
from movieviewer.adapters.api.tmdb_client import TMDBClient

__all__ = [
    "TMDBClient",
    "request_json",
]
