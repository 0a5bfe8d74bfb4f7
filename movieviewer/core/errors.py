"""
Taxonomie des erreurs de MovieViewer.

Les adaptateurs (client TMDB, stockage local) levent ces erreurs typees ;
SyncRepository decide lesquelles sont resolues (repli sur le cache) et
lesquelles remontent jusqu'a AppState, qui les convertit en message
affichable.
"""

from typing import Optional


class MovieViewerError(Exception):
    """Erreur de base de l'application."""


class NetworkFailure(MovieViewerError):
    """Pas de connectivite, timeout ou echec DNS au niveau transport."""


class RemoteFailure(MovieViewerError):
    """
    Service distant joignable mais reponse invalide.

    Attributes:
        status_code: Code HTTP de la reponse, ou None si le payload
                     etait illisible malgre un statut 2xx.
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class StorageFailure(MovieViewerError):
    """Erreur de lecture/ecriture dans le stockage local."""


class InvalidCredentials(MovieViewerError):
    """
    Identifiants refuses.

    Volontairement indifferenciee : utilisateur inconnu et mauvais mot de
    passe produisent la meme erreur.
    """

    def __init__(self) -> None:
        super().__init__("Invalid username or password")


class DuplicateUser(MovieViewerError):
    """Inscription avec un identifiant deja utilise."""

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        super().__init__(f"User ID already exists: {user_id}")


class NotFound(MovieViewerError):
    """Cle inexistante quand l'absence ne peut pas etre representee par None."""
