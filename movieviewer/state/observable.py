"""
Valeur observable (equivalent d'un StateFlow).

Conserve la derniere valeur publiee et la transmet immediatement a tout
nouvel abonne ; les abonnes existants ne sont notifies que si la valeur
change (comparaison par egalite).
"""

from collections.abc import Callable
from typing import Generic, TypeVar

from loguru import logger

T = TypeVar("T")


class Observable(Generic[T]):
    """
    Conteneur de valeur avec notification des abonnes.

    Example:
        movies = Observable([])
        unsubscribe = movies.subscribe(lambda value: print(len(value)))
        movies.value = [movie]  # affiche 1
        unsubscribe()
    """

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._subscribers: list[Callable[[T], None]] = []

    @property
    def value(self) -> T:
        """Derniere valeur publiee."""
        return self._value

    @value.setter
    def value(self, new_value: T) -> None:
        if new_value == self._value:
            return
        self._value = new_value
        for callback in list(self._subscribers):
            try:
                callback(new_value)
            except Exception:
                # Les autres abonnes sont notifies meme si celui-ci echoue
                logger.exception("Erreur dans un abonne d'Observable")

    def subscribe(self, callback: Callable[[T], None]) -> Callable[[], None]:
        """
        Abonne callback et lui transmet la valeur courante.

        Returns:
            Fonction de desabonnement
        """
        self._subscribers.append(callback)
        callback(self._value)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def __repr__(self) -> str:
        return f"Observable({self._value!r})"
