"""
Service de synchronisation entre l'API distante et le stockage local.

SyncRepository est l'unique point d'acces aux donnees pour AppState :
- recuperation des films avec repli sur le cache quand l'appareil est hors-ligne
- mise en cache des listes recuperees (sans bloquer ni faire echouer l'appel)
- inscription / connexion sur les comptes locaux
- gestion des favoris par utilisateur

Le stockage local est synchrone (SQLModel) : chaque appel est execute dans un
pool de threads via run_in_executor pour ne jamais bloquer la boucle asyncio.

Usage:
    repository = SyncRepository(api_client=client, store=store)
    page = await repository.fetch_popular()
    repository.set_offline(True)
    cached = await repository.fetch_popular()  # page.from_cache == True
    await repository.close()
"""

import asyncio
import hmac
from collections.abc import Awaitable, Callable
from concurrent.futures import Executor, ThreadPoolExecutor
from functools import partial
from typing import Any, Optional, TypeVar

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from movieviewer.core.entities.media import Movie, MoviePage, Review
from movieviewer.core.entities.user import FavoriteMovie, User
from movieviewer.core.errors import (
    DuplicateUser,
    InvalidCredentials,
    MovieViewerError,
    NetworkFailure,
    NotFound,
    RemoteFailure,
    StorageFailure,
)
from movieviewer.core.ports.api_clients import IMovieAPIClient, MovieCategory
from movieviewer.core.ports.repositories import LocalStore

T = TypeVar("T")


class SyncRepository:
    """
    Orchestration du client TMDB et du stockage local.

    Politique de repli (listes, recherche, detail) :
    1. Hors-ligne connu : le cache repond directement, sans appel distant.
    2. Succes distant : le resultat est retourne et mis en cache en tache
       de fond ; un echec d'ecriture est journalise, jamais propage.
    3. Echec distant alors que la connectivite est tombee pendant l'appel :
       repli sur le cache.
    4. Echec distant en ligne : l'erreur est propagee (erreur reessayable,
       le cache n'est pas substitue).

    Critiques et films similaires n'ont pas de repli : hors-ligne ou en
    cas d'echec, le resultat est vide.

    La connectivite est detectee a l'exterieur et poussee via set_offline().
    """

    def __init__(
        self,
        api_client: IMovieAPIClient,
        store: LocalStore,
        executor: Optional[Executor] = None,
        offline: bool = False,
        store_workers: int = 4,
    ) -> None:
        """
        Initialise le repository.

        Args:
            api_client: Client du service distant
            store: Stockage local (construit une seule fois et injecte)
            executor: Pool de threads pour le stockage ; cree si absent
            offline: Etat de connectivite initial
            store_workers: Taille du pool cree quand executor est absent
        """
        self._client = api_client
        self._store = store
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=store_workers, thread_name_prefix="local-store"
        )
        self._offline = offline
        self._register_lock = asyncio.Lock()
        self._cache_writes: set[asyncio.Task] = set()

    # ------------------- Connectivite ------------------- #

    @property
    def offline(self) -> bool:
        """Vrai si l'appareil est connu hors-ligne."""
        return self._offline

    def set_offline(self, offline: bool) -> None:
        """Met a jour l'etat de connectivite pousse par l'appelant."""
        if offline != self._offline:
            logger.info("Mode hors-ligne active" if offline else "Retour en ligne")
        self._offline = offline

    # ------------------- Stockage local ------------------- #

    async def _run(self, func: Callable[..., T], *args: Any) -> T:
        """
        Execute une operation du stockage local dans le pool de threads.

        Raises:
            StorageFailure: Si la base leve une erreur SQLAlchemy
        """
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(self._executor, partial(func, *args))
        except SQLAlchemyError as e:
            name = getattr(func, "__qualname__", repr(func))
            logger.error(f"Erreur du stockage local ({name}): {e}")
            raise StorageFailure("Local storage operation failed") from e

    def _schedule_cache_write(self, movies: tuple[Movie, ...] | list[Movie]) -> None:
        """Lance la mise en cache en tache de fond, independante de l'appelant."""
        if not movies:
            return
        task = asyncio.get_running_loop().create_task(self._write_cache(list(movies)))
        self._cache_writes.add(task)
        task.add_done_callback(self._cache_writes.discard)

    async def _write_cache(self, movies: list[Movie]) -> None:
        try:
            await self._run(self._store.movies.save_all, movies)
            logger.debug(f"{len(movies)} film(s) mis en cache")
        except StorageFailure as e:
            logger.warning(f"Mise en cache ignoree: {e}")

    async def flush(self) -> None:
        """Attend la fin des mises en cache en cours."""
        while self._cache_writes:
            await asyncio.gather(*list(self._cache_writes), return_exceptions=True)

    async def _cached_page(self) -> MoviePage:
        movies = await self._run(self._store.movies.list_all)
        logger.debug(f"Repli sur le cache: {len(movies)} film(s)")
        return MoviePage.from_cached(movies)

    # ------------------- Films (avec repli) ------------------- #

    async def _fetch_with_fallback(
        self,
        remote_call: Callable[[], Awaitable[T]],
        fallback: Callable[[], Awaitable[T]],
        label: str,
    ) -> T:
        if self._offline:
            return await fallback()
        try:
            return await remote_call()
        except (NetworkFailure, RemoteFailure) as e:
            if self._offline:
                logger.info(f"{label}: echec pendant le passage hors-ligne, repli sur le cache")
                return await fallback()
            logger.warning(f"{label}: echec distant en ligne ({e})")
            raise

    async def fetch_category(
        self, category: MovieCategory, page: Optional[int] = None
    ) -> MoviePage:
        """
        Recupere une liste de films avec repli sur le cache hors-ligne.

        Hors-ligne, tous les films du cache sont retournes (sans filtre de
        categorie, le cache ne conserve pas l'origine des films).

        Raises:
            NetworkFailure, RemoteFailure: Echec distant alors qu'en ligne
            StorageFailure: Lecture du cache impossible (hors-ligne)
        """

        async def remote() -> MoviePage:
            result = await self._client.fetch_category(category, page)
            self._schedule_cache_write(result.results)
            return result

        return await self._fetch_with_fallback(remote, self._cached_page, category.value)

    async def fetch_popular(self, page: Optional[int] = None) -> MoviePage:
        """Films populaires."""
        return await self.fetch_category(MovieCategory.POPULAR, page)

    async def fetch_top_rated(self, page: Optional[int] = None) -> MoviePage:
        """Films les mieux notes."""
        return await self.fetch_category(MovieCategory.TOP_RATED, page)

    async def fetch_now_playing(self, page: Optional[int] = None) -> MoviePage:
        """Films a l'affiche."""
        return await self.fetch_category(MovieCategory.NOW_PLAYING, page)

    async def fetch_upcoming(self, page: Optional[int] = None) -> MoviePage:
        """Films a venir."""
        return await self.fetch_category(MovieCategory.UPCOMING, page)

    async def search(self, query: str, page: Optional[int] = None) -> MoviePage:
        """
        Recherche par titre ; hors-ligne, recherche de sous-chaine dans le cache.
        """

        async def remote() -> MoviePage:
            result = await self._client.search(query, page)
            self._schedule_cache_write(result.results)
            return result

        async def fallback() -> MoviePage:
            movies = await self._run(self._store.movies.find_by_title_substring, query)
            return MoviePage.from_cached(movies)

        return await self._fetch_with_fallback(remote, fallback, f"search {query!r}")

    async def fetch_detail(self, movie_id: int) -> Optional[Movie]:
        """
        Recupere le detail d'un film.

        Le detail recupere remplace la ligne du cache (tous les champs).

        Returns:
            Le film, ou None s'il n'existe pas (404) ou si hors-ligne et
            absent du cache
        """

        async def remote() -> Optional[Movie]:
            try:
                movie = await self._client.fetch_detail(movie_id)
            except NotFound:
                logger.debug(f"Film {movie_id} inexistant")
                return None
            self._schedule_cache_write([movie])
            return movie

        async def fallback() -> Optional[Movie]:
            return await self._run(self._store.movies.get_by_id, movie_id)

        return await self._fetch_with_fallback(remote, fallback, f"detail {movie_id}")

    # ------------------- Enrichissements (sans repli) ------------------- #

    async def fetch_reviews(self, movie_id: int) -> list[Review]:
        """Critiques d'un film ; liste vide hors-ligne ou en cas d'echec."""
        if self._offline:
            return []
        try:
            return await self._client.fetch_reviews(movie_id)
        except MovieViewerError as e:
            logger.debug(f"Critiques indisponibles pour {movie_id}: {e}")
            return []

    async def fetch_similar(
        self, movie_id: int, page: Optional[int] = None
    ) -> MoviePage:
        """Films similaires ; page vide hors-ligne ou en cas d'echec."""
        if self._offline:
            return MoviePage()
        try:
            result = await self._client.fetch_similar(movie_id, page)
        except MovieViewerError as e:
            logger.debug(f"Films similaires indisponibles pour {movie_id}: {e}")
            return MoviePage()
        self._schedule_cache_write(result.results)
        return result

    # ------------------- Authentification (locale) ------------------- #

    async def register(self, user_id: str, password: str, preferred_name: str) -> User:
        """
        Cree un compte local.

        Raises:
            DuplicateUser: Si l'identifiant existe deja
        """
        async with self._register_lock:
            if await self._run(self._store.users.exists, user_id):
                raise DuplicateUser(user_id)
            user = User(user_id=user_id, password=password, preferred_name=preferred_name)
            saved = await self._run(self._store.users.save, user)
        logger.info(f"Utilisateur enregistre: {user_id}")
        return saved

    async def login(self, user_id: str, password: str) -> User:
        """
        Verifie les identifiants.

        Raises:
            InvalidCredentials: Utilisateur inconnu ou mot de passe incorrect
                                (meme erreur dans les deux cas)
        """
        user = await self._run(self._store.users.get, user_id)
        if user is None or not hmac.compare_digest(
            user.password.encode("utf-8"), password.encode("utf-8")
        ):
            logger.debug(f"Connexion refusee pour {user_id}")
            raise InvalidCredentials()
        logger.info(f"Connexion reussie: {user_id}")
        return user

    async def check_user_id_exists(self, user_id: str) -> bool:
        """Vrai si l'identifiant est deja enregistre."""
        return await self._run(self._store.users.exists, user_id)

    # ------------------- Favoris ------------------- #

    async def add_favorite(self, user: User, movie: Movie) -> FavoriteMovie:
        """Ajoute (ou remplace) le favori avec l'instantane actuel du film."""
        favorite = FavoriteMovie.from_movie(user.user_id, movie)
        return await self._run(self._store.favorites.save, favorite)

    async def remove_favorite(self, user_id: str, movie_id: int) -> None:
        """Retire un favori ; sans effet s'il n'existe pas."""
        deleted = await self._run(self._store.favorites.delete, user_id, movie_id)
        if not deleted:
            logger.debug(f"Favori absent: {user_id}/{movie_id}")

    async def is_favorite(self, user_id: str, movie_id: int) -> bool:
        """Vrai si le film est favori ; False si le stockage est en erreur."""
        try:
            return await self._run(self._store.favorites.exists, user_id, movie_id)
        except StorageFailure:
            return False

    async def list_favorites(self, user_id: str) -> list[FavoriteMovie]:
        """Favoris d'un utilisateur, dans l'ordre d'insertion."""
        return await self._run(self._store.favorites.find_by_user, user_id)

    # ------------------- Cycle de vie ------------------- #

    async def close(self) -> None:
        """
        Termine les mises en cache, ferme le client et le pool de threads.
        """
        await self.flush()
        await self._client.close()
        if self._owns_executor:
            self._executor.shutdown(wait=True)
