"""
Etat observable de l'application (equivalent view-model).

AppState expose l'etat affiche par l'interface sous forme d'Observable et
accepte des intentions (appels de methodes) qui passent par SyncRepository.
Chaque intention asynchrone est lancee dans sa propre tache asyncio et
retourne cette tache ; l'interface n'attend jamais le resultat pour rester
reactive.

Ordonnancement : chaque type de recuperation (FetchKind) porte un numero de
sequence croissant. Un resultat dont le numero est inferieur au dernier
resultat applique pour ce type est ignore, de sorte qu'une requete lente
et obsolete n'ecrase jamais un resultat plus recent.

Usage:
    state = AppState(repository)
    state.movies.subscribe(render_list)
    await state.load_popular()
    state.set_offline(True)  # recharge la liste depuis le cache
"""

import asyncio
from collections import defaultdict
from collections.abc import Awaitable, Callable
from enum import Enum
from functools import partial
from typing import Any, Optional

from loguru import logger

from movieviewer.core.entities.media import Movie, MoviePage, Review
from movieviewer.core.entities.user import FavoriteMovie, User
from movieviewer.core.errors import (
    DuplicateUser,
    InvalidCredentials,
    MovieViewerError,
    NetworkFailure,
    RemoteFailure,
    StorageFailure,
)
from movieviewer.core.ports.api_clients import MovieCategory
from movieviewer.services.registration import RegistrationCheck, validate_registration
from movieviewer.services.sync_repository import SyncRepository
from movieviewer.state.observable import Observable


class FetchKind(str, Enum):
    """Types de recuperation, cle de l'ordonnancement par sequence."""

    POPULAR = "popular"
    TOP_RATED = "top_rated"
    NOW_PLAYING = "now_playing"
    UPCOMING = "upcoming"
    SEARCH = "search"
    DETAIL = "detail"
    REVIEWS = "reviews"
    SIMILAR = "similar"
    FAVORITES = "favorites"
    FAVORITE_FLAG = "favorite_flag"


class FetchStatus(str, Enum):
    """Etat d'un type de recuperation."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"
    OFFLINE_FALLBACK = "offline_fallback"


CATEGORY_KINDS = {
    MovieCategory.POPULAR: FetchKind.POPULAR,
    MovieCategory.TOP_RATED: FetchKind.TOP_RATED,
    MovieCategory.NOW_PLAYING: FetchKind.NOW_PLAYING,
    MovieCategory.UPCOMING: FetchKind.UPCOMING,
}

# Recuperations qui alimentent la liste principale (une seule visible a la fois)
LIST_KINDS = (*CATEGORY_KINDS.values(), FetchKind.SEARCH)

# Recuperations liees a l'ecran de detail courant
DETAIL_KINDS = (
    FetchKind.DETAIL,
    FetchKind.REVIEWS,
    FetchKind.SIMILAR,
    FetchKind.FAVORITE_FLAG,
)

OFFLINE_AUTH_MESSAGE = "Offline mode: Login and registration are unavailable"
LOGIN_REQUIRED_MESSAGE = "Log in to manage your favorite movies"
DETAIL_UNAVAILABLE_MESSAGE = "Movie details are not available offline"
DUPLICATE_USER_MESSAGE = "User ID already exists"

# Messages affiches ; le texte des erreurs internes n'est jamais montre
ERROR_MESSAGES: dict[type[MovieViewerError], str] = {
    NetworkFailure: "Network error. Check your connection and try again.",
    RemoteFailure: "Unable to load movies right now. Please try again.",
    StorageFailure: "Something went wrong while accessing saved data.",
    InvalidCredentials: "Invalid username or password",
    DuplicateUser: DUPLICATE_USER_MESSAGE,
}
GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again."


def user_message(error: MovieViewerError) -> str:
    """Message affichable pour une erreur des couches inferieures."""
    for error_type, message in ERROR_MESSAGES.items():
        if isinstance(error, error_type):
            return message
    return GENERIC_ERROR_MESSAGE


class AppState:
    """
    Etat de l'application et intentions de l'utilisateur.

    Les champs publics sont des Observable ; s'abonner transmet
    immediatement la valeur courante.
    """

    def __init__(self, repository: SyncRepository, offline: bool = False) -> None:
        """
        Initialise l'etat.

        Args:
            repository: Point d'acces unique aux donnees
            offline: Etat de connectivite initial
        """
        self._repository = repository
        repository.set_offline(offline)

        # Liste principale et pagination
        self.movies: Observable[list[Movie]] = Observable([])
        self.movies_page: Observable[Optional[MoviePage]] = Observable(None)

        # Ecran de detail
        self.movie_detail: Observable[Optional[Movie]] = Observable(None)
        self.reviews: Observable[list[Review]] = Observable([])
        self.similar_movies: Observable[list[Movie]] = Observable([])
        self.is_favorite: Observable[bool] = Observable(False)

        # Session et favoris
        self.current_user: Observable[Optional[User]] = Observable(None)
        self.favorites: Observable[list[FavoriteMovie]] = Observable([])
        self.login_error: Observable[Optional[str]] = Observable(None)
        self.registration_check: Observable[Optional[RegistrationCheck]] = Observable(None)

        # Indicateurs globaux
        self.error: Observable[Optional[str]] = Observable(None)
        self.is_loading: Observable[bool] = Observable(False)
        self.is_offline: Observable[bool] = Observable(offline)
        self.status: dict[FetchKind, Observable[FetchStatus]] = {
            kind: Observable(FetchStatus.IDLE) for kind in FetchKind
        }

        self._issued: dict[FetchKind, int] = {kind: 0 for kind in FetchKind}
        self._applied: dict[FetchKind, int] = {kind: 0 for kind in FetchKind}
        self._in_flight: dict[FetchKind, int] = {kind: 0 for kind in FetchKind}
        self._tasks: dict[FetchKind, set[asyncio.Task]] = defaultdict(set)
        self._intents: set[asyncio.Task] = set()

        self._current_category = MovieCategory.POPULAR
        self._displayed_movie_id: Optional[int] = None
        self._session_epoch = 0

    # ------------------- Ordonnancement ------------------- #

    def _launch(
        self, kind: FetchKind, work: Callable[[int], Awaitable[None]]
    ) -> asyncio.Task:
        """Lance une recuperation de type kind avec un nouveau numero de sequence."""
        self._issued[kind] += 1
        seq = self._issued[kind]
        self._in_flight[kind] += 1
        self.status[kind].value = FetchStatus.LOADING
        self._refresh_loading()

        task = asyncio.get_running_loop().create_task(work(seq))
        self._tasks[kind].add(task)
        task.add_done_callback(partial(self._on_fetch_done, kind))
        return task

    def _on_fetch_done(self, kind: FetchKind, task: asyncio.Task) -> None:
        self._tasks[kind].discard(task)
        self._in_flight[kind] -= 1
        if not task.cancelled() and task.exception() is not None:
            logger.opt(exception=task.exception()).error(f"Echec inattendu ({kind.value})")
        if self._in_flight[kind] == 0 and self.status[kind].value is FetchStatus.LOADING:
            # Toutes les requetes ont ete annulees ou ignorees
            self.status[kind].value = FetchStatus.IDLE
        self._refresh_loading()

    def _accept(self, kind: FetchKind, seq: int) -> bool:
        """Vrai si le resultat #seq est plus recent que le dernier applique."""
        if seq <= self._applied[kind]:
            logger.debug(f"Resultat obsolete ignore ({kind.value} #{seq})")
            return False
        self._applied[kind] = seq
        return True

    def _cancel(self, *kinds: FetchKind) -> None:
        """Annule les recuperations en cours et ignore leurs resultats."""
        for kind in kinds:
            self._applied[kind] = self._issued[kind]
            for task in list(self._tasks[kind]):
                task.cancel()

    def _refresh_loading(self) -> None:
        self.is_loading.value = any(count > 0 for count in self._in_flight.values())

    def _spawn(self, coro: Awaitable[Any]) -> asyncio.Task:
        """Lance une intention non ordonnancee (mutation, authentification)."""
        task = asyncio.get_running_loop().create_task(coro)
        self._intents.add(task)
        task.add_done_callback(self._intents.discard)
        return task

    def _publish_error(self, kind: FetchKind, error: MovieViewerError) -> None:
        logger.warning(f"{kind.value}: {error}")
        self.error.value = user_message(error)
        self.status[kind].value = FetchStatus.ERROR

    # ------------------- Listes de films ------------------- #

    def load_category(
        self, category: MovieCategory, page: Optional[int] = None
    ) -> asyncio.Task:
        """Charge une liste de films (remplace la liste affichee)."""
        kind = CATEGORY_KINDS[category]
        self._current_category = category
        return self._launch_list(
            kind, partial(self._repository.fetch_category, category, page)
        )

    def load_popular(self, page: Optional[int] = None) -> asyncio.Task:
        return self.load_category(MovieCategory.POPULAR, page)

    def load_top_rated(self, page: Optional[int] = None) -> asyncio.Task:
        return self.load_category(MovieCategory.TOP_RATED, page)

    def load_now_playing(self, page: Optional[int] = None) -> asyncio.Task:
        return self.load_category(MovieCategory.NOW_PLAYING, page)

    def load_upcoming(self, page: Optional[int] = None) -> asyncio.Task:
        return self.load_category(MovieCategory.UPCOMING, page)

    def search(self, query: str, page: Optional[int] = None) -> asyncio.Task:
        """Recherche par titre (cache local quand hors-ligne)."""
        return self._launch_list(
            FetchKind.SEARCH, partial(self._repository.search, query, page)
        )

    def _launch_list(
        self, kind: FetchKind, fetch: Callable[[], Awaitable[MoviePage]]
    ) -> asyncio.Task:
        # Changer de liste abandonne les autres listes en cours
        self._cancel(*(other for other in LIST_KINDS if other is not kind))
        return self._launch(kind, partial(self._load_movies, kind, fetch))

    async def _load_movies(
        self,
        kind: FetchKind,
        fetch: Callable[[], Awaitable[MoviePage]],
        seq: int,
    ) -> None:
        try:
            page = await fetch()
        except MovieViewerError as e:
            if self._accept(kind, seq):
                self._publish_error(kind, e)
            return

        if not self._accept(kind, seq):
            return
        self.movies_page.value = page
        self.movies.value = list(page.results)
        self.error.value = None
        self.status[kind].value = (
            FetchStatus.OFFLINE_FALLBACK if page.from_cache else FetchStatus.SUCCESS
        )

    # ------------------- Detail d'un film ------------------- #

    def open_movie(self, movie_id: int) -> asyncio.Future:
        """
        Ouvre l'ecran de detail : detail, critiques, films similaires et
        etat favori sont charges en parallele.
        """
        if movie_id != self._displayed_movie_id:
            self.close_movie()
        self._displayed_movie_id = movie_id
        return asyncio.gather(
            self.load_detail(movie_id),
            self.load_reviews(movie_id),
            self.load_similar(movie_id),
            self.check_favorite(movie_id),
            return_exceptions=True,
        )

    def close_movie(self) -> None:
        """Quitte l'ecran de detail et abandonne ses chargements."""
        self._cancel(*DETAIL_KINDS)
        self._displayed_movie_id = None
        self.movie_detail.value = None
        self.reviews.value = []
        self.similar_movies.value = []
        self.is_favorite.value = False

    def load_detail(self, movie_id: int) -> asyncio.Task:
        self._displayed_movie_id = movie_id
        return self._launch(FetchKind.DETAIL, partial(self._load_detail, movie_id))

    async def _load_detail(self, movie_id: int, seq: int) -> None:
        kind = FetchKind.DETAIL
        try:
            movie = await self._repository.fetch_detail(movie_id)
        except MovieViewerError as e:
            if self._accept(kind, seq):
                self._publish_error(kind, e)
            return

        if not self._accept(kind, seq):
            return
        self.movie_detail.value = movie
        if not self._repository.offline:
            self.error.value = None
            self.status[kind].value = FetchStatus.SUCCESS
            return
        if movie is None:
            self.error.value = DETAIL_UNAVAILABLE_MESSAGE
        self.status[kind].value = FetchStatus.OFFLINE_FALLBACK

    def load_reviews(self, movie_id: int) -> asyncio.Task:
        return self._launch(FetchKind.REVIEWS, partial(self._load_reviews, movie_id))

    async def _load_reviews(self, movie_id: int, seq: int) -> None:
        reviews = await self._repository.fetch_reviews(movie_id)
        if self._accept(FetchKind.REVIEWS, seq):
            self.reviews.value = reviews
            self.status[FetchKind.REVIEWS].value = FetchStatus.SUCCESS

    def load_similar(self, movie_id: int) -> asyncio.Task:
        return self._launch(FetchKind.SIMILAR, partial(self._load_similar, movie_id))

    async def _load_similar(self, movie_id: int, seq: int) -> None:
        page = await self._repository.fetch_similar(movie_id)
        if self._accept(FetchKind.SIMILAR, seq):
            self.similar_movies.value = list(page.results)
            self.status[FetchKind.SIMILAR].value = FetchStatus.SUCCESS

    # ------------------- Favoris ------------------- #

    def refresh_favorites(self) -> asyncio.Task:
        """Recharge les favoris de l'utilisateur connecte."""
        return self._launch(FetchKind.FAVORITES, self._load_favorites)

    async def _load_favorites(self, seq: int) -> None:
        kind = FetchKind.FAVORITES
        user = self.current_user.value
        if user is None:
            if self._accept(kind, seq):
                self.favorites.value = []
                self.status[kind].value = FetchStatus.IDLE
            return

        try:
            favorites = await self._repository.list_favorites(user.user_id)
        except MovieViewerError as e:
            if self._accept(kind, seq):
                self._publish_error(kind, e)
            return

        if self._accept(kind, seq) and self.current_user.value == user:
            self.favorites.value = favorites
            self.status[kind].value = FetchStatus.SUCCESS

    def check_favorite(self, movie_id: int) -> asyncio.Task:
        """Met a jour is_favorite pour le film affiche."""
        return self._launch(
            FetchKind.FAVORITE_FLAG, partial(self._check_favorite, movie_id)
        )

    async def _check_favorite(self, movie_id: int, seq: int) -> None:
        user = self.current_user.value
        flag = False
        if user is not None:
            flag = await self._repository.is_favorite(user.user_id, movie_id)
        if self._accept(FetchKind.FAVORITE_FLAG, seq) and movie_id == self._displayed_movie_id:
            self.is_favorite.value = flag
            self.status[FetchKind.FAVORITE_FLAG].value = FetchStatus.SUCCESS

    def add_favorite(self, movie: Movie) -> asyncio.Task:
        """Ajoute un film aux favoris de l'utilisateur connecte."""
        return self._spawn(self._add_favorite(movie))

    async def _add_favorite(self, movie: Movie) -> bool:
        user = self.current_user.value
        if user is None:
            self.error.value = LOGIN_REQUIRED_MESSAGE
            return False
        try:
            await self._repository.add_favorite(user, movie)
        except MovieViewerError as e:
            logger.warning(f"Ajout du favori {movie.id} impossible: {e}")
            self.error.value = user_message(e)
            return False
        await self._refresh_favorite_state()
        return True

    def remove_favorite(self, movie_id: int) -> asyncio.Task:
        """Retire un film des favoris (sans effet s'il n'y est pas)."""
        return self._spawn(self._remove_favorite(movie_id))

    async def _remove_favorite(self, movie_id: int) -> bool:
        user = self.current_user.value
        if user is None:
            self.error.value = LOGIN_REQUIRED_MESSAGE
            return False
        try:
            await self._repository.remove_favorite(user.user_id, movie_id)
        except MovieViewerError as e:
            logger.warning(f"Suppression du favori {movie_id} impossible: {e}")
            self.error.value = user_message(e)
            return False
        await self._refresh_favorite_state()
        return True

    async def _refresh_favorite_state(self) -> None:
        """Recharge les favoris et l'etat favori du film affiche."""
        tasks = [self.refresh_favorites()]
        if self._displayed_movie_id is not None:
            tasks.append(self.check_favorite(self._displayed_movie_id))
        await asyncio.gather(*tasks, return_exceptions=True)

    # ------------------- Authentification ------------------- #

    def check_registration(
        self,
        user_id: str,
        password: str,
        confirm_password: str,
        preferred_name: str,
    ) -> RegistrationCheck:
        """
        Valide le formulaire d'inscription et publie le resultat.

        A appeler avant register() ; register() ne reapplique pas les
        regles du formulaire.
        """
        check = validate_registration(user_id, password, confirm_password, preferred_name)
        self.registration_check.value = check
        return check

    def register(self, user_id: str, password: str, preferred_name: str) -> asyncio.Task:
        """Inscrit un utilisateur ; la tache retourne True en cas de succes."""
        return self._spawn(self._register(user_id, password, preferred_name))

    async def _register(self, user_id: str, password: str, preferred_name: str) -> bool:
        if self.is_offline.value:
            self.login_error.value = OFFLINE_AUTH_MESSAGE
            return False

        try:
            await self._repository.register(user_id, password, preferred_name)
        except DuplicateUser:
            self.login_error.value = DUPLICATE_USER_MESSAGE
            return False
        except MovieViewerError as e:
            logger.warning(f"Inscription impossible pour {user_id}: {e}")
            self.login_error.value = "Registration failed. Please try again."
            return False

        self.login_error.value = None
        return True

    def login(self, user_id: str, password: str) -> asyncio.Task:
        """Ouvre une session ; la tache retourne True en cas de succes."""
        return self._spawn(self._login(user_id, password))

    async def _login(self, user_id: str, password: str) -> bool:
        if self.is_offline.value:
            self.login_error.value = OFFLINE_AUTH_MESSAGE
            return False

        epoch = self._session_epoch
        try:
            user = await self._repository.login(user_id, password)
        except MovieViewerError as e:
            self.login_error.value = user_message(e)
            return False

        if epoch != self._session_epoch:
            # Deconnexion pendant la verification
            return False
        self.current_user.value = user
        self.login_error.value = None
        await self._refresh_favorite_state()
        return True

    def logout(self) -> None:
        """Ferme la session ; favoris et etat favori sont vides immediatement."""
        self._session_epoch += 1
        self._cancel(FetchKind.FAVORITES, FetchKind.FAVORITE_FLAG)
        self.current_user.value = None
        self.favorites.value = []
        self.is_favorite.value = False

    async def check_user_id_exists(self, user_id: str) -> bool:
        """
        Vrai si l'identifiant est deja pris (validation avant soumission).

        Une erreur de stockage est publiee dans error et renvoie False.
        """
        try:
            return await self._repository.check_user_id_exists(user_id)
        except MovieViewerError as e:
            self.error.value = user_message(e)
            return False

    # ------------------- Connectivite ------------------- #

    def set_offline(self, offline: bool) -> Optional[asyncio.Task]:
        """
        Pousse l'etat de connectivite.

        Passer hors-ligne recharge immediatement la liste depuis le cache.

        Returns:
            La tache de rechargement, ou None en repassant en ligne
        """
        self._repository.set_offline(offline)
        self.is_offline.value = offline
        if offline:
            return self.load_category(self._current_category)
        return None

    # ------------------- Cycle de vie ------------------- #

    async def aclose(self) -> None:
        """Annule toutes les taches en cours et attend leur fin."""
        pending = [task for tasks in self._tasks.values() for task in tasks]
        pending.extend(self._intents)
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
