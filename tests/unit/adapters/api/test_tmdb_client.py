"""
Tests for TMDBClient - TMDB API client implementation.

Uses respx to mock httpx calls and verifies:
- List endpoints return MoviePage with pagination metadata
- api_key is sent on every request, page only when requested
- Detail returns full Movie with genres, runtime and revenue
- Transport errors map to NetworkFailure, HTTP errors to RemoteFailure
"""

import httpx
import pytest
import respx

from movieviewer.adapters.api.tmdb_client import TMDBClient
from movieviewer.core.entities.media import Genre, Movie, MoviePage, Review
from movieviewer.core.errors import NetworkFailure, NotFound, RemoteFailure
from movieviewer.core.ports.api_clients import IMovieAPIClient, MovieCategory
from tests.fixtures.tmdb_responses import (
    TMDB_MOVIE_DETAIL_RESPONSE,
    TMDB_MOVIE_SPARSE,
    TMDB_NOT_FOUND_RESPONSE,
    TMDB_POPULAR_RESPONSE,
    TMDB_REVIEWS_RESPONSE,
    TMDB_SEARCH_EMPTY_RESPONSE,
    TMDB_SEARCH_RESPONSE,
    TMDB_SIMILAR_RESPONSE,
    TMDB_TOP_RATED_PAGE_2_RESPONSE,
    TMDB_UNAUTHORIZED_RESPONSE,
)

BASE = "https://api.themoviedb.org/3"


@pytest.fixture
def tmdb_client() -> TMDBClient:
    """TMDBClient instance with a test key."""
    return TMDBClient(api_key="test_api_key")


class TestTMDBClientInterface:
    """Test TMDBClient implements IMovieAPIClient correctly."""

    def test_implements_interface(self, tmdb_client: TMDBClient):
        assert isinstance(tmdb_client, IMovieAPIClient)

    def test_default_base_url(self):
        assert TMDBClient.TMDB_BASE_URL == BASE


class TestTMDBLists:
    """Tests for the paginated list endpoints."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_fetch_popular_returns_page(self, tmdb_client: TMDBClient):
        """fetch_popular() should parse the page envelope and its movies."""
        route = respx.get(f"{BASE}/movie/popular").mock(
            return_value=httpx.Response(200, json=TMDB_POPULAR_RESPONSE)
        )

        page = await tmdb_client.fetch_popular()

        assert isinstance(page, MoviePage)
        assert page.page == 1
        assert page.total_pages == 500
        assert page.total_results == 10000
        assert page.from_cache is False
        assert [m.id for m in page.results] == [27205, 157336]
        assert page.results[0].title == "Inception"
        assert page.results[0].release_date == "2010-07-15"

        request = route.calls.last.request
        assert request.url.params["api_key"] == "test_api_key"
        assert "page" not in request.url.params

    @pytest.mark.asyncio
    @respx.mock
    async def test_fetch_top_rated_sends_page(self, tmdb_client: TMDBClient):
        """An explicit page number is sent as query parameter."""
        route = respx.get(f"{BASE}/movie/top_rated").mock(
            return_value=httpx.Response(200, json=TMDB_TOP_RATED_PAGE_2_RESPONSE)
        )

        page = await tmdb_client.fetch_top_rated(page=2)

        assert route.calls.last.request.url.params["page"] == "2"
        assert page.page == 2
        assert page.results[0].title == "The Godfather"

    @pytest.mark.parametrize(
        "category,path",
        [
            (MovieCategory.NOW_PLAYING, "/movie/now_playing"),
            (MovieCategory.UPCOMING, "/movie/upcoming"),
        ],
    )
    @pytest.mark.asyncio
    @respx.mock
    async def test_fetch_category_paths(
        self, tmdb_client: TMDBClient, category: MovieCategory, path: str
    ):
        route = respx.get(f"{BASE}{path}").mock(
            return_value=httpx.Response(200, json=TMDB_POPULAR_RESPONSE)
        )

        await tmdb_client.fetch_category(category)

        assert route.called

    @pytest.mark.asyncio
    @respx.mock
    async def test_list_genres_rebuilt_from_ids(self, tmdb_client: TMDBClient):
        """List payloads only carry genre_ids; names come from the mapping."""
        respx.get(f"{BASE}/movie/popular").mock(
            return_value=httpx.Response(200, json=TMDB_POPULAR_RESPONSE)
        )

        page = await tmdb_client.fetch_popular()

        assert page.results[0].genres == (
            Genre(28, "Action"),
            Genre(878, "Science Fiction"),
            Genre(12, "Adventure"),
        )

    @pytest.mark.asyncio
    @respx.mock
    async def test_sparse_movie_defaults(self, tmdb_client: TMDBClient):
        """Empty release date becomes None, unknown genre id gets 'Unknown'."""
        respx.get(f"{BASE}/movie/upcoming").mock(
            return_value=httpx.Response(
                200, json={"page": 1, "results": [TMDB_MOVIE_SPARSE]}
            )
        )

        page = await tmdb_client.fetch_upcoming()

        movie = page.results[0]
        assert movie.release_date is None
        assert movie.year is None
        assert movie.genres == (Genre(99999, "Unknown"),)
        assert movie.poster_url() is None
        assert page.total_results == 1


class TestTMDBDetail:
    """Tests for fetch_detail(), fetch_reviews() and fetch_similar()."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_fetch_detail_returns_full_movie(self, tmdb_client: TMDBClient):
        respx.get(f"{BASE}/movie/27205").mock(
            return_value=httpx.Response(200, json=TMDB_MOVIE_DETAIL_RESPONSE)
        )

        movie = await tmdb_client.fetch_detail(27205)

        assert isinstance(movie, Movie)
        assert movie.id == 27205
        assert movie.runtime == 148
        assert movie.revenue == 825532764
        assert movie.genres[1] == Genre(878, "Science Fiction")
        assert movie.year == 2010
        assert movie.poster_url("original") == (
            "https://image.tmdb.org/t/p/original/oYuLEt3zVCKq57qu2F8dT7NIa6f.jpg"
        )

    @pytest.mark.asyncio
    @respx.mock
    async def test_fetch_detail_404_raises_not_found(self, tmdb_client: TMDBClient):
        respx.get(f"{BASE}/movie/1").mock(
            return_value=httpx.Response(404, json=TMDB_NOT_FOUND_RESPONSE)
        )

        with pytest.raises(NotFound):
            await tmdb_client.fetch_detail(1)

    @pytest.mark.asyncio
    @respx.mock
    async def test_fetch_reviews(self, tmdb_client: TMDBClient):
        respx.get(f"{BASE}/movie/27205/reviews").mock(
            return_value=httpx.Response(200, json=TMDB_REVIEWS_RESPONSE)
        )

        reviews = await tmdb_client.fetch_reviews(27205)

        assert len(reviews) == 2
        assert reviews[0] == Review(
            id="576bd0d0c3a3681be6000a63",
            author="talisencrw",
            content="A remarkable film that rewards repeated viewings.",
            created_at="2016-06-23T12:47:28.522Z",
        )

    @pytest.mark.asyncio
    @respx.mock
    async def test_fetch_similar(self, tmdb_client: TMDBClient):
        respx.get(f"{BASE}/movie/27205/similar").mock(
            return_value=httpx.Response(200, json=TMDB_SIMILAR_RESPONSE)
        )

        page = await tmdb_client.fetch_similar(27205)

        assert [m.title for m in page.results] == ["The Matrix"]


class TestTMDBSearch:
    """Tests for TMDBClient.search() method."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_search_sends_query(self, tmdb_client: TMDBClient):
        route = respx.get(f"{BASE}/search/movie").mock(
            return_value=httpx.Response(200, json=TMDB_SEARCH_RESPONSE)
        )

        page = await tmdb_client.search("Avatar")

        params = route.calls.last.request.url.params
        assert params["query"] == "Avatar"
        assert params["api_key"] == "test_api_key"
        assert [m.id for m in page.results] == [19995, 76600]

    @pytest.mark.asyncio
    @respx.mock
    async def test_search_empty(self, tmdb_client: TMDBClient):
        respx.get(f"{BASE}/search/movie").mock(
            return_value=httpx.Response(200, json=TMDB_SEARCH_EMPTY_RESPONSE)
        )

        page = await tmdb_client.search("NonExistentMovie12345")

        assert page.results == ()
        assert page.total_results == 0


class TestTMDBErrors:
    """Failures are translated into the error taxonomy."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_connect_error_is_network_failure(self, tmdb_client: TMDBClient):
        respx.get(f"{BASE}/movie/popular").mock(side_effect=httpx.ConnectError("down"))

        with pytest.raises(NetworkFailure):
            await tmdb_client.fetch_popular()

    @pytest.mark.asyncio
    @respx.mock
    async def test_timeout_is_network_failure(self, tmdb_client: TMDBClient):
        respx.get(f"{BASE}/movie/popular").mock(side_effect=httpx.ReadTimeout("slow"))

        with pytest.raises(NetworkFailure):
            await tmdb_client.fetch_popular()

    @pytest.mark.asyncio
    @respx.mock
    async def test_401_is_remote_failure_with_status(self, tmdb_client: TMDBClient):
        respx.get(f"{BASE}/movie/popular").mock(
            return_value=httpx.Response(401, json=TMDB_UNAUTHORIZED_RESPONSE)
        )

        with pytest.raises(RemoteFailure) as exc_info:
            await tmdb_client.fetch_popular()

        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    @respx.mock
    async def test_invalid_json_is_remote_failure(self, tmdb_client: TMDBClient):
        respx.get(f"{BASE}/movie/popular").mock(
            return_value=httpx.Response(200, text="<html>maintenance</html>")
        )

        with pytest.raises(RemoteFailure):
            await tmdb_client.fetch_popular()

    @pytest.mark.asyncio
    @respx.mock
    async def test_missing_results_is_remote_failure(self, tmdb_client: TMDBClient):
        respx.get(f"{BASE}/movie/popular").mock(
            return_value=httpx.Response(200, json={"page": 1})
        )

        with pytest.raises(RemoteFailure):
            await tmdb_client.fetch_popular()

    @pytest.mark.asyncio
    @respx.mock
    async def test_detail_500_stays_remote_failure(self, tmdb_client: TMDBClient):
        respx.get(f"{BASE}/movie/27205").mock(return_value=httpx.Response(500))

        with pytest.raises(RemoteFailure) as exc_info:
            await tmdb_client.fetch_detail(27205)

        assert not isinstance(exc_info.value, NotFound)
        assert exc_info.value.status_code == 500


class TestTMDBMalformedPayloads:
    """Structurally invalid items are reported as RemoteFailure."""

    @pytest.mark.parametrize(
        "genres",
        [
            [{"name": "Action"}],
            "Action",
            [28],
            [{"id": "not-a-number", "name": "Action"}],
        ],
    )
    @pytest.mark.asyncio
    @respx.mock
    async def test_detail_bad_genres(self, tmdb_client: TMDBClient, genres):
        respx.get(f"{BASE}/movie/1").mock(
            return_value=httpx.Response(200, json={"id": 1, "title": "X", "genres": genres})
        )

        with pytest.raises(RemoteFailure) as exc_info:
            await tmdb_client.fetch_detail(1)

        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    @respx.mock
    async def test_detail_non_numeric_id(self, tmdb_client: TMDBClient):
        respx.get(f"{BASE}/movie/1").mock(
            return_value=httpx.Response(200, json={"id": "abc", "title": "X"})
        )

        with pytest.raises(RemoteFailure):
            await tmdb_client.fetch_detail(1)

    @pytest.mark.asyncio
    @respx.mock
    async def test_list_item_without_id(self, tmdb_client: TMDBClient):
        respx.get(f"{BASE}/movie/popular").mock(
            return_value=httpx.Response(
                200, json={"page": 1, "results": [{"title": "No id"}]}
            )
        )

        with pytest.raises(RemoteFailure):
            await tmdb_client.fetch_popular()

    @pytest.mark.asyncio
    @respx.mock
    async def test_list_bad_genre_ids(self, tmdb_client: TMDBClient):
        respx.get(f"{BASE}/movie/upcoming").mock(
            return_value=httpx.Response(
                200,
                json={"page": 1, "results": [{"id": 1, "title": "X", "genre_ids": [None]}]},
            )
        )

        with pytest.raises(RemoteFailure):
            await tmdb_client.fetch_upcoming()

    @pytest.mark.asyncio
    @respx.mock
    async def test_similar_results_not_objects(self, tmdb_client: TMDBClient):
        respx.get(f"{BASE}/movie/27205/similar").mock(
            return_value=httpx.Response(200, json={"page": 1, "results": ["Inception"]})
        )

        with pytest.raises(RemoteFailure):
            await tmdb_client.fetch_similar(27205)

    @pytest.mark.asyncio
    @respx.mock
    async def test_reviews_results_not_a_list(self, tmdb_client: TMDBClient):
        respx.get(f"{BASE}/movie/27205/reviews").mock(
            return_value=httpx.Response(200, json={"results": {"id": "r1"}})
        )

        with pytest.raises(RemoteFailure):
            await tmdb_client.fetch_reviews(27205)


class TestTMDBClientLifecycle:
    """Tests for lazy client creation and close()."""

    @pytest.mark.asyncio
    async def test_close_without_client_is_noop(self, tmdb_client: TMDBClient):
        await tmdb_client.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_client_recreated_after_close(self, tmdb_client: TMDBClient):
        respx.get(f"{BASE}/movie/popular").mock(
            return_value=httpx.Response(200, json=TMDB_POPULAR_RESPONSE)
        )

        await tmdb_client.fetch_popular()
        await tmdb_client.close()
        page = await tmdb_client.fetch_popular()

        assert len(page.results) == 2
        await tmdb_client.close()
