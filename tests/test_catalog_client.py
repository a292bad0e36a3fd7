"""Tests for the Spotify catalog client.

HTTP traffic is served by ``httpx.MockTransport`` handlers, so no request
leaves the process.
"""

import asyncio
import json
import random

import httpx
import pytest
from conftest import make_recommendation

from mood_radio.catalog.client import (
    TOKEN_URL,
    CatalogClient,
    SpotifyCatalogClient,
)
from mood_radio.core.exceptions import AuthError, NetworkError
from mood_radio.core.models import InputType, MoodAnalysis, MoodParams
from mood_radio.recommend.pipeline import FallbackPipeline

TRACK_ITEM = {
    "id": "t1",
    "name": "Weightless",
    "artists": [{"name": "Marconi Union"}],
    "album": {"name": "Weightless", "images": [{"url": "https://i.scdn.co/image/w"}]},
    "preview_url": None,
    "external_urls": {"spotify": "https://open.spotify.com/track/t1"},
}


def make_client(handler, **kwargs):
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    kwargs.setdefault("access_token", "user-token")
    kwargs.setdefault("redirect_uri", "http://localhost:3000/callback")
    return SpotifyCatalogClient(http_client=http, **kwargs)


class Recorder:
    """MockTransport handler that records requests and replays responses."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        return response


# =============================================================================
# Search and recommendations
# =============================================================================


class TestSearch:
    def test_search_tracks(self):
        recorder = Recorder(httpx.Response(200, json={"tracks": {"items": [TRACK_ITEM, None]}}))
        client = make_client(recorder, market="GB", limit=7)

        tracks = asyncio.run(client.search_tracks("calm ambient"))

        assert [t.name for t in tracks] == ["Weightless"]
        request = recorder.requests[0]
        assert request.url.path == "/v1/search"
        assert request.url.params["q"] == "calm ambient"
        assert request.url.params["type"] == "track"
        assert request.url.params["limit"] == "7"
        assert request.url.params["market"] == "GB"
        assert request.headers["Authorization"] == "Bearer user-token"

    def test_no_results(self):
        client = make_client(Recorder(httpx.Response(200, json={"tracks": {"items": []}})))
        assert asyncio.run(client.search_tracks("zzz")) == []

    @pytest.mark.parametrize("status", [401, 403])
    def test_auth_failure_clears_token(self, status):
        client = make_client(Recorder(httpx.Response(status)))

        with pytest.raises(AuthError) as exc_info:
            asyncio.run(client.search_tracks("calm"))

        assert "accounts.spotify.com/authorize" in exc_info.value.login_url
        with pytest.raises(AuthError):
            asyncio.run(client.get_access_token())

    def test_server_error_is_network_error(self):
        client = make_client(Recorder(httpx.Response(502)))
        with pytest.raises(NetworkError):
            asyncio.run(client.search_tracks("calm"))

    def test_transport_error_is_network_error(self):
        client = make_client(Recorder(httpx.ConnectError("refused")))
        with pytest.raises(NetworkError):
            asyncio.run(client.search_tracks("calm"))

    def test_satisfies_protocol(self):
        assert isinstance(make_client(Recorder(httpx.Response(200))), CatalogClient)


class TestRecommendations:
    def test_seed_request(self):
        recorder = Recorder(httpx.Response(200, json={"tracks": [TRACK_ITEM]}))
        client = make_client(recorder)
        seeds = ["s1", "s2", "s3", "s4", "s5", "s6"]

        tracks = asyncio.run(
            client.get_recommendations(seeds, MoodParams(energy=0.9, valence=0.8, danceability=0.7))
        )

        assert [t.id for t in tracks] == ["t1"]
        params = recorder.requests[0].url.params
        assert params["seed_tracks"] == "s1,s2,s3,s4,s5"
        assert params["target_energy"] == "0.9"
        assert params["target_valence"] == "0.8"
        assert params["target_danceability"] == "0.7"

    def test_no_seeds_skips_request(self):
        recorder = Recorder(httpx.Response(200, json={"tracks": [TRACK_ITEM]}))
        client = make_client(recorder)

        assert asyncio.run(client.get_recommendations([], MoodParams())) == []
        assert recorder.requests == []


# =============================================================================
# Authentication
# =============================================================================


class TestClientCredentials:
    def setup_method(self):
        self.now = 1000.0

    def clock(self):
        return self.now

    def _handler(self, token_responses):
        calls = {"token": 0}

        def handler(request):
            if str(request.url) == TOKEN_URL:
                calls["token"] += 1
                return token_responses.pop(0)
            return httpx.Response(200, json={"tracks": {"items": []}})

        return handler, calls

    def test_token_is_fetched_and_cached(self):
        handler, calls = self._handler([
            httpx.Response(200, json={"access_token": "app-1", "expires_in": 3600}),
        ])
        client = make_client(
            handler, access_token=None, client_credentials=("id", "secret"), clock=self.clock
        )

        assert asyncio.run(client.get_access_token()) == "app-1"
        assert asyncio.run(client.get_access_token()) == "app-1"
        assert calls["token"] == 1

    def test_token_refreshed_near_expiry(self):
        handler, calls = self._handler([
            httpx.Response(200, json={"access_token": "app-1", "expires_in": 3600}),
            httpx.Response(200, json={"access_token": "app-2", "expires_in": 3600}),
        ])
        client = make_client(
            handler, access_token=None, client_credentials=("id", "secret"), clock=self.clock
        )

        asyncio.run(client.get_access_token())
        self.now += 3600 - 30
        assert asyncio.run(client.get_access_token()) == "app-2"
        assert calls["token"] == 2

    def test_token_request_uses_basic_auth(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"access_token": "app-1", "expires_in": 3600})

        client = make_client(handler, access_token=None, client_credentials=("id", "secret"))
        asyncio.run(client.get_access_token())

        assert seen[0].method == "POST"
        assert seen[0].headers["Authorization"].startswith("Basic ")
        assert b"grant_type=client_credentials" in seen[0].content

    def test_rejected_credentials(self):
        handler, _ = self._handler([httpx.Response(400, json={"error": "invalid_client"})])
        client = make_client(handler, access_token=None, client_credentials=("id", "bad"))

        with pytest.raises(AuthError):
            asyncio.run(client.get_access_token())

    def test_no_credentials(self):
        client = make_client(Recorder(httpx.Response(200)), access_token=None)
        with pytest.raises(AuthError):
            asyncio.run(client.search_tracks("calm"))

    def test_login_url(self):
        client = make_client(Recorder(httpx.Response(200)), client_credentials=("my-id", "s"))
        url = httpx.URL(client.login_url())

        assert url.host == "accounts.spotify.com"
        assert url.params["client_id"] == "my-id"
        assert url.params["response_type"] == "code"
        assert url.params["redirect_uri"] == "http://localhost:3000/callback"
        assert "playlist-modify-private" in url.params["scope"].split()


# =============================================================================
# Malformed responses
# =============================================================================


class TestMalformedResponses:
    def test_non_json_body_is_network_error(self):
        client = make_client(Recorder(httpx.Response(200, text="<html>gateway</html>")))
        with pytest.raises(NetworkError):
            asyncio.run(client.search_tracks("calm"))

    def test_non_object_body_is_network_error(self):
        client = make_client(Recorder(httpx.Response(200, json=["not", "an", "object"])))
        with pytest.raises(NetworkError):
            asyncio.run(client.search_tracks("calm"))

    def test_recommendation_items_without_id_skipped(self):
        broken = {key: value for key, value in TRACK_ITEM.items() if key != "id"}
        client = make_client(Recorder(httpx.Response(200, json={"tracks": [broken, TRACK_ITEM]})))

        tracks = asyncio.run(client.get_recommendations(["s1"], MoodParams()))

        assert [t.id for t in tracks] == ["t1"]

    @pytest.mark.parametrize("response", [
        httpx.Response(200, json={"token_type": "Bearer"}),
        httpx.Response(200, text="<html>gateway</html>"),
    ])
    def test_bad_token_response_is_network_error(self, response):
        client = make_client(
            Recorder(response), access_token=None, client_credentials=("id", "secret")
        )
        with pytest.raises(NetworkError):
            asyncio.run(client.get_access_token())

    def test_pipeline_skips_stage_with_garbled_body(self):
        recorder = Recorder(
            httpx.Response(200, text="<html>gateway</html>"),
            httpx.Response(200, json={"tracks": {"items": [TRACK_ITEM]}}),
        )
        pipeline = FallbackPipeline(make_client(recorder), rng=random.Random(0))
        analysis = MoodAnalysis(primary_mood="calm", keywords=("calm",), input_type=InputType.MOOD)

        stage, tracks = asyncio.run(pipeline.search(analysis))

        assert stage.name == "focused"
        assert [t.id for t in tracks] == ["t1"]
        assert len(recorder.requests) == 2


# =============================================================================
# Playlists
# =============================================================================


class TestPlaylists:
    def test_create_playlist_from_recommendations(self):
        requests = []

        def handler(request):
            requests.append(request)
            if request.url.path == "/v1/me":
                return httpx.Response(200, json={"id": "user-1"})
            if request.url.path == "/v1/users/user-1/playlists":
                return httpx.Response(201, json={"id": "pl-1"})
            return httpx.Response(201, json={"snapshot_id": "snap"})

        client = make_client(handler)
        recs = [make_recommendation(str(i)) for i in range(150)]

        playlist_id = asyncio.run(client.create_playlist_from_recommendations(recs, "Calm"))

        assert playlist_id == "pl-1"
        created = json.loads(requests[1].content)
        assert created == {
            "name": "Calm",
            "description": "Mood Radio playlist with 150 tracks",
            "public": False,
        }
        batches = [json.loads(r.content)["uris"] for r in requests[2:]]
        assert [len(b) for b in batches] == [100, 50]
        assert batches[0][0] == "spotify:track:0"

    def test_owned_http_client_closed(self):
        client = SpotifyCatalogClient(access_token="t")

        async def use():
            async with client:
                pass

        asyncio.run(use())
        assert client._http.is_closed
