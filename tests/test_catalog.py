"""Tests for core/catalog.py — OpenSubtitles REST client."""

from unittest.mock import MagicMock

import pytest
import requests

from osd.core.catalog import API_URL, CatalogClient, DownloadGrant
from osd.core.errors import (
    ConfigurationError,
    DecodeError,
    NetworkError,
    NoResultsError,
    RemoteError,
    RequestTimeout,
)


def search_body(*records, total_count=None):
    data = [
        {"attributes": {"moviehash_match": matched,
                        "files": [{"file_name": name, "file_id": file_id}]}}
        for name, file_id, matched in records
    ]
    return {"total_count": len(data) if total_count is None else total_count, "data": data}


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def client(session):
    return CatalogClient("KEY", "osd test", session=session, timeout=5)


class TestClientSetup:
    def test_empty_api_key(self, session):
        with pytest.raises(ConfigurationError):
            CatalogClient("", "osd test", session=session)

    def test_empty_user_agent(self, session):
        with pytest.raises(ConfigurationError):
            CatalogClient("KEY", "", session=session)


# ─── search ──────────────────────────────────────────────────────────

class TestSearch:
    def test_request_shape(self, client, session, make_response):
        session.request.return_value = make_response(json_data=search_body(("a.srt", 1, False)))
        client.search("Some.Movie", "0123456789abcdef", "en")

        args, kwargs = session.request.call_args
        assert args == ("GET", f"{API_URL}/subtitles")
        assert kwargs["params"] == {"languages": "en", "query": "Some.Movie",
                                    "moviehash": "0123456789abcdef"}
        assert kwargs["headers"] == {"User-Agent": "osd test",
                                     "Content-Type": "application/json",
                                     "Api-Key": "KEY"}
        assert kwargs["timeout"] == 5

    def test_title_and_hash_are_independent(self, client, session, make_response):
        session.request.return_value = make_response(json_data=search_body(("a.srt", 1, False)))

        client.search(title="Custom", fingerprint=None, language="pt-br")
        assert session.request.call_args[1]["params"] == {"languages": "pt-br", "query": "Custom"}

        client.search(title=None, fingerprint="abc", language="en")
        assert session.request.call_args[1]["params"] == {"languages": "en", "moviehash": "abc"}

    def test_candidates_keep_api_order(self, client, session, make_response):
        session.request.return_value = make_response(json_data=search_body(
            ("first.srt", 10, False), ("second.srt", 20, True), ("third.srt", 30, False)))
        candidates = client.search("x", "y")
        assert [c.file_id for c in candidates] == [10, 20, 30]
        assert [c.name for c in candidates] == ["first.srt", "second.srt", "third.srt"]
        assert [c.hash_match for c in candidates] == [False, True, False]

    def test_uses_first_file_of_record(self, client, session, make_response):
        body = {"total_count": 1, "data": [{"attributes": {
            "moviehash_match": False,
            "files": [{"file_name": "cd1.srt", "file_id": 1}, {"file_name": "cd2.srt", "file_id": 2}],
        }}]}
        session.request.return_value = make_response(json_data=body)
        [candidate] = client.search("x")
        assert (candidate.name, candidate.file_id) == ("cd1.srt", 1)

    def test_missing_hash_match_flag_is_false(self, client, session, make_response):
        body = {"total_count": 1, "data": [{"attributes": {
            "files": [{"file_name": "a.srt", "file_id": 1}]}}]}
        session.request.return_value = make_response(json_data=body)
        assert client.search("x")[0].hash_match is False

    def test_zero_results(self, client, session, make_response):
        session.request.return_value = make_response(json_data={"total_count": 0, "data": []})
        with pytest.raises(NoResultsError):
            client.search("x", "y")

    def test_missing_total_count_means_no_results(self, client, session, make_response):
        session.request.return_value = make_response(json_data={"data": []})
        with pytest.raises(NoResultsError):
            client.search("x")

    def test_non_200(self, client, session, make_response):
        session.request.return_value = make_response(status=403, text="forbidden")
        with pytest.raises(RemoteError) as exc_info:
            client.search("x", "y")
        assert exc_info.value.status == 403
        assert exc_info.value.body == "forbidden"

    def test_invalid_json(self, client, session, make_response):
        session.request.return_value = make_response(json_data=ValueError("bad json"))
        with pytest.raises(DecodeError):
            client.search("x")

    def test_string_file_id_is_rejected(self, client, session, make_response):
        session.request.return_value = make_response(json_data=search_body(("a.srt", "555", False)))
        with pytest.raises(DecodeError):
            client.search("x")

    def test_bool_file_id_is_rejected(self, client, session, make_response):
        session.request.return_value = make_response(json_data=search_body(("a.srt", True, False)))
        with pytest.raises(DecodeError):
            client.search("x")

    def test_record_without_files(self, client, session, make_response):
        body = {"total_count": 1, "data": [{"attributes": {"files": []}}]}
        session.request.return_value = make_response(json_data=body)
        with pytest.raises(DecodeError):
            client.search("x")

    def test_timeout(self, client, session):
        session.request.side_effect = requests.Timeout("slow")
        with pytest.raises(RequestTimeout):
            client.search("x")

    def test_connection_error(self, client, session):
        session.request.side_effect = requests.ConnectionError("refused")
        with pytest.raises(NetworkError):
            client.search("x")


# ─── login ───────────────────────────────────────────────────────────

class TestLogin:
    def test_returns_token(self, client, session, make_response):
        session.request.return_value = make_response(json_data={"token": "abc", "status": 200})
        assert client.login("user", "pass") == "abc"

        args, kwargs = session.request.call_args
        assert args == ("POST", f"{API_URL}/login")
        assert kwargs["json"] == {"username": "user", "password": "pass"}
        assert kwargs["headers"]["Accept"] == "application/json"
        assert kwargs["headers"]["Api-Key"] == "KEY"
        assert "Authorization" not in kwargs["headers"]

    def test_non_200(self, client, session, make_response):
        session.request.return_value = make_response(status=401, text="unauthorized")
        with pytest.raises(RemoteError) as exc_info:
            client.login("user", "wrong")
        assert exc_info.value.status == 401

    def test_missing_token(self, client, session, make_response):
        session.request.return_value = make_response(json_data={"status": 200})
        with pytest.raises(DecodeError):
            client.login("user", "pass")

    @pytest.mark.parametrize("username,password", [("", "pass"), ("user", "")])
    def test_empty_credentials(self, client, session, username, password):
        with pytest.raises(ConfigurationError):
            client.login(username, password)
        session.request.assert_not_called()


# ─── download_link ───────────────────────────────────────────────────

class TestDownloadLink:
    def test_full_response(self, client, session, make_response):
        session.request.return_value = make_response(json_data={
            "link": "https://dl/x.srt",
            "file_name": "x.srt",
            "requests": 3,
            "remaining": 97,
            "message": "Your quota will be renewed in 7 hours",
            "reset_time": "7 hours",
            "reset_time_utc": "2024-01-01T00:00:00.000Z",
        })
        grant = client.download_link(555, "abc")

        assert grant == DownloadGrant(
            link="https://dl/x.srt", requests=3, remaining=97,
            message="Your quota will be renewed in 7 hours",
            reset_time="7 hours", reset_time_utc="2024-01-01T00:00:00.000Z",
        )
        assert not grant.is_legacy

        args, kwargs = session.request.call_args
        assert args == ("POST", f"{API_URL}/download")
        assert kwargs["json"] == {"file_id": 555}
        assert kwargs["headers"]["Authorization"] == "Bearer abc"
        assert kwargs["headers"]["Accept"] == "application/json"

    def test_link_only_response(self, client, session, make_response):
        session.request.return_value = make_response(json_data={"link": "https://cdn/x.srt"})
        grant = client.download_link(1, "abc")
        assert grant.link == "https://cdn/x.srt"
        assert grant.remaining is None
        assert grant.is_legacy

    def test_missing_link(self, client, session, make_response):
        session.request.return_value = make_response(json_data={"remaining": 5})
        with pytest.raises(DecodeError):
            client.download_link(1, "abc")

    def test_non_200(self, client, session, make_response):
        session.request.return_value = make_response(status=406, text="quota exceeded")
        with pytest.raises(RemoteError) as exc_info:
            client.download_link(1, "abc")
        assert exc_info.value.status == 406
