#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# core/catalog.py - OpenSubtitles REST API client
#

"""
Thin client for the three OpenSubtitles REST calls osd needs:
subtitle search, login and download-link request.

The client keeps no session state between calls (the login token is
returned to the caller) and never retries: one failed request is one
raised error.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

from .errors import (
    ConfigurationError,
    DecodeError,
    NetworkError,
    NoResultsError,
    RemoteError,
    RequestTimeout,
)
from .resolver import SubtitleCandidate
from ..utils.i18n import _
from ..utils.logger import get_logger

API_URL = "https://api.opensubtitles.com/api/v1"
DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class DownloadGrant:
    """Download link plus the daily quota reported by the catalog"""
    link: str
    requests: Optional[int] = None
    remaining: Optional[int] = None
    message: Optional[str] = None
    reset_time: Optional[str] = None
    reset_time_utc: Optional[str] = None

    @property
    def is_legacy(self) -> bool:
        """True when the response only carried the link"""
        return self.remaining is None and self.reset_time is None


def _require_int(value: Any, field_name: str) -> int:
    # bool is an int subclass, JSON true/false is not a valid id
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(_("Field '%s' must be an integer, got %r") % (field_name, value))
    return value


def _optional_int(data: Dict[str, Any], key: str) -> Optional[int]:
    if data.get(key) is None:
        return None
    return _require_int(data[key], key)


def _optional_str(data: Dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise DecodeError(_("Field '%s' must be a string, got %r") % (key, value))
    return value


class CatalogClient:
    """OpenSubtitles REST client"""

    def __init__(self, api_key: str, user_agent: str,
                 session: Optional[requests.Session] = None,
                 timeout: float = DEFAULT_TIMEOUT,
                 base_url: str = API_URL):
        """
        Initialize the client.

        Args:
            api_key: OpenSubtitles API key (Api-Key header)
            user_agent: User-Agent registered for the API key
            session: requests session to use (a new one by default)
            timeout: Per-request timeout in seconds
            base_url: API root, without trailing slash
        """
        if not api_key:
            raise ConfigurationError(_("OpenSubtitles API key is not configured"))
        if not user_agent:
            raise ConfigurationError(_("User agent is not configured"))

        self.api_key = api_key
        self.user_agent = user_agent
        self.session = session or requests.Session()
        self.timeout = timeout
        self.base_url = base_url.rstrip("/")
        self.logger = get_logger()

    def _headers(self, token: Optional[str] = None, accept: bool = False) -> Dict[str, str]:
        headers = {
            "User-Agent": self.user_agent,
            "Content-Type": "application/json",
            "Api-Key": self.api_key,
        }
        if accept:
            headers["Accept"] = "application/json"
        if token is not None:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _request(self, method: str, endpoint: str, **kwargs) -> Any:
        """
        Send one request and decode its JSON body.

        Raises:
            RequestTimeout: if the server did not answer in time
            NetworkError: on any other transport failure
            RemoteError: on a non-200 status
            DecodeError: if the body is not JSON
        """
        url = f"{self.base_url}/{endpoint}"
        self.logger.debug(f"{method} {url}")

        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.Timeout as e:
            raise RequestTimeout(_("Request timed out after %ss: %s") % (self.timeout, url)) from e
        except requests.RequestException as e:
            raise NetworkError(_("Request Error: %s") % e) from e

        if response.status_code != 200:
            raise RemoteError(response.status_code, response.text, url)

        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(_("Invalid JSON from %s: %s") % (url, e)) from e

    def search(self, title: Optional[str] = None, fingerprint: Optional[str] = None,
               language: str = "en") -> List[SubtitleCandidate]:
        """
        Search subtitles by title and/or movie hash.

        Args:
            title: Text query (usually the file name without extension)
            fingerprint: OpenSubtitles movie hash; omitted from the query when None
            language: Language code(s), e.g. 'en' or 'en,pt-br'

        Returns:
            Candidates in the order the API returned them

        Raises:
            NoResultsError: if the API reports zero results
        """
        params = {"languages": language}
        if title is not None:
            params["query"] = title
        if fingerprint is not None:
            params["moviehash"] = fingerprint

        data = self._request("GET", "subtitles", params=params, headers=self._headers())
        if not isinstance(data, dict):
            raise DecodeError(_("Unexpected search response"))

        total_count = data.get("total_count") or 0
        if not isinstance(total_count, int) or total_count < 1:
            raise NoResultsError(_("No subtitles found."))

        records = data.get("data")
        if not isinstance(records, list):
            raise DecodeError(_("Search response has no 'data' list"))

        candidates = [self._parse_candidate(record) for record in records]
        self.logger.debug(f"Search returned {len(candidates)} of {total_count} subtitles")
        return candidates

    @staticmethod
    def _parse_candidate(record: Any) -> SubtitleCandidate:
        try:
            attributes = record["attributes"]
            first_file = attributes["files"][0]
            name = first_file["file_name"]
            file_id = first_file["file_id"]
        except (KeyError, IndexError, TypeError) as e:
            raise DecodeError(_("Malformed subtitle record: %s") % e) from e

        if not isinstance(name, str):
            raise DecodeError(_("Field 'file_name' must be a string, got %r") % (name,))

        return SubtitleCandidate(
            name=name,
            file_id=_require_int(file_id, "file_id"),
            hash_match=attributes.get("moviehash_match") is True,
        )

    def login(self, username: str, password: str) -> str:
        """
        Log in and return the bearer token.

        Raises:
            ConfigurationError: if username or password is empty
        """
        if not username or not password:
            raise ConfigurationError(_("OpenSubtitles username and password are required"))

        data = self._request(
            "POST", "login",
            json={"username": username, "password": password},
            headers=self._headers(accept=True),
        )

        token = data.get("token") if isinstance(data, dict) else None
        if not isinstance(token, str) or not token:
            raise DecodeError(_("Login response has no token"))
        return token

    def download_link(self, file_id: int, token: str) -> DownloadGrant:
        """
        Request a download link for a subtitle file.

        Args:
            file_id: Subtitle file id from the search results
            token: Bearer token from login()
        """
        data = self._request(
            "POST", "download",
            json={"file_id": file_id},
            headers=self._headers(token=token, accept=True),
        )
        if not isinstance(data, dict):
            raise DecodeError(_("Unexpected download response"))

        link = data.get("link")
        if not isinstance(link, str) or not link:
            raise DecodeError(_("Download response has no link"))

        grant = DownloadGrant(
            link=link,
            requests=_optional_int(data, "requests"),
            remaining=_optional_int(data, "remaining"),
            message=_optional_str(data, "message"),
            reset_time=_optional_str(data, "reset_time"),
            reset_time_utc=_optional_str(data, "reset_time_utc"),
        )
        if grant.is_legacy:
            self.logger.debug("Download response only carried a link (legacy mode)")
        return grant
