#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# core/fetcher.py - Subtitle download
#

"""
Downloads a subtitle from a pre-signed link and writes it next to the movie.

Usage:
    from core.fetcher import SubtitleFetcher

    fetcher = SubtitleFetcher()
    fetcher.save(grant.link, "/movies/Some.Movie.mkv")  # -> /movies/Some.Movie.srt
"""

import os
import tempfile
from pathlib import Path
from typing import Optional, Union
from urllib.parse import urlsplit

import requests

from .errors import DecodeError, FileIOError, NetworkError, RemoteError, RequestTimeout
from ..utils.i18n import _
from ..utils.logger import get_logger

SUBTITLE_EXTENSION = ".srt"
CHUNK_SIZE = 65536


def strip_quotes(link: str) -> str:
    """Remove one leading and one trailing double quote, if present"""
    if link.startswith('"'):
        link = link[1:]
    if link.endswith('"'):
        link = link[:-1]
    return link


def subtitle_path(base: Union[str, Path]) -> Path:
    """Movie path with its extension replaced by .srt"""
    return Path(base).with_suffix(SUBTITLE_EXTENSION)


def parse_link(link: str) -> str:
    """
    Clean up a download link and check it is an absolute http(s) URL.

    Raises:
        DecodeError: if the link is not a usable URL
    """
    url = strip_quotes(link.strip())
    parts = urlsplit(url)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise DecodeError(_("Invalid download link: %s") % link)
    return url


class SubtitleFetcher:
    """Saves subtitles from download links"""

    def __init__(self, session: Optional[requests.Session] = None, timeout: float = 30.0):
        self.session = session or requests.Session()
        self.timeout = timeout
        self.logger = get_logger()

    def save(self, url: str, destination: Union[str, Path]) -> Path:
        """
        Download a subtitle and write it beside the movie.

        Args:
            url: Download link returned by the catalog
            destination: Movie path; its extension is replaced by .srt

        Returns:
            Path of the written subtitle

        Raises:
            RemoteError: on a non-200 status
            FileIOError: if the subtitle cannot be written
        """
        url = parse_link(url)
        sub_path = subtitle_path(destination)
        self.logger.debug(f"GET {url}")

        try:
            response = self.session.get(url, stream=True, timeout=self.timeout)
        except requests.Timeout as e:
            raise RequestTimeout(_("Request timed out after %ss: %s") % (self.timeout, url)) from e
        except requests.RequestException as e:
            raise NetworkError(_("Request Error: %s") % e) from e

        try:
            if response.status_code != 200:
                raise RemoteError(response.status_code, response.text, url)
            self._write_atomic(response, sub_path)
        finally:
            response.close()

        self.logger.debug(f"Saved {sub_path}")
        return sub_path

    def _write_atomic(self, response, sub_path: Path):
        """
        Stream the body into a temporary file beside the subtitle, then
        move it over the subtitle. A failed download leaves any existing
        subtitle untouched.
        """
        tmp_name = None
        try:
            with tempfile.NamedTemporaryFile(
                "wb", dir=sub_path.parent, prefix=f".{sub_path.name}.", suffix=".part", delete=False
            ) as f:
                tmp_name = f.name
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
            os.replace(tmp_name, sub_path)
            tmp_name = None
        # requests exceptions derive from OSError, so they must come first
        except requests.Timeout as e:
            raise RequestTimeout(_("Download timed out: %s") % e) from e
        except requests.RequestException as e:
            raise NetworkError(_("Download interrupted: %s") % e) from e
        except OSError as e:
            raise FileIOError(_("Cannot write subtitle %s: %s") % (sub_path, e)) from e
        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
