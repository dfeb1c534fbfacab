#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# core/pipeline.py - Movie file to saved subtitle
#

"""
Runs the whole subtitle lookup for one movie file:

    build movie -> search -> resolve -> login -> download link -> save

Each step only starts once the previous one succeeded; the first error is
raised as-is. Nothing is written before the final save, and the save
overwrites, so a failed run can simply be repeated.
"""

from enum import Enum
from pathlib import Path
from typing import Optional, Union

from .catalog import CatalogClient
from .fetcher import SubtitleFetcher
from .movie import Movie
from .resolver import Chooser, resolve
from ..utils.config import Config
from ..utils.i18n import _
from ..utils.logger import get_logger


class PipelineState(Enum):
    """Last step that completed successfully"""
    BUILT = "built"
    SEARCHED = "searched"
    RESOLVED = "resolved"
    AUTHENTICATED = "authenticated"
    LINK_OBTAINED = "link_obtained"
    SAVED = "saved"


class SubtitlePipeline:
    """Downloads the best subtitle for a movie file"""

    def __init__(self, config: Config,
                 client: Optional[CatalogClient] = None,
                 fetcher: Optional[SubtitleFetcher] = None,
                 chooser: Optional[Chooser] = None):
        """
        Initialize the pipeline.

        Args:
            config: Settings (credentials, language, selection mode...)
            client: Catalog client (built from config by default)
            fetcher: Subtitle fetcher (built from config by default)
            chooser: Selection backend, used when config.use_gui is set
        """
        self.config = config
        self.client = client
        self.fetcher = fetcher or SubtitleFetcher(timeout=config.timeout)
        self.chooser = chooser
        self.logger = get_logger()
        self.state: Optional[PipelineState] = None
        self.movie: Optional[Movie] = None

    def _get_client(self) -> CatalogClient:
        if self.client is None:
            self.client = CatalogClient(
                self.config.api_key,
                self.config.user_agent,
                timeout=self.config.timeout,
            )
        return self.client

    def run(self, path: Union[str, Path]) -> Path:
        """
        Find, download and save a subtitle for a movie.

        Args:
            path: Movie file

        Returns:
            Path of the saved subtitle
        """
        config = self.config
        self.state = None

        movie = Movie.build(path, config.custom_title)
        self.movie = movie
        self.state = PipelineState.BUILT
        self.logger.debug(f"Movie: {movie.title} (hash {movie.hash})")

        client = self._get_client()
        self.logger.debug(f"Using api key: {config.api_key}")

        self.logger.action(_("Searching subtitles for: %s") % movie.title)
        candidates = client.search(
            title=movie.title,
            fingerprint=movie.hash if config.use_hash else None,
            language=config.language,
        )
        self.state = PipelineState.SEARCHED
        matches = sum(1 for c in candidates if c.hash_match)
        self.logger.info(_("Found %d subtitles (%d hash matches)") % (len(candidates), matches))

        file_id = resolve(candidates, interactive=config.use_gui,
                          chooser=self.chooser, title=movie.title)
        self.state = PipelineState.RESOLVED
        self.logger.debug(f"Selected file id: {file_id}")

        token = client.login(config.username, config.password)
        self.state = PipelineState.AUTHENTICATED
        self.logger.debug(f"Login token: {token}")

        grant = client.download_link(file_id, token)
        self.state = PipelineState.LINK_OBTAINED
        self.logger.debug(f"Subtitle to be downloaded: {grant.link}")
        if not grant.is_legacy:
            self.logger.debug(f"Remaining requests for the day: {grant.remaining}")
            self.logger.debug(f"Requests reset time: {grant.reset_time}")

        saved = self.fetcher.save(grant.link, movie.path)
        self.state = PipelineState.SAVED
        self.logger.success(_("Subtitle saved: %s") % saved)
        return saved
