"""
osd - OpenSubtitles downloader

Identifies a movie file by its OpenSubtitles hash, picks the best
matching subtitle and saves it next to the movie.
"""

# Import version from config
from .utils.config import __version__

__author__ = "osd contributors"
__license__ = "MIT"
