#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# core/movie.py - Movie identity and OpenSubtitles hash
#

"""
Movie identity: absolute path, canonical title and OpenSubtitles hash.

The hash is the public OpenSubtitles "moviehash": the file size plus the
sum of the 64-bit little-endian words of the first and last 64 KiB of the
file, wrapped at 2**64 and printed as 16 lowercase hex digits.

It only looks at the two 64 KiB windows, so editing bytes in the middle
of a large file does not change the hash. It is a content identity for
catalog lookups, not a checksum.

Usage:
    from core.movie import Movie

    movie = Movie.build("Some.Movie.2019.mkv")
    movie.title  # 'Some.Movie.2019'
    movie.hash   # e.g. '8e245d9679d31e12'
"""

import os
import struct
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .errors import (
    FileIOError,
    MovieIsDirectoryError,
    MovieNotFoundError,
    MovieTooSmallError,
)
from ..utils.i18n import _

HASH_BLOCK_SIZE = 65536
HASH_MASK = 0xFFFFFFFFFFFFFFFF

# One 64 KiB window read as 8192 little-endian unsigned 64-bit words
_WINDOW = struct.Struct("<%dQ" % (HASH_BLOCK_SIZE // 8))


def _read_window(f) -> bytes:
    data = f.read(HASH_BLOCK_SIZE)
    if len(data) != HASH_BLOCK_SIZE:
        raise FileIOError(_("Unexpected end of file while hashing"))
    return data


def compute_hash(path: Union[str, Path]) -> str:
    """
    Compute the OpenSubtitles hash of a file.

    Args:
        path: Path to the movie file

    Returns:
        16 lowercase hex digits

    Raises:
        MovieTooSmallError: if the file is smaller than 64 KiB
        FileIOError: if the file cannot be read
    """
    try:
        with open(path, "rb") as f:
            size = os.fstat(f.fileno()).st_size
            if size < HASH_BLOCK_SIZE:
                raise MovieTooSmallError(
                    _("File size too small: %d bytes (minimum %d)") % (size, HASH_BLOCK_SIZE)
                )

            hash_value = size
            for word in _WINDOW.unpack(_read_window(f)):
                hash_value = (hash_value + word) & HASH_MASK

            # For a file of exactly 64 KiB both windows are the same bytes
            f.seek(size - HASH_BLOCK_SIZE)
            for word in _WINDOW.unpack(_read_window(f)):
                hash_value = (hash_value + word) & HASH_MASK
    except OSError as e:
        raise FileIOError(_("Cannot read %s: %s") % (path, e)) from e

    return "%016x" % hash_value


@dataclass(frozen=True)
class Movie:
    """Movie file identified for a subtitle search"""
    path: str
    title: str
    hash: str

    @classmethod
    def build(cls, path: Union[str, Path], custom_title: Optional[str] = None) -> "Movie":
        """
        Build a Movie from a file path.

        Args:
            path: Absolute or relative path to the movie file
            custom_title: Title to search for instead of the file name

        Raises:
            MovieNotFoundError: if the path does not exist
            MovieIsDirectoryError: if the path is a directory
            MovieTooSmallError: if the file is too small to be hashed
        """
        movie_path = Path(path)
        if not movie_path.is_absolute():
            movie_path = Path.cwd() / movie_path

        if not movie_path.exists():
            raise MovieNotFoundError(_("File not found: %s") % path)
        if movie_path.is_dir():
            raise MovieIsDirectoryError(_("The path must point to a file: %s") % path)
        if not movie_path.is_file():
            raise MovieNotFoundError(_("Unrecognizable path: %s") % path)

        # Only the last extension is removed: "a.b.mkv" -> "a.b"
        title = custom_title if custom_title else movie_path.stem

        return cls(path=str(movie_path), title=title, hash=compute_hash(movie_path))
