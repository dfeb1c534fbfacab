"""Pick one subtitle file id out of the search results"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .errors import ChooserUnavailable, DecodeError, EmptyCandidatesError
from ..utils.i18n import _

HASH_MATCH_MARK = "✅"


@dataclass(frozen=True)
class SubtitleCandidate:
    """One subtitle returned by a catalog search"""
    name: str
    file_id: int
    hash_match: bool = False

    @property
    def label(self) -> str:
        """Name shown to the user, marked when the movie hash matched"""
        return f"{self.name} {HASH_MATCH_MARK}" if self.hash_match else self.name


class Chooser(ABC):
    """Interactive selection backend"""

    @abstractmethod
    def choose(self, items: Sequence[Tuple[str, bool]], title: str) -> int:
        """
        Let the user pick one item.

        Args:
            items: (label, hash_matched) pairs, in display order
            title: Window or prompt title

        Returns:
            Index of the selected item

        Raises:
            SelectionCancelled: if the user declined
            ChooserUnavailable: if the backend cannot run
        """


def pick_automatic(candidates: List[SubtitleCandidate]) -> SubtitleCandidate:
    """First hash match, otherwise the first result"""
    for candidate in candidates:
        if candidate.hash_match:
            return candidate
    return candidates[0]


def resolve(candidates: List[SubtitleCandidate], interactive: bool = False,
            chooser: Optional[Chooser] = None, title: str = "") -> int:
    """
    Resolve search results to a single subtitle file id.

    Args:
        candidates: Search results, in API order
        interactive: Ask the chooser instead of picking automatically
        chooser: Selection backend, required when interactive
        title: Title shown by the chooser (usually the movie title)

    Returns:
        The chosen file id

    Raises:
        EmptyCandidatesError: if there is nothing to choose from
        ChooserUnavailable: if interactive and no chooser was given
        SelectionCancelled: if the user cancelled the chooser
    """
    if not candidates:
        raise EmptyCandidatesError(_("No subtitles to choose from."))

    if not interactive:
        return pick_automatic(candidates).file_id

    if chooser is None:
        raise ChooserUnavailable(_("No interactive selector available."))

    items = [(candidate.label, candidate.hash_match) for candidate in candidates]
    index = chooser.choose(items, title)

    # Selection is by position, labels may repeat
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(candidates):
        raise DecodeError(_("Invalid selection: %r") % (index,))
    return candidates[index].file_id
