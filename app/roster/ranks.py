"""
Rank hierarchy.

Ranks are ordered from the lowest graduation to the highest post.  The
grade (officer or enlisted) is never stored; it is always derived from
the rank.
"""

from enum import Enum


class Rank(str, Enum):
    """Posto/Graduação, declared lowest first."""

    THIRD_SERGEANT = "3º Sargento"
    SECOND_SERGEANT = "2º Sargento"
    FIRST_SERGEANT = "1º Sargento"
    OFFICER_CADET = "Aspirante a Oficial"
    SECOND_LIEUTENANT = "2º Tenente"
    FIRST_LIEUTENANT = "1º Tenente"
    CAPTAIN = "Capitão"
    MAJOR = "Major"


class Grade(str, Enum):
    """Grau: officer or enlisted."""

    OFFICER = "Oficial"
    ENLISTED = "Praça"


RANKS_ORDER: list[Rank] = list(Rank)

_OFFICER_RANKS: frozenset[Rank] = frozenset({
    Rank.OFFICER_CADET,
    Rank.SECOND_LIEUTENANT,
    Rank.FIRST_LIEUTENANT,
    Rank.CAPTAIN,
    Rank.MAJOR,
})


def rank_index(rank: Rank | str) -> int:
    """Position of ``rank`` in :data:`RANKS_ORDER` (0 = lowest)."""
    return RANKS_ORDER.index(Rank(rank))


def compare_ranks(a: Rank | str, b: Rank | str) -> int:
    """Negative when ``a`` is below ``b``, zero when equal, positive when above."""
    return rank_index(a) - rank_index(b)


def grade_for_rank(rank: Rank | str) -> Grade:
    return Grade.OFFICER if Rank(rank) in _OFFICER_RANKS else Grade.ENLISTED
