"""Cluster ranking by total final score."""

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class UnitTotal:
    """A unit's settled total for a period."""

    unit_id: str
    total_score: float
    unit_name: str | None = None


@dataclass(frozen=True)
class RankedUnit:
    """A unit's position within its cluster."""

    rank: int
    unit_id: str
    total_score: float
    unit_name: str | None = None

    def to_dict(self) -> dict:
        return {
            "rank": self.rank,
            "unit_id": self.unit_id,
            "unit_name": self.unit_name,
            "total_score": self.total_score,
        }


def rank_units(totals: Sequence[UnitTotal], top_n: int | None = None) -> list[RankedUnit]:
    """
    Rank units by total score, highest first.

    Equal totals share a rank and the next rank is skipped (1, 2, 2, 4).
    Input order is kept among equal totals.
    """
    ordered = sorted(totals, key=lambda t: t.total_score, reverse=True)

    ranked: list[RankedUnit] = []
    for position, entry in enumerate(ordered, start=1):
        if ranked and entry.total_score == ranked[-1].total_score:
            rank = ranked[-1].rank
        else:
            rank = position
        ranked.append(
            RankedUnit(
                rank=rank,
                unit_id=entry.unit_id,
                total_score=entry.total_score,
                unit_name=entry.unit_name,
            )
        )

    if top_n is not None:
        return ranked[:top_n]
    return ranked
