"""Difficulty tiers: name -> (search depth, root randomness)."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple

from tierchess.errors import InvalidTier


@dataclass(frozen=True)
class DifficultyProfile:
    """Search parameters for one tier.

    depth: plies searched from the root (>= 1).
    randomness: probability in [0, 1] of playing a uniformly random legal move.
    """

    depth: int
    randomness: float

    def __post_init__(self):
        if not isinstance(self.depth, int) or self.depth < 1:
            raise ValueError(f"depth must be a positive integer, got {self.depth!r}")
        if not 0.0 <= self.randomness <= 1.0:
            raise ValueError(f"randomness must be in [0, 1], got {self.randomness!r}")


@dataclass(frozen=True)
class Tier:
    name: str
    label: str
    description: str
    profile: DifficultyProfile

    @property
    def depth(self) -> int:
        return self.profile.depth

    @property
    def randomness(self) -> float:
        return self.profile.randomness


_TIERS: Tuple[Tier, ...] = (
    Tier("beginner", "Beginner", "Just learning the game", DifficultyProfile(1, 0.80)),
    Tier("easy", "Easy", "Casual play", DifficultyProfile(2, 0.40)),
    Tier("medium", "Medium", "A balanced challenge", DifficultyProfile(3, 0.10)),
    Tier("hard", "Hard", "For experienced players", DifficultyProfile(4, 0.05)),
    Tier("expert", "Expert", "Serious competition", DifficultyProfile(5, 0.0)),
    Tier("master", "Master", "Near-professional level", DifficultyProfile(6, 0.0)),
    Tier("grandmaster", "Grandmaster", "Maximum chess intelligence", DifficultyProfile(7, 0.0)),
)

TIERS: Mapping[str, Tier] = MappingProxyType({t.name: t for t in _TIERS})


def tier_names() -> Tuple[str, ...]:
    """Tier names from weakest to strongest."""
    return tuple(t.name for t in _TIERS)


def tier_for(name: str) -> Tier:
    try:
        return TIERS[name]
    except (KeyError, TypeError):
        raise InvalidTier(name) from None


def profile_for(name: str) -> DifficultyProfile:
    """Search depth and randomness for `name`. Raises InvalidTier if unknown."""
    return tier_for(name).profile


def tier_index(name: str) -> int:
    return _TIERS.index(tier_for(name))


def tier_at(index: int) -> Tier:
    if not 0 <= index < len(_TIERS):
        raise InvalidTier(index)
    return _TIERS[index]
