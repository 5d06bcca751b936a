"""Candidate feed for swipe-based discovery."""

from dataclasses import dataclass, field

from domain.entities.profile import Profile


def match_score(viewer: Profile, candidate: Profile) -> int:
    """Score a candidate by shared interests plus shared languages."""
    shared_interests = set(viewer.interests) & set(candidate.interests)
    shared_languages = set(viewer.languages) & set(candidate.languages)
    return len(shared_interests) + len(shared_languages)


@dataclass(frozen=True, slots=True)
class Candidate:
    """A profile offered in discovery with its ranking score."""

    profile: Profile
    match_score: int


def rank_candidates(viewer: Profile, profiles: list[Profile]) -> list[Candidate]:
    """Rank by score (highest first), then newest profile first."""
    scored = [Candidate(profile=p, match_score=match_score(viewer, p)) for p in profiles]
    return sorted(
        scored,
        key=lambda c: (c.match_score, c.profile.created_at),
        reverse=True,
    )


@dataclass
class CandidateFeed:
    """A finite ranked sequence walked by a local index.

    The index advances one position per swipe decision. Once it reaches the
    end of the sequence the feed is exhausted and stays that way until a new
    feed is fetched.
    """

    candidates: list[Candidate] = field(default_factory=list)
    index: int = 0

    def __len__(self) -> int:
        return len(self.candidates)

    @property
    def current(self) -> Candidate | None:
        if self.is_exhausted:
            return None
        return self.candidates[self.index]

    @property
    def remaining(self) -> int:
        return len(self.candidates) - self.index

    @property
    def is_exhausted(self) -> bool:
        return self.index >= len(self.candidates)

    def advance(self) -> Candidate | None:
        """Move past the current candidate and return the next one, if any."""
        if not self.is_exhausted:
            self.index += 1
        return self.current

    def unseen(self) -> list[Candidate]:
        return self.candidates[self.index :]
