"""Ordered fallback over alternative actions: the first one that succeeds wins."""
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional


@dataclass(frozen=True)
class Candidate:
    """A named action that reports success as a bool."""
    name: str
    attempt: Callable[[], bool]


@dataclass(frozen=True)
class Attempt:
    name: str
    succeeded: bool


@dataclass
class FallbackResult:
    winner: Optional[str] = None
    attempts: List[Attempt] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.winner is not None


def first_success(
    candidates: Iterable[Candidate],
    on_failure: Optional[Callable[[Candidate], None]] = None,
) -> FallbackResult:
    """Try candidates in order and stop at the first success.

    Candidates are consumed lazily, so anything after the winner is never
    built or attempted. An empty iterable yields an unsuccessful result.
    """
    result = FallbackResult()
    for candidate in candidates:
        ok = bool(candidate.attempt())
        result.attempts.append(Attempt(candidate.name, ok))
        if ok:
            result.winner = candidate.name
            break
        if on_failure is not None:
            on_failure(candidate)
    return result
