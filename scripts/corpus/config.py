from __future__ import annotations
from dataclasses import dataclass

from corpus.application.crawler import MAX_RESTARTS, PAGE_DELAY, PAGE_TIMEOUT, ExhaustionPolicy
from corpus.application.query import DEFAULT_LANGUAGE

DEFAULT_COUNT = 100


@dataclass(frozen=True)
class CorpusConfig:
    """
    Everything one run needs, gathered from the command line and environment.
    Built once by the composition root and passed down; nothing reads flags
    or environment variables after that.
    """
    token:        str
    count:        int = DEFAULT_COUNT
    verbose:      bool = False
    language:     str = DEFAULT_LANGUAGE
    min_stars:    int | None = None
    policy:       ExhaustionPolicy = ExhaustionPolicy.RESTART
    max_restarts: int = MAX_RESTARTS
    page_delay:   float = PAGE_DELAY
    page_timeout: float = PAGE_TIMEOUT
    overfetch:    float = 0.0
    unique:       bool = False

    def __post_init__(self) -> None:
        if self.count <= 0:
            raise ValueError(f"count must be positive, got {self.count}")
        if self.max_restarts < 0:
            raise ValueError(f"max_restarts must not be negative, got {self.max_restarts}")
        if self.page_delay < 0:
            raise ValueError(f"page delay must not be negative, got {self.page_delay}")
        if self.page_timeout <= 0:
            raise ValueError(f"page timeout must be positive, got {self.page_timeout}")
        if self.overfetch < 0:
            raise ValueError(f"overfetch must not be negative, got {self.overfetch}")
