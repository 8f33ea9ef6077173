"""
Qualification pipeline contracts.

CreatorSignals is the raw input to scoring. Every field may be None, which
means "not available" and is never the same thing as zero. SignalsProvider
implementations decide where the numbers come from (stored snapshots, demo
stand-ins, ...); the pipeline only sees the uniform interface.
"""
import math
import numbers
from abc import ABC, abstractmethod
from dataclasses import dataclass, fields, replace
from datetime import datetime
from typing import Any, Dict, List, Optional


class QualificationError(Exception):
    """The pipeline could not complete; nothing was committed."""


class InvalidSignalsError(QualificationError):
    """A signal is malformed, negative, or a required signal is missing."""


# Signals the score cannot be computed without
CORE_SIGNALS = ('followers', 'likes', 'comments', 'content_count_30d')


@dataclass(frozen=True)
class CreatorSignals:
    followers: Optional[int] = None
    likes: Optional[int] = None
    comments: Optional[int] = None
    content_count_30d: Optional[int] = None
    reach_ratio: Optional[float] = None
    bio: Optional[str] = None

    @property
    def reach_available(self) -> bool:
        return self.reach_ratio is not None

    def missing(self) -> List[str]:
        """Names of core signals that are unavailable."""
        return [name for name in CORE_SIGNALS if getattr(self, name) is None]

    def fill_from(self, fallback: 'CreatorSignals') -> 'CreatorSignals':
        """Copy with unavailable fields taken from `fallback`."""
        updates = {
            f.name: getattr(fallback, f.name)
            for f in fields(self)
            if getattr(self, f.name) is None and getattr(fallback, f.name) is not None
        }
        return replace(self, **updates) if updates else self

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def validate_signals(signals: CreatorSignals) -> CreatorSignals:
    """
    Boundary check before the pure scoring functions run.

    Raises InvalidSignalsError for missing core signals, non-numeric values,
    NaN or infinite values, and negative counts. Zero followers is allowed
    (engagement rate is guarded).
    """
    missing = signals.missing()
    if missing:
        raise InvalidSignalsError(f"Unavailable core signals: {', '.join(missing)}")

    for name in CORE_SIGNALS + ('reach_ratio',):
        value = getattr(signals, name)
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise InvalidSignalsError(f"Signal '{name}' must be numeric, got {value!r}")
        if not math.isfinite(value):
            raise InvalidSignalsError(f"Signal '{name}' must be finite, got {value}")
        if value < 0:
            raise InvalidSignalsError(f"Signal '{name}' must not be negative, got {value}")

    if signals.bio is not None and not isinstance(signals.bio, str):
        raise InvalidSignalsError("Signal 'bio' must be text")

    return signals


class SignalsProvider(ABC):
    """Supplies the signals for one creator/account at qualification time."""

    name: str = ''

    @abstractmethod
    def collect(self, session: Any, creator: Any, account_id: Optional[str]) -> CreatorSignals:
        """
        Gather whatever is currently known about the creator.

        Args:
            session:    Open DB session of the running pipeline.
            creator:    Creator row being qualified.
            account_id: Connected account that triggered the run, if any.

        Returns:
            CreatorSignals with None for anything unavailable.
        """
        ...


@dataclass
class QualificationResult:
    """Everything one pipeline run computed, as persisted."""
    creator_id: str
    computed_at: datetime
    signals: CreatorSignals
    niche: Any
    score: Any
    brand_targets: Any

    def to_dict(self) -> Dict[str, Any]:
        return {
            'creator_id': self.creator_id,
            'computed_at': self.computed_at.isoformat(),
            'signals': self.signals.to_dict(),
            'niche': self.niche.to_dict(),
            'score': self.score.to_dict(),
            'brand_targets': self.brand_targets.to_dict(),
        }
