"""
Creator Fit Score: threshold ladders, fraud heuristics, weighted total, grade.

Every function here is a pure function of its numeric inputs. Inputs are
validated at the signals boundary (pipeline.base.validate_signals), not here.

Rounding convention: totals round half-up to the nearest integer. Weights are
applied in integer percent so x.5 totals are exact and never lose to float
representation error.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from creatorfit.config import SCORING_VERSION
from creatorfit.pipeline.base import CreatorSignals

logger = logging.getLogger('pipeline.scoring')

MAX_FRAUD_PENALTY = 30

# Weights in percent: (er, reach, consistency, niche, fraud)
WEIGHTS_WITH_REACH = (30, 25, 20, 15, 10)
WEIGHTS_WITHOUT_REACH = (40, 0, 25, 20, 15)


def _clamp(n, lo, hi):
    return max(lo, min(hi, n))


# ── Signal → sub-score ladders ───────────────────────────────────────────────

def engagement_rate(likes, comments, followers) -> float:
    """(likes + comments) / followers; 0.0 when there are no followers."""
    if not followers or followers <= 0:
        return 0.0
    return (likes + comments) / followers


def compute_er_score(er: float) -> int:
    if er >= 0.06:
        return 100
    if er >= 0.03:
        return 70
    if er >= 0.015:
        return 45
    return 20


def compute_consistency_score(posts_per_week: float) -> int:
    if posts_per_week >= 4:
        return 100
    if posts_per_week >= 2:
        return 70
    if posts_per_week >= 1:
        return 40
    return 20


def compute_niche_score(confidence: float) -> int:
    if confidence >= 0.75:
        return 100
    if confidence >= 0.6:
        return 75
    if confidence >= 0.45:
        return 55
    return 35


def compute_reach_score(ratio: Optional[float]) -> Optional[int]:
    """None when reach is unavailable. None is not a score."""
    if ratio is None:
        return None
    if ratio >= 1.2:
        return 100
    if ratio >= 0.8:
        return 75
    if ratio >= 0.5:
        return 55
    return 35


def compute_fraud_penalty(er: float, followers: int, content_count_30d: int) -> int:
    """+10 per triggered rule, capped to [0, 30]."""
    penalty = 0
    if followers > 20000 and er < 0.008:
        penalty += 10   # large audience, almost no interaction
    if followers > 50000 and content_count_30d < 4:
        penalty += 10   # large audience, barely posting
    if er > 0.12 and content_count_30d < 6:
        penalty += 10   # engagement too high for the posting volume
    return _clamp(penalty, 0, MAX_FRAUD_PENALTY)


# ── Total + grade ────────────────────────────────────────────────────────────

def _round_half_up_percent(total_percent: int) -> int:
    """Round an integer expressed in hundredths, half-up."""
    return (total_percent + 50) // 100


def compute_total_score(er_score: int, consistency_score: int, niche_score: int,
                        fraud_penalty: int, reach_score: Optional[int] = None) -> int:
    """
    Weighted total in [0, 100].

    With reach:    0.30·ER + 0.25·Reach + 0.20·Consistency + 0.15·Niche − 0.10·Fraud
    Without reach: 0.40·ER + 0.25·Consistency + 0.20·Niche − 0.15·Fraud
    """
    if reach_score is not None:
        w_er, w_reach, w_cons, w_niche, w_fraud = WEIGHTS_WITH_REACH
        reach_part = w_reach * reach_score
    else:
        w_er, _, w_cons, w_niche, w_fraud = WEIGHTS_WITHOUT_REACH
        reach_part = 0

    total_percent = (
        w_er * er_score
        + reach_part
        + w_cons * consistency_score
        + w_niche * niche_score
        - w_fraud * fraud_penalty
    )
    return _clamp(_round_half_up_percent(int(total_percent)), 0, 100)


def grade(score: int) -> str:
    if score >= 80:
        return 'A'
    if score >= 60:
        return 'B'
    return 'C'


# ── Pipeline entry point ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class ScoreResult:
    engagement_rate: float
    er_score: int
    reach_score: Optional[int]
    consistency_score: int
    niche_score: int
    fraud_penalty: int
    total: int
    grade: str
    scoring_version: str = SCORING_VERSION

    @property
    def reach_available(self) -> bool:
        return self.reach_score is not None

    def to_dict(self):
        return {
            'engagement_rate': self.engagement_rate,
            'er_score': self.er_score,
            'reach_score': self.reach_score,
            'consistency_score': self.consistency_score,
            'niche_score': self.niche_score,
            'fraud_penalty': self.fraud_penalty,
            'score_total': self.total,
            'grade': self.grade,
            'scoring_version': self.scoring_version,
        }


def score_creator(signals: CreatorSignals, niche_confidence: float) -> ScoreResult:
    """Run every ladder over validated signals and combine them."""
    er = engagement_rate(signals.likes, signals.comments, signals.followers)
    posts_per_week = signals.content_count_30d / 4

    er_score = compute_er_score(er)
    consistency_score = compute_consistency_score(posts_per_week)
    niche_score = compute_niche_score(niche_confidence)
    reach_score = compute_reach_score(signals.reach_ratio)
    fraud_penalty = compute_fraud_penalty(er, signals.followers, signals.content_count_30d)

    total = compute_total_score(
        er_score=er_score,
        consistency_score=consistency_score,
        niche_score=niche_score,
        fraud_penalty=fraud_penalty,
        reach_score=reach_score,
    )

    logger.debug(
        "er=%.4f er_score=%d reach=%s consistency=%d niche=%d fraud=%d total=%d",
        er, er_score, reach_score, consistency_score, niche_score, fraud_penalty, total,
    )

    return ScoreResult(
        engagement_rate=round(er, 4),
        er_score=er_score,
        reach_score=reach_score,
        consistency_score=consistency_score,
        niche_score=niche_score,
        fraud_penalty=fraud_penalty,
        total=total,
        grade=grade(total),
    )
