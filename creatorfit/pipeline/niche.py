"""
Dictionary-based niche classifier (PT/ES/EN keywords).

Pure function of the input text and the taxonomy tables: no I/O, same input
always gives the same result.
"""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Tuple

from creatorfit.config import NICHE_MODEL_VERSION
from creatorfit.pipeline.taxonomy import GENERAL, Taxonomy, load_taxonomy

MAX_EVIDENCE = 8


@dataclass(frozen=True)
class NicheResult:
    primary_niche: str
    secondary_niches: Tuple[str, ...]
    confidence: float
    evidence_keywords: Tuple[str, ...]
    model_version: str = NICHE_MODEL_VERSION

    def to_dict(self):
        return {
            'primary_niche': self.primary_niche,
            'secondary_niches': list(self.secondary_niches),
            'confidence': self.confidence,
            'evidence_keywords': list(self.evidence_keywords),
            'model_version': self.model_version,
        }


def round_confidence(hits: int, total: int) -> float:
    """hits / total, half-up to 2 decimals. A zero total counts as 1."""
    ratio = Decimal(hits) / Decimal(total or 1)
    return float(ratio.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP))


def classify_niche(bio: str = '', declared: str = '', taxonomy: Optional[Taxonomy] = None) -> NicheResult:
    """
    Classify bio + declared category into a primary (and maybe secondary) niche.

    Each keyword counts once per niche when it appears anywhere in the text as
    a substring. Niches are ranked by hits, ties keep taxonomy order. With zero
    hits the primary niche is 'general', whatever the declared category says.
    """
    taxonomy = taxonomy or load_taxonomy()
    text = f"{bio or ''} {declared or ''}".lower()

    hits = {}
    evidence = {}
    for tag, words in taxonomy.niche_keywords.items():
        matched = [w for w in words if w in text]
        hits[tag] = len(matched)
        evidence[tag] = tuple(matched[:MAX_EVIDENCE])

    # sorted() is stable, so equal counts stay in taxonomy order
    ranked = sorted(hits.items(), key=lambda item: item[1], reverse=True)
    top_tag, top_hits = ranked[0]
    total_hits = sum(hits.values())

    if top_hits == 0:
        return NicheResult(
            primary_niche=GENERAL,
            secondary_niches=(),
            confidence=round_confidence(0, total_hits),
            evidence_keywords=(),
        )

    secondary = ()
    if len(ranked) > 1 and ranked[1][1] > 0:
        secondary = (ranked[1][0],)

    return NicheResult(
        primary_niche=top_tag,
        secondary_niches=secondary,
        confidence=round_confidence(top_hits, total_hits),
        evidence_keywords=evidence[top_tag],
    )
