"""
Niche → brand category lookup. Unknown niches resolve to the 'general' entry.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

from creatorfit.pipeline.taxonomy import GENERAL, Taxonomy, load_taxonomy

TARGET_TYPES = ('local', 'ecommerce')


@dataclass(frozen=True)
class BrandTargets:
    segment: str
    local: Tuple[str, ...]
    ecommerce: Tuple[str, ...]

    def rows(self):
        """(target_type, brands) pairs in persistence order."""
        return [('local', self.local), ('ecommerce', self.ecommerce)]

    def to_dict(self):
        return {
            'segment': self.segment,
            'local': list(self.local),
            'ecommerce': list(self.ecommerce),
        }


def build_brand_targets(niche: str, taxonomy: Optional[Taxonomy] = None) -> BrandTargets:
    taxonomy = taxonomy or load_taxonomy()
    entry = taxonomy.brand_map.get(niche) or taxonomy.brand_map[GENERAL]
    return BrandTargets(
        segment=niche,
        local=tuple(entry['local']),
        ecommerce=tuple(entry['ecommerce']),
    )
