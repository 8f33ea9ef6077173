"""
Niche keyword dictionaries and niche → brand category map.

Built-in tables are the default. NICHE_TAXONOMY_PATH may point at a YAML file
with the same shape (`niches:` tag → keyword list, `brands:` tag → local /
ecommerce lists) to override them. Either way the tables are loaded once per
process and frozen.

Tag order is significant: the classifier breaks ties between niches with the
same hit count by this order, so it is part of the output contract.
"""
import logging
from collections import namedtuple
from types import MappingProxyType

import yaml

from creatorfit import config

logger = logging.getLogger('pipeline.taxonomy')

GENERAL = 'general'

# Canonical niche order (tie-break order for the classifier)
NICHE_ORDER = ('food', 'beauty', 'fitness', 'tech', 'family', 'travel', 'fashion')

DEFAULT_NICHE_KEYWORDS = {
    'food': ['restaurante', 'sushi', 'comida', 'delivery', 'menú', 'menu', 'tapas', 'reseña',
             'cocina', 'chef', 'hamburg', 'ramen', 'poke', 'izakaya'],
    'beauty': ['maquillaje', 'skincare', 'uñas', 'estética', 'pelo', 'cabello', 'dermo', 'beauty',
               'cosmética', 'cosmetica'],
    'fitness': ['gym', 'treino', 'entreno', 'proteína', 'proteina', 'dieta', 'fitness',
                'perder peso', 'pérdida', 'musculación', 'musculacion'],
    'tech': ['apps', 'gadget', 'review', 'iphone', 'android', 'software', 'saas', 'tecnología',
             'tecnologia', 'ai', 'ia'],
    'family': ['mamá', 'mama', 'hijos', 'maternidad', 'familia', 'família', 'crianza', 'bebé',
               'bebe', 'paternidad'],
    'travel': ['viaje', 'viagem', 'travel', 'hotel', 'ruta', 'playa', 'aeropuerto', 'turismo', 'trip'],
    'fashion': ['moda', 'outfit', 'look', 'streetwear', 'ropa', 'zapatos', 'fashion'],
}

# Starter lists; the CRM team owns the real ones
DEFAULT_BRAND_MAP = {
    'food': {
        'local': ['restaurantes locais', 'dark kitchens', 'cafés', 'eventos gastronômicos', 'apps de reservas'],
        'ecommerce': ['utensílios de cozinha', 'assinatura gourmet', 'boxes de comida'],
    },
    'beauty': {
        'local': ['clínicas estéticas', 'salões', 'dermoclínicas'],
        'ecommerce': ['skincare DTC', 'makeup', 'haircare'],
    },
    'fitness': {
        'local': ['academias', 'studios de treino', 'personal training'],
        'ecommerce': ['roupa esportiva', 'acessórios fitness'],
    },
    'tech': {
        'local': ['assistência técnica', 'lojas de acessórios', 'coworkings'],
        'ecommerce': ['gadgets', 'apps/SaaS', 'fintechs'],
    },
    'family': {
        'local': ['escolas/atividades', 'lojas infantis', 'serviços familiares'],
        'ecommerce': ['produtos baby', 'brinquedos', 'assinaturas educativas'],
    },
    'travel': {
        'local': ['agências locais', 'tours', 'guias'],
        'ecommerce': ['malas', 'acessórios viagem', 'seguros'],
    },
    'fashion': {
        'local': ['boutiques', 'barbearias/estilo', 'fotografia'],
        'ecommerce': ['streetwear', 'acessórios', 'calçados'],
    },
    GENERAL: {
        'local': ['serviços locais', 'eventos', 'restaurantes'],
        'ecommerce': ['e-commerce geral', 'apps', 'produtos de alta rotatividade'],
    },
}

Taxonomy = namedtuple('Taxonomy', ['niche_keywords', 'brand_map', 'source'])


class TaxonomyError(ValueError):
    """Raised when a taxonomy file does not have the expected shape."""


_taxonomy = None


def _freeze(niche_keywords, brand_map, source):
    """Validate raw dicts and return an immutable Taxonomy."""
    if not niche_keywords:
        raise TaxonomyError('taxonomy has no niches')

    keywords = {}
    for tag, words in niche_keywords.items():
        if tag == GENERAL:
            raise TaxonomyError(f"'{GENERAL}' is reserved for the no-match fallback")
        if not isinstance(words, (list, tuple)) or not all(isinstance(w, str) and w for w in words):
            raise TaxonomyError(f"niche '{tag}' must map to a list of non-empty strings")
        keywords[str(tag)] = tuple(w.lower() for w in words)

    brands = {}
    for tag in list(keywords) + [GENERAL]:
        entry = brand_map.get(tag)
        if not entry or not entry.get('local') or not entry.get('ecommerce'):
            raise TaxonomyError(f"brand map has no local/ecommerce lists for '{tag}'")
        brands[tag] = MappingProxyType({
            'local': tuple(entry['local']),
            'ecommerce': tuple(entry['ecommerce']),
        })

    return Taxonomy(MappingProxyType(keywords), MappingProxyType(brands), source)


def default_taxonomy():
    """Built-in tables in canonical tag order."""
    ordered = {tag: DEFAULT_NICHE_KEYWORDS[tag] for tag in NICHE_ORDER}
    return _freeze(ordered, DEFAULT_BRAND_MAP, 'builtin')


def load_taxonomy():
    """Load the taxonomy once (YAML override with built-in fallback) and cache it."""
    global _taxonomy
    if _taxonomy is not None:
        return _taxonomy

    path = config.NICHE_TAXONOMY_PATH
    if not path:
        _taxonomy = default_taxonomy()
        return _taxonomy

    try:
        with open(path, 'r', encoding='utf-8') as f:
            raw = yaml.safe_load(f) or {}
        _taxonomy = _freeze(raw.get('niches') or {}, raw.get('brands') or {}, path)
        logger.info("Taxonomy loaded from %s (%d niches)", path, len(_taxonomy.niche_keywords))
    except Exception as e:
        logger.warning("Taxonomy file %s unusable (%s), using built-in tables", path, e)
        _taxonomy = default_taxonomy()

    return _taxonomy
