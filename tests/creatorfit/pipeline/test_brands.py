"""Tests for creatorfit.pipeline.brands."""
import pytest

from creatorfit.pipeline.brands import BrandTargets, build_brand_targets
from creatorfit.pipeline.taxonomy import GENERAL, NICHE_ORDER


class TestBuildBrandTargets:

    @pytest.mark.parametrize('niche', list(NICHE_ORDER) + [GENERAL])
    def test_every_niche_has_both_lists(self, niche):
        targets = build_brand_targets(niche)
        assert targets.segment == niche
        assert len(targets.local) > 0
        assert len(targets.ecommerce) > 0

    def test_food_targets(self):
        targets = build_brand_targets('food')
        assert 'restaurantes locais' in targets.local
        assert 'boxes de comida' in targets.ecommerce

    def test_unknown_niche_falls_back_to_general(self):
        targets = build_brand_targets('astrology')
        general = build_brand_targets(GENERAL)
        assert targets.local == general.local
        assert targets.ecommerce == general.ecommerce

    def test_rows_are_local_then_ecommerce(self):
        rows = build_brand_targets('tech').rows()
        assert [target_type for target_type, _ in rows] == ['local', 'ecommerce']

    def test_to_dict(self):
        data = build_brand_targets('beauty').to_dict()
        assert data['segment'] == 'beauty'
        assert isinstance(data['local'], list)
        assert isinstance(data['ecommerce'], list)

    def test_returns_frozen_value(self):
        targets = build_brand_targets('travel')
        assert isinstance(targets, BrandTargets)
        with pytest.raises(AttributeError):
            targets.segment = 'food'
