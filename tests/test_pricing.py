"""Tests for pricing strategies and per-category rate tables."""

from dataclasses import replace

import pytest

from menage.config import PricingConfig
from menage.errors import UnknownCategoryError
from menage.pricing import (
    Dimension,
    Flat,
    PerArea,
    PerPiece,
    PricingMode,
    TieredMinimum,
    format_price,
    rate_table_for,
)
from menage.pricing.rate_tables import PRICED_LABELS, option_label
from menage.pricing.strategies import total_area
from tests.conftest import make_record


class TestDimension:
    def test_area_in_square_meters(self):
        assert Dimension(200, 300).area_m2 == pytest.approx(6.0)

    def test_zero_side_is_incomplete(self):
        dim = Dimension(200, 0)
        assert not dim.is_complete
        assert dim.area_m2 == 0.0

    def test_parse_sanitizes_free_text(self):
        dim = Dimension.parse("200 cm", "0150")
        assert dim == Dimension(200.0, 150.0)

    def test_parse_garbage_is_zero(self):
        assert Dimension.parse("abc", None) == Dimension(0.0, 0.0)

    def test_total_area_skips_incomplete(self):
        assert total_area([Dimension(100, 100), Dimension(100, 0)]) == pytest.approx(1.0)


class TestPerPiece:
    def test_unit_times_quantity(self):
        assert PerPiece(12).price(quantity=3) == 36

    def test_zero_quantity(self):
        assert PerPiece(12).price(quantity=0) == 0.0

    def test_mode(self):
        assert PerPiece(1).mode == PricingMode.PER_PIECE


class TestPerArea:
    def test_rate_times_area(self):
        assert PerArea(2.5).price(dimensions=[Dimension(200, 400)]) == pytest.approx(20.0)

    def test_zero_dimension_is_zero(self):
        assert PerArea(25).price(dimensions=[Dimension(0, 400)]) == 0.0

    def test_no_dimensions_is_zero(self):
        assert PerArea(25).price() == 0.0

    def test_sums_entries(self):
        dims = [Dimension(200, 300), Dimension(100, 100)]
        assert PerArea(10).price(dimensions=dims) == pytest.approx(70.0)

    def test_rounded_area_per_entry(self):
        # 333 x 333 cm = 11.0889 m2 -> 11.09 m2 -> 22.18
        assert PerArea(2, round_area=True).price(dimensions=[Dimension(333, 333)]) == pytest.approx(22.18)

    def test_rounded_area_keeps_storefront_ties(self):
        # 100.5 x 100 cm = 1.005 m2, which rounds down to 1.00 m2 in binary
        assert PerArea(2, round_area=True).price(dimensions=[Dimension(100.5, 100)]) == 2.0

    def test_missing_rate_is_zero(self):
        assert PerArea(0).price(dimensions=[Dimension(200, 300)]) == 0.0


class TestTieredMinimum:
    @pytest.fixture
    def sofa(self):
        return TieredMinimum(threshold_m2=8, minimum=800, rate_per_m2=100)

    def test_threshold_billed_at_minimum(self, sofa):
        assert sofa.price_for_area(8.0) == 800

    def test_just_above_threshold(self, sofa):
        assert sofa.price_for_area(8.01) == pytest.approx(801.0)

    def test_small_area_billed_at_minimum(self, sofa):
        assert sofa.price_for_area(0.5) == 800

    def test_zero_area_is_zero(self, sofa):
        assert sofa.price_for_area(0) == 0.0

    def test_price_from_dimensions(self, sofa):
        assert sofa.price(dimensions=[Dimension(400, 200)]) == 800
        assert sofa.price(dimensions=[Dimension(500, 200)]) == pytest.approx(1000.0)


class TestFlat:
    def test_fixed_amount(self):
        assert Flat(50).price() == 50

    def test_never_negative(self):
        assert Flat(-5).price() == 0.0


class TestRateTables:
    def test_carpet_uses_record_price(self):
        table = rate_table_for("carpet", make_record("Tapis", price=25))
        assert table["carpet"] == PerArea(25)

    def test_carpet_without_price_is_zero_rate(self):
        table = rate_table_for("carpet", make_record("Tapis"))
        assert table["carpet"].price(dimensions=[Dimension(200, 300)]) == 0.0

    def test_sofa_tiers(self):
        table = rate_table_for("sofa")
        assert table["sofa"] == TieredMinimum(8, 800, 100)

    def test_guest_house(self):
        table = rate_table_for("guest_house")
        assert set(table) == {"rooms", "suites", "pool", "garden", "breakfast", "sheets"}
        assert table["rooms"] == PerArea(2, round_area=True)
        assert table["breakfast"] == Flat(50)
        assert table["sheets"] == Flat(20)

    def test_house(self):
        assert set(rate_table_for("house")) == {"rooms", "bathrooms", "salons", "garden"}

    def test_apartment(self):
        table = rate_table_for("apartment")
        assert set(table) == {"rooms", "salons", "bathrooms", "kitchen", "laundry"}
        assert table["laundry"] == Flat(50)

    def test_hotel(self):
        table = rate_table_for("hotel")
        assert table["sheets"] == Flat(20)
        assert table["towels"] == Flat(30)
        assert table["windows"] == Flat(20)

    @pytest.mark.parametrize("label", ["laundry", "ironing"])
    def test_garments(self, label):
        table = rate_table_for(label)
        assert table["everyday"] == PerPiece(5)
        assert table["jacket"] == PerPiece(10)
        assert table["coat"] == PerPiece(15)
        assert table["leather_jacket"] == PerPiece(12)
        assert table["bedsheet"] == PerArea(10)
        assert table["blanket"] == PerArea(15)
        assert table["quilted_blanket"] == PerArea(20)

    @pytest.mark.parametrize("label", ["offices", "factory"])
    def test_surface(self, label):
        assert rate_table_for(label, make_record("Bureaux", price=6))["surface"] == PerArea(6)

    @pytest.mark.parametrize("label", ["shoe_cleaning", "shoe_polish"])
    def test_shoes_per_pair(self, label):
        assert rate_table_for(label, make_record("Chaussures", price=30))["pairs"] == PerPiece(30)

    @pytest.mark.parametrize("label", [
        "airbnb_quick", "airbnb_complete", "car_wash_center", "car_wash_home",
        "villa", "resort_hotel", "carpet_and_sofa",
    ])
    def test_flat_priced(self, label):
        assert rate_table_for(label, make_record("X", price=450)) == {"base": Flat(450)}

    def test_pool(self):
        assert rate_table_for("pool_deep_clean", make_record("Piscine", price=15))["pool"] == PerArea(15)

    def test_unknown_label(self):
        with pytest.raises(UnknownCategoryError):
            rate_table_for("jardinage")

    def test_unknown_label_is_a_key_error(self):
        with pytest.raises(KeyError):
            rate_table_for("jardinage")

    def test_rates_come_from_config(self):
        pricing = replace(PricingConfig(), breakfast_price=75.0)
        assert rate_table_for("guest_house", pricing=pricing)["breakfast"] == Flat(75.0)

    def test_every_bookable_label_has_a_table(self):
        from menage.classifier import FAMILIES
        from menage.classifier.families import MENAGE

        labels = {label for rs in FAMILIES.values() if rs is not MENAGE for label in rs.labels}
        assert labels == set(PRICED_LABELS)


class TestFormatting:
    def test_format_price(self):
        assert format_price(80) == "80.00 DH"

    def test_missing_price(self):
        assert format_price(None) is None
        assert format_price("abc") is None

    def test_zero_is_not_shown(self):
        assert format_price(0) is None

    def test_option_label(self):
        assert option_label("breakfast") == "Petit-déjeuner"
        assert option_label("extra_rooms") == "Extra rooms"
