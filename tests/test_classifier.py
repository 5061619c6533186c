"""Tests for keyword classification and family listing filters."""

import pytest

from menage.classifier import FAMILIES, classify, family_for_label, filter_listing, get_family
from menage.classifier.families import (
    AIRBNB,
    BUREAUX_USINE,
    CHAUSSURES,
    LAVAGE_REPASSAGE,
    MENAGE,
    MENAGE_COMPLET,
    PISCINE,
    TAPIS_CANAPES,
    VOITURE,
)
from menage.classifier.rules import Clause, Rule, RuleSet, has
from menage.tools import catalog
from tests.conftest import make_record


class TestClause:
    def test_all_keywords_required(self):
        clause = has("fr", "tapis", "canapé")
        assert clause.matches({"fr": "tapis et canapé"})
        assert not clause.matches({"fr": "tapis"})

    def test_none_of_vetoes(self):
        clause = has("fr", "maison", without=("hôte",))
        assert clause.matches({"fr": "maison"})
        assert not clause.matches({"fr": "maison d'hôte"})

    def test_empty_field_never_matches(self):
        assert not has("en", "carpet").matches({"fr": "tapis", "en": ""})


class TestRuleMatching:
    def test_requires_needs_one_hit(self):
        rule = Rule("x", "/x", match=(has("fr", "a"),), requires=(has("en", "b"),))
        assert rule.matches({"fr": "a", "en": "b"})
        assert not rule.matches({"fr": "a", "en": "c"})

    def test_exclude_overrides_match(self):
        rule = Rule("x", "/x", match=(has("fr", "a"),), exclude=(has("fr", "z"),))
        assert not rule.matches({"fr": "az"})

    def test_rule_set_labels_follow_rule_order(self):
        rs = RuleSet("f", "/f", rules=(
            Rule("first", "/1", match=(has("fr", "a"),)),
            Rule("second", "/2", match=(has("fr", "a"),)),
        ))
        assert rs.labels == ("first", "second")
        assert classify(make_record("a"), rs) == "first"


class TestTapisCanapes:
    def test_carpet_only(self):
        record = make_record("Nettoyage de tapis", "Carpet cleaning")
        assert classify(record, TAPIS_CANAPES) == "carpet"

    def test_sofa_only(self):
        record = make_record("Nettoyage de canapés", "Sofa cleaning")
        assert classify(record, TAPIS_CANAPES) == "sofa"

    def test_both_words_give_combined_label(self):
        record = make_record("Tapis et canapés", "Carpet and sofa")
        assert classify(record, TAPIS_CANAPES) == "carpet_and_sofa"

    def test_words_split_across_languages_give_combined_label(self):
        record = make_record("Tapis", name_en="Sofa")
        assert classify(record, TAPIS_CANAPES) == "carpet_and_sofa"

    def test_english_only_record(self):
        assert classify(make_record(name_en="Rug shampoo"), TAPIS_CANAPES) == "carpet"

    def test_unrelated_record_is_inert(self):
        assert classify(make_record("Jardinage"), TAPIS_CANAPES) is None

    def test_routes(self):
        assert TAPIS_CANAPES.route_for("carpet") == "/tapis"
        assert TAPIS_CANAPES.route_for("sofa") == "/canapes"
        assert TAPIS_CANAPES.route_for("carpet_and_sofa") == "/tapis-et-canape"


class TestMenageComplet:
    @pytest.mark.parametrize("name, label", [
        ("Resort hôtel", "resort_hotel"),
        ("Maison d'hôte", "guest_house"),
        ("Maison", "house"),
        ("Appartement", "apartment"),
        ("Villa", "villa"),
        ("Hôtel", "hotel"),
    ])
    def test_property_types(self, name, label):
        assert classify(make_record(name), MENAGE_COMPLET) == label

    def test_guest_house_is_not_a_house(self):
        assert classify(make_record(name_en="Guest house"), MENAGE_COMPLET) == "guest_house"

    def test_resort_is_not_a_plain_hotel(self):
        assert classify(make_record(name_en="Resort hotel"), MENAGE_COMPLET) == "resort_hotel"

    def test_family_exclusion_drops_carpet_records(self):
        records = [make_record("Ménage maison"), make_record("Ménage tapis")]
        kept = filter_listing(records, MENAGE_COMPLET)
        assert [r.name_fr for r in kept] == ["Ménage maison"]


class TestOtherFamilies:
    def test_pool_deep_and_standard(self):
        assert classify(make_record("Nettoyage profond"), PISCINE) == "pool_deep_clean"
        assert classify(make_record("Nettoyage standard"), PISCINE) == "pool_standard_clean"

    def test_laundry_and_ironing(self):
        assert classify(make_record("Lavage"), LAVAGE_REPASSAGE) == "laundry"
        assert classify(make_record("Repassage"), LAVAGE_REPASSAGE) == "ironing"

    def test_laundry_and_ironing_together_is_inert(self):
        assert classify(make_record("Lavage et repassage"), LAVAGE_REPASSAGE) is None

    def test_offices_and_factory(self):
        assert classify(make_record("Nettoyage de bureaux"), BUREAUX_USINE) == "offices"
        assert classify(make_record("Nettoyage d'usine"), BUREAUX_USINE) == "factory"

    def test_airbnb(self):
        assert classify(make_record("Airbnb rapide"), AIRBNB) == "airbnb_quick"
        assert classify(make_record("Airbnb complet"), AIRBNB) == "airbnb_complete"

    def test_shoes(self):
        assert classify(make_record("Cirage"), CHAUSSURES) == "shoe_polish"
        assert classify(make_record("Nettoyage de chaussures"), CHAUSSURES) == "shoe_cleaning"

    def test_car_wash(self):
        assert classify(make_record("Lavage en centre"), VOITURE) == "car_wash_center"
        assert classify(make_record("Lavage à domicile"), VOITURE) == "car_wash_home"


class TestTopLevelRouting:
    def test_car_wash_checked_before_laundry(self):
        record = make_record("Lavage de voiture")
        assert classify(record, MENAGE) == "car_wash"

    def test_carpets_and_sofas_category(self):
        assert classify(make_record("Tapis et canapés"), MENAGE) == "carpets_sofas"

    def test_every_seeded_category_routes_to_a_family_page(self):
        family_routes = {rs.route for rs in FAMILIES.values() if rs is not MENAGE}
        for category in catalog.list_menage_categories():
            label = classify(category, MENAGE)
            assert label is not None, category.name_fr
            assert MENAGE.route_for(label) in family_routes


class TestClassifierProperties:
    def test_deterministic(self):
        record = make_record("Tapis et canapés", "Carpet and sofa", "سجاد وكنب")
        results = {classify(record, TAPIS_CANAPES) for _ in range(20)}
        assert results == {"carpet_and_sofa"}

    def test_explicit_category_wins(self):
        record = make_record("Tapis", category="sofa")
        assert classify(record, TAPIS_CANAPES) == "sofa"

    def test_explicit_category_from_another_family_is_ignored(self):
        record = make_record("Tapis", category="villa")
        assert classify(record, TAPIS_CANAPES) == "carpet"

    def test_seeded_records_classify_into_their_family(self):
        for record in catalog.list_category_records():
            matches = [
                name for name, rs in FAMILIES.items()
                if rs is not MENAGE and classify(record, rs) is not None
            ]
            assert matches, record.name_fr


class TestFilterListing:
    def test_dedupes_by_id_keeping_order(self):
        a = make_record("Maison", record_id=1)
        b = make_record("Villa", record_id=2)
        kept = filter_listing([a, b, a], MENAGE_COMPLET)
        assert [r.id for r in kept] == [1, 2]

    def test_include_filter(self):
        rs = RuleSet("f", "/f", rules=(), include=(Clause("fr", ("piscine",)),))
        kept = filter_listing([make_record("Piscine"), make_record("Maison")], rs)
        assert [r.name_fr for r in kept] == ["Piscine"]


class TestFamilyLookup:
    def test_get_family(self):
        assert get_family("piscine") is PISCINE

    def test_unknown_family_raises(self):
        with pytest.raises(KeyError):
            get_family("jardinage")

    def test_family_for_label(self):
        assert family_for_label("guest_house") is MENAGE_COMPLET
        assert family_for_label("car_wash") is None
        assert family_for_label("nope") is None

    def test_every_bookable_family_has_a_reservation_table(self):
        for rs in FAMILIES.values():
            if rs is MENAGE:
                continue
            assert rs.reservation_table.endswith("_reservations")
