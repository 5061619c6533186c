"""
Keyword rule sets for every product family in the catalog.

Rule order matters: each family lists its sub-categories from most to least
specific, with exclusion clauses keeping neighbouring sub-categories apart
(a "sofa" record must not also mention carpets, otherwise it belongs to the
combined carpet-and-sofa category).
"""

from dataclasses import replace
from typing import Optional

from menage.classifier.rules import Clause, Rule, RuleSet, any_of, has


def _clauses(*groups: list[Clause] | Clause) -> tuple[Clause, ...]:
    flat: list[Clause] = []
    for group in groups:
        if isinstance(group, Clause):
            flat.append(group)
        else:
            flat.extend(group)
    return tuple(flat)


# --------------------------------------------------------------------------- #
# Family markers shared by the listing filters
# --------------------------------------------------------------------------- #

HAS_TAPIS = _clauses(has("fr", "tapis"), has("ar", "سجاد"), has("en", "carpet"))
HAS_CANAPES = _clauses(
    any_of("fr", "canapé", "canapes"), has("ar", "كنب"), has("en", "sofa")
)
HAS_VOITURE = _clauses(has("fr", "voiture"), has("ar", "سيارة"), has("en", "car"))
HAS_LAVAGE_REPASSAGE = _clauses(
    has("fr", "lavage", "repassage"), has("ar", "كي"), has("en", "ironing")
)
HAS_BUREAUX = _clauses(
    any_of("fr", "bureaux", "bureau"), has("ar", "مكاتب"), has("en", "office")
)
HAS_AIRBNB = _clauses(has("fr", "airbnb"), has("ar", "airbnb"), has("en", "airbnb"))
HAS_PISCINE = _clauses(has("fr", "piscine"), has("ar", "مسبح"), has("en", "pool"))
HAS_CHAUSSURES = _clauses(has("fr", "chaussure"), has("ar", "حذاء"), has("en", "shoe"))

OTHER_FAMILIES = (
    HAS_TAPIS + HAS_CANAPES + HAS_VOITURE + HAS_LAVAGE_REPASSAGE
    + HAS_BUREAUX + HAS_AIRBNB + HAS_PISCINE + HAS_CHAUSSURES
)


# --------------------------------------------------------------------------- #
# Top-level housekeeping listing: routes each record to its family page
# --------------------------------------------------------------------------- #

MENAGE = RuleSet(
    family="menage",
    route="/menage",
    rules=(
        Rule("carpets_sofas", "/tapis-canapes", match=_clauses(
            has("fr", "tapis", "canapé"), has("fr", "tapis", "canapes"),
            any_of("ar", "تapis", "كنب", "سجاد"),
            has("en", "tapis", "canap"),
            any_of("fr", "tapis et canapé", "tapis & canapé"),
        )),
        # Car wash is checked before laundry so "lavage" alone cannot misroute
        Rule("car_wash", "/lavage-de-voiture", match=_clauses(
            has("fr", "lavage", "voiture"), has("fr", "nettoyage", "voiture"),
            has("fr", "car", "wash"), has("fr", "car", "lavage"),
            has("ar", "غسيل", "سيارة"), has("ar", "تنظيف", "سيارة"),
            has("en", "car", "wash"), has("en", "car", "cleaning"),
        ), exclude=_clauses(has("fr", "repassage"), has("ar", "كي"), has("en", "ironing"))),
        Rule("laundry_ironing", "/lavage-et-ropassage", match=_clauses(
            has("fr", "lavage", "repassage"), has("fr", "laundry", "ironing"),
            has("ar", "غسيل", "كي"), has("en", "laundry", "ironing"),
        ), exclude=HAS_VOITURE),
        Rule("offices_factories", "/bureaux-et-usine", match=_clauses(
            has("fr", "bureaux", "usine"), has("fr", "bureau", "usine"),
            has("fr", "office", "factory"), has("ar", "مكاتب", "مصنع"),
            has("en", "office", "factory"),
        )),
        Rule("airbnb", "/airbnb", match=HAS_AIRBNB),
        Rule("pool", "/piscine", match=_clauses(
            has("fr", "piscine"), has("ar", "مسبح"), any_of("en", "pool", "swimming"),
        )),
        Rule("shoes", "/chaussures", match=_clauses(
            has("fr", "chaussure"), any_of("ar", "حذاء", "أحذية"), any_of("en", "shoe", "shoes"),
        )),
        Rule("housekeeping", "/menage-complet", match=_clauses(
            has("fr", "ménage", without=("tapis", "voiture", "lavage", "bureaux")),
            any_of("ar", "تدبير", "منزلي"),
            has("en", "housekeeping"),
            has("en", "cleaning", without=("car",)),
        ), exclude=OTHER_FAMILIES),
    ),
)


# --------------------------------------------------------------------------- #
# Carpets & sofas
# --------------------------------------------------------------------------- #

TAPIS_CANAPES = RuleSet(
    family="tapis_canapes",
    route="/tapis-canapes",
    reservation_route="/reservation-tapis-canapes",
    reservation_table="tapis_canapes_reservations",
    rules=(
        Rule("carpet", "/tapis", match=_clauses(
            has("fr", "tapis"), any_of("ar", "سجاد", "تapis"),
            any_of("en", "tapis", "carpet", "rug"),
        ), exclude=_clauses(
            any_of("fr", "canapé", "canapes", "sofa"),
            any_of("ar", "كنب", "canapé", "canapes"),
            any_of("en", "canap", "sofa"),
        )),
        Rule("sofa", "/canapes", match=_clauses(
            any_of("fr", "canapé", "canapes", "sofa"),
            any_of("ar", "كنب", "canapé", "canapes"),
            any_of("en", "canap", "sofa"),
        ), exclude=_clauses(
            any_of("fr", "tapis", "carpet", "rug"),
            any_of("ar", "سجاد", "tapis", "carpet"),
            any_of("en", "tapis", "carpet", "rug"),
        )),
        # Carpet and sofa keywords may sit in different language fields
        Rule("carpet_and_sofa", "/tapis-et-canape", match=_clauses(
            has("fr", "tapis"), any_of("ar", "سجاد", "تapis"), any_of("en", "tapis", "carpet"),
        ), requires=_clauses(
            any_of("fr", "canapé", "canapes"), any_of("ar", "كنب", "canapé"),
            any_of("en", "canap", "sofa"),
        )),
    ),
)


# --------------------------------------------------------------------------- #
# Swimming pools
# --------------------------------------------------------------------------- #

_DEEP = _clauses(has("fr", "profond"), has("ar", "عميق"), has("en", "deep"))

PISCINE = RuleSet(
    family="piscine",
    route="/piscine",
    reservation_route="/reservation-piscine",
    reservation_table="piscine_reservations",
    exclude=HAS_TAPIS + HAS_CANAPES + HAS_VOITURE + HAS_AIRBNB,
    rules=(
        Rule("pool_deep_clean", "/nettoyage-profond", match=_DEEP),
        Rule("pool_standard_clean", "/nettoyage-standard", match=_clauses(
            any_of("fr", "standard", "normal"), any_of("ar", "عادي", "قياسي"),
            any_of("en", "standard", "normal"),
        ), exclude=_DEEP),
    ),
)


# --------------------------------------------------------------------------- #
# Complete housekeeping by property type
# --------------------------------------------------------------------------- #

_GUEST_HOUSE = _clauses(
    has("fr", "maison", "hôte"), has("fr", "maison d'hôte"),
    has("ar", "بيت", "ضيافة"), has("ar", "بيت ضيافة"),
    has("en", "guest house"), has("en", "house", "host"),
)
_SIMPLE_HOUSE = _clauses(
    has("fr", "maison", without=("hôte", "maison d'hôte")),
    has("ar", "منزل", without=("ضيافة",)),
    has("en", "house", without=("host", "guest")),
)

MENAGE_COMPLET = RuleSet(
    family="menage_complet",
    route="/menage-complet",
    reservation_route="/reservation-menage-complite",
    reservation_table="menage_complet_reservations",
    exclude=OTHER_FAMILIES,
    rules=(
        Rule("resort_hotel", "/resort-hotel", match=_clauses(
            has("fr", "resort", "hôtel"), has("fr", "resort", "hotel"),
            has("ar", "منتجع", "فندق"), has("ar", "resort", "فندق"),
            has("en", "resort", "hotel"),
        )),
        # Guest house is checked before plain house
        Rule("guest_house", "/maison-dhote", match=_GUEST_HOUSE, exclude=_SIMPLE_HOUSE),
        Rule("house", "/maison", match=_clauses(
            has("fr", "maison", without=("hôte", "hotel", "hôtel")),
            has("ar", "منزل", without=("فندق", "ضيافة")),
            has("en", "house", without=("hotel", "host", "guest")),
        ), exclude=_GUEST_HOUSE),
        Rule("apartment", "/appartement", match=_clauses(
            any_of("fr", "appartement", "appart"), has("ar", "شقة"),
            any_of("en", "apartment", "flat"),
        )),
        Rule("villa", "/villa", match=_clauses(
            has("fr", "villa"), has("ar", "فيلا"), has("en", "villa"),
        )),
        Rule("hotel", "/hotel", match=_clauses(
            any_of("fr", "hôtel", "hotel", without=("resort",)),
            has("ar", "فندق", without=("منتجع",)),
            has("en", "hotel", without=("resort",)),
        )),
    ),
)

# The combined housekeeping + cooking page lists the same housekeeping types,
# books exactly one of them together with cooking types, and has its own table.
MENAGE_CUISINE = replace(
    MENAGE_COMPLET,
    family="menage_cuisine",
    route="/menage-cuisine",
    reservation_route="/reservation-menage-cuisine",
    reservation_table="menage_cuisine_reservations",
    parent_route=MENAGE_COMPLET.route,
)


# --------------------------------------------------------------------------- #
# Laundry & ironing
# --------------------------------------------------------------------------- #

LAVAGE_REPASSAGE = RuleSet(
    family="lavage_repassage",
    route="/lavage-et-ropassage",
    reservation_route="/reservation-lavage-ropassage",
    reservation_table="lavage_ropassage_reservations",
    rules=(
        Rule("laundry", "/lavage", match=_clauses(
            has("fr", "lavage", without=("repassage",)),
            has("ar", "غسيل", without=("كي",)),
            has("en", "laundry", without=("ironing",)),
        )),
        Rule("ironing", "/ropassage", match=_clauses(
            has("fr", "repassage", without=("lavage",)),
            has("ar", "كي", without=("غسيل",)),
            has("en", "ironing", without=("laundry",)),
        )),
    ),
)


# --------------------------------------------------------------------------- #
# Offices & factories
# --------------------------------------------------------------------------- #

BUREAUX_USINE = RuleSet(
    family="bureaux_usine",
    route="/bureaux-et-usine",
    reservation_route="/reservation-bureaux-usine",
    reservation_table="bureaux_usin_reservations",
    rules=(
        Rule("factory", "/usine", match=_clauses(
            has("fr", "usine", without=("bureau",)),
            has("ar", "مصنع", without=("مكتب",)),
            has("en", "factory", without=("office",)),
        )),
        Rule("offices", "/bureaux", match=_clauses(
            has("fr", "bureau", without=("usine",)),
            any_of("ar", "مكتب", "مكاتب", without=("مصنع",)),
            any_of("en", "office", "bureau", without=("factory",)),
        )),
    ),
)


# --------------------------------------------------------------------------- #
# Airbnb turnover cleaning
# --------------------------------------------------------------------------- #

AIRBNB = RuleSet(
    family="airbnb",
    route="/airbnb",
    reservation_route="/reservation-airbnb",
    reservation_table="airbnb_reservations",
    exclude=HAS_TAPIS + HAS_CANAPES + HAS_VOITURE,
    rules=(
        Rule("airbnb_quick", "/nettoyage-rapide", match=_clauses(
            has("fr", "rapide", without=("complet",)),
            has("ar", "سريع", without=("كامل",)),
            any_of("en", "quick", "rapid", without=("complete",)),
        )),
        Rule("airbnb_complete", "/nettoyage-complet", match=_clauses(
            has("fr", "complet", without=("rapide",)),
            has("ar", "كامل", without=("سريع",)),
            has("en", "complete", without=("quick", "rapid")),
        )),
    ),
)


# --------------------------------------------------------------------------- #
# Shoes
# --------------------------------------------------------------------------- #

CHAUSSURES = RuleSet(
    family="chaussures",
    route="/chaussures",
    reservation_route="/reservation-chaussures",
    reservation_table="chaussures_reservations",
    exclude=HAS_TAPIS + HAS_CANAPES + HAS_VOITURE + HAS_AIRBNB + HAS_PISCINE,
    rules=(
        Rule("shoe_polish", "/cirage-chaussures", match=_clauses(
            has("fr", "cirage"), has("ar", "تلميع"), has("en", "polish"),
        )),
        Rule("shoe_cleaning", "/nettoyage-chaussures", match=_clauses(
            has("fr", "nettoyage", without=("cirage",)),
            has("ar", "تنظيف", without=("تلميع",)),
            has("en", "cleaning", without=("polish",)),
        )),
    ),
)


# --------------------------------------------------------------------------- #
# Car wash
# --------------------------------------------------------------------------- #

VOITURE = RuleSet(
    family="voiture",
    route="/lavage-de-voiture",
    reservation_route="/reservation-voiture",
    reservation_table="voiture_reservations",
    exclude=HAS_TAPIS + HAS_CANAPES,
    rules=(
        Rule("car_wash_center", "/lavage-en-centre", match=_clauses(
            has("fr", "centre", "lavage"), has("ar", "المركز", "غسيل"),
            has("en", "car wash center"), has("en", "center", "wash"),
        ), exclude=_clauses(has("fr", "domicile"), has("ar", "منزل"), has("en", "home"))),
        Rule("car_wash_home", "/lavage-a-domicile", match=_clauses(
            has("fr", "domicile", "lavage"), has("ar", "منزل", "غسيل"),
            has("en", "home", "wash"),
        ), exclude=_clauses(
            any_of("fr", "centre", "center"), any_of("ar", "المركز", "مركز"),
            any_of("en", "center", "centre"),
        )),
    ),
)


FAMILIES: dict[str, RuleSet] = {
    rs.family: rs
    for rs in (
        MENAGE, TAPIS_CANAPES, PISCINE, MENAGE_COMPLET, MENAGE_CUISINE,
        LAVAGE_REPASSAGE, BUREAUX_USINE, AIRBNB, CHAUSSURES, VOITURE,
    )
}


def get_family(name: str) -> RuleSet:
    """Look up a family rule set by name.

    Raises:
        KeyError: If the family is unknown.
    """
    if name not in FAMILIES:
        raise KeyError(f"Unknown family '{name}'. Available: {list(FAMILIES)}")
    return FAMILIES[name]


def family_for_label(label: str) -> Optional[RuleSet]:
    """Find the bookable family that owns a sub-category label.

    Housekeeping labels belong to ``menage_complet``; the combined
    housekeeping + cooking page reuses them but is opened on its own.
    """
    for rule_set in FAMILIES.values():
        if rule_set is MENAGE or rule_set is MENAGE_CUISINE:
            continue
        if label in rule_set.labels:
            return rule_set
    return None
