from menage.classifier.families import FAMILIES, family_for_label, get_family
from menage.classifier.rules import Clause, Rule, RuleSet, classify, filter_listing

__all__ = [
    "classify",
    "filter_listing",
    "Clause",
    "Rule",
    "RuleSet",
    "FAMILIES",
    "get_family",
    "family_for_label",
]
