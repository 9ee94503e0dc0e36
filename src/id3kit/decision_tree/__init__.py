"""Decision tree sub-package: distribution, node models, and ID3 construction."""

from __future__ import annotations

from id3kit.decision_tree.distribution import Distribution
from id3kit.decision_tree.fitting import (
    ClassificationReport,
    build_decision_tree,
    evaluate,
    expected_entropy,
    plurality_value,
    select_split_attribute,
)
from id3kit.decision_tree.models import DecisionNode, Internal, Leaf

__all__ = [
    "ClassificationReport",
    "DecisionNode",
    "Distribution",
    "Internal",
    "Leaf",
    "build_decision_tree",
    "evaluate",
    "expected_entropy",
    "plurality_value",
    "select_split_attribute",
]
