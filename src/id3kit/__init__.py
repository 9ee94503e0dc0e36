"""id3kit: ID3 decision tree induction over discrete-valued examples."""

from loguru import logger

from id3kit.data import Attribute, AttributeSet, Instance, InstanceSet
from id3kit.decision_tree import DecisionNode, build_decision_tree, evaluate
from id3kit.exceptions import DecisionTreeError, EmptyExamplesError, MalformedAttributeError, UnknownValueError
from id3kit.logging import PACKAGE_NAME, enable_logging
from id3kit.polars_utils import instance_set_from_dataframe

logger.disable(PACKAGE_NAME)  # noqa: RUF067 - Disable logging for the id3kit module by default

__all__ = [
    "Attribute",
    "AttributeSet",
    "DecisionNode",
    "DecisionTreeError",
    "EmptyExamplesError",
    "Instance",
    "InstanceSet",
    "MalformedAttributeError",
    "UnknownValueError",
    "build_decision_tree",
    "enable_logging",
    "evaluate",
    "instance_set_from_dataframe",
]
