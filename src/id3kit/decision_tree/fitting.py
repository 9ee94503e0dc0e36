"""Decision tree induction: split selection, recursive construction, and evaluation."""

from __future__ import annotations

from collections.abc import Sequence

from loguru import logger
from pydantic import BaseModel, Field
from sklearn.metrics import accuracy_score

from id3kit.data import Attribute, InstanceSet
from id3kit.decision_tree.distribution import Distribution
from id3kit.decision_tree.models import DecisionNode, Internal, Leaf
from id3kit.exceptions import EmptyExamplesError, MalformedAttributeError
from id3kit.logging import BUILD_LEVEL
from id3kit.settings import get_settings

# ---------------------------------------------------------------------------
# Public models
# ---------------------------------------------------------------------------


class ClassificationReport(BaseModel):
    """Outcome of classifying a labeled instance set with a built tree.

    Attributes:
        sample_count (int): Number of instances classified.
        correct_count (int): Instances whose prediction equals their class value.
        accuracy (float): `correct_count / sample_count`, from 0.0 to 1.0.
        predictions (list[str]): Predicted class value per instance, in order.

    Examples:
        >>> report = ClassificationReport(sample_count=4, correct_count=3, accuracy=0.75, predictions=["a"] * 4)
        >>> report.accuracy
        0.75
    """

    sample_count: int = Field(ge=1, description="Number of instances classified.")
    correct_count: int = Field(ge=0, description="Instances whose prediction equals their class value.")
    accuracy: float = Field(ge=0.0, le=1.0, description="Fraction of instances classified correctly.")
    predictions: list[str] = Field(description="Predicted class value per instance, in instance order.")


# ---------------------------------------------------------------------------
# Public interface -- Split selection
# ---------------------------------------------------------------------------


def expected_entropy(attribute: Attribute, examples: InstanceSet) -> float:
    """Compute the class entropy remaining after splitting `examples` on `attribute`.

    For each legal value v of `attribute`, the class distribution of the
    matching subset contributes `(|subset| / |examples|) * entropy(subset)`.

    Args:
        attribute (Attribute): The candidate split attribute.
        examples (InstanceSet): The examples to split.

    Returns:
        float: The expected remaining entropy, in bits.

    Raises:
        EmptyExamplesError: If `examples` is empty.
    """
    if examples.is_empty:
        raise EmptyExamplesError(f"Cannot compute expected entropy of attribute {attribute.name!r} over zero examples")
    total = len(examples)
    remainder = 0.0
    for value in attribute.values:
        subset = examples.matching(attribute, value)
        if subset.is_empty:
            continue
        remainder += (len(subset) / total) * Distribution.from_class_values(subset).entropy()
    return remainder


def select_split_attribute(examples: InstanceSet, attributes: Sequence[Attribute]) -> Attribute:
    """Pick the attribute with the lowest expected remaining entropy.

    This is the maximum-information-gain attribute, since the entropy before
    splitting is the same for every candidate. Ties go to the candidate listed
    first.

    Args:
        examples (InstanceSet): The examples to split.
        attributes (Sequence[Attribute]): Candidate split attributes.

    Returns:
        Attribute: The chosen split attribute.

    Raises:
        MalformedAttributeError: If `attributes` is empty.
    """
    if not attributes:
        raise MalformedAttributeError("Cannot select a split attribute from an empty candidate list")

    best_attribute = attributes[0]
    best_entropy = expected_entropy(best_attribute, examples)
    for candidate in attributes[1:]:
        candidate_entropy = expected_entropy(candidate, examples)
        if candidate_entropy < best_entropy:
            best_attribute, best_entropy = candidate, candidate_entropy

    logger.debug(
        "Split attribute selected",
        attribute=best_attribute.name,
        expected_entropy=best_entropy,
        candidate_count=len(attributes),
        example_count=len(examples),
    )
    return best_attribute


def plurality_value(examples: InstanceSet) -> str:
    """Return the most frequent class value among `examples`.

    Ties go to the class value declared first.

    Args:
        examples (InstanceSet): The examples to count.

    Returns:
        str: The plurality class value.

    Raises:
        EmptyExamplesError: If `examples` is empty.
    """
    return Distribution.from_class_values(examples).mode_value()


# ---------------------------------------------------------------------------
# Public interface -- Tree construction
# ---------------------------------------------------------------------------


def build_decision_tree(
    examples: InstanceSet,
    attributes: Sequence[Attribute] | None = None,
) -> DecisionNode:
    """Induce a decision tree from labeled examples with ID3.

    Args:
        examples (InstanceSet): Training examples; must not be empty.
        attributes (Sequence[Attribute] | None): Attributes the tree may split
            on. Defaults to every attribute except the class attribute.

    Returns:
        DecisionNode: The root of the built tree, labeled with
            `ID3Settings.root_label` at depth 0.

    Raises:
        EmptyExamplesError: If `examples` is empty.
        MalformedAttributeError: If a candidate is not part of the attribute
            set, is the class attribute, or is listed twice.

    Examples:
        >>> tree = build_decision_tree(examples)  # doctest: +SKIP
        >>> tree.decide(examples.attribute_set, examples.instances[0])  # doctest: +SKIP
        'no'
    """
    attribute_set = examples.attribute_set
    candidates = list(attributes) if attributes is not None else attribute_set.candidate_attributes()
    logger.log(BUILD_LEVEL, "Building decision tree", example_count=len(examples), attribute_count=len(candidates))

    if examples.is_empty:
        logger.warning("Decision tree build failed", reason="no examples")
        raise EmptyExamplesError("Cannot build a decision tree from zero examples")
    _validate_candidates(examples, candidates)

    tree = _construct(
        examples,
        candidates,
        label=get_settings().root_label,
        depth=0,
        parent_examples=examples,
    )
    logger.info(
        "Decision tree built",
        node_count=tree.node_count(),
        leaf_count=tree.leaf_count(),
        depth=tree.max_depth(),
    )
    return tree


# ---------------------------------------------------------------------------
# Public interface -- Evaluation
# ---------------------------------------------------------------------------


def evaluate(tree: DecisionNode, examples: InstanceSet) -> ClassificationReport:
    """Classify every example and compare the predictions with their class values.

    Args:
        tree (DecisionNode): A built tree.
        examples (InstanceSet): Labeled examples aligned with the tree's attribute set.

    Returns:
        ClassificationReport: Accuracy and per-instance predictions.

    Raises:
        EmptyExamplesError: If `examples` is empty.
        UnknownValueError: If an example has an undeclared value on a split attribute.
    """
    logger.log(BUILD_LEVEL, "Evaluating decision tree", example_count=len(examples))
    if examples.is_empty:
        raise EmptyExamplesError("Cannot evaluate a decision tree on zero examples")

    attribute_set = examples.attribute_set
    predictions = [tree.decide(attribute_set, instance) for instance in examples]
    actual = examples.class_values()
    correct_count = sum(p == a for p, a in zip(predictions, actual, strict=True))
    report = ClassificationReport(
        sample_count=len(examples),
        correct_count=correct_count,
        accuracy=float(accuracy_score(actual, predictions)),
        predictions=predictions,
    )
    logger.info("Decision tree evaluated", accuracy=report.accuracy, sample_count=report.sample_count)
    return report


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _construct(
    examples: InstanceSet,
    attributes: list[Attribute],
    *,
    label: str,
    depth: int,
    parent_examples: InstanceSet,
) -> DecisionNode:
    """Recursively build the subtree for one set of examples.

    Args:
        examples (InstanceSet): Examples reaching this node; may be empty.
        attributes (list[Attribute]): Attributes still available for splitting.
        label (str): Value on the edge leading to this node.
        depth (int): Depth of this node.
        parent_examples (InstanceSet): Examples that reached the parent node,
            whose plurality value decides an empty node.

    Returns:
        DecisionNode: A leaf, or an internal node with one child per value
            of its split attribute.
    """
    if examples.is_empty:
        return _make_leaf(plurality_value(parent_examples), label=label, depth=depth, reason="no examples")

    class_values = set(examples.class_values())
    if len(class_values) == 1:
        return _make_leaf(class_values.pop(), label=label, depth=depth, reason="pure")

    if not attributes:
        return _make_leaf(plurality_value(examples), label=label, depth=depth, reason="no attributes")

    split_attribute = select_split_attribute(examples, attributes)
    child_attributes = [attribute for attribute in attributes if attribute != split_attribute]
    children = {
        value: _construct(
            examples.matching(split_attribute, value),
            child_attributes,
            label=value,
            depth=depth + 1,
            parent_examples=examples,
        )
        for value in split_attribute.values
    }
    logger.debug(
        "Internal node created",
        label=label,
        depth=depth,
        attribute=split_attribute.name,
        example_count=len(examples),
    )
    return Internal(label=label, depth=depth, split_attribute=split_attribute, children=children)


def _make_leaf(decision: str, *, label: str, depth: int, reason: str) -> Leaf:
    """Create a leaf and log why construction stopped here.

    Args:
        decision (str): The class value the leaf predicts.
        label (str): Value on the edge leading to the leaf.
        depth (int): Depth of the leaf.
        reason (str): Which stopping rule produced the leaf.

    Returns:
        Leaf: The new leaf.
    """
    logger.debug("Leaf created", label=label, depth=depth, decision=decision, reason=reason)
    return Leaf(label=label, depth=depth, decision=decision)


def _validate_candidates(examples: InstanceSet, attributes: list[Attribute]) -> None:
    """Raise `MalformedAttributeError` if any candidate cannot be split on.

    Args:
        examples (InstanceSet): The training examples.
        attributes (list[Attribute]): The candidate split attributes.

    Raises:
        MalformedAttributeError: If a candidate is not part of the attribute
            set, is the class attribute, or is listed more than once.
    """
    attribute_set = examples.attribute_set
    for attribute in attributes:
        attribute_set.attribute_index(attribute)

    class_attribute = attribute_set.class_attribute
    if class_attribute in attributes:
        raise MalformedAttributeError(
            f"Class attribute {class_attribute.name!r} cannot be a split candidate",
            attribute_names=[class_attribute.name],
        )

    names = [attribute.name for attribute in attributes]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise MalformedAttributeError(
            f"Candidate attributes listed more than once: {duplicates}",
            attribute_names=duplicates,
        )
