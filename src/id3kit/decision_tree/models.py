"""Pydantic tree-node models and the classification and printing protocol."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Annotated, Literal

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, model_validator

from id3kit.data import Attribute, AttributeSet, Instance
from id3kit.exceptions import UnknownValueError
from id3kit.settings import get_settings

# ---------------------------------------------------------------------------
# Public models
# ---------------------------------------------------------------------------


class _DecisionTreeNode(BaseModel):
    """Fields and operations shared by both node variants.

    Attributes:
        label (str): Value on the edge leading to this node, or the root label
            (`ID3Settings.root_label`) for the root.
        depth (int): Number of edges between this node and the root.
    """

    model_config = ConfigDict(frozen=True)

    label: str = Field(description="Value on the incoming edge, or the root label for the root.")
    depth: int = Field(ge=0, description="Number of edges between this node and the root.")

    def decide(self, attribute_set: AttributeSet, instance: Instance) -> str:
        """Classify an instance by walking from this node down to a leaf.

        Args:
            attribute_set (AttributeSet): The attribute set `instance` is aligned with.
            instance (Instance): The instance to classify.

        Returns:
            str: A legal value of the class attribute.

        Raises:
            UnknownValueError: If the instance's value on a split attribute
                along the path is not one of that attribute's legal values.
        """
        node = self
        while True:
            match node:
                case Leaf(decision=decision):
                    return decision
                case Internal(split_attribute=split_attribute, children=children):
                    value = instance.value_of(attribute_set, split_attribute)
                    child = children.get(value)
                    if child is None:
                        logger.warning(
                            "Instance has an unknown value on a split attribute",
                            attribute=split_attribute.name,
                            value=value,
                            depth=node.depth,
                        )
                        raise UnknownValueError(
                            attribute_name=split_attribute.name,
                            value=value,
                            legal_values=list(split_attribute.values),
                        )
                    node = child
                case _:
                    raise TypeError(f"Unexpected node type: {type(node).__name__}")

    def iter_nodes(self) -> Iterator[DecisionNode]:
        """Yield this node and all its descendants in pre-order.

        Children are visited in the split attribute's declared value order.

        Yields:
            DecisionNode: Each node of the subtree rooted here.
        """
        stack: list[DecisionNode] = [self]  # type: ignore[list-item]
        while stack:
            node = stack.pop()
            yield node
            if isinstance(node, Internal):
                stack.extend(reversed(node.ordered_children()))

    def format_lines(self, indent: str | None = None) -> list[str]:
        """Describe the subtree rooted here, one line per node in pre-order.

        Each line holds the node's label and depth followed by `[decision X]`
        for a leaf or `[attribute A]` for an internal node.

        Args:
            indent (str | None): Text repeated once per depth level at the start
                of each line. Defaults to `ID3Settings.print_indent`.

        Returns:
            list[str]: The formatted lines.
        """
        prefix = indent if indent is not None else get_settings().print_indent
        lines: list[str] = []
        for node in self.iter_nodes():
            match node:
                case Leaf(decision=decision):
                    detail = f"[decision {decision}]"
                case Internal(split_attribute=split_attribute):
                    detail = f"[attribute {split_attribute.name}]"
            lines.append(f"{prefix * node.depth}{node.label} (depth {node.depth}) {detail}")
        return lines

    def render(self, indent: str | None = None) -> str:
        """Return `format_lines` joined with newlines.

        Args:
            indent (str | None): Per-depth indent; see `format_lines`.

        Returns:
            str: The multi-line tree description.
        """
        return "\n".join(self.format_lines(indent))

    def print(self, indent: str | None = None) -> None:
        """Write the tree description to stdout.

        Args:
            indent (str | None): Per-depth indent; see `format_lines`.
        """
        for line in self.format_lines(indent):
            print(line)  # noqa: T201 - printing is this method's purpose

    def node_count(self) -> int:
        """Return the number of nodes in the subtree rooted here."""
        return sum(1 for _ in self.iter_nodes())

    def leaf_count(self) -> int:
        """Return the number of leaves in the subtree rooted here."""
        return sum(1 for node in self.iter_nodes() if isinstance(node, Leaf))

    def max_depth(self) -> int:
        """Return the depth of the deepest node in the subtree rooted here."""
        return max(node.depth for node in self.iter_nodes())


class Leaf(_DecisionTreeNode):
    """A node that always predicts one class value.

    Attributes:
        kind (Literal["leaf"]): Discriminator field; always `"leaf"`.
        decision (str): The class value returned for every instance reaching this leaf.

    Examples:
        >>> leaf = Leaf(label="overcast", depth=1, decision="yes")
        >>> leaf.format_lines()
        ['  overcast (depth 1) [decision yes]']
    """

    kind: Literal["leaf"] = Field(default="leaf", description='Discriminator field. Always "leaf".')
    decision: str = Field(description="Class value predicted by this leaf.")


class Internal(_DecisionTreeNode):
    """A node that splits instances on one attribute.

    Attributes:
        kind (Literal["internal"]): Discriminator field; always `"internal"`.
        split_attribute (Attribute): The attribute this node tests.
        children (dict[str, DecisionNode]): One child per legal value of
            `split_attribute`. There is no default child.
    """

    kind: Literal["internal"] = Field(default="internal", description='Discriminator field. Always "internal".')
    split_attribute: Attribute = Field(description="The attribute this node tests.")
    children: dict[str, Annotated[Leaf | Internal, Field(discriminator="kind")]] = Field(
        description="Child node per legal value of the split attribute.",
    )

    @model_validator(mode="after")
    def _validate_children(self) -> Internal:
        """Validate children cover the split attribute's values and sit one level down.

        Returns:
            Internal: The validated model instance.

        Raises:
            ValueError: If the children keys differ from the split attribute's
                legal values, or a child's depth is not `depth + 1`.
        """
        expected = set(self.split_attribute.values)
        actual = set(self.children)
        errors: list[str] = []
        if missing := expected - actual:
            errors.append(f"children missing values: {sorted(missing)}")
        if extra := actual - expected:
            errors.append(f"children have values not in split attribute: {sorted(extra)}")
        if bad_depths := sorted(value for value, child in self.children.items() if child.depth != self.depth + 1):
            errors.append(f"children at values {bad_depths} are not at depth {self.depth + 1}")
        if errors:
            raise ValueError("; ".join(errors))
        return self

    def ordered_children(self) -> list[DecisionNode]:
        """Return the children in the split attribute's declared value order.

        Returns:
            list[DecisionNode]: One child per legal value.
        """
        return [self.children[value] for value in self.split_attribute.values]


# Use this alias when accepting either node variant.
type DecisionNode = Leaf | Internal
