"""Attribute and instance models describing a table of discrete-valued examples."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from id3kit.exceptions import MalformedAttributeError


class Attribute(BaseModel):
    """A named attribute with an ordered set of legal discrete values.

    The value order has no meaning for classification; it only fixes the
    iteration order used when partitioning examples and printing trees.

    Attributes:
        name (str): Attribute name, e.g. `"outlook"`.
        values (tuple[str, ...]): Legal values, e.g. `("sunny", "overcast", "rain")`.

    Examples:
        >>> outlook = Attribute(name="outlook", values=("sunny", "overcast", "rain"))
        >>> "rain" in outlook
        True
        >>> outlook.index_of("overcast")
        1
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Attribute name.")
    values: tuple[str, ...] = Field(min_length=1, description="Legal discrete values, in declared order.")

    @field_validator("values", mode="after")
    @classmethod
    def _validate_values_unique(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        """Validate that no legal value is declared twice.

        Args:
            value (tuple[str, ...]): The declared values.

        Returns:
            tuple[str, ...]: The validated values, unchanged.

        Raises:
            ValueError: If any value appears more than once.
        """
        duplicates = sorted({v for v in value if value.count(v) > 1})
        if duplicates:
            raise ValueError(f"attribute values must be unique, duplicated: {duplicates}")
        return value

    def __contains__(self, value: object) -> bool:
        return value in self.values

    def index_of(self, value: str) -> int:
        """Return the position of a legal value.

        Args:
            value (str): A legal value of this attribute.

        Returns:
            int: Zero-based index of `value` in `values`.

        Raises:
            ValueError: If `value` is not a legal value.
        """
        return self.values.index(value)


class AttributeSet(BaseModel):
    """An ordered list of attributes, one of which is the class (target) attribute.

    Attribute sets are shared by reference between every instance set and tree
    node derived from them and are never mutated.

    Attributes:
        attributes (tuple[Attribute, ...]): Attributes in column order.
        class_attribute_index (int): Position of the class attribute in `attributes`.

    Examples:
        >>> attribute_set = AttributeSet(
        ...     attributes=(
        ...         Attribute(name="windy", values=("true", "false")),
        ...         Attribute(name="play", values=("yes", "no")),
        ...     ),
        ...     class_attribute_index=1,
        ... )
        >>> attribute_set.class_attribute.name
        'play'
        >>> [a.name for a in attribute_set.candidate_attributes()]
        ['windy']
    """

    model_config = ConfigDict(frozen=True)

    attributes: tuple[Attribute, ...] = Field(min_length=1, description="Attributes in column order.")
    class_attribute_index: int = Field(ge=0, description="Position of the class attribute.")

    @model_validator(mode="after")
    def _validate_attribute_set(self) -> AttributeSet:
        """Validate attribute names are unique and the class index is in range.

        Returns:
            AttributeSet: The validated model instance.

        Raises:
            ValueError: If attribute names repeat or the class index is out of range.
        """
        names = [attribute.name for attribute in self.attributes]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"attribute names must be unique, duplicated: {duplicates}")
        if self.class_attribute_index >= len(self.attributes):
            raise ValueError(
                f"class_attribute_index {self.class_attribute_index} is out of range for "
                f"{len(self.attributes)} attributes"
            )
        return self

    def __len__(self) -> int:
        return len(self.attributes)

    def __iter__(self) -> Iterator[Attribute]:  # type: ignore[override]
        return iter(self.attributes)

    @property
    def class_attribute(self) -> Attribute:
        """The attribute whose value a decision tree predicts."""
        return self.attributes[self.class_attribute_index]

    def attribute_index(self, attribute: Attribute | str) -> int:
        """Return the column position of an attribute.

        Args:
            attribute (Attribute | str): The attribute or its name.

        Returns:
            int: Zero-based position of the attribute.

        Raises:
            MalformedAttributeError: If the attribute is not part of this set.
                When an `Attribute` is given, its values must match too.
        """
        name = attribute if isinstance(attribute, str) else attribute.name
        for index, candidate in enumerate(self.attributes):
            if candidate.name != name:
                continue
            if isinstance(attribute, Attribute) and candidate != attribute:
                break
            return index
        raise MalformedAttributeError(f"Attribute {name!r} is not part of the attribute set", attribute_names=[name])

    def get_attribute(self, name: str) -> Attribute:
        """Look up an attribute by name.

        Args:
            name (str): The attribute name.

        Returns:
            Attribute: The matching attribute.

        Raises:
            MalformedAttributeError: If no attribute has that name.
        """
        return self.attributes[self.attribute_index(name)]

    def candidate_attributes(self) -> list[Attribute]:
        """Return every attribute except the class attribute, in column order.

        Returns:
            list[Attribute]: The attributes a tree may split on.
        """
        return [a for i, a in enumerate(self.attributes) if i != self.class_attribute_index]


class Instance(BaseModel):
    """One example: a value per attribute, positionally aligned with an `AttributeSet`.

    Attributes:
        values (tuple[str, ...]): One value per attribute.
    """

    model_config = ConfigDict(frozen=True)

    values: tuple[str, ...] = Field(description="One value per attribute, in column order.")

    def value_of(self, attribute_set: AttributeSet, attribute: Attribute | str) -> str:
        """Return this instance's value on the given attribute.

        Args:
            attribute_set (AttributeSet): The attribute set the instance is aligned with.
            attribute (Attribute | str): The attribute or its name.

        Returns:
            str: The value in the attribute's column.
        """
        return self.values[attribute_set.attribute_index(attribute)]


class InstanceSet(BaseModel):
    """A list of instances paired with the attribute set that describes them.

    Instance sets are never mutated; partitioning with `matching` always
    produces a new set that shares the same `attribute_set`.

    Attributes:
        attribute_set (AttributeSet): Shared description of the columns.
        instances (tuple[Instance, ...]): The examples.

    Examples:
        >>> examples = InstanceSet.from_rows(
        ...     attribute_set,
        ...     [["true", "no"], ["false", "yes"], ["false", "yes"]],
        ... )  # doctest: +SKIP
        >>> len(examples.matching("windy", "false"))  # doctest: +SKIP
        2
    """

    model_config = ConfigDict(frozen=True)

    attribute_set: AttributeSet = Field(description="Shared description of the columns.")
    instances: tuple[Instance, ...] = Field(default=(), description="The examples.")

    @model_validator(mode="after")
    def _validate_instances_conform(self) -> InstanceSet:
        """Validate every instance has one legal value per attribute.

        Returns:
            InstanceSet: The validated model instance.

        Raises:
            ValueError: If an instance has the wrong number of values or a
                value outside its attribute's legal values.
        """
        attributes = self.attribute_set.attributes
        for row, instance in enumerate(self.instances):
            if len(instance.values) != len(attributes):
                raise ValueError(f"instance {row} has {len(instance.values)} values, expected {len(attributes)}")
            for attribute, value in zip(attributes, instance.values, strict=True):
                if value not in attribute:
                    raise ValueError(
                        f"instance {row} has illegal value {value!r} for attribute {attribute.name!r}; "
                        f"legal values: {list(attribute.values)}"
                    )
        return self

    @classmethod
    def from_rows(cls, attribute_set: AttributeSet, rows: Iterable[Sequence[str]]) -> InstanceSet:
        """Build an instance set from plain value rows.

        Args:
            attribute_set (AttributeSet): Description of the columns.
            rows (Iterable[Sequence[str]]): One sequence of values per instance.

        Returns:
            InstanceSet: The validated instance set.
        """
        return cls(attribute_set=attribute_set, instances=tuple(Instance(values=tuple(row)) for row in rows))

    def __len__(self) -> int:
        return len(self.instances)

    def __iter__(self) -> Iterator[Instance]:  # type: ignore[override]
        return iter(self.instances)

    @property
    def is_empty(self) -> bool:
        """Whether the set holds no instances."""
        return not self.instances

    def matching(self, attribute: Attribute | str, value: str) -> InstanceSet:
        """Return the instances whose value on `attribute` equals `value`.

        Args:
            attribute (Attribute | str): The attribute to match on, e.g. `"color"`.
            value (str): The value considered a match, e.g. `"red"`.

        Returns:
            InstanceSet: A new set sharing this set's attribute set.
        """
        index = self.attribute_set.attribute_index(attribute)
        matches = tuple(instance for instance in self.instances if instance.values[index] == value)
        # Subsets of a validated set are valid by construction.
        return InstanceSet.model_construct(attribute_set=self.attribute_set, instances=matches)

    def class_values(self) -> list[str]:
        """Return each instance's class-attribute value, in instance order.

        Returns:
            list[str]: One class value per instance.
        """
        index = self.attribute_set.class_attribute_index
        return [instance.values[index] for instance in self.instances]
