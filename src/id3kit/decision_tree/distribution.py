"""Frequency distribution over one attribute's values: probabilities, entropy, and mode."""

from __future__ import annotations

import numpy as np

from id3kit.data import Attribute, InstanceSet
from id3kit.exceptions import DistributionStateError, EmptyExamplesError, UnknownValueError


class Distribution:
    """Counts how often each legal value of one attribute occurs.

    Frequencies start at zero for every legal value, in declared order. After
    the last `increment`, call `compute_probabilities` before reading
    `probabilities` or `entropy`.

    Attributes:
        attribute (Attribute): The attribute whose values are counted.

    Examples:
        >>> play = Attribute(name="play", values=("yes", "no"))
        >>> distribution = Distribution(play)
        >>> for value in ["yes", "yes", "no"]:
        ...     distribution.increment(value)
        >>> distribution.mode_value()
        'yes'
        >>> distribution.compute_probabilities()
        >>> round(distribution.entropy(), 4)
        0.9183
    """

    def __init__(self, attribute: Attribute) -> None:
        """Initialize an empty distribution.

        Args:
            attribute (Attribute): The attribute whose values are counted.
        """
        self.attribute = attribute
        self._frequencies: dict[str, int] = dict.fromkeys(attribute.values, 0)
        self._probabilities: dict[str, float] | None = None

    @classmethod
    def from_class_values(cls, examples: InstanceSet) -> Distribution:
        """Build the distribution of class-attribute values over a set of examples.

        Probabilities are already computed on the returned distribution.

        Args:
            examples (InstanceSet): The examples to count.

        Returns:
            Distribution: One increment per instance.
        """
        distribution = cls(examples.attribute_set.class_attribute)
        for value in examples.class_values():
            distribution.increment(value)
        distribution.compute_probabilities()
        return distribution

    @property
    def frequencies(self) -> dict[str, int]:
        """Copy of the count per legal value, in declared order."""
        return dict(self._frequencies)

    @property
    def probabilities(self) -> dict[str, float]:
        """Copy of the probability per legal value, in declared order.

        Raises:
            DistributionStateError: If `compute_probabilities` has not been
                called since the last increment.
        """
        return dict(self._require_probabilities())

    def increment(self, value: str) -> None:
        """Add one to the count of `value`.

        Args:
            value (str): A legal value of the attribute.

        Raises:
            UnknownValueError: If `value` is not a legal value.
        """
        if value not in self._frequencies:
            raise UnknownValueError(
                attribute_name=self.attribute.name,
                value=value,
                legal_values=list(self.attribute.values),
            )
        self._frequencies[value] += 1
        self._probabilities = None

    def compute_probabilities(self) -> None:
        """Recompute each value's probability as its frequency over the total.

        An empty distribution gets probability 0.0 for every value.
        """
        total = self.total_frequency()
        self._probabilities = {
            value: (count / total if total > 0 else 0.0) for value, count in self._frequencies.items()
        }

    def total_frequency(self) -> int:
        """Return the sum of all counts.

        Returns:
            int: Number of increments so far.
        """
        return sum(self._frequencies.values())

    def entropy(self) -> float:
        """Return the Shannon entropy (base 2) of the distribution.

        Values with zero probability contribute nothing.

        Returns:
            float: `-sum(p * log2(p))` over values with `p > 0`; 0.0 for an
                empty distribution.

        Raises:
            DistributionStateError: If `compute_probabilities` has not been
                called since the last increment.
        """
        p = np.fromiter(self._require_probabilities().values(), dtype=np.float64)
        p = p[p > 0]
        return float(-(p * np.log2(p)).sum())

    def mode_value(self) -> str:
        """Return the value with the highest count.

        Ties go to the value declared first.

        Returns:
            str: The plurality value.

        Raises:
            EmptyExamplesError: If nothing has been counted.
        """
        if self.total_frequency() == 0:
            raise EmptyExamplesError(f"Distribution over attribute {self.attribute.name!r} has no observations")
        # max() keeps the first maximal item, and dicts iterate in declared order.
        return max(self._frequencies, key=self._frequencies.__getitem__)

    def _require_probabilities(self) -> dict[str, float]:
        if self._probabilities is None:
            raise DistributionStateError(
                f"Probabilities for attribute {self.attribute.name!r} are stale; call compute_probabilities() first"
            )
        return self._probabilities

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(attribute={self.attribute.name!r}, frequencies={self._frequencies!r})"
