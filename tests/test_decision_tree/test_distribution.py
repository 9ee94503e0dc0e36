"""Tests for Distribution: counting, probabilities, entropy, and mode."""

from __future__ import annotations

import math

import pytest
from pytest_check import check

from id3kit.data import Attribute, InstanceSet
from id3kit.decision_tree.distribution import Distribution
from id3kit.exceptions import DistributionStateError, EmptyExamplesError, UnknownValueError


@pytest.fixture
def weather() -> Attribute:
    """Three-valued attribute used across the distribution tests.

    Returns:
        Attribute: `weather` with values sunny, cloudy, rainy.
    """
    return Attribute(name="weather", values=("sunny", "cloudy", "rainy"))


def _distribution_of(attribute: Attribute, values: list[str]) -> Distribution:
    """Build a distribution with one increment per value and computed probabilities.

    Args:
        attribute (Attribute): The attribute to count.
        values (list[str]): Observed values.

    Returns:
        Distribution: The populated distribution.
    """
    distribution = Distribution(attribute)
    for value in values:
        distribution.increment(value)
    distribution.compute_probabilities()
    return distribution


class TestCounting:
    """Tests for increment, frequencies, and total_frequency."""

    def test_new_distribution_has_zero_count_for_every_value(self, weather: Attribute) -> None:
        """A fresh distribution should list every legal value with count zero, in declared order."""
        # Arrange / Act
        distribution = Distribution(weather)

        # Assert
        with check:
            assert distribution.frequencies == {"sunny": 0, "cloudy": 0, "rainy": 0}
        with check:
            assert list(distribution.frequencies) == ["sunny", "cloudy", "rainy"]
        with check:
            assert distribution.total_frequency() == 0

    def test_increment_adds_one_per_call(self, weather: Attribute) -> None:
        """Each increment should add exactly one to its value's count."""
        # Arrange
        distribution = Distribution(weather)

        # Act
        for value in ["rainy", "sunny", "rainy"]:
            distribution.increment(value)

        # Assert
        with check:
            assert distribution.frequencies == {"sunny": 1, "cloudy": 0, "rainy": 2}
        with check:
            assert distribution.total_frequency() == 3

    def test_increment_unknown_value_raises(self, weather: Attribute) -> None:
        """Counting a value outside the attribute's legal values is a usage error."""
        # Arrange
        distribution = Distribution(weather)

        # Act / Assert
        with pytest.raises(UnknownValueError) as exc_info:
            distribution.increment("snowy")

        with check:
            assert exc_info.value.attribute_name == "weather"
        with check:
            assert exc_info.value.value == "snowy"
        with check:
            assert exc_info.value.legal_values == ["sunny", "cloudy", "rainy"]

    def test_frequencies_returns_copy(self, weather: Attribute) -> None:
        """Mutating the returned mapping must not change the distribution."""
        # Arrange
        distribution = Distribution(weather)

        # Act
        distribution.frequencies["sunny"] = 10

        # Assert
        assert distribution.total_frequency() == 0


class TestProbabilities:
    """Tests for compute_probabilities and the stale-state guard."""

    def test_probabilities_are_frequency_over_total(self, weather: Attribute) -> None:
        """Each probability should equal its count divided by the total count."""
        # Arrange / Act
        distribution = _distribution_of(weather, ["sunny", "sunny", "cloudy", "rainy"])

        # Assert
        assert distribution.probabilities == pytest.approx({"sunny": 0.5, "cloudy": 0.25, "rainy": 0.25})

    def test_empty_distribution_has_zero_probabilities(self, weather: Attribute) -> None:
        """With no observations every probability should be 0.0 rather than NaN."""
        # Arrange / Act
        distribution = _distribution_of(weather, [])

        # Assert
        assert distribution.probabilities == {"sunny": 0.0, "cloudy": 0.0, "rainy": 0.0}

    def test_reading_probabilities_before_compute_raises(self, weather: Attribute) -> None:
        """Probabilities must be computed before they are read."""
        # Arrange
        distribution = Distribution(weather)
        distribution.increment("sunny")

        # Act / Assert
        with pytest.raises(DistributionStateError):
            _ = distribution.probabilities

    def test_increment_after_compute_makes_probabilities_stale(self, weather: Attribute) -> None:
        """A later increment should invalidate previously computed probabilities."""
        # Arrange
        distribution = _distribution_of(weather, ["sunny"])

        # Act
        distribution.increment("rainy")

        # Assert
        with pytest.raises(DistributionStateError):
            distribution.entropy()


class TestEntropy:
    """Tests for Shannon entropy."""

    def test_uniform_two_value_entropy_is_one_bit(self, weather: Attribute) -> None:
        """Two equally likely values should carry exactly one bit; the unused value adds nothing."""
        # Arrange / Act
        distribution = _distribution_of(weather, ["sunny", "rainy"])

        # Assert
        assert distribution.entropy() == pytest.approx(1.0, abs=1e-12)

    def test_uniform_three_value_entropy_is_log2_three(self, weather: Attribute) -> None:
        """Three equally likely values should carry log2(3) bits."""
        # Arrange / Act
        distribution = _distribution_of(weather, ["sunny", "cloudy", "rainy"])

        # Assert
        assert distribution.entropy() == pytest.approx(math.log2(3), abs=1e-12)

    def test_single_value_entropy_is_zero(self, weather: Attribute) -> None:
        """A distribution concentrated on one value should have zero entropy."""
        # Arrange / Act
        distribution = _distribution_of(weather, ["cloudy"] * 5)

        # Assert
        assert distribution.entropy() == 0.0

    def test_empty_distribution_entropy_is_zero_not_nan(self, weather: Attribute) -> None:
        """Zero-frequency values contribute 0, so an empty distribution has entropy 0."""
        # Arrange / Act
        distribution = _distribution_of(weather, [])

        # Act
        entropy = distribution.entropy()

        # Assert
        with check:
            assert not math.isnan(entropy)
        with check:
            assert entropy == 0.0

    def test_skewed_entropy_matches_hand_computed_value(self, weather: Attribute) -> None:
        """A 9:5 split should match -p*log2(p) - q*log2(q) computed by hand."""
        # Arrange
        distribution = _distribution_of(weather, ["sunny"] * 9 + ["rainy"] * 5)
        p, q = 9 / 14, 5 / 14
        expected = -(p * math.log2(p)) - (q * math.log2(q))

        # Act / Assert
        assert distribution.entropy() == pytest.approx(expected, abs=1e-9)


class TestModeValue:
    """Tests for mode_value and the from_class_values constructor."""

    def test_mode_is_most_frequent_value(self, weather: Attribute) -> None:
        """The mode should be the value with the strictly highest count."""
        # Arrange / Act
        distribution = _distribution_of(weather, ["rainy", "cloudy", "rainy"])

        # Assert
        assert distribution.mode_value() == "rainy"

    def test_mode_tie_goes_to_first_declared_value(self, weather: Attribute) -> None:
        """Ties should resolve to the value declared first, not the one seen first."""
        # Arrange / Act
        distribution = _distribution_of(weather, ["rainy", "cloudy", "cloudy", "rainy"])

        # Assert
        assert distribution.mode_value() == "cloudy"

    def test_mode_of_empty_distribution_raises(self, weather: Attribute) -> None:
        """An empty distribution has no plurality value."""
        # Arrange
        distribution = Distribution(weather)

        # Act / Assert
        with pytest.raises(EmptyExamplesError):
            distribution.mode_value()

    def test_from_class_values_counts_class_attribute(self, tennis_examples: InstanceSet) -> None:
        """from_class_values should count the class column of every instance."""
        # Arrange / Act
        distribution = Distribution.from_class_values(tennis_examples)

        # Assert
        with check:
            assert distribution.attribute.name == "play"
        with check:
            assert distribution.frequencies == {"yes": 9, "no": 5}
        with check:
            assert distribution.probabilities == pytest.approx({"yes": 9 / 14, "no": 5 / 14})
        with check:
            assert distribution.mode_value() == "yes"
