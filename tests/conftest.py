"""Shared fixtures: example tables and settings cache isolation."""

from __future__ import annotations

from collections.abc import Generator

import pytest

from id3kit.data import Attribute, AttributeSet, InstanceSet
from id3kit.settings import get_settings

TENNIS_ROWS: list[tuple[str, str, str, str, str]] = [
    ("sunny", "hot", "high", "weak", "no"),
    ("sunny", "hot", "high", "strong", "no"),
    ("overcast", "hot", "high", "weak", "yes"),
    ("rain", "mild", "high", "weak", "yes"),
    ("rain", "cool", "normal", "weak", "yes"),
    ("rain", "cool", "normal", "strong", "no"),
    ("overcast", "cool", "normal", "strong", "yes"),
    ("sunny", "mild", "high", "weak", "no"),
    ("sunny", "cool", "normal", "weak", "yes"),
    ("rain", "mild", "normal", "weak", "yes"),
    ("sunny", "mild", "normal", "strong", "yes"),
    ("overcast", "mild", "high", "strong", "yes"),
    ("overcast", "hot", "normal", "weak", "yes"),
    ("rain", "mild", "high", "strong", "no"),
]


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Clear cached settings and any ID3_ environment overrides around each test.

    Args:
        monkeypatch (pytest.MonkeyPatch): Used to remove ID3_ variables from the environment.

    Yields:
        None: Nothing; used only for setup/teardown side effects.
    """
    for name in ("ID3_ROOT_LABEL", "ID3_PRINT_INDENT", "ID3_LOG_LEVEL", "ID3_LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def tennis_attribute_set() -> AttributeSet:
    """Attribute set of the classic play-tennis table; `play` is the class attribute.

    Returns:
        AttributeSet: Five attributes with `play` last.
    """
    return AttributeSet(
        attributes=(
            Attribute(name="outlook", values=("sunny", "overcast", "rain")),
            Attribute(name="temperature", values=("hot", "mild", "cool")),
            Attribute(name="humidity", values=("high", "normal")),
            Attribute(name="wind", values=("weak", "strong")),
            Attribute(name="play", values=("yes", "no")),
        ),
        class_attribute_index=4,
    )


@pytest.fixture
def tennis_examples(tennis_attribute_set: AttributeSet) -> InstanceSet:
    """The fourteen play-tennis examples.

    Args:
        tennis_attribute_set (AttributeSet): Fixture providing the attribute set.

    Returns:
        InstanceSet: Nine `yes` and five `no` examples.
    """
    return InstanceSet.from_rows(tennis_attribute_set, TENNIS_ROWS)


@pytest.fixture
def shapes_attribute_set() -> AttributeSet:
    """Attribute set with the class attribute first and a never-observed color.

    Returns:
        AttributeSet: `label`, `color` (with unused `blue`), and `size`.
    """
    return AttributeSet(
        attributes=(
            Attribute(name="label", values=("yes", "no")),
            Attribute(name="color", values=("red", "green", "blue")),
            Attribute(name="size", values=("small", "large")),
        ),
        class_attribute_index=0,
    )


@pytest.fixture
def shapes_examples(shapes_attribute_set: AttributeSet) -> InstanceSet:
    """Four examples on which `color` and `size` tie at 0.5 bits of expected entropy.

    Args:
        shapes_attribute_set (AttributeSet): Fixture providing the attribute set.

    Returns:
        InstanceSet: Three `yes` and one `no` example; no example is `blue`.
    """
    return InstanceSet.from_rows(
        shapes_attribute_set,
        [
            ("yes", "red", "small"),
            ("no", "red", "large"),
            ("yes", "green", "small"),
            ("yes", "green", "large"),
        ],
    )
