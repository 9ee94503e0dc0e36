"""Custom exceptions for id3kit.

This module defines exceptions for tree construction, classification, and
DataFrame column validation:

Decision tree exceptions (subclass DecisionTreeError):
- DecisionTreeError: Base class for all tree construction and classification
  errors. Catch this to handle any failure raised by the builder or a tree.
- MalformedAttributeError: Raised when a candidate attribute list is empty or
  names attributes that cannot be split on.
- UnknownValueError: Raised when a value is not one of an attribute's legal values.
- EmptyExamplesError: Raised when an operation needs at least one example.
- DistributionStateError: Raised when distribution probabilities are read
  before they are computed.

Column validation exceptions (subclass ValueError):
- ColumnsNotFoundError: Raised when requested columns do not exist in a DataFrame.
- DuplicateColumnsError: Raised when duplicate column names are provided.
"""

from __future__ import annotations


class DecisionTreeError(Exception):
    """Base exception for all decision tree errors.

    Errors raised while building a tree abort the whole build; no partial
    tree is returned. Errors raised while classifying abort only that call.
    """

    def __repr__(self) -> str:
        """Return detailed representation for debugging.

        Returns:
            str: Detailed string representation including the message.
        """
        return f"{self.__class__.__name__}(message={str(self)!r})"


class MalformedAttributeError(DecisionTreeError, ValueError):
    """Raised when a list of candidate split attributes cannot be used.

    Covers an empty candidate list, attributes that are not part of the
    attribute set, the class attribute offered as a candidate, and candidates
    listed more than once.

    Attributes:
        attribute_names (list[str]): Names of the offending attributes. Empty
            when the candidate list itself was empty.

    Examples:
        >>> err = MalformedAttributeError("Class attribute cannot be a split candidate", attribute_names=["play"])
        >>> err.attribute_names
        ['play']
    """

    attribute_names: list[str]

    def __init__(self, message: str, *, attribute_names: list[str] | None = None) -> None:
        """Initialize MalformedAttributeError.

        Args:
            message (str): Description of the problem.
            attribute_names (list[str] | None): Names of the offending attributes.
        """
        super().__init__(message)
        self.attribute_names = attribute_names or []

    def __repr__(self) -> str:
        """Return detailed representation for debugging.

        Returns:
            str: Detailed string representation including message and attribute names.
        """
        return f"{self.__class__.__name__}(message={str(self)!r}, attribute_names={self.attribute_names!r})"


class UnknownValueError(DecisionTreeError, ValueError):
    """Raised when a value is not among an attribute's declared legal values.

    Decision trees have no fallback child, so classifying an instance whose
    value on a split attribute was never declared cannot produce an answer.

    Attributes:
        attribute_name (str): Name of the attribute the value was looked up on.
        value (str): The unrecognized value.
        legal_values (list[str]): The attribute's declared values, in order.

    Examples:
        >>> err = UnknownValueError(attribute_name="outlook", value="foggy", legal_values=["sunny", "rain"])
        >>> str(err)
        "Value 'foggy' is not a legal value of attribute 'outlook'. Legal values: sunny, rain"
    """

    attribute_name: str
    value: str
    legal_values: list[str]

    def __init__(self, *, attribute_name: str, value: str, legal_values: list[str]) -> None:
        """Initialize UnknownValueError.

        Args:
            attribute_name (str): Name of the attribute the value was looked up on.
            value (str): The unrecognized value.
            legal_values (list[str]): The attribute's declared values, in order.
        """
        super().__init__(
            f"Value {value!r} is not a legal value of attribute {attribute_name!r}. "
            f"Legal values: {', '.join(legal_values)}"
        )
        self.attribute_name = attribute_name
        self.value = value
        self.legal_values = legal_values

    def __repr__(self) -> str:
        """Return detailed representation for debugging.

        Returns:
            str: Detailed string representation including attribute, value, and legal values.
        """
        return (
            f"{self.__class__.__name__}("
            f"attribute_name={self.attribute_name!r}, value={self.value!r}, "
            f"legal_values={self.legal_values!r})"
        )


class EmptyExamplesError(DecisionTreeError, ValueError):
    """Raised when an operation requires at least one example but got none.

    Building the root of a tree from zero examples is a precondition
    violation: there is no parent example set whose plurality value could
    stand in for the missing class distribution.
    """


class DistributionStateError(DecisionTreeError, RuntimeError):
    """Raised when distribution probabilities are read before being computed.

    Call `Distribution.compute_probabilities()` after the last increment and
    before reading probabilities or entropy.
    """


class ColumnsNotFoundError(ValueError):
    """Raised when requested columns do not exist in a DataFrame.

    Attributes:
        missing_columns (list[str]): Column names that were not found.
        available_columns (list[str]): Column names present in the DataFrame.

    Examples:
        >>> err = ColumnsNotFoundError(
        ...     missing_columns=["x", "y"],
        ...     available_columns=["a", "b", "c"],
        ... )
        >>> err.missing_columns
        ['x', 'y']
    """

    missing_columns: list[str]
    available_columns: list[str]

    def __init__(
        self,
        missing_columns: list[str],
        available_columns: list[str],
    ) -> None:
        """Initialize ColumnsNotFoundError.

        Args:
            missing_columns (list[str]): Column names not found in the DataFrame.
            available_columns (list[str]): Column names present in the DataFrame.
        """
        super().__init__(f"Columns not found in DataFrame: {sorted(missing_columns)}")
        self.missing_columns = missing_columns
        self.available_columns = available_columns


class DuplicateColumnsError(ValueError):
    """Raised when duplicate column or attribute names are provided.

    Attributes:
        columns (list[str]): The name list that contains duplicates.
        duplicate_columns (list[str]): The specific names that are
            duplicated (each listed once).

    Examples:
        >>> err = DuplicateColumnsError(columns=["a", "a", "b"])
        >>> err.columns
        ['a', 'a', 'b']
        >>> err.duplicate_columns
        ['a']
    """

    columns: list[str]
    duplicate_columns: list[str]

    def __init__(self, columns: list[str]) -> None:
        """Initialize DuplicateColumnsError.

        Args:
            columns (list[str]): The name list containing duplicates.
        """
        super().__init__("Duplicate column names are not allowed")
        self.columns = columns
        seen: set[str] = set()
        self.duplicate_columns = []
        for col in columns:
            if col in seen and col not in self.duplicate_columns:
                self.duplicate_columns.append(col)
            seen.add(col)
