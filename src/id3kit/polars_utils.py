"""Utility functions for converting between Polars DataFrames and instance sets."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

import polars as pl

from id3kit.data import Attribute, AttributeSet, Instance, InstanceSet
from id3kit.exceptions import ColumnsNotFoundError, DuplicateColumnsError


def instance_set_from_dataframe(
    df: pl.DataFrame,
    class_attribute: str,
    *,
    columns: Sequence[str] | None = None,
    attribute_values: Mapping[str, Sequence[str]] | None = None,
) -> InstanceSet:
    """Convert a DataFrame of discrete values into an `InstanceSet`.

    Every selected column becomes one attribute. Cell values are cast to
    strings. Legal values come from `attribute_values` when a column is listed
    there; otherwise they are the column's unique values in order of first
    appearance, so that trees built from the same frame are reproducible.

    Args:
        df (pl.DataFrame): Source table, one row per example.
        class_attribute (str): Name of the column to predict.
        columns (Sequence[str] | None): Columns to use, in attribute order. If
            None, all columns are used.
        attribute_values (Mapping[str, Sequence[str]] | None): Declared legal
            values per column. Needed when a legal value does not occur in `df`.

    Returns:
        InstanceSet: The examples, aligned with a new `AttributeSet`.

    Raises:
        ValueError: If `columns` is empty, a selected column contains nulls,
            or a cell holds a value missing from `attribute_values`.
        DuplicateColumnsError: If `columns` contains duplicates.
        ColumnsNotFoundError: If `class_attribute` or any of `columns` is
            missing from `df`, or `class_attribute` is not among `columns`.

    Examples:
        >>> df = pl.DataFrame({"windy": ["true", "false"], "play": ["no", "yes"]})
        >>> examples = instance_set_from_dataframe(df, "play")
        >>> examples.attribute_set.class_attribute.values
        ('no', 'yes')
    """
    selected = list(columns) if columns is not None else list(df.columns)
    _validate_columns(selected, df.columns)
    if class_attribute not in selected:
        raise ColumnsNotFoundError(missing_columns=[class_attribute], available_columns=selected)

    string_df = df.select([pl.col(name).cast(pl.String) for name in selected])
    null_columns = [name for name in selected if string_df[name].null_count() > 0]
    if null_columns:
        raise ValueError(f"Columns contain null values: {null_columns}. Remove or impute nulls before building a tree.")

    declared = attribute_values or {}
    attributes = tuple(
        Attribute(name=name, values=_legal_values(string_df[name], declared.get(name))) for name in selected
    )
    attribute_set = AttributeSet(attributes=attributes, class_attribute_index=selected.index(class_attribute))
    instances = tuple(Instance(values=row) for row in string_df.iter_rows())
    return InstanceSet(attribute_set=attribute_set, instances=instances)


def instance_set_to_dataframe(instance_set: InstanceSet) -> pl.DataFrame:
    """Convert an `InstanceSet` into a DataFrame with one string column per attribute.

    Args:
        instance_set (InstanceSet): The examples to convert.

    Returns:
        pl.DataFrame: A frame with `len(instance_set)` rows.
    """
    names = [attribute.name for attribute in instance_set.attribute_set]
    rows = [instance.values for instance in instance_set]
    return pl.DataFrame(rows, schema=dict.fromkeys(names, pl.String), orient="row")


def _legal_values(series: pl.Series, declared: Sequence[str] | None) -> tuple[str, ...]:
    """Return the legal values for one column.

    Args:
        series (pl.Series): The column, already cast to strings.
        declared (Sequence[str] | None): Explicitly declared values, if any.

    Returns:
        tuple[str, ...]: Declared values, or the observed unique values in
            order of first appearance.
    """
    if declared is not None:
        return tuple(str(value) for value in declared)
    return tuple(series.unique(maintain_order=True).to_list())


def _validate_columns(columns: Sequence[str], df_columns: Sequence[str]) -> None:
    """Validate that columns exist in the DataFrame and contain no duplicates.

    Args:
        columns (Sequence[str]): Column names to validate.
        df_columns (Sequence[str]): Column names present in the DataFrame.

    Raises:
        ValueError: If columns list is empty.
        DuplicateColumnsError: If columns contain duplicates.
        ColumnsNotFoundError: If any columns do not exist in the DataFrame.
    """
    if len(columns) == 0:
        msg = "columns list must not be empty; pass None to include all columns"
        raise ValueError(msg)
    if len(columns) != len(set(columns)):
        raise DuplicateColumnsError(columns=list(columns))
    extra_columns = set(columns) - set(df_columns)
    if extra_columns:
        raise ColumnsNotFoundError(
            missing_columns=sorted(extra_columns),
            available_columns=list(df_columns),
        )
