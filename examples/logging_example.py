"""Demonstrates how to enable and configure logging in id3kit.

id3kit logging is disabled by default. Users opt in by calling ``enable_logging()``,
which returns a ``LoggingHandle``. The handle can be used as a context manager
(``with enable_logging(): ...``) or disabled manually via ``handle.disable()``.
When the last active handle is disabled, id3kit logging is automatically turned off.

Key concepts shown here:

- ``level``: controls the minimum log level. The custom ``BUILD`` level
  (numeric value 25, between INFO and WARNING) surfaces calls to
  ``build_decision_tree`` and ``evaluate`` and is the default. ``DEBUG`` adds
  one record per split and per node.
- ``log_format``: ``"short"`` shows ``timestamp | level | function - message``;
  ``"full"`` adds the module and line number.
- Error logging: classifying an instance with a value the tree has never
  seen logs a warning before ``UnknownValueError`` is raised.
"""

import polars as pl

from id3kit import Instance, UnknownValueError, build_decision_tree, enable_logging, evaluate
from id3kit.polars_utils import instance_set_from_dataframe

df_weather = pl.DataFrame({
    "outlook": ["sunny", "sunny", "overcast", "rain", "rain", "rain", "overcast", "sunny"],
    "windy": ["false", "true", "false", "false", "false", "true", "true", "false"],
    "play": ["no", "no", "yes", "yes", "yes", "no", "yes", "no"],
})
examples = instance_set_from_dataframe(df_weather, "play")

with enable_logging(level="DEBUG", log_format="full"):
    tree = build_decision_tree(examples)
    report = evaluate(tree, examples)

    # Try an unseen value to show warning logging
    try:
        tree.decide(examples.attribute_set, Instance(values=("foggy", "false", "yes")))
    except UnknownValueError as exc:
        print(f"\n{exc}\n")

# Logging automatically disabled here
tree.print()
print(f"\nTraining accuracy: {report.accuracy:.2f}")
