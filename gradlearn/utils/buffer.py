"""
Caller-owned observation buffer.
Collects rows as they are produced (e.g. one per simulation event) for later analysis.
"""

import numpy as np
from typing import Sequence, Tuple, Union


class ObservationBuffer:
    """
    Append-only buffer of fixed-width observation rows.

    Column names are fixed at construction; rows are recorded positionally
    or by keyword. The buffer belongs to whoever created it and lives as
    long as they keep it.
    """

    def __init__(self, columns: Sequence[str]):
        """
        Initialize the buffer.

        Args:
            columns: Names of the recorded values, in order
        """
        if len(columns) == 0:
            raise ValueError("columns must not be empty")
        if len(set(columns)) != len(columns):
            raise ValueError("column names must be unique")

        self.columns = tuple(columns)
        self._rows = []

    def record(self, *values, **named_values):
        """
        Append one observation.

        Args:
            *values: Values in column order
            **named_values: Values by column name (not combined with positional values)
        """
        if values and named_values:
            raise ValueError("Pass values either positionally or by name, not both")

        if named_values:
            missing = [c for c in self.columns if c not in named_values]
            unknown = [k for k in named_values if k not in self.columns]
            if missing or unknown:
                raise ValueError(f"Missing columns {missing}, unknown columns {unknown}")
            values = tuple(named_values[c] for c in self.columns)

        if len(values) != len(self.columns):
            raise ValueError(f"Expected {len(self.columns)} values, got {len(values)}")

        self._rows.append(tuple(float(v) for v in values))

    def to_array(self) -> np.ndarray:
        """All rows as an array of shape (n_rows, n_columns)."""
        return np.array(self._rows, dtype=np.float64).reshape(len(self._rows), len(self.columns))

    def as_arrays(self, feature_columns: Sequence[Union[str, int]],
                  label_column: Union[str, int]) -> Tuple[np.ndarray, np.ndarray]:
        """
        Split the buffer into a feature matrix and a label vector.

        Args:
            feature_columns: Names or positions of the feature columns
            label_column: Name or position of the label column

        Returns:
            (features, labels) of shapes (n_rows, n_features) and (n_rows,)
        """
        data = self.to_array()
        feature_idx = [self._index(c) for c in feature_columns]
        return data[:, feature_idx], data[:, self._index(label_column)]

    def clear(self):
        self._rows = []

    def _index(self, column: Union[str, int]) -> int:
        if isinstance(column, str):
            if column not in self.columns:
                raise ValueError(f"Unknown column: {column}")
            return self.columns.index(column)
        if not -len(self.columns) <= column < len(self.columns):
            raise ValueError(f"Column index {column} out of range")
        return column

    def __len__(self) -> int:
        return len(self._rows)
