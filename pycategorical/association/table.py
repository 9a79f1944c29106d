"""
Contingency tables: the shared input of every association test.

A ContingencyTable is an immutable r x c matrix of non-negative whole
counts with row and column labels. One-sample (goodness-of-fit) tables
are stored as a single row, 1 x k.

build_contingency_table() is the single entry point that turns whatever
the caller holds (raw records, a DataFrame of observations, a mapping of
counts, a count matrix) into a ContingencyTable. Each observation lands
in exactly one cell.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Hashable

import numpy as np
import pandas as pd
from numpy.typing import ArrayLike, NDArray

from pycategorical.core.exceptions import InvalidInputError
from pycategorical.core.validation import (
    check_array,
    check_consistent_length,
    check_counts,
    check_finite,
    check_min_categories,
    check_ndim,
)

logger = logging.getLogger(__name__)

ONE_WAY_ROW_LABEL = "count"


@dataclass(frozen=True)
class ContingencyTable:
    """
    Observed counts cross-classified by one or two categorical variables.

    Do not construct directly; use build_contingency_table() or the
    factory classmethods, which validate the counts.

    Attributes
    ----------
    counts : ndarray
        float64 array of shape (n_rows, n_cols) holding whole counts.
    row_labels : tuple
        One label per row. One-way tables carry a single placeholder row.
    col_labels : tuple
        One label per column.
    row_name : str or None
        Name of the row variable (None for one-way tables).
    col_name : str or None
        Name of the column variable.
    """
    counts: NDArray[np.floating[Any]]
    row_labels: tuple[Hashable, ...]
    col_labels: tuple[Hashable, ...]
    row_name: str | None = None
    col_name: str | None = None

    @property
    def shape(self) -> tuple[int, int]:
        return self.counts.shape

    @property
    def is_one_way(self) -> bool:
        """True for a 1 x k one-sample table."""
        return self.counts.shape[0] == 1

    @property
    def is_2x2(self) -> bool:
        return self.counts.shape == (2, 2)

    @property
    def total(self) -> float:
        return float(self.counts.sum())

    @property
    def row_totals(self) -> NDArray[np.floating[Any]]:
        return self.counts.sum(axis=1)

    @property
    def col_totals(self) -> NDArray[np.floating[Any]]:
        return self.counts.sum(axis=0)

    def to_frame(self) -> pd.DataFrame:
        """Counts as a labelled DataFrame (integer dtype)."""
        frame = pd.DataFrame(
            self.counts.astype(np.int64),
            index=pd.Index(list(self.row_labels), name=self.row_name),
            columns=pd.Index(list(self.col_labels), name=self.col_name),
        )
        return frame

    # --- Factory classmethods ---

    @classmethod
    def from_counts(
        cls,
        counts: ArrayLike,
        *,
        row_labels: Sequence[Hashable] | None = None,
        col_labels: Sequence[Hashable] | None = None,
        row_name: str | None = None,
        col_name: str | None = None,
    ) -> ContingencyTable:
        """
        Build from a pre-tabulated 1-D count vector or 2-D count matrix.

        A 1-D vector, a single-row matrix or a single-column matrix all
        become a one-way 1 x k table.
        """
        arr = check_array(counts, "counts")
        check_finite(arr, "counts")

        if arr.ndim == 1:
            arr = arr[np.newaxis, :]
        check_ndim(arr, 2, "counts")
        if arr.shape[1] == 1 and arr.shape[0] > 1:
            # Column vector of counts: one variable laid out vertically
            arr = arr.T
            row_labels, col_labels = None, row_labels
            row_name, col_name = None, row_name

        check_counts(arr, "counts")
        n_rows, n_cols = arr.shape

        if n_rows == 1:
            check_min_categories(n_cols, "counts")
            row_labels = (ONE_WAY_ROW_LABEL,)
            row_name = None
        else:
            check_min_categories(n_rows, "rows")
            check_min_categories(n_cols, "columns")

        row_labels = _resolve_labels(row_labels, n_rows, "row_labels")
        col_labels = _resolve_labels(col_labels, n_cols, "col_labels")

        return cls(
            counts=arr.copy(),
            row_labels=row_labels,
            col_labels=col_labels,
            row_name=row_name,
            col_name=col_name,
        )

    @classmethod
    def from_labels(
        cls,
        x: ArrayLike,
        y: ArrayLike | None = None,
        *,
        x_name: str = "x",
        y_name: str = "y",
    ) -> ContingencyTable:
        """
        Cross-tabulate one or two parallel vectors of category labels.

        With only x, the result is a one-way table of label frequencies.
        """
        x_ser = pd.Series(np.asarray(x, dtype=object).ravel(), name=x_name)
        if y is None:
            return cls.from_frame(x_ser.to_frame(), [x_name])

        y_ser = pd.Series(np.asarray(y, dtype=object).ravel(), name=y_name)
        check_consistent_length(
            x_ser.to_numpy(), y_ser.to_numpy(), names=(x_name, y_name)
        )
        return cls.from_frame(pd.concat([x_ser, y_ser], axis=1), [x_name, y_name])

    @classmethod
    def from_frame(
        cls,
        frame: pd.DataFrame,
        fields: Sequence[str],
    ) -> ContingencyTable:
        """
        Tabulate raw observations: one DataFrame row per observation.

        Parameters
        ----------
        frame : pd.DataFrame
            Observations.
        fields : sequence of str
            One field (one-way table) or two fields (rows, columns).
        """
        fields = list(fields)
        if len(fields) not in (1, 2):
            raise InvalidInputError(
                f"category_fields must name 1 or 2 fields, got {len(fields)}",
                field="category_fields",
            )

        missing = [f for f in fields if f not in frame.columns]
        if missing:
            raise InvalidInputError(
                f"observations have no field(s) {missing}. "
                f"Available: {list(frame.columns)}",
                field=missing[0],
            )

        for f in fields:
            n_null = int(frame[f].isna().sum())
            if n_null:
                raise InvalidInputError(
                    f"field {f!r} is missing in {n_null} observation(s); "
                    f"every observation must fall in exactly one category",
                    field=f,
                )

        if len(frame) == 0:
            raise InvalidInputError("observations are empty", field=fields[0])

        logger.debug("Tabulating %d observations over %s", len(frame), fields)

        if len(fields) == 1:
            freq = frame[fields[0]].value_counts(sort=False)
            freq = _sort_index(freq)
            return cls.from_counts(
                freq.to_numpy(dtype=np.float64),
                col_labels=freq.index.tolist(),
                col_name=fields[0],
            )

        row_field, col_field = fields
        crosstab = pd.crosstab(frame[row_field], frame[col_field], dropna=False)
        crosstab = _sort_index(_sort_index(crosstab), axis=1)
        if crosstab.shape[0] < 2 or crosstab.shape[1] < 2:
            sparse = row_field if crosstab.shape[0] < 2 else col_field
            raise InvalidInputError(
                f"field {sparse!r} has fewer than 2 categories; "
                f"a cross-tabulation needs at least 2 per field",
                field=sparse,
            )
        return cls.from_counts(
            crosstab.to_numpy(dtype=np.float64),
            row_labels=crosstab.index.tolist(),
            col_labels=crosstab.columns.tolist(),
            row_name=row_field,
            col_name=col_field,
        )

    def __repr__(self) -> str:
        return (
            f"ContingencyTable(shape={self.shape}, total={self.total:g}, "
            f"rows={list(self.row_labels)}, cols={list(self.col_labels)})"
        )


def build_contingency_table(
    observations: Any,
    category_fields: str | Sequence[str] | None = None,
    *,
    row_labels: Sequence[Hashable] | None = None,
    col_labels: Sequence[Hashable] | None = None,
) -> ContingencyTable:
    """
    Build a ContingencyTable from raw observations or pre-tabulated counts.

    Parameters
    ----------
    observations : various
        - ContingencyTable: returned unchanged.
        - pd.DataFrame with category_fields: raw observations, one per row.
        - pd.DataFrame without category_fields: a count matrix labelled
          by its index and columns.
        - pd.Series: counts labelled by the index.
        - sequence of mappings (records) with category_fields.
        - mapping of label -> count (one-way) or
          row label -> {col label -> count} (two-way).
        - array-like 1-D count vector or 2-D count matrix.
    category_fields : str or sequence of str, optional
        One or two field names to tabulate raw observations by.
    row_labels, col_labels : sequence, optional
        Labels for a bare count matrix.

    Returns
    -------
    ContingencyTable

    Raises
    ------
    InvalidInputError
        Negative or fractional counts, missing fields, or fewer than
        2 categories.
    """
    if isinstance(observations, ContingencyTable):
        return observations

    if isinstance(category_fields, str):
        category_fields = [category_fields]

    if category_fields is not None:
        if isinstance(observations, pd.DataFrame):
            frame = observations
        elif isinstance(observations, Sequence) and all(
            isinstance(r, Mapping) for r in observations
        ):
            frame = pd.DataFrame.from_records(list(observations))
        else:
            raise InvalidInputError(
                "category_fields requires a DataFrame or a sequence of "
                f"mappings, got {type(observations).__name__}",
                field="observations",
            )
        return ContingencyTable.from_frame(frame, category_fields)

    if isinstance(observations, pd.DataFrame):
        return ContingencyTable.from_counts(
            observations.to_numpy(),
            row_labels=observations.index.tolist(),
            col_labels=observations.columns.tolist(),
            row_name=observations.index.name,
            col_name=observations.columns.name,
        )

    if isinstance(observations, pd.Series):
        return ContingencyTable.from_counts(
            observations.to_numpy(),
            col_labels=observations.index.tolist(),
            col_name=observations.index.name or observations.name,
        )

    if isinstance(observations, Mapping):
        return _from_mapping(observations)

    return ContingencyTable.from_counts(
        observations, row_labels=row_labels, col_labels=col_labels,
    )


def _from_mapping(counts: Mapping[Hashable, Any]) -> ContingencyTable:
    """{label: n} or {row: {col: n}} to a table; missing cells count as 0."""
    values = list(counts.values())
    if values and all(isinstance(v, Mapping) for v in values):
        frame = pd.DataFrame.from_dict(
            {row: dict(cols) for row, cols in counts.items()}, orient="index"
        ).fillna(0)
        return ContingencyTable.from_counts(
            frame.to_numpy(),
            row_labels=frame.index.tolist(),
            col_labels=frame.columns.tolist(),
        )
    return ContingencyTable.from_counts(
        np.asarray(values), col_labels=list(counts.keys()),
    )


def _resolve_labels(
    labels: Sequence[Hashable] | None, n: int, name: str,
) -> tuple[Hashable, ...]:
    if labels is None:
        return tuple(range(n))
    labels = tuple(labels)
    if len(labels) != n:
        raise InvalidInputError(
            f"{name}: expected {n} labels, got {len(labels)}", field=name,
        )
    if len(set(labels)) != n:
        raise InvalidInputError(f"{name}: labels must be unique", field=name)
    return labels


def _sort_index(obj, axis: int = 0):
    """Sort labels when they are mutually comparable, else keep first-seen order."""
    try:
        return obj.sort_index(axis=axis)
    except TypeError:
        return obj
