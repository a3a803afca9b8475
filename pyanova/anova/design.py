"""
ANOVA design object.

Wraps validated data and metadata for one-way ANOVA computation.
Factory methods accept the supported input forms and normalise them into
the same representation: a float64 response vector y, a parallel vector
of string group labels, and the tuple of levels in order of first
appearance.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pyanova.anova._common import Observation
from pyanova.core.exceptions import InvalidInputError
from pyanova.core.validation import (
    check_array,
    check_finite,
    check_1d,
    check_consistent_length,
)


@dataclass(frozen=True)
class AnovaDesign:
    """
    Validated data container for one-way ANOVA.

    Created via factory methods, not directly.

    Invariants:
        - y is 1D float64, finite, non-empty
        - group has the same length as y; every entry is one of levels
        - len(levels) >= 2 and every level has at least one observation
    """
    y: NDArray[np.floating[Any]]
    group: NDArray
    levels: tuple[str, ...]
    n: int
    source: str   # 'arrays', 'mapping', 'pairs'

    @property
    def k(self) -> int:
        """Number of groups."""
        return len(self.levels)

    @property
    def group_sizes(self) -> dict[str, int]:
        return {level: int(np.sum(self.group == level)) for level in self.levels}

    def observations(self) -> tuple[Observation, ...]:
        """The dataset as (group, value) records, in input order."""
        return tuple(
            Observation(group=str(g), value=float(v))
            for g, v in zip(self.group, self.y)
        )

    # -----------------------------------------------------------------
    # Factories
    # -----------------------------------------------------------------

    @staticmethod
    def for_oneway(
        y: Any,
        group: Any,
    ) -> 'AnovaDesign':
        """
        Create design from a response vector and parallel group labels.

        Args:
            y: Response variable (1D numeric)
            group: Group labels (1D, same length as y)

        Returns:
            AnovaDesign for one-way ANOVA
        """
        y_arr = check_array(y, "y")
        check_1d(y_arr, "y")

        group_arr = np.asarray(group, dtype=object)
        if group_arr.ndim != 1:
            raise InvalidInputError(f"group: expected 1D, got {group_arr.ndim}D")

        check_consistent_length(y_arr, group_arr, names=("y", "group"))
        return AnovaDesign._build(
            y_arr, AnovaDesign._labels_as_str(group_arr), 'arrays'
        )

    @staticmethod
    def from_groups(data: Mapping[Any, Any]) -> 'AnovaDesign':
        """
        Create design from a mapping of group label -> observations.

        Args:
            data: e.g. {'pursuit': [95, 90, 97, 95], 'flight': [85, 89, 92, 89]}

        Returns:
            AnovaDesign with levels in the mapping's iteration order
        """
        values: list[NDArray] = []
        labels: list[str] = []
        seen: set[str] = set()

        for key, obs in data.items():
            label = str(key)
            if label in seen:
                raise InvalidInputError(
                    f"group: labels {key!r} collide after conversion to str"
                )
            seen.add(label)

            arr = check_array(obs, f"data[{key!r}]")
            if arr.ndim == 0:
                arr = arr.reshape(1)
            check_1d(arr, f"data[{key!r}]")
            if arr.shape[0] == 0:
                raise InvalidInputError(
                    f"group: level {label!r} has 0 observations"
                )
            values.append(arr)
            labels.extend([label] * arr.shape[0])

        y_arr = np.concatenate(values) if values else np.empty(0, dtype=np.float64)
        return AnovaDesign._build(y_arr, labels, 'mapping')

    @staticmethod
    def from_pairs(pairs: Iterable[Any]) -> 'AnovaDesign':
        """
        Create design from a flat sequence of (group, value) pairs.

        Each item may be an Observation or any 2-element sequence
        (label, value).

        Returns:
            AnovaDesign with levels in order of first appearance
        """
        raw_labels: list[Any] = []
        raw_values: list[Any] = []

        for i, item in enumerate(pairs):
            if isinstance(item, Observation):
                label, value = item.group, item.value
            else:
                try:
                    label, value = item
                except (TypeError, ValueError) as e:
                    raise InvalidInputError(
                        f"pairs[{i}]: expected a (group, value) pair, got {item!r}"
                    ) from e
            raw_labels.append(label)
            raw_values.append(value)

        y_arr = check_array(raw_values, "value") if raw_values else np.empty(0, dtype=np.float64)
        check_1d(y_arr, "value")
        labels = AnovaDesign._labels_as_str(raw_labels)
        return AnovaDesign._build(y_arr, labels, 'pairs')

    @staticmethod
    def coerce(data: Any, group: Any = None) -> 'AnovaDesign':
        """
        Dispatch on input form.

        - AnovaDesign: returned as is
        - (y, group): arrays
        - Mapping: label -> observations
        - anything else iterable: (group, value) pairs
        """
        if isinstance(data, AnovaDesign):
            if group is not None:
                raise InvalidInputError(
                    "group must be None when data is an AnovaDesign"
                )
            return data
        if group is not None:
            return AnovaDesign.for_oneway(data, group)
        if isinstance(data, Mapping):
            return AnovaDesign.from_groups(data)
        if isinstance(data, (str, bytes)) or not isinstance(data, Iterable):
            raise InvalidInputError(
                f"data: expected a mapping, (group, value) pairs, or y with "
                f"group=, got {type(data).__name__}"
            )
        return AnovaDesign.from_pairs(data)

    @staticmethod
    def _build(
        y_arr: NDArray[np.floating[Any]],
        labels: list[str],
        source: str,
    ) -> 'AnovaDesign':
        if y_arr.shape[0] == 0:
            raise InvalidInputError("dataset is empty: no observations")
        check_finite(y_arr, "y")

        levels = tuple(dict.fromkeys(labels))
        if len(levels) < 2:
            raise InvalidInputError(
                f"group: need at least 2 groups, got {len(levels)}"
            )

        return AnovaDesign(
            y=y_arr,
            group=np.array(labels, dtype=str),
            levels=levels,
            n=int(y_arr.shape[0]),
            source=source,
        )

    @staticmethod
    def _labels_as_str(raw_labels: Iterable[Any]) -> list[str]:
        """Convert labels to str, rejecting distinct labels with equal str()."""
        first_seen: dict[str, Any] = {}
        labels: list[str] = []
        for raw in raw_labels:
            label = str(raw)
            first = first_seen.setdefault(label, raw)
            if type(first) is not type(raw) and bool(first != raw):
                raise InvalidInputError(
                    f"group: labels {first!r} and {raw!r} collide after "
                    f"conversion to str"
                )
            labels.append(label)
        return labels
