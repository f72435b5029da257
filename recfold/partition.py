# RecFold, Crossfold Planning for Top-N Recommendation Evaluation
# Copyright (C) 2020  Froomle N.V.
# License: GNU AGPLv3 - https://gitlab.com/recpack-maintainers/recpack/-/blob/master/LICENSE
# Author:
#   Lien Michiels
#   Robin Verachtert

"""Description of how a crossfold divides its data.

The top level strategy is a :class:`CrossfoldMethod`.
When ratings of test users are split in a train and test part,
the :class:`PartitionMethod` variants describe how.

These classes only carry configuration. Interpreting them is left to
whichever component executes the crossfold.

.. currentmodule:: recfold.partition

.. autosummary::
    :toctree: generated/

    CrossfoldMethod
    Holdout
    HoldoutFraction
    Retain
    SampleSize
"""

import enum
from dataclasses import asdict, dataclass
from typing import Any, Dict, Union

ORDERS = ("random", "timestamp")


class CrossfoldMethod(enum.Enum):
    """Strategy used to assign data to test partitions."""

    PARTITION_USERS = "partition-users"
    SAMPLE_USERS = "sample-users"
    PARTITION_RATINGS = "partition-ratings"
    PARTITION_ITEMS = "partition-items"
    SAMPLE_ITEMS = "sample-items"

    @classmethod
    def parse(cls, value) -> "CrossfoldMethod":
        """Look up a method by member name (``PARTITION_USERS``) or value (``partition-users``)."""
        if isinstance(value, cls):
            return value
        key = str(value).upper().replace("-", "_")
        if key not in cls.__members__:
            raise ValueError(f"Unknown crossfold method {value}")
        return cls[key]


def _check_order(order: str):
    if order not in ORDERS:
        raise ValueError(f"Unknown order {order}, expected one of {', '.join(ORDERS)}")


def _check_count(count: int):
    if isinstance(count, bool) or not isinstance(count, int) or count < 0:
        raise ValueError(f"count should be a non-negative integer, got {count}")


@dataclass(frozen=True)
class Holdout:
    """Hold out a fixed number of ratings per test user.

    :param order: Order in which ratings are considered, ``random`` or ``timestamp``.
    :type order: str
    :param count: Number of ratings to hold out.
    :type count: int
    """

    order: str = "random"
    count: int = 10

    kind = "holdout"

    def __post_init__(self):
        _check_order(self.order)
        _check_count(self.count)


@dataclass(frozen=True)
class HoldoutFraction:
    """Hold out a fraction of the ratings of each test user.

    :param order: Order in which ratings are considered, ``random`` or ``timestamp``.
    :type order: str
    :param fraction: Fraction of ratings to hold out, in [0, 1].
    :type fraction: float
    """

    order: str = "random"
    fraction: float = 0.2

    kind = "holdout-fraction"

    def __post_init__(self):
        _check_order(self.order)
        if not 0 <= self.fraction <= 1:
            raise ValueError(f"fraction should be in [0, 1], got {self.fraction}")


@dataclass(frozen=True)
class Retain:
    """Keep a fixed number of ratings per test user as training data,
    the rest are test data.

    :param order: Order in which ratings are considered, ``random`` or ``timestamp``.
    :type order: str
    :param count: Number of ratings to retain.
    :type count: int
    """

    order: str = "random"
    count: int = 10

    kind = "retain"

    def __post_init__(self):
        _check_order(self.order)
        _check_count(self.count)


@dataclass(frozen=True)
class SampleSize:
    """Use a fixed, absolute number of test entities.

    :param count: Number of entities to sample.
    :type count: int
    """

    count: int

    kind = "sample-size"

    def __post_init__(self):
        _check_count(self.count)


PartitionMethod = Union[Holdout, HoldoutFraction, Retain, SampleSize]

PARTITION_METHODS = {c.kind: c for c in (Holdout, HoldoutFraction, Retain, SampleSize)}


def partition_method_to_dict(method: PartitionMethod) -> Dict[str, Any]:
    d = {"type": method.kind}
    d.update(asdict(method))
    return d


def partition_method_from_dict(d: Dict[str, Any]) -> PartitionMethod:
    """Construct a partition method from its dictionary form.

    :param d: Dictionary with a ``type`` key naming the variant,
        and the fields of that variant.
    :type d: Dict[str, Any]
    :raises ValueError: If the type is unknown or the fields are invalid.
    :return: The partition method.
    :rtype: PartitionMethod
    """
    d = dict(d)
    kind = d.pop("type", None)
    if kind not in PARTITION_METHODS:
        raise ValueError(f"Unknown partition method {kind}, expected one of {', '.join(PARTITION_METHODS)}")
    try:
        return PARTITION_METHODS[kind](**d)
    except TypeError as e:
        raise ValueError(f"Invalid parameters for partition method {kind}: {e}") from e
