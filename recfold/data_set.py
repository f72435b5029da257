# RecFold, Crossfold Planning for Top-N Recommendation Evaluation
# Copyright (C) 2020  Froomle N.V.
# License: GNU AGPLv3 - https://gitlab.com/recpack-maintainers/recpack/-/blob/master/LICENSE
# Author:
#   Lien Michiels
#   Robin Verachtert

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Union

from recfold.data_sources import DataSource

logger = logging.getLogger("recfold")

AttributeValue = Union[str, int]


def _check_attribute(key: str, value: Any):
    if not isinstance(key, str):
        raise TypeError(f"Attribute names should be strings, not {type(key).__name__}")
    # bool is a subclass of int, but not a valid attribute value.
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise TypeError(f"Attribute {key} should be a string or integer, not {type(value).__name__}")


@dataclass
class DataSet:
    """A named train/test pair, as produced by one fold of a crossfold.

    Attributes are used to group and report results downstream,
    e.g. ``{"DataSet": "ml100k", "Partition": 1}``.
    They keep the order in which they were set.

    :param name: Name of the data set.
    :type name: str
    :param train_source: Source of the training data.
    :type train_source: DataSource
    :param test_source: Source of the test data.
    :type test_source: DataSource
    :param attributes: String or integer attributes. Defaults to empty.
    :type attributes: Dict[str, Union[str, int]], optional
    """

    name: str
    train_source: DataSource
    test_source: DataSource
    attributes: Dict[str, AttributeValue] = field(default_factory=dict)

    def __post_init__(self):
        for key, value in self.attributes.items():
            _check_attribute(key, value)

    def set_attribute(self, key: str, value: AttributeValue):
        _check_attribute(key, value)
        if key in self.attributes:
            logger.warning(f"Overwriting attribute {key} of data set {self.name}")
        self.attributes[key] = value

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "train_source": self.train_source.to_dict(),
            "test_source": self.test_source.to_dict(),
            "attributes": dict(self.attributes),
        }
