# RecFold, Crossfold Planning for Top-N Recommendation Evaluation
# Copyright (C) 2020  Froomle N.V.
# License: GNU AGPLv3 - https://gitlab.com/recpack-maintainers/recpack/-/blob/master/LICENSE
# Author:
#   Lien Michiels
#   Robin Verachtert

"""Descriptors of where and how rating data can be read.

A descriptor does not hold any data, it only points to a file
and describes its layout.

.. currentmodule:: recfold.data_sources

.. autosummary::
    :toctree: generated/

    PreferenceDomain
    DataSource
    TextDataSource
    PackedDataSource
    scan_domain
"""

import logging
from abc import ABC
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pandas as pd

logger = logging.getLogger("recfold")

DEFAULT_FIELDS = ["user", "item", "rating", "timestamp"]
RATING_FIELD = "rating"
TIMESTAMP_FIELD = "timestamp"


@dataclass(frozen=True)
class PreferenceDomain:
    """Range of values a rating can take.

    :param minimum: Lowest possible rating.
    :type minimum: float
    :param maximum: Highest possible rating.
    :type maximum: float
    :param precision: Step between possible ratings,
        None if ratings are continuous. Defaults to None.
    :type precision: float, optional
    """

    minimum: float
    maximum: float
    precision: Optional[float] = None

    def __post_init__(self):
        if self.minimum > self.maximum:
            raise ValueError(f"Domain minimum {self.minimum} is larger than maximum {self.maximum}")
        if self.precision is not None and self.precision <= 0:
            raise ValueError(f"Domain precision should be positive, got {self.precision}")

    def to_dict(self) -> Dict[str, Any]:
        d = {"minimum": self.minimum, "maximum": self.maximum}
        if self.precision is not None:
            d["precision"] = self.precision
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "PreferenceDomain":
        return cls(d["minimum"], d["maximum"], d.get("precision"))


class DataSource(ABC):
    """Base class for data source descriptors.

    Every descriptor has a ``file``, a ``name`` and an optional ``domain``.
    """

    TYPE = None
    """Tag used to identify the descriptor type when (de)serialising."""

    file: Path
    name: Optional[str]
    domain: Optional[PreferenceDomain]

    def _base_dict(self) -> Dict[str, Any]:
        d = {"type": self.TYPE, "name": self.name, "file": str(self.file)}
        if self.domain is not None:
            d["domain"] = self.domain.to_dict()
        return d

    def to_dict(self) -> Dict[str, Any]:
        return self._base_dict()


@dataclass
class TextDataSource(DataSource):
    """Delimited text file containing one rating per line.

    :param file: Path to the file.
    :type file: Union[str, Path]
    :param delimiter: Field delimiter. Defaults to ``","``.
    :type delimiter: str, optional
    :param header_lines: Number of lines to skip at the start of the file. Defaults to 0.
    :type header_lines: int, optional
    :param fields: Names of the columns in the file, in order.
        Defaults to ``user, item, rating, timestamp``.
    :type fields: List[str], optional
    :param domain: Domain of the ratings. Defaults to None.
    :type domain: PreferenceDomain, optional
    :param name: Name of the source. If not specified, the file name
        without extensions is used.
    :type name: str, optional
    """

    TYPE = "text"

    file: Union[str, Path]
    delimiter: str = ","
    header_lines: int = 0
    fields: List[str] = field(default_factory=lambda: list(DEFAULT_FIELDS))
    domain: Optional[PreferenceDomain] = None
    name: Optional[str] = None

    def __post_init__(self):
        self.file = Path(self.file)
        if self.name is None:
            self.name = self.file.name.split(".")[0]
        if self.header_lines < 0:
            raise ValueError(f"header_lines should be non-negative, got {self.header_lines}")

    def to_dict(self) -> Dict[str, Any]:
        d = self._base_dict()
        d["delimiter"] = self.delimiter
        d["header_lines"] = self.header_lines
        d["fields"] = list(self.fields)
        return d


@dataclass
class PackedDataSource(DataSource):
    """Binary packed rating file.

    :param file: Path to the file.
    :type file: Union[str, Path]
    :param domain: Domain of the ratings. Defaults to None.
    :type domain: PreferenceDomain, optional
    :param name: Name of the source. If not specified, the file name
        without extensions is used.
    :type name: str, optional
    """

    TYPE = "pack"

    file: Union[str, Path]
    domain: Optional[PreferenceDomain] = None
    name: Optional[str] = None

    def __post_init__(self):
        self.file = Path(self.file)
        if self.name is None:
            self.name = self.file.name.split(".")[0]


DATA_SOURCE_TYPES = {TextDataSource.TYPE: TextDataSource, PackedDataSource.TYPE: PackedDataSource}


def data_source_from_dict(d: Dict[str, Any]) -> DataSource:
    """Construct a data source descriptor from its dictionary representation.

    :param d: Dictionary as created by ``to_dict``.
        The ``type`` key selects the descriptor class, defaults to ``text``.
    :type d: Dict[str, Any]
    :raises ValueError: If the type is unknown, or the file is missing.
    :return: The descriptor.
    :rtype: DataSource
    """
    d = dict(d)
    source_type = d.pop("type", TextDataSource.TYPE)
    if source_type not in DATA_SOURCE_TYPES:
        raise ValueError(f"Unknown data source type {source_type}")
    if "file" not in d:
        raise ValueError("Data source needs a file")

    if d.get("domain") is not None:
        d["domain"] = PreferenceDomain.from_dict(d["domain"])

    return DATA_SOURCE_TYPES[source_type](**d)


def scan_domain(source: TextDataSource, precision: Optional[float] = None) -> PreferenceDomain:
    """Read a text source and derive the domain from its ratings.

    .. warning::

        This reads the entire file, it is intended to be used from
        a deferred source producer, not while planning.

    :param source: The text source to scan. Needs a ``rating`` field.
    :type source: TextDataSource
    :param precision: Precision to use for the domain.
        If None, precision 1 is used when all ratings are whole numbers.
    :type precision: float, optional
    :raises ValueError: If the source has no rating field, or contains no ratings.
    :return: Domain spanning the lowest and highest rating in the file.
    :rtype: PreferenceDomain
    """
    if RATING_FIELD not in source.fields:
        raise ValueError(f"Source {source.name} has no {RATING_FIELD} field to scan")

    logger.debug(f"Scanning {source.file} for rating domain")
    df = pd.read_csv(
        source.file,
        sep=source.delimiter,
        header=None,
        names=source.fields,
        skiprows=source.header_lines,
        usecols=[RATING_FIELD],
    )
    ratings = df[RATING_FIELD].dropna()
    if ratings.empty:
        raise ValueError(f"Source {source.name} contains no ratings")

    if precision is None and (ratings % 1 == 0).all():
        precision = 1.0

    domain = PreferenceDomain(float(ratings.min()), float(ratings.max()), precision)
    logger.debug(f"Scanned domain for {source.name}: {domain}")
    return domain
