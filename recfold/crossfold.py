# RecFold, Crossfold Planning for Top-N Recommendation Evaluation
# Copyright (C) 2020  Froomle N.V.
# License: GNU AGPLv3 - https://gitlab.com/recpack-maintainers/recpack/-/blob/master/LICENSE
# Author:
#   Lien Michiels
#   Robin Verachtert

"""Specification of a crossfold, and the plan of the files it will produce.

The spec contains the logic for determining output file locations,
so this information is available without actually running the crossfold.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Union

import pandas as pd

from recfold.data_set import DataSet
from recfold.data_sources import DataSource, data_source_from_dict
from recfold.deferred import DeferredSource
from recfold.exceptions import ConfigurationError
from recfold.formats import OutputFormat, make_data_source
from recfold.partition import (
    CrossfoldMethod,
    Holdout,
    PartitionMethod,
    partition_method_from_dict,
    partition_method_to_dict,
)

logger = logging.getLogger("recfold")

MANIFEST_FILENAME = "all-partitions.json"


def partition_basename(index: int, role: str) -> str:
    """File name, without extension, of a partition file.

    The fold index is zero padded to width 2,
    folds beyond 99 get wider names.

    :param index: 1-based fold index.
    :type index: int
    :param role: ``train`` or ``test``.
    :type role: str
    :return: e.g. ``part03.train``
    :rtype: str
    """
    return f"part{index:02d}.{role}"


class CrossfoldSpec:
    """Specification for running a crossfold operation.

    The source is stored as a :class:`recfold.deferred.DeferredSource`,
    so a spec can be constructed before the source is available.
    Nothing is resolved until the name or data sets are requested.

    To change the way test users' ratings are split,
    assign a different :attr:`user_partition_method`::

        spec.user_partition_method = HoldoutFraction("timestamp", 0.2)

    :param name: Name of the crossfold. If not set,
        the name of the source is used.
    :type name: str, optional
    :param output_dir: Directory the crossfold writes its partitions to.
    :type output_dir: Union[str, Path], optional
    """

    def __init__(self, name: Optional[str] = None, output_dir: Optional[Union[str, Path]] = None):
        self._name = name
        self._source = DeferredSource()

        self.partition_count = 5
        self.method = CrossfoldMethod.PARTITION_USERS
        # Kept even when method does not partition users.
        self.user_partition_method: PartitionMethod = Holdout(order="random", count=10)
        self.sample_size: Optional[int] = None

        self.include_timestamps = True
        self.output_format = OutputFormat.CSV
        self.output_dir = output_dir

    @property
    def name(self) -> Optional[str]:
        """Name of the crossfold.

        Falls back to the name of the source, None if neither is available.
        """
        if self._name is None:
            source = self._source.get()
            if source is not None:
                return source.name
        return self._name

    @name.setter
    def name(self, value: Optional[str]):
        self._name = value

    @property
    def source(self) -> Optional[DataSource]:
        """The data source to split. Resolving it calls the deferred producer, if any."""
        return self._source.get()

    @source.setter
    def source(self, source: Optional[DataSource]):
        self.set_source(source)

    def set_source(self, source: Optional[DataSource]):
        self._source.set(source)

    def set_deferred_source(self, producer: Callable[[], Optional[DataSource]]):
        """Set a producer which is called every time the source is needed.

        :param producer: Zero-argument callable returning the source.
        :type producer: Callable[[], Optional[DataSource]]
        """
        self._source.set_deferred(producer)

    @property
    def output_dir(self) -> Optional[Path]:
        return self._output_dir

    @output_dir.setter
    def output_dir(self, value: Optional[Union[str, Path]]):
        self._output_dir = Path(value) if value is not None else None

    @property
    def partition_spec_file(self) -> Path:
        """The file the crossfold will produce, listing the output partitions.

        :raises ConfigurationError: If no output directory is set.
        :return: Path to ``all-partitions.json`` in the output directory.
        :rtype: Path
        """
        if self._output_dir is None:
            raise ConfigurationError("No output directory specified")
        return self._output_dir / MANIFEST_FILENAME

    def _check_readiness(self) -> DataSource:
        if self._output_dir is None:
            raise ConfigurationError("No output directory specified")

        source = self._source.get()
        if source is None:
            raise ConfigurationError("No data source specified")

        if self.partition_count < 0:
            raise ConfigurationError(f"Partition count should not be negative, got {self.partition_count}")

        return source

    def get_data_sets(self) -> List[DataSet]:
        """Get the data sets that will be produced by the crossfold specified by this spec.

        The source is resolved once, its domain is copied into every descriptor.
        A new list of new descriptors is returned on every call.

        :raises ConfigurationError: If the output directory or source is missing,
            or no name can be determined.
        :return: One data set per partition, in partition order.
        :rtype: List[DataSet]
        """
        source = self._check_readiness()

        name = self._name if self._name is not None else source.name
        if name is None:
            raise ConfigurationError("No crossfold name specified, and the data source has no name")

        data_sets = []
        for i in range(1, self.partition_count + 1):
            data_set = DataSet(
                f"{name}.{i}",
                self._make_data_source(partition_basename(i, "train"), source),
                self._make_data_source(partition_basename(i, "test"), source),
            )
            data_set.set_attribute("DataSet", name)
            data_set.set_attribute("Partition", i)
            logger.debug(f"Planned data set {data_set.name}")
            data_sets.append(data_set)

        return data_sets

    def _make_data_source(self, basename: str, source: DataSource) -> DataSource:
        return make_data_source(
            basename,
            self.output_format,
            self._output_dir,
            source.domain,
            include_timestamps=self.include_timestamps,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Dictionary representation of the spec, suitable for YAML or JSON.

        The source is resolved to include it.
        """
        source = self._source.get()
        name = self._name if self._name is not None or source is None else source.name
        return {
            "name": name,
            "source": source.to_dict() if source is not None else None,
            "partition_count": self.partition_count,
            "method": self.method.value,
            "user_partition_method": partition_method_to_dict(self.user_partition_method),
            "sample_size": self.sample_size,
            "include_timestamps": self.include_timestamps,
            "output_format": self.output_format.name,
            "output_dir": str(self._output_dir) if self._output_dir is not None else None,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "CrossfoldSpec":
        """Construct a spec from a dictionary as created by :meth:`to_dict`.

        Missing keys keep their defaults.

        :raises ValueError: If a value can't be parsed.
        """
        spec = cls(d.get("name"), d.get("output_dir"))
        if d.get("source") is not None:
            spec.set_source(data_source_from_dict(d["source"]))
        if "partition_count" in d:
            spec.partition_count = int(d["partition_count"])
        if "method" in d:
            spec.method = CrossfoldMethod.parse(d["method"])
        if d.get("user_partition_method") is not None:
            spec.user_partition_method = partition_method_from_dict(d["user_partition_method"])
        if d.get("sample_size") is not None:
            spec.sample_size = int(d["sample_size"])
        if "include_timestamps" in d:
            if not isinstance(d["include_timestamps"], bool):
                raise ValueError(f"include_timestamps should be true or false, got {d['include_timestamps']!r}")
            spec.include_timestamps = d["include_timestamps"]
        if "output_format" in d:
            spec.output_format = OutputFormat.parse(d["output_format"])
        return spec


class CrossfoldPlan(NamedTuple):
    """The layout a crossfold will produce.

    :param data_sets: One data set per partition.
    :type data_sets: List[DataSet]
    :param manifest_path: Location of the file listing the realised partitions.
    :type manifest_path: Path
    """

    data_sets: List[DataSet]
    manifest_path: Path

    def to_manifest(self) -> List[Dict[str, Any]]:
        """The content the crossfold records in :attr:`manifest_path`."""
        return [ds.to_dict() for ds in self.data_sets]

    def to_dataframe(self) -> pd.DataFrame:
        """Summary of the plan, one row per partition.

        Columns are ``name``, ``train``, ``test``, followed by the data set attributes.
        """
        columns = ["name", "train", "test"]
        rows = []
        for ds in self.data_sets:
            row = {"name": ds.name, "train": str(ds.train_source.file), "test": str(ds.test_source.file)}
            for key, value in ds.attributes.items():
                if key not in columns:
                    columns.append(key)
                row[key] = value
            rows.append(row)
        return pd.DataFrame(rows, columns=columns)


def generate_plan(spec: CrossfoldSpec) -> CrossfoldPlan:
    """Compute the data sets and manifest location a crossfold will produce.

    No files are read or written.
    Configuration errors are raised before any descriptor is built.

    :param spec: The crossfold to plan.
    :type spec: CrossfoldSpec
    :raises ConfigurationError: If the spec misses an output directory, a source or a name.
    :return: The planned data sets and manifest path.
    :rtype: CrossfoldPlan
    """
    data_sets = spec.get_data_sets()
    plan = CrossfoldPlan(data_sets, spec.partition_spec_file)
    logger.debug(f"Planned {len(data_sets)} partitions in {spec.output_dir}")
    return plan
