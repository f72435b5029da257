# RecFold, Crossfold Planning for Top-N Recommendation Evaluation
# Copyright (C) 2020  Froomle N.V.
# License: GNU AGPLv3 - https://gitlab.com/recpack-maintainers/recpack/-/blob/master/LICENSE
# Author:
#   Lien Michiels
#   Robin Verachtert

"""YAML configuration of crossfold specs.

An example configuration::

    name: ml100k
    source:
      type: text
      file: data/ml-100k/u.data
      delimiter: "\\t"
      domain: infer
    partition_count: 5
    method: partition-users
    user_partition_method:
      type: holdout
      order: random
      count: 10
    output_format: csv.gz
    output_dir: build/crossfold

A source domain of ``infer`` defers loading the source:
the ratings file is scanned every time the source is resolved.
"""

import logging
from typing import Any, Dict, TextIO

import yaml

from recfold.crossfold import CrossfoldSpec
from recfold.data_sources import TextDataSource, data_source_from_dict, scan_domain
from recfold.exceptions import ConfigurationError

logger = logging.getLogger("recfold")

INFER_DOMAIN = "infer"

KNOWN_KEYS = {
    "name",
    "source",
    "partition_count",
    "method",
    "user_partition_method",
    "sample_size",
    "include_timestamps",
    "output_format",
    "output_dir",
}


class CrossfoldConfig:
    """Crossfold configuration read from a YAML document.

    The document is validated on construction.

    :param config_file: Open file or string containing the YAML document.
    :type config_file: Union[TextIO, str]
    :raises ConfigurationError: If the document is not a valid configuration.
    """

    def __init__(self, config_file: TextIO):
        try:
            self.config = yaml.safe_load(config_file)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Could not parse crossfold configuration: {e}") from e
        self.validate()

    def validate(self):
        if not isinstance(self.config, dict):
            raise ConfigurationError("Crossfold configuration should be a mapping")

        unknown = set(self.config) - KNOWN_KEYS
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

        if "source" not in self.config:
            raise ConfigurationError("No data source specified")
        source = self.config["source"]
        if not isinstance(source, dict) or "file" not in source:
            raise ConfigurationError("Data source should be a mapping with a file")

        partition_count = self.config.get("partition_count", 5)
        if isinstance(partition_count, bool) or not isinstance(partition_count, int) or partition_count < 0:
            raise ConfigurationError(f"partition_count should be a non-negative integer, got {partition_count}")

        sample_size = self.config.get("sample_size")
        if sample_size is not None and (isinstance(sample_size, bool) or not isinstance(sample_size, int)):
            raise ConfigurationError(f"sample_size should be an integer, got {sample_size!r}")

        if not isinstance(self.config.get("include_timestamps", True), bool):
            raise ConfigurationError(
                f"include_timestamps should be true or false, got {self.config['include_timestamps']!r}"
            )

        for key in ("name", "method", "output_format", "output_dir"):
            value = self.config.get(key)
            if value is not None and not isinstance(value, str):
                raise ConfigurationError(f"{key} should be a string, got {value!r}")

        user_partition_method = self.config.get("user_partition_method")
        if user_partition_method is not None and not isinstance(user_partition_method, dict):
            raise ConfigurationError(f"user_partition_method should be a mapping, got {user_partition_method!r}")

    def _source_config(self) -> Dict[str, Any]:
        return dict(self.config["source"])

    def _infers_domain(self) -> bool:
        return self.config["source"].get("domain") == INFER_DOMAIN

    def get_spec(self) -> CrossfoldSpec:
        """Construct the crossfold spec described by this configuration.

        :raises ConfigurationError: If a value can't be interpreted.
        :return: A new spec.
        :rtype: CrossfoldSpec
        """
        d = dict(self.config)
        d.pop("source")
        try:
            spec = CrossfoldSpec.from_dict(d)
        except (ValueError, TypeError) as e:
            raise ConfigurationError(str(e)) from e

        if self._infers_domain():
            source_config = self._source_config()
            source_config.pop("domain")

            def scanned_source():
                source = data_source_from_dict(source_config)
                if not isinstance(source, TextDataSource):
                    raise ConfigurationError("Domain can only be inferred for text sources")
                source.domain = scan_domain(source)
                return source

            logger.debug("Source domain will be inferred on resolution")
            spec.set_deferred_source(scanned_source)
        else:
            try:
                spec.set_source(data_source_from_dict(self._source_config()))
            except (ValueError, TypeError, KeyError) as e:
                raise ConfigurationError(f"Invalid data source: {e}") from e

        return spec


def load_crossfold_spec(path: str) -> CrossfoldSpec:
    """Read a crossfold spec from a YAML file.

    :param path: Path to the file.
    :type path: str
    :return: The spec.
    :rtype: CrossfoldSpec
    """
    with open(path, "r") as infile:
        return CrossfoldConfig(infile).get_spec()


def save_crossfold_spec(spec: CrossfoldSpec, path: str):
    """Write a crossfold spec to a YAML file.

    A deferred source is resolved and written out as a concrete source.

    :param spec: The spec to save.
    :type spec: CrossfoldSpec
    :param path: File to write to.
    :type path: str
    """
    d = spec.to_dict()
    if d["source"] is None:
        raise ConfigurationError("No data source specified")
    d = {k: v for k, v in d.items() if v is not None}

    with open(path, "w") as outfile:
        outfile.write(yaml.safe_dump(d, sort_keys=False))
