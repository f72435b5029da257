# RecFold, Crossfold Planning for Top-N Recommendation Evaluation
# Copyright (C) 2020  Froomle N.V.
# License: GNU AGPLv3 - https://gitlab.com/recpack-maintainers/recpack/-/blob/master/LICENSE
# Author:
#   Lien Michiels
#   Robin Verachtert

import enum
import logging
from pathlib import Path
from typing import NamedTuple, Optional

from recfold.data_sources import (
    DEFAULT_FIELDS,
    TIMESTAMP_FIELD,
    DataSource,
    PackedDataSource,
    PreferenceDomain,
    TextDataSource,
)

logger = logging.getLogger("recfold")

OUTPUT_DELIMITER = ","


class OutputFormat(enum.Enum):
    """Formats a crossfold can write its partitions in.

    The value of a member is the file extension used for it.
    Compressed text formats carry the compression in their extension.
    """

    CSV = "csv"
    CSV_GZIP = "csv.gz"
    CSV_XZ = "csv.xz"
    PACK = "pack"

    @property
    def extension(self) -> str:
        return self.value

    @property
    def packed(self) -> bool:
        return self is OutputFormat.PACK

    @classmethod
    def parse(cls, value) -> "OutputFormat":
        """Look up a format by member name (``CSV_GZIP``) or extension (``csv.gz``)."""
        if isinstance(value, cls):
            return value
        try:
            return cls[str(value).upper()]
        except KeyError:
            pass
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"Unknown output format {value}") from None


class FormatResolution(NamedTuple):
    extension: str
    packed: bool


def resolve_format(output_format: OutputFormat) -> FormatResolution:
    """Map an output format to its file extension, and whether it is packed.

    :param output_format: The format to resolve.
    :type output_format: OutputFormat
    :return: (extension, packed) pair.
    :rtype: FormatResolution
    """
    return FormatResolution(output_format.extension, output_format.packed)


def make_data_source(
    basename: str,
    output_format: OutputFormat,
    output_dir: Path,
    domain: Optional[PreferenceDomain],
    include_timestamps: bool = True,
) -> DataSource:
    """Construct the descriptor for a file a crossfold will write.

    :param basename: File name without extension, e.g. ``part01.train``.
    :type basename: str
    :param output_format: Format of the file.
    :type output_format: OutputFormat
    :param output_dir: Directory the file is written to.
    :type output_dir: Path
    :param domain: Rating domain of the source being split.
    :type domain: PreferenceDomain, optional
    :param include_timestamps: Whether text output contains a timestamp column. Defaults to True.
    :type include_timestamps: bool, optional
    :raises ValueError: If the format has no descriptor mapping.
    :return: Packed descriptor for ``PACK``, text descriptor otherwise.
    :rtype: DataSource
    """
    extension, packed = resolve_format(output_format)
    file = Path(output_dir) / f"{basename}.{extension}"

    if packed:
        return PackedDataSource(file, domain=domain)
    elif output_format in (OutputFormat.CSV, OutputFormat.CSV_GZIP, OutputFormat.CSV_XZ):
        fields = [f for f in DEFAULT_FIELDS if include_timestamps or f != TIMESTAMP_FIELD]
        return TextDataSource(file, delimiter=OUTPUT_DELIMITER, fields=fields, domain=domain)
    else:
        raise ValueError(f"No data source mapping for output format {output_format}")
