# RecFold, Crossfold Planning for Top-N Recommendation Evaluation
# Copyright (C) 2020  Froomle N.V.
# License: GNU AGPLv3 - https://gitlab.com/recpack-maintainers/recpack/-/blob/master/LICENSE
# Author:
#   Lien Michiels
#   Robin Verachtert

"""Deterministic planning of crossfold train/test layouts.

.. currentmodule:: recfold

.. autosummary::
    :toctree: generated/

    CrossfoldSpec
    CrossfoldPlan
    generate_plan
    DataSet

A :class:`CrossfoldSpec` describes how a ratings source should be split,
and where the resulting partitions will be written.
Calling :func:`generate_plan` computes the train/test data set descriptors
that a crossfold run will produce, without touching the data itself::

    from recfold import CrossfoldSpec, TextDataSource, generate_plan

    spec = CrossfoldSpec()
    spec.set_source(TextDataSource("data/ratings.csv", name="ml100k"))
    spec.partition_count = 2
    spec.output_dir = "/tmp/cf"

    plan = generate_plan(spec)
    plan.data_sets[0].train_source.file  # /tmp/cf/part01.train.csv
    plan.manifest_path  # /tmp/cf/all-partitions.json
"""

import logging
import sys

logger = logging.getLogger("recfold")
logger.setLevel(logging.INFO)


if not logger.handlers:
    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter("%(asctime)s - %(module)s - %(name)s - %(levelname)s - %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)

from recfold.exceptions import ConfigurationError  # noqa: E402
from recfold.data_sources import PreferenceDomain, DataSource, TextDataSource, PackedDataSource  # noqa: E402
from recfold.formats import OutputFormat  # noqa: E402
from recfold.partition import CrossfoldMethod, Holdout, HoldoutFraction, Retain, SampleSize  # noqa: E402
from recfold.data_set import DataSet  # noqa: E402
from recfold.crossfold import CrossfoldSpec, CrossfoldPlan, generate_plan  # noqa: E402
