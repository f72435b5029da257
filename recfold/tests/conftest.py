# RecFold, Crossfold Planning for Top-N Recommendation Evaluation
# Copyright (C) 2020  Froomle N.V.
# License: GNU AGPLv3 - https://gitlab.com/recpack-maintainers/recpack/-/blob/master/LICENSE
# Author:
#   Lien Michiels
#   Robin Verachtert

import pytest

from recfold.crossfold import CrossfoldSpec
from recfold.data_sources import PreferenceDomain, TextDataSource


@pytest.fixture(scope="function")
def domain():
    return PreferenceDomain(1, 5, 1)


@pytest.fixture(scope="function")
def source(domain):
    return TextDataSource("data/ml100k/ratings.csv", delimiter="\t", domain=domain, name="ml100k")


@pytest.fixture(scope="function")
def spec(source):
    spec = CrossfoldSpec()
    spec.set_source(source)
    spec.partition_count = 2
    spec.output_dir = "/tmp/cf"
    return spec


@pytest.fixture(scope="function")
def ratings_file(tmp_path):
    path = tmp_path / "ratings.csv"
    path.write_text("1,10,3.5,100\n1,11,4,101\n2,10,0.5,102\n2,12,5,103\n")
    return path
