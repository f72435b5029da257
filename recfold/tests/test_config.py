# RecFold, Crossfold Planning for Top-N Recommendation Evaluation
# Copyright (C) 2020  Froomle N.V.
# License: GNU AGPLv3 - https://gitlab.com/recpack-maintainers/recpack/-/blob/master/LICENSE
# Author:
#   Lien Michiels
#   Robin Verachtert

import io

import pytest
import yaml

from recfold.config import CrossfoldConfig, load_crossfold_spec, save_crossfold_spec
from recfold.crossfold import generate_plan
from recfold.data_sources import PreferenceDomain, TextDataSource
from recfold.exceptions import ConfigurationError
from recfold.formats import OutputFormat
from recfold.partition import CrossfoldMethod, Retain


CONFIG = """
name: ml100k
source:
  type: text
  file: data/u.data
  delimiter: "\\t"
  domain:
    minimum: 1
    maximum: 5
    precision: 1
partition_count: 3
method: partition-users
user_partition_method:
  type: retain
  order: timestamp
  count: 5
output_format: csv.gz
output_dir: /tmp/cf
"""


def test_get_spec():
    spec = CrossfoldConfig(io.StringIO(CONFIG)).get_spec()

    assert spec.name == "ml100k"
    assert spec.partition_count == 3
    assert spec.method == CrossfoldMethod.PARTITION_USERS
    assert spec.user_partition_method == Retain("timestamp", 5)
    assert spec.output_format == OutputFormat.CSV_GZIP
    assert str(spec.output_dir) == "/tmp/cf"

    source = spec.source
    assert isinstance(source, TextDataSource)
    assert source.delimiter == "\t"
    assert source.domain == PreferenceDomain(1, 5, 1)


def test_defaults_from_minimal_config():
    spec = CrossfoldConfig("source:\n  file: ratings.csv\n").get_spec()
    assert spec.name == "ratings"
    assert spec.partition_count == 5
    assert spec.output_format == OutputFormat.CSV
    assert spec.output_dir is None


@pytest.mark.parametrize(
    "document",
    [
        "- a list",
        "name: x",
        "source: ratings.csv",
        "source:\n  file: r.csv\nfolds: 5",
        "source:\n  file: r.csv\npartition_count: -1",
        "source:\n  file: r.csv\npartition_count: five",
        "source: [unclosed",
        "source:\n  file: r.csv\ninclude_timestamps: \"false\"",
        "source:\n  file: r.csv\nuser_partition_method: 5",
        "source:\n  file: r.csv\noutput_dir: 5",
        "source:\n  file: r.csv\nsample_size: [1]",
    ],
)
def test_invalid_config(document):
    with pytest.raises(ConfigurationError):
        CrossfoldConfig(document)


@pytest.mark.parametrize(
    "document",
    [
        "source:\n  file: r.csv\nmethod: leave-one-out",
        "source:\n  file: r.csv\noutput_format: parquet",
        "source:\n  file: r.csv\nuser_partition_method:\n  type: holdout\n  order: alphabetical",
        "source:\n  type: feather\n  file: r.csv",
    ],
)
def test_invalid_values(document):
    config = CrossfoldConfig(document)
    with pytest.raises(ConfigurationError):
        config.get_spec()


def test_inferred_domain_is_deferred(tmp_path, ratings_file):
    document = f"source:\n  file: {ratings_file}\n  domain: infer\noutput_dir: {tmp_path / 'out'}\n"
    spec = CrossfoldConfig(document).get_spec()

    # Changing the file after configuration is reflected in the plan.
    ratings_file.write_text("1,10,1,100\n2,11,3,101\n")

    plan = generate_plan(spec)
    assert plan.data_sets[0].train_source.domain == PreferenceDomain(1, 3, 1)


def test_inferred_domain_missing_file(tmp_path):
    document = f"source:\n  file: {tmp_path / 'missing.csv'}\n  domain: infer\noutput_dir: {tmp_path}\n"
    spec = CrossfoldConfig(document).get_spec()
    with pytest.raises(FileNotFoundError):
        generate_plan(spec)


def test_save_load(tmp_path, spec):
    spec.user_partition_method = Retain("random", 3)
    spec.output_format = OutputFormat.PACK
    path = tmp_path / "crossfold.yaml"

    save_crossfold_spec(spec, str(path))

    with open(path) as f:
        d = yaml.safe_load(f)
    assert d["output_format"] == "PACK"
    assert "sample_size" not in d

    loaded = load_crossfold_spec(str(path))
    assert loaded.to_dict() == spec.to_dict()
    assert generate_plan(loaded) == generate_plan(spec)


def test_save_without_source(tmp_path):
    from recfold.crossfold import CrossfoldSpec

    with pytest.raises(ConfigurationError):
        save_crossfold_spec(CrossfoldSpec("x", output_dir="out"), str(tmp_path / "c.yaml"))


def test_include_timestamps_boolean():
    spec = CrossfoldConfig("source:\n  file: r.csv\ninclude_timestamps: false\n").get_spec()
    assert spec.include_timestamps is False


def test_wrong_type_after_validation():
    config = CrossfoldConfig("source:\n  file: r.csv\n")
    config.config["output_dir"] = 5
    with pytest.raises(ConfigurationError):
        config.get_spec()
