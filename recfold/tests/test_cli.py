# RecFold, Crossfold Planning for Top-N Recommendation Evaluation
# Copyright (C) 2020  Froomle N.V.
# License: GNU AGPLv3 - https://gitlab.com/recpack-maintainers/recpack/-/blob/master/LICENSE
# Author:
#   Lien Michiels
#   Robin Verachtert

import json
import subprocess
import sys
from pathlib import Path

import pytest
from click.testing import CliRunner

from recfold.cli import plan_crossfold


@pytest.fixture()
def config_file(tmp_path):
    path = tmp_path / "crossfold.yaml"
    path.write_text("name: ml100k\nsource:\n  file: ratings.csv\npartition_count: 2\noutput_dir: /tmp/cf\n")
    return path


def test_plan_json(config_file):
    runner = CliRunner()
    result = runner.invoke(plan_crossfold, ["-c", str(config_file)])
    assert result.exit_code == 0, result.output

    d = json.loads(result.output)
    assert d["manifest"] == "/tmp/cf/all-partitions.json"
    assert [ds["name"] for ds in d["data_sets"]] == ["ml100k.1", "ml100k.2"]
    assert d["data_sets"][0]["train_source"]["file"] == "/tmp/cf/part01.train.csv"
    assert d["data_sets"][1]["attributes"] == {"DataSet": "ml100k", "Partition": 2}


def test_plan_table(config_file):
    runner = CliRunner()
    result = runner.invoke(plan_crossfold, ["-c", str(config_file), "--format", "table", "--output-dir", "/data/cf"])
    assert result.exit_code == 0, result.output
    assert "/data/cf/part02.test.csv" in result.output
    assert "ml100k.1" in result.output


def test_plan_missing_output_dir(tmp_path):
    path = tmp_path / "crossfold.yaml"
    path.write_text("source:\n  file: ratings.csv\n")

    runner = CliRunner()
    result = runner.invoke(plan_crossfold, ["-c", str(path)])
    assert result.exit_code == 1
    assert "No output directory specified" in result.output


def test_plan_json_stdout_with_inferred_domain(tmp_path, ratings_file):
    path = tmp_path / "crossfold.yaml"
    path.write_text(f"source:\n  file: {ratings_file}\n  domain: infer\npartition_count: 1\noutput_dir: {tmp_path / 'out'}\n")

    result = subprocess.run(
        [sys.executable, "-m", "recfold.cli", "-c", str(path)],
        capture_output=True,
        text=True,
        check=True,
        cwd=Path(__file__).resolve().parents[2],
    )

    d = json.loads(result.stdout)
    assert d["data_sets"][0]["train_source"]["domain"] == {"minimum": 0.5, "maximum": 5.0}
