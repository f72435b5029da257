# RecFold, Crossfold Planning for Top-N Recommendation Evaluation
# Copyright (C) 2020  Froomle N.V.
# License: GNU AGPLv3 - https://gitlab.com/recpack-maintainers/recpack/-/blob/master/LICENSE
# Author:
#   Lien Michiels
#   Robin Verachtert

import json

import click

from recfold.config import CrossfoldConfig
from recfold.crossfold import generate_plan
from recfold.exceptions import ConfigurationError


@click.command()
@click.option("-c", "--config", type=click.File("r"), required=True)
@click.option("--output-dir", "output_dir", type=click.Path(file_okay=False), default=None, help="Overrides the configured output directory.")
@click.option("--format", "output_format", type=click.Choice(["json", "table"]), default="json", show_default=True)
@click.option("--output_file", type=click.File("w"), default="-", show_default=True)
def plan_crossfold(config, output_dir, output_format, output_file):
    """Print the partitions a crossfold configuration will produce."""

    # Construct config obj, will also validate the config.
    try:
        spec = CrossfoldConfig(config).get_spec()
        if output_dir is not None:
            spec.output_dir = output_dir

        plan = generate_plan(spec)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    if output_format == "table":
        output_file.write(plan.to_dataframe().to_string(index=False))
        output_file.write("\n")
    else:
        json.dump(
            {"manifest": str(plan.manifest_path), "data_sets": plan.to_manifest()},
            output_file,
            indent=4,
        )
        output_file.write("\n")


if __name__ == "__main__":
    plan_crossfold()
