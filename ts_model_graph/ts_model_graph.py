import json
import logging
from pathlib import Path

import click

from .config import ModelGraphConfig, OutputFormat
from .generator import ModelGraphGenerator


@click.command()
@click.option("--name", "-n", default=None, type=str)
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option(
    "--format",
    "-f",
    "output_format",
    default=None,
    type=click.Choice([f.value for f in OutputFormat]),
    help="Output format (overrides the config file)",
)
@click.option("--workers", "-w", default=None, type=click.IntRange(min=1), help="Threads used to classify declarations")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log the build passes")
@click.argument("path", default=None, type=click.Path(exists=True, resolve_path=True))
@click.argument("output", default=None, type=click.Path(resolve_path=True))
def ts_model_graph(name, config, output_format, workers, verbose, path, output):
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    with open(path) as f:
        declarations = json.load(f)

    if config is not None:
        with open(config) as f:
            config = json.load(f)
            config = ModelGraphConfig.from_dict(config)
    else:
        config = ModelGraphConfig()

    # CLI flags override the config file
    if workers is not None:
        config.workers = workers

    if name is None:
        name = Path(path).stem

    generator = ModelGraphGenerator(name, declarations, config, output_format)

    out = generator.generate()
    with open(output, "w") as f:
        f.write(out)
