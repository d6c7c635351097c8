"""
Command-line interface for the Edge Similarity Engine.

Provides commands for annotating graph files with per-edge
similarity values.
"""

import sys
from pathlib import Path

import click

from edgesim.utils.logging_config import setup_logging
from edgesim.utils.validation import validate_graph_path, validate_output_path


@click.group()
@click.version_option(version="1.0.0")
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose output"
)
@click.option(
    "--log-file",
    type=click.Path(),
    help="Path to log file"
)
@click.option(
    "--config", "-c",
    "config_file",
    type=click.Path(),
    help="Path to a configuration file"
)
@click.pass_context
def cli(ctx, verbose, log_file, config_file):
    """
    Edge Similarity Engine

    Compute the similarity of connected nodes from the feature
    vectors they carry.
    """
    from edgesim.core.config import Config

    ctx.ensure_object(dict)

    if config_file:
        try:
            Config.load_from_file(config_file)
        except (OSError, ValueError, TypeError) as e:
            click.echo(f"Error: could not load configuration: {e}", err=True)
            sys.exit(1)
    config = Config.load_from_env()

    verbose = verbose or config.verbose
    ctx.obj["verbose"] = verbose

    log_level = "DEBUG" if verbose else "INFO"
    setup_logging(level=log_level, log_file=Path(log_file) if log_file else None)


@cli.command()
@click.argument("graph")
@click.option(
    "--output", "-o",
    type=click.Path(),
    help="Output graph file (default: overwrite GRAPH)"
)
@click.option(
    "--source",
    help="Node property holding the feature vectors"
)
@click.option(
    "--distance-function",
    help="Distance measure (see list-functions)"
)
@click.option(
    "--similarity-function",
    help="Similarity measure (see list-functions)"
)
@click.option(
    "--normalization-factor",
    type=float,
    help="Normalization factor of the Exponential similarity"
)
@click.option(
    "--result",
    help="Edge property receiving the similarity"
)
@click.option(
    "--strict-dimensions/--no-strict-dimensions",
    default=None,
    help="Reject feature vectors of differing lengths"
)
@click.pass_context
def compute(
    ctx,
    graph,
    output,
    source,
    distance_function,
    similarity_function,
    normalization_factor,
    result,
    strict_dimensions,
):
    """
    Compute the similarity of every edge of a graph file.

    GRAPH is a JSON graph file, optionally gzip-compressed (.gz).

    Examples:

        edgesim compute graph.json

        edgesim compute graph.json -o out.json --similarity-function Normalized

        edgesim compute graph.json.gz --similarity-function Exponential --normalization-factor 2.5
    """
    is_valid, error = validate_graph_path(graph)
    if not is_valid:
        click.echo(f"Error: {error}", err=True)
        sys.exit(1)

    if output:
        is_valid, error = validate_output_path(output)
        if not is_valid:
            click.echo(f"Error: {error}", err=True)
            sys.exit(1)

    from edgesim.core.config import Config

    config = Config.get()
    overrides = {
        "source": source,
        "distance_function": distance_function,
        "similarity_function": similarity_function,
        "normalization_factor": normalization_factor,
        "result": result,
        "strict_dimensions": strict_dimensions,
    }
    for key, value in overrides.items():
        if value is not None:
            setattr(config.similarity, key, value)

    from edgesim.engine import SimilarityEngine

    try:
        engine = SimilarityEngine(config)
        outcome = engine.process_file(Path(graph), Path(output) if output else None)
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        if ctx.obj.get("verbose"):
            import traceback
            traceback.print_exc()
        sys.exit(1)

    summary = outcome["summary"]
    metrics = outcome["metrics"]

    click.echo("=" * 60)
    click.echo("SIMILARITY RESULTS")
    click.echo("=" * 60)
    click.echo(f"Similarity function: {outcome['similarity_function']}")
    click.echo(f"Result property:     {outcome['result']}")
    click.echo(f"Edges annotated:     {summary['count']}")
    if summary["count"]:
        click.echo(f"Min similarity:      {summary['min']:.4f}")
        click.echo(f"Max similarity:      {summary['max']:.4f}")
        click.echo(f"Mean similarity:     {summary['mean']:.4f}")
    if "d_max" in metrics:
        click.echo(f"Max distance:        {metrics['d_max']:.4f}")
    if metrics.get("truncated_edges"):
        click.echo(f"Truncated edges:     {metrics['truncated_edges']}")
    click.echo("=" * 60)
    click.echo(f"\nGraph saved to: {outcome['output_path']}")


@cli.command()
@click.option(
    "--output", "-o",
    type=click.Path(),
    default="config.json",
    help="Output path for configuration file"
)
def init(output):
    """
    Initialize configuration file.

    Creates a default configuration file that can be customized.
    """
    from edgesim.core.config import Config, EngineConfig

    Config.save_to_file(output, EngineConfig())
    click.echo(f"Configuration saved to: {output}")


@cli.command()
def list_functions():
    """List supported distance and similarity functions."""
    from edgesim.similarity.functions import DistanceFunction, SimilarityFunction

    click.echo("Distance functions:")
    click.echo("-" * 40)
    for name in DistanceFunction.names():
        click.echo(f"  {name}")

    click.echo("Similarity functions:")
    click.echo("-" * 40)
    for name in SimilarityFunction.names():
        click.echo(f"  {name}")


def main():
    """Entry point for the CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
