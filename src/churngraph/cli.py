from pathlib import Path
from typing import Annotated, Literal

import cyclopts
from loguru import logger

from churngraph.config import print_config, resolve_profile, with_overrides
from churngraph.dataset import load_customers
from churngraph.errors import ConfigError, DatasetLoadError
from churngraph.logging import (
    print_centrality_table,
    print_error,
    print_group_result,
    print_success,
    setup_logging,
)
from churngraph.pipeline import analyze as run_analysis

app = cyclopts.App(
    name="churngraph",
    help="Find central customers and the traits they share, split by churn status",
)


@app.meta.default
def launcher(
    *tokens: str,
    verbose: Annotated[
        bool, cyclopts.Parameter(name=["--verbose", "-v"], help="Debug logging")
    ] = False,
) -> None:
    """
    CLI entry point that configures logging and dispatches commands.

    Args:
        *tokens: Command tokens to execute
        verbose: Enable debug logging. Defaults to False.
    """
    setup_logging(verbose=verbose)
    app(tokens)


@app.command
def analyze(
    data: Annotated[str, cyclopts.Parameter(help="Path to the customer CSV file")],
    config: Annotated[
        str | None,
        cyclopts.Parameter(name="--config", help="Path to churngraph.yaml"),
    ] = None,
    profile: Annotated[
        str | None,
        cyclopts.Parameter(name="--profile", help="Settings profile to use"),
    ] = None,
    limit: Annotated[
        int | None,
        cyclopts.Parameter(name="--limit", help="Maximum number of records to read"),
    ] = None,
    threshold: Annotated[
        int | None,
        cyclopts.Parameter(name="--threshold", help="Shared attributes needed for an edge"),
    ] = None,
    multiplier: Annotated[
        float | None,
        cyclopts.Parameter(name="--multiplier", help="Mean centrality multiplier"),
    ] = None,
    top_traits: Annotated[
        int | None,
        cyclopts.Parameter(name="--top-traits", help="Traits kept per central customer"),
    ] = None,
    bucket_mode: Annotated[
        Literal["literal", "range"] | None,
        cyclopts.Parameter(name="--bucket-mode", help="How bucketed attributes match"),
    ] = None,
    graph_scope: Annotated[
        Literal["partition", "shared"] | None,
        cyclopts.Parameter(name="--graph-scope", help="One graph per group or one shared graph"),
    ] = None,
    credit_fields: Annotated[
        bool,
        cyclopts.Parameter(name="--credit-fields", help="Include credit limit and balance"),
    ] = False,
    show_scores: Annotated[
        bool,
        cyclopts.Parameter(name="--show-scores", help="Print top centrality scores"),
    ] = False,
):
    """
    Analyze a customer dataset.

    Builds the similarity graph, selects customers with high closeness
    centrality in each churn group and prints the traits they share most
    with their neighbors.

    Args:
        data: Path to the customer CSV file.
        config: Path to churngraph.yaml. Defaults to ./churngraph.yaml.
        profile: Settings profile. Defaults to env var or config default.
        limit: Maximum number of records. Defaults to the profile value.
        threshold: Shared attributes needed for an edge.
        multiplier: Mean centrality multiplier for selection.
        top_traits: Traits kept per central customer.
        bucket_mode: "literal" or "range".
        graph_scope: "partition" or "shared".
        credit_fields: Include credit limit and balance. Defaults to False.
        show_scores: Print top centrality scores. Defaults to False.

    Raises:
        SystemExit: If loading settings or data fails
    """
    try:
        settings, source = resolve_profile(profile, Path(config) if config else None)
        settings = with_overrides(
            settings,
            max_records=limit,
            neighbor_threshold=threshold,
            centrality_multiplier=multiplier,
            top_traits=top_traits,
            bucket_mode=bucket_mode,
            graph_scope=graph_scope,
            include_credit_fields=True if credit_fields else None,
        )
        logger.debug(f"Using settings from {source}")

        customers = load_customers(
            data,
            limit=settings.max_records,
            include_credit_fields=settings.include_credit_fields,
        )
    except (ConfigError, DatasetLoadError) as e:
        print_error(str(e))
        raise SystemExit(1)

    result = run_analysis(customers, settings)

    for group in result.groups:
        if show_scores:
            print_centrality_table(group)
        print_group_result(group)

    print_success(f"Analyzed {len(customers)} customers")


@app.command(name="config")
def show_config(
    config: Annotated[
        str | None,
        cyclopts.Parameter(name="--config", help="Path to churngraph.yaml"),
    ] = None,
    profile: Annotated[
        str | None,
        cyclopts.Parameter(name="--profile", help="Settings profile to show"),
    ] = None,
):
    """
    Display the resolved analysis settings.

    Raises:
        SystemExit: If the configuration is invalid
    """
    try:
        settings, source = resolve_profile(profile, Path(config) if config else None)
    except ConfigError as e:
        print_error(str(e))
        raise SystemExit(1)

    print_config(settings, source)
