"""Command-line entrypoint that starts ``notary-server``.

The command takes no options of its own. It reads ``ENV`` from the
environment, prints the startup and mode lines, and hands the process
over to ``notary-server --config-file <path>``.
"""

from __future__ import annotations

import click
from rich.console import Console
from rich.markup import escape

from notary_entrypoint import __version__
from notary_entrypoint.config import DEFAULT_CONFIG
from notary_entrypoint.environment import EnvironmentSnapshot
from notary_entrypoint.launcher import LaunchError, hand_off
from notary_entrypoint.mode import plan_launch
from notary_entrypoint.observability import (
    configure_logging,
    get_logger,
    log_context,
    resolve_log_level,
)

err_console = Console(stderr=True)
logger = get_logger(__name__)


@click.command(
    name="notary-entrypoint",
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.version_option(__version__, prog_name="notary-entrypoint")
@click.pass_context
def entrypoint(ctx: click.Context) -> None:
    """Start notary-server with the dev or prod configuration.

    Set ENV=dev to use the development configuration; any other value,
    or none, selects production.
    """
    snapshot = EnvironmentSnapshot.capture()
    configure_logging(
        resolve_log_level(
            snapshot.get(DEFAULT_CONFIG.log_level_variable),
            default=resolve_log_level(DEFAULT_CONFIG.default_log_level),
        )
    )

    plan = plan_launch(snapshot)
    logger.debug(
        "Selected %s mode with config %s", plan.mode.value, plan.config_path
    )
    for line in plan.lines:
        # Bytes go to the binary stream, bypassing the stdout encoding.
        click.echo(line)

    try:
        hand_off(plan)
    except LaunchError as exc:
        with log_context(executable=exc.executable, exit_code=exc.exit_code):
            logger.error("Launch failed: %s", exc)
        err_console.print(f"[red]{escape(str(exc))}[/red]", highlight=False)
        ctx.exit(exc.exit_code)


def main() -> None:
    entrypoint()


if __name__ == "__main__":
    main()
