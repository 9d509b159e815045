#!/usr/bin/env python3
"""
Main CLI Entry Point for Waybill Sync

Single-run interface meant to be invoked by an external periodic trigger
(cron, systemd timer). Each invocation runs exactly one reconciliation job.
"""

import asyncio
import dataclasses

import click

from ..core.config import get_config
from ..core.json_utils import format_json
from ..core.messaging import HttpMessageClient
from ..core.models import OrderStatus
from ..delivery.job import run_reconciliation


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    Waybill Sync - Shipping Invoice Reconciliation

    Matches new waybills with open marketplace orders and uploads them as invoices.
    """
    # Ensure context object exists
    ctx.ensure_object(dict)

    # Set environment if specified
    if config_env:
        import os

        os.environ["WAYBILL_SYNC_ENV"] = config_env

    # Configure debug logging if requested
    if debug:
        import logging
        import os

        os.environ["LOG_LEVEL"] = "DEBUG"
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("waybill_sync").setLevel(logging.DEBUG)

    # Store global options
    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["config"] = get_config()

    if verbose:
        click.echo(f"Environment: {ctx.obj['config'].environment.value}")
        click.echo(f"Store: {ctx.obj['config'].job.store_id or '(unset)'}")

    if debug:
        click.echo("Debug logging enabled")


@main.command()
@click.pass_context
def version(ctx: click.Context) -> None:
    """Show version information."""
    from waybill_sync import __author__, __version__

    click.echo(f"Waybill Sync v{__version__}")
    click.echo(f"Author: {__author__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration."""
    config_obj = ctx.obj["config"]

    click.echo("Current Configuration:")
    click.echo(format_json(config_obj.to_dict()))


@main.command()
@click.option(
    "--status",
    type=click.Choice([s.value for s in OrderStatus], case_sensitive=False),
    help="Order status filter (overrides ORDER_STATUS)",
)
@click.option("--lookback-days", type=click.IntRange(min=0), help="Trailing order window in days")
@click.option("--job-id", help="Use this job id instead of generating one")
@click.pass_context
def run(ctx: click.Context, status: str | None, lookback_days: int | None, job_id: str | None) -> None:
    """
    Run one reconciliation job.

    Examples:
      waybill-sync run
      waybill-sync run --status DEPARTURE --lookback-days 3
    """
    config_obj = ctx.obj["config"]

    job_config = config_obj.job
    if status:
        job_config = dataclasses.replace(job_config, order_status=OrderStatus(status.upper()))
    if lookback_days is not None:
        job_config = dataclasses.replace(job_config, lookback_days=lookback_days)

    client = HttpMessageClient(config_obj.messaging.queue_urls(), timeout=config_obj.messaging.timeout)
    result = asyncio.run(
        run_reconciliation(job_config, client, job_id=job_id, messaging=config_obj.messaging)
    )

    if ctx.obj.get("verbose", False):
        click.echo(f"Stage reached: {result.stage.value}")

    if not result.success:
        click.echo(f"❌ Job {result.job_id} failed: {result.error_message}", err=True)
        ctx.exit(1)

    if not result.uploaded:
        click.echo(
            f"✅ Job {result.job_id}: nothing to upload ({result.waybills} waybills, "
            f"{result.orders} orders, {result.matched} matched)"
        )
        return

    click.echo(
        f"✅ Job {result.job_id}: {result.waybills} waybills, {result.orders} orders, "
        f"{result.matched} matched, {result.succeeded} uploaded, {result.failed} failed"
    )


if __name__ == "__main__":
    main()
