from pathlib import Path

import click

from storefront.infrastructure.cli.order_commands import (
    order_create,
    order_list,
    order_revise,
    order_show,
)
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_show,
    product_update,
)
from storefront.infrastructure.config import ENV_PREFIX, LOG_FORMATS, LOG_LEVELS, Settings
from storefront.infrastructure.logging_config import configure_logging


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=Settings.data_dir,
    envvar=f"{ENV_PREFIX}DATA_DIR",
    show_default=True,
    show_envvar=True,
    help="Directory holding products.json and orders.json.",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=Settings.log_level,
    envvar=f"{ENV_PREFIX}LOG_LEVEL",
    show_default=True,
    show_envvar=True,
    help="Log verbosity.",
)
@click.option(
    "--log-format",
    type=click.Choice(LOG_FORMATS, case_sensitive=False),
    default=Settings.log_format,
    envvar=f"{ENV_PREFIX}LOG_FORMAT",
    show_default=True,
    show_envvar=True,
    help="Log renderer.",
)
@click.pass_context
def cli(ctx: click.Context, data_dir: Path, log_level: str, log_format: str) -> None:
    """Storefront: catalog stock and customer orders"""
    settings = Settings(
        data_dir=data_dir,
        log_level=log_level.upper(),
        log_format=log_format.lower(),
    )
    configure_logging(settings.log_level, settings.log_format)
    ctx.obj = settings


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Manage products."""


# Register subcommands
order.add_command(order_create)
order.add_command(order_list)
order.add_command(order_revise)
order.add_command(order_show)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_show)
product.add_command(product_update)
