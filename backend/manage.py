"""Management commands for the barbershop SQL backend."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

import click

from barbershop.core import config
from barbershop.core.logging_config import setup_logging
from barbershop.db.session import SessionLocal, create_tables
from barbershop.repositories import SqlAlchemyStore
from barbershop.schemas import ServiceResponse

logger = logging.getLogger(__name__)


@click.group()
def cli() -> None:
    """Entry point for management commands."""
    setup_logging(
        log_level=config.LOG_LEVEL,
        enable_sql_echo=config.SQL_ECHO,
        log_to_file=config.LOG_TO_FILE,
        use_json_format=config.LOG_JSON,
    )
    config.log_storage_config()


@cli.command("create-tables")
def create_tables_command() -> None:
    """Create the clients, services and appointments tables."""
    create_tables()
    click.echo("Tables created.")


@cli.command("list-services")
def list_services() -> None:
    """Print the price list."""
    session = SessionLocal()
    try:
        services = [
            ServiceResponse.from_domain(s)
            for s in SqlAlchemyStore(session).list_services()
        ]
    finally:
        session.close()

    if not services:
        click.echo("No services registered.")
        return
    for service in services:
        status = "" if service.is_active else " [inactive]"
        click.echo(f"{service.name} - ₡{service.price:,.2f}{status}")


@cli.command("list-appointments")
@click.option(
    "--day",
    "day",
    default=None,
    type=click.DateTime(formats=["%Y-%m-%d"]),
    help="Only show appointments on this calendar day (YYYY-MM-DD).",
)
def list_appointments(day: Optional[datetime]) -> None:
    """Print appointments in chronological order."""
    session = SessionLocal()
    try:
        store = SqlAlchemyStore(session)
        if day is not None:
            appointments = store.list_appointments_on_day(day.date())
        else:
            appointments = store.list_appointments()
    finally:
        session.close()

    if not appointments:
        click.echo("No appointments found.")
        return
    for appointment in appointments:
        click.echo(f"#{appointment.id} {appointment}")


if __name__ == "__main__":
    cli()
