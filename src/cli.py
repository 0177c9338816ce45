# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""SchoolDesk command-line interface.

Usage:
    schooldesk login EMAIL PASSWORD [--tenant TENANT]
    schooldesk logout
    schooldesk years list [--school ID]
    schooldesk years add NAME START END [--school ID] [--branch ID] [--current]
    schooldesk years set-current YEAR_ID [--school ID]
    schooldesk years delete YEAR_ID [--school ID]
    schooldesk fees status [--status STATUS] [--search TEXT]
    schooldesk fees structure
    schooldesk admin dashboard

Rows that come from bundled demo data are labelled as such.
"""

import argparse
import asyncio
import logging
import sys
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass

import httpx
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from src.core.config.settings import Settings, get_settings
from src.domains.academic_year import (
    AcademicYearForm,
    AcademicYearService,
    AcademicYearServiceError,
)
from src.domains.auth import AuthenticationError, AuthService
from src.domains.fees import FeeCollectionService, FeeServiceError
from src.domains.super_admin import SuperAdminService, SuperAdminServiceError
from src.infrastructure.api import ApiClient, ApiError, DataFetcher, FetchResult
from src.infrastructure.session import FileSessionStore, Session, SessionStore
from src.models.fees import FeePaymentStatus
from src.utils.datetime import format_date
from src.utils.logging import bind_context, clear_context, setup_logging

logger = logging.getLogger(__name__)

CLI_ERRORS = (
    ApiError,
    AuthenticationError,
    AcademicYearServiceError,
    FeeServiceError,
    SuperAdminServiceError,
)


class CommandError(Exception):
    """Raised for invalid command usage detected after parsing."""

    pass


@dataclass
class CliContext:
    """Collaborators shared by every command."""

    settings: Settings
    console: Console
    session: Session
    api: ApiClient
    fetcher: DataFetcher


@asynccontextmanager
async def open_context(
    settings: Settings,
    console: Console,
    store: SessionStore | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AsyncIterator[CliContext]:
    """Build the session, API client and fetcher for one invocation."""
    session = Session(store or FileSessionStore(settings.session.path))
    async with ApiClient(settings.backend_api, session, transport=transport) as api:
        yield CliContext(
            settings=settings,
            console=console,
            session=session,
            api=api,
            fetcher=DataFetcher(settings.fallback_enabled),
        )


def _school_id(ctx: CliContext, args: argparse.Namespace) -> str:
    school_id = getattr(args, "school", None) or ctx.session.school_id
    if not school_id:
        raise CommandError("No school selected; log in or pass --school")
    return school_id


def _print_source(ctx: CliContext, result: FetchResult) -> None:
    if result.is_fallback:
        ctx.console.print(
            f"[yellow]Showing demo data, the backend request failed: {result.error}[/yellow]"
        )


def _caption(result: FetchResult) -> str | None:
    return "demo data" if result.is_fallback else None


# Auth


async def cmd_login(ctx: CliContext, args: argparse.Namespace) -> int:
    user = await AuthService(ctx.api, ctx.session).login(args.email, args.password, args.tenant)
    ctx.console.print(f"[green]Signed in as {user.display_name} ({user.role})[/green]")
    return 0


async def cmd_logout(ctx: CliContext, args: argparse.Namespace) -> int:
    AuthService(ctx.api, ctx.session).logout()
    ctx.console.print("Signed out")
    return 0


# Academic years


async def cmd_years_list(ctx: CliContext, args: argparse.Namespace) -> int:
    service = AcademicYearService(ctx.api, ctx.fetcher)
    result = await service.list_academic_years(_school_id(ctx, args))
    _print_source(ctx, result)

    table = Table(title="Academic Years", caption=_caption(result))
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Start")
    table.add_column("End")
    table.add_column("Active")
    table.add_column("Current")

    for year in result.data:
        table.add_row(
            year.id,
            year.name,
            format_date(year.start_date),
            format_date(year.end_date),
            "yes" if year.is_active else "no",
            "[green]current[/green]" if year.is_current else "",
        )

    ctx.console.print(table)
    return 0


async def cmd_years_add(ctx: CliContext, args: argparse.Namespace) -> int:
    service = AcademicYearService(ctx.api, ctx.fetcher)
    form = AcademicYearForm(service, school_id=_school_id(ctx, args))
    form.change("name", args.name)
    form.change("start_date", args.start)
    form.change("end_date", args.end)
    form.change("branch_id", args.branch or "")
    form.change("description", args.description or "")
    form.change("is_current", args.current)

    outcome = await form.submit()
    if outcome.success:
        ctx.console.print(f"[green]{outcome.message}[/green]")
        return 0

    ctx.console.print(f"[red]{outcome.message}[/red]")
    for field, issue in form.errors.items():
        ctx.console.print(f"  [red]{field}[/red]: {issue.message}")
    return 1


async def cmd_years_set_current(ctx: CliContext, args: argparse.Namespace) -> int:
    service = AcademicYearService(ctx.api, ctx.fetcher)
    year = await service.set_current_year(_school_id(ctx, args), args.year_id)
    ctx.console.print(f"[green]{year.name} is now the current academic year[/green]")
    return 0


async def cmd_years_delete(ctx: CliContext, args: argparse.Namespace) -> int:
    service = AcademicYearService(ctx.api, ctx.fetcher)
    await service.delete_academic_year(_school_id(ctx, args), args.year_id)
    ctx.console.print(f"Deleted academic year {args.year_id}")
    return 0


# Fees


async def cmd_fees_status(ctx: CliContext, args: argparse.Namespace) -> int:
    service = FeeCollectionService(ctx.api, ctx.fetcher)
    status = FeePaymentStatus(args.status) if args.status else None
    result = await service.list_fee_status(status)
    _print_source(ctx, result)

    students = service.search(result.data, args.search or "")
    table = Table(title="Student Fee Status", caption=_caption(result))
    table.add_column("Admission No.", style="dim")
    table.add_column("Student", style="cyan")
    table.add_column("Class")
    table.add_column("Total", justify="right")
    table.add_column("Paid", justify="right", style="green")
    table.add_column("Pending", justify="right", style="red")
    table.add_column("Status")

    for student in students:
        fee = student.fee_status
        class_name = f"{student.class_}-{student.section}" if student.section else student.class_
        table.add_row(
            student.admission_number,
            student.full_name,
            class_name,
            f"{fee.total_amount:,.2f}",
            f"{fee.paid_amount:,.2f}",
            f"{fee.pending_amount:,.2f}",
            fee.status.value,
        )

    ctx.console.print(table)
    totals = service.totals(students)
    ctx.console.print(
        f"Collected [green]{totals.collected:,.2f}[/green] of {totals.total:,.2f}, "
        f"pending [red]{totals.pending:,.2f}[/red]"
    )
    return 0


async def cmd_fees_structure(ctx: CliContext, args: argparse.Namespace) -> int:
    service = FeeCollectionService(ctx.api, ctx.fetcher)
    result = await service.get_fee_structure()
    _print_source(ctx, result)

    table = Table(title="Fee Structure", caption=_caption(result))
    table.add_column("Fee", style="cyan")
    table.add_column("Amount", justify="right")
    table.add_column("Frequency")
    table.add_column("Mandatory")

    for item in result.data:
        table.add_row(
            item.name,
            f"{item.amount:,.2f}",
            item.type.value,
            "yes" if item.mandatory else "no",
        )

    ctx.console.print(table)
    return 0


# Super admin


async def cmd_admin_dashboard(ctx: CliContext, args: argparse.Namespace) -> int:
    service = SuperAdminService(ctx.api, ctx.fetcher)
    result = await service.get_dashboard()
    _print_source(ctx, result)
    overview = result.data.analytics.overview

    table = Table(title="Platform Overview", caption=_caption(result))
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Schools", str(overview.total_schools))
    table.add_row("Active schools", str(overview.active_schools))
    table.add_row("Users", str(overview.total_users))
    table.add_row("Total revenue", f"{overview.total_revenue:,.2f}")
    table.add_row("Revenue this month", f"{overview.monthly_revenue:,.2f}")
    ctx.console.print(table)

    if result.data.recent_schools:
        schools = Table(title="Recent Schools")
        schools.add_column("Name", style="cyan")
        schools.add_column("Plan")
        schools.add_column("Status")
        for school in result.data.recent_schools:
            schools.add_row(school.name, school.plan or "", school.status or "")
        ctx.console.print(schools)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one sub-command per operation."""
    parser = argparse.ArgumentParser(
        prog="schooldesk",
        description="SchoolDesk school management client",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    login = commands.add_parser("login", help="Sign in and store the session")
    login.add_argument("email")
    login.add_argument("password")
    login.add_argument("--tenant", help="Tenant subdomain")
    login.set_defaults(handler=cmd_login)

    logout = commands.add_parser("logout", help="Forget the stored session")
    logout.set_defaults(handler=cmd_logout)

    years = commands.add_parser("years", help="Academic years").add_subparsers(
        dest="action", required=True
    )

    years_list = years.add_parser("list", help="List academic years")
    years_list.add_argument("--school", help="School id (defaults to the session school)")
    years_list.set_defaults(handler=cmd_years_list)

    years_add = years.add_parser("add", help="Create an academic year")
    years_add.add_argument("name", help="Name in YYYY-YY form, e.g. 2024-25")
    years_add.add_argument("start", help="Start date, YYYY-MM-DD")
    years_add.add_argument("end", help="End date, YYYY-MM-DD")
    years_add.add_argument("--school", help="School id (defaults to the session school)")
    years_add.add_argument("--branch", help="Branch id")
    years_add.add_argument("--description")
    years_add.add_argument("--current", action="store_true", help="Make it the current year")
    years_add.set_defaults(handler=cmd_years_add)

    years_current = years.add_parser("set-current", help="Make a year the current one")
    years_current.add_argument("year_id")
    years_current.add_argument("--school", help="School id (defaults to the session school)")
    years_current.set_defaults(handler=cmd_years_set_current)

    years_delete = years.add_parser("delete", help="Delete an academic year")
    years_delete.add_argument("year_id")
    years_delete.add_argument("--school", help="School id (defaults to the session school)")
    years_delete.set_defaults(handler=cmd_years_delete)

    fees = commands.add_parser("fees", help="Fee collection").add_subparsers(
        dest="action", required=True
    )

    fees_status = fees.add_parser("status", help="Students with their fee status")
    fees_status.add_argument("--status", choices=[s.value for s in FeePaymentStatus])
    fees_status.add_argument("--search", help="Filter by name or admission number")
    fees_status.set_defaults(handler=cmd_fees_status)

    fees_structure = fees.add_parser("structure", help="Collectable fee items")
    fees_structure.set_defaults(handler=cmd_fees_structure)

    admin = commands.add_parser("admin", help="Super-admin").add_subparsers(
        dest="action", required=True
    )
    admin_dashboard = admin.add_parser("dashboard", help="Platform overview")
    admin_dashboard.set_defaults(handler=cmd_admin_dashboard)

    return parser


async def run(
    args: argparse.Namespace,
    settings: Settings,
    console: Console,
    store: SessionStore | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> int:
    """Run a parsed command and map failures to an exit code.

    Returns:
        0 on success, 1 on a reported failure, 2 on a usage error.
    """
    bind_context(command=" ".join(filter(None, [args.command, getattr(args, "action", None)])))
    try:
        async with open_context(settings, console, store, transport) as ctx:
            try:
                return await args.handler(ctx, args)
            except CommandError as e:
                console.print(f"[red]{e}[/red]")
                return 2
            except CLI_ERRORS as e:
                logger.debug("Command %s failed", args.command, exc_info=True)
                console.print(f"[red]Error:[/red] {e}")
                return 1
    finally:
        clear_context()


def main(argv: Sequence[str] | None = None) -> int:
    """Console script entry point."""
    args = build_parser().parse_args(argv)

    try:
        settings = get_settings()
    except ValidationError as e:
        Console(stderr=True).print(f"[red]Invalid configuration:[/red] {e}")
        return 2

    setup_logging(settings)
    return asyncio.run(run(args, settings, Console()))


if __name__ == "__main__":
    sys.exit(main())
