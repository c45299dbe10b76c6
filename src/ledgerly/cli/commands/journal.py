"""Journal entry commands."""

import click
from ledgerly.cli.date_filters import parse_cli_date
from ledgerly.cli.error_handling import handle_domain_error
from ledgerly.cli.format import format_amount
from ledgerly.domain.errors import DomainError
from ledgerly.domain.ledger_service import JournalService
from ledgerly.utils.amount_parser import parse_journal_line


@click.group()
def journal_group():
    """Manage journal entries."""
    pass


@journal_group.command("add")
@click.option("--date", "entry_date", help="Entry date (YYYY-MM-DD or 'today'); defaults to today")
@click.option("--description", "-d", required=True, help="Entry description")
@click.option(
    "--line",
    "-l",
    "lines",
    multiple=True,
    required=True,
    help="Line as CODE:DEBIT[:CREDIT], e.g. 1110:100 or 4110::100",
)
@click.option("--reference", help="Reference key; replaces entries with the same reference")
@click.pass_context
def add_entry(ctx, entry_date: str | None, description: str, lines: tuple[str, ...], reference: str | None):
    """Post a manual journal entry.

    Examples:
        ledgerly journal add -d "Owner investment" -l 1110:5000 -l 3110::5000
        ledgerly journal add --date 2024-03-01 -d "Rent" -l 6110:1200 -l 1110::1200
    """
    service = JournalService(ctx.obj["db"])
    parsed_date = parse_cli_date(ctx, entry_date, "date")

    try:
        parsed_lines = [parse_journal_line(spec) for spec in lines]
        entry = service.create_entry(
            date=parsed_date,
            description=description.strip(),
            lines=parsed_lines,
            reference=reference,
        )
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Posted journal entry {entry.id} ({format_amount(entry.total_debit)})")


@journal_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'this month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option("--reference", help="Only entries with this reference")
@click.option("--verbose", "-v", is_flag=True, help="Show line items and metadata")
@click.pass_context
def list_entries(ctx, start_date: str | None, end_date: str | None, reference: str | None, verbose: bool):
    """List journal entries in chronological order."""
    service = JournalService(ctx.obj["db"])
    start = parse_cli_date(ctx, start_date, "start date")
    end = parse_cli_date(ctx, end_date, "end date")

    entries = service.list_entries(start_date=start, end_date=end, reference=reference)
    if not entries:
        click.echo("No journal entries found.")
        return

    click.echo(f"\nFound {len(entries)} journal entr{'y' if len(entries) == 1 else 'ies'}:")
    click.echo("-" * 100)
    click.echo(f"{'Date':<12} {'Description':<40} {'Reference':<28} {'Amount':>16}")
    click.echo("-" * 100)
    for entry in entries:
        click.echo(
            f"{str(entry.date):<12} {entry.description[:40]:<40} "
            f"{(entry.reference or '')[:28]:<28} {format_amount(entry.total_debit):>16}"
        )
        if verbose:
            click.echo(f"    ID: {entry.id}")
            for line in entry.lines:
                debit = format_amount(line.debit) if line.debit else ""
                credit = format_amount(line.credit) if line.credit else ""
                click.echo(f"    {line.account_code:<10} {debit:>16} {credit:>16}")
            if entry.metadata:
                click.echo(f"    Metadata: {dict(entry.metadata)}")


@journal_group.command("delete")
@click.argument("target")
@click.pass_context
def delete_entry(ctx, target: str):
    """Delete journal entries by id or reference.

    Examples:
        ledgerly journal delete journal-1709251200000-a1b2c3
        ledgerly journal delete sale:42:revenue
    """
    service = JournalService(ctx.obj["db"])
    try:
        deleted = service.delete_entry(target)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    for entry in deleted:
        click.echo(f"Deleted journal entry {entry.id}: {entry.description}")


def register_commands(cli):
    """Register journal commands with main CLI."""
    cli.add_command(journal_group, name="journal")
