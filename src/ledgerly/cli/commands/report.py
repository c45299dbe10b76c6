"""Financial report commands."""

import click
from ledgerly.cli.account_resolution import resolve_account_or_exit
from ledgerly.cli.date_filters import parse_cli_date, period_options, resolve_cli_date_range
from ledgerly.cli.error_handling import handle_domain_error
from ledgerly.cli.format import format_amount, format_row
from ledgerly.domain.account import ChartOfAccountsService
from ledgerly.domain.errors import DomainError
from ledgerly.domain.reports import ReportService


@click.group()
def report_group():
    """Trial balance, profit and loss, balance sheet and account ledgers."""
    pass


@report_group.command("trial-balance")
@click.pass_context
def trial_balance(ctx):
    """Show every account with a nonzero balance."""
    service = ReportService(ctx.obj["db"])
    tb = service.trial_balance()

    click.echo("\nTrial Balance")
    click.echo("=" * 90)
    click.echo(f"{'Code':<8} {'Account':<40} {'Debit':>20} {'Credit':>20}")
    click.echo("-" * 90)
    for row in tb.rows:
        debit = format_amount(row.debit) if row.debit else ""
        credit = format_amount(row.credit) if row.credit else ""
        click.echo(f"{row.code:<8} {row.name[:40]:<40} {debit:>20} {credit:>20}")
    click.echo("-" * 90)
    click.echo(
        f"{'':<8} {'Total':<40} {format_amount(tb.total_debit):>20} "
        f"{format_amount(tb.total_credit):>20}"
    )
    if not tb.is_balanced:
        click.echo("\nWarning: trial balance does not balance", err=True)


@report_group.command("pnl")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@period_options
@click.pass_context
def profit_and_loss(
    ctx,
    start_date: str | None,
    end_date: str | None,
    this_month: bool,
    this_year: bool,
    last_month: bool,
    last_year: bool,
):
    """Show the profit and loss statement.

    Without dates the statement covers the whole journal.

    Examples:
        ledgerly report pnl --this-year
        ledgerly report pnl --start-date 2024-01-01 --end-date 2024-03-31
    """
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags={
            "this-month": this_month,
            "this-year": this_year,
            "last-month": last_month,
            "last-year": last_year,
        },
    )
    pnl = ReportService(ctx.obj["db"]).profit_and_loss(start_date=start, end_date=end)

    period = f"{start or 'beginning'} to {end or 'latest'}"
    click.echo(f"\nProfit and Loss ({period})")
    click.echo("=" * 71)
    click.echo(format_row("Revenue", pnl.total_revenue))
    click.echo(format_row("Less: Sales discounts", pnl.total_discounts, indent=1))
    click.echo(format_row("Net revenue", pnl.net_revenue))
    click.echo(format_row("Cost of goods sold", pnl.total_cogs))
    click.echo("-" * 71)
    click.echo(format_row("Gross profit", pnl.gross_profit))
    click.echo("\nOperating expenses")
    for name, amount in sorted(pnl.operating_expenses.items()):
        click.echo(format_row(name, amount, indent=1))
    click.echo(format_row("Total operating expenses", pnl.total_operating_expenses))
    click.echo("=" * 71)
    click.echo(format_row("Net income", pnl.net_income))


@report_group.command("balance-sheet")
@click.option("--as-of", help="Report date (YYYY-MM-DD or relative); defaults to today")
@click.pass_context
def balance_sheet(ctx, as_of: str | None):
    """Show assets, liabilities and equity as of a date."""
    as_of_date = parse_cli_date(ctx, as_of, "as-of date")
    sheet = ReportService(ctx.obj["db"]).balance_sheet(as_of=as_of_date)

    click.echo(f"\nBalance Sheet as of {sheet.as_of}")
    click.echo("=" * 71)
    for title, lines, total in (
        ("Assets", sheet.assets, sheet.totals.assets),
        ("Liabilities", sheet.liabilities, sheet.totals.liabilities),
        ("Equity", sheet.equity, sheet.totals.equity),
    ):
        click.echo(title)
        for line in lines:
            click.echo(format_row(f"{line.code} {line.name}", line.balance, indent=1))
        click.echo(format_row(f"Total {title.lower()}", total))
        click.echo("")
    click.echo("-" * 71)
    click.echo(format_row("Total liabilities and equity", sheet.totals.liabilities_and_equity))
    if not sheet.totals.is_balanced:
        click.echo("\nWarning: balance sheet does not balance", err=True)


@report_group.command("ledger")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def ledger(ctx, account: str):
    """Show the running-balance ledger of one account.

    ACCOUNT can be an account code or name.
    """
    db = ctx.obj["db"]
    code = resolve_account_or_exit(ctx, ChartOfAccountsService(db), account)
    try:
        detail = ReportService(db).ledger_account(code)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"\nLedger: {detail.account.code} {detail.account.name}")
    click.echo("-" * 110)
    click.echo(f"{'Date':<12} {'Description':<40} {'Debit':>18} {'Credit':>18} {'Balance':>18}")
    click.echo("-" * 110)
    for txn in detail.transactions:
        debit = format_amount(txn.debit) if txn.debit else ""
        credit = format_amount(txn.credit) if txn.credit else ""
        click.echo(
            f"{str(txn.date):<12} {txn.description[:40]:<40} {debit:>18} {credit:>18} "
            f"{format_amount(txn.balance):>18}"
        )
    click.echo("-" * 110)
    click.echo(
        f"{'':<12} {'Total':<40} {format_amount(detail.total_debit):>18} "
        f"{format_amount(detail.total_credit):>18} "
        f"{format_amount(abs(detail.ending_balance)):>18} {detail.balance_type.value}"
    )


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
