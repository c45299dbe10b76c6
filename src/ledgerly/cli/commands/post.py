"""Commands that post business events to the journal."""

import json
from pathlib import Path

import click
from ledgerly.cli.date_filters import parse_cli_date
from ledgerly.cli.format import format_amount
from ledgerly.domain.ledger_service import JournalService
from ledgerly.domain.posting import PostingResult


def _load_json(ctx, path: str | None, default=None):
    """Load a JSON document, exiting with an error message on failure."""
    if path is None:
        return default
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        click.echo(f"Error: Could not read {path}: {e}", err=True)
        ctx.exit(1)


def _as_list(value) -> list:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _report_result(ctx, result: PostingResult) -> None:
    """Print posted entries and errors; exit non-zero when nothing posted and errors occurred."""
    for entry in result.entries:
        click.echo(
            f"Posted {entry.reference or entry.id}: {entry.description} "
            f"({format_amount(entry.total_debit)})"
        )
    for error in result.errors:
        click.echo(f"Error: {error.reference or 'unknown'}: {error.message}", err=True)
    if not result.entries and not result.errors:
        click.echo("Nothing to post.")
    if result.errors and not result.entries:
        ctx.exit(1)


@click.group()
def post_group():
    """Post sales, expenses and purchase orders."""
    pass


@post_group.command("sale")
@click.argument("sale_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--products", "products_file", type=click.Path(exists=True, dir_okay=False), help="JSON list of products (id, name, cost)")
@click.option("--customers", "customers_file", type=click.Path(exists=True, dir_okay=False), help="JSON list of customers (id, name)")
@click.pass_context
def post_sale(ctx, sale_file: str, products_file: str | None, customers_file: str | None):
    """Post a sale from a JSON file.

    Posting the same sale id again replaces its earlier entries.

    Examples:
        ledgerly post sale sale.json --products products.json
    """
    service = JournalService(ctx.obj["db"])
    sale = _load_json(ctx, sale_file)
    products = _as_list(_load_json(ctx, products_file, []))
    customers = _as_list(_load_json(ctx, customers_file, []))
    _report_result(ctx, service.post_sale(sale, products, customers))


@post_group.command("expense")
@click.argument("expense_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def post_expense(ctx, expense_file: str):
    """Post an expense from a JSON file."""
    service = JournalService(ctx.obj["db"])
    _report_result(ctx, service.post_expense(_load_json(ctx, expense_file)))


@post_group.command("purchase-order")
@click.argument("po_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def post_purchase_order(ctx, po_file: str):
    """Post receipt of a purchase order from a JSON file."""
    service = JournalService(ctx.obj["db"])
    _report_result(ctx, service.post_purchase_order(_load_json(ctx, po_file)))


@post_group.command("po-payment")
@click.argument("po_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--date", "payment_date", help="Payment date; defaults to today")
@click.option("--account", "payment_account", help="Account the payment is drawn from; defaults to cash")
@click.pass_context
def post_po_payment(ctx, po_file: str, payment_date: str | None, payment_account: str | None):
    """Post payment of a received purchase order."""
    service = JournalService(ctx.obj["db"])
    parsed_date = parse_cli_date(ctx, payment_date, "payment date")
    result = service.post_purchase_order_payment(
        _load_json(ctx, po_file), payment_date=parsed_date, payment_account_code=payment_account
    )
    _report_result(ctx, result)


@post_group.command("seed")
@click.argument("seed_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def seed(ctx, seed_file: str):
    """Post historical records from a JSON file.

    The file holds an object with optional "sales", "expenses", "products"
    and "customers" lists. Records that fail are reported and skipped.
    """
    service = JournalService(ctx.obj["db"])
    data = _load_json(ctx, seed_file)
    if not isinstance(data, dict):
        click.echo("Error: Seed file must contain a JSON object", err=True)
        ctx.exit(1)
    result = service.seed(
        sales=_as_list(data.get("sales")),
        expenses=_as_list(data.get("expenses")),
        products=_as_list(data.get("products")),
        customers=_as_list(data.get("customers")),
    )
    _report_result(ctx, result)


@post_group.command("remove-sale")
@click.argument("sale_id")
@click.pass_context
def remove_sale(ctx, sale_id: str):
    """Remove the revenue and COGS entries of a sale."""
    service = JournalService(ctx.obj["db"])
    before = len(service.get_journal())
    after = len(service.remove_sale(sale_id))
    click.echo(f"Removed {before - after} entries for sale {sale_id}")


@post_group.command("remove-expense")
@click.argument("expense_id")
@click.pass_context
def remove_expense(ctx, expense_id: str):
    """Remove the entry of an expense."""
    service = JournalService(ctx.obj["db"])
    before = len(service.get_journal())
    after = len(service.remove_expense(expense_id))
    click.echo(f"Removed {before - after} entries for expense {expense_id}")


def register_commands(cli):
    """Register posting commands with main CLI."""
    cli.add_command(post_group, name="post")
