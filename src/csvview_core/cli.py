"""csvview CLI -- Rich-formatted table browsing of delimited files from the terminal."""

import logging
from datetime import datetime

import click

logger = logging.getLogger(__name__)


def _load(ctx, file):
    """Load ``file`` with the group's settings, exiting with a message on failure."""
    from rich.console import Console

    from .errors import user_message
    from .ingestion import load_csv

    settings = ctx.obj["settings"]
    try:
        return load_csv(file, settings=settings)
    except FileNotFoundError as exc:
        Console().print(f"[red]Error: {exc}[/red]")
        raise SystemExit(1)
    except Exception as exc:
        logger.debug("Load failed", exc_info=True)
        Console().print(f"[red]Error: {user_message(exc)}[/red]")
        raise SystemExit(1)


def _apply_options(engine, filters, date, sort, desc, columns, page_size, page):
    """Apply view options to an engine in the same order a user would."""
    for spec in filters:
        if "=" not in spec:
            raise click.BadParameter(f"Expected COLUMN=TEXT, got {spec!r}", param_hint="--filter")
        column, text = spec.split("=", 1)
        engine.set_filter_text(column.strip(), text)

    if date:
        fmt = engine.state.date_format
        try:
            engine.set_date_filter(datetime.strptime(date, fmt).date())
        except ValueError:
            raise click.BadParameter(f"Date must match {fmt}", param_hint="--date")

    if desc and not sort:
        raise click.BadParameter("--desc requires --sort", param_hint="--desc")
    if sort:
        engine.set_sort(sort)
        if desc:
            engine.set_sort(sort)

    if columns:
        wanted = [c.strip() for c in columns.split(",") if c.strip()]
        for header in engine.dataset.headers:
            engine.set_column_visible(header, header in wanted)

    if page_size:
        engine.set_page_size(page_size)
    if page:
        engine.set_page(page)


_view_options = [
    click.option("--filter", "-f", "filters", multiple=True, help="Column filter: COLUMN=TEXT (repeatable)."),
    click.option("--date", "-d", default="", help="Exact date filter on the date column."),
    click.option("--sort", "-s", default="", help="Column to sort by."),
    click.option("--desc", is_flag=True, help="Sort descending."),
    click.option("--columns", "-c", default="", help="Comma-separated columns to show (default: all)."),
]


def view_options(func):
    for option in reversed(_view_options):
        func = option(func)
    return func


@click.group()
@click.version_option(package_name="csvview-core")
@click.option("--delimiter", default=None, help="Field delimiter (default ';' or $CSVVIEW_DELIMITER).")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx, delimiter, verbose):
    """csvview Core -- Parse delimited files and explore them as a table."""
    from .config import Settings

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        settings = Settings.from_env()
        if delimiter:
            settings = Settings(**{**settings.model_dump(), "delimiter": delimiter})
    except ValueError as exc:
        from rich.console import Console
        from rich.markup import escape

        logger.debug("Invalid settings", exc_info=True)
        Console().print(f"[red]Error: invalid settings: {escape(str(exc))}[/red]")
        raise SystemExit(1)
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


@cli.command()
@click.argument("file", type=click.Path())
@click.pass_context
def info(ctx, file):
    """Show headers and row count of a CSV file."""
    from rich.console import Console
    from rich.panel import Panel
    from rich.table import Table

    console = Console()

    with console.status("Parsing..."):
        dataset = _load(ctx, file)

    console.print(Panel(
        f"[bold]{file}[/bold]\n"
        f"Rows: {dataset.row_count:,}  |  Columns: {dataset.column_count}",
        title="Parsed CSV",
    ))

    table = Table(title="Columns")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Column", style="cyan")
    table.add_column("Non-blank", justify="right", style="green")
    table.add_column("Sample", overflow="fold")

    for i, header in enumerate(dataset.headers, 1):
        values = dataset.column_values(header)
        filled = [v for v in values if v.strip()]
        table.add_row(str(i), header, f"{len(filled):,}", filled[0] if filled else "")

    console.print(table)


@cli.command()
@click.argument("file", type=click.Path())
@view_options
@click.option("--page", "-p", default=1, type=int, help="Page number.")
@click.option("--page-size", "-n", default=None, type=int, help="Rows per page (10, 20, 50 or 100).")
@click.pass_context
def view(ctx, file, filters, date, sort, desc, columns, page, page_size):
    """Show one page of a CSV file, filtered and sorted."""
    from rich.console import Console
    from rich.table import Table

    from .errors import CsvViewError
    from .table import TableEngine

    console = Console()
    dataset = _load(ctx, file)
    engine = TableEngine(dataset, settings=ctx.obj["settings"])

    try:
        _apply_options(engine, filters, date, sort, desc, columns, page_size, page)
    except CsvViewError as exc:
        console.print(f"[red]Error: {exc}[/red]")
        raise SystemExit(1)

    result = engine.get_visible_rows()

    arrow = ""
    if result.sort.is_sorted:
        arrow = " (asc)" if result.sort.direction.value == "asc" else " (desc)"

    table = Table(title=f"Page {result.page} of {result.total_pages}")
    for header in result.headers:
        label = header + arrow if header == result.sort.column else header
        table.add_column(label, overflow="fold")
    for row in result.rows:
        table.add_row(*[row[h] for h in result.headers])

    console.print(table)
    console.print(f"[dim]{result.summary()}[/dim]")


@cli.command()
@click.argument("file", type=click.Path())
@click.argument("output", type=click.Path())
@view_options
@click.pass_context
def export(ctx, file, output, filters, date, sort, desc, columns):
    """Write the filtered, sorted rows of a CSV file to OUTPUT."""
    from rich.console import Console

    from .errors import CsvViewError
    from .table import TableEngine, export_visible

    console = Console()
    settings = ctx.obj["settings"]
    dataset = _load(ctx, file)
    engine = TableEngine(dataset, settings=settings)

    try:
        _apply_options(engine, filters, date, sort, desc, columns, None, None)
    except CsvViewError as exc:
        console.print(f"[red]Error: {exc}[/red]")
        raise SystemExit(1)

    try:
        with console.status("Exporting..."):
            written = export_visible(engine.state, output, delimiter=settings.delimiter)
    except CsvViewError as exc:
        console.print(f"[red]Error: {exc}[/red]")
        raise SystemExit(1)

    console.print(f"[green]Exported {written:,} rows to {output}[/green]")


if __name__ == "__main__":
    cli()
