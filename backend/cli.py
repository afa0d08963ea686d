"""
Kitchen OS CLI.

Command-line interface for database setup, report exports and quick stats.

    python cli.py init-db
    python cli.py export outlet 3 --format xlsx --out ./reports
    python cli.py stats
"""

import sys
from pathlib import Path

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent))

import typer
from rich.console import Console
from rich.table import Table
from rich.progress import Progress, SpinnerColumn, TextColumn

from shared.utils.exceptions import AppException

app = typer.Typer(
    name="kitchen-os",
    help="Kitchen OS back-office CLI",
    add_completion=False,
)
export_app = typer.Typer(help="Write PDF/XLSX reports to a directory.")
app.add_typer(export_app, name="export")

console = Console()


# =============================================================================
# Database Commands
# =============================================================================

@app.command()
def init_db():
    """Create the tables and seed the default units."""
    from shared.config.logging import setup_logging
    from kitchen_api.core import init_database

    setup_logging()
    console.print("[blue]Initializing database[/blue]")
    try:
        init_database()
    except Exception as e:
        console.print(f"[red]✗ Initialization failed: {e}[/red]")
        raise typer.Exit(1)
    console.print("[green]✓ Tables ready, units seeded[/green]")


# =============================================================================
# Export Commands
# =============================================================================

def _write_export(report: str, fmt: str, out: Path, run) -> None:
    """Run an export against a fresh session and write the file into `out`."""
    from shared.infrastructure.db import get_db_context
    from kitchen_api.services.exports import ExportFormat

    try:
        export_format = ExportFormat(fmt.lower())
    except ValueError:
        console.print(f"[red]Unknown format '{fmt}' (pdf or xlsx)[/red]")
        raise typer.Exit(2)

    out.mkdir(parents=True, exist_ok=True)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        progress.add_task(f"Generating {report} report...", total=None)
        try:
            with get_db_context() as db:
                export = run(db, export_format)
        except AppException as e:
            console.print(f"[red]✗ {e.detail}[/red]")
            raise typer.Exit(1)

    path = out / export.filename
    path.write_bytes(export.content)
    console.print(f"[green]✓ {path} ({len(export.content)} bytes)[/green]")


FORMAT_OPTION = typer.Option("pdf", "--format", "-f", help="pdf or xlsx")
OUT_OPTION = typer.Option(Path("."), "--out", "-o", help="Output directory")


@export_app.command("outlet")
def export_outlet_cmd(
    outlet_id: int = typer.Argument(..., help="Outlet ID"),
    fmt: str = FORMAT_OPTION,
    out: Path = OUT_OPTION,
):
    """Full outlet report."""
    from kitchen_api.services.exports import export_outlet

    _write_export("outlet", fmt, out, lambda db, f: export_outlet(db, outlet_id, f))


@export_app.command("menu")
def export_menu_cmd(
    outlet_id: int = typer.Argument(..., help="Outlet ID"),
    fmt: str = FORMAT_OPTION,
    out: Path = OUT_OPTION,
):
    """Menu report of an outlet."""
    from kitchen_api.services.exports import export_menu

    _write_export("menu", fmt, out, lambda db, f: export_menu(db, outlet_id, f))


@export_app.command("recipe")
def export_recipe_cmd(
    recipe_id: int = typer.Argument(..., help="Recipe ID"),
    fmt: str = FORMAT_OPTION,
    out: Path = OUT_OPTION,
):
    """Single recipe report."""
    from kitchen_api.services.exports import export_recipe

    _write_export("recipe", fmt, out, lambda db, f: export_recipe(db, recipe_id, f))


@export_app.command("ingredients")
def export_ingredients_cmd(
    fmt: str = FORMAT_OPTION,
    out: Path = OUT_OPTION,
):
    """Ingredient library report."""
    from kitchen_api.services.exports import export_ingredients

    _write_export("ingredients", fmt, out, export_ingredients)


# =============================================================================
# Stats Commands
# =============================================================================

@app.command()
def stats():
    """Show dashboard numbers."""
    from shared.infrastructure.db import get_db_context
    from kitchen_api.services.domain import DashboardService
    from kitchen_api.services.exports.formatting import format_currency

    with get_db_context() as db:
        data = DashboardService(db).get_stats()

    table = Table(title="Kitchen OS")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Restoranlar", str(data.outlet_count))
    table.add_row("Kategoriler", str(data.category_count))
    table.add_row("Tarifler", str(data.recipe_count))
    table.add_row("Malzemeler", str(data.ingredient_count))
    table.add_row("Ort. Porsiyon Maliyeti", format_currency(data.average_cost_per_yield))

    console.print(table)


@app.command()
def version():
    """Show version information."""
    import fastapi
    import reportlab
    import openpyxl

    table = Table(title="Kitchen OS Version")
    table.add_column("Component", style="cyan")
    table.add_column("Version", style="green")

    table.add_row("API", "1.0.0")
    table.add_row("FastAPI", fastapi.__version__)
    table.add_row("ReportLab", reportlab.Version)
    table.add_row("openpyxl", openpyxl.__version__)
    table.add_row("Python", sys.version.split()[0])

    console.print(table)


if __name__ == "__main__":
    app()
