"""Command Line Interface (CLI) output helpers."""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from core.models import PublicationResult, PublicationTarget, ReportCard

console = Console()

def display_welcome():
    """Displays a welcome message."""
    console.print(Panel(
        "[bold green]Student Report Card Publisher[/bold green]",
        title="Welcome",
        border_style="blue"
    ))
    console.rule()

def display_farewell(success: bool):
    """Displays a closing line."""
    console.rule()
    if success:
        console.print("[bold cyan]Report card published. Exiting.[/bold cyan]")
    else:
        console.print("[bold red]Report card was not published.[/bold red]")

def display_error(stage: str, message: str):
    """Displays an error message naming the stage that failed."""
    console.print(Panel(f"[bold red]{escape(stage)} failed:[/bold red] {escape(message)}", title="Error", border_style="red"))

def display_warning(message: str):
    console.print(f"[yellow]Warning:[/yellow] {escape(message)}")

def display_success(message: str):
    console.print(f"[green]Success:[/green] {escape(message)}")

def display_step(step_number: int, description: str):
    """Displays the current step in the process."""
    console.print(f"\n[bold blue]Step {step_number}:[/bold blue] {escape(description)}")
    console.rule()

def display_report_card(report: ReportCard):
    """Displays the computed report card as a table."""
    table = Table(title="Report Card", show_header=True, header_style="bold magenta")
    table.add_column("Field", style="dim")
    table.add_column("Value", style="cyan")
    table.add_row("Name", escape(report.name))
    table.add_row("Total Marks", str(report.total_marks))
    table.add_row("Number of Subjects", str(report.num_subjects))
    table.add_row("Average", f"{report.average:.2f}")
    table.add_row("Grade", f"[bold]{escape(report.grade)}[/bold]")
    console.print(table)

def display_publication(target: PublicationTarget, result: PublicationResult):
    """Displays the publication receipt."""
    table = Table(title="Publication", show_header=False)
    table.add_column("Field", style="dim")
    table.add_column("Value", style="green")
    table.add_row("Repository", escape(target.slug))
    table.add_row("Branch", escape(result.branch))
    table.add_row("Path", escape(result.remote_path))
    table.add_row("Commit", result.commit_reference)
    if result.revision:
        table.add_row("Revision", result.revision)
    console.print(table)
