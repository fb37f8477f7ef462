"""Console output helpers"""

from rich.console import Console
from rich.markup import escape


console = Console(highlight=False)
error_console = Console(stderr=True, highlight=False)


def print_info(message: str) -> None:
    console.print(message, markup=False, soft_wrap=True)


def print_warning(message: str) -> None:
    # Paths can contain [brackets], keep them out of rich markup
    error_console.print(f"[yellow]Warning:[/yellow] {escape(message)}", soft_wrap=True)


def print_error(message: str) -> None:
    error_console.print(f"[bold red]Error:[/bold red] {escape(message)}", soft_wrap=True)
