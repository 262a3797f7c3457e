from typing import Any

from rich.console import Console
from rich.markup import escape

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def print_error(message: str) -> None:
    err_console.print(f"[red bold]Error:[/red bold] {escape(message)}", soft_wrap=True)


def print_value(value: Any) -> None:
    if value is None or value == "":
        console.print("[bold green]OK[/bold green]")
    elif isinstance(value, str):
        console.out(value, end="" if value.endswith("\n") else "\n")
    else:
        console.print_json(data=value)
