# cli.py
import sys
from datetime import datetime
from typing import Any, Dict, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.prompt import Confirm, IntPrompt
from rich.table import Table

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from sdk.pyproducts import DEFAULT_URL, ProductApiError, ProductClient

console = Console()
c = ProductClient(base_url=DEFAULT_URL)

status_message = "Ready"
# ids seen this session, offered as completions
id_cache = set()

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_product(p: Dict[str, Any]):
    table = Table(
        title=f"📦 Product {p.get('product_id', '?')}",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_header=False,
    )
    table.add_column("Field", style="dim", width=16)
    table.add_column("Value", style="bold", width=30)
    for field in ("product_id", "sku", "manufacturer", "category_id", "weight", "some_other_id"):
        table.add_row(field, str(p.get(field, "N/A")))
    console.print(table)


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


def show_api_error(e: ProductApiError):
    console.print(Panel.fit(
        f"[bold]{e.error}[/bold] ({e.status_code})\n{e.message}\n[dim]{e.details}[/dim]",
        title="❌ Request rejected",
        border_style="red",
    ))


# ---------------------------
# API wrapper
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner. Service errors are shown
    as a panel, transport errors as a status line; both return None.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)
    except ProductApiError as e:
        status_message = f"Error: {e.error}"
        show_api_error(e)
        return None
    except Exception as e:
        status_message = f"Error: {e}"
        console.print(show_status(f"Error: {e}", False))
        return None

    if success_msg:
        status_message = success_msg
        console.print(show_status(success_msg, True))
    return result


# ---------------------------
# Input helpers
# ---------------------------
def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_product_id() -> int:
    completer = WordCompleter(sorted(str(i) for i in id_cache))
    while True:
        raw = prompt_with_autocomplete("Enter product ID", completer=completer).strip()
        try:
            return int(raw)
        except ValueError:
            console.print("[red]Please enter a whole number.[/red]")


def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)
    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "📦 Product details",
        f"[bold blue]{c.base_url}[/bold blue]",
        f"[dim]{now}[/dim]",
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message

    console.clear()
    console.print(create_header())

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=36)
        menu_table.add_row("1", "ℹ️ Get product by ID")
        menu_table.add_row("2", "✏️ Create / replace product details")
        menu_table.add_row("q", "👋 Quit")
        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter(["1", "2", "q", "quit", "exit"]),
        ).strip()

        if choice == "1":
            pid = ask_product_id()
            resp = try_api(c.get_product, pid, success_msg=f"Product {pid} loaded")
            if resp:
                id_cache.add(pid)
                show_product(resp)

        elif choice == "2":
            pid = ask_product_id()
            sku = prompt_with_autocomplete("SKU")
            manufacturer = prompt_with_autocomplete("Manufacturer")
            category_id = IntPrompt.ask("Category ID", default=1)
            weight = IntPrompt.ask("Weight", default=1)
            other = IntPrompt.ask("Some other ID", default=0)
            resp = try_api(
                c.put_details, pid, sku, manufacturer, category_id, weight, other,
                success_msg=f"Product {pid} stored",
            )
            if resp:
                id_cache.add(pid)
                show_product(resp)

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Bye! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
