# cli.py
import argparse
import os
import sys
from datetime import datetime
from typing import Any, Dict, List, Optional

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.table import Table

from sdk.productstore import ProductStoreAPIError, ProductStoreClient

console = Console()

BASE_URL = os.environ.get("PRODUCTSTORE_URL", "http://127.0.0.1:5000")

# Product cache backing id autocompletion
product_cache: List[Dict[str, Any]] = []

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Dict[str, Any]]):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title="📦 Products",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=26)
    table.add_column("Name", style="bold", width=20)
    table.add_column("Description", width=30)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Qty", justify="right", width=8)

    for p in products:
        table.add_row(
            p.get("id", "N/A"),
            p.get("name", "N/A"),
            p.get("description", ""),
            f"${p.get('price', 0.0):.2f}",
            str(p.get("quantity", 0)),
        )
    console.print(table)


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    API and connection errors are printed and turned into None.
    """
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)
    except ProductStoreAPIError as e:
        console.print(show_status(f"Error: {e.message} ({e.status_code})", False))
        return None
    except OSError as e:
        console.print(show_status(f"Error: {e}", False))
        return None

    if success_msg:
        console.print(show_status(success_msg, True))
    return result


# ---------------------------
# Input helpers with autocomplete
# ---------------------------
def get_product_completer():
    ids = [p.get("id", "") for p in product_cache]
    return WordCompleter([i for i in ids if i], ignore_case=True)


def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_float(message: str, default: float = 1.0) -> float:
    while True:
        raw = Prompt.ask(message, default=str(default))
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


def ask_product_fields(current: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    current = current or {}
    return {
        "name": prompt_with_autocomplete("Name", default=current.get("name", "")),
        "description": prompt_with_autocomplete("Description", default=current.get("description", "")),
        "price": ask_float("💰 Price", default=current.get("price", 1.0)),
        "quantity": IntPrompt.ask("📦 Quantity", default=current.get("quantity", 1)),
    }


def refresh_cache(c: ProductStoreClient):
    global product_cache
    product_cache = try_api(c.list_products) or []


# ---------------------------
# Main menu
# ---------------------------
def menu(c: ProductStoreClient):
    global product_cache
    console.clear()
    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    console.print(Panel(f"🛍️ Product Store  [dim]{c.base_url}  {now}[/dim]", style="bold blue"))

    refresh_cache(c)

    while True:
        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        for row in [
            ("1", "📦 List products"),
            ("2", "ℹ️ Get product by ID"),
            ("3", "➕ Create product"),
            ("4", "✏️ Update product"),
            ("5", "🗑️ Delete product"),
            ("6", "❤️ Health check"),
            ("q", "👋 Quit"),
        ]:
            menu_table.add_row(*row)
        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 7)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            products = try_api(c.list_products, success_msg="Products loaded")
            if products is not None:
                product_cache = products
                show_products(products)

        elif choice == "2":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            resp = try_api(c.get_product, pid)
            if resp:
                show_products([resp])

        elif choice == "3":
            fields = ask_product_fields()
            resp = try_api(c.create_product, success_msg=f"Product '{fields['name']}' created", **fields)
            if resp:
                show_products([resp])
                refresh_cache(c)

        elif choice == "4":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            current = next((p for p in product_cache if p.get("id") == pid), None)
            fields = ask_product_fields(current)
            resp = try_api(c.update_product, pid, success_msg=f"Product {pid} updated", **fields)
            if resp:
                show_products([resp])
                refresh_cache(c)

        elif choice == "5":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            if Confirm.ask(f"[red]Delete product {pid}?[/red]"):
                resp = try_api(c.delete_product, pid)
                if resp is not None:
                    console.print(show_status(resp, True))
                    refresh_cache(c)

        elif choice == "6":
            resp = try_api(c.health)
            if resp is not None:
                console.print(show_status(resp, True))

        elif choice.lower() in ("q", "quit", "exit"):
            console.print(Panel.fit("[bold green]Bye! 👋[/bold green]", title="Goodbye"))
            return

        console.print()
        console.rule(style="dim")


# ---------------------------
# Non-interactive commands
# ---------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Product store CLI")
    parser.add_argument("--base-url", default=BASE_URL, help="Server URL (env PRODUCTSTORE_URL)")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("interactive", help="Interactive menu (default)")
    subparsers.add_parser("health", help="Check the server is up")
    subparsers.add_parser("list", help="List all products")

    gp = subparsers.add_parser("get", help="Get a product by its ID")
    gp.add_argument("product_id")

    for name, help_text in (("create", "Create a product"), ("update", "Replace a product's fields")):
        sp = subparsers.add_parser(name, help=help_text)
        if name == "update":
            sp.add_argument("product_id")
        sp.add_argument("--name", required=True)
        sp.add_argument("--description", default="")
        sp.add_argument("--price", type=float, required=True)
        sp.add_argument("--quantity", type=int, required=True)

    dp = subparsers.add_parser("delete", help="Delete a product by its ID")
    dp.add_argument("product_id")
    return parser


def run(args: argparse.Namespace) -> int:
    c = ProductStoreClient(base_url=args.base_url)

    if args.command in (None, "interactive"):
        menu(c)
        return 0

    if args.command == "health":
        result = try_api(c.health)
    elif args.command == "list":
        result = try_api(c.list_products)
        if result is not None:
            show_products(result)
    elif args.command == "get":
        result = try_api(c.get_product, args.product_id)
        if result is not None:
            show_products([result])
    elif args.command == "create":
        result = try_api(c.create_product, args.name, args.description, args.price, args.quantity)
        if result is not None:
            show_products([result])
    elif args.command == "update":
        result = try_api(c.update_product, args.product_id, args.name, args.description, args.price, args.quantity)
        if result is not None:
            show_products([result])
    else:
        result = try_api(c.delete_product, args.product_id)

    if isinstance(result, str):
        console.print(show_status(result, True))
    return 0 if result is not None else 1


if __name__ == "__main__":
    try:
        sys.exit(run(build_parser().parse_args()))
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
