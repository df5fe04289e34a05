# cli.py
import sys
from datetime import datetime
from typing import List, Dict, Any, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import IntPrompt, Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.text import Text
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

import requests

from sdk.cartstore import StoreClient

console = Console()
c = StoreClient()


# Global state for status messages and caching
status_message = "Ready"
product_cache: List[Dict[str, Any]] = []
cart_cache: List[Dict[str, Any]] = []

# Custom prompt style for prompt_toolkit
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
    table.add_column("ID", style="dim", width=6)
    table.add_column("Code", width=10)
    table.add_column("Title", style="bold", width=24)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Stock", justify="right", width=8)
    table.add_column("Category", width=15)
    table.add_column("Status", width=8)

    for p in products:
        active = p.get("status", True)
        table.add_row(
            str(p.get("id", "N/A")),
            str(p.get("code", "")),
            str(p.get("title", "N/A")),
            f"${float(p.get('price', 0) or 0):.2f}",
            str(p.get("stock", 0)),
            str(p.get("category", "N/A")),
            "[green]on[/green]" if active else "[red]off[/red]"
        )
    console.print(table)


def show_cart(cart: Dict[str, Any]):
    if not cart:
        console.print("[italic yellow]No cart data[/italic yellow]")
        return

    title = Text()
    title.append("🛒 Cart ", style="bold")
    title.append(str(cart.get("id", "?")), style="bold cyan")

    lines = cart.get("products") or []
    if not lines:
        console.print(Panel("This cart is empty 🛍️", title=title, style="blue"))
        return

    # best-effort names from the product cache
    names = {p.get("id"): p.get("title") for p in product_cache}

    table = Table(box=box.ROUNDED, header_style="bold blue", show_lines=True)
    table.add_column("Product", style="bold", width=30)
    table.add_column("Qty", justify="right", width=8)

    for line in lines:
        pid = line.get("product")
        name = names.get(pid)
        label = f"{name} (#{pid})" if name else f"Product #{pid}"
        table.add_row(label, str(line.get("quantity", 0)))

    console.print(Panel(table, title=title, border_style="blue"))


def show_carts(carts: List[Dict[str, Any]]):
    if not carts:
        console.print("[italic yellow]No carts found[/italic yellow]")
        return

    table = Table(
        title="🛒 Carts",
        box=box.ROUNDED,
        header_style="bold yellow",
        title_style="bold yellow",
        show_lines=True
    )
    table.add_column("Cart ID", style="dim", width=8)
    table.add_column("Lines", justify="right", width=8)
    table.add_column("Units", justify="right", width=8)

    for cart in carts:
        lines = cart.get("products") or []
        units = sum(int(line.get("quantity", 0)) for line in lines if isinstance(line, dict))
        table.add_row(str(cart.get("id", "N/A")), str(len(lines)), str(units))

    console.print(table)


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


def _error_text(e: Exception) -> str:
    # the server answers errors as {"error": message}
    if isinstance(e, requests.exceptions.HTTPError) and e.response is not None:
        try:
            return f"HTTP {e.response.status_code}: {e.response.json().get('error', e.response.text)}"
        except ValueError:
            return f"HTTP {e.response.status_code}: {e.response.text}"
    return str(e)


# ---------------------------
# API wrapper with exception handling
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner. Returns the decoded result,
    or None after printing the error.
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

        if success_msg:
            status_message = success_msg
            console.print(show_status(success_msg, True))
        return result
    except Exception as e:
        status_message = f"Error: {_error_text(e)}"
        console.print(show_status(status_message, False))
        return None


# ---------------------------
# Autocompletion helpers
# ---------------------------
def get_product_completer():
    global product_cache
    if not product_cache:
        product_cache = try_api(c.list_products) or []
    return WordCompleter([str(p.get("id")) for p in product_cache if p.get("id") is not None])


def get_cart_completer():
    global cart_cache
    if not cart_cache:
        cart_cache = try_api(c.list_carts) or []
    return WordCompleter([str(cart.get("id")) for cart in cart_cache if cart.get("id") is not None])


def refresh_caches():
    global product_cache, cart_cache
    product_cache = try_api(c.list_products) or []
    cart_cache = try_api(c.list_carts) or []


# ---------------------------
# Layout and Header
# ---------------------------
def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛍️ cartstore",
        f"[bold blue]{c.base_url}[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Input helpers
# ---------------------------
def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_float(message: str, default: float = 10.0) -> float:
    while True:
        raw = Prompt.ask(message, default=str(default))
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


def ask_id(message: str, completer) -> Optional[int]:
    raw = prompt_with_autocomplete(message, completer=completer).strip()
    try:
        return int(raw)
    except ValueError:
        console.print(f"[red]'{raw}' is not a valid id.[/red]")
        return None


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message, product_cache, cart_cache

    console.clear()
    console.print(create_header())
    refresh_caches()

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "📦 List products", "6", "🛒 List carts"),
            ("2", "ℹ️ Get product by ID", "7", "🔍 View cart"),
            ("3", "➕ Create product", "8", "🆕 Create cart"),
            ("4", "✏️ Update product", "9", "➕ Add product to cart"),
            ("5", "🗑️ Delete product", "10", "🗑️ Delete cart"),
            ("", "", "q", "👋 Quit")
        ]

        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 11)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            limit = IntPrompt.ask("Limit (0 for all)", default=0)
            products = try_api(c.list_products, limit or None, success_msg="Products loaded")
            if products is not None:
                if not limit:
                    product_cache = products
                show_products(products)

        elif choice == "2":
            pid = ask_id("Product ID", get_product_completer())
            if pid is not None:
                resp = try_api(c.get_product, pid, success_msg=f"Product {pid} loaded")
                if resp:
                    show_products([resp])

        elif choice == "3":
            title = prompt_with_autocomplete("Title")
            description = prompt_with_autocomplete("Description")
            code = prompt_with_autocomplete("Code")
            price = ask_float("💰 Price", default=10.0)
            stock = IntPrompt.ask("📦 Stock", default=1)
            category = prompt_with_autocomplete("🏷️ Category", default="general")
            resp = try_api(
                c.create_product, title, description, code, price, stock, category,
                success_msg=f"Product '{title}' created"
            )
            if resp:
                show_products([resp])
                product_cache = try_api(c.list_products) or []

        elif choice == "4":
            pid = ask_id("Product ID", get_product_completer())
            if pid is None:
                continue
            field = Prompt.ask("Field", choices=["title", "description", "code", "price", "stock", "category", "status"])
            if field in ("price", "stock"):
                value: Any = ask_float(f"New {field}", default=0)
            elif field == "status":
                value = Confirm.ask("Active?")
            else:
                value = prompt_with_autocomplete(f"New {field}")
            resp = try_api(c.update_product, pid, success_msg=f"Product {pid} updated", **{field: value})
            if resp:
                show_products([resp])
                product_cache = try_api(c.list_products) or []

        elif choice == "5":
            pid = ask_id("Product ID", get_product_completer())
            if pid is not None and Confirm.ask(f"[red]Delete product {pid}?[/red]"):
                resp = try_api(c.delete_product, pid, success_msg=f"Product {pid} deleted")
                if resp:
                    product_cache = try_api(c.list_products) or []

        elif choice == "6":
            carts = try_api(c.list_carts, success_msg="Carts loaded")
            if carts is not None:
                cart_cache = carts
                show_carts(carts)

        elif choice == "7":
            cid = ask_id("Cart ID", get_cart_completer())
            if cid is not None:
                resp = try_api(c.get_cart, cid, success_msg=f"Cart {cid} loaded")
                if resp:
                    show_cart(resp)

        elif choice == "8":
            resp = try_api(c.create_cart, success_msg="Cart created")
            if resp:
                show_cart(resp)
                cart_cache = try_api(c.list_carts) or []

        elif choice == "9":
            cid = ask_id("Cart ID", get_cart_completer())
            pid = ask_id("Product ID", get_product_completer()) if cid is not None else None
            if cid is not None and pid is not None:
                resp = try_api(c.add_to_cart, cid, pid, success_msg=f"Added product {pid} to cart {cid}")
                if resp:
                    show_cart(resp)

        elif choice == "10":
            cid = ask_id("Cart ID", get_cart_completer())
            if cid is not None and Confirm.ask(f"[red]Delete cart {cid}?[/red]"):
                resp = try_api(c.delete_cart, cid, success_msg=f"Cart {cid} deleted")
                if resp:
                    cart_cache = try_api(c.list_carts) or []

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Bye! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


def main():
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
