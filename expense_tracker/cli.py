"""
Terminal Frontend for Expense Tracker

This is the interactive menu the user drives from the terminal.

DESIGN PRINCIPLES:
1. One action at a time; each runs to completion before the next prompt
2. Clear error messages; a broken file or rate service never crashes the menu
3. Nothing here knows about files, HTTP or rendering; that is the orchestrator's job

The loop is an explicit state machine: MAIN_MENU picks the next state,
every action state returns to MAIN_MENU, and EXIT ends the loop.
"""

import math
import sys
from enum import Enum
from typing import Optional

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt

from expense_tracker.audit import configure_logging, create_correlation_id
from expense_tracker.config import get_settings, validate_all_settings
from expense_tracker.orchestrator import ExpenseTracker, create_app_components
from expense_tracker.reports import ReportError
from expense_tracker.services.storage import StorageError


class MenuState(str, Enum):
    """States of the interactive loop."""
    MAIN_MENU = "main_menu"
    ADDING = "add"
    LISTING = "list"
    REPORTING = "pdf"
    VISUALIZING = "visualize"
    CONVERTING = "convert"
    EXIT = "exit"


MENU_CHOICES = [
    (MenuState.ADDING, "Add Expense"),
    (MenuState.LISTING, "List Expenses"),
    (MenuState.REPORTING, "Generate PDF Report"),
    (MenuState.VISUALIZING, "Visualize Expenses"),
    (MenuState.CONVERTING, "List in Different Currency"),
    (MenuState.EXIT, "Exit"),
]


def parse_amount(text: str) -> Optional[float]:
    """Parse a typed amount; None unless it is a finite number."""
    try:
        value = float(text.strip())
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


class MenuController:
    """
    Drives the interactive menu.

    Each handler performs one action and returns the next state.
    """

    def __init__(
        self,
        tracker: ExpenseTracker,
        console: Optional[Console] = None,
        debug: bool = False,
    ):
        self._tracker = tracker
        self._console = console or Console()
        self._debug = debug
        self._handlers = {
            MenuState.MAIN_MENU: self.show_menu,
            MenuState.ADDING: self.add_expense,
            MenuState.LISTING: self.list_expenses,
            MenuState.REPORTING: self.generate_pdf,
            MenuState.VISUALIZING: self.visualize,
            MenuState.CONVERTING: self.list_in_currency,
        }

    def _ask(self, message: str, **kwargs) -> str:
        return Prompt.ask(message, console=self._console, **kwargs)

    def run(self) -> int:
        """Run until the user exits. Returns the process exit code."""
        state = MenuState.MAIN_MENU
        while state is not MenuState.EXIT:
            try:
                state = self.step(state)
            except (KeyboardInterrupt, EOFError):
                self._console.print()
                state = MenuState.EXIT
        self._console.print("[yellow]Goodbye![/yellow]")
        return 0

    def step(self, state: MenuState) -> MenuState:
        """Run the handler for ``state`` and return the next state."""
        handler = self._handlers[state]
        if state is MenuState.MAIN_MENU:
            return handler()

        try:
            handler()
        except StorageError as e:
            self._console.print(f"[red]Expense file problem: {escape(str(e))}[/red]")
        except ReportError as e:
            self._console.print(f"[red]{escape(str(e))}[/red]")
        except Exception as e:
            self._tracker.audit_logger.log_error(
                error_type=type(e).__name__,
                error_message=str(e),
                details={"action": state.value},
            )
            if self._debug:
                self._console.print_exception()
            self._console.print(f"[red]Unexpected error: {escape(str(e))}[/red]")
        return MenuState.MAIN_MENU

    # ------------------------------------------------------------------
    # States
    # ------------------------------------------------------------------

    def show_menu(self) -> MenuState:
        self._console.print(Panel("Personal Finance Tracker", style="bold yellow", expand=False))
        for state, label in MENU_CHOICES:
            self._console.print(f"  [cyan]{state.value:<10}[/cyan] {label}")
        choice = self._ask(
            "Choose an action",
            choices=[state.value for state, _ in MENU_CHOICES],
            show_choices=False,
        )
        return MenuState(choice)

    def add_expense(self) -> None:
        category = ""
        while not category:
            category = self._ask("Expense Category (e.g., Food, Transport)").strip()

        amount = None
        while amount is None:
            amount = parse_amount(self._ask("Amount"))
            if amount is None:
                self._console.print("[red]Please enter a number, e.g. 12.50[/red]")

        currency = ""
        while not currency:
            currency = self._ask("Currency (e.g., USD, EUR)").strip()

        try:
            self._tracker.add_expense(category, amount, currency, create_correlation_id())
        except ValidationError as e:
            messages = "; ".join(err["msg"] for err in e.errors())
            self._console.print(f"[red]Expense not saved: {escape(messages)}[/red]")
            return
        self._console.print("[green]Expense added successfully![/green]")

    def list_expenses(self) -> None:
        records = self._tracker.list_expenses(create_correlation_id())
        self._console.print("\n[blue]Your Expenses:[/blue]")
        if not records:
            self._console.print("[yellow]No expenses recorded yet.[/yellow]")
            return
        for index, record in enumerate(records, start=1):
            self._console.print(
                f"{index}. \\[{escape(record.category)}] ${record.display_amount} "
                f"{escape(record.currency)} - Date: {record.date.isoformat()}",
                highlight=False,
            )

    def generate_pdf(self) -> None:
        path = self._tracker.generate_pdf_report(create_correlation_id())
        self._console.print(f"[green]PDF report generated: {path}[/green]")

    def visualize(self) -> None:
        path = self._tracker.generate_chart(create_correlation_id())
        self._console.print(f"[green]Expense chart generated: {path}[/green]")

    def list_in_currency(self) -> None:
        target = ""
        while not target:
            target = self._ask("Convert expenses to (e.g., USD, EUR)").strip().upper()

        outcomes = self._tracker.list_in_currency(target, create_correlation_id())

        self._console.print(f"\n[blue]Expenses in {escape(target)}:[/blue]")
        for outcome in outcomes:
            record = outcome.record
            label = f"\\[{escape(record.category)}]"
            if outcome.succeeded:
                self._console.print(
                    f"{label} ${outcome.converted_amount} {escape(target)} "
                    f"- Date: {record.date.isoformat()}",
                    highlight=False,
                )
            else:
                self._console.print(
                    f"{label} [red]could not convert {record.display_amount} "
                    f"{escape(record.currency)}: {escape(outcome.error or '')}[/red]",
                    highlight=False,
                )


def main() -> int:
    """Console script entry point."""
    status = validate_all_settings()
    failed = [name for name in ("storage", "rates", "reports", "app") if not status[name]]
    if failed:
        console = Console(stderr=True)
        for name in failed:
            console.print(f"[red]Invalid {name} settings: {escape(status[name + '_error'])}[/red]")
        return 1

    settings = get_settings()
    configure_logging(settings.app.log_level)
    tracker = create_app_components()
    controller = MenuController(tracker, debug=settings.app.debug_mode)
    return controller.run()


if __name__ == "__main__":
    sys.exit(main())
