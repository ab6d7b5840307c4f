"""Tests for the interactive menu."""

import io

import pytest
from rich.console import Console
from rich.prompt import Prompt

from expense_tracker.cli import MenuController, MenuState, main, parse_amount
from expense_tracker.models.audit import AuditEventType
from expense_tracker.orchestrator import ExpenseTracker
from expense_tracker.services.rates import CurrencyConverter, ExchangeRateClient
from expense_tracker.services.storage import InMemoryExpenseStore, JsonFileExpenseStore
from tests.conftest import FakeSession, rates_response


def _controller(tmp_path, store, responses=None):
    client = ExchangeRateClient(session=FakeSession(responses or {}), base_url="https://rates.test")
    tracker = ExpenseTracker(
        store=store,
        converter=CurrencyConverter(client),
        pdf_path=tmp_path / "report.pdf",
        chart_path=tmp_path / "chart.png",
    )
    output = io.StringIO()
    console = Console(file=output, width=120, color_system=None)
    return MenuController(tracker, console=console), output


@pytest.fixture
def answers(monkeypatch):
    """Script the user's answers to Prompt.ask, in order."""
    scripted: list[str] = []

    def fake_ask(prompt, **kwargs):
        if not scripted:
            raise EOFError
        answer = scripted.pop(0)
        choices = kwargs.get("choices")
        assert choices is None or answer in choices
        return answer

    monkeypatch.setattr(Prompt, "ask", fake_ask)
    return scripted


class TestParseAmount:
    """Tests for amount input parsing."""

    @pytest.mark.parametrize("text, expected", [
        ("12", 12.0),
        (" 12.50 ", 12.5),
        ("-3", -3.0),
        ("0", 0.0),
    ])
    def test_numbers(self, text, expected):
        assert parse_amount(text) == expected

    @pytest.mark.parametrize("text", ["", "abc", "12,50", "nan", "inf"])
    def test_rejects_non_numbers(self, text):
        assert parse_amount(text) is None


class TestMenuController:
    """Tests for the menu state machine."""

    def test_exit(self, tmp_path, answers):
        controller, output = _controller(tmp_path, InMemoryExpenseStore())
        answers.extend(["exit"])

        assert controller.run() == 0
        assert "Goodbye!" in output.getvalue()

    def test_end_of_input_exits_cleanly(self, tmp_path, answers):
        controller, output = _controller(tmp_path, InMemoryExpenseStore())
        assert controller.run() == 0
        assert "Goodbye!" in output.getvalue()

    def test_main_menu_transitions(self, tmp_path, answers):
        controller, _ = _controller(tmp_path, InMemoryExpenseStore())
        answers.append("convert")
        assert controller.step(MenuState.MAIN_MENU) is MenuState.CONVERTING

    def test_add_then_list(self, tmp_path, answers):
        store = InMemoryExpenseStore()
        controller, output = _controller(tmp_path, store)
        answers.extend(["add", "Food", "abc", "12.5", "usd", "list", "exit"])

        controller.run()

        text = output.getvalue()
        assert "Please enter a number" in text
        assert "Expense added successfully!" in text
        assert "1. [Food] $12.5 USD - Date: " in text
        assert len(store.load()) == 1

    def test_list_empty_store(self, tmp_path, answers):
        controller, output = _controller(tmp_path, InMemoryExpenseStore())
        answers.extend(["list", "exit"])
        controller.run()
        assert "No expenses recorded yet." in output.getvalue()

    def test_corrupt_file_shows_error_and_returns_to_menu(self, tmp_path, answers):
        path = tmp_path / "expenses.json"
        path.write_text("[oops", encoding="utf-8")
        controller, output = _controller(tmp_path, JsonFileExpenseStore(path))
        answers.extend(["list", "exit"])

        assert controller.run() == 0

        text = output.getvalue()
        assert "Expense file problem" in text
        assert "Goodbye!" in text

    def test_convert_reports_failures_inline(self, tmp_path, answers, sample_records):
        store = InMemoryExpenseStore(sample_records[:1] + [
            sample_records[2].model_copy(update={"currency": "XXX"}),
        ])
        controller, output = _controller(
            tmp_path, store, {"USD": rates_response({"EUR": 0.9235})}
        )
        answers.extend(["convert", "eur", "exit"])

        controller.run()

        text = output.getvalue()
        assert "Expenses in EUR:" in text
        assert "[Food] $9.24 EUR - Date: 2024-12-01" in text
        assert "[Transport] could not convert 3 XXX" in text

    def test_pdf_and_chart(self, tmp_path, answers, sample_records):
        controller, output = _controller(tmp_path, InMemoryExpenseStore(sample_records))
        answers.extend(["pdf", "visualize", "exit"])

        controller.run()

        text = output.getvalue()
        assert "PDF report generated" in text
        assert "Expense chart generated" in text
        assert (tmp_path / "report.pdf").exists()
        assert (tmp_path / "chart.png").exists()

    def test_chart_error_is_shown(self, tmp_path, answers):
        controller, output = _controller(tmp_path, InMemoryExpenseStore())
        answers.extend(["visualize", "exit"])
        controller.run()
        assert "No expenses to chart" in output.getvalue()

    def test_unexpected_error_is_audited(self, tmp_path, answers, monkeypatch):
        controller, output = _controller(tmp_path, InMemoryExpenseStore())
        tracker = controller._tracker

        def explode(correlation_id=None):
            raise RuntimeError("renderer crashed")

        monkeypatch.setattr(tracker, "generate_pdf_report", explode)
        answers.extend(["pdf", "exit"])

        assert controller.run() == 0

        assert "Unexpected error: renderer crashed" in output.getvalue()
        event = tracker.audit_logger.events[-1]
        assert event.event_type == AuditEventType.SYSTEM_ERROR
        assert event.details == {"action": "pdf"}
        assert event.error_message == "renderer crashed"


class TestMain:
    """Tests for the console script entry point."""

    def test_invalid_settings_stop_startup(self, monkeypatch, capsys):
        monkeypatch.setenv("LOG_LEVEL", "chatty")

        assert main() == 1

        err = capsys.readouterr().err
        assert "Invalid app settings" in err
        assert "Unknown log level" in err

    def test_runs_menu_until_exit(self, tmp_path, answers, monkeypatch):
        monkeypatch.setenv("EXPENSES_DATA_FILE", str(tmp_path / "data.json"))
        answers.extend(["exit"])
        assert main() == 0
