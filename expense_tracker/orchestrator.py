"""
Main Orchestrator for Expense Tracker

This module ties together all the components and defines the
end-to-end flows behind each menu action:
1. Add (input -> record -> append -> save)
2. List (load -> display)
3. PDF report (load -> render)
4. Chart (load -> aggregate -> render)
5. Convert (load -> convert each record -> display)

DESIGN DECISION: The orchestrator enforces the boundaries:
- Storage and report errors abort the action and are re-raised
- Conversion errors are captured per record and never abort the listing
- Every step is audited under the action's correlation ID

The menu loop in cli.py is the only caller; it owns all user-facing text.
"""

from pathlib import Path
from typing import Optional
from uuid import UUID

from expense_tracker.audit import AuditLogger, create_correlation_id
from expense_tracker.config import get_settings
from expense_tracker.models.expense import ConversionOutcome, ExpenseRecord
from expense_tracker.queries import CategoryTotals
from expense_tracker.reports import ExpenseChartRenderer, PdfReportRenderer, ReportError
from expense_tracker.services.rates import CurrencyConverter
from expense_tracker.services.storage import (
    ExpenseStoreInterface,
    JsonFileExpenseStore,
    StorageError,
    StoreWriteError,
)


class ExpenseTracker:
    """
    Orchestrates every menu action.

    All collaborators are injected; create_app_components() builds the
    defaults from settings.
    """

    def __init__(
        self,
        store: ExpenseStoreInterface,
        converter: Optional[CurrencyConverter] = None,
        pdf_renderer: Optional[PdfReportRenderer] = None,
        chart_renderer: Optional[ExpenseChartRenderer] = None,
        audit_logger: Optional[AuditLogger] = None,
        pdf_path: Optional[Path] = None,
        chart_path: Optional[Path] = None,
    ):
        report_settings = get_settings().reports
        self._store = store
        self._converter = converter or CurrencyConverter()
        self._pdf_renderer = pdf_renderer or PdfReportRenderer()
        self._chart_renderer = chart_renderer or ExpenseChartRenderer()
        self._audit_logger = audit_logger or AuditLogger()
        self._pdf_path = Path(pdf_path or report_settings.pdf_path)
        self._chart_path = Path(chart_path or report_settings.chart_path)

    @property
    def audit_logger(self) -> AuditLogger:
        return self._audit_logger

    @property
    def store_location(self) -> str:
        path = getattr(self._store, "path", None)
        return str(path) if path is not None else type(self._store).__name__

    def _load(self, correlation_id: UUID) -> list[ExpenseRecord]:
        """Load the store, auditing a failure before re-raising it."""
        try:
            return self._store.load()
        except StorageError as e:
            self._audit_logger.log_store_load_failed(
                path=self.store_location,
                error_message=str(e),
                correlation_id=correlation_id,
            )
            raise

    def add_expense(
        self,
        category: str,
        amount: float,
        currency: str,
        correlation_id: Optional[UUID] = None,
    ) -> ExpenseRecord:
        """
        Record a new expense dated today and persist it immediately.

        Raises:
            pydantic.ValidationError: If the input does not form a valid record
            StorageError: If the store cannot be read or written
        """
        correlation_id = correlation_id or create_correlation_id()

        record = ExpenseRecord(category=category, amount=amount, currency=currency)

        try:
            records = self._store.append(record)
        except StoreWriteError as e:
            self._audit_logger.log_store_save_failed(
                path=self.store_location,
                error_message=str(e),
                correlation_id=correlation_id,
            )
            raise
        except StorageError as e:
            self._audit_logger.log_store_load_failed(
                path=self.store_location,
                error_message=str(e),
                correlation_id=correlation_id,
            )
            raise

        self._audit_logger.log_expense_added(
            category=record.category,
            amount=record.amount,
            currency=record.currency,
            store_size=len(records),
            correlation_id=correlation_id,
        )
        return record

    def list_expenses(self, correlation_id: Optional[UUID] = None) -> list[ExpenseRecord]:
        """Return every expense in store order."""
        correlation_id = correlation_id or create_correlation_id()
        records = self._load(correlation_id)
        self._audit_logger.log_expenses_listed(len(records), correlation_id)
        return records

    def generate_pdf_report(self, correlation_id: Optional[UUID] = None) -> Path:
        """
        Write the PDF listing of all expenses.

        Raises:
            StorageError: If the store cannot be loaded
            ReportError: If the PDF cannot be written
        """
        correlation_id = correlation_id or create_correlation_id()
        records = self._load(correlation_id)

        try:
            path = self._pdf_renderer.render(records, self._pdf_path)
        except ReportError as e:
            self._audit_logger.log_report_failed("pdf", str(e), correlation_id)
            raise

        self._audit_logger.log_report_generated(
            kind="pdf",
            path=str(path),
            item_count=len(records),
            correlation_id=correlation_id,
        )
        return path

    def generate_chart(self, correlation_id: Optional[UUID] = None) -> Path:
        """
        Write the spending-by-category pie chart.

        Categories mixing several currencies are still summed as-is;
        each one is logged as a warning.

        Raises:
            StorageError: If the store cannot be loaded
            ReportError: If there is nothing to chart or the image cannot be written
        """
        correlation_id = correlation_id or create_correlation_id()
        totals = CategoryTotals(self._load(correlation_id))

        for category, currencies in totals.mixed_currency_categories().items():
            self._audit_logger.log_mixed_currency_category(
                category=category,
                currencies=currencies,
                correlation_id=correlation_id,
            )

        try:
            path = self._chart_renderer.render(totals, self._chart_path)
        except ReportError as e:
            self._audit_logger.log_report_failed("chart", str(e), correlation_id)
            raise

        self._audit_logger.log_report_generated(
            kind="chart",
            path=str(path),
            item_count=len(totals),
            correlation_id=correlation_id,
        )
        return path

    def list_in_currency(
        self,
        target_currency: str,
        correlation_id: Optional[UUID] = None,
    ) -> list[ConversionOutcome]:
        """
        Convert every expense to ``target_currency``.

        Never raises for a failed conversion; the failure is part of
        that record's outcome.

        Raises:
            StorageError: If the store cannot be loaded
        """
        correlation_id = correlation_id or create_correlation_id()
        records = self._load(correlation_id)

        outcomes = self._converter.convert_all(records, target_currency)

        failed = [outcome for outcome in outcomes if not outcome.succeeded]
        for outcome in failed:
            self._audit_logger.log_conversion_failed(
                from_currency=outcome.record.currency,
                to_currency=outcome.target_currency,
                error_message=outcome.error or "",
                correlation_id=correlation_id,
            )
        self._audit_logger.log_conversion_completed(
            to_currency=target_currency.strip().upper(),
            succeeded=len(outcomes) - len(failed),
            failed=len(failed),
            correlation_id=correlation_id,
        )
        return outcomes


def create_app_components(
    data_file: Optional[Path] = None,
) -> ExpenseTracker:
    """
    Factory function to create the application from settings.

    Args:
        data_file: Override for the backing file location

    Returns:
        A fully wired ExpenseTracker
    """
    return ExpenseTracker(
        store=JsonFileExpenseStore(data_file),
        converter=CurrencyConverter(),
        pdf_renderer=PdfReportRenderer(),
        chart_renderer=ExpenseChartRenderer(),
        audit_logger=AuditLogger(),
    )
