"""Invoice delivery dependency; tests and deployments override it."""

from backend.app.services.invoice_status import InvoiceDispatcher, log_dispatcher


def get_invoice_dispatcher() -> InvoiceDispatcher:
    return log_dispatcher
