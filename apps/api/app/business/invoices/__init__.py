from app.business.invoices.api import router
from app.business.invoices.schemas import InvoiceCreate, InvoicePayment, InvoiceRead
from app.business.invoices.service import InvoiceService, invoice_service

__all__ = [
    "router",
    "InvoiceCreate",
    "InvoicePayment",
    "InvoiceRead",
    "InvoiceService",
    "invoice_service",
]
