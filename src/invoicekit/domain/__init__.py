"""Domain layer for invoicekit application.

Services are imported from their modules (``invoicekit.domain.invoice`` etc.)
so that the database layer can import entities without a cycle.
"""
