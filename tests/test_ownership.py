"""Tests for tenant ownership checks."""

import pytest

from invoicekit.domain.errors import NotFoundError
from invoicekit.domain.ownership import EntityKind, OwnershipGuard


class TestOwnershipGuard:
    """Tests for OwnershipGuard."""

    def test_owned_client_is_returned(self, temp_db, sample_business, sample_client):
        guard = OwnershipGuard(temp_db)

        client = guard.assert_owned(EntityKind.CLIENT, sample_client.id, sample_business.id)

        assert client == sample_client

    def test_owned_invoice_is_returned(self, temp_db, sample_business, sample_invoice):
        guard = OwnershipGuard(temp_db)

        invoice = guard.assert_owned("invoice", sample_invoice.id, sample_business.id)

        assert invoice.id == sample_invoice.id
        assert invoice.invoice_number == sample_invoice.invoice_number

    def test_foreign_client_looks_missing(self, temp_db, sample_business, other_client):
        """A foreign record fails exactly like a record that does not exist."""
        guard = OwnershipGuard(temp_db)
        missing_id = other_client.id + 1000

        with pytest.raises(NotFoundError) as foreign:
            guard.assert_client_owned(other_client.id, sample_business.id)
        with pytest.raises(NotFoundError) as missing:
            guard.assert_client_owned(missing_id, sample_business.id)

        assert str(foreign.value) == f"Client {other_client.id} not found"
        assert str(missing.value) == f"Client {missing_id} not found"
        assert type(foreign.value) is type(missing.value)

    def test_foreign_invoice_looks_missing(
        self, temp_db, sample_invoice, other_business
    ):
        guard = OwnershipGuard(temp_db)

        with pytest.raises(NotFoundError, match=f"Invoice {sample_invoice.id} not found"):
            guard.assert_invoice_owned(sample_invoice.id, other_business.id)

    def test_owner_check_is_symmetric(self, temp_db, sample_business, other_business, other_client):
        guard = OwnershipGuard(temp_db)

        assert guard.assert_client_owned(other_client.id, other_business.id) == other_client
        with pytest.raises(NotFoundError):
            guard.assert_client_owned(other_client.id, sample_business.id)

    def test_unknown_entity_kind(self, temp_db, sample_business):
        guard = OwnershipGuard(temp_db)

        with pytest.raises(ValueError):
            guard.assert_owned("business", 1, sample_business.id)


class TestServicesAreGuarded:
    """Every id-based service operation refuses foreign records."""

    def test_get_client(self, client_service, sample_business, other_client):
        with pytest.raises(NotFoundError):
            client_service.get_client(other_client.id, sample_business.id)

    def test_update_client(self, client_service, temp_db, sample_business, other_client):
        with pytest.raises(NotFoundError):
            client_service.update_client(other_client.id, sample_business.id, name="Hijacked")

        assert temp_db.get_client(other_client.id).name == "Umbrella Corp"

    def test_delete_client(self, client_service, temp_db, sample_business, other_client):
        with pytest.raises(NotFoundError):
            client_service.delete_client(other_client.id, sample_business.id)

        assert temp_db.get_client(other_client.id) is not None

    def test_create_invoice_for_foreign_client(
        self, invoice_service, temp_db, sample_business, other_business, other_client, sample_items
    ):
        """Billing another tenant's client fails before anything is written."""
        with pytest.raises(NotFoundError):
            invoice_service.create_invoice(sample_business.id, other_client.id, sample_items)

        assert temp_db.list_invoices(sample_business.id) == []
        assert temp_db.list_invoices(other_business.id) == []

    def test_get_invoice(self, invoice_service, sample_invoice, other_business):
        with pytest.raises(NotFoundError):
            invoice_service.get_invoice(sample_invoice.id, other_business.id)

    def test_set_status(self, invoice_service, temp_db, sample_invoice, other_business):
        with pytest.raises(NotFoundError):
            invoice_service.set_status(sample_invoice.id, "Paid", other_business.id)

        assert temp_db.get_invoice(sample_invoice.id).status.value == "Unpaid"

    def test_render_invoice(self, invoice_service, sample_invoice, other_business):
        with pytest.raises(NotFoundError):
            invoice_service.render_invoice(sample_invoice.id, other_business.id)

    def test_list_invoices_by_foreign_client(
        self, invoice_service, sample_business, other_client
    ):
        with pytest.raises(NotFoundError):
            invoice_service.list_invoices(sample_business.id, client_id=other_client.id)

    def test_list_invoices_is_tenant_scoped(
        self, invoice_service, sample_invoice, sample_business, other_business
    ):
        assert [inv.id for inv in invoice_service.list_invoices(sample_business.id)] == [
            sample_invoice.id
        ]
        assert invoice_service.list_invoices(other_business.id) == []
