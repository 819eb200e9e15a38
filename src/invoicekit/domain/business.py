"""Business (tenant) domain service."""

import logging
import re
from typing import Optional

from invoicekit.database.base import Database
from invoicekit.domain import errors
from invoicekit.domain.entities import Business as BusinessEntity
from invoicekit.domain.errors import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

# GSTIN: state code, PAN, entity number, 'Z', checksum character
TAX_NUMBER_PATTERN = re.compile(r"^[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z][1-9A-Z]Z[0-9A-Z]$")


def normalize_tax_number(tax_number: str) -> str:
    """Upper-case and strip a tax registration number."""
    return tax_number.strip().upper()


def validate_tax_number(tax_number: str) -> str:
    """Return the normalized tax number or raise ValidationError."""
    normalized = normalize_tax_number(tax_number or "")
    if not TAX_NUMBER_PATTERN.match(normalized):
        raise ValidationError(
            f"Invalid tax registration number '{tax_number}' (e.g. 27AAPFU0939F1ZV)",
            field="tax_number",
        )
    return normalized


class BusinessService:
    """Service for registering and maintaining businesses."""

    def __init__(self, db: Database):
        """Initialize business service.

        Args:
            db: Database instance
        """
        self.db = db

    def register_business(
        self, name: str, tax_number: str, address: str, logo_url: Optional[str] = None
    ) -> int:
        """Register a new business.

        Args:
            name: Legal business name
            tax_number: Tax registration number (GSTIN)
            address: Business address
            logo_url: Optional logo reference

        Returns:
            Business ID

        Raises:
            ValidationError: If any field is malformed
            ConflictError: If the tax number is already registered
        """
        field_errors: dict[str, str] = {}
        name = (name or "").strip()
        address = (address or "").strip()

        if len(name) < 2:
            field_errors["name"] = "Business name must be at least 2 characters"
        try:
            tax_number = validate_tax_number(tax_number)
        except ValidationError as e:
            field_errors["tax_number"] = str(e)
        if len(address) < 5:
            field_errors["address"] = "Please enter a complete business address"

        if field_errors:
            first_field = next(iter(field_errors))
            raise ValidationError(
                field_errors[first_field], field=first_field, errors=field_errors
            )

        if self.db.get_business_by_tax_number(tax_number) is not None:
            raise ConflictError(errors.duplicate_tax_number(tax_number))

        business_id = self.db.create_business(
            name=name, tax_number=tax_number, address=address, logo_url=logo_url
        )
        logger.info("Registered business %s", business_id)
        return business_id

    def get_profile(self, business_id: int) -> BusinessEntity:
        """Get the caller's own business.

        Raises:
            NotFoundError: If the business does not exist
        """
        business = self.db.get_business(business_id)
        if business is None:
            raise NotFoundError(errors.business_not_found(business_id))
        return business

    def update_profile(
        self,
        business_id: int,
        name: Optional[str] = None,
        address: Optional[str] = None,
        logo_url: Optional[str] = None,
    ) -> BusinessEntity:
        """Update the caller's business profile.

        The tax registration number is fixed at registration.

        Returns:
            Updated business entity

        Raises:
            NotFoundError: If the business does not exist
            ValidationError: If a new value is malformed
        """
        self.get_profile(business_id)

        if name is not None:
            name = name.strip()
            if len(name) < 2:
                raise ValidationError(
                    "Business name must be at least 2 characters", field="name"
                )
        if address is not None:
            address = address.strip()
            if len(address) < 5:
                raise ValidationError(
                    "Please enter a complete business address", field="address"
                )

        self.db.update_business(
            business_id=business_id, name=name, address=address, logo_url=logo_url
        )
        logger.info("Updated business %s profile", business_id)
        return self.get_profile(business_id)
