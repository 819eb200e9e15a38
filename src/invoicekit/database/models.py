"""SQLAlchemy models for invoicekit database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    ForeignKey,
    DateTime,
    Numeric,
    UniqueConstraint,
    create_engine,
    event,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

from invoicekit.domain.entities import InvoiceStatus

Base = declarative_base()


class Business(Base):
    """Issuing business model."""

    __tablename__ = "businesses"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    tax_number = Column(String, unique=True, nullable=False)
    address = Column(Text, nullable=False)
    logo_url = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Client(Base):
    """Client model. ``business_id`` is fixed at creation."""

    __tablename__ = "clients"

    id = Column(Integer, primary_key=True)
    business_id = Column(Integer, ForeignKey("businesses.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    address = Column(Text, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Invoice(Base):
    """Invoice model. Totals are written once at creation."""

    __tablename__ = "invoices"

    id = Column(Integer, primary_key=True)
    business_id = Column(Integer, ForeignKey("businesses.id"), nullable=False, index=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False, index=True)
    invoice_number = Column(String, unique=True, nullable=False)
    tax_rate = Column(Numeric(7, 4), nullable=False, default=0)
    discount_rate = Column(Numeric(7, 4), nullable=False, default=0)
    subtotal = Column(Numeric(14, 2), nullable=False)
    tax_amount = Column(Numeric(14, 2), nullable=False)
    total = Column(Numeric(14, 2), nullable=False)
    status = Column(String(16), nullable=False, default=InvoiceStatus.UNPAID.value)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    items = relationship(
        "InvoiceItem",
        back_populates="invoice",
        order_by="InvoiceItem.position",
        cascade="all, delete-orphan",
    )


class InvoiceItem(Base):
    """Invoice line item model, ordered by ``position``."""

    __tablename__ = "invoice_items"

    id = Column(Integer, primary_key=True)
    invoice_id = Column(Integer, ForeignKey("invoices.id"), nullable=False)
    position = Column(Integer, nullable=False)
    description = Column(Text, nullable=False)
    quantity = Column(Numeric(14, 4), nullable=False)
    unit_price = Column(Numeric(14, 4), nullable=False)

    __table_args__ = (UniqueConstraint("invoice_id", "position", name="uq_invoice_item_position"),)

    # Relationships
    invoice = relationship("Invoice", back_populates="items")


def create_session_factory(database_url: str, echo: bool = False) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory.

    SQLite connections get foreign key enforcement switched on.
    """
    engine = create_engine(database_url, echo=echo)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
