"""Customer model: who is billed and how."""

from decimal import Decimal

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from backend.app.db.base_class import Base
from backend.app.core.time import utc_now


class Customer(Base):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    company_name = Column(String(255), nullable=False)
    contact_person = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    billing_address = Column(String(512), nullable=True)
    vat_number = Column(String(50), nullable=True)
    rate_type = Column(String(20), nullable=False, default="hourly")
    default_rate = Column(Numeric(10, 2), nullable=False, default=Decimal("0.00"))
    payment_terms = Column(Integer, nullable=False, default=14)
    is_internal = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=utc_now)
    updated_at = Column(DateTime, nullable=False, default=utc_now, onupdate=utc_now)

    owner = relationship("User", back_populates="customers", foreign_keys=[owner_id])
    tasks = relationship("Task", back_populates="customer", cascade="all, delete-orphan")
    agreements = relationship("Agreement", back_populates="customer", cascade="all, delete-orphan")
    time_entries = relationship("TimeEntry", back_populates="customer")
    expenses = relationship("Expense", back_populates="customer")
    invoices = relationship("Invoice", back_populates="customer")
