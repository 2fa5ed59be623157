from decimal import Decimal

from sqlalchemy import Boolean, Column, DateTime, Integer, Numeric, String, Text, func
from sqlalchemy.orm import relationship

from backend.app.db.base_class import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    full_name = Column(String, nullable=True)
    hashed_password = Column(String, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    company_name = Column(String(255), nullable=True)
    business_address = Column(Text, nullable=True)
    business_phone = Column(String(50), nullable=True)
    business_email = Column(String(255), nullable=True)
    business_vat_number = Column(String(50), nullable=True)
    internal_hourly_rate = Column(Numeric(10, 2), nullable=False, default=Decimal("0.00"))
    currency = Column(String(3), nullable=False, default="USD")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    customers = relationship("Customer", back_populates="owner", cascade="all, delete-orphan", foreign_keys="Customer.owner_id")
    time_entries = relationship("TimeEntry", back_populates="owner", cascade="all, delete-orphan", foreign_keys="TimeEntry.owner_id")
    expenses = relationship("Expense", back_populates="owner", cascade="all, delete-orphan", foreign_keys="Expense.owner_id")
    invoices = relationship("Invoice", back_populates="owner", cascade="all, delete-orphan", foreign_keys="Invoice.owner_id")
