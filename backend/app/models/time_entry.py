"""Time entry model: one block of tracked work on the calendar."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from backend.app.db.base_class import Base
from backend.app.core.time import utc_now


class TimeEntry(Base):
    __tablename__ = "time_entries"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    agreement_id = Column(Integer, ForeignKey("agreements.id"), nullable=True)
    task_id = Column(Integer, ForeignKey("tasks.id"), nullable=True)
    subtask = Column(String(255), nullable=True)
    task_description = Column(Text, nullable=True)
    # Stored as naive UTC
    start_time = Column(DateTime, nullable=False, index=True)
    end_time = Column(DateTime, nullable=False)
    duration_minutes = Column(Integer, nullable=False)
    is_billable = Column(Boolean, nullable=False, default=True)
    is_invoiced = Column(Boolean, nullable=False, default=False)
    invoice_id = Column(Integer, ForeignKey("invoices.id"), nullable=True, index=True)
    drive_required = Column(Boolean, nullable=False, default=False)
    kilometers = Column(Numeric(10, 1), nullable=True)
    created_at = Column(DateTime, nullable=False, default=utc_now)
    updated_at = Column(DateTime, nullable=False, default=utc_now, onupdate=utc_now)

    owner = relationship("User", back_populates="time_entries", foreign_keys=[owner_id])
    customer = relationship("Customer", back_populates="time_entries")
    task = relationship("Task", back_populates="time_entries")
    agreement = relationship("Agreement", back_populates="time_entries")
    invoice = relationship("Invoice", back_populates="time_entries")
