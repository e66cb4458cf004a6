from datetime import datetime
from enum import Enum
from sqlalchemy import Column, Integer, String, JSON, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from recruitment.database import Base


class CompanyStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    SUSPENDED = "SUSPENDED"


class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    OVERDUE = "OVERDUE"


class Company(Base):
    __tablename__ = 'companies'

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), unique=True, nullable=False)
    company_name = Column(String(255), nullable=False)
    display_name = Column(String(255))
    status = Column(String(20), nullable=False, default=CompanyStatus.INACTIVE.value)
    payment_status = Column(String(20), nullable=False, default=PaymentStatus.PENDING.value)
    styling = Column(JSON)  # Colours / logo for the public apply page
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    user = relationship("User", back_populates="company")
    jobs = relationship("Job", back_populates="company", cascade="all, delete-orphan")
    applications = relationship("Application", back_populates="company", cascade="all, delete-orphan")

    @property
    def public_name(self):
        return self.display_name or self.company_name

    def __repr__(self):
        return f"<Company(id={self.id}, company_name={self.company_name}, status={self.status})>"
