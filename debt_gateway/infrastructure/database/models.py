"""SQLAlchemy ORM models mirroring the hosted store's tables"""

from sqlalchemy import Column, String, Float, DateTime, Integer, ForeignKey, Text
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class House(Base):
    """Building that groups accounts"""

    __tablename__ = "houses"

    id = Column(String, primary_key=True)
    name = Column(Text, nullable=True)
    address = Column(Text, nullable=True)


class Account(Base):
    """Billing/service account"""

    __tablename__ = "accounts"

    id = Column(String, primary_key=True)
    house_id = Column(String, ForeignKey("houses.id"), nullable=True, index=True)
    account_number = Column(Text, nullable=True)
    owner_name = Column(Text, nullable=True)
    address = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=True, server_default=func.now())

    debts = relationship("Debt", back_populates="account")


class Debt(Base):
    """Outstanding debt attached to an account, tracked through stages"""

    __tablename__ = "debt"

    id = Column(Integer, primary_key=True, autoincrement=True)
    account_id = Column(String, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(Float, nullable=False, default=0)
    penalty = Column(Float, nullable=False, default=0)
    debt_term_months = Column(Integer, nullable=True)
    stage = Column(Text, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=True)

    account = relationship("Account", back_populates="debts")


class User(Base):
    """Front-end operator"""

    __tablename__ = "users"

    id = Column(String, primary_key=True)
    user_name = Column(Text, nullable=False, unique=True)
    password = Column(Text, nullable=False)
    full_name = Column(Text, nullable=True)
    role = Column(Text, nullable=True)
