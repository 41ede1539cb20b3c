"""Contract table model."""

from uuid import uuid4

from sqlalchemy import Column, Date, DateTime, ForeignKey, Index, String
from sqlalchemy.sql import func

from promissio.core.database import Base


class ContractModel(Base):
    """
    Licensing contract row.

    Only the columns read by this service are mapped; the contract registry
    owns the full schema.
    """

    __tablename__ = "contracts"
    __table_args__ = (
        Index("idx_contracts_status_end_date", "status", "end_date"),
        Index("idx_contracts_created_at", "created_at"),
    )

    id = Column(String, primary_key=True, default=lambda: str(uuid4()))
    partner = Column(String, nullable=False)
    content = Column(String)
    status = Column(String, nullable=False, default="Pending")
    start_date = Column(Date)
    end_date = Column(Date)
    created_at = Column(DateTime, nullable=False, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())
    created_by = Column(String, ForeignKey("users.id"))
