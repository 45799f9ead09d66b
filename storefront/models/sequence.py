# storefront/models/sequence.py

from sqlalchemy import Column, Integer, String, UniqueConstraint
from storefront.utils.database import Base

class Sequence(Base):
    """Счётчик человекочитаемых ID: одна строка на пару (тип, год)."""
    __tablename__ = "sequences"
    __table_args__ = (UniqueConstraint("entity", "year", name="uq_sequence_entity_year"),)

    id = Column(Integer, primary_key=True)
    entity = Column(String, nullable=False)    # ORD / PRD
    year = Column(Integer, nullable=False)
    value = Column(Integer, nullable=False, default=0)
