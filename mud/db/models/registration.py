"""
Registration Database Model

One row per registered account.
"""

from sqlalchemy import Boolean, Column, LargeBinary, Text, Uuid
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class RegistrationRecord(Base):
    __tablename__ = "registrations"

    id = Column(Uuid(as_uuid=True), primary_key=True)
    name = Column(Text, nullable=False)
    email = Column(Text, nullable=False, index=True)
    timezone = Column(Text, nullable=False, default="UTC")
    password = Column(LargeBinary, nullable=False)
    short_bio = Column("shortbio", Text, nullable=False, default="")
    validated = Column(Boolean, nullable=False, default=False)
