"""Subjects taught at the school (e.g. Mathematics, Physics)."""

from sqlalchemy import Column, Integer, String

from app.db.session import Base


class Subject(Base):
    __tablename__ = "subjects"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False, unique=True)
    description = Column(String(500), nullable=True)
    credits = Column(Integer, nullable=True)
