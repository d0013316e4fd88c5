from sqlalchemy import Column, Date, Float, Integer, String

from app.db.session import Base


class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    phone = Column(String(20), nullable=True)
    date_of_birth = Column(Date, nullable=True)
    enrollment_date = Column(Date, nullable=True)
    address = Column(String(200), nullable=True)
    grade_level = Column(Integer, nullable=True, index=True)
    gpa = Column(Float, nullable=True)
