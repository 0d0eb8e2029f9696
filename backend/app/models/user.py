from sqlalchemy import Column, Date, Integer, String

from app.db.base import Base


class User(Base):
    """Registered user who can sign in and post jobs."""

    __tablename__ = "users"

    u_id = Column(Integer, primary_key=True, index=True)
    u_firstname = Column(String, nullable=False)
    u_lastname = Column(String, nullable=False)
    # Unique at the store level; the pre-registration check is advisory only
    u_email = Column(String, unique=True, index=True, nullable=False)
    u_password = Column(String, nullable=False)  # bcrypt hash
    u_gender = Column(String)
    u_dob = Column(Date)

    # Profile fields, filled in after signup
    u_title = Column(String, nullable=True)
    u_qualification = Column(String, nullable=True)
