from sqlalchemy import Column, Date, Integer, String

from app.db.base import Base


class Job(Base):
    """
    Job posting.

    ``j_u_id`` points at the posting user but is not enforced as a foreign
    key: deleting a user leaves its jobs in place.
    """

    __tablename__ = "jobs"

    j_id = Column(Integer, primary_key=True, index=True)
    j_title = Column(String, nullable=False)
    j_company = Column(String)
    j_location = Column(String)
    j_type = Column(String)  # "Full-time", "Part-time", "Contract"
    j_link = Column(String)  # External application URL
    j_salary = Column(String)
    j_date = Column(Date, index=True)  # Posting date
    j_contact = Column(String)
    j_u_id = Column(Integer, index=True)
