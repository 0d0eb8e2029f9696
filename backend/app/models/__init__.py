from app.models.user import User
from app.models.job import Job

__all__ = ["User", "Job"]
