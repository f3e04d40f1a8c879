from sqlalchemy import select

from models.experience import Experience
from services.errors import ExperienceNotFound


class CatalogService:
    """Read-only access to experience metadata."""

    def __init__(self, session):
        self.session = session

    def list_experiences(self):
        return list(self.session.execute(select(Experience).order_by(Experience.id.asc())).scalars())

    def get_experience(self, experience_id: int) -> Experience:
        experience = self.session.get(Experience, experience_id)
        if experience is None:
            raise ExperienceNotFound("Experience not found")
        return experience
