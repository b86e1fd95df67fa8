"""SQLAlchemy database models."""
from sqlalchemy import Column, Integer, String

from tagcloud.database import Base


class Tag(Base):
    """A tag string and how many times it has been submitted."""
    __tablename__ = "tags"

    id = Column(Integer, primary_key=True, index=True)
    tag = Column(String, nullable=False, unique=True)
    count = Column(Integer, nullable=False, default=1, server_default="1")
