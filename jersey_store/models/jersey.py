"""Jersey model."""

from sqlalchemy import Column, DateTime, Float, String

from jersey_store.database import Base


class Jersey(Base):
    """Jersey database model."""

    __tablename__ = "jerseys"

    id = Column(String(32), primary_key=True)

    team = Column(String(200), nullable=False)
    country = Column(String(100), nullable=False)
    price = Column(Float, nullable=False)
    image_url = Column(String(2000), nullable=False)

    # Metadata, set by the store and never taken from the client
    created_at = Column(DateTime, nullable=False, index=True)
    updated_at = Column(DateTime, nullable=False)

    def __repr__(self) -> str:
        return f"<Jersey {self.team} ({self.country})>"
