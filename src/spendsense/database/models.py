"""SQLAlchemy models for spendsense database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    ForeignKey,
    DateTime,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class User(Base):
    """User account model."""

    __tablename__ = "users"

    id = Column(String, primary_key=True)
    username = Column(String, unique=True, nullable=False)
    email = Column(String, nullable=False)
    password = Column(String, nullable=False)
    role = Column(String, default="user", nullable=False)
    theme = Column(String, default="Light Blue", nullable=False)
    font = Column(String, default="inter", nullable=False)
    profile = Column(Text, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    datasets = relationship("Dataset", back_populates="user", cascade="all, delete-orphan")


class Dataset(Base):
    """One serialized collection per user, e.g. the user's transactions."""

    __tablename__ = "datasets"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False)
    name = Column(String, nullable=False)
    payload = Column(Text, nullable=False)
    updated_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (UniqueConstraint("user_id", "name", name="uq_user_dataset"),)

    # Relationships
    user = relationship("User", back_populates="datasets")


class AppSession(Base):
    """Single-row login state."""

    __tablename__ = "app_session"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=True)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
