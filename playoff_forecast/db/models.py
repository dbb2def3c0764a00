"""
SQLAlchemy database models.
"""

from datetime import datetime, timezone
from sqlalchemy import String, Integer, DateTime, Text, Index
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all database models."""
    pass


class ForecastCache(Base):
    """Cache for forecast results with TTL."""

    __tablename__ = "forecast_cache"

    id: Mapped[int] = mapped_column(primary_key=True)
    platform: Mapped[str] = mapped_column(String(50), nullable=False)
    league_id: Mapped[str] = mapped_column(String(100), nullable=False)
    sport: Mapped[str] = mapped_column(String(50), nullable=False, default="football")
    week: Mapped[int] = mapped_column(Integer, nullable=False)
    rating_mode: Mapped[str] = mapped_column(String(20), nullable=False, default="standard")
    n_trials: Mapped[int] = mapped_column(Integer, nullable=False)
    results_json: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc)
    )
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index("ix_forecast_cache_lookup", "platform", "league_id", "sport", "week", "rating_mode", "n_trials"),
    )

    def __repr__(self) -> str:
        return f"<ForecastCache(platform={self.platform}, league_id={self.league_id}, week={self.week}, mode={self.rating_mode})>"

    @property
    def is_expired(self) -> bool:
        """Check if the cache entry has expired."""
        expires_at = self.expires_at
        # SQLite hands back naive datetimes
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        return datetime.now(timezone.utc) > expires_at
