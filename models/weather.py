"""
WeatherObservation ORM model: maps to the "weather_data" table.

One row per city (city is UNIQUE). Every successful fetch overwrites
the previous row; no history is kept.

Two timestamps on purpose:
- observed_at: when Open-Meteo says the reading was taken
- updated_at: when WE wrote the row (drives the "last sync" value)
"""

from datetime import datetime

from sqlalchemy import DateTime, Float, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class WeatherObservation(Base):
    __tablename__ = "weather_data"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    city: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    temperature: Mapped[float] = mapped_column(Float, nullable=False)   # °C
    wind_speed: Mapped[float] = mapped_column(Float, nullable=False)    # km/h
    observed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        return f"<WeatherObservation {self.city} {self.temperature}°C>"
