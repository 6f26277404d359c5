"""
Weather Observation Store: the weather_data table.

Last-write-wins per city: upsert() overwrites the whole row keyed by
city and stamps updated_at with the local write time.
"""

from datetime import datetime, timezone
from typing import Iterable, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import async_sessionmaker

from models.weather import WeatherObservation
from stores.dialect import upsert_insert


class WeatherStore:

    def __init__(self, session_factory: async_sessionmaker):
        self._session_factory = session_factory

    async def upsert(
        self,
        city: str,
        temperature: float,
        wind_speed: float,
        observed_at: datetime,
    ) -> None:
        async with self._session_factory() as session:
            stmt = upsert_insert(session, WeatherObservation).values(
                city=city,
                temperature=temperature,
                wind_speed=wind_speed,
                observed_at=observed_at,
                updated_at=datetime.now(timezone.utc),
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=["city"],
                set_={
                    "temperature": stmt.excluded.temperature,
                    "wind_speed": stmt.excluded.wind_speed,
                    "observed_at": stmt.excluded.observed_at,
                    "updated_at": stmt.excluded.updated_at,
                },
            )
            await session.execute(stmt)
            await session.commit()

    async def get(self, city: str) -> Optional[WeatherObservation]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(WeatherObservation).where(WeatherObservation.city == city)
            )
            return result.scalar_one_or_none()

    async def for_cities(self, names: Iterable[str]) -> dict[str, WeatherObservation]:
        """Rows for the given cities, keyed by city. Missing cities are absent."""
        names = list(names)
        async with self._session_factory() as session:
            result = await session.execute(
                select(WeatherObservation).where(WeatherObservation.city.in_(names))
            )
            return {row.city: row for row in result.scalars().all()}

    async def last_sync(self, names: Iterable[str]) -> Optional[datetime]:
        """Latest local write time across the given cities."""
        async with self._session_factory() as session:
            return await session.scalar(
                select(func.max(WeatherObservation.updated_at))
                .where(WeatherObservation.city.in_(list(names)))
            )
