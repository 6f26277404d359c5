"""
The fixed set of cities every job refreshes.

This is the ONLY place the list is declared. The scheduled producer,
the POST /jobs trigger and the GET /weather endpoint all import it,
so the cities fetched never depend on which path created the job.
"""

from jobs.payload import CityTarget

STANDARD_CITIES: tuple[CityTarget, ...] = (
    CityTarget(name="London", latitude=51.5072, longitude=-0.1276),
    CityTarget(name="New York", latitude=40.7128, longitude=-74.0060),
    CityTarget(name="Tokyo", latitude=35.6762, longitude=139.6503),
    CityTarget(name="Cairo", latitude=30.0444, longitude=31.2357),
)

CITY_NAMES: tuple[str, ...] = tuple(city.name for city in STANDARD_CITIES)
