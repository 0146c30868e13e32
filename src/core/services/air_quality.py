"""Air-quality resolution: location text -> coordinate -> station -> pollutants.

Coordinate resolution runs two geocoding stages in sequence. The address
geocoder is tried first; any failure there (no coordinate-bearing candidate,
HTTP error, malformed payload) is logged and replaced by a keyword/place
search for the same text. Only a failure of the second stage reaches the
caller.

The station lookup always returns the full pollutant set, so selection by
command happens here, after the fetch.
"""

from __future__ import annotations

import logging
from typing import AsyncIterator, Callable, Iterable, TypeVar

from core.domain.errors import AddressNotFound, InvalidAirkoreaCommand
from core.domain.models import AirStatus, Coordinate, Pollutant
from core.interfaces.lookups import AddressGeocoder, AirStationLookup, KeywordGeocoder
from core.services.coordinates import coordinate_from_address, coordinate_from_place

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def first_coordinate(
    candidates: AsyncIterator[T],
    extract: Callable[[T], Coordinate | None],
) -> Coordinate | None:
    """Return the first coordinate `extract` yields, closing `candidates` afterwards."""

    try:
        async for candidate in candidates:
            coordinate = extract(candidate)
            if coordinate is not None:
                return coordinate
        return None
    finally:
        aclose = getattr(candidates, "aclose", None)
        if aclose is not None:
            await aclose()


def filter_pollutants(command: str, pollutants: Iterable[Pollutant]) -> list[Pollutant]:
    """Select the readings a command asks for.

    - `air` keeps everything.
    - `pm` keeps names containing `PM` (exact case).
    - any other token keeps names whose lower-cased form contains it.
    """

    if command == "air":
        return list(pollutants)
    if command == "pm":
        return [p for p in pollutants if "PM" in p.name]
    return [p for p in pollutants if command in p.name.lower()]


class AirQualityResolver:
    """Resolve an air-pollution command against the geocoders and the station service."""

    def __init__(
        self,
        *,
        address_geocoder: AddressGeocoder,
        keyword_geocoder: KeywordGeocoder,
        air_stations: AirStationLookup,
    ) -> None:
        self._address_geocoder = address_geocoder
        self._keyword_geocoder = keyword_geocoder
        self._air_stations = air_stations

    async def _by_address(self, query: str, app_key: str) -> Coordinate:
        coordinate = await first_coordinate(
            self._address_geocoder.search_address(app_key, query),
            coordinate_from_address,
        )
        if coordinate is None:
            raise AddressNotFound(query)
        return coordinate

    async def _by_keyword(self, query: str, app_key: str) -> Coordinate:
        coordinate = await first_coordinate(
            self._keyword_geocoder.search_keyword(app_key, query),
            coordinate_from_place,
        )
        if coordinate is None:
            raise AddressNotFound(query)
        return coordinate

    async def resolve_coordinate(self, query: str, app_key: str) -> Coordinate:
        try:
            coordinate = await self._by_address(query, app_key)
        except Exception as exc:
            logger.debug("address geocoding gave nothing for %r (%r); trying keyword search", query, exc)
        else:
            logger.debug("address geocoding resolved %r to %s", query, coordinate)
            return coordinate

        coordinate = await self._by_keyword(query, app_key)
        logger.debug("keyword search resolved %r to %s", query, coordinate)
        return coordinate

    async def search(self, command: str, query: str, app_key: str) -> AirStatus:
        longitude, latitude = await self.resolve_coordinate(query, app_key)
        status = await self._air_stations.search(longitude, latitude)
        logger.debug(
            "station %r reported %d pollutants",
            status.station_address,
            len(status.pollutants),
        )

        pollutants = filter_pollutants(command, status.pollutants)
        if not pollutants:
            raise InvalidAirkoreaCommand(command)

        return AirStatus(station_address=status.station_address, pollutants=pollutants)
