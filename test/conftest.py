"""
Root conftest.py: markers and in-memory collaborators shared by the suite.
"""
from __future__ import annotations

from typing import AsyncIterator

import pytest

from core.domain.models import (
    Address,
    AirStatus,
    Config,
    DictionarySearch,
    DictionaryWord,
    HowtoAnswer,
    LandLotAddress,
    Place,
    Pollutant,
)
from core.services.dispatcher import RequestDispatcher


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (require live services)"
    )


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------

class FakeDictionary:
    def __init__(self, result: DictionarySearch | None = None, error: Exception | None = None):
        self.result = result or DictionarySearch(
            words=[DictionaryWord(word="hello", meaning=["안녕하세요"], lang="en")]
        )
        self.error = error
        self.queries: list[str] = []

    async def search(self, query: str) -> DictionarySearch:
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return self.result


class FakeGeocoder:
    """Address and keyword geocoder backed by lists; records every call."""

    def __init__(
        self,
        addresses: list[Address] | None = None,
        places: list[Place] | None = None,
        address_error: Exception | None = None,
        keyword_error: Exception | None = None,
    ):
        self.addresses = addresses or []
        self.places = places or []
        self.address_error = address_error
        self.keyword_error = keyword_error
        self.calls: list[tuple[str, str, str]] = []
        self.yielded = 0

    async def search_address(self, app_key: str, query: str) -> AsyncIterator[Address]:
        self.calls.append(("address", app_key, query))
        if self.address_error is not None:
            raise self.address_error
        for address in self.addresses:
            self.yielded += 1
            yield address

    async def search_keyword(self, app_key: str, query: str) -> AsyncIterator[Place]:
        self.calls.append(("keyword", app_key, query))
        if self.keyword_error is not None:
            raise self.keyword_error
        for place in self.places:
            self.yielded += 1
            yield place


class FakeAirStations:
    def __init__(self, status: AirStatus | None = None):
        self.status = status or AirStatus(
            station_address="서울 중구 덕수궁길 15",
            pollutants=[
                Pollutant(name="PM10", unit="㎍/㎥", data=[31.0, 35.0]),
                Pollutant(name="PM25", unit="㎍/㎥", data=[12.0, None]),
                Pollutant(name="O3", unit="ppm", data=[0.021]),
            ],
        )
        self.calls: list[tuple[float, float]] = []

    async def search(self, longitude: float, latitude: float) -> AirStatus:
        self.calls.append((longitude, latitude))
        return self.status


class FakeHowto:
    def __init__(self, answer: HowtoAnswer | None = None):
        self.answer = answer
        self.queries: list[str] = []

    async def first_answer(self, query: str) -> HowtoAnswer | None:
        self.queries.append(query)
        return self.answer


def address_at(longitude: float | None, latitude: float | None) -> Address:
    return Address(
        address_name="서울 중구 태평로1가 31",
        land_lot=LandLotAddress(address_name="서울 중구 태평로1가 31", longitude=longitude, latitude=latitude),
    )


def place_at(longitude: float | None, latitude: float | None, name: str = "서울시청") -> Place:
    return Place(name=name, address_name="서울 중구 태평로1가 31", longitude=longitude, latitude=latitude)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def config() -> Config:
    return Config(daummap_app_key="test-app-key")


@pytest.fixture()
def dictionary() -> FakeDictionary:
    return FakeDictionary()


@pytest.fixture()
def geocoder() -> FakeGeocoder:
    return FakeGeocoder(addresses=[address_at(126.9779, 37.5663)])


@pytest.fixture()
def air_stations() -> FakeAirStations:
    return FakeAirStations()


@pytest.fixture()
def howto() -> FakeHowto:
    return FakeHowto(
        HowtoAnswer(
            link="https://stackoverflow.com/questions/1/boil-an-egg/2#2",
            instruction="put the egg in boiling water for 7 minutes",
            full_text="put the egg in boiling water for 7 minutes",
        )
    )


@pytest.fixture()
def dispatcher(dictionary, geocoder, air_stations, howto) -> RequestDispatcher:
    return RequestDispatcher(
        dictionary=dictionary,
        address_geocoder=geocoder,
        keyword_geocoder=geocoder,
        air_stations=air_stations,
        howto=howto,
    )
