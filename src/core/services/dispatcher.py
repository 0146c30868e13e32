"""Request dispatch.

Each parsed request is routed to exactly one resolver and the outcome is
wrapped in the response variant matching the request variant. The
dispatcher holds only its (stateless) collaborators, so one instance can
serve any number of concurrent requests.
"""

from __future__ import annotations

import logging

from adapters.airkorea import AirKoreaClient
from adapters.daumdic import DaumDicClient
from adapters.daummap import DaumMapClient
from adapters.howto import HowtoClient
from core.config import AppSettings, MissingCredentialError
from core.domain.errors import HowtoNotFound
from core.domain.models import (
    AirPollutionRequest,
    AirPollutionResponse,
    Config,
    DictionaryRequest,
    DictionaryResponse,
    HowToRequest,
    HowToResponse,
    Request,
    Response,
)
from core.interfaces.lookups import (
    AddressGeocoder,
    AirStationLookup,
    DictionaryLookup,
    HowtoLookup,
    KeywordGeocoder,
)
from core.services.air_quality import AirQualityResolver
from core.services.intent_parser import parse_request

logger = logging.getLogger(__name__)


class RequestDispatcher:
    def __init__(
        self,
        *,
        dictionary: DictionaryLookup,
        address_geocoder: AddressGeocoder,
        keyword_geocoder: KeywordGeocoder,
        air_stations: AirStationLookup,
        howto: HowtoLookup,
    ) -> None:
        self._dictionary = dictionary
        self._howto = howto
        self._air = AirQualityResolver(
            address_geocoder=address_geocoder,
            keyword_geocoder=keyword_geocoder,
            air_stations=air_stations,
        )

    async def resolve(self, request: Request, config: Config | None = None) -> Response:
        """Resolve `request`; raises `RequestError` or a collaborator error.

        `config` is only consulted by air-pollution requests, which fail with
        `MissingCredentialError` when it is absent.
        """

        logger.debug("resolving %s request", request.kind)

        if isinstance(request, DictionaryRequest):
            result = await self._dictionary.search(request.query)
            return DictionaryResponse(result=result)

        if isinstance(request, AirPollutionRequest):
            if config is None:
                raise MissingCredentialError("air-pollution requests need a daummap app key")
            status = await self._air.search(request.command, request.query, config.daummap_app_key)
            return AirPollutionResponse(status=status)

        if isinstance(request, HowToRequest):
            answer = await self._howto.first_answer(request.query)
            if answer is None:
                raise HowtoNotFound(request.query)
            return HowToResponse(answer=answer)

        raise TypeError(f"unsupported request type: {type(request).__name__}")

    async def handle(self, text: str, config: Config | None = None) -> Response:
        """Parse `text` and resolve it in one step."""

        return await self.resolve(parse_request(text), config)


def build_dispatcher(settings: AppSettings | None = None) -> RequestDispatcher:
    """Wire the default HTTP-backed collaborators."""

    settings = settings or AppSettings()
    daummap = DaumMapClient(settings)
    return RequestDispatcher(
        dictionary=DaumDicClient(settings),
        address_geocoder=daummap,
        keyword_geocoder=daummap,
        air_stations=AirKoreaClient(settings),
        howto=HowtoClient(settings),
    )
