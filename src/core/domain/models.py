"""Modelos del dominio (Pydantic v2).

Contenido:
- Payloads devueltos por los servicios externos (diccionario, mapa,
  calidad del aire, how-to), normalizados a estructuras propias.
- Las uniones etiquetadas `Request` y `Response` que recorren el router.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from typing import Annotated, Literal, NamedTuple, Union

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class Coordinate(NamedTuple):
    """Par (longitud, latitud) transitorio de una resolución de calidad del aire."""

    longitude: float
    latitude: float


class Config(BaseModel):
    """Configuración por petición: la credencial del geocodificador."""

    model_config = ConfigDict(frozen=True)

    daummap_app_key: str = Field(
        ...,
        min_length=1,
        description="REST API key de Kakao/Daum Map.",
    )


# ---------------------------------------------------------------------------
# Diccionario
# ---------------------------------------------------------------------------


class DictionaryWord(BaseModel):
    word: str = Field(..., min_length=1)
    meaning: list[str] = Field(default_factory=list)
    pronounce: str | None = None
    lang: str | None = Field(
        default=None,
        description="Etiqueta de idioma del resultado (p.ej. 'en', 'ko', 'ja').",
    )


class DictionarySearch(BaseModel):
    """Resultado de una búsqueda en el diccionario.

    `alternatives` contiene sugerencias ortográficas cuando no hay
    coincidencia exacta.
    """

    words: list[DictionaryWord] = Field(default_factory=list)
    alternatives: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Geocodificación
# ---------------------------------------------------------------------------


class LandLotAddress(BaseModel):
    """Dirección por número de lote (jibun)."""

    address_name: str = ""
    longitude: float | None = None
    latitude: float | None = None


class RoadAddress(BaseModel):
    address_name: str = ""
    building_name: str | None = None
    zone_no: str | None = None


class Address(BaseModel):
    address_name: str = ""
    land_lot: LandLotAddress | None = None
    road_address: RoadAddress | None = None


class Place(BaseModel):
    name: str = ""
    address_name: str = ""
    road_address_name: str | None = None
    category_name: str | None = None
    phone: str | None = None
    url: str | None = None
    longitude: float | None = None
    latitude: float | None = None


# ---------------------------------------------------------------------------
# Calidad del aire
# ---------------------------------------------------------------------------


class Pollutant(BaseModel):
    name: str = Field(..., min_length=1, description="Nombre tal como lo publica la estación (p.ej. 'PM10').")
    unit: str = ""
    data: list[float | None] = Field(
        default_factory=list,
        description="Lecturas horarias, de la más antigua a la más reciente; None si falta.",
    )

    @property
    def latest(self) -> float | None:
        for value in reversed(self.data):
            if value is not None:
                return value
        return None


class AirStatus(BaseModel):
    station_address: str = Field(..., min_length=1)
    pollutants: list[Pollutant] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# How-to
# ---------------------------------------------------------------------------


class HowtoAnswer(BaseModel):
    link: str = Field(..., min_length=1, description="URL de la respuesta en StackOverflow.")
    instruction: str = Field(..., description="Primer bloque de código o, si no hay, el texto completo.")
    full_text: str = ""


# ---------------------------------------------------------------------------
# Peticiones / respuestas
# ---------------------------------------------------------------------------


class DictionaryRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["dictionary"] = "dictionary"
    query: str = Field(..., min_length=1)

    def to_text(self) -> str:
        return f"d {self.query}"


class AirPollutionRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["air_pollution"] = "air_pollution"
    command: str = Field(..., min_length=1, description="Selector de contaminante ('air', 'pm', 'o3', ...).")
    query: str = Field(..., min_length=1, description="Ubicación en texto libre.")

    def to_text(self) -> str:
        return f"{self.command} {self.query}"


class HowToRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["howto"] = "howto"
    query: str = Field(..., min_length=1)

    def to_text(self) -> str:
        return f"h {self.query}"


Request = Annotated[
    Union[DictionaryRequest, AirPollutionRequest, HowToRequest],
    Field(discriminator="kind"),
]


class DictionaryResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["dictionary"] = "dictionary"
    result: DictionarySearch


class AirPollutionResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["air_pollution"] = "air_pollution"
    status: AirStatus


class HowToResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["howto"] = "howto"
    answer: HowtoAnswer


Response = Annotated[
    Union[DictionaryResponse, AirPollutionResponse, HowToResponse],
    Field(discriminator="kind"),
]
