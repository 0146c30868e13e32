"""Contratos de los servicios de consulta externos.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Los adaptadores HTTP y los dobles de test en memoria son intercambiables.

Reglas de diseño:
- Todas las consultas son asíncronas porque hacen I/O (HTTP).
- Los geocodificadores devuelven secuencias perezosas (`AsyncIterator`): el
  consumidor deja de iterar en cuanto encuentra un candidato útil.
"""

from __future__ import annotations

from typing import AsyncIterator, Protocol, runtime_checkable

from core.domain.models import Address, AirStatus, DictionarySearch, HowtoAnswer, Place


@runtime_checkable
class DictionaryLookup(Protocol):
    async def search(self, query: str) -> DictionarySearch:
        """Busca `query` en el diccionario; falla si no hay entrada."""

        ...


@runtime_checkable
class AddressGeocoder(Protocol):
    def search_address(self, app_key: str, query: str) -> AsyncIterator[Address]:
        """Candidatos de dirección para `query`, página a página."""

        ...


@runtime_checkable
class KeywordGeocoder(Protocol):
    def search_keyword(self, app_key: str, query: str) -> AsyncIterator[Place]:
        """Lugares (búsqueda por palabra clave) para `query`, página a página."""

        ...


@runtime_checkable
class AirStationLookup(Protocol):
    async def search(self, longitude: float, latitude: float) -> AirStatus:
        """Estado de la estación de medición más cercana a la coordenada."""

        ...


@runtime_checkable
class HowtoLookup(Protocol):
    async def first_answer(self, query: str) -> HowtoAnswer | None:
        """Primera respuesta disponible; `None` es un resultado válido."""

        ...
