"""Extracción de coordenadas desde candidatos del geocodificador.

Funciones puras: devuelven `None` cuando falta cualquiera de las dos
componentes; el llamador lo interpreta como "probar el siguiente candidato".
"""

from __future__ import annotations

from core.domain.models import Address, Coordinate, Place


def _join(longitude: float | None, latitude: float | None) -> Coordinate | None:
    if longitude is None or latitude is None:
        return None
    return Coordinate(longitude, latitude)


def coordinate_from_address(address: Address) -> Coordinate | None:
    """Coordenada del sub-registro por lote (jibun), si está completa."""

    land_lot = address.land_lot
    if land_lot is None:
        return None
    return _join(land_lot.longitude, land_lot.latitude)


def coordinate_from_place(place: Place) -> Coordinate | None:
    return _join(place.longitude, place.latitude)
