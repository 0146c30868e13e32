"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan adaptadores concretos.
- Permite invertir dependencias: el Core depende de abstracciones.
"""

from core.interfaces.lookups import (
    AddressGeocoder,
    AirStationLookup,
    DictionaryLookup,
    HowtoLookup,
    KeywordGeocoder,
)

__all__ = [
    "AddressGeocoder",
    "AirStationLookup",
    "DictionaryLookup",
    "HowtoLookup",
    "KeywordGeocoder",
]
