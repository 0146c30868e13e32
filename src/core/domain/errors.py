"""Taxonomía cerrada de errores del router.

Cada error conserva la entrada que lo provocó en `value`; `str(err)` es el
diagnóstico que se muestra al usuario.
"""

from __future__ import annotations


class RequestError(Exception):
    """Base de los errores de clasificación/resolución de peticiones."""

    template = "{}"

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(self.template.format(value))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RequestError):
            return NotImplemented
        return type(self) is type(other) and self.value == other.value

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.value))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value!r})"


class CannotParseRequest(RequestError):
    template = "cannot parse request {}"


class AddressNotFound(RequestError):
    template = "address is not found for {}"


class InvalidAirkoreaCommand(RequestError):
    template = "{} is not a valid command for airkorea"


class HowtoNotFound(RequestError):
    template = "answer is not found for {}"
