"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras y estrictas (Pydantic v2) y la
  taxonomía de errores del router.
- El dominio no conoce HTTP, CLI, ni SDKs: solo conceptos del problema.
"""
