"""Modelos y entidades del dominio.

Aquí viven las estructuras de datos puras y estrictas (Pydantic v2) y el tipo
de error `ApiError`. El dominio no conoce HTTP ni CLI.
"""
