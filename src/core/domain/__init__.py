"""Modelos y entidades del dominio.

Estructuras de datos puras (Pydantic v2) y errores del problema; el dominio
no conoce HTTP, CLI ni cookie stores concretos.
"""
