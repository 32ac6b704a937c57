"""Core del cliente: configuración, errores, dominio y servicios.

Por qué:
- El core no conoce httpx ni la CLI; solo contratos y conceptos del problema.
"""
