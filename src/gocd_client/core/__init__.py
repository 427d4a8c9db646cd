"""Core: dominio, contratos, configuración y errores.

No depende de httpx ni de la CLI; los adaptadores implementan sus contratos.
"""
