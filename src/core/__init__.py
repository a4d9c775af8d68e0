"""Core del cliente Arpio: dominio, contratos, errores y servicios puros."""

__version__ = "0.1.0"
