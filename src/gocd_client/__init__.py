"""Cliente tipado para la API REST versionada de GoCD."""

__version__ = "0.1.0"
