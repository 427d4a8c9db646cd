"""Configuración del cliente.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- El transporte HTTP y la CLI leen la misma config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from enum import Enum
from pathlib import Path

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gocd_client.core.errors import ConfigurationError


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "gocd-client"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "gocd-client"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "gocd-client"
    return Path.home() / ".config" / "gocd-client"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# gocd-client user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class ClientSettings(BaseSettings):
    """Configuración central del cliente GoCD.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="GOCD_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    server_url: str = Field(
        default="http://localhost:8153",
        min_length=8,
        description="URL base del servidor GoCD (sin /go).",
    )
    username: str | None = Field(
        default=None,
        description="Usuario para basic auth (opcional).",
    )
    password: str | None = Field(
        default=None,
        description="Password o token para basic auth (opcional).",
    )
    verify_tls: bool = Field(
        default=True,
        description="Verificar certificados TLS del servidor.",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    request_deadline_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Deadline total por operación (resolución + dispatch).",
    )
    user_agent: str = Field(
        default="gocd-client/0.1",
        min_length=1,
        description="User-Agent de las peticiones.",
    )
    log_level: LogLevel = Field(
        default=LogLevel.WARNING,
        description="Nivel de logging de la CLI.",
    )

    @field_validator("server_url")
    @classmethod
    def _normalize_server_url(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith(("http://", "https://")):
            raise ValueError("server_url must start with http:// or https://")
        return value.rstrip("/")

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    @property
    def api_base_url(self) -> str:
        """Raíz de la API REST: `<server_url>/go/api/`."""

        return f"{self.server_url}/go/api/"

    @property
    def has_credentials(self) -> bool:
        return bool(self.username) and self.password is not None


def load_settings(**overrides: object) -> ClientSettings:
    """Construye `ClientSettings` traduciendo errores de validación.

    Un env var mal formado (p.ej. `GOCD_SERVER_URL=ftp://...`) se reporta como
    `ConfigurationError` con el campo afectado, no como traceback de pydantic.
    """

    try:
        return ClientSettings(**overrides)
    except ValidationError as exc:
        errors = exc.errors()
        first = errors[0] if errors else {}
        field = ".".join(str(p) for p in first.get("loc", ())) or None
        message = str(first.get("msg", "invalid configuration"))
        if field:
            message = f"Invalid setting '{field}': {message}"
        raise ConfigurationError(message, field=field) from exc
