"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (Selenium, ficheros) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from enum import Enum
from pathlib import Path
from typing import Annotated, Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict, SettingsError

from core.domain.errors import ConfigurationError


class BrowserKind(str, Enum):
    """Familias de backend de automatización soportadas."""

    CHROME = "chrome"
    FIREFOX = "firefox"
    SAFARI = "safari"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "regcheck"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "regcheck"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "regcheck"
    return Path.home() / ".config" / "regcheck"


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


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# regcheck user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class AppSettings(BaseSettings):
    """Configuración central del harness.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars): un selector de navegador
      desconocido falla al arrancar, antes de procesar ningún candidato.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="REGCHECK_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    # Navegador
    browser: BrowserKind | None = Field(
        default=None,
        description="Backend de automatización (chrome/firefox/safari).",
    )
    headless: bool = Field(
        default=False,
        description="Lanzar el navegador sin ventana (chrome/firefox).",
    )
    use_driver_manager: bool = Field(
        default=True,
        description="Provisionar el driver con webdriver-manager en vez de buscarlo en PATH.",
    )
    implicit_wait_seconds: float = Field(
        default=2.0,
        ge=0,
        description="Espera implícita para búsquedas de elementos.",
    )
    race_timeout_seconds: float = Field(
        default=2.0,
        gt=0,
        le=60,
        description="Límite de la carrera error vs. reporte tras enviar el formulario.",
    )
    race_poll_seconds: float = Field(
        default=0.1,
        gt=0,
        description="Intervalo de sondeo de la carrera.",
    )

    # Sitio
    entry_url: str = Field(
        default="https://car-checking.com/",
        min_length=8,
        description="Página con el formulario de consulta de matrícula.",
    )
    report_url: str = Field(
        default="https://car-checking.com/report",
        min_length=8,
        description="Destino fijo al que lleva una consulta con éxito.",
    )
    report_url_marker: str = Field(
        default="report",
        min_length=1,
        description="Fragmento de URL que indica que se alcanzó el reporte.",
    )
    locators_path: Path | None = Field(
        default=None,
        description="JSON opcional que sobreescribe los localizadores por defecto.",
    )

    # Ficheros
    input_dir: Path = Field(
        default=Path("data"),
        description="Directorio con los corpus de entrada.",
    )
    input_marker: str = Field(
        default="_input",
        min_length=1,
        description="Marca que debe contener el nombre de un fichero de entrada.",
    )
    input_extensions: Annotated[tuple[str, ...], NoDecode] = Field(
        default=(".txt",),
        min_length=1,
        description="Extensiones reconocidas como texto.",
    )
    candidates_path: Path = Field(
        default=Path("data") / "cleaned_test_data.txt",
        description="Tabla de candidatos producida por el extractor.",
    )
    output_path: Path = Field(
        default=Path("data") / "car_output.txt",
        description="Registro de salida real (se trunca al inicio de cada run).",
    )
    expected_path: Path = Field(
        default=Path("data") / "expected_output.txt",
        description="Línea base esperada (solo lectura).",
    )

    # Logging
    log_level: LogLevel = Field(
        default="INFO",
        description="Nivel de logging (DEBUG/INFO/WARNING/ERROR).",
    )
    log_file: Path | None = Field(
        default=None,
        description="Fichero de log opcional además de la consola.",
    )

    @field_validator("browser", mode="before")
    @classmethod
    def _normalize_browser(cls, value: object) -> object:
        if isinstance(value, str):
            value = value.strip().lower()
            return value or None
        return value

    @field_validator("input_extensions", mode="before")
    @classmethod
    def _split_extensions(cls, value: object) -> object:
        # En env/.env se escribe como lista separada por comas: ".txt,.log".
        if isinstance(value, str):
            return tuple(part.strip() for part in value.split(",") if part.strip())
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value


def load_settings(**overrides: object) -> AppSettings:
    """Construye `AppSettings` convirtiendo errores de validación en `ConfigurationError`."""

    clean = {k: v for k, v in overrides.items() if v is not None}
    try:
        return AppSettings(**clean)
    except (ValidationError, SettingsError) as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc
