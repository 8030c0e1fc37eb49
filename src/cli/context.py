"""Opciones globales de la CLI.

El callback raíz guarda los overrides en `ctx.obj`; cada comando (también los
del sub-app `doctor`) construye `AppSettings` a partir de ellos.
"""

from __future__ import annotations

from typing import Any

import typer

from core.config import AppSettings, load_settings


def root_overrides(ctx: typer.Context) -> dict[str, Any]:
    root = ctx.find_root()
    obj = root.obj if isinstance(root.obj, dict) else {}
    return dict(obj)


def settings_from_context(ctx: typer.Context, **extra: Any) -> AppSettings:
    overrides = root_overrides(ctx)
    overrides.update({k: v for k, v in extra.items() if v is not None})
    return load_settings(**overrides)
