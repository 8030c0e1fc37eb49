"""Servicios del Core: extracción, verificación, reconciliación y ciclo de vida de sesión."""
