"""Adaptadores de infraestructura (Selenium, ficheros)."""
