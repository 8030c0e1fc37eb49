"""Core: dominio, contratos, configuración y servicios."""
