"""Servicios del Core: resolución de credenciales y pipeline de descarga."""
