"""Adaptadores de I/O: HTTP (httpx) y cookie stores de navegador (rookiepy)."""
