"""Servidor FTP con canal de control textual y una conexión de datos por transferencia."""

__version__ = "0.1.0"
