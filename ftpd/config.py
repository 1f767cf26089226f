import argparse
import os
from dataclasses import dataclass
from typing import Optional

from ftpd.entities.data_connection import DATA_CONNECTION_TIMEOUT
from ftpd.entities.user_manager import get_users_file_path

CONTROL_PORT = 21
DEFAULT_MAX_WORKERS = 10


def _env_bool(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = CONTROL_PORT
    max_workers: int = DEFAULT_MAX_WORKERS
    backlog: int = 5
    users_file: Optional[str] = None
    data_timeout: float = DATA_CONNECTION_TIMEOUT
    pasv_address: Optional[str] = None
    hold_passive_listener: bool = False
    log_level: str = "INFO"


def build_arg_parser():
    parser = argparse.ArgumentParser(description="FTP server")
    parser.add_argument("--host", default=os.getenv("FTPD_HOST", "0.0.0.0"), help="Dirección de escucha")
    parser.add_argument("--port", type=int, default=int(os.getenv("FTPD_PORT", CONTROL_PORT)), help="Puerto de control")
    parser.add_argument("--workers", type=int, default=int(os.getenv("FTPD_WORKERS", DEFAULT_MAX_WORKERS)),
                        help="Cantidad máxima de sesiones atendidas a la vez")
    parser.add_argument("--users-file", default=os.getenv("FTPD_USERS_FILE"),
                        help="Archivo JSON de usuarios (por defecto ./users.json)")
    parser.add_argument("--data-timeout", type=float,
                        default=float(os.getenv("FTPD_DATA_TIMEOUT", DATA_CONNECTION_TIMEOUT)),
                        help="Segundos de espera de la conexión de datos en modo pasivo")
    parser.add_argument("--pasv-address", default=os.getenv("FTPD_PASV_ADDRESS"),
                        help="IP a anunciar en PASV (por defecto la IP local del socket de control)")
    parser.add_argument("--hold-pasv-listener", action="store_true", default=_env_bool("FTPD_HOLD_PASV"),
                        help="Mantener abierto el socket PASV entre la negociación y la transferencia")
    parser.add_argument("--log-level", default=os.getenv("FTPD_LOG_LEVEL", "INFO"))
    return parser


def load_config(argv=None) -> ServerConfig:
    """Construye la configuración: flag > variable de entorno > valor por defecto."""
    args = build_arg_parser().parse_args(argv)
    return ServerConfig(
        host=args.host,
        port=args.port,
        max_workers=args.workers,
        users_file=args.users_file or get_users_file_path(),
        data_timeout=args.data_timeout,
        pasv_address=args.pasv_address,
        hold_passive_listener=args.hold_pasv_listener,
        log_level=args.log_level.upper(),
    )
