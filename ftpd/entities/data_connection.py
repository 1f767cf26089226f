import logging
import socket
import time
from enum import Enum
from typing import Optional

from ftpd.entities.file_system_manager import list_directory_detailed

logger = logging.getLogger(__name__)

DATA_CONNECTION_TIMEOUT = 10.0
TRANSFER_BUFFER_SIZE = 4096


class DataMode(Enum):
    UNSET = "UNSET"
    ACTIVE = "ACTIVE"
    PASSIVE = "PASSIVE"


class DataConnectionManager:
    """
    Maneja la conexión de datos de una sesión (una por transferencia).

    El modo negociado (PORT/EPRT o PASV) persiste tras cada transferencia, así
    que el cliente puede reutilizarlo sin renegociar.
    """

    def __init__(self, accept_timeout: float = DATA_CONNECTION_TIMEOUT, hold_passive_listener: bool = False):
        self.accept_timeout = accept_timeout
        self.hold_passive_listener = hold_passive_listener

        self.mode = DataMode.UNSET
        self.active_target: Optional[tuple] = None
        self.passive_port: Optional[int] = None
        self._passive_listener: Optional[socket.socket] = None

    # ----------------- negotiation -----------------
    def set_active_target(self, host: str, port: int):
        """Modo activo: sólo guarda el destino, no conecta todavía."""
        self._close_passive_listener()
        self.mode = DataMode.ACTIVE
        self.active_target = (host, port)
        self.passive_port = None
        logger.info("Active mode target set to %s:%d", host, port)

    def reserve_port(self) -> int:
        """
        Modo pasivo: obtiene un puerto efímero del sistema.

        Por defecto el socket se cierra enseguida y el puerto se vuelve a abrir
        en `accept_on_port()`; mientras tanto otro proceso podría ocuparlo.
        Con `hold_passive_listener` el socket queda abierto hasta la
        transferencia.
        """
        self._close_passive_listener()

        listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            listener.bind(('', 0))
            port = listener.getsockname()[1]
            if self.hold_passive_listener:
                listener.listen(1)
                self._passive_listener = listener
                listener = None
        finally:
            if listener is not None:
                listener.close()

        self.mode = DataMode.PASSIVE
        self.passive_port = port
        self.active_target = None
        logger.info("Passive port %d reserved", port)
        return port

    def accept_on_port(self) -> Optional[socket.socket]:
        """
        Escucha en el puerto reservado y espera una única conexión.

        El socket de escucha se cierra siempre. Retorna None si vence el timeout.
        """
        listener = self._passive_listener
        self._passive_listener = None

        if listener is None:
            listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
            try:
                listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
                listener.bind(('', self.passive_port))
                listener.listen(1)
            except OSError:
                listener.close()
                raise

        try:
            listener.settimeout(self.accept_timeout)
            data_conn, data_addr = listener.accept()
            data_conn.settimeout(None)
            logger.info("Passive data connection accepted from %s on port %d", data_addr, self.passive_port)
            return data_conn

        except socket.timeout:
            logger.warning("No data connection on port %d after %.1fs", self.passive_port, self.accept_timeout)
            return None

        finally:
            listener.close()

    def open_data_connection(self) -> Optional[socket.socket]:
        """Devuelve un socket de datos listo, o None si no hay modo negociado.

        Lanza OSError si falla el connect (activo) o el bind (pasivo).
        """
        if self.mode is DataMode.ACTIVE:
            host, port = self.active_target
            logger.info("Connecting to active data target %s:%d", host, port)
            return socket.create_connection((host, port))

        if self.mode is DataMode.PASSIVE:
            return self.accept_on_port()

        return None

    def close(self):
        """Libera recursos al terminar la sesión."""
        self._close_passive_listener()

    def _close_passive_listener(self):
        if self._passive_listener is not None:
            try:
                self._passive_listener.close()
            except OSError:
                logger.debug("Error closing held passive listener", exc_info=True)
            self._passive_listener = None

    # ----------------- transfers -----------------
    def send_file(self, data_conn: socket.socket, path: str) -> int:
        """Envía el archivo por la conexión de datos; cierra la conexión."""
        total_sent = 0
        with data_conn, open(path, 'rb') as f:
            while chunk := f.read(TRANSFER_BUFFER_SIZE):
                data_conn.sendall(chunk)
                total_sent += len(chunk)
        logger.info("Sent %d bytes from %s", total_sent, path)
        return total_sent

    def receive_file(self, data_conn: socket.socket, path: str) -> int:
        """Guarda en `path` todo lo recibido hasta EOF; cierra la conexión."""
        total_received = 0
        with data_conn, open(path, 'wb') as f:
            while True:
                chunk = data_conn.recv(TRANSFER_BUFFER_SIZE)
                if not chunk:
                    break
                f.write(chunk)
                total_received += len(chunk)
        logger.info("Received %d bytes into %s", total_received, path)
        return total_received

    def send_listing(self, data_conn: socket.socket, directory: str) -> int:
        """Envía el listado de `directory` con una línea por entrada; cierra la conexión."""
        with data_conn:
            entries = list_directory_detailed(directory)
            if entries is None:
                raise NotADirectoryError(f"Not a directory: {directory}")
            listing = "".join(format_listing_line(info) for info in entries)
            payload = listing.encode('utf-8', errors='replace')
            data_conn.sendall(payload)
        logger.info("Sent listing of %s (%d entries)", directory, len(entries))
        return len(payload)


def format_listing_line(file_info: dict) -> str:
    """Formatea una entrada al estilo `ls -l`."""
    permissions = "drwxr-xr-x" if file_info['type'] == 'directory' else "-rw-r--r--"
    date = time.strftime("%b %d %H:%M", time.localtime(file_info['modified']))
    return f"{permissions} 1 ftp ftp {file_info['size']:>10} {date} {file_info['name']}\r\n"
