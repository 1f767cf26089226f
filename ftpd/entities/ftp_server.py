import concurrent.futures
import logging
import socket
import threading

from ftpd.commands_dispatch import FTP_COMMAND_HANDLERS
from ftpd.config import ServerConfig
from ftpd.entities.client_session import ClientSession
from ftpd.entities.command import Command, FtpVerb

logger = logging.getLogger(__name__)

ACCEPT_POLL_INTERVAL = 0.5
MAX_LINE_LENGTH = 8192


class FtpServer:
    """Socket de escucha del canal de control más un pool fijo de hilos.

    Cada conexión aceptada se atiende en un hilo del pool; si todos están
    ocupados, la conexión espera en la cola del executor.
    """

    def __init__(self, config: ServerConfig, user_manager):
        self.config = config
        self.user_manager = user_manager
        self.server_sock = None
        self.executor = None
        self._stopped = threading.Event()

    @property
    def address(self):
        """(host, port) realmente asignados; útil con port=0."""
        return self.server_sock.getsockname()[:2]

    def bind(self):
        self.server_sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self.server_sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self.server_sock.bind((self.config.host, self.config.port))
        self.server_sock.listen(self.config.backlog)
        # accept() con timeout para poder notar shutdown() desde otro hilo
        self.server_sock.settimeout(ACCEPT_POLL_INTERVAL)
        self.executor = concurrent.futures.ThreadPoolExecutor(max_workers=self.config.max_workers,
                                                              thread_name_prefix="ftpd-session")
        logger.info("FTP connection listener started on %s:%d (%d workers)",
                    *self.address, self.config.max_workers)

    def serve_forever(self):
        """Acepta conexiones hasta que se llame a `shutdown()`."""
        if self.server_sock is None:
            self.bind()

        try:
            while not self._stopped.is_set():
                try:
                    client_sock, client_addr = self.server_sock.accept()

                except socket.timeout:
                    continue

                except OSError as e:
                    if self._stopped.is_set():
                        break
                    logger.exception("Error accepting connection: %s", e)
                    continue

                logger.info("Accepted connection from %s", client_addr)
                try:
                    self.executor.submit(client_handler, client_sock, client_addr, self.user_manager, self.config)

                except RuntimeError:
                    # shutdown() cerró el executor entre accept() y submit()
                    logger.info("Listener shutting down; dropping connection from %s", client_addr)
                    client_sock.close()
                    break

        finally:
            self.shutdown()
            logger.info("Connection listener stopped")

    def shutdown(self, wait=False):
        self._stopped.set()

        if self.server_sock is not None:
            try:
                self.server_sock.close()
            except OSError:
                logger.debug("Error closing listening socket", exc_info=True)

        if self.executor is not None:
            self.executor.shutdown(wait=wait)


def client_handler(client_socket: socket.socket, client_address, user_manager, config: ServerConfig = None):
    """Crear sesión y ejecutar dispatcher para el cliente."""
    config = config or ServerConfig()
    logger.info("Handling new client %s", client_address)
    session = ClientSession(client_address=client_address,
                            user_manager=user_manager,
                            data_timeout=config.data_timeout,
                            hold_passive_listener=config.hold_passive_listener,
                            pasv_address=config.pasv_address)

    try:
        session.send_response(client_socket, 220, "Service ready")
        command_dispatcher(client_socket, client_address, session)

    except Exception:
        logger.exception("Error while handling client %s", client_address)

    finally:
        session.cleanup()
        try:
            client_socket.close()
        except OSError:
            logger.exception("Error closing client socket in handler for %s", client_address)


def command_dispatcher(client_socket: socket.socket, client_address, session: ClientSession):
    """Leer la conexión de control, parsear líneas y despachar handlers de a uno."""
    logger.info("Starting command_dispatcher for %s", client_address)

    for line in recv_lines(client_socket):
        if line is None:
            logger.warning("Discarding oversized command line from %s", client_address)
            session.send_response(client_socket, 500, "Command line too long")
            continue

        if not line.strip():
            continue

        command = Command(line)
        logger.info("Received command from %s: %s", client_address, command)

        # Un RNFR pendiente sólo vale para el comando inmediatamente siguiente
        if command.get_verb() is not FtpVerb.RNTO:
            session.clear_rename_from()

        handler = FTP_COMMAND_HANDLERS.get(command.get_verb())
        if handler is None:
            session.send_response(client_socket, 502, f"Command '{command.get_name()}' not implemented")
            continue

        try:
            handler(command, client_socket, session)

        except Exception:
            logger.exception("Error handling command from %s: %s", client_address, command)
            session.send_response(client_socket, 451, "Requested action aborted: local error in processing")

        if session.can_close():
            logger.info("Closing control connection for %s after QUIT", client_address)
            return

    logger.info("Client %s closed the connection", client_address)


def recv_lines(sock: socket.socket, chunk_size: int = 4096, max_line_length: int = MAX_LINE_LENGTH):
    """Generador de líneas de texto (sin el fin de línea) hasta EOF o error de lectura.

    Una línea que supera `max_line_length` bytes se entrega una sola vez como
    None y el resto de sus bytes se descarta hasta el siguiente '\\n'.
    """
    buf = bytearray()
    scanned = 0
    discarding = False

    for chunk in recv_chunks(sock, chunk_size):
        buf += chunk

        while (end := buf.find(b"\n", scanned)) >= 0:
            raw_line = bytes(buf[:end])
            del buf[:end + 1]
            scanned = 0

            if discarding:
                discarding = False
                continue

            if len(raw_line) > max_line_length:
                yield None
                continue

            yield raw_line.rstrip(b"\r").decode('utf-8', errors='replace')

        scanned = len(buf)

        if len(buf) > max_line_length:
            buf.clear()
            scanned = 0
            if not discarding:
                discarding = True
                yield None


def recv_chunks(sock: socket.socket, chunk_size: int = 65536):
    """Generador que devuelve chunks de bytes desde `sock` hasta EOF."""
    try:
        while True:
            chunk = sock.recv(chunk_size)

            if not chunk:
                break

            yield chunk

    except OSError as e:
        logger.debug("recv_chunks: socket read interrupted: %s", e)
        return


__all__ = [
    'FtpServer',
    'client_handler',
    'command_dispatcher',
]
