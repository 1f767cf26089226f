import logging
import os
import socket

from ftpd.entities.data_connection import DataConnectionManager, DATA_CONNECTION_TIMEOUT

logger = logging.getLogger(__name__)


class ClientSession:
    """Representa el estado de sesión de un cliente FTP.

    Una sesión pertenece a un único hilo y procesa los comandos de a uno, por
    lo que no necesita locks.
    """

    def __init__(self, client_address=None, user_manager=None, data_timeout=DATA_CONNECTION_TIMEOUT,
                 hold_passive_listener=False, pasv_address=None):
        # Identificación de la conexión
        self.client_address = client_address

        # Almacén de credenciales compartido (sólo lectura)
        self.user_manager = user_manager

        # Estado de autenticación / paths
        self.username = None
        self.authenticated = False
        self.current_directory = os.getcwd()

        # RNFR pendiente
        self.rename_from_path = None

        # Conexión de datos
        self.data_connection = DataConnectionManager(accept_timeout=data_timeout,
                                                     hold_passive_listener=hold_passive_listener)
        self.pasv_address = pasv_address

        self.pending_quit = False

    # ----------------- user / auth -----------------
    def set_username(self, username: str):
        """Registra el usuario de USER; no toca la autenticación."""
        self.username = username
        logger.info("Username set to: %s", username)

    def authenticate(self):
        self.authenticated = True
        logger.info("User %s authenticated successfully", self.username)

    def deauthenticate(self):
        self.authenticated = False

    def is_authenticated(self) -> bool:
        """Indica si la sesión está autenticada."""
        return self.authenticated

    # ----------------- paths -----------------
    def get_current_directory(self):
        return self.current_directory

    def set_current_directory(self, path):
        self.current_directory = path

    # ----------------- rename helpers -----------------
    def set_rename_from(self, path: str):
        """Registra el path origen para la operación RNFR."""
        self.rename_from_path = path

    def get_rename_from(self):
        """Devuelve el path registrado por RNFR o None."""
        return self.rename_from_path

    def clear_rename_from(self):
        """Limpia el estado de RNFR."""
        self.rename_from_path = None

    # ----------------- data connection -----------------
    def open_data_connection(self):
        """Abre la conexión de datos negociada.

        Retorna el socket o None si no hay modo negociado, vence el timeout
        pasivo o falla el connect/bind.
        """
        try:
            return self.data_connection.open_data_connection()
        except OSError as e:
            logger.warning("Data connection failed for %s: %s", self.client_address, e)
            return None

    # ----------------- session lifecycle -----------------
    def request_quit(self):
        """Marcar la sesión para cierre (QUIT)."""
        self.pending_quit = True

    def can_close(self) -> bool:
        return self.pending_quit

    def cleanup(self):
        """Libera la conexión de datos al terminar la sesión."""
        self.data_connection.close()

    #------------------ response sending -----------------

    def send_response(self, client_socket: "socket.socket", code: int, message: str) -> None:
        """Envía una respuesta al cliente por `client_socket` con formato RFC-959.

        Esta ayuda centraliza el envío y el logging. No lanza excepciones al llamar.
        """
        self._send_lines(client_socket, [f"{code} {message}"])

    def send_multiline_response(self, client_socket: "socket.socket", code: int, first: str, last: str, lines=()) -> None:
        """Envía una respuesta de varias líneas enmarcada por `code-` / `code `."""
        self._send_lines(client_socket, [f"{code}-{first}", *(f" {line}" for line in lines), f"{code} {last}"])

    def _send_lines(self, client_socket, lines):
        payload = "".join(f"{line}\r\n" for line in lines)
        try:
            client_socket.sendall(payload.encode('utf-8'))
            for line in lines:
                logger.info("Sent response to %s: %s", self.client_address, line)
        except OSError:
            logger.exception("Failed to send response to %s: %s", self.client_address, lines[-1])

    # ----------------- util -----------------
    def __str__(self):
        return f"ClientSession(addr={self.client_address}, user={self.username}, auth={self.authenticated})"
