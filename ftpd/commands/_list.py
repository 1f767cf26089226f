import logging

from ftpd.entities.file_system_manager import directory_exists

logger = logging.getLogger("ftpd.commands.list")


def handle_list(command, client_socket, client_session):
    """Maneja comando LIST - listar el directorio actual con formato detallado.

    El argumento (p. ej. '-la') se ignora: siempre se lista el directorio actual.
    """
    if not client_session.is_authenticated():
        client_session.send_response(client_socket, 530, "Not logged in")
        return

    current_directory = client_session.get_current_directory()
    if not directory_exists(current_directory):
        client_session.send_response(client_socket, 550, "Current directory no longer exists")
        return

    data_conn = client_session.open_data_connection()
    if data_conn is None:
        client_session.send_response(client_socket, 425, "Can't open data connection")
        return

    client_session.send_response(client_socket, 150, "Here comes the directory listing")

    try:
        client_session.data_connection.send_listing(data_conn, current_directory)

    except OSError as e:
        logger.warning("LIST transfer aborted for %s: %s", client_session.client_address, e)
        client_session.send_response(client_socket, 426, "Connection closed; transfer aborted")
        return

    client_session.send_response(client_socket, 226, "Directory send OK")
