import logging

from ftpd.entities.file_system_manager import resolve_path, check_retrieve_target, get_file_size

logger = logging.getLogger("ftpd.commands.retr")


def handle_retr(command, client_socket, client_session):
    """Maneja comando RETR - descarga de archivo mediante data connection (streaming)."""

    # 1. Validación de sesión
    if not client_session.is_authenticated():
        client_session.send_response(client_socket, 530, "Not logged in")
        return

    # 2. Validar el archivo antes de abrir la conexión de datos
    filename = command.get_arg()
    path = resolve_path(client_session.get_current_directory(), filename)

    ok, message = check_retrieve_target(path)
    if not ok:
        client_session.send_response(client_socket, 550, message)
        return

    # 3. Abrir conexión de datos
    data_conn = client_session.open_data_connection()
    if data_conn is None:
        client_session.send_response(client_socket, 425, "Can't open data connection")
        return

    # 4. Transferir archivo con streaming
    size = get_file_size(path)
    client_session.send_response(client_socket, 150, f"Opening data connection for {filename} ({size} bytes)")

    try:
        total_sent = client_session.data_connection.send_file(data_conn, path)

    except OSError as e:
        logger.warning("RETR %s aborted: %s", path, e)
        client_session.send_response(client_socket, 426, "Connection closed; transfer aborted")
        return

    client_session.send_response(client_socket, 226, f"Transfer complete ({total_sent} bytes)")
