import logging

from ftpd.entities.file_system_manager import resolve_path, check_store_target

logger = logging.getLogger("ftpd.commands.stor")


def handle_stor(command, client_socket, client_session):
    """Maneja comando STOR - almacena un archivo recibido del cliente mediante data connection."""

    # 1. Validación de sesión
    if not client_session.is_authenticated():
        client_session.send_response(client_socket, 530, "Not logged in")
        return

    # 2. El directorio padre debe existir y ser escribible
    filename = command.get_arg()
    path = resolve_path(client_session.get_current_directory(), filename)

    ok, message = check_store_target(path)
    if not ok:
        client_session.send_response(client_socket, 550, message)
        return

    # 3. Abrir conexión de datos
    data_conn = client_session.open_data_connection()
    if data_conn is None:
        client_session.send_response(client_socket, 425, "Can't open data connection")
        return

    # 4. Transferencia de archivo (streaming)
    client_session.send_response(client_socket, 150, f"Opening data connection for {filename}")

    try:
        total_received = client_session.data_connection.receive_file(data_conn, path)

    except OSError as e:
        logger.warning("STOR %s aborted: %s", path, e)
        client_session.send_response(client_socket, 426, "Connection closed; transfer aborted")
        return

    client_session.send_response(client_socket, 226, f'"{filename}" file stored successfully ({total_received} bytes)')
