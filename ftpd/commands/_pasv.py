import logging

logger = logging.getLogger("ftpd.commands.pasv")


def get_pasv_ip(client_socket, client_session) -> str:
    """
    IP a anunciar en la respuesta 227.
    - Si hay una dirección configurada, se usa esa.
    - Si no, la IP local del socket de control.
    """
    if client_session.pasv_address:
        return client_session.pasv_address
    return client_socket.getsockname()[0]


def format_pasv_reply(ip: str, port: int) -> str:
    return f"Entering Passive Mode ({ip.replace('.', ',')},{port // 256},{port % 256})"


def handle_pasv(command, client_socket, client_session):
    """Maneja comando PASV - modo pasivo para transferencia de datos"""
    if not client_session.is_authenticated():
        client_session.send_response(client_socket, 530, "Not logged in")
        return

    try:
        data_port = client_session.data_connection.reserve_port()

    except OSError as e:
        logger.error("Could not allocate passive port for %s: %s", client_session.client_address, e)
        client_session.send_response(client_socket, 421, "Can't allocate a passive port")
        return

    pasv_ip = get_pasv_ip(client_socket, client_session)
    logger.info("Passive mode announced on %s:%d", pasv_ip, data_port)
    client_session.send_response(client_socket, 227, format_pasv_reply(pasv_ip, data_port))
