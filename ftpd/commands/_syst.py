SYSTEM_INFO = "UNIX Type: L8"


def handle_syst(command, client_socket, client_session):
    """Maneja comando SYST - información del sistema."""
    client_session.send_response(client_socket, 215, SYSTEM_INFO)
