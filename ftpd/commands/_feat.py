# No se anuncia ninguna extensión
FEATURES = ()


def handle_feat(command, client_socket, client_session):
    """Maneja comando FEAT - lista de extensiones soportadas."""
    client_session.send_multiline_response(client_socket, 211, "Features:", "End", FEATURES)
