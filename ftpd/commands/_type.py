TRANSFER_TYPES = {
    'A': "ASCII",
    'I': "binary",
}


def handle_type(command, client_socket, client_session):
    """Maneja comando TYPE - se acepta A o I; no cambia cómo se transfieren los bytes."""
    type_code = command.get_arg().upper()

    if type_code in TRANSFER_TYPES:
        client_session.send_response(client_socket, 200, f"Type set to {TRANSFER_TYPES[type_code]}")
    else:
        client_session.send_response(client_socket, 504, "Type not implemented")
