def handle_opts(command, client_socket, client_session):
    """Maneja comando OPTS - sólo se acepta 'UTF8 ON'."""
    option = " ".join(command.get_arg().upper().split())

    if option == "UTF8 ON":
        client_session.send_response(client_socket, 200, "UTF8 mode enabled")
    else:
        client_session.send_response(client_socket, 501, "Option not understood")
