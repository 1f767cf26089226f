def handle_quit(command, client_socket, client_session):
    """Maneja comando QUIT: responde 221 y el dispatcher cierra la conexión de control."""
    client_session.request_quit()
    client_session.send_response(client_socket, 221, "Goodbye")
