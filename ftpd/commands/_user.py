def handle_user(command, client_socket, client_session):
    """Maneja comando USER - registra el nombre de usuario."""
    username = command.get_arg()

    # El nombre queda registrado aunque no exista; PASS fallará igual
    client_session.set_username(username)

    if client_session.user_manager.user_exists(username):
        client_session.send_response(client_socket, 331, "User name okay, need password")
    else:
        client_session.send_response(client_socket, 530, "User not found")
