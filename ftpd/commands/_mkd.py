from ftpd.entities.file_system_manager import resolve_path, create_directory


def handle_mkd(command, client_socket, client_session):
    """Maneja comando MKD / XMKD - Make Directory"""

    # Valida autenticación
    if not client_session.is_authenticated():
        client_session.send_response(client_socket, 530, "Not logged in")
        return

    # Resolver contra el directorio actual (rutas absolutas o relativas)
    path = resolve_path(client_session.get_current_directory(), command.get_arg())

    # Crea el directorio
    success, message = create_directory(path)

    if success:
        client_session.send_response(client_socket, 257, message)
    else:
        client_session.send_response(client_socket, 550, message)
