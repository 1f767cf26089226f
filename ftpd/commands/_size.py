from ftpd.entities.file_system_manager import resolve_path, get_file_size


def handle_size(command, client_socket, client_session):
    """Maneja comando SIZE - tamaño en bytes de un archivo"""
    if not client_session.is_authenticated():
        client_session.send_response(client_socket, 530, "Not logged in")
        return

    path = resolve_path(client_session.get_current_directory(), command.get_arg())
    size = get_file_size(path)

    if size is None:
        client_session.send_response(client_socket, 550, "Could not get file size")
    else:
        client_session.send_response(client_socket, 213, str(size))
