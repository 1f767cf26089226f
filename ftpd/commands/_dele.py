from ftpd.entities.file_system_manager import resolve_path, delete_file


def handle_dele(command, client_socket, client_session):
    """Maneja comando DELE - Delete File"""
    if not client_session.is_authenticated():
        client_session.send_response(client_socket, 530, "Not logged in")
        return

    path = resolve_path(client_session.get_current_directory(), command.get_arg())
    success, message = delete_file(path)

    if success:
        client_session.send_response(client_socket, 250, message)
    else:
        client_session.send_response(client_socket, 550, message)
