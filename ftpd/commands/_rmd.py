from ftpd.entities.file_system_manager import resolve_path, remove_directory


def handle_rmd(command, client_socket, client_session):
    """Maneja comando RMD / XRMD - Remove Directory (sólo vacíos)"""
    if not client_session.is_authenticated():
        client_session.send_response(client_socket, 530, "Not logged in")
        return

    current_directory = client_session.get_current_directory()
    path = resolve_path(current_directory, command.get_arg())
    success, message = remove_directory(path, current_directory)

    if success:
        client_session.send_response(client_socket, 250, message)
    else:
        client_session.send_response(client_socket, 550, message)
