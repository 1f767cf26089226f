from ftpd.entities.file_system_manager import change_directory


def handle_cwd(command, client_socket, client_session):
    """Maneja comando CWD - Change Working Directory"""
    if not client_session.is_authenticated():
        client_session.send_response(client_socket, 530, "Not logged in")
        return

    current_directory = client_session.get_current_directory()
    new_current_dir = change_directory(current_directory, command.get_arg())

    if new_current_dir:
        client_session.set_current_directory(new_current_dir)
        client_session.send_response(client_socket, 250, f'Directory changed to "{new_current_dir}"')
    else:
        client_session.send_response(client_socket, 550, "Failed to change directory: no such directory")
