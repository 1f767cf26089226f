from ftpd.entities.file_system_manager import resolve_path, check_rename_source


def handle_rnfr(command, client_socket, client_session):
    """Maneja comando RNFR - Rename From (origen del renombrado)."""
    if not client_session.is_authenticated():
        client_session.send_response(client_socket, 530, "Not logged in")
        return

    path = resolve_path(client_session.get_current_directory(), command.get_arg())
    success, message = check_rename_source(path)

    if success:
        client_session.set_rename_from(path)
        client_session.send_response(client_socket, 350, message)
    else:
        client_session.clear_rename_from()
        client_session.send_response(client_socket, 550, message)
