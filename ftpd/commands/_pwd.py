from ftpd.entities.file_system_manager import quote_pathname


def handle_pwd(command, client_socket, client_session):
    """Maneja comando PWD - Print Working Directory"""
    if not client_session.is_authenticated():
        client_session.send_response(client_socket, 530, "Not logged in")
        return

    current_directory = client_session.get_current_directory()
    client_session.send_response(client_socket, 257, f"{quote_pathname(current_directory)} is the current directory")
