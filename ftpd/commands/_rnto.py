import logging

from ftpd.entities.file_system_manager import resolve_path, rename_path

logger = logging.getLogger("ftpd.commands.rnto")


def handle_rnto(command, client_socket, client_session):
    """Maneja comando RNTO - Rename To (rename target path)."""
    # 1. Autenticación
    if not client_session.is_authenticated():
        client_session.send_response(client_socket, 530, "Not logged in")
        return

    # 2. Verificar que se haya ejecutado RNFR justo antes
    old_path = client_session.get_rename_from()
    if not old_path:
        client_session.send_response(client_socket, 503, "RNFR required first")
        return

    # 3. El estado RNFR se consume sea cual sea el resultado
    client_session.clear_rename_from()

    new_path = resolve_path(client_session.get_current_directory(), command.get_arg())
    success, message = rename_path(old_path, new_path)

    if success:
        logger.info("RNTO successful: %s -> %s", old_path, new_path)
        client_session.send_response(client_socket, 250, message)
    else:
        client_session.send_response(client_socket, 550, message)
