import logging

logger = logging.getLogger("ftpd.commands.pass")


def handle_pass(command, client_socket, client_session):
    """Maneja comando PASS - validación de contraseña.

    Sólo se valida si hay un USER previo y la sesión no está autenticada.
    Cualquier otro caso responde 530 y deja la sesión sin autenticar.
    """
    username = client_session.username
    password = command.get_arg()

    if (username and not client_session.is_authenticated()
            and client_session.user_manager.validate_password(username, password)):
        client_session.authenticate()
        client_session.send_response(client_socket, 230, "User logged in, proceed")
        return

    if not username:
        message = "Login with USER first"
    elif client_session.is_authenticated():
        message = "Already logged in"
    else:
        message = "Not logged in, password incorrect"

    logger.info("Login failed for %r from %s: %s", username, client_session.client_address, message)
    client_session.deauthenticate()
    client_session.send_response(client_socket, 530, message)
