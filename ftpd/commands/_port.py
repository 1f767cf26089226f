
def parse_port_argument(argument):
    """
    Parsea 'h1,h2,h3,h4,p1,p2'.

    Returns:
        (host, port) o None si el formato es inválido
    """
    parts = argument.split(',')
    if len(parts) != 6:
        return None

    try:
        numbers = [int(p.strip()) for p in parts]
    except ValueError:
        return None

    if any(n < 0 or n > 255 for n in numbers):
        return None

    host = '.'.join(str(n) for n in numbers[:4])
    port = numbers[4] * 256 + numbers[5]
    if port == 0:
        return None
    return host, port


def handle_port(command, client_socket, client_session):
    """Maneja comando PORT - modo activo, el servidor se conecta al cliente"""
    if not client_session.is_authenticated():
        client_session.send_response(client_socket, 530, "Not logged in")
        return

    target = parse_port_argument(command.get_arg())
    if target is None:
        client_session.send_response(client_socket, 501, "Syntax error in parameters")
        return

    host, port = target
    client_session.data_connection.set_active_target(host, port)
    client_session.send_response(client_socket, 200, "PORT command successful")
