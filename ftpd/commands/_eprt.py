import ipaddress

SUPPORTED_PROTOCOLS = {
    '1': ipaddress.IPv4Address,
    '2': ipaddress.IPv6Address,
}


class UnsupportedProtocolError(ValueError):
    """Familia de red distinta de 1 (IPv4) o 2 (IPv6)"""
    pass


def parse_eprt_argument(argument):
    """
    Parsea '|proto|host|port|'.

    Returns:
        (host, port)

    Raises:
        UnsupportedProtocolError: si proto no es 1 ni 2
        ValueError: si el formato es inválido
    """
    parts = argument.split('|')
    if len(parts) != 5 or parts[0] or parts[4]:
        raise ValueError("Malformed EPRT argument")

    proto, host, port_text = parts[1], parts[2], parts[3]

    if proto not in SUPPORTED_PROTOCOLS:
        raise UnsupportedProtocolError(proto)

    # Lanza ValueError si la dirección no corresponde a la familia
    SUPPORTED_PROTOCOLS[proto](host)

    port = int(port_text)
    if not 0 < port < 65536:
        raise ValueError("Port out of range")

    return host, port


def handle_eprt(command, client_socket, client_session):
    """Maneja comando EPRT - modo activo extendido (RFC 2428)"""
    if not client_session.is_authenticated():
        client_session.send_response(client_socket, 530, "Not logged in")
        return

    try:
        host, port = parse_eprt_argument(command.get_arg())

    except UnsupportedProtocolError:
        client_session.send_response(client_socket, 522, "Network protocol not supported, use (1,2)")
        return

    except ValueError:
        client_session.send_response(client_socket, 501, "Syntax error in parameters")
        return

    client_session.data_connection.set_active_target(host, port)
    client_session.send_response(client_socket, 200, "EPRT command successful")
