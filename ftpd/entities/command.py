from enum import Enum


class FtpVerb(Enum):
    """Verbos que el servidor reconoce. Cualquier otro responde 502."""

    USER = "USER"
    PASS = "PASS"
    QUIT = "QUIT"
    SYST = "SYST"
    FEAT = "FEAT"
    OPTS = "OPTS"
    PWD = "PWD"
    CWD = "CWD"
    TYPE = "TYPE"
    PORT = "PORT"
    EPRT = "EPRT"
    PASV = "PASV"
    LIST = "LIST"
    RETR = "RETR"
    STOR = "STOR"
    DELE = "DELE"
    MKD = "MKD"
    XMKD = "XMKD"
    RMD = "RMD"
    XRMD = "XRMD"
    RNFR = "RNFR"
    RNTO = "RNTO"
    SIZE = "SIZE"

    @classmethod
    def lookup(cls, name):
        """Devuelve el verbo correspondiente a `name` o None."""
        try:
            return cls(name)
        except ValueError:
            return None


class Command:
    def __init__(self, raw_command):
        self.raw_command = raw_command.strip()
        self.parse_command()

    def parse_command(self):
        """Separa la línea en verbo y un único argumento (el resto de la línea).

        El argumento no se tokeniza: los nombres de archivo pueden contener espacios.
        """
        parts = self.raw_command.split(None, 1)
        if parts:
            self.name = parts[0].upper()
            self.arg = parts[1].strip() if len(parts) > 1 else ""
        else:
            self.name = ""
            self.arg = ""
        self.verb = FtpVerb.lookup(self.name)

    def __str__(self):
        if self.verb is FtpVerb.PASS:
            return f"Command(name='{self.name}', arg='****')"
        return f"Command(name='{self.name}', arg='{self.arg}')"

    def get_name(self):
        """Devuelve el nombre del comando"""
        return self.name

    def get_verb(self):
        return self.verb

    def get_arg(self):
        """Devuelve el argumento ("" si no hay)"""
        return self.arg
