import json
import logging
import os

import bcrypt

logger = logging.getLogger(__name__)

DEFAULT_USERS_FILE = "users.json"


def get_users_file_path():
    """Ruta por defecto del archivo de usuarios: el directorio de trabajo del proceso"""
    return os.path.join(os.getcwd(), DEFAULT_USERS_FILE)


def load_users(users_file):
    """Lee el archivo JSON y devuelve un dict username -> hash bcrypt"""
    with open(users_file, 'r', encoding='utf-8') as f:
        data = json.load(f)

    users = {}
    for user in data.get('users', []):
        username = user.get('username')
        password = user.get('password')
        if username and password:
            users[username] = password
    return users


class UserManager:
    """
    Almacén de credenciales de sólo lectura.

    Se carga una vez al arrancar; después sólo se consulta, por lo que puede
    compartirse entre todos los hilos de sesión.
    """

    def __init__(self, users=None, users_file=None):
        if users is None:
            users_file = users_file or get_users_file_path()
            try:
                users = load_users(users_file)
                logger.info("Loaded %d users from %s", len(users), users_file)
            except (OSError, ValueError) as e:
                logger.error("Error reading users file %s: %s", users_file, e)
                users = {}
        self._users = dict(users)

    def user_exists(self, username):
        """Verifica si un usuario existe"""
        return bool(username) and username in self._users

    def validate_password(self, username, password):
        """Valida la contraseña de un usuario"""
        if username is None or password is None:
            return False

        hashed = self._users.get(username)
        if not hashed:
            return False

        try:
            return bcrypt.checkpw(password.encode('utf-8'), hashed.encode('utf-8'))
        except ValueError:
            logger.warning("Stored password hash for %s is malformed", username)
            return False

    def __len__(self):
        return len(self._users)
