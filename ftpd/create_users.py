import argparse
import getpass
import json
import os
import sys

import bcrypt

from ftpd.entities.user_manager import get_users_file_path


def hash_password(plain_password, rounds=12):
    """Encripta la contraseña con bcrypt y la devuelve como str"""
    hashed = bcrypt.hashpw(plain_password.encode('utf-8'), bcrypt.gensalt(rounds=rounds))
    return hashed.decode('utf-8')


def add_user(users_file, username, plain_password, rounds=12):
    """Agrega (o reemplaza) un usuario en el archivo JSON de usuarios"""
    data = {"users": []}
    if os.path.exists(users_file):
        with open(users_file, 'r', encoding='utf-8') as f:
            data = json.load(f)

    users = [u for u in data.get('users', []) if u.get('username') != username]
    users.append({
        "username": username,
        "password": hash_password(plain_password, rounds=rounds),
    })
    data['users'] = users

    parent = os.path.dirname(os.path.abspath(users_file))
    os.makedirs(parent, exist_ok=True)
    with open(users_file, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2)

    return len(users)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Add or update an ftpd user")
    parser.add_argument("username")
    parser.add_argument("--password", help="Password (prompted if omitted)")
    parser.add_argument("--users-file", default=os.getenv("FTPD_USERS_FILE") or get_users_file_path())
    args = parser.parse_args(argv)

    password = args.password
    if password is None:
        password = getpass.getpass(f"Password for {args.username}: ")

    if not password:
        print("Empty password, user not saved", file=sys.stderr)
        return 1

    count = add_user(args.users_file, args.username, password)
    print(f"User '{args.username}' saved to {args.users_file} ({count} users)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
