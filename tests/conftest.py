from __future__ import annotations

import threading

import bcrypt
import pytest

from ftpd.config import ServerConfig
from ftpd.entities.ftp_server import FtpServer
from ftpd.entities.user_manager import UserManager
from ftp_helpers import USERNAME, PASSWORD, RawFtpClient


@pytest.fixture(scope="session")
def password_hash():
    return bcrypt.hashpw(PASSWORD.encode('utf-8'), bcrypt.gensalt(rounds=4)).decode('utf-8')


@pytest.fixture
def user_manager(password_hash):
    return UserManager(users={USERNAME: password_hash})


@pytest.fixture
def ftp_root(tmp_path, monkeypatch):
    """Las sesiones arrancan en el directorio de trabajo del proceso."""
    root = tmp_path / "root"
    root.mkdir()
    monkeypatch.chdir(root)
    return root


@pytest.fixture
def server_config():
    return ServerConfig(host="127.0.0.1", port=0, data_timeout=1.0)


@pytest.fixture
def ftp_server(ftp_root, user_manager, server_config):
    server = FtpServer(server_config, user_manager)
    server.bind()
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield server
    server.shutdown()
    thread.join(timeout=5)


@pytest.fixture
def raw_client(ftp_server):
    host, port = ftp_server.address
    client = RawFtpClient(host, port)
    yield client
    client.close()


@pytest.fixture
def logged_in(raw_client):
    raw_client.login()
    return raw_client
