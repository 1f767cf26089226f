from __future__ import annotations

import os
import time

import pytest

from ftpd.entities.client_session import ClientSession
from ftpd.entities.command import Command
from ftpd.commands import handle_pasv
from ftp_helpers import PASSWORD, USERNAME, parse_pasv_reply


class FakeControlSocket:
    def __init__(self, local_address=("10.1.2.3", 21)):
        self.local_address = local_address
        self.sent = b""

    def getsockname(self):
        return self.local_address

    def sendall(self, data):
        self.sent += data


def test_banner(raw_client):
    assert raw_client.banner.startswith("220 ")


@pytest.mark.parametrize("line", [
    "PWD", "CWD sub", "PORT 127,0,0,1,4,1", "EPRT |1|127.0.0.1|1025|", "PASV", "LIST",
    "RETR f.txt", "STOR new.txt", "DELE f.txt", "MKD newdir", "RMD sub", "RNFR f.txt",
    "RNTO g.txt", "SIZE f.txt",
])
def test_commands_require_login(raw_client, ftp_root, line):
    (ftp_root / "f.txt").write_text("x")
    (ftp_root / "sub").mkdir()

    assert raw_client.cmd(line).startswith("530")

    assert sorted(os.listdir(ftp_root)) == ["f.txt", "sub"]


def test_unknown_user_is_rejected(raw_client):
    assert raw_client.cmd("USER nobody").startswith("530")
    assert raw_client.cmd(f"PASS {PASSWORD}").startswith("530")
    assert raw_client.cmd("PWD").startswith("530")


def test_login_flow(raw_client):
    assert raw_client.cmd(f"USER {USERNAME}").startswith("331")
    assert raw_client.cmd("PASS wrong").startswith("530")
    assert raw_client.cmd("PWD").startswith("530")

    # El nombre de usuario persiste tras un PASS fallido
    assert raw_client.cmd(f"PASS {PASSWORD}").startswith("230")
    assert raw_client.cmd("PWD").startswith("257")


def test_pass_without_user(raw_client):
    assert raw_client.cmd(f"PASS {PASSWORD}").startswith("530")


def test_second_pass_is_rejected_and_logs_out(logged_in):
    assert logged_in.cmd(f"PASS {PASSWORD}").startswith("530")
    assert logged_in.cmd("PWD").startswith("530")


def test_unrecognized_verb(logged_in):
    assert logged_in.cmd("NOOP").startswith("502")
    assert logged_in.cmd("FOO bar").startswith("502")


def test_verbs_are_case_insensitive(logged_in):
    assert logged_in.cmd("syst") == "215 UNIX Type: L8"
    assert logged_in.cmd("pwd").startswith("257")


def test_feat_opts_type(raw_client):
    assert raw_client.cmd("FEAT") == "211-Features:\n211 End"
    assert raw_client.cmd("OPTS UTF8 ON").startswith("200")
    assert raw_client.cmd("OPTS utf8 on").startswith("200")
    assert raw_client.cmd("OPTS MLST type").startswith("501")
    assert raw_client.cmd("TYPE A").startswith("200")
    assert raw_client.cmd("TYPE i").startswith("200")
    assert raw_client.cmd("TYPE E").startswith("504")
    assert raw_client.cmd("TYPE").startswith("504")


def test_quit_closes_connection(raw_client):
    assert raw_client.cmd("QUIT").startswith("221")
    assert raw_client.file.readline() == b""


def test_pwd_and_cwd(logged_in, ftp_root):
    (ftp_root / "sub").mkdir()
    (ftp_root / "plain.txt").write_text("x")
    root = os.getcwd()

    assert logged_in.cmd("PWD") == f'257 "{root}" is the current directory'

    assert logged_in.cmd("CWD ../definitely-missing-dir").startswith("550")
    assert logged_in.cmd("CWD plain.txt").startswith("550")
    assert logged_in.cmd("PWD") == f'257 "{root}" is the current directory'

    assert logged_in.cmd("CWD sub").startswith("250")
    assert logged_in.cmd("PWD") == f'257 "{os.path.join(root, "sub")}" is the current directory'

    assert logged_in.cmd("CWD ..").startswith("250")
    assert logged_in.cmd("PWD") == f'257 "{root}" is the current directory'


def test_relative_paths_follow_working_directory(logged_in, ftp_root):
    (ftp_root / "sub").mkdir()
    (ftp_root / "sub" / "inner.txt").write_bytes(b"12345")

    assert logged_in.cmd("SIZE inner.txt").startswith("550")
    assert logged_in.cmd("CWD sub").startswith("250")
    assert logged_in.cmd("SIZE inner.txt") == "213 5"
    assert logged_in.cmd("SIZE ../sub/inner.txt") == "213 5"


def test_mkd_rmd_dele(logged_in, ftp_root):
    reply = logged_in.cmd("MKD newdir")
    assert reply.startswith('257 "')
    assert (ftp_root / "newdir").is_dir()

    assert logged_in.cmd("XMKD newdir").startswith("550")
    assert logged_in.cmd("MKD missing/child").startswith("550")

    (ftp_root / "newdir" / "f").write_text("x")
    assert logged_in.cmd("RMD newdir").startswith("550")
    assert logged_in.cmd("DELE newdir").startswith("550")
    assert logged_in.cmd("DELE newdir/f").startswith("250")
    assert logged_in.cmd("DELE newdir/f").startswith("550")
    assert logged_in.cmd("XRMD newdir").startswith("250")
    assert not (ftp_root / "newdir").exists()


def test_size(logged_in, ftp_root):
    (ftp_root / "f.bin").write_bytes(b"\x00" * 321)
    (ftp_root / "d").mkdir()

    assert logged_in.cmd("SIZE f.bin") == "213 321"
    assert logged_in.cmd("SIZE d").startswith("550")
    assert logged_in.cmd("SIZE missing").startswith("550")


def test_rename_sequence(logged_in, ftp_root):
    (ftp_root / "a.txt").write_text("content")

    assert logged_in.cmd("RNTO b.txt").startswith("503")

    assert logged_in.cmd("RNFR a.txt").startswith("350")
    assert logged_in.cmd("RNTO b.txt").startswith("250")
    assert not (ftp_root / "a.txt").exists()
    assert (ftp_root / "b.txt").read_text() == "content"

    # El RNFR se consume con el primer RNTO
    assert logged_in.cmd("RNTO c.txt").startswith("503")


def test_rename_failure_still_clears_pending(logged_in, ftp_root):
    (ftp_root / "a.txt").write_text("a")
    (ftp_root / "b.txt").write_text("b")

    assert logged_in.cmd("RNFR a.txt").startswith("350")
    assert logged_in.cmd("RNTO b.txt").startswith("550")
    assert logged_in.cmd("RNTO c.txt").startswith("503")

    assert logged_in.cmd("RNFR a.txt").startswith("350")
    assert logged_in.cmd("RNTO missing/c.txt").startswith("550")
    assert logged_in.cmd("RNTO c.txt").startswith("503")
    assert (ftp_root / "a.txt").read_text() == "a"


def test_rename_pending_not_carried_across_commands(logged_in, ftp_root):
    (ftp_root / "a.txt").write_text("a")

    assert logged_in.cmd("RNFR a.txt").startswith("350")
    assert logged_in.cmd("SYST").startswith("215")
    assert logged_in.cmd("RNTO b.txt").startswith("503")
    assert (ftp_root / "a.txt").exists()


def test_rnfr_missing_source(logged_in):
    assert logged_in.cmd("RNFR nope.txt").startswith("550")
    assert logged_in.cmd("RNTO b.txt").startswith("503")


def test_port_and_eprt_parsing(logged_in):
    assert logged_in.cmd("PORT 127,0,0,1,4,1").startswith("200")
    assert logged_in.cmd("PORT 127,0,0,1,4").startswith("501")
    assert logged_in.cmd("PORT 127,0,0,1,4,256").startswith("501")
    assert logged_in.cmd("PORT a,b,c,d,e,f").startswith("501")

    assert logged_in.cmd("EPRT |1|127.0.0.1|1025|").startswith("200")
    assert logged_in.cmd("EPRT |2|::1|1025|").startswith("200")
    assert logged_in.cmd("EPRT |3|127.0.0.1|1025|").startswith("522")
    assert logged_in.cmd("EPRT |1|127.0.0.1|").startswith("501")
    assert logged_in.cmd("EPRT |1|127.0.0.1|port|").startswith("501")
    assert logged_in.cmd("EPRT |1|::1|1025|").startswith("501")


def test_transfer_without_data_mode(logged_in, ftp_root):
    (ftp_root / "f.txt").write_text("x")
    assert logged_in.cmd("LIST").startswith("425")
    assert logged_in.cmd("RETR f.txt").startswith("425")
    assert logged_in.cmd("STOR g.txt").startswith("425")
    assert not (ftp_root / "g.txt").exists()


def test_retr_checks_target_first(logged_in, ftp_root):
    (ftp_root / "d").mkdir()
    assert logged_in.cmd("RETR missing").startswith("550")
    assert logged_in.cmd("RETR d").startswith("550")
    assert logged_in.cmd("STOR missing/child.txt").startswith("550")
    assert logged_in.cmd("STOR d").startswith("550")


def test_pasv_reply_announces_reserved_port(user_manager):
    session = ClientSession(user_manager=user_manager)
    session.authenticate()
    control = FakeControlSocket()

    handle_pasv(Command("PASV"), control, session)

    reply = control.sent.decode()
    assert reply.startswith("227 ")
    host, port = parse_pasv_reply(reply)
    assert host == "10.1.2.3"
    assert port == session.data_connection.passive_port
    assert 1024 <= port <= 65535


def test_pasv_uses_configured_address(user_manager):
    session = ClientSession(user_manager=user_manager, pasv_address="203.0.113.7")
    session.authenticate()
    control = FakeControlSocket()

    handle_pasv(Command("PASV"), control, session)

    assert parse_pasv_reply(control.sent.decode())[0] == "203.0.113.7"


def test_pasv_list(logged_in, ftp_root):
    (ftp_root / "one.txt").write_bytes(b"1")
    (ftp_root / "two.txt").write_bytes(b"22")
    (ftp_root / "dir").mkdir()

    listing, preliminary, final = logged_in.passive_transfer("LIST")

    assert preliminary.startswith("150")
    assert final.startswith("226")
    lines = listing.decode().splitlines()
    assert len(lines) == 3
    names = {line.split()[-1]: line for line in lines}
    assert set(names) == {"one.txt", "two.txt", "dir"}
    assert names["dir"].startswith("drwxr-xr-x 1 ftp ftp")
    assert names["two.txt"].startswith("-rw-r--r-- 1 ftp ftp          2 ")


def test_pasv_list_empty_directory(logged_in):
    listing, preliminary, final = logged_in.passive_transfer("LIST")
    assert listing == b""
    assert preliminary.startswith("150") and final.startswith("226")


def test_pasv_stor_retr_size_round_trip(logged_in, ftp_root):
    payload = os.urandom(50_000)

    _, preliminary, final = logged_in.passive_transfer("STOR blob.bin", upload=payload)
    assert preliminary.startswith("150")
    assert final.startswith("226")
    assert (ftp_root / "blob.bin").read_bytes() == payload

    assert logged_in.cmd("SIZE blob.bin") == f"213 {len(payload)}"

    received, preliminary, final = logged_in.passive_transfer("RETR blob.bin")
    assert preliminary.startswith("150") and f"({len(payload)} bytes)" in preliminary
    assert final.startswith("226")
    assert received == payload


def test_pasv_timeout_replies_425(logged_in, ftp_root):
    (ftp_root / "f.txt").write_text("x")
    logged_in.cmd("PASV")

    started = time.monotonic()
    assert logged_in.cmd("RETR f.txt").startswith("425")
    assert time.monotonic() - started >= 0.9

    # La sesión sigue viva
    assert logged_in.cmd("PWD").startswith("257")


def test_oversized_command_line_is_rejected(logged_in):
    logged_in.send("STOR " + "x" * 20000)
    assert logged_in.read_reply().startswith("500")

    # El resto de la línea se descarta y la sesión sigue
    assert logged_in.cmd("PWD").startswith("257")


def test_rmd_refuses_working_directory_and_parents(logged_in, ftp_root):
    (ftp_root / "sub" / "inner").mkdir(parents=True)

    assert logged_in.cmd("CWD sub/inner").startswith("250")
    assert logged_in.cmd("RMD .").startswith("550")
    assert logged_in.cmd("RMD").startswith("550")
    assert logged_in.cmd("RMD ../../sub").startswith("550")
    assert (ftp_root / "sub" / "inner").is_dir()

    assert logged_in.cmd("CWD ..").startswith("250")
    assert logged_in.cmd("RMD inner").startswith("250")
    assert not (ftp_root / "sub" / "inner").exists()


def test_list_fails_when_working_directory_was_removed(logged_in, ftp_root):
    (ftp_root / "gone").mkdir()
    assert logged_in.cmd("CWD gone").startswith("250")
    (ftp_root / "gone").rmdir()

    assert logged_in.cmd("PASV").startswith("227")
    assert logged_in.cmd("LIST").startswith("550")
    assert logged_in.cmd("PWD").startswith("257")


def test_257_replies_double_embedded_quotes(logged_in):
    expected = os.path.join(os.getcwd(), 'say ""hi""')

    assert logged_in.cmd('MKD say "hi"') == f'257 "{expected}" directory created'
    assert logged_in.cmd('CWD say "hi"').startswith("250")
    assert logged_in.cmd("PWD") == f'257 "{expected}" is the current directory'
