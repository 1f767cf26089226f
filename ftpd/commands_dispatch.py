from ftpd.commands import *
from ftpd.entities.command import FtpVerb

# Diccionario de handlers
FTP_COMMAND_HANDLERS = {
    FtpVerb.USER: handle_user,
    FtpVerb.PASS: handle_pass,
    FtpVerb.QUIT: handle_quit,
    FtpVerb.SYST: handle_syst,
    FtpVerb.FEAT: handle_feat,
    FtpVerb.OPTS: handle_opts,
    FtpVerb.PWD: handle_pwd,
    FtpVerb.CWD: handle_cwd,
    FtpVerb.TYPE: handle_type,
    FtpVerb.PORT: handle_port,
    FtpVerb.EPRT: handle_eprt,
    FtpVerb.PASV: handle_pasv,
    FtpVerb.LIST: handle_list,
    FtpVerb.RETR: handle_retr,
    FtpVerb.STOR: handle_stor,
    FtpVerb.DELE: handle_dele,
    FtpVerb.MKD: handle_mkd,
    FtpVerb.XMKD: handle_mkd,
    FtpVerb.RMD: handle_rmd,
    FtpVerb.XRMD: handle_rmd,
    FtpVerb.RNFR: handle_rnfr,
    FtpVerb.RNTO: handle_rnto,
    FtpVerb.SIZE: handle_size,
}
