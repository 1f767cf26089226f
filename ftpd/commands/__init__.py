__all__ = ["handle_user", "handle_pass", "handle_quit", "handle_syst", "handle_feat", "handle_opts",
           "handle_pwd", "handle_cwd", "handle_type", "handle_port", "handle_eprt", "handle_pasv",
           "handle_list", "handle_retr", "handle_stor", "handle_dele", "handle_mkd", "handle_rmd",
           "handle_rnfr", "handle_rnto", "handle_size"]

def __getattr__(name: str):
    if name == "handle_user":
        from ._user import handle_user
        return handle_user
    if name == "handle_pass":
        from ._pass import handle_pass
        return handle_pass
    if name == "handle_quit":
        from ._quit import handle_quit
        return handle_quit
    if name == "handle_syst":
        from ._syst import handle_syst
        return handle_syst
    if name == "handle_feat":
        from ._feat import handle_feat
        return handle_feat
    if name == "handle_opts":
        from ._opts import handle_opts
        return handle_opts
    if name == "handle_pwd":
        from ._pwd import handle_pwd
        return handle_pwd
    if name == "handle_cwd":
        from ._cwd import handle_cwd
        return handle_cwd
    if name == "handle_type":
        from ._type import handle_type
        return handle_type
    if name == "handle_port":
        from ._port import handle_port
        return handle_port
    if name == "handle_eprt":
        from ._eprt import handle_eprt
        return handle_eprt
    if name == "handle_pasv":
        from ._pasv import handle_pasv
        return handle_pasv
    if name == "handle_list":
        from ._list import handle_list
        return handle_list
    if name == "handle_retr":
        from ._retr import handle_retr
        return handle_retr
    if name == "handle_stor":
        from ._stor import handle_stor
        return handle_stor
    if name == "handle_dele":
        from ._dele import handle_dele
        return handle_dele
    if name == "handle_mkd":
        from ._mkd import handle_mkd
        return handle_mkd
    if name == "handle_rmd":
        from ._rmd import handle_rmd
        return handle_rmd
    if name == "handle_rnfr":
        from ._rnfr import handle_rnfr
        return handle_rnfr
    if name == "handle_rnto":
        from ._rnto import handle_rnto
        return handle_rnto
    if name == "handle_size":
        from ._size import handle_size
        return handle_size
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

def __dir__():
    return __all__
