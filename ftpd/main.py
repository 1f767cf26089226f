import logging
import signal
import sys

from ftpd.config import load_config
from ftpd.entities.ftp_server import FtpServer
from ftpd.entities.user_manager import UserManager

logger = logging.getLogger("ftpd")


def main(argv=None):
    config = load_config(argv)
    logging.basicConfig(level=config.log_level, format='%(asctime)s %(levelname)s %(name)s %(message)s')

    user_manager = UserManager(users_file=config.users_file)
    if not len(user_manager):
        logger.warning("No users loaded from %s; every login will be rejected", config.users_file)

    server = FtpServer(config, user_manager)

    def _handle_signal(signum, frame):
        logger.info("Shutting down listener (signal %d)", signum)
        server.shutdown()

    signal.signal(signal.SIGINT, _handle_signal)
    signal.signal(signal.SIGTERM, _handle_signal)

    try:
        server.bind()
    except OSError as e:
        logger.error("Could not listen on %s:%d: %s", config.host, config.port, e)
        return 1

    server.serve_forever()
    return 0


if __name__ == "__main__":
    sys.exit(main())
