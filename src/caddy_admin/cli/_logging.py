import logging
import sys

_PACKAGE_LOGGER = "caddy_admin"
_TRANSPORT_LOGGERS = ("httpx", "httpcore")
_FORMAT = "%(asctime)s %(levelname)-8s [caddy-admin] %(name)s: %(message)s"


def configure_logging(*, verbose: bool = False) -> None:
    """Send log records to stderr for one CLI invocation.

    Without ``--verbose`` the client's own failure warnings are held back,
    since every failed command already prints ``Error: <message>``.
    With it, each admin request and the httpx exchange behind it are logged
    at DEBUG.
    """
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.DEBUG if verbose else logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%H:%M:%S"))
    root.addHandler(handler)

    logging.getLogger(_PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.ERROR)
    for name in _TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)
