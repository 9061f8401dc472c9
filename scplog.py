import logging
import logging.config
import threading

logging.config.dictConfig(
    {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "simple": {
                "format": "[%(asctime)s .%(msecs)03d|%(levelname)s|%(threadName)s|%(filename)s:%(lineno)d] %(message)s",
                "datefmt": "%Y-%m-%dT%H:%M:%S%z",
            }
        },
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "formatter": "simple",
                "stream": "ext://sys.stdout",
                # "level": "WARNING",
                "level": "INFO",
                # "level": "DEBUG",
            },
        },
        "loggers": {
            "root": {
                "level": "DEBUG",
                "handlers": [
                    "stdout",
                ],
            }
        },
    }
)

logger = logging.getLogger("splitcopy")

CONSOLE_HANDLER = "stdout"


def set_console_level(level: int):
    for handler in logging.getLogger().handlers:
        if handler.name == CONSOLE_HANDLER:
            handler.setLevel(level)


def _log_uncaught(args: threading.ExceptHookArgs):
    if issubclass(args.exc_type, SystemExit):
        return

    thread_name = args.thread.name if args.thread is not None else "unknown"
    logger.error(f"Uncaught exception in thread {thread_name}",
                 exc_info=(args.exc_type, args.exc_value, args.exc_traceback))


def install_excepthook():
    threading.excepthook = _log_uncaught
