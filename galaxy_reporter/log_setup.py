import logging


def configure_logging(level: str | int = logging.INFO):

    root_logger = logging.getLogger()

    # Clear any existing handlers to avoid duplicate or conflicting logs
    root_logger.handlers.clear()

    # Stream handler (stderr), stdout is reserved for the report itself
    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter('%(asctime)s - [ %(name)s ] - %(levelname)s: %(message)s'))

    root_logger.setLevel(level)
    root_logger.addHandler(stream_handler)

    # Set noisy logs to critical to decrease confusion.
    for noisy_logger in ["httpx", "httpcore"]:
        logging.getLogger(noisy_logger).setLevel(logging.CRITICAL)
