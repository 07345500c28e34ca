import logging


def setup_logging(level: str = "WARNING") -> None:
    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(name)s:%(funcName)s] %(levelname)-8s : %(message)s',
    )
