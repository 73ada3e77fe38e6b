import logging

from tracker.constants import LOG_FORMAT, LOG_LEVEL
from tracker.ui import run_app


def main():
    logging.basicConfig(level=LOG_LEVEL.upper(), format=LOG_FORMAT)
    run_app()

if __name__ == "__main__":
    main()
