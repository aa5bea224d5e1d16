import logging
import sys


def setup_logging(verbose: bool = False) -> None:
    # stdout is reserved for result lines
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
