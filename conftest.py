import logging
import pytest  # noqa: F401


def pytest_configure(config):
    """
    Lets caplog see basiskit's debug messages (frame phases, drag
    capture) during the tests.
    """
    logging.getLogger("basiskit").setLevel(logging.DEBUG)
