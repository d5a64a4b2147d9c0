import pytest

from envload import mapping_lookup, set_default_loader


@pytest.fixture()
def lookup():
    """The lookup source shared by most loader tests."""
    return mapping_lookup(
        {
            "HOST": "localhost",
            "PORT": "8080",
            "URL": "http://example.com",
            "PASSWORD": "xyz",
        }
    )


@pytest.fixture()
def fresh_default_loader():
    # Tests that touch the process-wide loader get a new one and restore the old one after.
    previous = set_default_loader(None)
    yield
    set_default_loader(previous)


class LogRecorder:
    """printf-style log function that keeps the formatted messages."""

    def __init__(self):
        self.logs = []

    def __call__(self, fmt, *args):
        self.logs.append(fmt % args)


@pytest.fixture()
def recorder():
    return LogRecorder()
