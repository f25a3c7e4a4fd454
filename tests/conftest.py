from pytest_socket import disable_socket

def pytest_runtest_setup():
    """
    Runs before every test.
    No test may reach a real ESP32 or LaMetric: every attempt to connect
    (HTTP, DNS, etc) will immediately raise a SocketBlockedError.
    Unix sockets stay allowed, the asyncio event loop needs them.
    """
    disable_socket(allow_unix_socket=True)
