import logging
import os
import socket

from table_sync.ui.dash_app import create_dash_app
from table_sync.logging_config import configure_logging

configure_logging()
logger = logging.getLogger("table_sync.app")

app = create_dash_app(os.getenv("TABLE_SYNC_CONFIG_ROOT", "config"))
server = app.server


def find_free_port(start_port: int, attempts: int = 100) -> int:
    """First port from start_port on that nothing listens on, else start_port."""
    for port in range(start_port, start_port + attempts):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            if s.connect_ex(("localhost", port)) != 0:
                return port
    return start_port


if __name__ == "__main__":
    preferred_port = int(os.getenv("PORT", "8052"))
    port = find_free_port(preferred_port)

    if port != preferred_port:
        logger.warning("Preferred port taken", extra={"preferred_port": preferred_port, "port": port})

    # the coordinator is shared by every request, callbacks run one at a time
    app.run(host="0.0.0.0", port=port, debug=os.getenv("DEBUG", "0") == "1", threaded=False)
