"""Simple launcher for the transport order API.

Starts a uvicorn server on the host and port from ORDERS_API_HOST /
ORDERS_API_PORT.
"""

from __future__ import annotations

import uvicorn

from transport_orders.api import create_app
from transport_orders.config import get_config


def main() -> None:
    config = get_config()
    print(f"=== Transport Orders API on {config.api.host}:{config.api.port} ===")
    uvicorn.run(create_app(config), host=config.api.host, port=config.api.port)


if __name__ == "__main__":
    main()
