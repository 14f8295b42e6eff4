import os
import socket

import uvicorn

HOST = os.getenv("SIDECAR_HOST", "127.0.0.1")
PORT = int(os.getenv("SIDECAR_PORT", "0"))


def find_free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind((HOST, 0))
        return sock.getsockname()[1]


def start_server(app, port: int):
    # The desktop shell reads the chosen port from stdout.
    print(f"PORT:{port}", flush=True)
    uvicorn.run(
        app,
        host=HOST,
        port=port,
        log_level="warning",
    )
