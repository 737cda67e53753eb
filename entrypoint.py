"""Backend entrypoint: starts uvicorn serving the Orion API with the port from env."""
import os
import uvicorn

from orion.main import app


def main() -> None:
    port = int(os.environ.get("ORION_PORT", "8001"))
    uvicorn.run(app, host="127.0.0.1", port=port)


if __name__ == "__main__":
    main()
