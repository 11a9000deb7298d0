"""ASGI entrypoint for the Coffee Note API."""

import uvicorn

from coffee_note.api.app import create_app
from coffee_note.containers import build_container

app = create_app(build_container())


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)  # noqa: S104
