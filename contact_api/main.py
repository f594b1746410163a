"""ASGI entrypoint, served with ``uvicorn contact_api.main:app``."""

from .core.app_factory import create_application

app = create_application()

__all__ = ("app",)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("contact_api.main:app", host="0.0.0.0", port=8000)
