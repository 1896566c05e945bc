from typing import Any

from gunicorn.app.base import BaseApplication
from gunicorn.util import import_app

from app.core.config import settings

APP_URI = "app.main:app"
WORKER_CLASS = "uvicorn.workers.UvicornWorker"


def gunicorn_options() -> dict[str, Any]:
    """Gunicorn settings derived from the application settings"""
    return {
        "bind": f"{settings.backend_host}:{settings.backend_port}",
        "workers": settings.workers_count,
        "worker_class": WORKER_CLASS,
        "reload": settings.reload_uvicorn,
        "accesslog": None,
    }


class GunicornApplication(BaseApplication):
    """
    Embedded Gunicorn server running the API with uvicorn workers.

    Options unknown to Gunicorn and options set to None are ignored.
    """

    def __init__(self, app_uri: str = APP_URI, options: dict[str, Any] | None = None):
        self.app_uri = app_uri
        self.options = gunicorn_options() if options is None else options
        super().__init__()

    def load_config(self):
        for key, value in self.options.items():
            if key.lower() in self.cfg.settings and value is not None:
                self.cfg.set(key.lower(), value)

    def load(self):
        return import_app(self.app_uri)
