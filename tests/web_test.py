import sys
from unittest.mock import MagicMock, patch

import pytest

# Skip all tests on Windows because gunicorn uses Unix-only modules (fcntl)
pytestmark = pytest.mark.skipif(
    sys.platform == "win32", reason="Gunicorn is not supported on Windows (uses fcntl module)"
)


class TestGunicornOptions:
    def test_options_follow_settings(self):
        from app.core.config import settings
        from app.web import WORKER_CLASS, gunicorn_options

        options = gunicorn_options()

        assert options["bind"] == f"{settings.backend_host}:{settings.backend_port}"
        assert options["workers"] == settings.workers_count
        assert options["worker_class"] == WORKER_CLASS


class TestGunicornApplication:
    """Tests for the custom GunicornApplication class."""

    def test_defaults(self):
        from app.web import APP_URI, GunicornApplication, gunicorn_options

        with patch.object(GunicornApplication, "load_config"):
            app = GunicornApplication()

        assert app.app_uri == APP_URI
        assert app.options == gunicorn_options()

    def test_explicit_options(self):
        from app.web import GunicornApplication

        with patch.object(GunicornApplication, "load_config"):
            app = GunicornApplication("app.main:app", options={"workers": 4})

        assert app.options == {"workers": 4}

    def test_load_config_skips_unknown_and_none(self):
        from app.web import GunicornApplication

        options = {"bind": "127.0.0.1:8080", "workers": 2, "unknown": 1, "accesslog": None}

        with patch("gunicorn.app.base.BaseApplication.__init__", return_value=None):
            app = GunicornApplication("app.main:app", options=options)

        app.cfg = MagicMock()
        app.cfg.settings = {"bind": MagicMock(), "workers": MagicMock(), "accesslog": MagicMock()}

        app.load_config()

        app.cfg.set.assert_any_call("bind", "127.0.0.1:8080")
        app.cfg.set.assert_any_call("workers", 2)
        assert app.cfg.set.call_count == 2

    def test_load_imports_app(self):
        from app.web import GunicornApplication

        with patch("gunicorn.app.base.BaseApplication.__init__", return_value=None):
            app = GunicornApplication("app.main:app", options={})

        with patch("app.web.import_app") as mock_import:
            mock_import.return_value = "loaded"

            assert app.load() == "loaded"
            mock_import.assert_called_once_with("app.main:app")
