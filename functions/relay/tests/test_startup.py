import os
import unittest
from unittest.mock import patch

from fastapi.testclient import TestClient
from google.auth.exceptions import DefaultCredentialsError

from relay import dependencies
from relay.app import create_app
from relay.config import get_settings


class StartupTests(unittest.TestCase):
    """Runs the real lifespan with an empty environment (no Google credentials)."""

    def setUp(self):
        self.env = patch.dict(os.environ, {}, clear=True)
        self.env.start()
        get_settings.cache_clear()
        dependencies.reset_clients()

        no_credentials = DefaultCredentialsError("Your default credentials were not found")
        self.users_init = patch("relay.users.init_firebase_app", side_effect=no_credentials)
        self.push_init = patch("relay.push.init_firebase_app", side_effect=no_credentials)
        self.mock_users_init = self.users_init.start()
        self.mock_push_init = self.push_init.start()

    def tearDown(self):
        self.users_init.stop()
        self.push_init.stop()
        self.env.stop()
        get_settings.cache_clear()
        dependencies.reset_clients()

    def test_server_starts_without_google_credentials(self):
        with TestClient(create_app()) as client:
            response = client.post("/api/chat", json={"mensaje": "hola"})

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"respuesta": "Error: Falta la API key"})
        self.mock_users_init.assert_not_called()
        self.mock_push_init.assert_not_called()

    def test_missing_credentials_surface_on_notify(self):
        with TestClient(create_app()) as client:
            response = client.post(
                "/api/notificar", json={"title": "t", "body": "b", "uid": "u1"}
            )

        self.assertEqual(response.status_code, 500)
        payload = response.json()
        self.assertFalse(payload["ok"])
        self.assertIn("credentials were not found", payload["error"])
        self.mock_users_init.assert_called_once()

    def test_index_page_is_served_from_any_working_directory(self):
        with TestClient(create_app()) as client:
            response = client.get("/")

        self.assertEqual(response.status_code, 200)
        self.assertIn("text/html", response.headers["content-type"])
        self.assertIn("/api/chat", response.text)

    def test_cors_preflight_allows_any_origin(self):
        with TestClient(create_app()) as client:
            response = client.options(
                "/api/chat",
                headers={
                    "Origin": "http://shop.example",
                    "Access-Control-Request-Method": "POST",
                    "Access-Control-Request-Headers": "content-type",
                },
            )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.headers["access-control-allow-origin"], "*")


if __name__ == "__main__":
    unittest.main()
