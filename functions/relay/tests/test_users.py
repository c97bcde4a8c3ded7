import os
import unittest
from unittest.mock import MagicMock, patch

from relay import dependencies
from relay.config import Settings
from relay.push import InMemoryPushClient
from relay.users import FirestoreUserStore, InMemoryUserStore


def _firestore_client(data, exists=True):
    snapshot = MagicMock()
    snapshot.exists = exists
    snapshot.to_dict.return_value = data
    client = MagicMock()
    client.collection.return_value.document.return_value.get.return_value = snapshot
    return client


class FirestoreUserStoreTests(unittest.TestCase):
    def test_reads_token_and_plan(self):
        client = _firestore_client({"pushToken": "tok", "plan": "pro", "nombre": "x"})
        store = FirestoreUserStore(collection="usuarios", client=client)

        user = store.get_user("u1")

        client.collection.assert_called_once_with("usuarios")
        client.collection.return_value.document.assert_called_once_with("u1")
        self.assertEqual(user.uid, "u1")
        self.assertEqual(user.push_token, "tok")
        self.assertEqual(user.plan, "pro")
        self.assertTrue(user.is_notification_eligible)

    @patch("relay.users.firestore.client")
    @patch("relay.users.init_firebase_app")
    def test_firestore_client_is_created_on_first_lookup(self, mock_init, mock_client):
        mock_client.return_value = _firestore_client({"pushToken": "tok", "plan": "pro"})
        store = FirestoreUserStore()
        mock_init.assert_not_called()
        mock_client.assert_not_called()

        self.assertEqual(store.get_user("u1").push_token, "tok")
        mock_client.assert_called_once_with(mock_init.return_value)

    def test_missing_document_returns_none(self):
        store = FirestoreUserStore(client=_firestore_client(None, exists=False))
        self.assertIsNone(store.get_user("ghost"))

    def test_free_plan_is_not_eligible(self):
        store = FirestoreUserStore(client=_firestore_client({"pushToken": "tok", "plan": "free"}))
        self.assertFalse(store.get_user("u1").is_notification_eligible)


class SettingsTests(unittest.TestCase):
    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)
        self.assertEqual(settings.port, 5000)
        self.assertIsNone(settings.openai_api_key)
        self.assertEqual(settings.users_collection, "usuarios")
        self.assertEqual(settings.cors_origin_list, ["*"])
        self.assertIsNone(settings.upstream_timeout_seconds)

    def test_reads_environment(self):
        env = {
            "OPENAI_API_KEY": "sk-env",
            "PORT": "8080",
            "CORS_ORIGINS": "http://a.test, http://b.test",
            "RELAY_USE_IN_MEMORY_BACKENDS": "1",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = Settings(_env_file=None)
        self.assertEqual(settings.openai_api_key, "sk-env")
        self.assertEqual(settings.port, 8080)
        self.assertEqual(settings.cors_origin_list, ["http://a.test", "http://b.test"])
        self.assertTrue(settings.use_in_memory_backends)


class DependencyTests(unittest.TestCase):
    def setUp(self):
        dependencies.reset_clients()

    def tearDown(self):
        dependencies.reset_clients()

    @patch("relay.dependencies.get_settings")
    def test_in_memory_backends_are_singletons(self, mock_settings):
        mock_settings.return_value = type(
            "Settings",
            (),
            {
                "use_in_memory_backends": True,
                "users_collection": "usuarios",
                "openai_api_key": "sk-test",
                "openai_model": "gpt-4o",
                "openai_api_url": "https://api.openai.test/v1/chat/completions",
                "upstream_timeout_seconds": None,
            },
        )()
        store = dependencies.get_user_store()
        self.assertIsInstance(store, InMemoryUserStore)
        self.assertIs(dependencies.get_user_store(), store)
        self.assertIsInstance(dependencies.get_fcm_client(), InMemoryPushClient)
        self.assertIsInstance(dependencies.get_onesignal_client(), InMemoryPushClient)
        self.assertEqual(dependencies.get_chat_client().api_key, "sk-test")


if __name__ == "__main__":
    unittest.main()
