from __future__ import annotations

import importlib.util
import re
import unittest

from fastapi.testclient import TestClient

from support import PROJECT_ROOT, FakeCompletionClient, failing_client

from app_main import create_app
from routers import CORS_HEADERS
from services import ChatService, echo_reply
from settings import Settings


TIMESTAMP_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


def _load_function_module():
    spec = importlib.util.spec_from_file_location(
        "relay_chat_function", PROJECT_ROOT / "api" / "chat.py"
    )
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _assert_cors(test: unittest.TestCase, response) -> None:
    for name, value in CORS_HEADERS.items():
        test.assertEqual(response.headers.get(name), value)


class ServerAppTest(unittest.TestCase):
    def setUp(self) -> None:
        self.settings = Settings.model_validate({"GEMINI_API_KEY": None})

    def _client(self, service: ChatService) -> TestClient:
        return TestClient(create_app(self.settings, service))

    def test_unconfigured_provider_returns_500(self) -> None:
        client = self._client(ChatService(FakeCompletionClient(configured=False)))

        response = client.post("/api/chat", json={"message": "hello"})

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "API key not configured"})
        _assert_cors(self, response)

    def test_empty_body_returns_400(self) -> None:
        client = self._client(ChatService(echo=True))

        response = client.post("/api/chat", json={})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Message is required"})
        _assert_cors(self, response)

    def test_malformed_json_returns_400(self) -> None:
        client = self._client(ChatService(echo=True))

        response = client.post(
            "/api/chat", content=b"{oops", headers={"Content-Type": "application/json"}
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Message is required"})

    def test_echo_variant_replies(self) -> None:
        client = self._client(ChatService(echo=True))

        response = client.post("/api/chat", json={"message": "hi"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"reply": echo_reply("hi")})
        self.assertTrue(response.json()["reply"].startswith("Echo: hi"))
        _assert_cors(self, response)

    def test_put_is_not_allowed(self) -> None:
        client = self._client(ChatService(echo=True))

        response = client.put("/api/chat", json={"message": "hi"})

        self.assertEqual(response.status_code, 405)
        self.assertEqual(response.json(), {"error": "Method not allowed"})
        _assert_cors(self, response)

    def test_unrouted_methods_use_the_same_405_body(self) -> None:
        client = self._client(ChatService(echo=True))

        for method in ("TRACE", "PROPFIND"):
            with self.subTest(method=method):
                response = client.request(method, "/api/chat")
                self.assertEqual(response.status_code, 405)
                self.assertEqual(response.content, b'{"error":"Method not allowed"}')
                _assert_cors(self, response)

    def test_unknown_path_keeps_default_404(self) -> None:
        response = self._client(ChatService(echo=True)).get("/missing")

        self.assertEqual(response.status_code, 404)
        _assert_cors(self, response)

    def test_preflight_is_empty_200(self) -> None:
        client = self._client(ChatService(FakeCompletionClient(configured=False)))

        for _ in range(2):
            response = client.options(
                "/api/chat",
                headers={
                    "Origin": "http://localhost:5173",
                    "Access-Control-Request-Method": "POST",
                },
            )
            self.assertEqual(response.status_code, 200)
            self.assertEqual(response.content, b"")
            _assert_cors(self, response)

    def test_provider_failure_then_recovery(self) -> None:
        fake = failing_client("model overloaded")
        client = self._client(ChatService(fake))

        with self.assertLogs("relay-chat.chat", level="ERROR"):
            failed = client.post("/api/chat", json={"message": "hello"})
        self.assertEqual(failed.status_code, 500)
        self.assertEqual(
            failed.json(),
            {"error": "Failed to process chat request", "details": "model overloaded"},
        )

        fake.error = None
        recovered = client.post("/api/chat", json={"message": "hello"})
        self.assertEqual(recovered.status_code, 200)
        self.assertEqual(recovered.json(), {"reply": "pong"})

    def test_health_is_repeatable(self) -> None:
        client = self._client(ChatService(echo=True))

        for _ in range(3):
            response = client.get("/health")
            self.assertEqual(response.status_code, 200)
            body = response.json()
            self.assertEqual(body["status"], "healthy")
            self.assertRegex(body["timestamp"], TIMESTAMP_PATTERN)
            _assert_cors(self, response)


class FunctionAppTest(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.module = _load_function_module()

    def test_exposes_mangum_handler(self) -> None:
        self.assertTrue(callable(self.module.handler))

    def test_bodies_match_server_byte_for_byte(self) -> None:
        settings = Settings.model_validate({})
        cases = [
            ("post", {"json": {"message": "hi"}}, ChatService(echo=True)),
            ("post", {"json": {}}, ChatService(echo=True)),
            ("put", {"json": {"message": "hi"}}, ChatService(echo=True)),
            ("post", {"json": {"message": "hello"}}, ChatService(FakeCompletionClient(configured=False))),
            ("post", {"json": {"message": "hello"}}, ChatService(FakeCompletionClient(reply="ünïcode"))),
            ("options", {}, ChatService(echo=True)),
        ]
        for method, kwargs, service in cases:
            with self.subTest(method=method, kwargs=kwargs):
                server = TestClient(create_app(settings, service))
                function = TestClient(self.module.build_function_app(settings, service))

                expected = getattr(server, method)("/api/chat", **kwargs)
                actual = getattr(function, method)("/api/chat", **kwargs)

                self.assertEqual(actual.status_code, expected.status_code)
                self.assertEqual(actual.content, expected.content)
                _assert_cors(self, actual)

    def test_function_rejects_unrouted_methods(self) -> None:
        app = self.module.build_function_app(Settings.model_validate({}), ChatService(echo=True))

        response = TestClient(app).request("TRACE", "/api/chat")

        self.assertEqual(response.status_code, 405)
        self.assertEqual(response.json(), {"error": "Method not allowed"})
        _assert_cors(self, response)

    def test_function_upstream_error(self) -> None:
        app = self.module.build_function_app(Settings.model_validate({}), ChatService(failing_client("boom")))

        with self.assertLogs("relay-chat.chat", level="ERROR"):
            response = TestClient(app).post("/api/chat", json={"message": "hi"})

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()["details"], "boom")
        _assert_cors(self, response)


if __name__ == "__main__":
    unittest.main()
