from __future__ import annotations

import unittest
from unittest.mock import AsyncMock, Mock, patch

from fastapi.testclient import TestClient

from hook_bridge.api import routes
from hook_bridge.core.models import BuildTriggerParams, TriggerAPIResponse
from hook_bridge.main import create_app
from hook_bridge.services.triggers.service import TriggerService


class TestHookRoutes(unittest.TestCase):
    def setUp(self) -> None:
        self.client_mock = Mock()
        self.client_mock.trigger_build = AsyncMock(
            return_value=(
                TriggerAPIResponse(
                    status="ok",
                    message="triggered build",
                    service="bitrise",
                    app_slug="app-slug",
                    build_slug="build-slug",
                ),
                True,
            )
        )
        patcher = patch.object(
            routes, "trigger_service", TriggerService(client=self.client_mock)
        )
        patcher.start()
        self.addCleanup(patcher.stop)
        self.http = TestClient(create_app())

    def test_health_and_ping(self) -> None:
        self.assertEqual(self.http.get("/health").json(), {"status": "ok"})
        self.assertEqual(self.http.get("/api/ping").json(), {"message": "pong"})

    def test_slack_hook_triggers_build(self) -> None:
        resp = self.http.post(
            "/h/slack/app-slug/api-token",
            data={"trigger_word": "bitrise:", "text": "bitrise: branch: master"},
        )

        self.assertEqual(resp.status_code, 200)
        self.assertEqual(
            resp.json(),
            {
                "text": "Results:\n*Success!* Details:\n"
                "* {Status:ok Message:triggered build Service:bitrise"
                " AppSlug:app-slug BuildSlug:build-slug}"
            },
        )
        self.client_mock.trigger_build.assert_awaited_once_with(
            app_slug="app-slug",
            api_token="api-token",
            params=BuildTriggerParams(branch="master"),
            triggered_by="webhook-slack",
        )

    def test_json_body_is_reported_as_chat_error(self) -> None:
        resp = self.http.post("/h/slack/app-slug/api-token", json={"text": "x"})

        self.assertEqual(resp.status_code, 200)
        self.assertEqual(
            resp.json(),
            {
                "text": "*[!] Error*: Failed to transform the webhook: "
                "Content-Type is not supported: application/json"
            },
        )
        self.client_mock.trigger_build.assert_not_awaited()

    def test_missing_text_is_reported_as_chat_error(self) -> None:
        resp = self.http.post(
            "/h/slack/app-slug/api-token", data={"trigger_word": "bitrise:"}
        )

        self.assertEqual(resp.status_code, 200)
        self.assertEqual(
            resp.json()["text"],
            "*[!] Error*: Failed to transform the webhook: "
            "Failed to parse the request/message: Missing required parameter: 'text'",
        )

    def test_malformed_multipart_is_reported_as_chat_error(self) -> None:
        resp = self.http.post(
            "/h/slack/app-slug/api-token",
            content=b"garbage",
            headers={"Content-Type": "multipart/form-data"},
        )

        self.assertEqual(resp.status_code, 200)
        self.assertEqual(
            resp.json(),
            {
                "text": "*[!] Error*: Failed to transform the webhook: "
                "Content-Type is not supported: multipart/form-data"
            },
        )
        self.client_mock.trigger_build.assert_not_awaited()

    def test_unknown_service(self) -> None:
        resp = self.http.post(
            "/h/unknown/app-slug/api-token",
            data={"trigger_word": "bitrise:", "text": "bitrise: branch: master"},
        )

        self.assertEqual(resp.status_code, 404)
        self.assertEqual(
            resp.json(), {"detail": "No hook provider found for service: unknown"}
        )


if __name__ == "__main__":
    unittest.main()
