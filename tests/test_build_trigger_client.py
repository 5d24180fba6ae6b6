from __future__ import annotations

import json
import unittest

import httpx

from hook_bridge.core.models import BuildTriggerParams, TriggerAPIResponse
from hook_bridge.services.bitrise import BuildTriggerAPIError, BuildTriggerClient


class TestBuildTriggerClient(unittest.IsolatedAsyncioTestCase):
    def _client(self, handler) -> BuildTriggerClient:
        return BuildTriggerClient(
            base_url="https://ci.example.com/",
            timeout_s=5.0,
            transport=httpx.MockTransport(handler),
        )

    async def test_successful_trigger_sends_expected_payload(self) -> None:
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["url"] = str(request.url)
            captured["body"] = json.loads(request.content)
            return httpx.Response(
                201,
                json={
                    "status": "ok",
                    "message": "triggered build",
                    "service": "bitrise",
                    "slug": "app-slug",
                    "build_slug": "build-slug",
                },
            )

        resp, is_success = await self._client(handler).trigger_build(
            app_slug="app-slug",
            api_token="secret-api-token",
            params=BuildTriggerParams(branch="master", tag="v1.0"),
            triggered_by="webhook-slack",
        )

        self.assertTrue(is_success)
        self.assertEqual(captured["url"], "https://ci.example.com/app/app-slug/build/start.json")
        self.assertEqual(
            captured["body"],
            {
                "hook_info": {"type": "bitrise", "api_token": "secret-api-token"},
                "build_params": {"branch": "master", "tag": "v1.0"},
                "triggered_by": "webhook-slack",
            },
        )
        self.assertEqual(
            resp,
            TriggerAPIResponse(
                status="ok",
                message="triggered build",
                service="bitrise",
                app_slug="app-slug",
                build_slug="build-slug",
            ),
        )

    async def test_non_2xx_is_failed_trigger(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                400,
                json={"status": "error", "message": "branch not found", "service": "bitrise"},
            )

        resp, is_success = await self._client(handler).trigger_build(
            app_slug="app-slug",
            api_token="token",
            params=BuildTriggerParams(branch="nope"),
            triggered_by="webhook-slack",
        )

        self.assertFalse(is_success)
        self.assertEqual(resp.status, "error")
        self.assertEqual(resp.message, "branch not found")
        self.assertEqual(resp.build_slug, "")

    async def test_non_json_response_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="Bad Gateway")

        with self.assertRaises(BuildTriggerAPIError) as cm:
            await self._client(handler).trigger_build(
                app_slug="app-slug",
                api_token="token",
                params=BuildTriggerParams(branch="master"),
                triggered_by="webhook-slack",
            )
        self.assertEqual(cm.exception.status_code, 502)

    async def test_undecodable_body_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, content=b"\xff\xfe\xfa bad")

        with self.assertRaises(BuildTriggerAPIError) as cm:
            await self._client(handler).trigger_build(
                app_slug="app-slug",
                api_token="token",
                params=BuildTriggerParams(branch="master"),
                triggered_by="webhook-slack",
            )
        self.assertEqual(cm.exception.status_code, 502)

    async def test_network_error_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with self.assertRaises(BuildTriggerAPIError) as cm:
            await self._client(handler).trigger_build(
                app_slug="app-slug",
                api_token="token",
                params=BuildTriggerParams(branch="master"),
                triggered_by="webhook-slack",
            )
        self.assertIn("ConnectError", str(cm.exception))
        self.assertIsNone(cm.exception.status_code)


if __name__ == "__main__":
    unittest.main()
