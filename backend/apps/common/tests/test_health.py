import json
import unittest
from unittest import mock

import redis

from apps.common import views


class HealthViewsUnitTests(unittest.TestCase):
    def test_live_health_returns_alive_payload(self):
        response = views.live_health(None)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(json.loads(response.content), {"status": "alive"})

    @mock.patch("apps.common.views.os.getenv", return_value=None)
    @mock.patch(
        "apps.common.views._db_check",
        return_value={"status": "ok", "latency_ms": 0.42},
    )
    def test_ready_health_skips_redis_when_not_configured(self, mock_db_check, _getenv):
        response = views.ready_health(None)
        self.assertEqual(response.status_code, 200)
        payload = json.loads(response.content)
        self.assertEqual(payload["status"], "ok")
        self.assertEqual(payload["checks"]["database"], mock_db_check.return_value)
        self.assertEqual(payload["checks"]["redis"]["status"], "skipped")

    @mock.patch("apps.common.views.os.getenv", return_value="redis://cache:6379/1")
    @mock.patch(
        "apps.common.views._redis_ping",
        return_value={"status": "fail", "error": "unreachable"},
    )
    @mock.patch("apps.common.views._db_check", return_value={"status": "ok"})
    def test_ready_health_degraded_when_redis_fails(self, _db, mock_ping, _getenv):
        response = views.ready_health(None)
        self.assertEqual(response.status_code, 503)
        payload = json.loads(response.content)
        self.assertEqual(payload["status"], "degraded")
        self.assertEqual(payload["checks"]["redis"], mock_ping.return_value)
        mock_ping.assert_called_once_with("redis://cache:6379/1")

    @mock.patch("apps.common.views.redis.from_url")
    def test_redis_ping_reports_connection_errors(self, mock_from_url):
        mock_from_url.return_value.ping.side_effect = redis.ConnectionError("refused")
        result = views._redis_ping("redis://cache:6379/1")
        self.assertEqual(result["status"], "fail")
        self.assertIn("refused", result["error"])
