# =============================================================================
# tests/test_workers.py - Celery Task Tests
# =============================================================================
# Tasks are called directly (synchronously); no broker is needed.
# =============================================================================

from unittest.mock import patch

from workers import celery_app, send_analytics_events as exported_task
from workers.tasks import send_analytics_events


class TestCeleryApp:

    def test_tasks_registered(self):
        assert "workers.tasks.send_analytics_events" in celery_app.tasks

    def test_config(self):
        assert celery_app.conf.task_serializer == "json"
        assert celery_app.conf.task_ignore_result is True

    def test_package_exports_task(self):
        assert exported_task is send_analytics_events


class TestSendAnalyticsEvents:

    def test_delivers_through_ga_client(self):
        events = [{"name": "search", "params": {"search_term": "tulsi"}}]
        with patch("lib.ga_client.GAClient.send_events", return_value=True) as send:
            result = send_analytics_events("1.2", events)

        send.assert_called_once_with("1.2", events, user_id=None)
        assert result == {"delivered": True, "count": 1}

    def test_reports_undelivered(self):
        events = [{"name": "a"}, {"name": "b"}]
        with patch("lib.ga_client.GAClient.send_events", return_value=False):
            result = send_analytics_events("1.2", events, user_id="u1")

        assert result == {"delivered": False, "count": 2}
