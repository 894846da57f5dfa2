import httpx
import pytest
from unittest.mock import MagicMock, patch

from run_stats.client.rest_client import StatsDeliveryError, post_to_service
from run_stats.models.build_stats import BuildStats

URL = "http://stats.local/api/builds"


def _build():
    return BuildStats(job_name="api", full_job_name="team/api", number=12, result="SUCCESS")


def test_posts_camel_case_json():
    mock_resp = MagicMock(status_code=201)
    mock_resp.raise_for_status = MagicMock()

    with patch("httpx.Client.post", return_value=mock_resp) as mock_post:
        status = post_to_service(URL, _build(), timeout=3.0)

    assert status == 201
    mock_post.assert_called_once()
    assert mock_post.call_args.args[0] == URL
    body = mock_post.call_args.kwargs["json"]
    assert body["fullJobName"] == "team/api"
    assert body["number"] == 12
    assert body["scmInfo"] == {"url": "", "branch": "", "commit": ""}


def test_non_2xx_raises_delivery_error():
    request = httpx.Request("POST", URL)
    mock_resp = MagicMock(status_code=503)
    mock_resp.raise_for_status.side_effect = httpx.HTTPStatusError(
        "unavailable", request=request, response=httpx.Response(503, request=request)
    )

    with patch("httpx.Client.post", return_value=mock_resp):
        with pytest.raises(StatsDeliveryError) as exc_info:
            post_to_service(URL, _build())

    assert exc_info.value.status_code == 503
    assert exc_info.value.url == URL
    assert isinstance(exc_info.value.__cause__, httpx.HTTPStatusError)


def test_transport_error_raises_delivery_error():
    with patch("httpx.Client.post", side_effect=httpx.ConnectError("connection refused")):
        with pytest.raises(StatsDeliveryError) as exc_info:
            post_to_service(URL, _build())
    assert exc_info.value.status_code is None
    assert "connection refused" in str(exc_info.value)


def test_missing_url_raises_without_network():
    with patch("httpx.Client.post") as mock_post:
        with pytest.raises(StatsDeliveryError):
            post_to_service("", _build())
    mock_post.assert_not_called()


def test_uses_configured_timeout(monkeypatch):
    monkeypatch.setenv("STATS_REQUEST_TIMEOUT", "2.5")
    mock_resp = MagicMock(status_code=200)
    with patch("run_stats.client.rest_client.httpx.Client") as mock_client_cls:
        mock_client_cls.return_value.__enter__.return_value.post.return_value = mock_resp
        post_to_service(URL, _build())
    assert mock_client_cls.call_args.kwargs["timeout"] == 2.5
