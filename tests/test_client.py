import logging
from unittest.mock import MagicMock

import pytest
import requests

from bamboohr import (
    BambooHRClient,
    BambooHRConfigError,
    BambooHRError,
    RatingRunner,
    StatusUpdater,
    parse_status_id
)
from config import BambooHRSettings

BASE = "https://api.bamboohr.com/api/gateway.php/acme/v1"


def make_response(status_code=200, data=None, text=None):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.json.return_value = data
    response.text = text if text is not None else ("" if data is None else "json")
    return response


@pytest.fixture
def settings():
    return BambooHRSettings(api_key="secret", subdomain="acme")


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def client(settings, session):
    return BambooHRClient(settings, session=session)


class TestClient:

    def test_missing_credentials(self):
        with pytest.raises(BambooHRConfigError):
            BambooHRClient(BambooHRSettings(api_key=None, subdomain="acme"))

    def test_session_setup(self, client, session):
        assert client.base_url == BASE
        assert session.auth == ("secret", "x")
        session.headers.update.assert_called_once_with({'Accept': 'application/json'})

    def test_get_application(self, client, session):
        session.request.return_value = make_response(data={"id": 5})

        assert client.get_application(5) == {"id": 5}
        session.request.assert_called_once_with(
            'GET',
            f"{BASE}/applicant_tracking/applications/5",
            params=None,
            json=None,
            timeout=20,
        )

    def test_list_applications_single_short_page(self, client, session):
        session.request.return_value = make_response(data={"applications": [{"id": 1}, {"id": 2}]})

        assert client.list_applications(job_id=9) == [{"id": 1}, {"id": 2}]
        assert session.request.call_args.kwargs["params"] == {"page": 1, "pageSize": 100, "jobId": 9}

    def test_list_applications_follows_pages(self, client, session):
        first = [{"id": i} for i in range(100)]
        second = [{"id": 100}, {"id": 101}]
        session.request.side_effect = [make_response(data=first), make_response(data={"data": second})]

        applications = client.list_applications()

        assert len(applications) == 102
        assert applications[-1] == {"id": 101}
        pages = [call.kwargs["params"]["page"] for call in session.request.call_args_list]
        assert pages == [1, 2]

    def test_list_applications_stops_at_page_limit(self, client, session, caplog):
        session.request.side_effect = lambda *args, **kwargs: make_response(
            data=[{"id": 0}] * 100
        )

        with caplog.at_level(logging.WARNING):
            applications = client.list_applications()

        assert session.request.call_count == 20
        assert len(applications) == 2000
        assert "may be incomplete" in caplog.text

    def test_list_statuses(self, client, session):
        session.request.return_value = make_response(data=[
            {"id": "3", "name": "Reviewed"},
            {"id": 7, "name": None},
            {"name": "Broken"},
        ])

        assert client.list_statuses() == [
            {"id": 3, "name": "Reviewed"},
            {"id": 7, "name": "Unknown"},
            {"id": 0, "name": "Broken"},
        ]
        assert session.request.call_args.args[1] == f"{BASE}/applicant_tracking/statuses"

    def test_update_status_posts_numeric_status(self, client, session):
        session.request.return_value = make_response(text="")

        assert client.update_status(5, "12") == {}
        session.request.assert_called_once_with(
            'POST',
            f"{BASE}/applicant_tracking/applications/5/status",
            params=None,
            json={'status': 12},
            timeout=20,
        )

    @pytest.mark.parametrize("status_id", [None, "", "abc", 0, "0", True])
    def test_update_status_rejects_invalid_status(self, client, session, status_id):
        with pytest.raises(ValueError):
            client.update_status(5, status_id)
        session.request.assert_not_called()

    def test_error_status_is_logged_and_raised(self, client, session, caplog):
        session.request.return_value = make_response(status_code=404, text="Not found")

        with caplog.at_level(logging.ERROR):
            with pytest.raises(BambooHRError) as excinfo:
                client.get_application(5)
        assert excinfo.value.status_code == 404
        assert "404 - Not found" in str(excinfo.value)
        assert "404" in caplog.text

    def test_timeout_is_wrapped(self, client, session):
        session.request.side_effect = requests.exceptions.Timeout()

        with pytest.raises(BambooHRError) as excinfo:
            client.get_application(5)
        assert excinfo.value.status_code is None


def test_parse_status_id():
    assert parse_status_id(4) == 4
    assert parse_status_id(" 4 ") == 4


class FakeClient:

    def __init__(self, payloads):
        self.payloads = payloads
        self.updated = []

    def get_application(self, application_id):
        payload = self.payloads[application_id]
        if isinstance(payload, Exception):
            raise payload
        return payload

    def update_status(self, application_id, status_id):
        if isinstance(self.payloads.get(application_id), Exception):
            raise self.payloads[application_id]
        self.updated.append((application_id, status_id))
        return {}


def test_runner_isolates_failures():
    client = FakeClient({
        "1": {"id": 1, "questionsAndAnswers": [
            {"question": {"label": "Years of experience"}, "answer": {"label": "12"}},
        ]},
        "2": BambooHRError("ATS API error: 503 - unavailable", status_code=503),
        "3": {"id": 3},
    })
    results = RatingRunner(client, max_workers=2).rate_all(["1", "2", "3"])

    assert [r.application_id for r in results] == ["1", "2", "3"]
    assert [r.status for r in results] == ["OK", "ERROR", "OK"]
    assert results[0].rating.overall == 9
    assert results[1].rating is None
    assert "503" in results[1].error_message
    assert results[2].rating.confidence == "low"


class TestStatusUpdater:

    def test_bulk_update_isolates_failures(self):
        client = FakeClient({"2": BambooHRError("ATS API error: 400 - bad", status_code=400)})
        result = StatusUpdater(client, max_workers=2).update_all(["1", "2", "3"], "6")

        assert [u.status for u in result.updates] == ["OK", "ERROR", "OK"]
        assert sorted(client.updated) == [("1", 6), ("3", 6)]
        assert result.to_dict() == {
            "success": True,
            "message": "Updated 2 candidates, 1 failed",
            "successful": 2,
            "failed": 1,
        }

    def test_all_successful_message(self):
        result = StatusUpdater(FakeClient({})).update_all(["1"], 6)
        assert result.message == "Updated 1 candidates"

    def test_requires_ids(self):
        with pytest.raises(ValueError):
            StatusUpdater(FakeClient({})).update_all([], 6)

    def test_requires_status(self):
        client = FakeClient({})
        with pytest.raises(ValueError):
            StatusUpdater(client).update_all(["1"], None)
        assert client.updated == []
