"""
BambooHR applicant-tracking API client.

Fetches applications and statuses, and moves applications between
statuses. Requests are made once with a timeout; retrying is left to
the caller.
"""

from typing import Any, Dict, List, Optional
import logging
import requests

from config import BambooHRSettings

logger = logging.getLogger(__name__)

BASE_URL = "https://api.bamboohr.com/api/gateway.php/{subdomain}/v1"
PAGE_SIZE = 100
MAX_PAGES = 20


class BambooHRError(Exception):
    """Request to BambooHR failed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class BambooHRConfigError(BambooHRError):
    """BambooHR credentials are missing."""


class BambooHRClient:
    """Thin client for the BambooHR applicant-tracking endpoints."""

    def __init__(self, settings: BambooHRSettings, session: Optional[requests.Session] = None):
        """
        Initialize client with connection settings.

        Args:
            settings: BambooHRSettings with api_key, subdomain and timeout
            session: requests.Session to reuse (default: new session)

        Raises:
            BambooHRConfigError: If api_key or subdomain is not set
        """
        if not settings.api_key or not settings.subdomain:
            raise BambooHRConfigError(
                "BambooHR credentials not configured. Please set BAMBOO_API_KEY "
                "and BAMBOO_SUBDOMAIN environment variables."
            )
        self.settings = settings
        self.base_url = BASE_URL.format(subdomain=settings.subdomain)
        self.session = session or requests.Session()
        # BambooHR takes the API key as username with any password
        self.session.auth = (settings.api_key, "x")
        self.session.headers.update({'Accept': 'application/json'})

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        payload: Optional[Dict[str, Any]] = None,
        allow_empty: bool = False
    ) -> Any:
        """
        Send one request and decode the JSON response.

        Args:
            method: HTTP method, 'GET' or 'POST'
            path: Path below the API base URL
            params: Query string parameters (optional)
            payload: JSON request body (optional)
            allow_empty: Return an empty dict for an empty or non-JSON body

        Returns:
            Decoded JSON response

        Raises:
            BambooHRError: On timeout, connection failure, non-2xx status or invalid JSON
        """
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(
                method, url, params=params, json=payload, timeout=self.settings.timeout
            )
        except requests.exceptions.Timeout:
            logger.error(f"Timeout fetching {url}")
            raise BambooHRError(f"Timeout fetching {url}")
        except requests.exceptions.RequestException as e:
            logger.error(f"Request error fetching {url}: {e}")
            raise BambooHRError(f"Request error fetching {url}: {e}")

        if not response.ok:
            logger.error(f"ATS API error: {response.status_code} {method} {url}: {response.text}")
            raise BambooHRError(
                f"ATS API error: {response.status_code} - {response.text}",
                status_code=response.status_code,
            )

        if allow_empty and not response.text:
            return {}
        try:
            return response.json()
        except ValueError as e:
            if allow_empty:
                return {}
            logger.error(f"Invalid JSON from {url}: {e}")
            raise BambooHRError(f"Invalid JSON from {url}: {e}", status_code=response.status_code)

    def get_application(self, application_id) -> Dict[str, Any]:
        """
        Fetch one application with its questions and answers.

        Args:
            application_id: BambooHR application ID

        Returns:
            Decoded application JSON
        """
        return self._request('GET', f"/applicant_tracking/applications/{application_id}")

    def list_applications(self, job_id=None) -> List[Dict[str, Any]]:
        """
        Fetch every page of the application list, optionally for a single job.

        Stops on the first page shorter than PAGE_SIZE, or after MAX_PAGES pages.

        Args:
            job_id: BambooHR job opening ID (optional)

        Returns:
            List of application summaries
        """
        applications = []

        for page in range(1, MAX_PAGES + 1):
            params = {'page': page, 'pageSize': PAGE_SIZE}
            if job_id:
                params['jobId'] = job_id
            data = self._request('GET', "/applicant_tracking/applications", params=params)
            if isinstance(data, dict):
                data = data.get('applications') or data.get('data') or []
            applications.extend(data)

            if len(data) < PAGE_SIZE:
                break
        else:
            logger.warning(
                f"Stopped after {MAX_PAGES} pages; application list may be incomplete"
            )

        logger.info(f"Fetched {len(applications)} applications from BambooHR")
        return applications

    def list_statuses(self) -> List[Dict[str, Any]]:
        """
        Fetch the applicant-tracking statuses a recruiter can choose from.

        Returns:
            List of {'id': int, 'name': str} dictionaries
        """
        data = self._request('GET', "/applicant_tracking/statuses")
        if isinstance(data, dict):
            data = data.get('statuses', [])

        statuses = []
        for status in data:
            try:
                status_id = int(status.get('id'))
            except (TypeError, ValueError):
                status_id = 0
            statuses.append({'id': status_id, 'name': status.get('name') or 'Unknown'})
        return statuses

    def update_status(self, application_id, status_id) -> Dict[str, Any]:
        """
        Move an application to another status.

        Args:
            application_id: BambooHR application ID
            status_id: Status ID from list_statuses, as int or numeric string

        Returns:
            Response body, or an empty dict when BambooHR sends none

        Raises:
            ValueError: If status_id is missing or not a number
            BambooHRError: If BambooHR rejects the update
        """
        status = parse_status_id(status_id)
        data = self._request(
            'POST',
            f"/applicant_tracking/applications/{application_id}/status",
            payload={'status': status},
            allow_empty=True,
        )
        logger.info(f"Application {application_id} moved to status {status}")
        return data


def parse_status_id(status_id) -> int:
    """
    Validate a status ID.

    Raises:
        ValueError: If status_id is missing, zero or not a number
    """
    if isinstance(status_id, bool):
        raise ValueError("statusId is required and must be a valid number")
    try:
        status = int(str(status_id).strip())
    except (TypeError, ValueError):
        raise ValueError("statusId is required and must be a valid number")
    if not status:
        raise ValueError("statusId is required and must be a valid number")
    return status
