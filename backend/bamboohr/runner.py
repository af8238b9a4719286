"""
Batch runners with parallel execution.

Rates applications and changes their status in bulk, with timeout
protection and failure isolation.
"""

from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeoutError
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional
import logging

from bamboohr.applications import rate_application
from bamboohr.client import parse_status_id
from config import RatingConfig
from rating import RatingEngine, RatingResult

logger = logging.getLogger(__name__)


@dataclass
class CandidateRating:
    """Result of rating a single application."""
    application_id: str
    status: str  # 'OK' or 'ERROR'
    rating: Optional[RatingResult]
    error_message: Optional[str]


class RatingRunner:
    """
    Rates applications in parallel.

    Features:
    - Parallel execution with ThreadPoolExecutor
    - Timeout protection per application (30 seconds)
    - Failure isolation (one application failure doesn't affect others)
    """

    def __init__(
        self,
        client,
        config: Optional[RatingConfig] = None,
        max_workers: int = 4,
        timeout: int = 30
    ):
        """
        Initialize rating runner.

        Args:
            client: BambooHRClient used to fetch applications
            config: Rating configuration
            max_workers: Parallel workers
            timeout: Seconds to wait for each application
        """
        self.client = client
        self.engine = RatingEngine(config)
        self.max_workers = max_workers
        self.timeout = timeout

    def rate_all(self, application_ids: Iterable) -> List[CandidateRating]:
        """
        Rate every application, continuing on individual failures.

        Args:
            application_ids: BambooHR application IDs

        Returns:
            CandidateRating per application, in input order
        """
        results = []

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = [
                (str(app_id), executor.submit(self._rate_one, app_id))
                for app_id in application_ids
            ]

            for app_id, future in futures:
                try:
                    rating = future.result(timeout=self.timeout)
                    results.append(CandidateRating(app_id, "OK", rating, None))
                    logger.info(
                        f"[{app_id}] status=OK overall={rating.overall} "
                        f"confidence={rating.confidence}"
                    )
                except FuturesTimeoutError:
                    results.append(CandidateRating(app_id, "ERROR", None, "Timeout"))
                    logger.error(f"[{app_id}] Timeout after {self.timeout}s")
                except Exception as e:
                    results.append(CandidateRating(app_id, "ERROR", None, str(e)))
                    logger.error(f"[{app_id}] Error: {str(e)}")

        return results

    def _rate_one(self, application_id) -> RatingResult:
        payload = self.client.get_application(application_id)
        return rate_application(payload, engine=self.engine)


@dataclass
class StatusUpdate:
    """Result of moving a single application to a new status."""
    application_id: str
    status: str  # 'OK' or 'ERROR'
    error_message: Optional[str]


@dataclass
class BulkStatusResult:
    """Result of a bulk status change."""
    updates: List[StatusUpdate]

    @property
    def successful(self) -> int:
        return sum(1 for update in self.updates if update.status == "OK")

    @property
    def failed(self) -> int:
        return len(self.updates) - self.successful

    @property
    def message(self) -> str:
        message = f"Updated {self.successful} candidates"
        if self.failed:
            message += f", {self.failed} failed"
        return message

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": True,
            "message": self.message,
            "successful": self.successful,
            "failed": self.failed,
        }


class StatusUpdater:
    """Moves many applications to one status in parallel."""

    def __init__(self, client, max_workers: int = 4, timeout: int = 30):
        self.client = client
        self.max_workers = max_workers
        self.timeout = timeout

    def update_all(self, application_ids: Iterable, status_id) -> BulkStatusResult:
        """
        Move every application to status_id, continuing on individual failures.

        Args:
            application_ids: BambooHR application IDs
            status_id: Target status ID

        Returns:
            BulkStatusResult with one StatusUpdate per application, in input order

        Raises:
            ValueError: If no application IDs are given or status_id is invalid
        """
        application_ids = list(application_ids or [])
        if not application_ids:
            raise ValueError("Candidate IDs are required.")
        status_id = parse_status_id(status_id)

        updates = []
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = [
                (str(app_id), executor.submit(self.client.update_status, app_id, status_id))
                for app_id in application_ids
            ]

            for app_id, future in futures:
                try:
                    future.result(timeout=self.timeout)
                    updates.append(StatusUpdate(app_id, "OK", None))
                except FuturesTimeoutError:
                    updates.append(StatusUpdate(app_id, "ERROR", "Timeout"))
                    logger.error(f"[{app_id}] Status update timed out after {self.timeout}s")
                except Exception as e:
                    updates.append(StatusUpdate(app_id, "ERROR", str(e)))
                    logger.error(f"[{app_id}] Status update failed: {str(e)}")

        result = BulkStatusResult(updates)
        logger.info(result.message)
        return result
