from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional, Sequence

import requests
from pydantic import TypeAdapter, ValidationError
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_fixed

from golf_rivals import settings
from golf_rivals.errors import FetchError, PayloadError
from golf_rivals.models import Hole, SolutionLog, Submission

log = logging.getLogger(__name__)

HEADERS = {"User-Agent": settings.USER_AGENT, "Accept": "application/json"}

_HOLES = TypeAdapter(List[Hole])
_SUBMISSIONS = TypeAdapter(List[Submission])


class BadStatus(Exception):
    def __init__(self, url: str, status: int):
        self.url = url
        self.status = status
        super().__init__(f"GET {url} -> HTTP {status}")


def _log_retry(state) -> None:
    log.warning(
        "%s; retrying (attempt %d failed)", state.outcome.exception(), state.attempt_number
    )


def fetch_text(
    url: str,
    params: Optional[Dict[str, str]] = None,
    attempts: Optional[int] = None,
    wait_seconds: Optional[float] = None,
) -> str:
    """GET with a bounded retry on non-2xx responses.

    Raises BadStatus once every attempt has failed.
    """
    retrying = Retrying(
        stop=stop_after_attempt(attempts or settings.FETCH_ATTEMPTS),
        wait=wait_fixed(settings.RETRY_WAIT_SECONDS if wait_seconds is None else wait_seconds),
        retry=retry_if_exception_type(BadStatus),
        before_sleep=_log_retry,
        reraise=True,
    )
    for attempt in retrying:
        with attempt:
            resp = requests.get(url, params=params, headers=HEADERS, timeout=settings.TIMEOUT)
            if not resp.ok:
                raise BadStatus(resp.url or url, resp.status_code)
            return resp.text
    raise RuntimeError("Unreachable")


def fetch_holes(**retry_opts) -> List[Hole]:
    url = f"{settings.API_BASE_URL}/holes"
    try:
        text = fetch_text(url, **retry_opts)
    except (BadStatus, requests.RequestException) as e:
        raise FetchError(f"Could not fetch the list of holes: {e}") from e
    try:
        return _HOLES.validate_json(text)
    except ValidationError as e:
        raise PayloadError(f"Malformed holes listing from {url}: {e}") from e


def fetch_solution_log(hole_id: str, language: str, name: str = "", **retry_opts) -> SolutionLog:
    url = f"{settings.API_BASE_URL}/solutions-log"
    try:
        text = fetch_text(url, params={"hole": hole_id, "lang": language}, **retry_opts)
    except (BadStatus, requests.RequestException) as e:
        raise FetchError(
            f'Could not fetch the solutions log for hole "{hole_id}" ({e}). '
            "The code.golf API is a little unstable, so you might just try re-running."
        ) from e
    try:
        submissions = _SUBMISSIONS.validate_json(text)
    except ValidationError as e:
        raise PayloadError(f'Could not parse the solutions log for hole "{hole_id}": {e}') from e
    log.debug("hole %s: %d submissions", hole_id, len(submissions))
    return SolutionLog(hole=hole_id, submissions=tuple(submissions), name=name)


def fetch_all_logs(
    holes: Sequence[Hole],
    language: str,
    max_workers: Optional[int] = None,
    **retry_opts,
) -> List[SolutionLog]:
    """Fetch every hole's log concurrently; results keep the order of `holes`.

    Any failure propagates and aborts the whole run.
    """
    if not holes:
        return []
    workers = max(1, min(len(holes), max_workers or settings.FETCH_WORKERS))
    log.info("Fetching solution log for %d holes (%d workers)...", len(holes), workers)

    def one(hole: Hole) -> SolutionLog:
        return fetch_solution_log(hole.id, language, name=hole.name, **retry_opts)

    with ThreadPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(one, holes))
