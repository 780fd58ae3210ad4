"""Client for a user's group memberships in the admin REST API."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Dict, Iterable, List, Optional, Tuple
from urllib.parse import quote, urlencode

from tqdm import tqdm

from .core.config import API_MAX_LIMIT
from .core.errors import HTTPStatusError, RawBodyError
from .core.http import Transport, build_request, urllib_transport
from .core.session import Session

logger = logging.getLogger(__name__)


def _seg(value: str) -> str:
    return quote(str(value), safe="")


class GroupMembershipClient:
    """List, add and remove a user's groups within a realm.

    Each method is a single round trip.  Failures surface as exceptions:
    transport errors unchanged, unexpected statuses as
    :class:`~kcadmin_cli.core.errors.HTTPStatusError` (``find``/``count``) or
    :class:`~kcadmin_cli.core.errors.RawBodyError` (``add``/``remove``).

    Example::

        client = GroupMembershipClient(Session("https://sso.example.com", token))
        for group in client.find("master", user_id):
            print(group["name"])
    """

    def __init__(self, session: Session, transport: Transport = urllib_transport):
        self.session = session
        self.transport = transport

    def _url(self, realm: str, user_id: str, *tail: str) -> str:
        parts = ["admin", "realms", _seg(realm), "users", _seg(user_id), "groups"]
        parts.extend(tail)
        return f"{self.session.base_url}/" + "/".join(parts)

    def _send(self, method: str, url: str):
        req = build_request(method, url, self.session.access_token)
        logger.debug("%s %s", req.method, req.url)
        resp = self.transport(req)
        logger.debug("%s %s -> %s", req.method, req.url, resp.status_code)
        return resp

    def find(
        self,
        realm: str,
        user_id: str,
        *,
        first: Optional[int] = None,
        max: Optional[int] = None,
        search: Optional[str] = None,
        brief: Optional[bool] = None,
    ) -> Any:
        """Return the groups ``user_id`` belongs to, as sent by the server."""
        params: Dict[str, Any] = {}
        if first is not None:
            params["first"] = first
        if max is not None:
            params["max"] = max
        if search is not None:
            params["search"] = search
        if brief is not None:
            params["briefRepresentation"] = "true" if brief else "false"
        url = self._url(realm, user_id)
        if params:
            url = f"{url}?{urlencode(params)}"
        resp = self._send("GET", url)
        if resp.status_code != 200:
            raise HTTPStatusError(resp.status_code, resp.body, "find")
        return resp.body

    def find_all(self, realm: str, user_id: str, page_size: int = API_MAX_LIMIT) -> List[Any]:
        """Page through :meth:`find` until a short or repeated page is received.

        A page longer than ``page_size`` means the server ignored ``first`` and
        ``max`` and sent every group at once; that page is returned as is.
        """
        page_size = max(1, min(page_size, API_MAX_LIMIT))
        results: List[Any] = []
        previous = None
        first = 0
        while True:
            page = self.find(realm, user_id, first=first, max=page_size) or []
            if not page or page == previous:
                break
            if len(page) > page_size:
                return list(page)
            results.extend(page)
            if len(page) < page_size:
                break
            previous = page
            first += page_size
        return results

    def count(self, realm: str, user_id: str) -> int:
        resp = self._send("GET", self._url(realm, user_id, "count"))
        if resp.status_code != 200:
            raise HTTPStatusError(resp.status_code, resp.body, "count")
        body = resp.body
        if isinstance(body, dict):
            return int(body.get("count", 0))
        return int(body)

    def add(self, realm: str, user_id: str, group_id: str) -> Any:
        """Make ``user_id`` a member of ``group_id``."""
        return self._membership("PUT", "add", realm, user_id, group_id)

    def remove(self, realm: str, user_id: str, group_id: str) -> Any:
        """Drop ``user_id`` from ``group_id``."""
        return self._membership("DELETE", "remove", realm, user_id, group_id)

    def _membership(self, method: str, op: str, realm: str, user_id: str, group_id: str) -> Any:
        resp = self._send(method, self._url(realm, user_id, _seg(group_id)))
        if resp.status_code != 204:
            raise RawBodyError(resp.body, resp.status_code, op)
        return resp.body

    def add_many(
        self,
        realm: str,
        user_id: str,
        group_ids: Iterable[str],
        *,
        workers: int = 4,
        progress: bool = True,
    ) -> List[Tuple[str, Optional[Exception]]]:
        """Add ``user_id`` to every group in ``group_ids`` concurrently.

        Returns ``(group_id, error)`` pairs in input order; ``error`` is
        ``None`` on success.  One failing group does not stop the others.
        """
        return self._apply_many(self.add, realm, user_id, group_ids, workers, progress, "Adding")

    def remove_many(
        self,
        realm: str,
        user_id: str,
        group_ids: Iterable[str],
        *,
        workers: int = 4,
        progress: bool = True,
    ) -> List[Tuple[str, Optional[Exception]]]:
        return self._apply_many(self.remove, realm, user_id, group_ids, workers, progress, "Removing")

    def _apply_many(self, func, realm, user_id, group_ids, workers, progress, desc):
        ids = list(group_ids)

        def run(gid: str) -> Optional[Exception]:
            try:
                func(realm, user_id, gid)
            except Exception as e:  # collected and reported per group
                return e
            return None

        errors: List[Optional[Exception]] = [None] * len(ids)
        with tqdm(total=len(ids), unit="grp", desc=desc, disable=not progress) as bar:
            with ThreadPoolExecutor(max_workers=max(1, workers)) as ex:
                futures = {ex.submit(run, gid): i for i, gid in enumerate(ids)}
                for fut in as_completed(futures):
                    errors[futures[fut]] = fut.result()
                    bar.update(1)
        return list(zip(ids, errors))
