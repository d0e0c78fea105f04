"""Minimal Solr client speaking the JSON update API."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional

import requests

from ..data.models import IndexDocument
from ..exceptions import IndexClientError
from ..utils.logging import get_logger

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class SolrConfig:
    url: str = "http://localhost:8983/solr"
    core: str = "reactome"
    user: Optional[str] = None
    password: Optional[str] = None
    timeout: int = 60

    @property
    def update_url(self) -> str:
        return f"{self.url.rstrip('/')}/{self.core}/update"


class SolrClient:
    """Submit, delete and commit documents in a single Solr core."""

    def __init__(self, config: SolrConfig, session: Optional[requests.Session] = None):
        self.config = config
        self._session = session or requests.Session()
        if config.user and config.password:
            self._session.auth = (config.user, config.password)

    def delete_all(self) -> None:
        self._post({"delete": {"query": "*:*"}})
        LOGGER.info("Requested deletion of every document in core %s", self.config.core)

    def add_documents(self, documents: Iterable[IndexDocument]) -> None:
        payload = [document.to_solr() for document in documents]
        if not payload:
            return
        self._post(payload)
        LOGGER.debug("%s documents successfully added to Solr", len(payload))

    def add_document(self, document: IndexDocument) -> None:
        self._post([document.to_solr()])

    def commit(self) -> None:
        self._post({"commit": {}})
        LOGGER.info("Solr index has been committed and flushed to disk")

    def close(self) -> None:
        self._session.close()
        LOGGER.info("Solr client closed")

    def _post(self, payload: Any) -> None:
        try:
            response = self._session.post(
                self.config.update_url,
                json=payload,
                params={"wt": "json"},
                timeout=self.config.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            raise IndexClientError(f"Solr request to {self.config.update_url} failed: {exc}") from exc

        try:
            body = response.json()
        except ValueError:
            return
        if not isinstance(body, dict):
            return
        status = (body.get("responseHeader") or {}).get("status", 0)
        if status != 0:
            message = (body.get("error") or {}).get("msg", "unknown error")
            raise IndexClientError(f"Solr rejected the update (status {status}): {message}")
