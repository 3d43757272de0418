from __future__ import annotations

import os
import random
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol
from urllib.parse import quote

import httpx

API_PREFIX = "/api/v1"
EVERYTHING = ""


def _segment(value: str) -> str:
    return quote(value, safe="")


class ClusterError(Exception):
    """Raised when a cluster API call fails."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ClusterHandle(Protocol):
    def list_services(self, namespace: str, selector: str = EVERYTHING) -> List[Dict[str, Any]]:
        ...

    def list_replication_controllers(self, namespace: str, selector: str = EVERYTHING) -> List[Dict[str, Any]]:
        ...

    def list_namespaces(
        self, label_selector: str = EVERYTHING, field_selector: str = EVERYTHING
    ) -> List[Dict[str, Any]]:
        ...

    def create_service(self, namespace: str, service: Dict[str, Any]) -> Dict[str, Any]:
        ...

    def create_replication_controller(self, namespace: str, rc: Dict[str, Any]) -> Dict[str, Any]:
        ...

    def delete_service(self, namespace: str, name: str) -> None:
        ...

    def delete_replication_controller(self, namespace: str, name: str) -> None:
        ...


@dataclass
class ClientOptions:
    endpoint: str
    token_env: Optional[str] = None
    verify_tls: bool = True
    timeout_seconds: float = 30.0
    retries: int = 0
    seed: Optional[int] = None


class ClusterClient:
    """Core v1 API client for services, replication controllers and namespaces."""

    def __init__(self, options: ClientOptions, transport: Optional[httpx.BaseTransport] = None) -> None:
        self.endpoint = self._normalise_endpoint(options.endpoint)
        self.token_env = options.token_env
        self.retries = max(0, int(options.retries))
        seed = options.seed
        self._rng = random.Random(seed) if seed is not None else random.Random()
        self._client = httpx.Client(
            base_url=self.endpoint,
            headers=self._build_headers(),
            timeout=options.timeout_seconds,
            verify=options.verify_tls,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "ClusterClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def list_services(self, namespace: str, selector: str = EVERYTHING) -> List[Dict[str, Any]]:
        path = f"{API_PREFIX}/namespaces/{_segment(namespace)}/services"
        return self._list(path, label_selector=selector)

    def list_replication_controllers(self, namespace: str, selector: str = EVERYTHING) -> List[Dict[str, Any]]:
        path = f"{API_PREFIX}/namespaces/{_segment(namespace)}/replicationcontrollers"
        return self._list(path, label_selector=selector)

    def list_namespaces(
        self, label_selector: str = EVERYTHING, field_selector: str = EVERYTHING
    ) -> List[Dict[str, Any]]:
        return self._list(
            f"{API_PREFIX}/namespaces",
            label_selector=label_selector,
            field_selector=field_selector,
        )

    def create_service(self, namespace: str, service: Dict[str, Any]) -> Dict[str, Any]:
        return self._create(f"{API_PREFIX}/namespaces/{_segment(namespace)}/services", service)

    def create_replication_controller(self, namespace: str, rc: Dict[str, Any]) -> Dict[str, Any]:
        return self._create(f"{API_PREFIX}/namespaces/{_segment(namespace)}/replicationcontrollers", rc)

    def delete_service(self, namespace: str, name: str) -> None:
        self._request("DELETE", f"{API_PREFIX}/namespaces/{_segment(namespace)}/services/{_segment(name)}")

    def delete_replication_controller(self, namespace: str, name: str) -> None:
        self._request("DELETE", f"{API_PREFIX}/namespaces/{_segment(namespace)}/replicationcontrollers/{_segment(name)}")

    def _list(
        self,
        path: str,
        *,
        label_selector: str = EVERYTHING,
        field_selector: str = EVERYTHING,
    ) -> List[Dict[str, Any]]:
        params: Dict[str, str] = {}
        if label_selector:
            params["labelSelector"] = label_selector
        if field_selector:
            params["fieldSelector"] = field_selector

        attempt = 0
        while True:
            try:
                data = self._request("GET", path, params=params)
                break
            except ClusterError:
                if attempt >= self.retries:
                    raise
                time.sleep(self._backoff_seconds(attempt))
                attempt += 1

        items = data.get("items") if isinstance(data, dict) else None
        if items is None:
            return []
        if not isinstance(items, list):
            raise ClusterError(f"List response for {path} has malformed 'items'")
        return items

    def _create(self, path: str, body: Dict[str, Any]) -> Dict[str, Any]:
        data = self._request("POST", path, json=body)
        if not isinstance(data, dict):
            raise ClusterError(f"Create response for {path} is not an object")
        return data

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = self._client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise ClusterError(
                f"{method} {path} returned {exc.response.status_code}: {exc.response.text}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise ClusterError(f"{method} {path} failed: {exc}") from exc
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ClusterError(f"{method} {path} returned invalid JSON") from exc

    def _build_headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json", "Content-Type": "application/json"}
        if self.token_env:
            token = os.getenv(self.token_env)
            if not token:
                raise ValueError(f"Environment variable {self.token_env} not set")
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _backoff_seconds(self, attempt: int) -> float:
        base = 0.5 * (2 ** attempt)
        jitter = self._rng.uniform(0, base)
        return base + jitter

    @staticmethod
    def _normalise_endpoint(url: str) -> str:
        if not url:
            raise ValueError("Cluster endpoint is required")
        url = url.rstrip("/")
        if url.startswith("http://") or url.startswith("https://"):
            return url
        raise ValueError("Cluster endpoint must start with http or https")

    @classmethod
    def from_url(
        cls,
        endpoint: str,
        *,
        token_env: Optional[str] = None,
        verify_tls: bool = True,
        timeout_seconds: float = 30.0,
        retries: int = 0,
        seed: Optional[int] = None,
    ) -> "ClusterClient":
        options = ClientOptions(
            endpoint=endpoint,
            token_env=token_env,
            verify_tls=verify_tls,
            timeout_seconds=timeout_seconds,
            retries=retries,
            seed=seed,
        )
        return cls(options)


__all__ = [
    "API_PREFIX",
    "EVERYTHING",
    "ClientOptions",
    "ClusterClient",
    "ClusterError",
    "ClusterHandle",
]
