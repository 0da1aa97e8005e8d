# kubeplimsoll/snapshot/lister.py
from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple

import urllib3
from kubernetes import client
from kubernetes.client.exceptions import ApiException

log = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 500


class ResourceKind(str, Enum):
    NAMESPACE = "namespaces"
    NODE = "nodes"
    POD = "pods"
    SERVICE = "services"
    HPA = "horizontalpodautoscalers"

    @property
    def cluster_scoped(self) -> bool:
        return self in (ResourceKind.NAMESPACE, ResourceKind.NODE)


class ListFailure(Exception):
    """Не удалось получить список ресурсов (auth, сеть, неподдерживаемый kind)."""

    def __init__(self, kind: ResourceKind, namespace: Optional[str], reason: str):
        self.kind = kind
        self.namespace = namespace
        self.reason = reason
        if namespace:
            scope = f" in namespace {namespace!r}"
        else:
            scope = "" if kind.cluster_scoped else " in all namespaces"
        super().__init__(f"Failed to list {kind.value}{scope}: {reason}")


class ResourceLister(Protocol):
    def list(self, kind: ResourceKind, namespace: Optional[str] = None) -> List[Any]:
        """Полный (уже пролистанный) список сырых объектов или ListFailure."""
        ...


class KubernetesResourceLister:
    """
    ResourceLister поверх официального kubernetes-клиента.

    Листает continue-токенами до конца, так что наружу отдаётся полный список.
    Ошибки API и транспорта заворачиваются в ListFailure (исходная в __cause__).
    """

    def __init__(
        self,
        core_api: client.CoreV1Api,
        autoscaling_api: client.AutoscalingV2Api,
        page_size: int = DEFAULT_PAGE_SIZE,
        request_timeout: Optional[float] = None,
    ):
        self._core = core_api
        self._autoscaling = autoscaling_api
        self._page_size = page_size
        self._request_timeout = request_timeout

    def _endpoints(self, kind: ResourceKind) -> Tuple[Callable[..., Any], Optional[Callable[..., Any]]]:
        table: Dict[ResourceKind, Tuple[Callable[..., Any], Optional[Callable[..., Any]]]] = {
            ResourceKind.NAMESPACE: (self._core.list_namespace, None),
            ResourceKind.NODE: (self._core.list_node, None),
            ResourceKind.POD: (self._core.list_pod_for_all_namespaces, self._core.list_namespaced_pod),
            ResourceKind.SERVICE: (self._core.list_service_for_all_namespaces, self._core.list_namespaced_service),
            ResourceKind.HPA: (
                self._autoscaling.list_horizontal_pod_autoscaler_for_all_namespaces,
                self._autoscaling.list_namespaced_horizontal_pod_autoscaler,
            ),
        }
        return table[kind]

    def list(self, kind: ResourceKind, namespace: Optional[str] = None) -> List[Any]:
        if namespace and kind.cluster_scoped:
            raise ValueError(f"{kind.value} are cluster-scoped, namespace filter is not supported")

        list_all, list_namespaced = self._endpoints(kind)
        args: Tuple[Any, ...] = ()
        func = list_all
        if namespace:
            func = list_namespaced
            args = (namespace,)

        items: List[Any] = []
        token: Optional[str] = None
        while True:
            kwargs: Dict[str, Any] = {"limit": self._page_size}
            if token:
                kwargs["_continue"] = token
            if self._request_timeout is not None:
                kwargs["_request_timeout"] = self._request_timeout
            try:
                page = func(*args, **kwargs)
            except ApiException as e:
                log.warning(f"API error listing {kind.value}: {e.status} {e.reason}")
                raise ListFailure(kind, namespace, f"{e.status} {e.reason}") from e
            except urllib3.exceptions.HTTPError as e:
                log.warning(f"Transport error listing {kind.value}: {e}")
                raise ListFailure(kind, namespace, str(e)) from e

            items.extend(page.items or [])
            token = getattr(page.metadata, "_continue", None) if page.metadata else None
            if not token:
                break

        log.info(f"Listed {len(items)} {kind.value}" + (f" in {namespace}" if namespace else ""))
        return items
