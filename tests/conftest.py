"""Shared builders for raw kubernetes client objects and a fake ResourceLister."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import pytest
from kubernetes import client

from kubeplimsoll.snapshot.lister import ListFailure, ResourceKind

CREATED = datetime(2026, 10, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_namespace(name: str = "default", phase: Optional[str] = "Active") -> client.V1Namespace:
    return client.V1Namespace(
        metadata=client.V1ObjectMeta(name=name, creation_timestamp=CREATED),
        status=client.V1NamespaceStatus(phase=phase),
    )


def make_node(
    name: str = "node-1",
    capacity: Optional[Dict[str, str]] = None,
    allocatable: Optional[Dict[str, str]] = None,
) -> client.V1Node:
    return client.V1Node(
        metadata=client.V1ObjectMeta(name=name, creation_timestamp=CREATED),
        status=client.V1NodeStatus(capacity=capacity, allocatable=allocatable),
    )


def make_container(
    name: str = "app",
    requests: Optional[Dict[str, str]] = None,
    limits: Optional[Dict[str, str]] = None,
) -> client.V1Container:
    return client.V1Container(
        name=name,
        image="nginx:1.27",
        resources=client.V1ResourceRequirements(requests=requests, limits=limits),
    )


def make_pod(
    name: str = "web-0",
    namespace: str = "default",
    uid: Optional[str] = None,
    containers: Optional[List[client.V1Container]] = None,
    node_name: Optional[str] = "node-1",
    labels: Optional[Dict[str, str]] = None,
    phase: Optional[str] = "Running",
) -> client.V1Pod:
    return client.V1Pod(
        metadata=client.V1ObjectMeta(
            name=name,
            namespace=namespace,
            uid=uid or f"uid-{namespace}-{name}",
            labels=labels,
            creation_timestamp=CREATED,
        ),
        spec=client.V1PodSpec(
            containers=[make_container()] if containers is None else containers,
            node_name=node_name,
        ),
        status=client.V1PodStatus(phase=phase),
    )


def make_service(
    name: str = "web",
    namespace: str = "default",
    type: Optional[str] = "ClusterIP",
    cluster_ip: Optional[str] = "10.0.0.10",
    selector: Optional[Dict[str, str]] = None,
    ports: Optional[List[client.V1ServicePort]] = None,
) -> client.V1Service:
    return client.V1Service(
        metadata=client.V1ObjectMeta(name=name, namespace=namespace, creation_timestamp=CREATED),
        spec=client.V1ServiceSpec(type=type, cluster_ip=cluster_ip, selector=selector, ports=ports),
    )


def resource_metric(name: str, utilization: Optional[int] = None, average_value: Optional[str] = None) -> client.V2MetricSpec:
    target_type = "Utilization" if utilization is not None else "AverageValue"
    return client.V2MetricSpec(
        type="Resource",
        resource=client.V2ResourceMetricSource(
            name=name,
            target=client.V2MetricTarget(
                type=target_type,
                average_utilization=utilization,
                average_value=average_value,
            ),
        ),
    )


def make_hpa(
    name: str = "web",
    namespace: str = "default",
    min_replicas: Optional[int] = None,
    max_replicas: int = 5,
    metrics: Optional[List[client.V2MetricSpec]] = None,
    current_replicas: Optional[int] = 2,
    desired_replicas: Optional[int] = 3,
    with_status: bool = True,
) -> client.V2HorizontalPodAutoscaler:
    status = None
    if with_status:
        status = client.V2HorizontalPodAutoscalerStatus(
            current_replicas=current_replicas,
            desired_replicas=desired_replicas,
        )
    return client.V2HorizontalPodAutoscaler(
        metadata=client.V1ObjectMeta(name=name, namespace=namespace, creation_timestamp=CREATED),
        spec=client.V2HorizontalPodAutoscalerSpec(
            min_replicas=min_replicas,
            max_replicas=max_replicas,
            scale_target_ref=client.V2CrossVersionObjectReference(kind="Deployment", name=name, api_version="apps/v1"),
            metrics=metrics,
        ),
        status=status,
    )


class FakeLister:
    """In-memory ResourceLister: filters namespaced kinds by metadata.namespace."""

    def __init__(self, items: Optional[Dict[ResourceKind, List[Any]]] = None):
        self.items: Dict[ResourceKind, List[Any]] = items or {}
        self.failures: Dict[ResourceKind, ListFailure] = {}
        self.calls: List[tuple] = []

    def fail(self, kind: ResourceKind, reason: str = "401 Unauthorized") -> ListFailure:
        failure = ListFailure(kind, None, reason)
        self.failures[kind] = failure
        return failure

    def list(self, kind: ResourceKind, namespace: Optional[str] = None) -> List[Any]:
        self.calls.append((kind, namespace))
        if kind in self.failures:
            raise self.failures[kind]
        items = self.items.get(kind, [])
        if namespace:
            items = [i for i in items if i.metadata.namespace == namespace]
        return list(items)


@pytest.fixture
def cluster_lister() -> FakeLister:
    return FakeLister({
        ResourceKind.NAMESPACE: [make_namespace("default"), make_namespace("shop")],
        ResourceKind.NODE: [make_node("node-1", capacity={"cpu": "2", "memory": "4Gi"},
                                      allocatable={"cpu": "1930m", "memory": "3Gi"})],
        ResourceKind.POD: [
            make_pod("web-0", "default"),
            make_pod("cart-0", "shop"),
            make_pod("web-1", "default"),
            make_pod("cart-1", "shop"),
        ],
        ResourceKind.SERVICE: [
            make_service("web", "default", ports=[client.V1ServicePort(name="http", port=80, target_port=8080)]),
            make_service("cart", "shop"),
        ],
        ResourceKind.HPA: [
            make_hpa("web", "default", metrics=[resource_metric("cpu", 80)]),
            make_hpa("cart", "shop", min_replicas=2, max_replicas=10),
        ],
    })
