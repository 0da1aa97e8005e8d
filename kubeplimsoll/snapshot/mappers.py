# kubeplimsoll/snapshot/mappers.py
"""
Маппинг "сырых" объектов kubernetes-клиента (V1Namespace, V1Node, V1Pod,
V1Service, V2HorizontalPodAutoscaler) в записи доменной модели.

Мапперы тотальные: любой вложенный блок (metadata, spec, status, resources)
может отсутствовать, тогда поле получает значение по умолчанию.
"""
from __future__ import annotations

from typing import Any

from ..model.entities import (
    NamespaceRecord, NodeRecord, PodRecord, PortRecord, ServiceRecord, HPARecord,
    ServiceType, Protocol,
)
from ..types import Namespace, NodeName, PodUid
from .extractors import (
    CPU_RESOURCE, MEMORY_RESOURCE,
    cpu_millis, memory_bytes, value_or_default, resource_quantity,
    first_container, utilization_targets, target_port_number,
)

DEFAULT_MIN_REPLICAS = 1


def _meta(obj: Any) -> Any:
    return getattr(obj, "metadata", None)


def _attr(obj: Any, name: str, default: Any = None) -> Any:
    if obj is None:
        return default
    return value_or_default(getattr(obj, name, None), default)


def map_namespace(raw: Any) -> NamespaceRecord:
    meta = _meta(raw)
    return NamespaceRecord(
        name=Namespace(_attr(meta, "name", "")),
        creation_timestamp=_attr(meta, "creation_timestamp"),
        phase=_attr(_attr(raw, "status"), "phase", ""),
    )


def map_node(raw: Any) -> NodeRecord:
    meta = _meta(raw)
    status = _attr(raw, "status")
    capacity = _attr(status, "capacity", {})
    allocatable = _attr(status, "allocatable", {})
    return NodeRecord(
        name=NodeName(_attr(meta, "name", "")),
        cpu=cpu_millis(resource_quantity(capacity, CPU_RESOURCE)),
        memory=memory_bytes(resource_quantity(capacity, MEMORY_RESOURCE)),
        allocatable_cpu=cpu_millis(resource_quantity(allocatable, CPU_RESOURCE)),
        allocatable_memory=memory_bytes(resource_quantity(allocatable, MEMORY_RESOURCE)),
        creation_timestamp=_attr(meta, "creation_timestamp"),
    )


def map_pod(raw: Any) -> PodRecord:
    meta = _meta(raw)
    spec = _attr(raw, "spec")

    # ресурсы считаем только по первому контейнеру
    container = first_container(_attr(spec, "containers"))
    resources = _attr(container, "resources")
    requests = _attr(resources, "requests", {})
    limits = _attr(resources, "limits", {})

    return PodRecord(
        uid=PodUid(_attr(meta, "uid", "")),
        name=_attr(meta, "name", ""),
        namespace=Namespace(_attr(meta, "namespace", "")),
        node_name=_attr(spec, "node_name", ""),
        labels=dict(_attr(meta, "labels", {})),
        creation_timestamp=_attr(meta, "creation_timestamp"),
        cpu_request=cpu_millis(resource_quantity(requests, CPU_RESOURCE)),
        cpu_limit=cpu_millis(resource_quantity(limits, CPU_RESOURCE)),
        memory_request=memory_bytes(resource_quantity(requests, MEMORY_RESOURCE)),
        memory_limit=memory_bytes(resource_quantity(limits, MEMORY_RESOURCE)),
        phase=_attr(_attr(raw, "status"), "phase", ""),
    )


def _service_type(value: Any) -> ServiceType:
    try:
        return ServiceType(value)
    except ValueError:
        return ServiceType.CLUSTER_IP


def _protocol(value: Any) -> Protocol:
    try:
        return Protocol(value)
    except ValueError:
        return Protocol.TCP


def map_port(raw: Any) -> PortRecord:
    port = int(_attr(raw, "port", 0))
    return PortRecord(
        name=_attr(raw, "name", ""),
        port=port,
        target_port=target_port_number(_attr(raw, "target_port"), port),
        protocol=_protocol(_attr(raw, "protocol")),
    )


def map_service(raw: Any) -> ServiceRecord:
    meta = _meta(raw)
    spec = _attr(raw, "spec")
    return ServiceRecord(
        name=_attr(meta, "name", ""),
        namespace=Namespace(_attr(meta, "namespace", "")),
        type=_service_type(_attr(spec, "type")),
        cluster_ip=_attr(spec, "cluster_ip", ""),
        selector=dict(_attr(spec, "selector", {})),
        ports=tuple(map_port(p) for p in _attr(spec, "ports", [])),
        creation_timestamp=_attr(meta, "creation_timestamp"),
    )


def map_hpa(raw: Any) -> HPARecord:
    meta = _meta(raw)
    spec = _attr(raw, "spec")
    status = _attr(raw, "status")
    target_ref = _attr(spec, "scale_target_ref")
    target_cpu, target_memory = utilization_targets(_attr(spec, "metrics"))

    return HPARecord(
        name=_attr(meta, "name", ""),
        namespace=Namespace(_attr(meta, "namespace", "")),
        scale_target_kind=_attr(target_ref, "kind", ""),
        scale_target_name=_attr(target_ref, "name", ""),
        min_replicas=_attr(spec, "min_replicas", DEFAULT_MIN_REPLICAS),
        max_replicas=_attr(spec, "max_replicas", 0),
        target_cpu_utilization=target_cpu,
        target_memory_utilization=target_memory,
        current_replicas=_attr(status, "current_replicas", 0),
        desired_replicas=_attr(status, "desired_replicas", 0),
    )
