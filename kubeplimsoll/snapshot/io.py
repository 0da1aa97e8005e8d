# kubeplimsoll/snapshot/io.py
from __future__ import annotations

import json
from dataclasses import asdict
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from ..model.entities import (
    ClusterSnapshot, NamespaceRecord, NodeRecord, PodRecord, PortRecord, ServiceRecord, HPARecord,
    ServiceType, Protocol,
)
from ..types import Namespace, NodeName, PodUid, CpuMillis, Bytes, Percent


def _jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


def record_to_dict(record: Any) -> Dict[str, Any]:
    """Запись -> JSON-совместимый dict (enum по значению, datetime в ISO-8601)."""
    return _jsonable(asdict(record))


def snapshot_to_dict(snap: ClusterSnapshot) -> Dict[str, Any]:
    return {
        "collected_at": snap.collected_at.isoformat(),
        "namespaces": [record_to_dict(r) for r in snap.namespaces],
        "nodes": [record_to_dict(r) for r in snap.nodes],
        "pods": [record_to_dict(r) for r in snap.pods],
        "services": [record_to_dict(r) for r in snap.services],
        "hpas": [record_to_dict(r) for r in snap.hpas],
    }


def _ts(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    return datetime.fromisoformat(value)


def _namespace_from_dict(v: Dict[str, Any]) -> NamespaceRecord:
    return NamespaceRecord(
        name=Namespace(v.get("name", "")),
        creation_timestamp=_ts(v.get("creation_timestamp")),
        phase=v.get("phase", ""),
    )


def _node_from_dict(v: Dict[str, Any]) -> NodeRecord:
    return NodeRecord(
        name=NodeName(v.get("name", "")),
        cpu=CpuMillis(int(v.get("cpu", 0))),
        memory=Bytes(int(v.get("memory", 0))),
        allocatable_cpu=CpuMillis(int(v.get("allocatable_cpu", 0))),
        allocatable_memory=Bytes(int(v.get("allocatable_memory", 0))),
        creation_timestamp=_ts(v.get("creation_timestamp")),
    )


def _pod_from_dict(v: Dict[str, Any]) -> PodRecord:
    return PodRecord(
        uid=PodUid(v.get("uid", "")),
        name=v.get("name", ""),
        namespace=Namespace(v.get("namespace", "")),
        node_name=v.get("node_name", ""),
        labels=dict(v.get("labels") or {}),
        creation_timestamp=_ts(v.get("creation_timestamp")),
        cpu_request=CpuMillis(int(v.get("cpu_request", 0))),
        cpu_limit=CpuMillis(int(v.get("cpu_limit", 0))),
        memory_request=Bytes(int(v.get("memory_request", 0))),
        memory_limit=Bytes(int(v.get("memory_limit", 0))),
        phase=v.get("phase", ""),
    )


def _service_from_dict(v: Dict[str, Any]) -> ServiceRecord:
    ports = tuple(
        PortRecord(
            name=p.get("name", ""),
            port=int(p.get("port", 0)),
            target_port=int(p.get("target_port", 0)),
            protocol=Protocol(p.get("protocol", Protocol.TCP.value)),
        )
        for p in v.get("ports") or []
    )
    return ServiceRecord(
        name=v.get("name", ""),
        namespace=Namespace(v.get("namespace", "")),
        type=ServiceType(v.get("type", ServiceType.CLUSTER_IP.value)),
        cluster_ip=v.get("cluster_ip", ""),
        selector=dict(v.get("selector") or {}),
        ports=ports,
        creation_timestamp=_ts(v.get("creation_timestamp")),
    )


def _hpa_from_dict(v: Dict[str, Any]) -> HPARecord:
    return HPARecord(
        name=v.get("name", ""),
        namespace=Namespace(v.get("namespace", "")),
        scale_target_kind=v.get("scale_target_kind", ""),
        scale_target_name=v.get("scale_target_name", ""),
        min_replicas=int(v.get("min_replicas", 1)),
        max_replicas=int(v.get("max_replicas", 0)),
        target_cpu_utilization=Percent(int(v.get("target_cpu_utilization", 0))),
        target_memory_utilization=Percent(int(v.get("target_memory_utilization", 0))),
        current_replicas=int(v.get("current_replicas", 0)),
        desired_replicas=int(v.get("desired_replicas", 0)),
    )


def snapshot_from_dict(data: Dict[str, Any]) -> ClusterSnapshot:
    return ClusterSnapshot(
        collected_at=datetime.fromisoformat(data["collected_at"]),
        namespaces=[_namespace_from_dict(v) for v in data.get("namespaces", [])],
        nodes=[_node_from_dict(v) for v in data.get("nodes", [])],
        pods=[_pod_from_dict(v) for v in data.get("pods", [])],
        services=[_service_from_dict(v) for v in data.get("services", [])],
        hpas=[_hpa_from_dict(v) for v in data.get("hpas", [])],
    )


def save_snapshot_to_file(snap: ClusterSnapshot, path: Path) -> None:
    data = snapshot_to_dict(snap)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def load_snapshot_from_file(path: Path) -> ClusterSnapshot:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return snapshot_from_dict(data)
