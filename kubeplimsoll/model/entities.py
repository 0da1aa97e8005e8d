# kubeplimsoll/model/entities.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Tuple

from ..types import Namespace, NodeName, PodUid, CpuMillis, Bytes, Percent

# Записи frozen, но dict/list внутри не копируются в read-only обёртки:
# после сборки их никто не мутирует. В hash такие поля не входят, в == входят.


class ServiceType(str, Enum):
    CLUSTER_IP = "ClusterIP"
    NODE_PORT = "NodePort"
    LOAD_BALANCER = "LoadBalancer"
    EXTERNAL_NAME = "ExternalName"


class Protocol(str, Enum):
    TCP = "TCP"
    UDP = "UDP"
    SCTP = "SCTP"


@dataclass(frozen=True)
class NamespaceRecord:
    name: Namespace
    creation_timestamp: Optional[datetime] = None
    phase: str = ""


@dataclass(frozen=True)
class NodeRecord:
    """
    Нода кластера.

    cpu / memory берутся из status.capacity,
    allocatable_* из status.allocatable (то, что реально доступно подам).
    """
    name: NodeName
    cpu: CpuMillis
    memory: Bytes
    allocatable_cpu: CpuMillis = CpuMillis(0)
    allocatable_memory: Bytes = Bytes(0)
    creation_timestamp: Optional[datetime] = None


@dataclass(frozen=True)
class PodRecord:
    """
    Pod. Ресурсы (requests/limits) берутся только из ПЕРВОГО контейнера;
    если контейнеров нет, все четыре поля равны 0.
    """
    uid: PodUid
    name: str
    namespace: Namespace
    node_name: str = ""
    labels: Dict[str, str] = field(default_factory=dict, hash=False)
    creation_timestamp: Optional[datetime] = None
    cpu_request: CpuMillis = CpuMillis(0)
    cpu_limit: CpuMillis = CpuMillis(0)
    memory_request: Bytes = Bytes(0)
    memory_limit: Bytes = Bytes(0)
    phase: str = ""


@dataclass(frozen=True)
class PortRecord:
    name: str
    port: int
    target_port: int
    protocol: Protocol = Protocol.TCP


@dataclass(frozen=True)
class ServiceRecord:
    name: str
    namespace: Namespace
    type: ServiceType = ServiceType.CLUSTER_IP
    # "" если не выставлен, "None" для headless-сервисов
    cluster_ip: str = ""
    selector: Dict[str, str] = field(default_factory=dict, hash=False)
    ports: Tuple[PortRecord, ...] = ()
    creation_timestamp: Optional[datetime] = None


@dataclass(frozen=True)
class HPARecord:
    name: str
    namespace: Namespace
    scale_target_kind: str
    scale_target_name: str
    min_replicas: int = 1
    max_replicas: int = 0
    target_cpu_utilization: Percent = Percent(0)
    target_memory_utilization: Percent = Percent(0)
    current_replicas: int = 0
    desired_replicas: int = 0


@dataclass(frozen=True)
class ClusterSnapshot:
    collected_at: datetime
    namespaces: List[NamespaceRecord] = field(default_factory=list, hash=False)
    nodes: List[NodeRecord] = field(default_factory=list, hash=False)
    pods: List[PodRecord] = field(default_factory=list, hash=False)
    services: List[ServiceRecord] = field(default_factory=list, hash=False)
    hpas: List[HPARecord] = field(default_factory=list, hash=False)
