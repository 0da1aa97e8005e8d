# kubeplimsoll/api/schema.py
from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel

from ..model.entities import ServiceType, Protocol


class NamespaceModel(BaseModel):
    name: str
    creation_timestamp: Optional[datetime] = None
    phase: str = ""


class NodeModel(BaseModel):
    name: str
    cpu: int
    memory: int
    allocatable_cpu: int = 0
    allocatable_memory: int = 0
    creation_timestamp: Optional[datetime] = None


class PodModel(BaseModel):
    uid: str
    name: str
    namespace: str
    node_name: str = ""
    labels: Dict[str, str] = {}
    creation_timestamp: Optional[datetime] = None
    cpu_request: int = 0
    cpu_limit: int = 0
    memory_request: int = 0
    memory_limit: int = 0
    phase: str = ""


class PortModel(BaseModel):
    name: str
    port: int
    target_port: int
    protocol: Protocol = Protocol.TCP


class ServiceModel(BaseModel):
    name: str
    namespace: str
    type: ServiceType = ServiceType.CLUSTER_IP
    cluster_ip: str = ""
    selector: Dict[str, str] = {}
    ports: List[PortModel] = []
    creation_timestamp: Optional[datetime] = None


class HPAModel(BaseModel):
    name: str
    namespace: str
    scale_target_kind: str
    scale_target_name: str
    min_replicas: int = 1
    max_replicas: int = 0
    target_cpu_utilization: int = 0
    target_memory_utilization: int = 0
    current_replicas: int = 0
    desired_replicas: int = 0


class SnapshotModel(BaseModel):
    collected_at: datetime
    namespaces: List[NamespaceModel]
    nodes: List[NodeModel]
    pods: List[PodModel]
    services: List[ServiceModel]
    hpas: List[HPAModel]
