# kubeplimsoll/snapshot/collector.py
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional, TypeVar

import yaml
from kubernetes import client, config
from kubernetes.config.config_exception import ConfigException

from ..config import Settings
from ..model.entities import (
    ClusterSnapshot, NamespaceRecord, NodeRecord, PodRecord, ServiceRecord, HPARecord,
)
from .lister import KubernetesResourceLister, ListFailure, ResourceKind, ResourceLister
from .mappers import map_namespace, map_node, map_pod, map_service, map_hpa

log = logging.getLogger(__name__)

R = TypeVar("R")


class ConnectionSetupError(Exception):
    """Не удалось загрузить kubeconfig / in-cluster конфигурацию."""


def connect(settings: Settings) -> KubernetesResourceLister:
    """
    Собрать ResourceLister для кластера.

    Используется отдельный ApiClient, глобальная конфигурация клиента
    kubernetes не трогается.
    """
    try:
        if settings.in_cluster:
            log.info("Loading in-cluster configuration")
            configuration = client.Configuration()
            config.load_incluster_config(client_configuration=configuration)
            api_client = client.ApiClient(configuration)
        else:
            log.info(f"Loading kubeconfig {settings.kubeconfig or '(default)'}"
                     + (f", context {settings.context}" if settings.context else ""))
            api_client = config.new_client_from_config(
                config_file=settings.kubeconfig,
                context=settings.context,
                persist_config=False,
            )
    except (ConfigException, OSError, yaml.YAMLError) as e:
        log.error(f"Error when getting k8s configuration: {e}")
        raise ConnectionSetupError(str(e)) from e

    return KubernetesResourceLister(
        client.CoreV1Api(api_client),
        client.AutoscalingV2Api(api_client),
        page_size=settings.page_size,
        request_timeout=settings.request_timeout,
    )


class KubernetesCollector:
    """
    Снимок пяти видов ресурсов кластера в нормализованные записи.

    Каждый вызов идёт в кластер заново, ничего не кэшируется. Порядок записей
    совпадает с порядком, который вернул lister. Если lister упал, падает вся
    операция целиком (частичных результатов нет).
    """

    def __init__(self, lister: ResourceLister):
        self._lister = lister

    def _collect(self, kind: ResourceKind, mapper: Callable[[Any], R], namespace: Optional[str] = None) -> List[R]:
        try:
            raw_items = self._lister.list(kind, namespace or None)
        except ListFailure as e:
            log.error(f"Error listing {kind.value}: {e}")
            raise
        return [mapper(item) for item in raw_items]

    def get_all_namespaces(self) -> List[NamespaceRecord]:
        return self._collect(ResourceKind.NAMESPACE, map_namespace)

    def get_all_nodes(self) -> List[NodeRecord]:
        return self._collect(ResourceKind.NODE, map_node)

    def get_all_pods(self) -> List[PodRecord]:
        return self._collect(ResourceKind.POD, map_pod)

    def get_pods_by_namespace(self, namespace: str) -> List[PodRecord]:
        return self._collect(ResourceKind.POD, map_pod, namespace)

    def get_all_services(self) -> List[ServiceRecord]:
        return self._collect(ResourceKind.SERVICE, map_service)

    def get_services_by_namespace(self, namespace: str) -> List[ServiceRecord]:
        return self._collect(ResourceKind.SERVICE, map_service, namespace)

    def get_all_hpas(self) -> List[HPARecord]:
        return self._collect(ResourceKind.HPA, map_hpa)

    def get_hpas_by_namespace(self, namespace: str) -> List[HPARecord]:
        return self._collect(ResourceKind.HPA, map_hpa, namespace)

    def collect(self, namespace: Optional[str] = None) -> ClusterSnapshot:
        """
        Полный снимок: namespaces, nodes, pods, services, HPAs.

        namespace ограничивает только namespaced-виды (pods, services, HPAs).
        Первая же ошибка листинга прерывает сбор.
        """
        collected_at = datetime.now(timezone.utc)
        snapshot = ClusterSnapshot(
            collected_at=collected_at,
            namespaces=self.get_all_namespaces(),
            nodes=self.get_all_nodes(),
            pods=self._collect(ResourceKind.POD, map_pod, namespace),
            services=self._collect(ResourceKind.SERVICE, map_service, namespace),
            hpas=self._collect(ResourceKind.HPA, map_hpa, namespace),
        )
        log.info(
            f"Collected {len(snapshot.namespaces)} namespaces, {len(snapshot.nodes)} nodes, "
            f"{len(snapshot.pods)} pods, {len(snapshot.services)} services, {len(snapshot.hpas)} HPAs"
        )
        return snapshot


def collect_k8s_snapshot(settings: Settings, namespace: Optional[str] = None) -> ClusterSnapshot:
    return KubernetesCollector(connect(settings)).collect(namespace)
