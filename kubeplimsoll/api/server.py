# kubeplimsoll/api/server.py
from __future__ import annotations

import logging
from dataclasses import asdict
from typing import List, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..snapshot.collector import KubernetesCollector
from ..snapshot.lister import ListFailure
from .schema import (
    NamespaceModel, NodeModel, PodModel, ServiceModel, HPAModel, SnapshotModel,
)

log = logging.getLogger("uvicorn")


def create_app(collector: KubernetesCollector) -> FastAPI:
    """
    HTTP-обёртка над KubernetesCollector.

    Каждый запрос снимает данные из кластера заново (без кэша).
    ListFailure -> 502 с текстом ошибки.
    """
    app = FastAPI(title="kubeplimsoll")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.exception_handler(ListFailure)
    async def list_failure_handler(request: Request, exc: ListFailure) -> JSONResponse:
        log.error(f"{request.url.path}: {exc}")
        return JSONResponse(status_code=502, content={"detail": str(exc)})

    @app.get("/healthz", include_in_schema=False)
    def healthz():
        return {"status": "ok"}

    @app.get("/namespaces", response_model=List[NamespaceModel])
    def list_namespaces():
        return [NamespaceModel(**asdict(r)) for r in collector.get_all_namespaces()]

    @app.get("/nodes", response_model=List[NodeModel])
    def list_nodes():
        return [NodeModel(**asdict(r)) for r in collector.get_all_nodes()]

    @app.get("/pods", response_model=List[PodModel])
    def list_pods(namespace: Optional[str] = None):
        records = collector.get_pods_by_namespace(namespace) if namespace else collector.get_all_pods()
        return [PodModel(**asdict(r)) for r in records]

    @app.get("/services", response_model=List[ServiceModel])
    def list_services(namespace: Optional[str] = None):
        records = collector.get_services_by_namespace(namespace) if namespace else collector.get_all_services()
        return [ServiceModel(**asdict(r)) for r in records]

    @app.get("/hpas", response_model=List[HPAModel])
    def list_hpas(namespace: Optional[str] = None):
        records = collector.get_hpas_by_namespace(namespace) if namespace else collector.get_all_hpas()
        return [HPAModel(**asdict(r)) for r in records]

    @app.get("/snapshot", response_model=SnapshotModel)
    def snapshot(namespace: Optional[str] = None):
        return SnapshotModel(**asdict(collector.collect(namespace)))

    return app
