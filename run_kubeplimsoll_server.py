# run_kubeplimsoll_server.py
import argparse
import logging
import sys

import uvicorn

from kubeplimsoll.api.server import create_app
from kubeplimsoll.config import load_settings
from kubeplimsoll.snapshot.collector import ConnectionSetupError, KubernetesCollector, connect

log = logging.getLogger("launcher")

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="kubeplimsoll API server")

    # Подключение к кластеру (поверх KUBEPLIMSOLL_* из окружения)
    parser.add_argument("--kube-config", default=None, help="Kube config file path")
    parser.add_argument("--context", default=None, help="Kube config context")
    parser.add_argument("--in-cluster", action="store_true", default=None, help="Use in-cluster service account")

    # Стандартные настройки uvicorn
    parser.add_argument("--host", default="0.0.0.0", help="Bind host")
    parser.add_argument("--port", type=int, default=8000, help="Bind port")

    args = parser.parse_args()

    settings = load_settings().with_overrides(
        kubeconfig=args.kube_config, context=args.context, in_cluster=args.in_cluster,
    )
    logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))

    try:
        collector = KubernetesCollector(connect(settings))
    except ConnectionSetupError as e:
        log.error(f"Failed to connect to the cluster: {e}")
        sys.exit(1)

    uvicorn.run(create_app(collector), host=args.host, port=args.port)
