# kubeplimsoll/cli.py
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Iterable, List, Optional, TextIO

from .config import load_settings
from .model.entities import ClusterSnapshot
from .snapshot.collector import ConnectionSetupError, KubernetesCollector, connect
from .snapshot.io import load_snapshot_from_file, record_to_dict, save_snapshot_to_file
from .snapshot.lister import ListFailure

log = logging.getLogger("kubeplimsoll")

RULER = "-" * 32


def _print_section(title: str, records: Iterable[Any], out: TextIO) -> None:
    print(RULER, file=out)
    print(f"{title}:", file=out)
    print(RULER, file=out)
    for record in records:
        print(json.dumps(record_to_dict(record), indent=2), file=out)


def print_kubernetes_data(snap: ClusterSnapshot, out: TextIO = sys.stdout) -> None:
    _print_section("Namespaces", snap.namespaces, out)
    _print_section("Nodes", snap.nodes, out)
    _print_section("Pods", snap.pods, out)
    _print_section("Services", snap.services, out)
    _print_section("HPAs", snap.hpas, out)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kubeplimsoll",
        description="Collect a normalized snapshot of namespaces, nodes, pods, services and HPAs",
    )
    parser.add_argument("--kube-config", default=None, help="Kube config file path")
    parser.add_argument("--context", default=None, help="Kube config context")
    parser.add_argument("--in-cluster", action="store_true", default=None,
                        help="Use the service account of the pod instead of a kube config")
    parser.add_argument("--namespace", "-n", default=None,
                        help="Scope pods, services and HPAs to a single namespace")
    parser.add_argument("--output", "-o", type=Path, default=None,
                        help="Also save the snapshot as JSON to this path")
    parser.add_argument("--from-file", type=Path, default=None,
                        help="Print a previously saved snapshot instead of querying the cluster")
    parser.add_argument("--log-level", default=None, help="Logging level (default INFO)")
    return parser


def main(argv: Optional[List[str]] = None, out: TextIO = sys.stdout) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings().with_overrides(
        kubeconfig=args.kube_config,
        context=args.context,
        in_cluster=args.in_cluster,
        log_level=args.log_level.upper() if args.log_level else None,
    )
    logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))

    if args.from_file is not None:
        try:
            snap = load_snapshot_from_file(args.from_file)
        except (OSError, ValueError, KeyError) as e:
            log.error(f"Failed to load snapshot from {args.from_file}: {e}")
            return 1
    else:
        try:
            collector = KubernetesCollector(connect(settings))
            snap = collector.collect(args.namespace)
        except ConnectionSetupError as e:
            log.error(f"Error creating Kubernetes client: {e}")
            return 1
        except ListFailure as e:
            log.error(f"Error getting all {e.kind.value}: {e.reason}")
            return 1

    if args.output is not None:
        save_snapshot_to_file(snap, args.output)
        log.info(f"Snapshot saved to: {args.output}")

    print_kubernetes_data(snap, out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
