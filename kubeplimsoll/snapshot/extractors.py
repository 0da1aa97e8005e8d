# kubeplimsoll/snapshot/extractors.py
"""
Конвертеры отдельных полей "сырых" объектов кластера в нормализованные значения.

Все функции тотальные: на отсутствующий или битый вход отдают значение
по умолчанию и никогда не бросают исключений.
"""
from __future__ import annotations

import logging
from decimal import ROUND_CEILING
from typing import Any, Iterable, Optional, Tuple, TypeVar

from kubernetes.utils import parse_quantity

from ..types import CpuMillis, Bytes, Percent

log = logging.getLogger(__name__)

T = TypeVar("T")

CPU_RESOURCE = "cpu"
MEMORY_RESOURCE = "memory"

# int64 в apimachinery: больше 18 знаков до точки не бывает
MAX_QUANTITY_DIGITS = 18


def _ceil_quantity(quantity: Any, scale: int) -> int:
    if quantity is None or quantity == "":
        return 0
    try:
        value = parse_quantity(quantity) * scale
        if value.adjusted() > MAX_QUANTITY_DIGITS:
            raise ValueError("quantity out of range")
        # как MilliValue()/Value() в apimachinery: округляем вверх
        result = int(value.to_integral_value(rounding=ROUND_CEILING))
    except (ValueError, ArithmeticError):
        log.warning(f"Unparsable quantity {quantity!r}, using 0")
        return 0
    return max(result, 0)


def cpu_millis(quantity: Any) -> CpuMillis:
    """Пример: "2" -> 2000, "250m" -> 250, None -> 0."""
    return CpuMillis(_ceil_quantity(quantity, 1000))


def memory_bytes(quantity: Any) -> Bytes:
    """Пример: "4Gi" -> 4294967296, "128M" -> 128000000."""
    return Bytes(_ceil_quantity(quantity, 1))


def value_or_default(value: Optional[T], default: T) -> T:
    return default if value is None else value


def resource_quantity(resources: Optional[dict], name: str) -> Any:
    """Достать quantity по имени ресурса из словаря requests/limits/capacity."""
    if not resources:
        return None
    return resources.get(name)


def first_container(containers: Optional[Iterable[Any]]) -> Optional[Any]:
    for container in containers or ():
        return container
    return None


def utilization_targets(metrics: Optional[Iterable[Any]]) -> Tuple[Percent, Percent]:
    """
    Вытащить (cpu%, memory%) из списка метрик HPA.

    Учитываются только resource-метрики с target.average_utilization.
    При дубликатах по одному ресурсу побеждает ПОСЛЕДНЯЯ запись в списке.
    Нет подходящей метрики -> 0.
    """
    cpu = Percent(0)
    memory = Percent(0)
    for metric in metrics or ():
        resource = getattr(metric, "resource", None)
        if resource is None:
            continue
        target = getattr(resource, "target", None)
        utilization = getattr(target, "average_utilization", None)
        if utilization is None:
            continue
        if resource.name == CPU_RESOURCE:
            cpu = Percent(int(utilization))
        elif resource.name == MEMORY_RESOURCE:
            memory = Percent(int(utilization))
    return cpu, memory


def target_port_number(target_port: Any, port: int) -> int:
    """
    IntOrString -> int.

    Число как есть, числовая строка парсится, именованный порт ("http") -> 0,
    отсутствие -> port (так же дефолтит API-сервер).
    """
    if target_port is None:
        return port
    if isinstance(target_port, int):
        return target_port
    try:
        return int(str(target_port))
    except ValueError:
        return 0
