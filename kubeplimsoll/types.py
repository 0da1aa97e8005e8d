# kubeplimsoll/types.py
from __future__ import annotations

from typing import NewType


# Имена / идентификаторы
Namespace = NewType("Namespace", str)
NodeName = NewType("NodeName", str)
PodUid = NewType("PodUid", str)

# Ресурсы
CpuMillis = NewType("CpuMillis", int)  # milliCPU, 1000 = одно ядро
Bytes = NewType("Bytes", int)          # байты

# Проценты 0..100 (цели утилизации HPA)
Percent = NewType("Percent", int)
