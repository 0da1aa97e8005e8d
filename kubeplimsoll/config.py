# kubeplimsoll/config.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

log = logging.getLogger(__name__)

ENV_PREFIX = "KUBEPLIMSOLL_"

DEFAULT_PAGE_SIZE = 500
DEFAULT_LOG_LEVEL = "INFO"

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """
    Настройки подключения к кластеру.

    Читаются из окружения (KUBEPLIMSOLL_*), флаги командной строки
    накладываются поверх через with_overrides().
    """
    kubeconfig: Optional[str] = None
    context: Optional[str] = None
    in_cluster: bool = False
    page_size: int = DEFAULT_PAGE_SIZE
    request_timeout: Optional[float] = None
    log_level: str = DEFAULT_LOG_LEVEL

    def with_overrides(self, **overrides) -> "Settings":
        # None во флаге = "не задан", окружение не перетираем
        values = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **values)


def _get(env: Mapping[str, str], name: str) -> Optional[str]:
    value = env.get(ENV_PREFIX + name)
    if value is None or value.strip() == "":
        return None
    return value.strip()


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if env is None else env

    page_size = DEFAULT_PAGE_SIZE
    raw_page_size = _get(env, "PAGE_SIZE")
    if raw_page_size is not None:
        try:
            page_size = int(raw_page_size)
        except ValueError:
            log.warning(f"Invalid {ENV_PREFIX}PAGE_SIZE={raw_page_size!r}, using {DEFAULT_PAGE_SIZE}")
        if page_size <= 0:
            log.warning(f"{ENV_PREFIX}PAGE_SIZE must be positive, using {DEFAULT_PAGE_SIZE}")
            page_size = DEFAULT_PAGE_SIZE

    request_timeout = None
    raw_timeout = _get(env, "REQUEST_TIMEOUT")
    if raw_timeout is not None:
        try:
            request_timeout = float(raw_timeout)
        except ValueError:
            log.warning(f"Invalid {ENV_PREFIX}REQUEST_TIMEOUT={raw_timeout!r}, ignoring")

    return Settings(
        kubeconfig=_get(env, "KUBECONFIG"),
        context=_get(env, "CONTEXT"),
        in_cluster=(_get(env, "IN_CLUSTER") or "").lower() in _TRUE_VALUES,
        page_size=page_size,
        request_timeout=request_timeout,
        log_level=(_get(env, "LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
    )
