"""
问候服务领域模型 - 服务状态与问候规则
"""
from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional


DEFAULT_NAME = "World"


class RequestCounter:
    """线程安全的单调递增计数器"""

    def __init__(self) -> None:
        self._value = 0
        self._lock = threading.Lock()

    def increment(self) -> int:
        """加一并返回新值。"""
        with self._lock:
            self._value += 1
            return self._value

    @property
    def value(self) -> int:
        with self._lock:
            return self._value


@dataclass(frozen=True)
class ServiceState:
    """服务运行状态：启动时间（构造后不可变）+ 请求计数器

    进程启动时创建一次，随进程退出销毁；不做持久化，重启后计数归零。
    """

    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    counter: RequestCounter = field(default_factory=RequestCounter)
    _started_monotonic: float = field(default_factory=time.monotonic, repr=False)

    @property
    def requests_served(self) -> int:
        return self.counter.value

    def record_request(self) -> int:
        return self.counter.increment()

    def uptime(self) -> float:
        """运行时长（秒）"""
        return time.monotonic() - self._started_monotonic


def effective_name(name: Optional[str]) -> str:
    """业务规则：名字为空或缺省时使用 World"""
    return name if name else DEFAULT_NAME


def format_greeting(name: Optional[str]) -> str:
    return f"Hello, {effective_name(name)}!"
