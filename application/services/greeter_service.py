"""
问候应用服务（application/services）- 处理 SayHello 的应用逻辑
"""
from typing import Optional

from domain.greeter.state import ServiceState, format_greeting


class GreeterApplicationService:
    """问候应用服务 - 计数并生成问候语"""

    def __init__(self, state: Optional[ServiceState] = None):
        # 状态显式注入，便于测试替换
        self._state = state if state is not None else ServiceState()

    @property
    def state(self) -> ServiceState:
        return self._state

    def greet(self, name: Optional[str]) -> str:
        """先计数，再生成问候语。对任意字符串输入都不会失败。"""
        self._state.record_request()
        return format_greeting(name)

    def stats(self) -> dict:
        """服务运行统计快照"""
        return {
            "requests_served": self._state.requests_served,
            "uptime_seconds": round(self._state.uptime(), 3),
            "started_at": self._state.started_at.isoformat(),
        }
