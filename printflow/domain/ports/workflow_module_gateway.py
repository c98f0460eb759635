"""WorkflowModuleGateway Port - 协作模块的副作用接口

业务定义：
- 规则动作命中后，需要通知下游模块执行真实操作（创建生产任务、更新订单、创建收款记录）
- 具体实现（REST 调用、消息队列等）由 Infrastructure / 宿主应用提供
- 网关抛出的异常属于“规则动作失败”，由规则引擎按规则隔离
"""

from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class WorkflowModuleGateway(Protocol):
    async def create_production_task(self, order_id: str) -> None:
        """为订单创建生产任务"""
        ...

    async def update_order_status(self, order_id: str, new_status: str) -> None:
        """更新订单状态"""
        ...

    async def create_payment_record(self, order_id: str) -> None:
        """为订单创建收款记录"""
        ...


class NoopWorkflowModuleGateway:
    """默认网关：只记录日志，不做任何下游调用

    宿主应用没有接入真实的订单/生产/会计模块时使用（与前端原实现的“模拟动作”一致）。
    """

    async def create_production_task(self, order_id: str) -> None:
        logger.info(f"[noop] create_production_task order_id={order_id}")

    async def update_order_status(self, order_id: str, new_status: str) -> None:
        logger.info(f"[noop] update_order_status order_id={order_id} new_status={new_status}")

    async def create_payment_record(self, order_id: str) -> None:
        logger.info(f"[noop] create_payment_record order_id={order_id}")
