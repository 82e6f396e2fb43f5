"""进程内存储：每种实体一个仓储，进程启动时创建一次并注入到应用服务。"""
from __future__ import annotations

from dataclasses import dataclass, field

from infrastructure.repositories.user_repository import InMemoryUserRepository
from infrastructure.repositories.product_repository import InMemoryProductRepository


@dataclass
class InMemoryStore:
    users: InMemoryUserRepository = field(default_factory=InMemoryUserRepository)
    products: InMemoryProductRepository = field(default_factory=InMemoryProductRepository)
