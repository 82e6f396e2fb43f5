"""分页切片：page 从 1 开始，超出范围返回空列表而不是报错。"""
from __future__ import annotations

from typing import List, Sequence, Tuple, TypeVar


T = TypeVar("T")


def paginate(items: Sequence[T], page: int, page_size: int) -> Tuple[List[T], int]:
    """返回 (当前页数据, 过滤后的总数)"""
    start = max(0, (page - 1) * page_size)
    return list(items[start:start + page_size]), len(items)
