"""测试辅助模块"""

from .tree_helpers import (
    triples,
    check_node,
    assert_invariants,
    create_node_sample,
)

__all__ = [
    "triples",
    "check_node",
    "assert_invariants",
    "create_node_sample",
]
