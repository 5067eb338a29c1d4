"""树形结构工具函数

在 NestedSet 与普通数据之间转换，供持久化、序列化等外部协作方使用。

使用示例:
    from nestedset.tree_utils import load_records, to_records, build_tree_list

    # 从 (level, left, right, name) 记录还原
    ns = load_records([
        (0, 0, 5, "root"),
        (1, 1, 4, "A"),
        (2, 2, 3, "A-1"),
    ])

    # 导出为扁平记录（先序）
    rows = to_records(ns)

    # 导出为嵌套字典
    tree = build_tree_list(ns)
    # [{"id": 1, "name": "root", ..., "children": [
    #     {"id": 2, "name": "A", ..., "children": [
    #         {"id": 3, "name": "A-1", ..., "children": []}
    #     ]}
    # ]}]
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from .config import NestedSetSettings
from .exceptions import Err
from .nested_set import NestedSet
from .node import Node

Record = Union[Mapping[str, Any], Sequence[Any]]


def nodes_from_records(records: Iterable[Record]) -> Tuple[Node, List[Node]]:
    """把外部记录转换为节点

    Args:
        records: 字典或 (level, left, right[, name]) 元组

    Returns:
        (根节点, 其余节点列表)，根节点是 level 为 0 的那条记录

    Raises:
        NodeNotFound: 记录中没有 level 为 0 的根节点
    """
    root = None
    nodes: List[Node] = []
    for record in records:
        node = Node.from_record(record)
        if root is None and node.level == 0:
            root = node
        else:
            nodes.append(node)

    if root is None:
        raise Err.node_not_found("记录中没有根节点（level 为 0）")
    return root, nodes


def load_records(
    records: Iterable[Record],
    settings: Optional[NestedSetSettings] = None,
) -> NestedSet:
    """从已标号的记录构建 NestedSet

    记录必须满足嵌套集合不变式，见 NestedSet.from_nodes。
    """
    root, nodes = nodes_from_records(records)
    return NestedSet.from_nodes(root, nodes, settings=settings)


def to_records(ns: NestedSet, node: Optional[Node] = None) -> List[Dict[str, Any]]:
    """导出子树为扁平字典列表（先序）"""
    return [n.to_dict() for n in ns.branch(node)]


def build_tree_list(
    ns: NestedSet,
    node: Optional[Node] = None,
    children_field: str = "children",
) -> List[Dict[str, Any]]:
    """导出子树为嵌套字典结构

    按先序扫描一次，用栈维护祖先链，不递归。

    Args:
        ns: 树
        node: 子树根，None 表示整棵树
        children_field: 子节点列表字段名

    Returns:
        只含一个元素（子树根）的列表；node 未注册时返回空列表
    """
    roots: List[Dict[str, Any]] = []
    stack: List[Tuple[Node, Dict[str, Any]]] = []

    for n in ns.branch(node):
        item = n.to_dict()
        item[children_field] = []

        while stack and stack[-1][0].right < n.left:
            stack.pop()
        if stack:
            stack[-1][1][children_field].append(item)
        else:
            roots.append(item)
        stack.append((n, item))

    return roots


def from_tree_list(
    tree: List[Dict[str, Any]],
    name_field: str = "name",
    children_field: str = "children",
    settings: Optional[NestedSetSettings] = None,
) -> NestedSet:
    """从嵌套字典构建 NestedSet

    tree 中的每个顶层元素成为根节点的子节点，标号由 add 重新计算，
    输入中的 level/left/right 会被忽略。

    Args:
        tree: 嵌套字典列表
        name_field: 名称字段名
        children_field: 子节点列表字段名
        settings: 树配置

    Returns:
        新的 NestedSet
    """
    ns = NestedSet(settings=settings)
    pending: List[Tuple[Dict[str, Any], Optional[Node]]] = [
        (item, None) for item in reversed(tree)
    ]
    while pending:
        item, parent = pending.pop()
        node = Node(item.get(name_field, "") or "")
        ns.add(node, parent)
        for child in reversed(item.get(children_field) or []):
            pending.append((child, node))
    return ns
