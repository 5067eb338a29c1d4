"""嵌套集合（Nested Set）

为树中每个节点维护 (level, left, right) 三个整数标号，使祖先、子孙、
子树和兄弟顺序的判断只需比较整数，不需要父子链接或递归。

嵌套集合模型说明：
    - 子树占据其祖先标号区间内的一段连续区间
    - B 是 A 的子孙，当且仅当 A.left < B.left 且 B.right < A.right
    - 同一父节点下的兄弟按 left 升序排列
    - 所有节点的 left/right 合起来恰好是 0 .. 2N-1，无重复无空洞
    - 优点：子树查询只需一次区间比较
    - 缺点：每次插入、删除、移动都要改写其后所有节点的标号（O(N)）

使用示例:
    from nestedset import NestedSet, Node

    ns = NestedSet()
    electronics = Node("电子产品")
    laptops = Node("笔记本")

    ns.add(electronics)              # 挂到根节点下
    ns.add(laptops, electronics)     # 作为最右子节点插入

    ns.branch(electronics)           # [electronics, laptops]，先序
    ns.move(laptops, None)           # 移动到根节点下
    ns.delete(electronics)           # 连同子孙一起删除

线程安全：
    所有结构操作都会读写整棵树的标号，NestedSet 本身不加锁，
    多线程共享同一实例时需要调用方自行互斥。
"""

from typing import Dict, Iterable, Iterator, List, Optional

from .config import NestedSetSettings
from .exceptions import Err
from .log import core_logger as logger
from .node import Node


class NestedSet:
    """嵌套集合树

    持有根节点和已注册节点表（按节点 id 索引），负责在每次结构操作后
    保持全局标号不变式。节点对象由调用方创建和持有，树只保存引用。

    所有操作在修改任何标号之前完成全部校验，抛出异常时树保持原状。

    节点 id 由树从 1 开始分配（根节点为 1），可以直接用作数据库整数主键。
    """

    def __init__(self, settings: Optional[NestedSetSettings] = None):
        """创建只有根节点的空树，根节点标号为 (0, 0, 1)

        Args:
            settings: 树配置，默认读取 NESTEDSET_* 环境变量
        """
        self.settings = settings or NestedSetSettings()
        self._registry: Dict[int, Node] = {}
        self._next_id = 1

        self.root = Node(self.settings.root_name, level=0, left=0, right=1)
        self._register(self.root)

    # ==================== 构造 ====================

    @classmethod
    def new_empty(cls, settings: Optional[NestedSetSettings] = None) -> "NestedSet":
        """创建空树，等同于 NestedSet()"""
        return cls(settings=settings)

    @classmethod
    def from_nodes(
        cls,
        root: Node,
        nodes: Iterable[Node],
        settings: Optional[NestedSetSettings] = None,
    ) -> "NestedSet":
        """用已经标好号的节点批量构建树

        用于从外部存储还原树。节点按原样注册，不重新计算标号。

        前置条件：root 与 nodes 一起满足全部嵌套集合不变式（root.left == 0，
        标号恰好覆盖 0..2N-1，层级与包含关系一致）。默认不做检查，
        输入不满足时后续操作的结果未定义；settings.check_invariants 为真时
        构建完成后会调用 validate()。

        Args:
            root: 根节点（level 为 0）
            nodes: 其余节点，可以包含 root，重复出现的节点只注册一次
            settings: 树配置

        Returns:
            新的 NestedSet

        Raises:
            NodeAlreadyExists: 两个不同节点带有相同的 id
        """
        ns = cls(settings=settings)
        ns._registry = {}
        ns._next_id = 1
        ns.root = root

        # 先注册自带 id 的节点，再为其余节点分配 id，避免自动分配的 id 与后面的冲突
        pending = [root] + [n for n in nodes if n is not root]
        for node in pending:
            if node.id is not None and not ns.exists(node):
                ns._check_free(node)
                ns._register(node)
        for node in pending:
            if node.id is None:
                ns._register(node)

        logger.debug("批量导入 %d 个节点，根节点 right=%d", len(ns._registry), root.right)
        ns._check_invariants()
        return ns

    # ==================== 注册表 ====================

    def exists(self, node: Optional[Node]) -> bool:
        """节点是否注册在当前树中"""
        if node is None or node.id is None:
            return False
        return self._registry.get(node.id) is node

    def __contains__(self, node: Node) -> bool:
        return self.exists(node)

    def __len__(self) -> int:
        return len(self._registry)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.branch())

    def _register(self, node: Node):
        if node.id is None:
            node.id = self._next_id
        self._registry[node.id] = node
        self._next_id = max(self._next_id, node.id + 1)

    def _check_free(self, node: Node):
        """批量导入时外部 id 不能与已注册节点冲突"""
        if node.id in self._registry:
            raise Err.already_exists(f"节点 id 冲突: {node.id}", node_id=node.id)

    def _require(self, node: Optional[Node]) -> Node:
        if not self.exists(node):
            raise Err.node_not_found(
                f"节点不存在: {getattr(node, 'name', None)!r}",
                node_id=getattr(node, "id", None),
            )
        return node

    def _resolve_parent(self, parent: Optional[Node]) -> Node:
        """None 表示根节点"""
        if parent is None:
            return self.root
        if not self.exists(parent):
            raise Err.parent_not_found(
                f"父节点不存在: {parent.name!r}", parent_id=parent.id
            )
        return parent

    def _subtree(self, node: Node) -> List[Node]:
        """node 及其全部子孙，无序"""
        return [
            n for n in self._registry.values()
            if node.left <= n.left and n.right <= node.right
        ]

    # ==================== 标号平移 ====================

    def _open_gap(self, at: int, width: int, skip: frozenset = frozenset()):
        """在标号 at 处腾出 width 个位置，at 及其后的标号全部后移"""
        for n in self._registry.values():
            if n.id in skip:
                continue
            if n.left >= at:
                n.left += width
            if n.right >= at:
                n.right += width

    def _close_gap(self, right: int, width: int, skip: frozenset = frozenset()):
        """收回以 right 结尾、宽度为 width 的区间，其后的标号全部前移"""
        for n in self._registry.values():
            if n.id in skip:
                continue
            if n.left > right:
                n.left -= width
            if n.right > right:
                n.right -= width

    def _relocate(self, node: Node, target: int, level_delta: int = 0):
        """把 node 所在子树搬到当前标号 target 所在的位置之前

        先把子树从原位置摘下（其余节点收拢），再在目标位置撑开同样宽度，
        最后整体平移子树标号，子树内部的相对结构保持不变。

        Args:
            node: 要搬移的子树根
            target: 插入点，使用搬移前的标号，不能落在子树内部
            level_delta: 子树内每个节点层级的增量
        """
        subtree = self._subtree(node)
        skip = frozenset(n.id for n in subtree)
        left, right, width = node.left, node.right, node.width

        self._close_gap(right, width, skip)
        if target > right:
            target -= width
        self._open_gap(target, width, skip)

        offset = target - left
        for n in subtree:
            n.left += offset
            n.right += offset
            n.level += level_delta

    # ==================== 结构操作 ====================

    def add(self, node: Node, parent: Optional[Node] = None):
        """把 node 插入为 parent 的最右子节点

        Args:
            node: 新节点，原有标号会被覆盖
            parent: 父节点，None 表示根节点

        Raises:
            ParentNotFound: parent 未注册
            NodeAlreadyExists: node 已注册在当前树中
        """
        parent = self._resolve_parent(parent)
        if self.exists(node):
            raise Err.already_exists(f"节点已在树中: {node.name!r}", node_id=node.id)
        # 其他树分配的 id 在这里可能已被占用，重新分配
        if node.id is not None and node.id in self._registry:
            node.id = None

        insert_at = parent.right
        for n in self._registry.values():
            if n.right >= insert_at:
                n.right += 2
            if n.left > insert_at:
                n.left += 2

        node.left = insert_at
        node.right = insert_at + 1
        node.level = parent.level + 1
        self._register(node)

        logger.debug(
            "add: 节点 %s 插入到 %s 下，标号 (%d, %d, %d)",
            node.id, parent.id, node.level, node.left, node.right,
        )
        self._check_invariants()

    def delete(self, node: Node) -> List[Node]:
        """删除 node 及其全部子孙

        Args:
            node: 要删除的节点

        Returns:
            被删除的节点列表（先序），节点保留删除前的标号

        Raises:
            NodeNotFound: node 未注册
            CannotDeleteRoot: node 是根节点
        """
        self._require(node)
        if node is self.root:
            raise Err.delete_root(node_id=node.id)

        removed = self.branch(node)
        for n in removed:
            del self._registry[n.id]
        self._close_gap(node.right, node.width)

        logger.debug("delete: 删除节点 %s，共 %d 个节点，宽度 %d", node.id, len(removed), node.width)
        self._check_invariants()
        return removed

    def move(self, node: Node, new_parent: Optional[Node] = None):
        """把 node 连同子树移动为 new_parent 的最右子节点

        子树内部的相对顺序和嵌套关系保持不变，层级整体调整。

        Args:
            node: 要移动的节点
            new_parent: 新父节点，None 表示根节点

        Raises:
            NodeNotFound: node 未注册
            ParentNotFound: new_parent 未注册
            CycleNotAllowed: new_parent 是 node 自身或其子孙（包括移动根节点）
        """
        self._require(node)
        new_parent = self._resolve_parent(new_parent)
        if new_parent is node or node.contains(new_parent):
            raise Err.cycle(node_id=node.id, parent_id=new_parent.id)

        level_delta = new_parent.level + 1 - node.level
        self._relocate(node, new_parent.right, level_delta)

        logger.debug(
            "move: 节点 %s 移动到 %s 下，标号 (%d, %d, %d)",
            node.id, new_parent.id, node.level, node.left, node.right,
        )
        self._check_invariants()

    def shift(self, node: Node, shifted_node: Node):
        """在同一父节点下调整 node 的位置，使其紧邻 shifted_node

        放置规则：
            - shifted_node 是叶子：node 子树插入到 shifted_node 之前
            - shifted_node 有子节点：node 子树插入到 shifted_node 整个子树之后

        父节点和层级都不变。shift 到自身不做任何修改。

        Args:
            node: 要调整位置的节点
            shifted_node: 参照的兄弟节点

        Raises:
            NodeNotFound: 任一节点未注册
            LevelMismatch: 两个节点层级不同
            OutOfParentBounds: shifted_node 不在 node 的父节点范围内
        """
        self._require(node)
        self._require(shifted_node)
        if node.level != shifted_node.level:
            raise Err.level_mismatch(
                f"节点层级不一致: {node.level} != {shifted_node.level}",
                node_id=node.id, shifted_node_id=shifted_node.id,
            )
        if node is shifted_node:
            return

        parent = self.get_parent(node)
        if parent is None or not parent.contains(shifted_node):
            raise Err.out_of_bounds(node_id=node.id, shifted_node_id=shifted_node.id)

        if shifted_node.is_leaf():
            target = shifted_node.left
        else:
            target = shifted_node.right + 1
        self._relocate(node, target)

        logger.debug(
            "shift: 节点 %s 移动到 %s 旁，标号 (%d, %d, %d)",
            node.id, shifted_node.id, node.level, node.left, node.right,
        )
        self._check_invariants()

    # ==================== 查询 ====================

    def branch(self, node: Optional[Node] = None) -> List[Node]:
        """返回以 node 为根的子树，按 left 升序（即先序遍历顺序）

        Args:
            node: 子树根，None 表示整棵树

        Returns:
            节点列表，第一个元素是 node 本身；node 未注册时返回空列表
        """
        if node is None:
            node = self.root
        if not self.exists(node):
            return []
        return sorted(self._subtree(node), key=lambda n: n.left)

    def is_descendant(self, ancestor: Node, node: Node) -> bool:
        """node 是否为 ancestor 的子孙"""
        self._require(ancestor)
        self._require(node)
        return ancestor.contains(node)

    def get_parent(self, node: Node) -> Optional[Node]:
        """获取父节点，根节点返回 None"""
        self._require(node)
        parent = None
        for n in self._registry.values():
            if n.contains(node) and (parent is None or n.left > parent.left):
                parent = n
        return parent

    def get_ancestors(self, node: Node) -> List[Node]:
        """获取所有祖先节点，从根节点开始"""
        self._require(node)
        ancestors = [n for n in self._registry.values() if n.contains(node)]
        return sorted(ancestors, key=lambda n: n.left)

    def get_children(self, node: Optional[Node] = None) -> List[Node]:
        """获取直接子节点，按兄弟顺序排列"""
        if node is None:
            node = self.root
        self._require(node)
        return [n for n in self.branch(node) if n.level == node.level + 1]

    def get_siblings(self, node: Node, include_self: bool = False) -> List[Node]:
        """获取兄弟节点，按兄弟顺序排列"""
        parent = self.get_parent(node)
        if parent is None:
            return [node] if include_self else []
        return [
            n for n in self.get_children(parent)
            if include_self or n is not node
        ]

    def get_descendant_count(self, node: Node) -> int:
        """子孙节点数量，直接由标号计算"""
        self._require(node)
        return (node.right - node.left - 1) // 2

    def get_depth(self, node: Optional[Node] = None) -> int:
        """以 node 为根的子树深度（只有自身时为 1）"""
        if node is None:
            node = self.root
        self._require(node)
        return max(n.level for n in self.branch(node)) - node.level + 1

    # ==================== 校验 ====================

    def validate(self):
        """校验全部嵌套集合不变式

        检查项：
            - 根节点 level 为 0、left 为 0、right 为 2N-1
            - 每个节点 left < right
            - 所有 left/right 恰好是 0..2N-1，无重复无空洞
            - 任意两个区间要么嵌套要么不相交
            - 子节点层级等于父节点层级加一

        Raises:
            InvalidTreeError: details 中列出每一处违规
        """
        errors: List[str] = []
        count = len(self._registry)

        if not self.exists(self.root):
            errors.append("根节点未注册")
        if self.root.level != 0 or self.root.left != 0:
            errors.append(f"根节点标号错误: level={self.root.level}, left={self.root.left}")
        if self.root.right != 2 * count - 1:
            errors.append(f"根节点 right 应为 {2 * count - 1}，实际为 {self.root.right}")

        labels = []
        for n in self._registry.values():
            if n.left >= n.right:
                errors.append(f"节点 {n.id} 的 left ({n.left}) 不小于 right ({n.right})")
            labels.extend((n.left, n.right))
        if sorted(labels) != list(range(2 * count)):
            errors.append(f"标号不是 0..{2 * count - 1} 的排列")

        # 按 left 顺序扫描，用栈维护当前祖先链
        stack: List[Node] = []
        for n in sorted(self._registry.values(), key=lambda x: x.left):
            while stack and stack[-1].right < n.left:
                stack.pop()
            if stack:
                parent = stack[-1]
                if n.right > parent.right:
                    errors.append(f"节点 {n.id} 与节点 {parent.id} 的区间交叉")
                if n.level != parent.level + 1:
                    errors.append(
                        f"节点 {n.id} 的层级应为 {parent.level + 1}，实际为 {n.level}"
                    )
            elif n is not self.root:
                errors.append(f"节点 {n.id} 不在根节点范围内")
            stack.append(n)

        if errors:
            raise Err.invalid(details=errors)

    def _check_invariants(self):
        if self.settings.check_invariants:
            self.validate()

    def __repr__(self) -> str:
        return f"NestedSet(root={self.root.name!r}, size={len(self)})"
