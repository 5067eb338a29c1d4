"""嵌套集合持久化

在 SQLAlchemy 模型与 NestedSet 之间读写标号。标号的计算全部在内存中的
NestedSet 完成，本模块只负责整表读取和回写。

使用示例:
    from nestedset import Node
    from nestedset.orm import NestedSetRepository

    repo = NestedSetRepository(session, Category)
    ns = repo.load_or_create()

    ns.add(Node("笔记本"), repo.get_node(parent_id))
    repo.save(ns)
    session.commit()
"""

from typing import Dict, Optional, Type, TYPE_CHECKING

from sqlalchemy import select

from ..config import NestedSetSettings
from ..exceptions import Err
from ..log import orm_logger as logger
from ..nested_set import NestedSet
from ..node import Node

if TYPE_CHECKING:
    from sqlalchemy.orm import Session


class NestedSetRepository:
    """单表单树的读写仓库

    Args:
        session: SQLAlchemy 会话，提交由调用方负责
        model: 带有整数主键 id 和 NestedSetFieldsMixin 字段的模型
        settings: 加载出的 NestedSet 使用的配置
    """

    def __init__(
        self,
        session: "Session",
        model: Type,
        settings: Optional[NestedSetSettings] = None,
    ):
        self.session = session
        self.model = model
        self.settings = settings
        self._nodes: Dict[int, Node] = {}

    @staticmethod
    def _to_node(row) -> Node:
        return Node(name=row.name or "", level=row.level, left=row.lft, right=row.rgt, id=row.id)

    def load(self) -> NestedSet:
        """读取整张表并构建 NestedSet

        Returns:
            标号与表中数据一致的 NestedSet，节点 id 等于行 id

        Raises:
            NodeNotFound: 表中没有 level 为 0 的根节点
        """
        rows = self.session.scalars(
            select(self.model).order_by(self.model.lft)
        ).all()

        nodes = [self._to_node(row) for row in rows]
        root = next((n for n in nodes if n.level == 0), None)
        if root is None:
            raise Err.node_not_found(
                f"表 {self.model.__tablename__} 中没有根节点", table=self.model.__tablename__
            )

        ns = NestedSet.from_nodes(root, [n for n in nodes if n is not root], settings=self.settings)
        self._nodes = {n.id: n for n in nodes}
        logger.debug("从 %s 加载 %d 个节点", self.model.__tablename__, len(nodes))
        return ns

    def load_or_create(self) -> NestedSet:
        """表为空时写入一棵只有根节点的新树，否则加载已有数据"""
        has_rows = self.session.scalars(select(self.model.id).limit(1)).first() is not None
        if has_rows:
            return self.load()

        ns = NestedSet(settings=self.settings)
        self.save(ns)
        return ns

    def get_node(self, node_id: int) -> Optional[Node]:
        """按行 id 获取最近一次 load/save 对应的节点"""
        return self._nodes.get(node_id)

    def save(self, ns: NestedSet) -> int:
        """把 NestedSet 的全部标号写回表中

        已注册的节点按 id 插入或更新，表中多出的行（已被删除的节点）会被删除。
        只调用 flush，不提交事务。

        Returns:
            写入（插入或更新）的行数
        """
        rows = {row.id: row for row in self.session.scalars(select(self.model)).all()}

        count = 0
        for node in ns.branch():
            row = rows.pop(node.id, None)
            if row is None:
                row = self.model(id=node.id)
                self.session.add(row)
            row.name = node.name
            row.level = node.level
            row.lft = node.left
            row.rgt = node.right
            count += 1

        for row in rows.values():
            self.session.delete(row)

        self.session.flush()
        self._nodes = {n.id: n for n in ns.branch()}
        logger.debug(
            "写回 %s: %d 行，删除 %d 行", self.model.__tablename__, count, len(rows)
        )
        return count
