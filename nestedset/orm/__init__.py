"""ORM 持久化模块

用 SQLAlchemy 模型保存嵌套集合树：表中每行对应一个节点，
保存 name/level/lft/rgt 四个字段。

主要组件:
- NestedSetFieldsMixin: 嵌套集合字段定义 Mixin
- NestedSetRepository: 整表加载为 NestedSet、把标号写回表中

子树查询可以直接在 SQL 中完成:
    select(Category).where(Category.lft.between(node.lft, node.rgt)).order_by(Category.lft)
"""

from .nested_set_fields import NestedSetFieldsMixin
from .repository import NestedSetRepository

__all__ = [
    "NestedSetFieldsMixin",
    "NestedSetRepository",
]
