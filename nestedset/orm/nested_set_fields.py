"""嵌套集合字段定义

提供标准的嵌套集合字段 Mixin，简化模型定义。

使用示例:
    from sqlalchemy import Integer
    from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
    from nestedset.orm import NestedSetFieldsMixin

    class Base(DeclarativeBase):
        pass

    class Category(Base, NestedSetFieldsMixin):
        __tablename__ = "category"

        # id 需要自行定义，必须是整数主键
        id: Mapped[int] = mapped_column(Integer, primary_key=True)
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column


class NestedSetFieldsMixin:
    """嵌套集合字段 Mixin

    提供标准的嵌套集合字段：
    - name: 节点名称
    - level: 节点层级（根节点为0）
    - lft / rgt: 左右标号（避开 SQL 关键字 LEFT/RIGHT）

    注意：
    - id 字段需要用户自行定义，且必须是整数主键，与 Node.id 一一对应
    - 一张表只保存一棵树，根节点是 level 为 0 的那一行
    """

    name: Mapped[str] = mapped_column(
        String(255),
        default="",
        nullable=False,
        comment="节点名称"
    )

    # 节点层级，根节点为 0
    level: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
        index=True,
        comment="节点层级（根节点为0）"
    )

    # 子树查询: WHERE lft BETWEEN :lft AND :rgt
    lft: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
        comment="左标号"
    )

    rgt: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
        comment="右标号"
    )
