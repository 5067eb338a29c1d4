"""树节点

节点只保存数据：层级 level、左右标号 left/right、名称 name 以及
在所属树中的标识 id。节点本身不做任何校验，标号的一致性完全由
NestedSet 负责维护；在树外直接修改已注册节点的标号会破坏不变式。

使用示例:
    from nestedset import Node

    node = Node("电子产品")
    node.level, node.left, node.right   # (0, 0, 0)，加入树之前标号无意义

    # 从持久化数据还原
    node = Node.from_record((1, 1, 4, "电子产品"))
    node = Node.from_record({"id": 3, "level": 1, "left": 1, "right": 4, "name": "电子产品"})
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Sequence, Union


@dataclass(eq=False, repr=False)
class Node:
    """嵌套集合节点

    相等性按对象身份判断（两个标号相同的节点仍是不同节点），可作为字典键。

    属性:
        name: 显示名称，库内不做解释
        level: 深度，根节点为 0
        left: 左标号
        right: 右标号，始终大于 left
        id: 在所属 NestedSet 中的稳定标识，注册时自动分配
    """

    name: str = ""
    level: int = 0
    left: int = 0
    right: int = 0
    id: Optional[int] = None

    @property
    def width(self) -> int:
        """子树占用的标号数量（right - left + 1）"""
        return self.right - self.left + 1

    def is_leaf(self) -> bool:
        """是否为叶子节点（没有子孙）"""
        return self.right - self.left == 1

    def contains(self, other: "Node") -> bool:
        """other 是否为当前节点的子孙（严格包含）"""
        return self.left < other.left and other.right < self.right

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "level": self.level,
            "left": self.left,
            "right": self.right,
        }

    @classmethod
    def from_record(cls, record: Union[Mapping[str, Any], Sequence[Any]]) -> "Node":
        """从外部记录构建节点

        Args:
            record: 字典（键 level/left/right/name/id，name 和 id 可省略），
                    或 (level, left, right[, name]) 元组

        Returns:
            标号已设置的新节点
        """
        if isinstance(record, Mapping):
            return cls(
                name=record.get("name", "") or "",
                level=int(record["level"]),
                left=int(record["left"]),
                right=int(record["right"]),
                id=None if record.get("id") is None else int(record["id"]),
            )

        level, left, right = record[0], record[1], record[2]
        name = record[3] if len(record) > 3 else ""
        return cls(name=name, level=int(level), left=int(left), right=int(right))

    def __repr__(self) -> str:
        return (
            f"Node(id={self.id!r}, name={self.name!r}, "
            f"level={self.level}, left={self.left}, right={self.right})"
        )
