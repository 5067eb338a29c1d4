"""
Pytest 公共配置和 Fixtures

提供测试所需的公共资源：
- 标准测试树
- 内存数据库引擎
- 临时目录
"""

import os
import tempfile

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from nestedset import NestedSet, Node

from tests.helpers import create_node_sample


# ==================== 基础 Fixtures ====================

@pytest.fixture(scope="session")
def temp_dir():
    """创建临时目录"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def temp_file(temp_dir):
    """创建临时文件的工厂函数"""
    created_files = []

    def _create_file(filename: str, content: str = "") -> str:
        filepath = os.path.join(temp_dir, filename)
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(content)
        created_files.append(filepath)
        return filepath

    yield _create_file

    for f in created_files:
        if os.path.exists(f):
            os.remove(f)


@pytest.fixture(autouse=True)
def clean_nestedset_env(monkeypatch):
    """清除 NESTEDSET_* 环境变量，避免影响默认配置"""
    for key in list(os.environ):
        if key.startswith("NESTEDSET_"):
            monkeypatch.delenv(key, raising=False)


# ==================== 树 Fixtures ====================

@pytest.fixture
def seven_node_tree():
    """七节点测试树

    构建顺序: node1→root, node2→node1, node3→root, node4→node3,
    node5→node1, node6→node4

        root (0, 0, 13)
        ├── node 1 (1, 1, 6)
        │   ├── node 2 (2, 2, 3)
        │   └── node 5 (2, 4, 5)
        └── node 3 (1, 7, 12)
            └── node 4 (2, 8, 11)
                └── node 6 (3, 9, 10)

    Returns:
        (ns, nodes)，nodes[0] 是根节点，nodes[i] 是 "node i"
    """
    ns = NestedSet()
    nodes = [ns.root] + [Node(f"node {i}") for i in range(1, 7)]

    ns.add(nodes[1], None)
    ns.add(nodes[2], nodes[1])
    ns.add(nodes[3], nodes[0])
    ns.add(nodes[4], nodes[3])
    ns.add(nodes[5], nodes[1])
    ns.add(nodes[6], nodes[4])

    return ns, nodes


@pytest.fixture
def standard_tree():
    """十一节点的批量导入树，用于 shift 测试

        root (0, 0, 21)
        ├── node 1 (1, 1, 2)
        ├── node 2 (1, 3, 8)
        │   ├── node 3 (2, 4, 5)
        │   └── node 4 (2, 6, 7)
        ├── node 5 (1, 9, 14)
        │   └── node 6 (2, 10, 13)
        │       └── node 7 (3, 11, 12)
        ├── node 8 (1, 15, 16)
        └── node 9 (1, 17, 20)
            └── node 10 (2, 18, 19)

    Returns:
        (ns, nodes)，nodes[0] 是根节点，nodes[i] 是 "node i"
    """
    root = create_node_sample(0, 0, 21, "root")
    nodes = [
        create_node_sample(1, 1, 2, "node 1"),
        create_node_sample(1, 3, 8, "node 2"),
        create_node_sample(2, 4, 5, "node 3"),
        create_node_sample(2, 6, 7, "node 4"),
        create_node_sample(1, 9, 14, "node 5"),
        create_node_sample(2, 10, 13, "node 6"),
        create_node_sample(3, 11, 12, "node 7"),
        create_node_sample(1, 15, 16, "node 8"),
        create_node_sample(1, 17, 20, "node 9"),
        create_node_sample(2, 18, 19, "node 10"),
    ]
    ns = NestedSet.from_nodes(root, nodes)
    return ns, [root] + nodes


# ==================== 数据库 Fixtures ====================

@pytest.fixture(scope="function")
def memory_engine():
    """创建内存数据库引擎

    使用 StaticPool 和 check_same_thread=False，所有操作共用同一个连接。
    """
    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(memory_engine):
    """创建数据库会话"""
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=memory_engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
