"""NestedSetRepository 测试

使用内存 SQLite 验证整表加载、写回以及删除行的同步。
"""

import logging

import pytest
from sqlalchemy import Integer, select
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from nestedset import Node, NestedSetSettings, NodeNotFound
from nestedset.orm import NestedSetFieldsMixin, NestedSetRepository

from tests.helpers import triples, assert_invariants


class Base(DeclarativeBase):
    pass


class Category(Base, NestedSetFieldsMixin):
    __tablename__ = "category"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)


@pytest.fixture
def repo(memory_engine, db_session):
    Base.metadata.create_all(memory_engine)
    yield NestedSetRepository(db_session, Category)
    Base.metadata.drop_all(memory_engine)


def _rows(session):
    return [
        (row.id, row.name, row.level, row.lft, row.rgt)
        for row in session.scalars(select(Category).order_by(Category.lft)).all()
    ]


class TestLoadOrCreate:
    """测试空表初始化"""

    def test_empty_table_creates_root(self, repo, db_session):
        ns = repo.load_or_create()

        assert len(ns) == 1
        assert _rows(db_session) == [(1, "root", 0, 0, 1)]
        assert repo.get_node(1) is ns.root

    def test_root_name_from_settings(self, memory_engine, db_session, repo):
        repo = NestedSetRepository(db_session, Category, NestedSetSettings(root_name="catalog"))

        ns = repo.load_or_create()

        assert ns.root.name == "catalog"
        assert _rows(db_session)[0][1] == "catalog"

    def test_existing_table_is_loaded(self, repo, db_session):
        db_session.add_all([
            Category(id=10, name="root", level=0, lft=0, rgt=3),
            Category(id=11, name="A", level=1, lft=1, rgt=2),
        ])
        db_session.flush()

        ns = repo.load_or_create()

        assert ns.root.id == 10
        assert [n.name for n in ns.branch()] == ["root", "A"]


class TestLoad:
    """测试整表加载"""

    def test_missing_root(self, repo, db_session):
        db_session.add(Category(id=1, name="orphan", level=1, lft=1, rgt=2))
        db_session.flush()

        with pytest.raises(NodeNotFound):
            repo.load()

    def test_ids_are_row_ids(self, repo, db_session):
        db_session.add_all([
            Category(id=1, name="root", level=0, lft=0, rgt=5),
            Category(id=5, name="A", level=1, lft=1, rgt=4),
            Category(id=9, name="A-1", level=2, lft=2, rgt=3),
        ])
        db_session.flush()

        ns = repo.load()

        node = repo.get_node(9)
        assert node.name == "A-1"
        assert ns.exists(node)
        assert ns.get_parent(node) is repo.get_node(5)
        assert repo.get_node(404) is None


class TestSave:
    """测试写回"""

    def test_new_nodes_get_rows(self, repo, db_session):
        ns = repo.load_or_create()
        a = Node("A")
        b = Node("B")
        ns.add(a)
        ns.add(b, a)

        count = repo.save(ns)

        assert count == 3
        assert _rows(db_session) == [
            (1, "root", 0, 0, 5),
            (a.id, "A", 1, 1, 4),
            (b.id, "B", 2, 2, 3),
        ]

    def test_round_trip_after_mutations(self, repo, db_session):
        """测试增、移、删后写回，再加载结果一致"""
        ns = repo.load_or_create()
        nodes = [Node(f"node {i}") for i in range(1, 7)]
        ns.add(nodes[0])
        ns.add(nodes[1], nodes[0])
        ns.add(nodes[2])
        ns.add(nodes[3], nodes[2])
        ns.add(nodes[4], nodes[0])
        ns.add(nodes[5], nodes[3])
        ns.move(nodes[3], nodes[0])
        ns.delete(nodes[1])
        repo.save(ns)
        expected = [(n.id, n.name) + t for n, t in zip(ns.branch(), triples(ns.branch()))]

        reloaded = NestedSetRepository(db_session, Category).load()

        assert [(n.id, n.name) + t for n, t in zip(reloaded.branch(), triples(reloaded.branch()))] == expected
        assert_invariants(reloaded)

    def test_deleted_nodes_remove_rows(self, repo, db_session):
        ns = repo.load_or_create()
        a = Node("A")
        b = Node("B")
        ns.add(a)
        ns.add(b, a)
        repo.save(ns)

        ns.delete(a)
        repo.save(ns)

        assert _rows(db_session) == [(1, "root", 0, 0, 1)]
        assert repo.get_node(a.id) is None

    def test_mutate_loaded_tree(self, repo, db_session):
        """测试加载后继续添加节点，新 id 不与已有行冲突"""
        db_session.add_all([
            Category(id=1, name="root", level=0, lft=0, rgt=3),
            Category(id=7, name="A", level=1, lft=1, rgt=2),
        ])
        db_session.flush()
        ns = repo.load()

        node = Node("B")
        ns.add(node, repo.get_node(7))
        repo.save(ns)

        assert node.id == 8
        assert _rows(db_session) == [
            (1, "root", 0, 0, 5),
            (7, "A", 1, 1, 4),
            (8, "B", 2, 2, 3),
        ]

    def test_save_logs_to_orm_logger(self, repo, caplog):
        ns = repo.load_or_create()

        with caplog.at_level(logging.DEBUG, logger="nestedset"):
            repo.save(ns)

        assert any(r.name == "nestedset.orm" for r in caplog.records)
