"""Unit tests for the FileSystemNode class."""

from pathlib import Path

from textcon.file_system_tree.file_system_node import FileSystemNode


def child_named(node, name):
    return next((child for child in node.children if child.name == name), None)


def test_file_system_node_initialization():
    file_node = FileSystemNode("test_file.txt", is_dir=False, fs_path=Path("/work/test_file.txt"))
    assert file_node.name == "test_file.txt"
    assert not file_node.is_dir
    assert file_node.fs_path == Path("/work/test_file.txt")

    dir_node = FileSystemNode("test_dir", is_dir=True)
    assert dir_node.is_dir
    assert dir_node.fs_path is None


def test_constructor_parent_registers_child():
    root = FileSystemNode(".", is_dir=True)
    child = FileSystemNode("child", parent=root, is_dir=True)
    assert child.parent is root
    assert child_named(root, "child") is child
    assert child_named(root, "missing") is None


def test_insert_child_creates_once():
    root = FileSystemNode(".", is_dir=True)
    first = root.insert_child("src", is_dir=True)
    second = root.insert_child("src", is_dir=True)
    assert first is second
    assert len(root.children) == 1


def test_insert_child_fills_in_missing_path():
    root = FileSystemNode(".", is_dir=True)
    intermediate = root.insert_child("src", is_dir=True)
    assert intermediate.fs_path is None
    root.insert_child("src", is_dir=True, fs_path=Path("/work/src"))
    assert intermediate.fs_path == Path("/work/src")


def test_insert_path_creates_intermediate_directories():
    root = FileSystemNode(".", is_dir=True)
    leaf = root.insert_path(["a", "b", "c.txt"], is_dir=False)
    assert leaf.name == "c.txt"
    assert not leaf.is_dir
    a = child_named(root, "a")
    assert a is not None and a.is_dir
    b = child_named(a, "b")
    assert b is not None and b.is_dir
    assert child_named(b, "c.txt") is leaf


def test_insert_path_in_any_order_builds_same_tree():
    in_order = FileSystemNode(".", is_dir=True)
    in_order.insert_path(["a"], is_dir=True)
    in_order.insert_path(["a", "x.txt"], is_dir=False)

    child_first = FileSystemNode(".", is_dir=True)
    child_first.insert_path(["a", "x.txt"], is_dir=False)
    child_first.insert_path(["a"], is_dir=True)

    for root in (in_order, child_first):
        (a,) = root.children
        assert a.is_dir
        assert [child.name for child in a.children] == ["x.txt"]


def test_detached_child_is_forgotten():
    root = FileSystemNode(".", is_dir=True)
    child = root.insert_child("tmp", is_dir=False)
    child.parent = None
    assert child_named(root, "tmp") is None
    assert root.insert_child("tmp", is_dir=False) is not child


def test_sorted_children_and_iter_files():
    root = FileSystemNode(".", is_dir=True)
    for components, is_dir in [
        (["zeta.txt"], False),
        (["beta"], True),
        (["beta", "b.txt"], False),
        (["beta", "a.txt"], False),
        (["alpha.txt"], False),
        (["empty"], True),
    ]:
        root.insert_path(components, is_dir)

    assert [child.name for child in root.sorted_children()] == ["alpha.txt", "beta", "empty", "zeta.txt"]
    assert [node.name for node in root.iter_files()] == ["alpha.txt", "a.txt", "b.txt", "zeta.txt"]
