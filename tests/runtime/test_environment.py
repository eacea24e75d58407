"""Tests for the arena-backed scope chain."""

import pytest

from homy.errors import ConstReassignmentError, DuplicateDeclarationError, UndeclaredNameError
from homy.runtime.environment import BindingKind, Environment, ScopeArena


@pytest.fixture
def root():
    return Environment.root()


class TestDefineAndLookup:
    """Bindings are resolved innermost first."""

    def test_lookup_in_same_frame(self, root):
        root.define("x", 1)
        assert root.lookup("x") == 1

    def test_child_sees_parent(self, root):
        root.define("x", 1)
        child = root.child_scope()
        assert child.lookup("x") == 1
        assert child.parent.index == root.index

    def test_shadowing(self, root):
        root.define("x", 1)
        child = root.child_scope()
        child.define("x", 2)
        assert child.lookup("x") == 2
        assert root.lookup("x") == 1

    def test_owns_ignores_ancestors(self, root):
        root.define("x", 1)
        child = root.child_scope()
        assert root.owns("x")
        assert not child.owns("x")

    def test_duplicate_in_same_frame(self, root):
        root.define("x", 1, BindingKind.LET, 1, 5)
        with pytest.raises(DuplicateDeclarationError) as exc_info:
            root.define("x", 2, BindingKind.LET, 3, 5)
        error = exc_info.value
        assert (error.first_line, error.first_column) == (1, 5)
        assert (error.line, error.column) == (3, 5)
        assert "First declared at 1:5" in str(error)

    def test_undeclared_name_suggests_similar(self, root):
        root.define("counter", 0)
        with pytest.raises(UndeclaredNameError) as exc_info:
            root.child_scope().lookup("countr", 4, 2)
        error = exc_info.value
        assert error.name == "countr"
        assert (error.line, error.column) == (4, 2)
        assert "Did you mean: counter?" in str(error)


class TestAssign:
    """Assignment walks the chain and respects const."""

    def test_assign_updates_defining_frame(self, root):
        root.define("x", 1)
        child = root.child_scope()
        child.assign("x", 5)
        assert root.lookup("x") == 5

    def test_assign_undeclared(self, root):
        with pytest.raises(UndeclaredNameError):
            root.assign("missing", 1)

    def test_const_reassignment_reports_declaration_site(self, root):
        root.define("PI", 3.14, BindingKind.CONST, 2, 1)
        with pytest.raises(ConstReassignmentError) as exc_info:
            root.child_scope().assign("PI", 3, 7, 1)
        error = exc_info.value
        assert (error.declared_line, error.declared_column) == (2, 1)
        assert root.lookup("PI") == 3.14


class TestArenaReclamation:
    """Frames are reclaimed from the top unless captured."""

    def test_released_frames_are_popped(self):
        arena = ScopeArena()
        root = Environment.root(arena)
        child = root.child_scope()
        grandchild = child.child_scope()
        assert len(arena) == 3
        grandchild.release()
        child.release()
        assert len(arena) == 1

    def test_release_below_top_waits(self):
        arena = ScopeArena()
        root = Environment.root(arena)
        first = root.child_scope()
        second = root.child_scope()
        first.release()
        assert len(arena) == 3
        second.release()
        assert len(arena) == 1

    def test_captured_frame_survives(self):
        arena = ScopeArena()
        root = Environment.root(arena)
        child = root.child_scope()
        child.define("secret", 42)
        child.capture()
        child.release()
        assert len(arena) == 2
        assert Environment(arena, child.index).lookup("secret") == 42

    def test_visible_names_innermost_first(self, root):
        root.define("a", 1)
        child = root.child_scope()
        child.define("b", 2)
        child.define("a", 3)
        assert child.visible_names() == ["b", "a"]
