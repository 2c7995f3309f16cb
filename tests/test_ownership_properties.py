"""
Test suite for the ownership model of ValueTree.

Each class covers one observable property of the tree: counts on
creation, what attaching does to counts, why the weak parent link cannot
keep a parent alive, and how resolving it extends the parent's life only
while the resolved handle is held.
"""

import pytest

from valuetree import (
    create,
    attach_child,
    set_parent,
    strong_count,
    weak_count,
    observer_count,
    parent_of,
    release_all,
)
from valuetree.testing import LifecycleRecorder


@pytest.fixture
def recorder():
    with LifecycleRecorder() as rec:
        yield rec


class TestCreation:
    """New nodes start with a single owner and no weak references."""

    @pytest.mark.parametrize("value", [0, 3, -8, 2**40])
    def test_fresh_node_counts(self, value):
        node = create(value)
        assert strong_count(node) == 1
        assert weak_count(node) == 0
        assert node.value == value
        node.release()

    def test_fresh_node_has_no_parent(self):
        node = create(1)
        assert parent_of(node) is None
        # Asking did not change anything
        assert strong_count(node) == 1
        assert weak_count(node) == 0
        node.release()


class TestAttach:
    """Attaching a child adds exactly one owner to the child only."""

    def test_attach_increments_child_only(self):
        parent = create(5)
        child = create(3)
        before_child = strong_count(child)
        before_parent = strong_count(parent)

        attach_child(parent, child)

        assert strong_count(child) == before_child + 1
        assert strong_count(parent) == before_parent
        release_all([child, parent])

    def test_attach_sets_weak_back_link(self):
        parent = create(5)
        child = create(3)
        attach_child(parent, child)

        assert weak_count(child) == 1
        assert weak_count(parent) == 0
        assert observer_count(parent) == 1
        release_all([child, parent])

    def test_repeated_attach_adds_an_owner_each_time(self):
        parent = create(5)
        child = create(3)
        for expected in (2, 3, 4):
            attach_child(parent, child)
            assert strong_count(child) == expected
        assert strong_count(parent) == 1
        release_all([child, parent])


class TestWeakParentDoesNotExtendLifetime:
    """The parent link never keeps the parent alive."""

    def test_parent_dropped_while_child_lives(self, recorder):
        parent = create(5)
        child = create(3)
        attach_child(parent, child)

        parent.release()

        assert recorder.was_deallocated("Node(value=5)")
        assert parent_of(child) is None
        assert strong_count(child) == 1
        child.release()

    def test_no_cycle_between_parent_and_child(self, recorder):
        parent = create(5)
        child = create(3)
        attach_child(parent, child)

        child.release()
        parent.release()

        assert recorder.deallocation_order() == ["Node(value=5)", "Node(value=3)"]

    def test_parent_kept_alive_by_other_owner(self):
        parent = create(5)
        other_owner = parent.clone()
        child = create(3)
        attach_child(parent, child)

        parent.release()
        resolved = parent_of(child)
        assert resolved is not None
        assert resolved.ptr_eq(other_owner)
        release_all([resolved, other_owner])

        assert parent_of(child) is None
        child.release()


class TestResolveExtendsLifetimeTransiently:
    """A resolved parent handle is a real owner until released."""

    @pytest.mark.parametrize("extra_owners", [0, 1, 3])
    def test_resolved_handle_counts_while_held(self, extra_owners):
        parent = create(5)
        owners = [parent.clone() for _ in range(extra_owners)]
        child = create(3)
        attach_child(parent, child)
        k = strong_count(parent)

        resolved = parent_of(child)
        assert strong_count(parent) >= k + 1
        resolved.release()
        assert strong_count(parent) == k

        release_all([child, parent] + owners)

    def test_resolved_handle_outlives_original(self):
        parent = create(5)
        child = create(3)
        attach_child(parent, child)

        resolved = parent_of(child)
        parent.release()
        # resolved is now the only owner
        assert strong_count(resolved) == 1
        assert resolved.value == 5
        resolved.release()

        assert parent_of(child) is None
        child.release()


class TestLeafBranchScenario:
    """The leaf/branch walkthrough, step by step."""

    def test_scenario(self, recorder):
        leaf = create(3)
        assert (strong_count(leaf), weak_count(leaf)) == (1, 0)

        with create(5, children=[leaf]) as branch:
            set_parent(leaf, branch)
            assert (strong_count(branch), weak_count(branch)) == (1, 0)
            assert (strong_count(leaf), weak_count(leaf)) == (2, 1)

        assert recorder.was_deallocated("Node(value=5)")
        assert strong_count(leaf) == 1

        assert parent_of(leaf) is None
        assert strong_count(leaf) == 1
        assert weak_count(leaf) == 1

        leaf.release()
        assert recorder.was_deallocated("Node(value=3)")
