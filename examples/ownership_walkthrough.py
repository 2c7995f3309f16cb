#!/usr/bin/env python3
"""Walkthrough of ownership in a three-level tree.

Builds root -> two branches -> leaves with lifecycle tracing turned on,
then lets go of the tree one level at a time so the trace on stderr shows
exactly when each node is freed.
"""

import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from valuetree import (
    TreeConfig,
    LifecycleEvent,
    set_config,
    create,
    attach_child,
    parent_of,
    strong_count,
    child_values,
)


def build_tree():
    """Build the tree and return (root, leaf) handles."""
    root = create(1)
    leaf = None
    for branch_value in (10, 20):
        with create(branch_value) as branch:
            attach_child(root, branch)
            for leaf_value in (branch_value + 1, branch_value + 2):
                with create(leaf_value) as new_leaf:
                    attach_child(branch, new_leaf)
                    if leaf is None:
                        leaf = new_leaf.clone()
    return root, leaf


def main():
    set_config(TreeConfig.verbose({
        LifecycleEvent.CREATED,
        LifecycleEvent.DEALLOCATED,
        LifecycleEvent.UPGRADE_FAILED,
    }))

    print("=== Building tree ===")
    root, leaf = build_tree()
    print(f"root children: {child_values(root)}")
    print(f"leaf {leaf.value} strong count: {strong_count(leaf)}")

    with parent_of(leaf) as branch:
        print(f"leaf's parent is {branch.value}")
        with parent_of(branch) as grandparent:
            print(f"branch's parent is {grandparent.value}")

    print("\n=== Releasing root ===")
    root.release()
    print(f"leaf {leaf.value} strong count: {strong_count(leaf)}")
    print(f"leaf's parent now: {parent_of(leaf)}")

    print("\n=== Releasing leaf ===")
    leaf.release()


if __name__ == "__main__":
    main()
