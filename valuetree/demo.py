#!/usr/bin/env python3
"""Demonstration routine for ValueTree.

Walks a leaf and a short-lived branch through their lifetimes and
reports the counts at each step:

    Strong Leaf: 1, Weak Leaf: 0
    Strong Branch: 1, Weak Branch: 0
    Strong Leaf: 2, Weak Leaf: 1
    Leaf Parent: None
    Strong Leaf: 1, Weak Leaf: 1

Run with ``python -m valuetree`` or the ``valuetree-demo`` script. Pass
``--trace`` to also see every lifecycle transition on stderr.
"""

import argparse
import sys
from typing import List, Optional

from .api import create, parent_of, set_parent, strong_count, weak_count
from .config import TreeConfig, get_config, set_config
from .core.handles import NodeRef
from .diagnostics import DiagnosticSink


def report_counts(sink: DiagnosticSink, name: str, handle: NodeRef) -> None:
    sink.report(
        f"Strong {name}: {strong_count(handle)}, Weak {name}: {weak_count(handle)}"
    )


def run_demo(sink: Optional[DiagnosticSink] = None) -> DiagnosticSink:
    """Run the fixed leaf/branch scenario.

    Args:
        sink: Where report lines go (default: a stdout sink)

    Returns:
        The sink, whose ``lines`` hold everything reported
    """
    sink = sink or DiagnosticSink()

    leaf = create(3)
    report_counts(sink, "Leaf", leaf)

    with create(5, children=[leaf]) as branch:
        set_parent(leaf, branch)
        report_counts(sink, "Branch", branch)
        report_counts(sink, "Leaf", leaf)

    # branch is gone; its clone of leaf went with it
    sink.report(f"Leaf Parent: {parent_of(leaf)}")
    report_counts(sink, "Leaf", leaf)

    leaf.release()
    return sink


def main(argv: Optional[List[str]] = None) -> int:
    """Console entry point. Always returns 0."""
    parser = argparse.ArgumentParser(
        prog="valuetree-demo",
        description="Show how owning child links and weak parent links interact",
    )
    parser.add_argument("--trace", action="store_true",
                        help="Print lifecycle events to stderr")
    args = parser.parse_args(argv)

    previous = get_config()
    if args.trace:
        set_config(TreeConfig.verbose())
    try:
        run_demo()
    finally:
        set_config(previous)
    return 0


if __name__ == "__main__":
    sys.exit(main())
