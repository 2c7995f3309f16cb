"""ValueTree - ownership in a parent-linked tree.

ValueTree shows how shared ownership and non-owning back-references
coexist in a tree: parents own their children through counted handles,
children observe their parent through weak handles, so no reference
cycle ever keeps a subtree alive.

Quick tour:
━━━━━━━━━━━━━━━━━━━━━━━━━━
    from valuetree import create, attach_child, parent_of, strong_count

    leaf = create(3)
    with create(5) as branch:
        attach_child(branch, leaf)
        strong_count(leaf)    # 2
    parent_of(leaf)           # None, branch is gone
━━━━━━━━━━━━━━━━━━━━━━━━━━
"""

__version__ = "0.1.0"

from .errors import ValueTreeError
from .config import (
    TreeConfig,
    LifecycleEvent,
    ConfigurationError,
    get_config,
    set_config,
)
from .core import (
    Cell,
    BorrowError,
    Node,
    NodeRef,
    WeakRef,
    ReleasedHandleError,
    release_all,
)
from .api import (
    create,
    attach_child,
    set_parent,
    clear_parent,
    strong_count,
    weak_count,
    observer_count,
    parent_of,
    parent_link,
    child_values,
    is_alive,
)
from .diagnostics import DiagnosticSink, LifecycleTracer
from .demo import run_demo

__all__ = [
    "__version__",
    # Errors
    'ValueTreeError',
    'ConfigurationError',
    'BorrowError',
    'ReleasedHandleError',
    # Config
    'TreeConfig',
    'LifecycleEvent',
    'get_config',
    'set_config',
    # Core
    'Cell',
    'Node',
    'NodeRef',
    'WeakRef',
    'release_all',
    # API
    'create',
    'attach_child',
    'set_parent',
    'clear_parent',
    'strong_count',
    'weak_count',
    'observer_count',
    'parent_of',
    'parent_link',
    'child_values',
    'is_alive',
    # Diagnostics
    'DiagnosticSink',
    'LifecycleTracer',
    'run_demo',
]
