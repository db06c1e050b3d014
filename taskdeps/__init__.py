"""
taskdeps - dependency graph engine for GTD task lists.

Decides which tasks are ready, how deep each task sits in its waiting-for
chain, which chains exist and which one is the critical path.
"""

__version__ = "0.1.0"
__author__ = "taskdeps contributors"

from taskdeps.core.engine import DependencyEngine

__all__ = ["DependencyEngine", "__version__"]
