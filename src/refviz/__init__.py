"""refviz - Draw live Python object graphs as Graphviz diagrams.

refviz walks an object graph from one or more roots, discovers every
reachable object exactly once by identity, and renders objects, sequences,
None and reference cycles as Graphviz DOT text.
"""

__version__ = "0.1.0"
__description__ = "Draw live Python object graphs as Graphviz diagrams"

from refviz.config import Direction, RefvizConfig, load_config
from refviz.errors import IntrospectionError, RefvizError, RenderError
from refviz.graph import GraphvizRenderer, GraphWalker, RenderCache
from refviz.introspection import IntrospectionPolicy, Introspector
from refviz.visualizer import Visualizer

__all__ = [
    "__version__",
    "__description__",
    "Direction",
    "RefvizConfig",
    "load_config",
    "RefvizError",
    "IntrospectionError",
    "RenderError",
    "GraphWalker",
    "GraphvizRenderer",
    "RenderCache",
    "IntrospectionPolicy",
    "Introspector",
    "Visualizer",
]
