"""remote-control: context navigation and remote command execution.

A server exposes a tree of contexts (root, server, context sets, nodes)
with a command catalog per node type; an interactive client walks the tree
and runs the commands bound at each level.
"""

__version__ = "1.0.0"
