"""Graph algorithms for ordering units by their dependencies."""

from collections.abc import Callable, Hashable, Iterable, Iterator


def node_itself(node: Hashable) -> Hashable:
    """Key nodes by their own value."""
    return node


def import_order[T](
    nodes: Iterable[T],
    dependencies: Callable[[T], Iterable[T]],
    *,
    key: Callable[[T], Hashable] = node_itself,
) -> list[T]:
    """Order nodes so that each one follows its dependencies, tolerating cycles.

    Nodes are traversed depth-first, starting from each node in the given
    order that has not been reached yet. A node is marked complete when it is
    entered, before its dependencies are visited, and is emitted once they
    have all been emitted. A path that leads back to a node still being
    traversed therefore stops there, so the member of a cycle that was
    entered first is emitted after the others.

    Args:
        nodes: Nodes in user order. Every node is emitted exactly once.
        dependencies: Returns the direct dependencies of a node in the order
            they should be visited.
        key: Identifies a node. Pass ``id`` to track nodes by identity, so
            equal or unhashable nodes stay distinct.

    Returns:
        List of nodes in import order.

    Example:
        >>> deps = {"a": ["b"], "b": ["a"], "c": ["a"]}
        >>> import_order(["a", "b", "c"], lambda n: deps[n])
        ['b', 'a', 'c']

    """
    completed: set[Hashable] = set()
    order: list[T] = []

    for root in nodes:
        if key(root) in completed:
            continue
        completed.add(key(root))
        # Explicit stack instead of recursion: chains can be arbitrarily long
        stack: list[tuple[T, Iterator[T]]] = [(root, iter(dependencies(root)))]
        while stack:
            node, pending = stack[-1]
            for dep in pending:
                if key(dep) not in completed:
                    completed.add(key(dep))
                    stack.append((dep, iter(dependencies(dep))))
                    break
            else:
                stack.pop()
                order.append(node)

    return order


def reachable[T](
    roots: Iterable[T],
    neighbors: Callable[[T], Iterable[T]],
    *,
    key: Callable[[T], Hashable] = node_itself,
) -> list[T]:
    """Collect the roots and every node transitively reachable from them.

    Args:
        roots: Starting nodes, included in the result.
        neighbors: Returns the direct neighbors of a node.
        key: Identifies a node, as in `import_order`.

    Returns:
        Each reached node once, in the order it was reached.

    """
    visited: set[Hashable] = set()
    reached: list[T] = []
    stack = list(roots)
    while stack:
        current = stack.pop()
        if key(current) not in visited:
            visited.add(key(current))
            reached.append(current)
            stack.extend(neighbors(current))
    return reached
