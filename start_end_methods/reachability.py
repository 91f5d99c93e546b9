import networkx as nx

from start_end_methods.costs import INF, as_cost_matrix
from start_end_methods.errors import NoPathFound


def reachability_graph(dist):
    """Directed graph of every finite off-diagonal edge of the cost matrix."""
    D = as_cost_matrix(dist)
    n = D.shape[0]
    G = nx.DiGraph()
    G.add_nodes_from(range(n))
    for i in range(n):
        for j in range(n):
            if i != j and D[i, j] < INF:
                G.add_edge(i, j, weight=int(D[i, j]))
    return G


def isolated_nodes(dist):
    """Nodes with no finite edge to or from any other node."""
    G = reachability_graph(dist)
    if G.number_of_nodes() < 2:
        return []
    return sorted(nx.isolates(G))


def check_reachable(dist, start, end, names=None):
    """
    Fail fast before the exponential search: an isolated node can never be
    part of a Hamiltonian path, and neither can a start that cannot reach end.
    """
    G = reachability_graph(dist)
    label = (lambda i: names[i]) if names else str
    if G.number_of_nodes() < 2:
        return

    isolated = sorted(nx.isolates(G))
    if isolated:
        raise NoPathFound(f"Waypoint unreachable from any other point: {label(isolated[0])}")

    if start != end and not nx.has_path(G, start, end):
        raise NoPathFound(f"No path exists from {label(start)} to {label(end)}")
