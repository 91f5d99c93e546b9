from start_end_methods.brute_force import TSPBruteForceStartEnd, brute_force
from start_end_methods.costs import INF, path_cost, saturating_add
from start_end_methods.errors import InvalidInput, NoPathFound, PathReconstructionFailed, TSPError
from start_end_methods.held_karp import TSPHeldKarpStartEnd, held_karp
from start_end_methods.reachability import check_reachable, isolated_nodes
from start_end_methods.solver import Algorithm, solve, solve_with_cost
