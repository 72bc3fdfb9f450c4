"""
Factor graph: a bipartite index between random variables and factors.

The joint score of the graph is the product of its factor scores, reported
as a sum of natural logs.  Each variable keeps its own list of incident
factors, so scoring one variable never rescans the whole graph.
"""

import math
from typing import Dict, Iterable, List

import matplotlib.pyplot as plt
import networkx as nx

from Distributions.errors import NotInGraphError
from FactorGraph_EM.factor import Factor
from FactorGraph_EM.variable import RandomVariable


def log_score(score: float) -> float:
    """Natural log of a factor score, with log(0) = -inf."""
    if score <= 0:
        return -math.inf
    return math.log(score)


class FactorGraph:
    def __init__(self):
        self.factors: List[Factor] = []
        # insertion-ordered: variables appear in the order first seen
        self._adjacency: Dict[RandomVariable, List[Factor]] = {}

    def __repr__(self):
        return (f"FactorGraph(vars={len(self._adjacency)}, "
                f"factors={len(self.factors)})")

    def __contains__(self, var: RandomVariable) -> bool:
        return var in self._adjacency

    # -- construction --------------------------------------------------------

    def add_factor(self, factor: Factor) -> None:
        """
        Add a factor and index it under each adjacent variable.  Adding the
        same factor twice counts it twice.
        """
        self.factors.append(factor)
        for var in factor.adjacent():
            self._adjacency.setdefault(var, []).append(factor)

    def add_factors(self, factors: Iterable[Factor]) -> None:
        for factor in factors:
            self.add_factor(factor)

    # -- adjacency -----------------------------------------------------------

    @property
    def variables(self) -> List[RandomVariable]:
        return list(self._adjacency)

    def has_variable(self, var: RandomVariable) -> bool:
        return var in self._adjacency

    def adj_to_factor(self, factor: Factor) -> List[RandomVariable]:
        return factor.adjacent()

    def adj_to_variable(self, var: RandomVariable) -> List[Factor]:
        try:
            return self._adjacency[var]
        except KeyError:
            raise NotInGraphError(var) from None

    # -- scoring -------------------------------------------------------------

    def score_var(self, var: RandomVariable) -> float:
        """Log score restricted to the factors touching *var*."""
        return sum(log_score(f.score()) for f in self.adj_to_variable(var))

    def score(self) -> float:
        """Log score of the whole graph."""
        return sum(log_score(f.score()) for f in self.factors)

    # -- export --------------------------------------------------------------

    def to_networkx(self) -> nx.Graph:
        """
        Bipartite networkx view: variable nodes are keyed ("var", position)
        and factor nodes ("factor", position), in insertion order.
        """
        G = nx.Graph()
        keys = {}
        for i, var in enumerate(self._adjacency):
            keys[var] = ("var", i)
            G.add_node(keys[var], bipartite=0, label=repr(var), value=var.val())
        for i, factor in enumerate(self.factors):
            G.add_node(("factor", i), bipartite=1, label=type(factor).__name__,
                       score=factor.score())
            for var in factor.adjacent():
                G.add_edge(keys[var], ("factor", i))
        return G

    def visualize(self, title: str = "Factor Graph",
                  output_file: str = "factor_graph.png") -> str:
        """
        Draw the graph to *output_file*.
        - Variable nodes: circles coloured by current value (Red=0, Green=1)
        - Factor nodes: small grey squares
        """
        G = self.to_networkx()
        var_nodes = [n for n, d in G.nodes(data=True) if d["bipartite"] == 0]
        factor_nodes = [n for n, d in G.nodes(data=True) if d["bipartite"] == 1]
        values = [min(1.0, max(0.0, G.nodes[n]["value"])) for n in var_nodes]

        plt.figure(figsize=(10, 8))
        pos = nx.spring_layout(G, seed=0)
        nodes = nx.draw_networkx_nodes(G, pos, nodelist=var_nodes,
                                       node_color=values, cmap=plt.cm.RdYlGn,
                                       vmin=0.0, vmax=1.0, node_size=600,
                                       edgecolors="black")
        nx.draw_networkx_nodes(G, pos, nodelist=factor_nodes, node_shape="s",
                               node_color="lightgray", node_size=150)
        nx.draw_networkx_edges(G, pos, edge_color="gray")
        nx.draw_networkx_labels(G, pos, {n: G.nodes[n]["label"] for n in var_nodes},
                                font_size=8)

        if var_nodes:
            plt.colorbar(nodes, label="Current value")
        plt.title(title)
        plt.axis("off")
        plt.savefig(output_file)
        plt.close()
        return output_file
