import unittest
from collections import Counter

import numpy as np

from TruthModel.random_graph import RandomGraphError, random_bipartite_graph


class TestRandomBipartiteGraph(unittest.TestCase):
    def test_degrees_are_respected(self):
        left, right = [2, 4, 6], [2, 2, 2, 2, 2, 2]
        edges = random_bipartite_graph(left, right, np.random.default_rng(0))
        self.assertEqual(len(edges), 12)
        self.assertEqual(len(set(edges)), 12)

        left_count = Counter(l for l, _ in edges)
        right_count = Counter(r for _, r in edges)
        self.assertEqual([left_count[i] for i in range(3)], left)
        self.assertEqual([right_count[j] for j in range(6)], right)

    def test_seeded_graphs_repeat(self):
        a = random_bipartite_graph([3, 3], [2, 2, 2], np.random.default_rng(5))
        b = random_bipartite_graph([3, 3], [2, 2, 2], np.random.default_rng(5))
        self.assertEqual(a, b)

    def test_zero_degree(self):
        with self.assertRaisesRegex(RandomGraphError, "Total node degree is zero"):
            random_bipartite_graph([0, 0], [0])

    def test_unbalanced_degrees(self):
        with self.assertRaisesRegex(RandomGraphError, "Total left degree 3 != total right degree 2"):
            random_bipartite_graph([1, 2], [1, 1])

    def test_impossible_simple_graph(self):
        # node 0 would need two parallel edges to node 0
        with self.assertRaisesRegex(RandomGraphError, "Could not find a random graph"):
            random_bipartite_graph([2], [2], np.random.default_rng(1), max_attempts=3)


if __name__ == "__main__":
    unittest.main()
