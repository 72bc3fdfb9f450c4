import unittest
from collections import Counter

import numpy as np

from TruthModel.multiple_bsc import MultipleBSCModel
from TruthModel.synthetic import simulate_crowd, spread


class TestSimulateCrowd(unittest.TestCase):
    def test_spread(self):
        self.assertEqual(spread(10, 4), [3, 3, 2, 2])
        self.assertEqual(sum(spread(120, 7)), 120)

    def test_shape_of_the_data(self):
        data = simulate_crowd(20, 5, 3, rng=np.random.default_rng(1))
        self.assertEqual(len(data.truth), 20)
        self.assertEqual(len(data.noise), 5)
        self.assertEqual(len(data.observations), 60)

        per_item = Counter(item for item, _, _ in data.observations)
        self.assertEqual(set(per_item.values()), {3})
        per_channel = Counter(channel for _, channel, _ in data.observations)
        self.assertEqual(sorted(per_channel.values()), [12] * 5)
        for rate in data.noise.values():
            self.assertTrue(1e-3 <= rate <= 1 - 1e-3)

    def test_noiseless_channels_report_the_truth(self):
        data = simulate_crowd(10, 3, 2, noise_alpha=1e-3, noise_beta=1e3,
                              rng=np.random.default_rng(2), noise_floor=0.0)
        for item, _, value in data.observations:
            self.assertEqual(value, data.truth[item])

    def test_load_and_accuracy(self):
        data = simulate_crowd(10, 4, 2, rng=np.random.default_rng(3))
        model = MultipleBSCModel()
        data.load(model)
        self.assertEqual(len(model.factor_graph.factors), 20)
        self.assertEqual(data.accuracy(data.truth), 1.0)
        flipped = {item: not value for item, value in data.truth.items()}
        self.assertEqual(data.accuracy(flipped), 0.0)


if __name__ == "__main__":
    unittest.main()
