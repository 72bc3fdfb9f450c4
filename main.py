"""
bscem - run expectation maximization to infer the noise of binary symmetric
channels and the truth they report on, for crowdsourced document preferences.
"""

import argparse
import logging
import sys

import numpy as np

from TruthModel.config import EMParams
from TruthModel.csv_parser import load_preferences, load_qrel
from TruthModel.evaluation import accuracy_reporter, baselines
from TruthModel.multiple_bsc import MultipleBSCModel
from TruthModel.multiple_bsc_pair import MultipleBSCPairModel

log = logging.getLogger("bscem")


def build_model(prefs, pair: bool, params: EMParams):
    """One BSC per worker, or one BSC pair per (question, worker)."""
    if pair:
        model = MultipleBSCPairModel(params)
        for question, worker, is_lt in prefs.judgments:
            if not model.has_channel(question, worker):
                model.add_channel(question, params.initial_noise, worker, params.initial_noise)
            model.add_observation(question, question, worker, is_lt)
    else:
        model = MultipleBSCModel(params)
        for question, worker, is_lt in prefs.judgments:
            if not model.has_channel(worker):
                model.add_channel(worker, params.initial_noise)
            model.add_observation(question, worker, is_lt)
    return model


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="bscem",
        description="Infer parameters and truth for binary symmetric channels with EM")
    parser.add_argument("prefs", help="A CSV file containing channel output")
    parser.add_argument("qrel", help="The QREL containing gold standard assessments")
    parser.add_argument("research_task", help="The research task to assess")
    parser.add_argument("topic", help="The topic to assess")
    parser.add_argument("--baseline", action="store_true",
                        help="Use the majority vote and const-resp models")
    parser.add_argument("--pair", action="store_true", help="Use the BSCPair model")
    parser.add_argument("--soft", action="store_true",
                        help="Use soft assignments during inference")
    parser.add_argument("--max-rounds", type=int, default=0,
                        help="Bound on EM rounds (default: 0, unbounded)")
    parser.add_argument("--tolerance", type=float, default=1e-3,
                        help="Stop when a round improves the score by no more (default: 1e-3)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for the random baseline")
    parser.add_argument("--plot", metavar="PNG", default=None,
                        help="Draw the trained factor graph to this file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log every EM stage")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s [%(name)s] %(levelname)s: %(message)s'
    )

    print("Training", args.topic, "with baselines?", args.baseline,
          "with pair?", args.pair, "with soft?", args.soft)

    try:
        prefs = load_preferences(args.prefs, args.research_task, args.topic)
        qrel = load_qrel(args.qrel, prefs.topic_id)
    except (OSError, ValueError) as e:
        log.error(f"Could not load input: {e}")
        return 1

    print(prefs.num_pos, "Pos", prefs.num_neg, "Neg")

    if args.baseline:
        rng = np.random.default_rng(args.seed)
        for name, acc in baselines(prefs.majority, qrel, rng).items():
            print(f"{name} accuracy: {acc}")
        return 0

    params = EMParams(max_rounds=args.max_rounds, tolerance=args.tolerance,
                      soft_inputs=args.soft)
    print("Building model...")
    model = build_model(prefs, args.pair, params)
    result = model.em(callback=accuracy_reporter(qrel))
    log.info(f"{model!r}: {result}")

    if args.plot:
        model.factor_graph.visualize(title=f"Topic {args.topic}", output_file=args.plot)
        log.info(f"Factor graph saved to {args.plot}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
