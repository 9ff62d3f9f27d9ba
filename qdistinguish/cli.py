"""
Command line driver. Builds a 3-round Feistel network whose round function is
a random permutation table (a minimal Pearson hash), plus a random permutation
on full blocks, and runs the distinguisher against each::

    python -m qdistinguish --bits 6 --trials 10
"""

import logging
from argparse import ArgumentParser
from collections import Counter
from typing import List, Optional

import numpy as np

from .config import DistinguisherConfig
from .distinguish import FeistelDistinguisher, Verdict
from .feistel import FeistelNetwork, random_keys, random_permutation_table, \
                     table_round_function, permutation_oracle
from .sampling import get_sampler, sampler_names

def run_trials(name, oracle, n_bits, trials, config, rng, print_func=print):
    """
    Run ``trials`` independent detections against ``oracle`` (fresh masks and
    a fresh solver each time) and return a ``Counter`` of verdicts.
    """
    print_func('Running detection for {} function:'.format(name))
    tally = Counter()
    sampler = get_sampler(config.sampler, rng=rng)
    distinguisher = FeistelDistinguisher(oracle, n_bits, sampler=sampler,
                                         rng=rng, config=config)
    for _ in range(trials):
        outcome = distinguisher.run()
        print_func('  ' + outcome.describe())
        tally[outcome.verdict] += 1
    return tally

def build_parser() -> ArgumentParser:
    parser = ArgumentParser(prog='qdistinguish', description=__doc__)
    parser.add_argument('--bits', '-n',
                        type=int,
                        default=8,
                        help='Width of one half of a block (default: 8)')
    parser.add_argument('--rounds', '-r',
                        type=int,
                        default=3,
                        help='Rounds in the Feistel network (default: 3)')
    parser.add_argument('--trials', '-t',
                        type=int,
                        default=1,
                        help='Detections per function (default: 1)')
    parser.add_argument('--seed', '-s',
                        type=int,
                        default=None,
                        help='Random seed. The default is nondeterministic.')
    parser.add_argument('--sampler',
                        choices=sampler_names(),
                        default=None,
                        help='How to run Simon\'s circuit. The default is '
                             'exact classical sampling (walsh).')
    parser.add_argument('--max-rejections',
                        type=int,
                        default=None,
                        help='Give up after this many inconsistent samples')
    parser.add_argument('--verbose', '-v',
                        action='store_true',
                        help='Log solver rows, state changes and verdicts')
    return parser

def main(argv: Optional[List[str]] = None, print_func=print) -> int:
    args = build_parser().parse_args(argv)

    config = DistinguisherConfig.from_env().with_overrides(
        sampler=args.sampler, seed=args.seed,
        max_rejections=args.max_rejections)
    if args.verbose or config.debug:
        logging.basicConfig(level=logging.DEBUG,
                            format='%(levelname)s %(name)s: %(message)s')

    n_bits = args.bits
    rng = np.random.default_rng(config.seed)

    round_table = random_permutation_table(1 << n_bits, rng)
    network = FeistelNetwork(table_round_function(round_table),
                             random_keys(args.rounds, n_bits, rng), n_bits)
    random_fn = permutation_oracle(
        random_permutation_table(1 << (2*n_bits), rng))

    feistel_tally = run_trials('feistel', network, n_bits, args.trials,
                               config, rng, print_func)
    print_func('')
    random_tally = run_trials('random permutation', random_fn, n_bits,
                              args.trials, config, rng, print_func)

    if args.trials > 1:
        print_func('')
        for name, tally in (('feistel', feistel_tally),
                            ('random permutation', random_tally)):
            print_func('{}: {}'.format(name, ', '.join(
                '{} x{}'.format(verdict.value, tally[verdict])
                for verdict in Verdict if tally[verdict])))
    return 0
