import os
import logging
import unittest
from unittest import mock
from qdistinguish.cli import main, build_parser

class CliTests(unittest.TestCase):
    def run_main(self, argv):
        lines = []
        with mock.patch.dict(os.environ, {}, clear=True):
            status = main(argv, print_func=lines.append)
        return status, lines

    def test_single_trial(self):
        status, lines = self.run_main(['--bits', '4', '--seed', '1'])
        self.assertEqual(status, 0)
        self.assertEqual(lines[0], 'Running detection for feistel function:')
        self.assertTrue(lines[1].startswith('  3-round Feistel'))
        self.assertEqual(lines[2], '')
        self.assertEqual(lines[3],
                         'Running detection for random permutation function:')
        self.assertEqual(len(lines), 5)

    def test_many_trials_summary(self):
        status, lines = self.run_main(['--bits', '3', '--trials', '4',
                                       '--seed', '2'])
        self.assertEqual(status, 0)
        self.assertTrue(lines[-2].startswith('feistel: 3-round Feistel x4'))
        self.assertTrue(lines[-1].startswith('random permutation: '))

    def test_deterministic_with_seed(self):
        argv = ['--bits', '4', '--trials', '3', '--seed', '9']
        self.assertEqual(self.run_main(argv), self.run_main(argv))

    def test_parser_rejects_unknown_sampler(self):
        with mock.patch('sys.stderr'), self.assertRaises(SystemExit):
            build_parser().parse_args(['--sampler', 'libquantum'])

    def test_verbose_logs_debug(self):
        with mock.patch('logging.basicConfig') as basic_config:
            self.run_main(['--bits', '2', '--seed', '3', '-v'])
        basic_config.assert_called_once()
        self.assertEqual(basic_config.call_args.kwargs['level'],
                         logging.DEBUG)

    def test_quiet_by_default(self):
        with mock.patch('logging.basicConfig') as basic_config:
            self.run_main(['--bits', '2', '--seed', '3'])
        basic_config.assert_not_called()
