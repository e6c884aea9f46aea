"""
Tests for the command-line runner.

Run with: pytest tests/test_cli.py -v
"""

import sys
import os
import json
import numpy as np
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from experiments.run_showcase import main, parse_args, to_jsonable


class TestArguments:
    """Tests for argument parsing."""

    def test_config_defaults_exposed(self):
        args = parse_args(['tabu_search'])

        assert args.max_iterations == 100
        assert args.tabu_list_size == 10
        assert args.neighbor_method == 'continuousRandomWalk'

    def test_config_override(self):
        args = parse_args(['genetic_algorithm', '--population-size', '12', '--mutation-rate', '0.05'])

        assert args.population_size == 12
        assert args.mutation_rate == 0.05

    def test_command_required(self):
        with pytest.raises(SystemExit):
            parse_args([])


class TestCommands:
    """End-to-end runs through main()."""

    def test_list(self, capsys):
        assert main(['list']) == 0
        out = capsys.readouterr().out

        assert 'n_queens' in out
        assert 'Optimization' in out

    def test_n_queens(self, capsys):
        assert main(['n_queens', '--n', '4', '--show', '1']) == 0
        out = capsys.readouterr().out

        assert '2 solutions for n=4' in out
        assert '. Q . .' in out

    def test_alpha_beta_sample(self, capsys):
        assert main(['alpha_beta']) == 0
        assert 'Value:   5' in capsys.readouterr().out

    def test_best_first_sample(self, capsys):
        assert main(['best_first_search']) == 0
        out = capsys.readouterr().out

        assert 'A -> B -> E -> H' in out
        assert 'Total cost: 19' in out

    def test_tic_tac_toe(self, capsys):
        assert main(['tic_tac_toe', '--board', 'XX.OO....']) == 0
        assert 'Best move for X: cell 2' in capsys.readouterr().out

    def test_astar_from_file(self, tmp_path, capsys):
        maze = tmp_path / 'maze.txt'
        maze.write_text("...\n.#.\n...\n", encoding='utf-8')

        assert main(['astar', '--grid-file', str(maze)]) == 0
        assert 'Path cost: 4' in capsys.readouterr().out

    def test_tabu_search(self, capsys):
        assert main(['tabu_search', '--max-iterations', '5', '--seed', '1']) == 0
        assert 'Iterations:     5' in capsys.readouterr().out

    def test_polynomial_json(self, capsys):
        assert main(['polynomial', 'x + 1', 'x - 1', '--operation', 'multiply', '--json']) == 0
        out = capsys.readouterr().out

        assert 'multiply: x^2-1' in out
        assert '"formatted": "x^2-1"' in out

    def test_output_file(self, tmp_path):
        out_path = tmp_path / 'results' / 'knapsack.json'

        assert main(['branch_and_bound', '--capacity', '50', '--output', str(out_path)]) == 0
        payload = json.loads(out_path.read_text(encoding='utf-8'))

        assert payload['algorithm'] == 'branch_and_bound'
        assert payload['result']['max_value'] == 220
        assert payload['result']['selected_indices'] == [1, 2]

    def test_invalid_input_exit_code(self):
        assert main(['matrix_chain', '--dimensions', '10']) == 2
        assert main(['tabu_search', '--tabu-list-size', '0']) == 2
        assert main(['polynomial', '3y']) == 2

    def test_missing_file_exit_code(self, tmp_path):
        assert main(['best_first_search', '--graph-file', str(tmp_path / 'nope.json')]) == 2


class TestJsonConversion:
    """Tests for result serialization."""

    def test_numpy_and_special_floats(self):
        assert to_jsonable(np.array([[1, 2], [3, 4]])) == [[1, 2], [3, 4]]
        assert to_jsonable(np.float64(2.5)) == 2.5
        assert to_jsonable(float('-inf')) == '-inf'
        assert to_jsonable({'path': [(0, 1)]}) == {'path': [[0, 1]]}


if __name__ == '__main__':
    exit(pytest.main([__file__, '-v']))
