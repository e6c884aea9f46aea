"""
Integration tests for the showcase core components.

These tests verify that the layers work together correctly:
- Text parsers turn form input into validated problem instances
- The expression sandbox accepts arithmetic and rejects everything else
- Objective registries resolve keys and free-form expressions
- Configs validate their options
- The algorithm registry dispatches, times and logs every run

Run with: pytest tests/test_integration.py -v
"""

import sys
import os
import json
import logging
import math
import numpy as np
import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core import (
    ExpressionError,
    GeneticAlgorithmConfig,
    GraphValidationError,
    InvalidInputError,
    ShowcaseError,
    TabuSearchConfig,
    TreeValidationError,
    UnknownAlgorithmError,
)
from core.runner import REGISTRY, get_algorithm, get_algorithms_by_category, list_algorithms, run_algorithm
from problems import (
    FITNESS_FUNCTIONS, OBJECTIVES, Grid, compile_expression, create_sample_graph,
    get_fitness_problem, get_objective_problem
)
from utils.logging_utils import verbosity_to_level
from utils.parsers import (
    load_text, parse_coordinate, parse_dimensions, parse_graph, parse_grid, parse_items,
    parse_tree_input, parse_vector
)


class TestParsers:
    """Tests for form/CLI text parsers."""

    def test_items_from_lines(self):
        items = parse_items("10,60\n# comment\n20, 100\n30 120\n")

        assert [(i.weight, i.value) for i in items] == [(10, 60), (20, 100), (30, 120)]

    def test_items_from_json(self):
        objects = parse_items('[{"weight": 1, "value": 2}, {"weight": 3, "value": 4}]')
        pairs = parse_items('[[1, 2], [3, 4]]')

        assert objects == pairs
        assert parse_items('') == []

    def test_items_errors(self):
        with pytest.raises(InvalidInputError):
            parse_items("10,60,5")
        with pytest.raises(InvalidInputError):
            parse_items('[{"weight": 1}]')
        with pytest.raises(InvalidInputError):
            parse_items("ten,60")
        with pytest.raises(InvalidInputError):
            parse_items('[[1, 2]')

    def test_vector_and_dimensions(self):
        assert parse_vector("1, 2 3").tolist() == [1.0, 2.0, 3.0]
        assert parse_vector("[0.5, -1]").tolist() == [0.5, -1.0]
        assert parse_dimensions("10, 30, 5, 60") == [10, 30, 5, 60]
        assert parse_coordinate("3, 4") == (3, 4)

        with pytest.raises(InvalidInputError):
            parse_vector("a, b")
        with pytest.raises(InvalidInputError):
            parse_vector("")
        with pytest.raises(InvalidInputError):
            parse_dimensions("10, 2.5")
        with pytest.raises(InvalidInputError):
            parse_coordinate("1, 2, 3")

    def test_tree_input(self):
        tree = parse_tree_input('{"children": [{"value": 3}, {"children": [{"value": 5}]}]}')

        assert tree.count_nodes() == 4
        with pytest.raises(TreeValidationError):
            parse_tree_input('{"children": [')
        with pytest.raises(TreeValidationError):
            parse_tree_input('   ')

    def test_graph_input(self):
        graph = parse_graph(json.dumps(create_sample_graph().to_dict()))

        assert graph.start == 'A'
        assert graph.goal == 'H'
        with pytest.raises(GraphValidationError):
            parse_graph('not json')
        with pytest.raises(GraphValidationError):
            parse_graph('[1, 2]')

    def test_grid_input(self):
        grid = parse_grid("..#\n...\n")

        assert (grid.rows, grid.cols) == (2, 3)
        assert grid.walls() == [(2, 0)]
        with pytest.raises(InvalidInputError):
            parse_grid("...\n..")
        with pytest.raises(InvalidInputError):
            parse_grid(".x.")
        with pytest.raises(InvalidInputError):
            parse_grid("")

    def test_load_text(self, tmp_path):
        path = tmp_path / 'items.txt'
        path.write_text("1,2\n", encoding='utf-8')

        assert load_text(path) == "1,2\n"
        with pytest.raises(InvalidInputError):
            load_text(tmp_path / 'missing.txt')


class TestExpressionSandbox:
    """Tests for the free-form objective sandbox."""

    def test_scalar_expression(self):
        f = compile_expression('x * sin(x)')
        assert f(2.0) == pytest.approx(2.0 * math.sin(2.0))

    def test_vector_expression_with_math_prefix(self):
        f = compile_expression('x[0] * Math.sin(x[0]) + x[1] * Math.cos(x[1])')
        assert f(np.array([1.0, 2.0])) == pytest.approx(math.sin(1.0) + 2.0 * math.cos(2.0))

    def test_constants_and_functions(self):
        assert compile_expression('pi * 2')(0.0) == pytest.approx(2 * math.pi)
        assert compile_expression('max(x, 3) - abs(-x)')(1.0) == pytest.approx(2.0)
        assert compile_expression('x[-1] ** 2')(np.array([1.0, 4.0])) == pytest.approx(16.0)

    def test_division_by_zero_is_infinite(self):
        assert math.isinf(compile_expression('1 / x')(0.0))

    @pytest.mark.parametrize('text', [
        "__import__('os')",
        'x.real',
        'y + 1',
        'lambda: 1',
        '[i for i in x]',
        'x ^ 2',
        "'abc'",
        'True',
        'x[0.5]',
        'x[x]',
        'sin(x=1)',
        'open(x)',
        '__builtins__',
        'x if x else 1',
        'x < 1',
    ])
    def test_rejected(self, text):
        with pytest.raises(ExpressionError):
            compile_expression(text)

    @pytest.mark.parametrize('text', ['sin()', 'min()', 'pow(x)', 'cos(x, 1)', 'round(x, 1, 2)'])
    def test_wrong_argument_count(self, text):
        with pytest.raises(ExpressionError, match='argument'):
            compile_expression(text)

    def test_runtime_failures_are_expression_errors(self):
        assert compile_expression('min(x[0], x[1], 5)')(np.array([3.0, 4.0])) == 3.0

        with pytest.raises(ExpressionError):
            compile_expression('x * 2')(np.array([1.0, 2.0]))
        with pytest.raises(ExpressionError):
            compile_expression('min(x)')(2.0)

    def test_empty_and_malformed(self):
        with pytest.raises(ExpressionError):
            compile_expression('')
        with pytest.raises(ExpressionError):
            compile_expression('x +')

    def test_index_out_of_range(self):
        f = compile_expression('x[5]')
        with pytest.raises(ExpressionError):
            f(np.array([1.0, 2.0]))

    def test_error_hierarchy(self):
        assert issubclass(ExpressionError, InvalidInputError)
        assert issubclass(InvalidInputError, ValueError)
        assert issubclass(InvalidInputError, ShowcaseError)


class TestObjectives:
    """Tests for the fitness and objective registries."""

    def test_registered_fitness(self):
        problem = get_fitness_problem('x_sin_x')

        assert problem.problem_type == 'fitness'
        assert problem.evaluate(2.0) == pytest.approx(2.0 * math.sin(2.0))
        assert problem.get_evaluation_count() == 1

    def test_registered_objective(self):
        problem = get_objective_problem('sin_cos')

        assert problem.problem_type == 'objective'
        assert problem.evaluate([0.0, 0.0]) == 0.0
        assert get_objective_problem('neg_sphere').evaluate([1.0, 2.0]) == -5.0
        assert get_objective_problem('neg_rastrigin').evaluate([0.0, 0.0]) == pytest.approx(0.0)

    def test_expression_fallback(self):
        problem = get_fitness_problem('-(x - 3) ** 2')

        assert problem.name == 'expression'
        assert problem.evaluate(3.0) == 0.0
        assert problem.evaluate(5.0) == -4.0

    def test_every_registered_function_evaluates(self):
        for key in FITNESS_FUNCTIONS:
            assert math.isfinite(get_fitness_problem(key).evaluate(1.5))
        for key in OBJECTIVES:
            assert math.isfinite(get_objective_problem(key).evaluate([0.5, 1.5]))

    def test_empty_input(self):
        with pytest.raises(InvalidInputError):
            get_fitness_problem('')
        with pytest.raises(InvalidInputError):
            get_objective_problem('  ')


class TestConfig:
    """Tests for algorithm configs."""

    def test_defaults(self):
        config = TabuSearchConfig()
        assert config.max_iterations == 100
        assert config.tabu_list_size == 10
        assert config.neighborhood_size == 20
        assert GeneticAlgorithmConfig().population_size == 100

    def test_from_dict(self):
        config = GeneticAlgorithmConfig.from_dict({'generations': 5, 'mutation_rate': 0.2})

        assert config.generations == 5
        assert config.to_dict()['mutation_rate'] == 0.2
        assert GeneticAlgorithmConfig.from_dict(config.to_dict()) == config

    def test_unknown_option(self):
        with pytest.raises(InvalidInputError) as exc_info:
            TabuSearchConfig.from_dict({'temperature': 1.0})
        assert 'temperature' in str(exc_info.value)

    def test_invalid_values(self):
        with pytest.raises(InvalidInputError):
            TabuSearchConfig.from_dict({'tabu_list_size': 0})
        with pytest.raises(InvalidInputError):
            GeneticAlgorithmConfig.from_dict({'mutation_rate': -0.1})


class TestRunner:
    """Tests for the algorithm registry and dispatcher."""

    def test_registry_keys(self):
        assert all(key == info.key for key, info in REGISTRY.items())
        assert {'tic_tac_toe', 'alpha_beta', 'astar', 'best_first_search', 'branch_and_bound',
                'tabu_search', 'genetic_algorithm', 'n_queens', 'matrix_chain',
                'polynomial'} <= set(REGISTRY)

    def test_categories(self):
        by_category = get_algorithms_by_category()

        assert [info.key for info in by_category['Optimization']] == ['tabu_search', 'genetic_algorithm']
        assert len(list_algorithms()) == len(REGISTRY)
        assert list_algorithms('Search') == by_category['Search']

    def test_unknown_algorithm(self):
        with pytest.raises(UnknownAlgorithmError) as exc_info:
            get_algorithm('bogo_sort')

        assert 'Available' in str(exc_info.value)
        assert isinstance(exc_info.value, KeyError)

    def test_bad_parameters(self):
        with pytest.raises(InvalidInputError):
            run_algorithm('n_queens', size=4)
        with pytest.raises(InvalidInputError):
            run_algorithm('tabu_search', temperature=3)

    @pytest.mark.parametrize('objective, initial', [
        ('sin()', '1, 2'),
        ('min()', '1, 2'),
        ('x * 2', '1, 2'),
        ('sin_cos', '1'),
    ])
    def test_bad_objectives_stay_in_error_taxonomy(self, objective, initial):
        with pytest.raises(ShowcaseError):
            run_algorithm('tabu_search', objective=objective, initial_solution=initial)

    def test_tic_tac_toe(self):
        record = run_algorithm('tic_tac_toe', board='XX.OO....')

        assert record.result['move'] == 2
        assert record.result['winner'] is None

        finished = run_algorithm('tic_tac_toe', board='XXXOO....')
        assert finished.result['winner'] == 'X'
        assert finished.result['move'] == -1

    def test_alpha_beta(self):
        text = '{"children": [{"children": [{"value": 3}, {"value": 12}]}, {"children": [{"value": 2}, {"value": 4}]}]}'
        result = run_algorithm('alpha_beta', tree=text).result

        assert result['value'] == result['minimax_value'] == 3
        assert result['pruned'] == 1
        assert result['total_nodes'] == 7

    def test_astar(self):
        result = run_algorithm('astar', grid=Grid.empty(4, 4), start=[0, 0], goal=[3, 3]).result
        assert result.cost == 6

    def test_best_first_search(self):
        text = json.dumps(create_sample_graph().to_dict())
        result = run_algorithm('best_first_search', graph=text).result

        assert result.path == ['A', 'B', 'E', 'H']
        assert result.total_cost == 19

    def test_branch_and_bound(self):
        result = run_algorithm('branch_and_bound', items="10,60\n20,100\n30,120", capacity=50).result
        assert result.max_value == 220

    def test_tabu_search(self):
        first = run_algorithm('tabu_search', initial_solution='0, 0', seed=4, max_iterations=15).result
        second = run_algorithm('tabu_search', initial_solution='0, 0', seed=4, max_iterations=15).result

        assert first.iterations_performed == 15
        assert first.best_objective_value == second.best_objective_value

    def test_tabu_search_with_expression(self):
        result = run_algorithm('tabu_search', objective='-(x[0] - 1) ** 2',
                               initial_solution='0', seed=0, max_iterations=50, step=0.2).result
        assert result.best_objective_value > -1.0

    def test_genetic_algorithm(self):
        result = run_algorithm('genetic_algorithm', fitness='negative_parabola', seed=1,
                               population_size=20, generations=10).result

        assert len(result.history) == 10
        assert result.best_fitness <= 0.0

    def test_symbolic(self):
        assert run_algorithm('n_queens', n=6).result.total_solutions == 4
        assert run_algorithm('matrix_chain', dimensions='10, 30, 5, 60').result.min_multiplications == 4500

        poly = run_algorithm('polynomial', first='x + 1', second='x - 1', operation='multiply').result
        assert poly['formatted'] == 'x^2-1'
        assert run_algorithm('polynomial', first='3x^2 + 2x', operation='derivative').result['formatted'] == '6x+2'

        with pytest.raises(InvalidInputError):
            run_algorithm('polynomial', first='x', second='x', operation='divide')

    def test_run_is_logged(self, caplog):
        with caplog.at_level(logging.INFO, logger='core.runner'):
            record = run_algorithm('n_queens', n=4)

        assert record.elapsed >= 0.0
        assert any('finished in' in message for message in caplog.messages)


class TestLoggingUtils:
    """Tests for CLI verbosity mapping."""

    def test_levels(self):
        assert verbosity_to_level() == logging.WARNING
        assert verbosity_to_level(1) == logging.INFO
        assert verbosity_to_level(2) == logging.DEBUG
        assert verbosity_to_level(2, quiet=True) == logging.ERROR


def run_all_tests():
    """Run all tests and print results."""
    print("=" * 60)
    print("Showcase Integration Test Suite")
    print("=" * 60)

    test_classes = [
        TestParsers,
        TestExpressionSandbox,
        TestObjectives,
        TestConfig,
        TestRunner,
        TestLoggingUtils,
    ]

    total_tests = 0
    passed_tests = 0
    failed_tests = []

    for test_class in test_classes:
        print(f"\n{test_class.__name__}")
        print("-" * 40)

        for method_name in dir(test_class):
            method = getattr(test_class, method_name)
            # Fixture- and parameter-driven tests only run under pytest
            if not method_name.startswith('test_') or method.__code__.co_argcount > 1:
                continue
            total_tests += 1
            try:
                getattr(test_class(), method_name)()
                print(f"  ✓ {method_name}")
                passed_tests += 1
            except Exception as e:
                print(f"  ✗ {method_name}")
                print(f"    Error: {e}")
                failed_tests.append((test_class.__name__, method_name, str(e)))

    print("\n" + "=" * 60)
    print(f"Results: {passed_tests}/{total_tests} tests passed")
    print("=" * 60)

    return len(failed_tests) == 0


if __name__ == '__main__':
    success = run_all_tests()
    exit(0 if success else 1)
