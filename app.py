import json
import logging

import numpy as np
import pandas as pd
import altair as alt
import streamlit as st

# Core imports (assuming running from root)
from algorithms import check_winner, convert_to_board, evaluate_polynomial
from algorithms.matrix_chain import chain_shapes
from core import SHOWCASE_DEFAULTS, GridConfig, ShowcaseError
from core.runner import get_algorithm, get_algorithms_by_category, run_algorithm
from problems import (
    FITNESS_FUNCTIONS, OBJECTIVES, create_sample_graph, create_sample_items,
    create_sample_tree, generate_random_grid, get_fitness_problem
)
from utils.logging_utils import setup_logging
from utils.parsers import parse_coordinate, parse_dimensions, parse_graph, parse_items

setup_logging(logging.INFO)
logger = logging.getLogger(__name__)

# Page Config
st.set_page_config(
    page_title="Algorithm Showcase",
    page_icon="🧮",
    layout="wide",
    initial_sidebar_state="expanded"
)

CUSTOM = "Custom expression"

GRID_COLORS = {
    'open': '#f5f5f5',
    'wall': '#37474f',
    'explored': '#90caf9',
    'path': '#ffb300',
    'start': '#43a047',
    'goal': '#e53935',
}


# --- Helper Functions ---

def run_with_spinner(key, **params):
    """Run a registered algorithm with a spinner; errors propagate to the page."""
    with st.spinner(f"Running {get_algorithm(key).label}..."):
        return run_algorithm(key, **params)


def show_error(key, error):
    logger.warning("%s rejected input: %s", key, error)
    st.error(str(error))


def convergence_chart(history, x, series, y_title):
    """Line chart of several history columns against x."""
    df = pd.DataFrame(history)[[x] + list(series)]
    df = df.melt(id_vars=x, var_name='Series', value_name='Value')
    df['Series'] = df['Series'].map(series)

    return alt.Chart(df).mark_line().encode(
        x=alt.X(f'{x}:Q', title=x.replace('_', ' ').capitalize()),
        y=alt.Y('Value:Q', title=y_title, scale=alt.Scale(zero=False)),
        color=alt.Color('Series:N'),
        tooltip=['Series:N', f'{x}:Q', alt.Tooltip('Value:Q', format='.4f')]
    ).interactive()


def grid_chart(grid, result, start, goal):
    """Heatmap of walls, explored cells and the final path."""
    overlay = {pos: 'explored' for pos in result.explored}
    overlay.update({pos: 'path' for pos in result.path})
    overlay[start] = 'start'
    overlay[goal] = 'goal'

    cells = []
    for (y, x), wall in np.ndenumerate(grid.to_array()):
        state = 'wall' if wall else overlay.get((x, y), 'open')
        cells.append({'x': x, 'y': y, 'state': state})
    df = pd.DataFrame(cells)

    size = max(12, min(40, 480 // max(grid.rows, grid.cols)))
    return alt.Chart(df).mark_rect(stroke='white').encode(
        x=alt.X('x:O', axis=None),
        y=alt.Y('y:O', axis=None),
        color=alt.Color('state:N', scale=alt.Scale(
            domain=list(GRID_COLORS), range=list(GRID_COLORS.values())
        ), legend=alt.Legend(title=None, orient='bottom')),
        tooltip=['x', 'y', 'state']
    ).properties(width=size * grid.cols, height=size * grid.rows)


def queens_chart(solution, n):
    board = convert_to_board(solution, n)
    df = pd.DataFrame([
        {'row': r, 'col': c, 'shade': (r + c) % 2, 'piece': '♛' if board[r][c] == 'Q' else ''}
        for r in range(n) for c in range(n)
    ])
    base = alt.Chart(df).encode(x=alt.X('col:O', axis=None), y=alt.Y('row:O', axis=None))
    squares = base.mark_rect().encode(
        color=alt.Color('shade:N', scale=alt.Scale(range=['#f0d9b5', '#b58863']), legend=None)
    )
    pieces = base.mark_text(size=24).encode(text='piece:N')
    return (squares + pieces).properties(width=40 * n, height=40 * n)


def polynomial_chart(polynomials):
    """Plot named coefficient lists over [-5, 5]."""
    xs = np.linspace(-5, 5, 101)
    rows = [
        {'x': float(x), 'y': float(evaluate_polynomial(p, x)), 'Polynomial': name}
        for name, p in polynomials.items() for x in xs
    ]
    return alt.Chart(pd.DataFrame(rows)).mark_line().encode(
        x='x:Q',
        y=alt.Y('y:Q', title='p(x)'),
        color='Polynomial:N',
        tooltip=['Polynomial:N', 'x:Q', alt.Tooltip('y:Q', format='.3f')]
    ).interactive()


# --- Pages ---

def _ttt_engine_mark():
    return 'O' if st.session_state.ttt_human == 'X' else 'X'


def _ttt_engine_move():
    board = st.session_state.ttt_board
    record = run_algorithm('tic_tac_toe', board=board, mark=_ttt_engine_mark())
    if record.result['move'] >= 0:
        board[record.result['move']] = _ttt_engine_mark()


def _ttt_reset():
    st.session_state.ttt_board = [''] * 9
    # Engine opens when it plays X
    if st.session_state.ttt_human == 'O':
        _ttt_engine_move()


def _ttt_play(index):
    board = st.session_state.ttt_board
    if board[index] or check_winner(board):
        return
    board[index] = st.session_state.ttt_human
    if check_winner(board) is None:
        _ttt_engine_move()


def page_tic_tac_toe(info):
    if 'ttt_board' not in st.session_state:
        st.session_state.ttt_board = [''] * 9

    col_opts, col_reset = st.columns([3, 1])
    with col_opts:
        st.radio("You play", ['X', 'O'], key='ttt_human', horizontal=True, on_change=_ttt_reset)
    with col_reset:
        st.button("🔄 New Game", on_click=_ttt_reset, use_container_width=True)

    board = st.session_state.ttt_board
    winner = check_winner(board)

    for row in range(3):
        cols = st.columns([1, 1, 1, 5])
        for col in range(3):
            index = row * 3 + col
            cols[col].button(
                board[index] or " ",
                key=f"ttt_cell_{index}",
                on_click=_ttt_play,
                args=(index,),
                disabled=bool(board[index]) or winner is not None,
                use_container_width=True
            )

    if winner == 'draw':
        st.info("It's a draw.")
    elif winner == st.session_state.ttt_human:
        st.success("You win!")
    elif winner:
        st.warning(f"{winner} wins. The engine never loses.")


def page_alpha_beta(info):
    with st.form('alpha_beta_form'):
        tree_text = st.text_area(
            "Game tree (JSON)", json.dumps(create_sample_tree().to_dict(), indent=2), height=300
        )
        col1, col2, col3 = st.columns(3)
        full_depth = col1.checkbox("Search full depth", value=True)
        depth = col2.number_input("Depth limit", min_value=0, value=3, step=1)
        maximizing = col3.checkbox("Root is MAX", value=True)
        submitted = st.form_submit_button("▶️ Evaluate", type="primary")

    if not submitted:
        return
    try:
        record = run_with_spinner(
            info.key, tree=tree_text, depth=None if full_depth else int(depth), maximizing=maximizing
        )
    except ShowcaseError as e:
        show_error(info.key, e)
        return

    result = record.result
    kpi1, kpi2, kpi3, kpi4 = st.columns(4)
    kpi1.metric("Root Value", f"{result['value']:g}")
    kpi2.metric("Plain Minimax", f"{result['minimax_value']:g}")
    kpi3.metric("Visited / Total", f"{result['visited']} / {result['total_nodes']}")
    kpi4.metric("Pruned Subtrees", result['pruned'])

    if result['pruned_paths']:
        st.subheader("✂️ Pruned Subtrees")
        st.dataframe(pd.DataFrame({'Path': result['pruned_paths']}), use_container_width=True)


def page_astar(info):
    defaults: GridConfig = SHOWCASE_DEFAULTS['grid']
    with st.form('astar_form'):
        col1, col2, col3, col4 = st.columns(4)
        rows = col1.number_input("Rows", 1, 60, defaults.rows)
        cols = col2.number_input("Columns", 1, 60, defaults.cols)
        wall_probability = col3.slider("Wall Probability", 0.0, 0.9, defaults.wall_probability)
        seed = col4.number_input("Seed", 0, 10000, 42)

        col5, col6, col7 = st.columns(3)
        start_text = col5.text_input("Start (x, y)", "0, 0")
        goal_text = col6.text_input("Goal (x, y)", f"{defaults.cols - 1}, {defaults.rows - 1}")
        heuristic = col7.selectbox("Heuristic", ['manhattan', 'zero'])
        submitted = st.form_submit_button("🧭 Find Path", type="primary")

    if not submitted:
        return
    try:
        config = GridConfig.from_dict({
            'rows': int(rows), 'cols': int(cols), 'wall_probability': float(wall_probability)
        })
        start, goal = parse_coordinate(start_text), parse_coordinate(goal_text)
        grid = generate_random_grid(config.rows, config.cols, config.wall_probability, seed=int(seed))
        if grid.in_bounds(*start) and grid.in_bounds(*goal):
            grid = grid.with_open_cells(start, goal)
        record = run_with_spinner(info.key, grid=grid, start=start, goal=goal, heuristic=heuristic)
    except ShowcaseError as e:
        show_error(info.key, e)
        return

    result = record.result
    kpi1, kpi2, kpi3 = st.columns(3)
    kpi1.metric("Path Cost", result.cost if result.found else "—")
    kpi2.metric("Cells Expanded", len(result.explored))
    kpi3.metric("Time", f"{record.elapsed * 1000:.1f} ms")

    if not result.found:
        st.warning("No path exists between start and goal.")
    st.altair_chart(grid_chart(grid, result, start, goal))


def page_best_first_search(info):
    with st.form('bfs_form'):
        graph_text = st.text_area(
            "Graph (JSON)", json.dumps(create_sample_graph().to_dict(), indent=2), height=350
        )
        submitted = st.form_submit_button("🔎 Search", type="primary")

    if not submitted:
        return
    try:
        graph = parse_graph(graph_text)
        record = run_with_spinner(info.key, graph=graph)
    except ShowcaseError as e:
        show_error(info.key, e)
        return

    result = record.result
    if result is None:
        st.warning(f"Goal '{graph.goal}' is unreachable from '{graph.start}'.")
    else:
        kpi1, kpi2 = st.columns(2)
        kpi1.metric("Path", " → ".join(result.path))
        kpi2.metric("Total Cost", f"{result.total_cost:g}")
        st.caption("Expansion order: " + ", ".join(result.expanded))

    on_path = set(zip(result.path, result.path[1:])) if result else set()
    edges = pd.DataFrame([
        {'From': s, 'To': t, 'Cost': c, 'h(To)': graph.heuristics[t], 'On Path': (s, t) in on_path}
        for s, t, c in graph.edges()
    ])
    st.dataframe(edges, use_container_width=True)


def page_branch_and_bound(info):
    sample = "\n".join(f"{item.weight:g},{item.value:g}" for item in create_sample_items())
    with st.form('knapsack_form'):
        items_text = st.text_area("Items (weight,value per line or JSON)", sample, height=200)
        capacity = st.number_input("Capacity", min_value=0.0, value=50.0, step=1.0)
        submitted = st.form_submit_button("🎒 Solve", type="primary")

    if not submitted:
        return
    try:
        items = parse_items(items_text)
        record = run_with_spinner(info.key, items=items, capacity=capacity)
    except ShowcaseError as e:
        show_error(info.key, e)
        return

    result = record.result
    kpi1, kpi2, kpi3, kpi4 = st.columns(4)
    kpi1.metric("Max Value", f"{result.max_value:g}")
    kpi2.metric("Weight Used", f"{result.total_weight:g} / {capacity:g}")
    kpi3.metric("Nodes Explored", result.nodes_explored)
    kpi4.metric("Nodes Pruned", result.nodes_pruned)

    df = pd.DataFrame([
        {'Item': i, 'Weight': item.weight, 'Value': item.value,
         'Ratio': item.ratio, 'Selected': i in result.selected_indices}
        for i, item in enumerate(items)
    ])
    st.dataframe(df, use_container_width=True)

    if not df.empty:
        chart = alt.Chart(df).mark_bar().encode(
            x=alt.X('Item:O'),
            y=alt.Y('Value:Q'),
            color=alt.condition(alt.datum.Selected, alt.value('#43a047'), alt.value('#bdbdbd')),
            tooltip=['Item', 'Weight', 'Value', alt.Tooltip('Ratio:Q', format='.2f')]
        )
        st.altair_chart(chart, use_container_width=True)


def _function_picker(label, registry, default_custom):
    keys = list(registry) + [CUSTOM]
    choice = st.selectbox(
        label, keys,
        format_func=lambda k: k if k == CUSTOM else registry[k].label
    )
    custom = st.text_input("Expression", default_custom, help="e.g. x * sin(x); math functions only")
    return custom if choice == CUSTOM else choice


def page_tabu_search(info):
    defaults = SHOWCASE_DEFAULTS['tabu_search']
    with st.form('tabu_form'):
        objective = _function_picker("Objective", OBJECTIVES, "x[0] * sin(x[0]) + x[1] * cos(x[1])")
        col1, col2 = st.columns(2)
        initial_solution = col1.text_input("Initial Solution", "0, 0")
        neighbor_method = col2.selectbox(
            "Neighbor Method", ['continuousRandomWalk', 'permutationSwap', 'binaryFlip']
        )

        col3, col4, col5, col6, col7 = st.columns(5)
        max_iterations = col3.number_input("Iterations", 0, 5000, defaults.max_iterations)
        tabu_list_size = col4.number_input("Tabu List Size", 1, 500, defaults.tabu_list_size)
        neighborhood_size = col5.number_input("Neighborhood Size", 1, 500, defaults.neighborhood_size)
        step = col6.number_input("Step", 0.001, 10.0, defaults.step)
        seed = col7.number_input("Seed", 0, 10000, 42)
        submitted = st.form_submit_button("🚫 Run Tabu Search", type="primary")

    if not submitted:
        return
    try:
        record = run_with_spinner(
            info.key,
            objective=objective,
            initial_solution=initial_solution,
            seed=int(seed),
            max_iterations=int(max_iterations),
            tabu_list_size=int(tabu_list_size),
            neighborhood_size=int(neighborhood_size),
            neighbor_method=neighbor_method,
            step=float(step),
        )
    except ShowcaseError as e:
        show_error(info.key, e)
        return

    result = record.result
    kpi1, kpi2, kpi3 = st.columns(3)
    kpi1.metric("Best Objective", f"{result.best_objective_value:.4f}")
    kpi2.metric("Iterations", result.iterations_performed)
    kpi3.metric("Time", f"{record.elapsed:.2f}s")
    st.code(np.array2string(result.best_solution, precision=4), language=None)

    if result.iterations_performed < int(max_iterations):
        st.info("Stopped early: every sampled neighbor was tabu.")

    st.subheader("📈 Convergence")
    chart = convergence_chart(
        result.history, 'iteration',
        {'current_value': 'Current', 'best_value': 'Best so far'}, 'Objective'
    )
    st.altair_chart(chart, use_container_width=True)


def page_genetic_algorithm(info):
    defaults = SHOWCASE_DEFAULTS['genetic_algorithm']
    with st.form('ga_form'):
        fitness = _function_picker("Fitness Function", FITNESS_FUNCTIONS, "x * sin(x)")
        col1, col2, col3 = st.columns(3)
        population_size = col1.number_input("Population Size", 1, 1000, defaults.population_size)
        generations = col2.number_input("Generations", 0, 1000, defaults.generations)
        mutation_rate = col3.slider("Mutation Rate", 0.0, 1.0, defaults.mutation_rate)

        col4, col5, col6, col7 = st.columns(4)
        chromosome_length = col4.number_input("Chromosome Bits", 1, 52, defaults.chromosome_length)
        min_range = col5.number_input("Min x", value=defaults.min_range)
        max_range = col6.number_input("Max x", value=defaults.max_range)
        seed = col7.number_input("Seed", 0, 10000, 42)
        submitted = st.form_submit_button("🧬 Evolve", type="primary")

    if not submitted:
        return
    try:
        record = run_with_spinner(
            info.key,
            fitness=fitness,
            seed=int(seed),
            population_size=int(population_size),
            chromosome_length=int(chromosome_length),
            mutation_rate=float(mutation_rate),
            generations=int(generations),
            min_range=float(min_range),
            max_range=float(max_range),
        )
        problem = get_fitness_problem(fitness)
    except ShowcaseError as e:
        show_error(info.key, e)
        return

    result = record.result
    if not result.history:
        st.info("No generations were run.")
        return

    kpi1, kpi2, kpi3 = st.columns(3)
    kpi1.metric("Best Fitness", f"{result.best_fitness:.4f}")
    kpi2.metric("Best x", f"{result.best_solution:.4f}")
    kpi3.metric("Chromosome", "".join(str(b) for b in result.best_chromosome))

    col_conv, col_fn = st.columns(2)
    with col_conv:
        st.subheader("📈 Convergence")
        chart = convergence_chart(
            result.history, 'generation',
            {'generation_best': 'Generation best', 'generation_mean': 'Generation mean',
             'best_fitness': 'Best so far'}, 'Fitness'
        )
        st.altair_chart(chart, use_container_width=True)

    with col_fn:
        st.subheader("📉 Fitness Landscape")
        xs = np.linspace(float(min_range), float(max_range), 200)
        curve = pd.DataFrame({'x': xs, 'f(x)': [problem.evaluate(x) for x in xs]})
        best = pd.DataFrame({'x': [result.best_solution], 'f(x)': [result.best_fitness]})
        line = alt.Chart(curve).mark_line().encode(x='x:Q', y='f(x):Q')
        point = alt.Chart(best).mark_point(color='red', size=120, filled=True).encode(
            x='x:Q', y='f(x):Q', tooltip=['x', 'f(x)']
        )
        st.altair_chart(line + point, use_container_width=True)


def page_n_queens(info):
    n = st.slider("Board Size (n)", 1, 10, get_algorithm(info.key).defaults['n'])
    try:
        record = run_with_spinner(info.key, n=n)
    except ShowcaseError as e:
        show_error(info.key, e)
        return

    result = record.result
    st.metric("Solutions", result.total_solutions)
    if not result.solutions:
        st.warning(f"No way to place {n} non-attacking queens.")
        return

    index = 0
    if result.total_solutions > 1:
        index = st.slider("Solution #", 1, result.total_solutions, 1) - 1
    st.altair_chart(queens_chart(result.solutions[index], n))
    st.caption("Queen column per row: " + str(result.solutions[index]))


def page_matrix_chain(info):
    with st.form('matrix_chain_form'):
        dimensions = st.text_input("Dimensions", get_algorithm(info.key).defaults['dimensions'])
        submitted = st.form_submit_button("✖️ Optimize", type="primary")

    if not submitted:
        return
    try:
        record = run_with_spinner(info.key, dimensions=dimensions)
    except ShowcaseError as e:
        show_error(info.key, e)
        return

    result = record.result
    kpi1, kpi2 = st.columns(2)
    kpi1.metric("Scalar Multiplications", f"{result.min_multiplications:,}")
    kpi2.metric("Order", result.parenthesization)

    n = result.cost_table.shape[0]
    st.caption(" · ".join(chain_shapes(parse_dimensions(dimensions))))
    df = pd.DataFrame([
        {'i': f"A{i + 1}", 'j': f"A{j + 1}", 'cost': int(result.cost_table[i, j])}
        for i in range(n) for j in range(i, n)
    ])
    order = [f"A{k + 1}" for k in range(n)]
    heatmap = alt.Chart(df).mark_rect().encode(
        x=alt.X('j:O', sort=order),
        y=alt.Y('i:O', sort=order),
        color=alt.Color('cost:Q', scale=alt.Scale(scheme='viridis')),
        tooltip=['i', 'j', 'cost']
    )
    text = alt.Chart(df).mark_text(color='white').encode(
        x=alt.X('j:O', sort=order), y=alt.Y('i:O', sort=order), text='cost:Q'
    )
    st.altair_chart((heatmap + text).properties(width=60 * n, height=60 * n))


def page_polynomial(info):
    defaults = get_algorithm(info.key).defaults
    with st.form('polynomial_form'):
        col1, col2, col3 = st.columns([2, 2, 1])
        first = col1.text_input("P(x)", defaults['first'])
        second = col2.text_input("Q(x)", defaults['second'])
        operation = col3.selectbox("Operation", ['add', 'subtract', 'multiply', 'derivative'])
        submitted = st.form_submit_button("∑ Compute", type="primary")

    if not submitted:
        return
    try:
        record = run_with_spinner(info.key, first=first, second=second, operation=operation)
    except ShowcaseError as e:
        show_error(info.key, e)
        return

    result = record.result
    st.code(result['formatted'], language=None)
    curves = {'P(x)': result['first'], 'Result': result['result']}
    if result['second'] is not None:
        curves['Q(x)'] = result['second']
    st.altair_chart(polynomial_chart(curves), use_container_width=True)


PAGES = {
    'tic_tac_toe': page_tic_tac_toe,
    'alpha_beta': page_alpha_beta,
    'astar': page_astar,
    'best_first_search': page_best_first_search,
    'branch_and_bound': page_branch_and_bound,
    'tabu_search': page_tabu_search,
    'genetic_algorithm': page_genetic_algorithm,
    'n_queens': page_n_queens,
    'matrix_chain': page_matrix_chain,
    'polynomial': page_polynomial,
}


# --- UI Layout ---

with st.sidebar:
    st.header("🧮 Algorithms")
    by_category = get_algorithms_by_category()
    category = st.radio("Category", list(by_category))
    selected = st.radio(
        "Algorithm",
        [info.key for info in by_category[category]],
        format_func=lambda key: get_algorithm(key).label
    )

info = get_algorithm(selected)
st.title(info.label)
st.markdown(info.description)
st.divider()
PAGES[info.key](info)
