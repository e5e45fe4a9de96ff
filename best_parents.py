#!/usr/bin/env python3
"""
Learn a Bayesian network structure from a discrete CSV file and write it as a .gph edge list.

How to run: python best_parents.py data/small.csv small.gph --bounded parents --max-degree 2
"""

import argparse
import logging
import sys
import time

import matplotlib.pyplot as plt
import networkx as nx

from bn_data import DiscreteDataset
from bn_errors import StructureSearchError
from bn_scoring import bayesian_score
from search_configs import BOUNDED_ROLES, DEFAULT, PRESETS
from structure_learning import learn_structure


def write_gph(dag, idx2names, filename):
    with open(filename, 'w') as f:
        for edge in dag.edges():
            f.write("{}, {}\n".format(idx2names[edge[0]], idx2names[edge[1]]))


def write_dot(dag, idx2names, filename):
    with open(filename, "w") as out:
        out.write('digraph G {\n')
        out.write('  rankdir=LR;\n')                      #left->right layering
        out.write('  node  [shape=box, style=rounded, fontname="Helvetica"];\n')
        out.write('  edge  [arrowsize=0.8];\n')
        for u, v in dag.edges():
            out.write(f'  "{idx2names[u]}" -> "{idx2names[v]}";\n')
        out.write('}\n')


def plot_network(named_dag, filename):
    plt.figure(figsize=(8, 6))
    pos = nx.spring_layout(named_dag, seed=0)
    nx.draw_networkx_nodes(named_dag, pos, node_size=900)
    nx.draw_networkx_labels(named_dag, pos, font_size=9)
    nx.draw_networkx_edges(named_dag, pos, arrows=True, arrowstyle='-|>', arrowsize=12)
    plt.axis('off')
    plt.tight_layout()
    plt.savefig(filename, dpi=200)
    plt.close()


def compute(infile, outfile, config, check_cycles=False, dot_file=None, plot=False):
    dataset = DiscreteDataset.from_csv(infile) #course data is 1-based
    idx2names = dict(enumerate(dataset.names)) #maps node IDs to variable names (i.e. 0 --> "age")

    start_time = time.time()
    graph, result = learn_structure(dataset, check_cycles=check_cycles, **config)
    runtime = time.time() - start_time

    write_gph(graph.dag, idx2names, outfile)
    if dot_file:
        write_dot(graph.dag, idx2names, dot_file)
    if plot:
        plot_network(graph.named_dag(), outfile.rsplit('.', 1)[0] + '.png')

    score = bayesian_score(dataset, graph)
    print(f"Structure search finished ({result.bounded} bounded by {result.max_degree}). "
          f"Bayesian score = {score:.2f}")
    print(f"Runtime = {runtime:.2f} seconds")
    print(f"Graph written to {outfile}.")
    for rule, edge in zip(result.rules(dataset.names), result.edges):
        print(f"  {rule}  (H={edge.entropy:.4f} bits)")
    if result.cycle is not None:
        print(f"Warning: directed cycle {[(idx2names[u], idx2names[v]) for u, v in result.cycle]}")
    return graph, result


def parse_args(argv=None):
    p = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    p.add_argument("infile", help="CSV of discrete values, one column per variable")
    p.add_argument("outfile", help="where to write the .gph edge list")
    p.add_argument("--preset", choices=sorted(PRESETS), help="start from a named configuration")
    p.add_argument("--bounded", choices=BOUNDED_ROLES, help="which degree to cap")
    p.add_argument("--max-degree", type=int, help="cap on parents or children per node")
    p.add_argument("--min-gain", type=float,
                   help="drop candidates whose information gain (bits) is not above this")
    p.add_argument("--no-gain-filter", action="store_true", help="rank every candidate edge")
    p.add_argument("--check-cycles", action="store_true", help="report a directed cycle if one appears")
    p.add_argument("--dot", help="also write a Graphviz .dot file here")
    p.add_argument("--plot", action="store_true", help="save a .png drawing next to the .gph file")
    p.add_argument("-v", "--verbose", action="count", default=0)
    return p.parse_args(argv)


def build_config(args):
    config = dict(PRESETS[args.preset] if args.preset else DEFAULT)
    if args.bounded is not None:
        config["bounded"] = args.bounded
    if args.max_degree is not None:
        config["max_degree"] = args.max_degree
    if args.min_gain is not None:
        config["min_information_gain"] = args.min_gain
    if args.no_gain_filter:
        config["min_information_gain"] = None
    return config


def main(argv=None):
    args = parse_args(argv)
    level = logging.WARNING - 10 * min(args.verbose, 2)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        compute(args.infile, args.outfile, build_config(args),
                check_cycles=args.check_cycles, dot_file=args.dot, plot=args.plot)
    except StructureSearchError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
