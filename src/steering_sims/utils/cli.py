import argparse
import json


def build_parser():
    parser = argparse.ArgumentParser(description='Headless steering simulation')
    parser.add_argument('--preset', type=str, default=None, metavar='PATH',
                        help='YAML preset to start from (default: built-in SimConfig defaults)')
    parser.add_argument('--exp_name', type=str, default='', metavar='N',
                        help='experiment name, used as the output sub-directory')
    parser.add_argument('--seed', type=int, default=1, metavar='N',
                        help='master random seed (default: 1)')
    parser.add_argument('--duration', type=float, default=10.0, metavar='T',
                        help='simulated time to run (default: 10.0)')
    parser.add_argument('--tick_rate', type=int, default=60, metavar='HZ',
                        help='ticks per unit of simulated time (default: 60)')
    parser.add_argument('--outdir', type=str, default='results', metavar='DIR',
                        help='directory for the final-frame plot (default: results)')
    # SimConfig overrides: None means "keep the preset's value"
    parser.add_argument('--n_agents', type=int, default=None, metavar='N',
                        help='number of randomly spawned agents')
    parser.add_argument('--width', type=float, default=None,
                        help='world width')
    parser.add_argument('--height', type=float, default=None,
                        help='world height')
    parser.add_argument('--sigma_v', type=float, default=None,
                        help='standard deviation of the initial velocity components')
    parser.add_argument('--behaviors', type=json.loads, default=None, metavar='JSON',
                        help='behaviors to apply, e.g. \'{"Flock": {}, "FollowFlowField": {"weight": 0.5}}\'')
    parser.add_argument('--neighbor_query', type=str, default=None,
                        help='BruteForceNeighbors or KDTreeNeighbors')
    parser.add_argument('--target', type=float, nargs=2, default=None, metavar=('X', 'Y'),
                        help='shared seek/flee target')
    parser.add_argument(
        "--log_interval",
        type=int,
        default=600,
        help="log progress every this many ticks (0 disables)",
    )
    parser.add_argument(
        "--plot",
        action='store_true',
        help="save a PNG of the final frame",
    )
    parser.add_argument(
        "--verbose",
        action='store_true',
        help="log at DEBUG level",
    )
    return parser


'''
usage: python scripts/main.py --preset presets/flow.yaml --seed 7 --duration 20 \
    --n_agents 50 --behaviors '{"Flock": {}, "FollowFlowField": {"weight": 0.5}}' --plot
'''
