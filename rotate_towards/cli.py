# rotate_towards/cli.py
"""
Command-line interface: load a scene file, run ticks, print rotator poses.
"""

import argparse
import json
import logging
import sys

from rotate_towards.core.config import RotateTowardsConfig
from rotate_towards.scene.loader import SceneLoader
from rotate_towards.simulator import Simulator
from rotate_towards.utils.errors import RefreshFailed, RotateTowardsError, error_dict, format_error
from rotate_towards.utils.logger import setup_logging

logger = logging.getLogger(__name__)


def _fmt(vector):
    return "(" + ", ".join(f"{c:+.4f}" for c in vector) + ")"


def print_state(state):
    """Print rotator poses in a readable format"""
    print(f"Time: {state['time']:.3f}s after {state['ticks']} tick(s)")
    if not state["rotators"]:
        print("No rotators in scene")
        return
    for name, pose in state["rotators"].items():
        print(f"{name} -> {pose['target']}")
        print(f"  Position: {_fmt(pose['position'])}")
        print(f"  Forward:  {_fmt(pose['forward'])}")
        print(f"  Up:       {_fmt(pose['up'])}")


def build_parser():
    parser = argparse.ArgumentParser(description="Rotate scene objects toward their targets")
    parser.add_argument('scene', help='Scene file (.yaml, .yml or .json)')
    parser.add_argument('--ticks', type=int, help='Number of ticks to run')
    parser.add_argument('--dt', type=float, help='Simulation time step in seconds')
    parser.add_argument('--refresh-descendants', action='store_true', default=None,
                        help='Also refresh world transforms below each rotated object')
    parser.add_argument('--json', action='store_true', help='Print state as JSON')
    parser.add_argument('--log-file', help='Log file or directory')
    parser.add_argument('--no-log-file', action='store_true', help='Log to the console only')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    return parser


def main(argv=None):
    """
    Main entry point for the CLI
    """
    args = build_parser().parse_args(argv)
    config = RotateTowardsConfig.from_env()

    try:
        scene = SceneLoader.load(args.scene)
    except (OSError, ValueError, RotateTowardsError) as e:
        print(format_error("SCENE_LOAD_FAILED", str(e), "Check the scene file path and contents"),
              file=sys.stderr)
        return 1

    config = config.with_overrides(scene["config"]).with_overrides({
        "ticks": args.ticks,
        "dt": args.dt,
        "refresh_descendants": args.refresh_descendants,
        "log_file": args.log_file,
        "debug": args.debug or None,
    })

    setup_logging(config.log_file, logging.DEBUG if config.debug else logging.INFO,
                  to_file=not args.no_log_file)

    simulator = Simulator(scene["graph"], config)
    if config.debug:
        simulator.event_bus.enable_debug()
    try:
        simulator.run(config.ticks)
    except RefreshFailed as e:
        if args.json:
            print(json.dumps(error_dict("REFRESH_FAILED", str(e), entity=e.handle)))
        else:
            print(format_error("REFRESH_FAILED", str(e)), file=sys.stderr)
        return 1

    state = simulator.get_state()
    if args.json:
        print(json.dumps(state, indent=2))
    else:
        print_state(state)
    return 0


if __name__ == "__main__":
    sys.exit(main())
