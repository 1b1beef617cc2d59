# scripts/main.py

from __future__ import annotations

import logging
from pathlib import Path
from dataclasses import asdict

from steering_sims.core import SimConfig, run_simulation
from steering_sims.presets.basic import make_population
from steering_sims.utils.cli import build_parser
from steering_sims.utils.preset_loader import load_preset
from steering_sims.utils.random import seed_all

PROJECT_ROOT = Path(__file__).parent.parent


def main():
    parser = build_parser()
    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    base = load_preset(args.preset).config if args.preset is not None else None
    sim_config = SimConfig.from_args(args, base=base)

    seed_all(args.seed)

    # 1. Build population & environment
    population = make_population(sim_config)
    n_steps = int(args.duration * args.tick_rate)
    dt = 1 / args.tick_rate

    # 2. Run
    recording = run_simulation(population, n_steps, dt, log_interval=args.log_interval)
    recording.meta = {
        "sim_config": asdict(sim_config),
        "seed": args.seed,
        "engine_version": "0.1.0",
    }
    last = recording.frames[-1]
    speeds = [(s.vel[0] ** 2 + s.vel[1] ** 2) ** 0.5 for s in last.agents.values()]
    print(f"Simulated {population.time:.3f} time units over {n_steps} ticks.")
    print(f"Number of agents: {len(last.agents)}")
    if speeds:
        print(f"Mean speed: {sum(speeds) / len(speeds):.3f}")

    # 3. Optional plot of the final frame
    if args.plot:
        import matplotlib
        matplotlib.use("Agg")
        from steering_sims.render.plotting import plot_frame

        exp_dir = PROJECT_ROOT / args.outdir / args.exp_name
        exp_dir.mkdir(exist_ok=True, parents=True)
        fig, _ = plot_frame(
            last,
            static=recording.agent_static,
            flow_field=population.env.flow_field,
            path=population.env.path,
            bounds=population.boundary.bounds(),
        )
        out = exp_dir / "final_frame.png"
        fig.savefig(out, dpi=150)
        print(f"Saved {out}")


if __name__ == "__main__":
    main()
