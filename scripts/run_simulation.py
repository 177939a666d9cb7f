# scripts/run_simulation.py
import sys

from quant_stochastics.runner.config.loader import load_config
from quant_stochastics.runner.run import configure_logging, run_from_config


def main(path: str = "examples/fou_example.yaml"):
    cfg = load_config(path)
    configure_logging(cfg.log_level)
    trajectories = run_from_config(cfg)

    frame = trajectories.to_frame()
    print(frame.iloc[:, :5].describe())


if __name__ == "__main__":
    main(*sys.argv[1:2])
