import logging
import pathlib

import matplotlib.pyplot as plt

from rrt_py.env import EnvironmentManager
from rrt_py.planner.rrt import RRT

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    config_file_path = pathlib.Path(__file__).parent.resolve().joinpath("config.yaml")
    env = EnvironmentManager.from_file(config_file_path)
    planner = RRT(env, env.planner_config(progress=True))

    fig, ax = plt.subplots()

    def draw(iteration, status, tree):
        # Redraw every few steps, matplotlib is too slow to keep up with each one
        if iteration % 10 != 0:
            return
        ax.clear()
        env.plot(ax)
        planner.plot_tree(ax)
        ax.set_title(f"Iteration {iteration}: {status.name}")
        plt.pause(0.001)

    result = planner.plan(callback=draw, should_stop=lambda: not plt.fignum_exists(fig.number))

    print("Path Found: ", result.success)

    ax.clear()
    env.plot(ax)
    planner.plot(ax, result.path)

    plt.show()
