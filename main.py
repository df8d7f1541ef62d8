# main.py
"""
Main entry point for the Flow Field visualization.

This script orchestrates the entire lifecycle:
1. Loads configuration from `config.json`.
2. Initializes the logging system.
3. Sets up the window, the noise field and the particle grid.
4. Runs the frame loop: one tick, then one render pass per frame.
5. Handles clean shutdown.
"""
import logging
import time
import numpy as np
import cProfile
import pstats
import io
from typing import Dict, Any
from utils import setup_logging, load_config

CONFIG_PATH = 'config.json'


def run_frame_loop(visualizer, sim, vis_params: Dict[str, Any], run_params: Dict[str, Any]) -> int:
    """
    Runs one tick and one render pass per frame until the window closes or
    max_steps is reached. Returns the number of frames simulated.

    The "draw" timing covers building and issuing the draw calls only; the
    frame-rate wait is timed separately.
    """
    from coloring import build_draw_requests

    grid = sim.grid
    log_throttle = run_params.get('log_throttle_steps', 100)
    max_steps = run_params.get('max_steps', 0) # 0 runs until the window closes

    update_time = 0.0
    draw_time = 0.0
    wait_time = 0.0
    running = True

    while running:
        # Dimensions are read every frame so a resize never rebuilds the grid.
        viewport_width, viewport_height = visualizer.viewport()

        start = time.perf_counter()
        sim.step(viewport_width, viewport_height)
        update_elapsed = time.perf_counter() - start

        start = time.perf_counter()
        requests = build_draw_requests(grid, sim.noise, viewport_width, viewport_height, vis_params)
        if not visualizer.draw(requests):
            running = False
        draw_elapsed = time.perf_counter() - start

        start = time.perf_counter()
        if running:
            visualizer.wait_for_next_frame()
        wait_elapsed = time.perf_counter() - start

        update_time += update_elapsed
        draw_time += draw_elapsed
        wait_time += wait_elapsed
        step_num = sim.step_count

        # Hot loops must throttle logs
        if step_num % log_throttle == 0:
            logging.info(
                f"Frame {step_num} | avg update {update_time / log_throttle * 1000:.2f} ms, "
                f"avg draw {draw_time / log_throttle * 1000:.2f} ms, "
                f"avg frame wait {wait_time / log_throttle * 1000:.2f} ms"
            )
            update_time = 0.0
            draw_time = 0.0
            wait_time = 0.0

            mean_speed = np.mean(np.linalg.norm(grid.velocities, axis=-1)) if len(grid) else 0.0
            logging.debug(
                f"Frame {step_num} | Update: {update_elapsed * 1000:.2f} ms, "
                f"Draw: {draw_elapsed * 1000:.2f} ms, Mean |velocity|: {mean_speed:.4f}"
            )

        if max_steps and step_num >= max_steps:
            logging.info(f"Reached max_steps ({max_steps}). Stopping.")
            running = False

    return sim.step_count


def main():
    """
    The main function to run the visualization.
    """
    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config(CONFIG_PATH)
    except Exception as e:
        print(f"FATAL: Could not load {CONFIG_PATH}. Error: {e}")
        return

    setup_logging(config)

    logging.info("--- Flow Field Starting ---")

    sim_params = config.get('simulation_parameters', {})
    run_params = config.get('run_control', {})
    vis_params = config.get('visualization', {})

    from noise_field import PerlinNoise
    from particle import FlowGrid
    from simulation import Simulation
    from visualization import Visualizer

    # --- Component Initialization ---
    # 1. The visualizer owns the window, so it determines the viewport.
    visualizer = Visualizer(vis_params)
    profiler = cProfile.Profile() if run_params.get('profile', False) else None

    try:
        viewport_width, viewport_height = visualizer.viewport()

        # 2. One resolved seed feeds both the jitter and the noise field.
        grid = FlowGrid.from_params(sim_params, viewport_width, viewport_height)
        noise = PerlinNoise(grid.seed)
        sim = Simulation(grid, noise, sim_params)

        if profiler:
            profiler.enable()
        try:
            run_frame_loop(visualizer, sim, vis_params, run_params)
        finally:
            if profiler:
                profiler.disable()
    finally:
        visualizer.close()
    logging.info("Frame loop finished.")

    if profiler:
        logging.info("--- Performance Profile ---")
        s = io.StringIO()
        # Sort by cumulative time spent in the function
        stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
        stats.print_stats(20)
        logging.info(f"\n{s.getvalue()}")

    logging.info("--- Flow Field Shutting Down ---")


if __name__ == "__main__":
    main()
