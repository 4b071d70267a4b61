import argparse
import os
import time
from typing import Dict, List

from camera import OrbitCamera
from ray_state import RayState
from renderer import render_frame, save_image
from scene_parser import parse_scene_file
from simulation_settings import SimulationSettings
from sphere_field import DEFAULT_PLACEMENTS, Placement, SphereField
from typings.step_outcome import OutcomeKind, StepOutcome
from utils.uniform_grid import GridConfig


def format_outcome(outcome: StepOutcome, field: SphereField, half_extent: float) -> str | None:
    """Console line for a reset event, None for a plain step."""
    x, y, z = outcome.position
    if outcome.kind is OutcomeKind.HIT_SPHERE:
        cx, cy, cz = (float(c) for c in field[outcome.sphere_index].center)
        return f"[hit] sphere {outcome.sphere_index} at ({cx:g}, {cy:g}, {cz:g})"
    if outcome.kind is OutcomeKind.EXITED_VOLUME:
        return f"[exit] position at boundary: ({x:.4f}, {y:.4f}, {z:.4f}), halfsize: {half_extent:g}"
    return None


def run_simulation(
    ray: RayState,
    field: SphereField,
    settings: SimulationSettings,
    steps: int,
    camera: OrbitCamera | None = None,
    frames_dir: str | None = None,
    frame_every: int = 1,
    width: int = 400,
    height: int = 400,
    quiet: bool = False,
) -> Dict[str, int]:
    """One advance per frame; optionally renders every `frame_every`-th frame to frames_dir."""
    counters = {"steps": 0, "hits": 0, "exits": 0, "frames": 0}
    if frames_dir is not None:
        os.makedirs(frames_dir, exist_ok=True)

    for step in range(steps):
        outcome = ray.advance(field)
        counters["steps"] += 1
        if outcome.kind is OutcomeKind.HIT_SPHERE:
            counters["hits"] += 1
        elif outcome.kind is OutcomeKind.EXITED_VOLUME:
            counters["exits"] += 1

        if not quiet:
            message = format_outcome(outcome, field, settings.half_extent)
            if message is not None:
                print(message)

        if frames_dir is not None and camera is not None and step % frame_every == 0:
            image = render_frame(camera, ray, field, settings.grid_size, settings.cell_size, width, height)
            save_image(image, os.path.join(frames_dir, f"frame_{step:06d}.png"))
            counters["frames"] += 1

    return counters


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Ray walk through a sphere field inside a bounded cube')
    parser.add_argument('scene_file', type=str, nargs='?', default=None, help='Optional scene file (default: built-in sphere lattice)')
    parser.add_argument('--steps', type=int, default=1000, help='Number of simulation steps')
    parser.add_argument('--seed', type=int, default=None, help='Seed for the reseed direction draws')
    parser.add_argument('--speed', type=float, default=None, help='Distance the ray grows per step')
    parser.add_argument(
        '--accel',
        choices=('linear', 'grid'),
        default='linear',
        help='Sphere lookup: linear scan or uniform grid index',
    )
    parser.add_argument('--grid-cells', type=int, default=64, help='Maximum grid cells per axis when --accel grid is selected')
    parser.add_argument('--frames-dir', type=str, default=None, help='Directory for rendered PNG frames')
    parser.add_argument('--frame-every', type=int, default=10, help='Render one frame every N steps')
    parser.add_argument('--width', type=int, default=400, help='Frame width')
    parser.add_argument('--height', type=int, default=400, help='Frame height')
    parser.add_argument('--camera-theta', type=float, default=45.0, help='Camera horizontal angle in degrees')
    parser.add_argument('--camera-phi', type=float, default=45.0, help='Camera vertical angle in degrees')
    parser.add_argument('--quiet', action='store_true', help='Do not print hit/exit events')
    return parser


def main(argv: List[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    if args.frame_every <= 0:
        raise ValueError("--frame-every must be positive")

    def log_phase(label: str, seconds: float) -> None:
        print(f"[phase] {label}: {seconds:.2f}s")

    parse_start = time.perf_counter()
    placements: List[Placement]
    if args.scene_file is not None:
        settings, placements = parse_scene_file(args.scene_file)
    else:
        settings, placements = SimulationSettings(), list(DEFAULT_PLACEMENTS)
    if args.seed is not None:
        settings.seed = args.seed
    if args.speed is not None:
        settings.speed = args.speed
    log_phase("parse_scene", time.perf_counter() - parse_start)

    setup_start = time.perf_counter()
    grid_config = GridConfig(max_cells_per_axis=args.grid_cells) if args.accel == 'grid' else None
    field = SphereField.from_placements(placements, grid_config)
    ray = settings.create_ray()
    camera = OrbitCamera(theta_deg=args.camera_theta, phi_deg=args.camera_phi) if args.frames_dir else None
    log_phase("setup", time.perf_counter() - setup_start)
    print(f"[setup] spheres={len(field)}, half_extent={settings.half_extent:g}, speed={settings.speed:g}, accel={args.accel}")

    simulate_start = time.perf_counter()
    counters = run_simulation(
        ray,
        field,
        settings,
        args.steps,
        camera=camera,
        frames_dir=args.frames_dir,
        frame_every=args.frame_every,
        width=args.width,
        height=args.height,
        quiet=args.quiet,
    )
    log_phase("simulate", time.perf_counter() - simulate_start)

    print("[stats] steps={steps}, hits={hits}, exits={exits}, frames={frames}".format(**counters))


def cli() -> None:
    program_start = time.time()
    readable_start = time.strftime('%Y-%m-%d %H:%M:%S', time.localtime(program_start))
    print(f"[timer] Program started at {readable_start}")
    try:
        main()
    finally:
        program_end = time.time()
        readable_end = time.strftime('%Y-%m-%d %H:%M:%S', time.localtime(program_end))
        elapsed = program_end - program_start
        print(f"[timer] Program ended at {readable_end} (elapsed {elapsed:.2f}s)")


if __name__ == '__main__':
    cli()
