from typing import List, Tuple

from simulation_settings import SimulationSettings
from sphere_field import Placement

# keyword -> number of numeric arguments
_ARITY = {"set": 3, "ray": 2, "seed": 1, "sph": 4}


def parse_scene_file(file_path: str) -> Tuple[SimulationSettings, List[Placement]]:
    """
    Reads a simulation scene. One entry per line, '#' starts a comment:

        set <grid_size> <cell_size> <speed>
        ray <zenith_deg> <azimuth_deg>
        seed <n>
        sph <x> <y> <z> <radius>

    Spheres keep their file order. Settings that are not mentioned keep their defaults.
    """
    settings = SimulationSettings()
    placements: List[Placement] = []
    with open(file_path, 'r') as f:
        for line_number, line in enumerate(f, start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            parts = line.split()
            obj_type = parts[0]
            if obj_type not in _ARITY:
                raise ValueError("Unknown object type: {}".format(obj_type))
            params = [float(p) for p in parts[1:]]
            if len(params) != _ARITY[obj_type]:
                raise ValueError(
                    "line {}: '{}' expects {} values, got {}".format(
                        line_number, obj_type, _ARITY[obj_type], len(params)
                    )
                )
            if obj_type == "set":
                settings.grid_size = int(params[0])
                settings.cell_size = params[1]
                settings.speed = params[2]
            elif obj_type == "ray":
                settings.zenith_deg = params[0]
                settings.azimuth_deg = params[1]
            elif obj_type == "seed":
                settings.seed = int(params[0])
            elif obj_type == "sph":
                placements.append((params[0], params[1], params[2], params[3]))
    return settings, placements
