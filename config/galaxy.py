"""Configuration for the procedural spiral galaxy."""

WINDOW = {
    "width": 1280,
    "height": 720,
    "title": "Spiral Galaxy"
}

CAMERA = {
    "fov": 75.0,
    "near_clip": 0.01,
    "far_clip": 200.0,
    "initial_radius": 6.0,
    "initial_theta": 90.0,
    "initial_phi": 30.0,
    "min_radius": 0.5,
    "max_radius": 60.0,
    "min_phi": -89.0,
    "max_phi": 89.0,
    "keyboard_rotate_speed": 60.0,
    "keyboard_zoom_speed": 4.0,
    "mouse_sensitivity": 0.3,
    "pan_sensitivity": 0.002,
    "damping": 6.0,               # Higher = rotation settles faster
    "double_click_ms": 300,
}

# Default parameter set (one galaxy per value, regenerated on every change)
GALAXY = {
    "count": 100_000,
    "size": 0.01,
    "radius": 5.0,
    "branches": 3,
    "spin": 1.0,
    "randomness": 0.2,            # Kept for parity, position math ignores it
    "randomness_power": 3.0,
    "inside_color": "#ff6030",
    "outside_color": "#1b3984",

    # Connection lines
    "show_lines": False,
    "line_distance": 0.05,
    "line_opacity": 0.3,
    "line_color": "#88aaff",
    "max_connections": 3,

    "seed": None,
}

# Editable ranges: (min, max, step)
CONTROLS = {
    "count": (100, 1_000_000, 100),
    "size": (0.001, 0.1, 0.001),
    "radius": (0.01, 20.0, 0.01),
    "branches": (2, 20, 1),
    "spin": (-5.0, 5.0, 0.05),
    "randomness": (0.0, 2.0, 0.01),
    "randomness_power": (1.0, 10.0, 0.1),
    "line_distance": (0.005, 1.0, 0.005),
    "line_opacity": (0.0, 1.0, 0.05),
    "max_connections": (1, 20, 1),
}

# Colours the editor cycles through for inside/outside/line colour fields
PALETTE = [
    "#ff6030",
    "#1b3984",
    "#ffffff",
    "#ffd27f",
    "#ff3b8d",
    "#39ff9c",
    "#88aaff",
    "#8a2be2",
]

# Resource ceilings (ResourceExhaustion beyond these)
SAFETY = {
    "max_points": 1_000_000,
    "max_segments": 5_000_000,
}

COLORS = {
    "background": (0.0, 0.0, 0.0, 1.0),
    "text": (230, 230, 230),
    "error_text": (255, 110, 110),
}
