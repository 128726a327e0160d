"""
Galaxy Presets Library
======================

Named parameter sets for the galaxy generator, organized by category.
Each preset lists only the fields it changes from config.galaxy.GALAXY.

Categories:
- CLASSIC: The default look and close variations
- DENSE: Large counts for screenshots
- WEB: Connection lines enabled
- TINY: Small counts for slow machines and quick checks
"""

from typing import List, Optional, Tuple

from config import galaxy as config
from galaxy import GalaxyParameters

PRESETS = {}

# -----------------------------------------------------------------------------
# CLASSIC
# -----------------------------------------------------------------------------

PRESETS["classic"] = {
    "name": "Classic Spiral",
    "description": "Three arms, warm core fading to deep blue",
    "category": "CLASSIC",
    "params": {},
}

PRESETS["pinwheel"] = {
    "name": "Pinwheel",
    "description": "Five tightly wound arms",
    "category": "CLASSIC",
    "params": {
        "branches": 5,
        "spin": 2.2,
        "randomness_power": 4.0,
    },
}

PRESETS["loose"] = {
    "name": "Loose Two-Arm",
    "description": "Two loosely wound arms with a wide scatter",
    "category": "CLASSIC",
    "params": {
        "branches": 2,
        "spin": 0.6,
        "randomness_power": 2.0,
        "inside_color": "#ffd27f",
        "outside_color": "#8a2be2",
    },
}

PRESETS["reverse"] = {
    "name": "Counter Spin",
    "description": "Four arms twisting the other way",
    "category": "CLASSIC",
    "params": {
        "branches": 4,
        "spin": -1.5,
        "inside_color": "#ff3b8d",
        "outside_color": "#1b3984",
    },
}

# -----------------------------------------------------------------------------
# DENSE
# -----------------------------------------------------------------------------

PRESETS["dense_500k"] = {
    "name": "Dense 500K",
    "description": "Half a million points, very sharp arms",
    "category": "DENSE",
    "params": {
        "count": 500_000,
        "size": 0.005,
        "randomness_power": 6.0,
    },
}

PRESETS["dense_1m"] = {
    "name": "Million Stars",
    "description": "The largest supported point field",
    "category": "DENSE",
    "params": {
        "count": 1_000_000,
        "size": 0.004,
        "radius": 8.0,
        "branches": 6,
        "spin": 1.2,
        "randomness_power": 5.0,
    },
}

# -----------------------------------------------------------------------------
# WEB
# -----------------------------------------------------------------------------

PRESETS["web"] = {
    "name": "Star Web",
    "description": "Nearby stars joined by faint lines",
    "category": "WEB",
    "params": {
        "count": 20_000,
        "show_lines": True,
        "line_distance": 0.08,
        "max_connections": 3,
        "line_opacity": 0.25,
    },
}

PRESETS["web_dense"] = {
    "name": "Dense Web",
    "description": "More points, shorter lines, more connections",
    "category": "WEB",
    "params": {
        "count": 100_000,
        "show_lines": True,
        "line_distance": 0.03,
        "max_connections": 5,
        "line_opacity": 0.15,
        "line_color": "#ffffff",
    },
}

# -----------------------------------------------------------------------------
# TINY
# -----------------------------------------------------------------------------

PRESETS["tiny"] = {
    "name": "Tiny Galaxy",
    "description": "Very small galaxy for testing",
    "category": "TINY",
    "params": {
        "count": 2_000,
        "size": 0.03,
    },
}

PRESETS["tiny_web"] = {
    "name": "Tiny Web",
    "description": "Few points with generous connection distance",
    "category": "TINY",
    "params": {
        "count": 1_000,
        "size": 0.03,
        "show_lines": True,
        "line_distance": 0.4,
        "max_connections": 2,
    },
}


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================

CATEGORY_ORDER = ["TINY", "CLASSIC", "WEB", "DENSE"]


def get_preset_list() -> List[Tuple[str, dict]]:
    """Get list of all presets sorted by category."""
    return sorted(
        PRESETS.items(),
        key=lambda x: (CATEGORY_ORDER.index(x[1]["category"]) if x[1]["category"] in CATEGORY_ORDER else 99, x[0])
    )


def print_preset_menu():
    """Print formatted preset menu."""
    presets = get_preset_list()
    current_category = None

    print("\n" + "=" * 70)
    print("  GALAXY PRESETS")
    print("=" * 70)

    for idx, (key, preset) in enumerate(presets):
        if preset["category"] != current_category:
            current_category = preset["category"]
            print(f"\n{'─' * 70}")
            print(f"  {current_category}")
            print(f"{'─' * 70}")

        count = preset["params"].get("count", config.GALAXY["count"])
        if count >= 1_000_000:
            count_str = f"{count / 1_000_000:.1f}M"
        else:
            count_str = f"{count // 1000}K" if count >= 1000 else str(count)
        lines = "lines" if preset["params"].get("show_lines") else ""

        print(f"  [{idx:2d}] {key:<12} {preset['name']:<18} {count_str:>6} points {lines}")
        print(f"       {preset['description']}")

    print(f"\n{'=' * 70}")


def get_preset_by_index(index: int) -> Tuple[Optional[str], Optional[dict]]:
    """Get preset by menu index."""
    presets = get_preset_list()
    if 0 <= index < len(presets):
        return presets[index]
    return None, None


def get_preset_config(key: str) -> Optional[dict]:
    """Full settings dict for a preset: defaults overlaid with its params."""
    if key not in PRESETS:
        return None
    return {**config.GALAXY, **PRESETS[key]["params"]}


def get_preset_params(key: str, **overrides) -> GalaxyParameters:
    """Parameters for a preset, with optional field overrides."""
    cfg = get_preset_config(key)
    if cfg is None:
        raise KeyError(f"Unknown preset: {key}")
    cfg.update({k: v for k, v in overrides.items() if v is not None})
    return GalaxyParameters.from_config(cfg)
