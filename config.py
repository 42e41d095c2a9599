# MandalaRotate Configuration
# All default values and constants

from dataclasses import dataclass, field, is_dataclass


CURRENT_CONFIG_VERSION = 1


@dataclass
class CanvasConfig:
    """Logical canvas and raster surface geometry"""
    width: int = 800                  # Canvas width in pixels
    height: int = 800                 # Canvas height in pixels
    border: int = 4                   # Padding baked into the raster surface on every side


@dataclass
class SymmetryConfig:
    """Rotational symmetry settings"""
    segments: int = 8                 # Sectors around the circle; even values tile without gaps
    radius_bound: float = 0.0         # Max distance from origin (0 = half the smaller canvas side)


@dataclass
class GeometryConfig:
    """Polar conversion behaviour"""
    # False keeps the legacy quadrant IV rule (base + 3*pi/2), True uses 2*pi - base
    standard_quadrant_angles: bool = False


@dataclass
class BufferConfig:
    """Live point buffer / bake policy"""
    capacity: int = 3000              # Live points allowed before a render tick bakes and evicts


@dataclass
class RenderConfig:
    """Render and input timing"""
    frame_interval_ms: int = 17       # Render tick period (~60 Hz)
    input_interval_ms: int = 17       # Sample period used by headless replay


@dataclass
class ExportConfig:
    """Bitmap export"""
    save_name: str = "Mandala"        # Saved as <save_name>.bmp
    output_dir: str = ""              # Empty = current working directory


@dataclass
class Config:
    """Master configuration"""
    version: int = 1                  # Schema version for persisted configs
    canvas: CanvasConfig = field(default_factory=CanvasConfig)
    symmetry: SymmetryConfig = field(default_factory=SymmetryConfig)
    geometry: GeometryConfig = field(default_factory=GeometryConfig)
    buffer: BufferConfig = field(default_factory=BufferConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    export: ExportConfig = field(default_factory=ExportConfig)

    log_level: str = "INFO"           # Logging level (DEBUG/INFO/WARNING/ERROR)


def apply_dict_to_dataclass(target, data) -> None:
    """Recursively apply values from a dict onto a dataclass instance.
    Unknown keys are ignored."""
    if not isinstance(data, dict):
        return

    for key, value in data.items():
        if not hasattr(target, key):
            continue

        current = getattr(target, key)

        if is_dataclass(current) and isinstance(value, dict):
            apply_dict_to_dataclass(current, value)
            continue

        setattr(target, key, value)


def _coerce_int(value, default: int, low: int) -> int:
    try:
        result = int(value)
    except (TypeError, ValueError):
        return default
    return result if result >= low else default


def migrate_config(config: Config, loaded_version) -> None:
    """Upgrade older config structures to the current schema.
    Replaces missing or invalid values with defaults and bumps version."""
    try:
        version = int(loaded_version) if loaded_version is not None else 0
    except (TypeError, ValueError):
        version = 0

    if version < 1:
        if getattr(config.geometry, 'standard_quadrant_angles', None) is None:
            config.geometry.standard_quadrant_angles = False
        if not getattr(config.export, 'save_name', None):
            config.export.save_name = "Mandala"
        if getattr(config.export, 'output_dir', None) is None:
            config.export.output_dir = ""

    if getattr(config, 'log_level', None) is None:
        config.log_level = "INFO"

    # Always clamp sizes and counts to valid ranges
    config.canvas.width = _coerce_int(config.canvas.width, 800, 1)
    config.canvas.height = _coerce_int(config.canvas.height, 800, 1)
    config.canvas.border = _coerce_int(config.canvas.border, 4, 0)
    config.symmetry.segments = _coerce_int(config.symmetry.segments, 8, 1)
    config.buffer.capacity = _coerce_int(config.buffer.capacity, 3000, 1)
    config.render.frame_interval_ms = _coerce_int(config.render.frame_interval_ms, 17, 1)
    config.render.input_interval_ms = _coerce_int(config.render.input_interval_ms, 17, 1)

    try:
        radius = float(config.symmetry.radius_bound)
    except (TypeError, ValueError):
        radius = 0.0
    config.symmetry.radius_bound = max(0.0, radius)

    config.version = CURRENT_CONFIG_VERSION


# Default config instance
DEFAULT_CONFIG = Config()
