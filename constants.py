# constants.py
"""
Application-level constants.

These values are static and do not change between simulation runs.
They are fundamental to the application's framework, such as rendering
properties, default window sizes, or the fixed parts of the colour
mapping that are not part of the experimental configuration.
"""

# Visualization settings
# Set to True to run in borderless fullscreen mode.
# Set to False to run in a resizable window (DEFAULT_WINDOW_WIDTH x DEFAULT_WINDOW_HEIGHT).
FULLSCREEN = False
DEFAULT_WINDOW_WIDTH = 1024
DEFAULT_WINDOW_HEIGHT = 768
FPS = 60
BACKGROUND_COLOR = (0, 0, 0) # Black
# Alpha of the fade drawn over the previous frame (0-255). 0 never clears,
# so points leave permanent flow lines; 255 clears every frame.
DEFAULT_TRAIL_ALPHA = 0
WINDOW_CAPTION = "Flow Field"

# --- Colour Mapping ---
# Saturation and lightness are fixed; only the hue follows the noise field.
POINT_SATURATION = 1.0
POINT_LIGHTNESS = 0.5

# --- Simulation Defaults ---
# Used when the config file omits a value. They reproduce the look of the
# original sketch.
DEFAULT_GRID_SIZE = 80
DEFAULT_POSITION_JITTER = 0.1
DEFAULT_HEADING_NOISE_FREQUENCY = 10.0
DEFAULT_HEADING_NOISE_AMPLITUDE = 2.0
DEFAULT_VELOCITY_SPEED = 0.25
DEFAULT_COLOR_NOISE_FREQUENCY = 4.0
DEFAULT_COLOR_NOISE_AMPLITUDE = 1.1
DEFAULT_POINT_SIZE = 2.0

# Seeds derived from the clock are truncated to this many bits.
SEED_BITS = 32

# --- Configuration ---
# Top-level sections of config.json. Each must be a JSON object.
CONFIG_SECTIONS = ('simulation_parameters', 'visualization', 'run_control', 'logging')
# Third-party loggers held at WARNING or above; Numba logs every compilation
# pass at DEBUG.
QUIET_LOGGERS = ('numba',)
