"""Ruleset constants for worldgen atmosphere generation."""

# --- Dice ---
DICE_PER_ROLL = 3
DIE_SIDES = 6
MIN_ROLL = DICE_PER_ROLL          # 3
MAX_ROLL = DICE_PER_ROLL * DIE_SIDES  # 18

# --- Atmospheric mass ---
MASS_MODULUS = 10
MASS_JITTER = 0.05  # Jitter drawn from [-MASS_JITTER, MASS_JITTER)
MASS_PRECISION = 2

# --- Base characteristic gates (roll at or below -> milder set) ---
SMALL_ICE_TOXICITY_GATE = 15
STANDARD_ICE_OCEAN_TOXICITY_GATE = 12

# --- Marginal atmospheres (Garden worlds only) ---
MARGINAL_ATMOSPHERE_GATE = 12  # Roll at or above this to generate one
CHLORINE_CHANCE = 1.0          # Chance ChlorineOrFluorine yields Chlorine

# --- Pressure ---
DEFAULT_SURFACE_GRAVITY = 1.0  # In G
PRESSURE_PRECISION = 2

# Upper bounds in atmospheres, keyed by PressureCategory.value
PRESSURE_CATEGORY_BOUNDS: list[tuple[str, float]] = [
    ("trace", 0.01),      # Exclusive
    ("very_thin", 0.5),
    ("thin", 0.8),
    ("standard", 1.2),
    ("dense", 1.5),
    ("very_dense", 10.0),
]

# --- Settings ---
APP_NAME = "worldgen"
SETTINGS_FILENAME = "atmosphere.json"
