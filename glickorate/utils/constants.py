"""mathematical and system constants computed once here to avoid recomputation"""
import math

# general math constants
PI2 = math.pi**2.0
THREE_OVER_PI_SQUARED = 3.0 / PI2

# glicko 2 constants
DEFAULT_RATING = 1500.0
GLICKO2_SCALE = 173.7178
DEFAULT_VOLATILITY = 0.06
DEFAULT_TAU = 0.5
DEFAULT_EPSILON = 1e-6
DEFAULT_MAX_ITERATIONS = 100
