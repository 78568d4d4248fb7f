"""
constants.py: Centralized configuration for the game simulation and client.
"""

# -------- Time Config --------
RENDER_FPS = 60                 # One simulation tick per rendered frame
TRAIL_EVERY_TICKS = 3           # Player trail particle cadence

# -------- Game World Config --------
FIELD_WIDTH = 800
FIELD_HEIGHT = 600

# -------- Player Config --------
PLAYER_START_X = 100
PLAYER_START_Y = FIELD_HEIGHT // 2
PLAYER_SIZE = 40
PLAYER_SPEED = 4                # Pixels per tick in each held direction

# -------- Obstacle Config --------
OBSTACLE_WIDTH = 50
OBSTACLE_GAP = 250
OBSTACLE_MIN_HEIGHT = 50        # Smallest top/bottom segment
OBSTACLE_SPEED = 0.9            # Pixels per tick
OBSTACLE_SPAWN_INTERVAL = 250   # Spawn every 250 ticks

# -------- Hostile Config --------
HOSTILE_SIZE = 50
HOSTILE_BASE_SPEED = 2.5        # Pixels per tick at level 1
HOSTILE_SPAWN_INTERVAL = 120    # Ticks between spawns at level 1
HOSTILE_SPAWN_MARGIN = 50       # Keep spawns away from the top/bottom edge

# -------- Level Config --------
POINTS_PER_LEVEL = 10
LEVEL_TRANSITION_MS = 2000
SPREAD_MIN_LEVEL = 11           # Levels 11-20 fire spread shots
HOMING_MIN_LEVEL = 21           # Levels 21+ fire homing missiles

# -------- Weapon Config --------
MAX_MISSILES = 5
MISSILE_OFFSCREEN_MARGIN = 50
SPREAD_OFFSETS = (0, -1, 1)     # Center first, then the two flanks
SPREAD_VY_PER_OFFSET = 2.5
SPREAD_SPEED_FACTOR = 1.2
HOMING_BASE_STRENGTH = 0.15
HOMING_STRENGTH_PER_LEVEL = 0.01
HOMING_MAX_VY = 3.0

# (width, height, color) per tier before size scaling
MISSILE_SHAPES = {
    "basic": (20, 5, (255, 170, 0)),
    "spread": (18, 4, (68, 170, 255)),
    "homing": (25, 6, (255, 68, 255)),
}

# -------- Particle Config --------
MAX_PARTICLES = 500
EXPLOSION_COUNT = 18
SPARKLE_COUNT = 10
CONFETTI_COUNT = 40

TRAIL_LIFE = 25
TRAIL_SIZE = 6
EXPLOSION_LIFE = 50
EXPLOSION_SIZE = 4
EXPLOSION_GRAVITY = 0.15
SPARKLE_LIFE = 35
SPARKLE_SIZE = 3
CONFETTI_LIFE = 150
CONFETTI_SIZE = 8
CONFETTI_GRAVITY = 0.12

EXPLOSION_COLORS = [(255, 68, 68), (255, 136, 68), (255, 170, 68)]
SPARKLE_COLORS = [(255, 255, 255), (255, 255, 68), (68, 255, 255)]
CONFETTI_COLORS = [
    (121, 14, 203), (255, 68, 68), (68, 255, 68),
    (68, 68, 255), (255, 255, 68), (255, 68, 255),
]

# -------- Storage Config --------
DB_FILE = "flappy_kiro.db"
HIGH_SCORE_KEY = "flappyKiroHighScore"
CHARACTER_KEY = "flappyKiroSelectedCharacter"

# -------- Palette --------
KIRO_PURPLE = (121, 14, 203)
