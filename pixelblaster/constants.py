"""Fixed tuning values for the arena simulation.

Timers are counted in ticks (nominally 60 per second); the movement gate is the
only value expressed in milliseconds.
"""

GRID_SIZE = 15
MIN_GRID_SIZE = 6  # leaves a column and a row outside the protected corner
START_CELL = (1, 1)
PROTECTED_ZONE_MAX = 3  # cells with x <= 3 and y <= 3 never hold destructible walls
DESTRUCTIBLE_CHANCE = 0.4

# Player
BASE_LIVES = 3
BASE_MAX_BOMBS = 1
BASE_BOMB_RANGE = 2
BASE_SPEED = 1
MAX_LIVES = 5
MAX_BOMBS_CAP = 5
MAX_BOMB_RANGE = 4
MAX_SPEED = 3
SHIELD_TICKS = 300
BASE_MOVE_DELAY_MS = 150
MOVE_DELAY_STEP_MS = 30
MIN_MOVE_DELAY_MS = 50
ESCAPE_DISTANCE = 2

# Bombs and explosions
BOMB_TIMER_TICKS = 120
EXPLOSION_TIMER_TICKS = 30
MEGA_RANGE_BONUS = 2

# Enemies
BASE_ENEMY_COUNT = 3
ENEMY_BOMB_RANGE = 2
ENEMY_BASE_MAX_BOMBS = 2
ENEMY_BOMB_INTERVAL = 120
ENEMY_MOVE_INTERVAL = 20
ENEMY_INITIAL_BOMB_TIMER_MAX = 60
ENEMY_AGGRO_DISTANCE = 4
ENEMY_RANDOM_BOMB_CHANCE = 0.08
DANGER_TIMER_THRESHOLD = 60  # bombs at or below this timer count as about to blow

# Power-ups
POWER_UP_DROP_CHANCE = 0.4
POWER_UP_TIMER_TICKS = 600

# Scoring
SCORE_WALL = 50
SCORE_ENEMY = 100
SCORE_POWER_UP = 200
SCORE_LEVEL = 1000
