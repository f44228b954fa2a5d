# --- Display ---
WIDTH = 288
HEIGHT = 512
FPS = 60

# --- World ---
GROUND_HEIGHT = 112
PLAY_HEIGHT = HEIGHT - GROUND_HEIGHT   # y of the ground line
SEED_DEFAULT = 12345

# --- Avatar ---
BIRD_X = 60                 # avatar's fixed x (center); the world scrolls left
BIRD_SIZE = 24
BIRD_HALF = BIRD_SIZE / 2
FLAP = -6.0                 # vy right after a flap (px/tick, negative = up)

# --- Pipes ---
PIPE_WIDTH = 52
PIPE_MARGIN = 40            # min clearance between a gap edge and the ceiling / ground
PIPE_MIN = PIPE_MARGIN
PIPE_MAX = PLAY_HEIGHT - PIPE_MARGIN
PIPE_INTERVAL = 90          # ticks between spawns

# --- Score scaling ---
MIN_GAP = 60
GAP_DECAY_EVERY = 5         # points per gap step
GAP_DECAY_STEP = 10
SPEED_GROWTH_EVERY = 10     # points per speed step
SPEED_GROWTH_STEP = 0.5

# --- Difficulty presets: gap (px), base speed (px/tick), gravity (px/tick^2) ---
DIFFICULTY_SETTINGS = {
    "easy":   {"gap": 120, "speed": 1.5, "gravity": 0.4},
    "normal": {"gap": 100, "speed": 2.0, "gravity": 0.5},
    "hard":   {"gap": 80,  "speed": 2.7, "gravity": 0.65},
}
DIFFICULTY_DEFAULT = "normal"

# --- Assets ---
ASSETS_DIR = "assets"
ASSET_LIST = {
    "background": "background-day.png",
    "ground": "ground.png",
    "bird": "bird.png",
    "pipe": "pipe-green.png",
}

# --- Colors (RGB), used when an asset is unavailable ---
COLOR_SKY = (112, 197, 206)
COLOR_SAND = (222, 216, 149)
COLOR_GRASS = (186, 218, 85)
COLOR_BIRD = (255, 255, 0)
COLOR_EYE = (34, 34, 34)
COLOR_BEAK = (255, 136, 0)
COLOR_PIPE = (95, 220, 77)
COLOR_PIPE_EDGE = (56, 124, 43)
COLOR_FG = (255, 255, 255)
COLOR_HI = (255, 255, 0)
COLOR_LOADING_BG = (0, 0, 0)
