# Round pacing
ROUND_DURATION_SEC = 60            # game clock length
PRESTART_COUNT = 3                 # "3, 2, 1" before play
HOLE_COUNT = 9                     # 3x3 grid
GRID_COLUMNS = 3
FEEDBACK_CLEAR_MS = 300            # hit/miss highlight lifetime
URGENCY_SEC = 6                    # tick cue while time_left is below this
TICK_MS = 1000                     # countdown and clock resolution

# Difficulty: spawn interval (time between spawn attempts)
SPAWN_START_MS = 1200
SPAWN_MIN_MS = 400

# Difficulty: visible duration (how long a target stays up)
VISIBLE_START_MS = 700
VISIBLE_JITTER_MS = 800            # uniform extra on top of the start value
VISIBLE_MIN_SCALE = 0.4            # late-round multiplier floor
VISIBLE_MIN_MS = 300

HIGH_SCORE_KEY = "crewmateHighScore"

# Themes only change how things look; each carries the variant palette
THEMES = {
    "crewmate": {
        "title": ("CREWMATE", "CRUNCH"),
        "tagline": "The ship is crawling with crewmates doing tasks. Clear them out!",
        "accent": (220, 38, 38),
        "variants": [
            (197, 17, 17),    # red
            (19, 46, 209),    # blue
            (17, 127, 45),    # green
            (237, 84, 186),   # pink
            (239, 125, 13),   # orange
            (245, 245, 87),   # yellow
            (63, 71, 78),     # black
            (214, 224, 240),  # white
            (107, 47, 187),   # purple
            (113, 73, 30),    # brown
            (56, 254, 219),   # cyan
            (80, 239, 57),    # lime
        ],
    },
    "mole": {
        "title": ("WHACK", "A MOLE"),
        "tagline": "Moles are tearing up the lawn. Bop them back down!",
        "accent": (50, 200, 120),
        "variants": [
            (120, 85, 60),
            (95, 70, 50),
            (150, 110, 80),
        ],
    },
}
DEFAULT_THEME = "crewmate"

# UX
HUD_COLOR = (230, 230, 230)
MUTED_TEXT = (120, 130, 145)
HIGH_COLOR = (234, 179, 8)
URGENT_COLOR = (249, 115, 22)
URGENT_DISPLAY_SEC = 15            # timer turns orange below this
HOLE_COLOR = (30, 36, 48)
HOLE_BORDER = (51, 65, 85)
HIT_BORDER = (34, 197, 94)
MISS_BORDER = (239, 68, 68)
PANEL_COLOR = (15, 23, 42)
REPORT_COLOR = (125, 211, 252)
EDGE_MARGIN = 24
HUD_HEIGHT = 110
FOOTER_HEIGHT = 110
BUTTON_W, BUTTON_H = 300, 72
