
COLS, ROWS = 10, 20

CONFIG = {
    "CELL_SIZE": 30,
    "FPS": 60,
    "BASE_DROP_MS": 1000,
    "DROP_STEP_MS": 100,
    "MIN_DROP_MS": 100,
    "LINES_PER_LEVEL": 10,
    "SEED": None,
    "TOAST_LIMIT": 5,
    "LOG_LEVEL": "info",
    "USE_RICH": True,
}
