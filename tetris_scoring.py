"""Line-clear scoring and level/speed progression."""
from tetris_config import CONFIG

LINE_POINTS = (0, 40, 100, 300, 1200)
CLEAR_NAMES = {1: "Single!", 2: "Double!", 3: "Triple!", 4: "Tetris!"}
TETRIS = 4


def line_clear_points(cleared: int, level: int) -> int:
    """Points for clearing ``cleared`` rows at once; a Tetris scores double."""
    if not 0 <= cleared < len(LINE_POINTS):
        raise ValueError(f"cannot clear {cleared} lines in one placement")
    points = LINE_POINTS[cleared] * level
    if cleared == TETRIS:
        points *= 2
    return points


def level_for_lines(lines: int) -> int:
    return lines // CONFIG["LINES_PER_LEVEL"] + 1


def drop_interval_ms(level: int) -> int:
    # 1000ms at level 1, 100ms faster per level, floored at 100ms
    base, step = CONFIG["BASE_DROP_MS"], CONFIG["DROP_STEP_MS"]
    return max(CONFIG["MIN_DROP_MS"], base - (level - 1) * step)
