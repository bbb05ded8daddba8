# app/utils/color.py
from typing import Iterable, List

# 主題色（前端會依主題自動調整 --primary）
PALETTE: List[str] = [
    "hsl(var(--primary))",
    "hsl(142 70% 50%)",  # green
    "hsl(0 70% 55%)",    # red
    "hsl(330 70% 60%)",  # pink
    "hsl(270 70% 55%)",  # purple
    "hsl(45 90% 55%)",   # yellow
    "hsl(25 85% 55%)",   # orange
    "hsl(174 70% 45%)",  # teal
    "hsl(243 75% 58%)",  # indigo
    "hsl(38 92% 50%)",   # amber
]


def assign_color(course_code: str, existing_blocks: Iterable, palette: List[str] = PALETTE) -> str:
    """
    Same course code -> same color within a schedule.
    New course -> first palette color no other course uses; once every color
    is taken, cycle by the number of courses already placed.
    """
    used_colors = set()
    course_codes = []
    for b in existing_blocks:
        if b.course_code == course_code and b.color:
            return b.color
        if b.color:
            used_colors.add(b.color)
        if b.course_code not in course_codes:
            course_codes.append(b.course_code)

    for color in palette:
        if color not in used_colors:
            return color

    return palette[len(course_codes) % len(palette)]
