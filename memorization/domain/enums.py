from enum import IntEnum


class Quality(IntEnum):
    BLACKOUT = 0
    WRONG_FAMILIAR = 1
    WRONG_EASY_RECALL = 2
    HARD = 3
    HESITANT = 4
    PERFECT = 5


QUALITY_LABELS = {
    Quality.BLACKOUT: "complete blackout",
    Quality.WRONG_FAMILIAR: "incorrect, but remembered once seen",
    Quality.WRONG_EASY_RECALL: "incorrect, but seemed easy to recall",
    Quality.HARD: "correct with serious difficulty",
    Quality.HESITANT: "correct after hesitation",
    Quality.PERFECT: "perfect recall",
}
