from pinball_race.settings import *


class Racer:
    def __init__(self, racer_id):
        self.id = racer_id
        self.color = RACER_COLORS[racer_id]

    @property
    def label(self):
        return f"{BALL_LABEL_PREFIX}{self.id}"

    @property
    def name(self):
        return f"Ball {self.id + 1}"

    def __eq__(self, other):
        return isinstance(other, Racer) and other.id == self.id

    def __hash__(self):
        return hash(self.id)

    def __repr__(self):
        return f"Racer({self.id})"


class FinishRecord:
    def __init__(self, racer_id, timestamp_ms):
        self.racer_id = racer_id
        self.timestamp_ms = timestamp_ms

    def __repr__(self):
        return f"FinishRecord(racer_id={self.racer_id}, timestamp_ms={self.timestamp_ms})"


ROSTER = [Racer(i) for i in range(RACER_COUNT)]


def racer_id_from_label(label):
    """Return the racer id encoded in a ball label, or None for any other body."""
    if not label or not label.startswith(BALL_LABEL_PREFIX):
        return None
    suffix = label[len(BALL_LABEL_PREFIX):]
    if not suffix.isdigit():
        return None
    racer_id = int(suffix)
    if racer_id >= RACER_COUNT:
        return None
    return racer_id
