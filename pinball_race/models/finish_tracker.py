import logging

from pinball_race.settings import *
from pinball_race.models.racer import FinishRecord, racer_id_from_label

logger = logging.getLogger(__name__)


class FinishTracker:
    """Turns collision notifications into an ordered finish ranking.

    Records are appended in the order collisions are observed, so the stored
    list is the ranking. A racer is recorded at most once; the sensor keeps
    reporting overlaps for the same pair and those are ignored.
    """

    def __init__(self, clock):
        self.clock = clock
        self.records = []
        self._finished_ids = set()

    def on_collision(self, label_a, label_b):
        if label_a == FINISH_LABEL:
            other = label_b
        elif label_b == FINISH_LABEL:
            other = label_a
        else:
            return None

        racer_id = racer_id_from_label(other)
        if racer_id is None:
            return None

        if self.has_finished(racer_id):
            logger.debug("Ignoring repeated finish for ball %d", racer_id)
            return None

        record = FinishRecord(racer_id, self.clock())
        self.records.append(record)
        self._finished_ids.add(racer_id)
        logger.info("Ball %d finished in position %d", racer_id, len(self.records))
        return record

    def process_pairs(self, pairs):
        """Feed one physics step's batch of label pairs, in engine order."""
        new_records = []
        for label_a, label_b in pairs:
            record = self.on_collision(label_a, label_b)
            if record is not None:
                new_records.append(record)
        return new_records

    @property
    def ranking(self):
        return [record.racer_id for record in self.records]

    def has_finished(self, racer_id):
        return racer_id in self._finished_ids

    def reset(self):
        self.records = []
        self._finished_ids = set()

    def __len__(self):
        return len(self.records)
