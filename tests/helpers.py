def finish(controller, *racer_ids):
    """Deliver one finish-sensor collision per racer, one step each."""
    for racer_id in racer_ids:
        controller.handle_collisions([("finish", f"ball_{racer_id}")])


def run_frames(scheduler, limit=500):
    frames = 0
    while scheduler.pending_frames and frames < limit:
        scheduler.run_frame()
        frames += 1
    return frames
