"""HabitStore: the in-memory habit list plus its persistence.

The store starts in the "loading" state and moves to "ready" once load()
has run, whether or not earlier data was found. Every accepted mutation
updates memory first, then hands the full snapshot to a background worker.
Saves are not awaited, retried or merged; a failed save is only logged.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, wait

from features import habits as commands
from features.habits import SnapshotError, load_snapshot

logger = logging.getLogger(__name__)

STORAGE_KEY = "habits-data"

LOADING = "loading"
READY = "ready"


class HabitStore:
    def __init__(self, storage, key=STORAGE_KEY):
        self.storage = storage
        self.key = key
        self.status = LOADING
        self._habits = []
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="habit-save")
        self._pending = set()
        self._lock = threading.Lock()

    @property
    def ready(self) -> bool:
        return self.status == READY

    @property
    def habits(self):
        return list(self._habits)

    def load(self):
        if self.ready:
            return self

        try:
            raw = self.storage.get(self.key)
        except Exception:
            logger.exception("Could not read %r, starting fresh", self.key)
            raw = None

        if raw:
            try:
                self._habits = load_snapshot(raw)
            except SnapshotError as e:
                logger.warning("Stored habits unreadable (%s), starting fresh", e)
                self._habits = []
            except Exception:
                logger.exception("Could not decode stored habits, starting fresh")
                self._habits = []
        else:
            logger.info("No existing data, starting fresh")

        self.status = READY
        return self

    # ----- mutations -----
    def add_habit(self, name):
        return self._apply(commands.add_habit, name)

    def toggle_completion(self, habit_id, day=None):
        return self._apply(commands.toggle_completion, habit_id, day)

    def delete_habit(self, habit_id):
        return self._apply(commands.delete_habit, habit_id)

    def _apply(self, command, *args) -> bool:
        if not self.ready:
            logger.warning("%s called before load(), ignored", command.__name__)
            return False

        transition = command(self._habits, *args)
        self._habits = transition.habits
        if transition.snapshot is None:
            return False
        self._dispatch_save(transition.snapshot)
        return True

    # ----- saving -----
    def _dispatch_save(self, snapshot):
        future = self._executor.submit(self.storage.set, self.key, snapshot)
        with self._lock:
            self._pending.add(future)
        future.add_done_callback(self._save_done)

    def _save_done(self, future):
        with self._lock:
            self._pending.discard(future)
        error = future.exception()
        if error is not None:
            logger.error("Error saving habits: %s", error)

    def flush(self, timeout=None) -> bool:
        """Wait for outstanding saves. True when none are left."""
        with self._lock:
            pending = list(self._pending)
        if not pending:
            return True
        _, not_done = wait(pending, timeout=timeout)
        return not not_done

    def close(self):
        self.flush()
        self._executor.shutdown(wait=True)
