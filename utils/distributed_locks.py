import logging
import time
import uuid
from contextlib import contextmanager

from django.conf import settings
from django.core.cache import cache

from core.exceptions import ScheduleLockError

logger = logging.getLogger(__name__)


class DistributedLock:
    """
    A distributed lock implementation using Django's cache backend.

    Relies on ``cache.add`` being atomic, which holds for Redis and for the
    per-process local memory cache used in development and tests.
    """

    def __init__(self, key, expires=60, timeout=10, poll_interval=0.1):
        """
        Initialize a distributed lock.

        Args:
            key (str): The unique identifier for the lock
            expires (int): The number of seconds after which the lock expires
            timeout (float): The maximum number of seconds to wait to acquire the lock
            poll_interval (float): The interval in seconds to check if lock can be acquired
        """
        self.key = f"lock:{key}"
        self.expires = expires
        self.timeout = timeout
        self.poll_interval = poll_interval
        self._lock_id = str(uuid.uuid4())

    def acquire(self):
        """
        Attempt to acquire the lock.

        Returns:
            bool: True if the lock was acquired, False otherwise
        """
        logger.debug("Attempting to acquire lock for %s", self.key)
        deadline = time.monotonic() + self.timeout

        while True:
            if cache.add(self.key, self._lock_id, self.expires):
                logger.debug("Lock acquired for %s", self.key)
                return True

            if time.monotonic() >= deadline:
                break
            time.sleep(self.poll_interval)

        logger.warning(
            "Failed to acquire lock for %s after %s seconds", self.key, self.timeout
        )
        return False

    def release(self):
        """
        Release the lock if it's owned by this instance.

        Returns:
            bool: True if the lock was released, False otherwise
        """
        if cache.get(self.key) == self._lock_id:
            cache.delete(self.key)
            logger.debug("Lock released for %s", self.key)
            return True

        logger.warning(
            "Failed to release lock for %s - lock not owned by this instance", self.key
        )
        return False


@contextmanager
def distributed_lock(key, expires=60, timeout=10, poll_interval=0.1):
    """
    Context manager for acquiring and releasing a distributed lock.

    Yields:
        bool: True if the lock was acquired, False otherwise
    """
    lock = DistributedLock(key, expires, timeout, poll_interval)
    acquired = lock.acquire()
    try:
        yield acquired
    finally:
        if acquired:
            lock.release()


def schedule_lock_key(service_provider_id, scheduled_date):
    return f"schedule:{service_provider_id}:{scheduled_date.isoformat()}"


@contextmanager
def schedule_lock(service_provider_id, scheduled_date):
    """
    Serialize every check-then-write on one provider's schedule for one date.

    Raises:
        ScheduleLockError: if the lock could not be obtained within the
            configured timeout
    """
    options = settings.SCHEDULING
    key = schedule_lock_key(service_provider_id, scheduled_date)

    with distributed_lock(
        key,
        expires=options["LOCK_EXPIRES"],
        timeout=options["LOCK_TIMEOUT"],
        poll_interval=options["LOCK_POLL_INTERVAL"],
    ) as acquired:
        if not acquired:
            raise ScheduleLockError(
                detail={
                    "service_provider_id": service_provider_id,
                    "scheduled_date": scheduled_date.isoformat(),
                }
            )
        yield
